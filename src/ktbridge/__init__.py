"""
ktbridge Package.

Bridges Kotlin declarations to idiomatic Swift: sealed hierarchies become
enums, suspend functions gain async convenience overloads, and Flow members
are wrapped in ``AsyncStream``.

Usage
-----

.. code-block:: python

    import ktbridge

    result = ktbridge.transform_source(kotlin_text)
    print(result.code)

Pipeline Usage
^^^^^^^^^^^^^^

.. code-block:: python

    from ktbridge import BridgeConfig, KotlinScanner, TransformEngine, manifest

    decls = KotlinScanner().scan(kotlin_text)
    text = manifest.encode(decls)
    result = TransformEngine().transform(manifest.decode(text), BridgeConfig(max_overloads=2))
"""

from typing import Optional

from ktbridge import manifest
from ktbridge.config import BridgeConfig
from ktbridge.core.engine import TransformEngine
from ktbridge.core.transform_result import TransformResult
from ktbridge.frontends.kotlin import KotlinScanner

__version__ = "0.0.1"

__all__ = [
  "BridgeConfig",
  "KotlinScanner",
  "TransformEngine",
  "TransformResult",
  "manifest",
  "transform_source",
  "__version__",
]


def transform_source(source: str, config: Optional[BridgeConfig] = None, preview: bool = False) -> TransformResult:
  """
  Scans Kotlin source and generates Swift in one step.

  Args:
      source: Kotlin source text.
      config: Options; defaults to `BridgeConfig()` (no pyproject lookup).
      preview: Emit signatures only.

  Returns:
      TransformResult: Generated code and statistics.
  """
  declarations = KotlinScanner().scan(source)
  return TransformEngine().transform(declarations, config or BridgeConfig(), preview=preview)
