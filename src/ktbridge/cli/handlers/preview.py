"""
Preview Command Handler.

Prints the signatures that would be generated, without bridging bodies, and a
per-kind summary table.
"""

from collections import Counter
from pathlib import Path
from typing import Any, Dict, List

from rich.table import Table

from ktbridge.cli.handlers.inputs import load_declarations
from ktbridge.config import BridgeConfig
from ktbridge.core.engine import TransformEngine
from ktbridge.enums import DeclarationKind
from ktbridge.errors import BridgeError
from ktbridge.utils.console import console, log_error, log_warning, print_swift


def handle_preview(manifests: List[Path], sources: List[Path], settings: Dict[str, Any]) -> int:
  """
  Handles the 'preview' command.

  Args:
      manifests: Manifest files or directories.
      sources: Kotlin files or directories.
      settings: ``--set`` overrides for `BridgeConfig`.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  try:
    config = BridgeConfig.load(**settings)
    declarations = load_declarations(manifests, sources)
    result = TransformEngine().transform(declarations, config, preview=True)
  except BridgeError as e:
    log_error(str(e))
    return 1

  if result.is_empty:
    log_warning("Nothing to preview.")
  else:
    print_swift(result.code)

  counts = Counter(decl.kind for decl in result.declarations)
  table = Table(title="Declarations")
  table.add_column("Kind", style="cyan")
  table.add_column("Found", justify="right")
  for kind in DeclarationKind:
    table.add_row(kind.value, str(counts.get(kind, 0)))
  table.add_row("[bold]transformed[/bold]", str(result.declarations_transformed))
  console.print(table)
  return 0
