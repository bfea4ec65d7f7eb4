"""
Transformation Engine.

Drives the generators over a list of declarations:

1.  **Filtering**: each declaration is checked against the per-kind enable
    flag and, when annotations are required, its adoption annotation.
2.  **Generation**: sum types become enums; suspend functions become
    default-argument overloads (implementation mode) or signatures (preview);
    Flow members become ``AsyncStream`` wrappers.
3.  **Grouping**: output for members of the same Kotlin type is collected into
    one ``extension`` block, in the order the types are first seen.

The engine holds no per-call state. Configuration is passed to every call.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from ktbridge.config import BridgeConfig
from ktbridge.core.transform_result import TransformResult
from ktbridge.enums import DeclarationKind
from ktbridge.errors import BridgeError
from ktbridge.generators.async_function import AsyncFunctionGenerator
from ktbridge.generators.base import indent_block
from ktbridge.generators.enum_generator import EnumGenerator
from ktbridge.generators.stream import StreamGenerator
from ktbridge.model import AsyncFunctionDeclaration, Declaration, StreamDeclaration, SumTypeDeclaration
from ktbridge.swift.specs import enum_spec_from_declaration, function_spec_from_declaration, stream_spec_from_declaration

logger = logging.getLogger(__name__)


def render_extension(type_name: str, bodies: Sequence[str]) -> str:
  """
  Wraps member bodies into a single ``extension`` block.

  Args:
      type_name: The extended Swift type.
      bodies: Member declarations, each rendered at column zero.

  Returns:
      str: The extension text.
  """
  inner = "\n\n".join(indent_block(body) for body in bodies)
  return f"extension {type_name} {{\n{inner}\n}}"


class TransformEngine:
  """
  Turns declarations into Swift source.

  Usage:
      >>> engine = TransformEngine()
      >>> result = engine.transform(declarations, BridgeConfig())
      >>> print(result.code)
  """

  def __init__(
    self,
    enum_generator: Optional[EnumGenerator] = None,
    async_generator: Optional[AsyncFunctionGenerator] = None,
    stream_generator: Optional[StreamGenerator] = None,
  ) -> None:
    self.enum_generator = enum_generator or EnumGenerator()
    self.async_generator = async_generator or AsyncFunctionGenerator()
    self.stream_generator = stream_generator or StreamGenerator()

    self._handlers: Dict[DeclarationKind, Callable[[Declaration, BridgeConfig, bool], List[str]]] = {
      DeclarationKind.SUM: self._transform_sum,
      DeclarationKind.ASYNC: self._transform_async,
      DeclarationKind.STREAM: self._transform_stream,
    }

  def transform(
    self,
    declarations: Sequence[Declaration],
    config: BridgeConfig,
    preview: bool = False,
  ) -> TransformResult:
    """
    Generates Swift for every declaration accepted by `config`.

    Args:
        declarations: Scanned or decoded declarations.
        config: Filtering and generation options.
        preview: Emit signatures only, one section per declaration, without
            extension grouping.

    Returns:
        TransformResult: Generated code, transformed count, and the input list.

    Raises:
        ValidationError: If a declaration maps to an invalid spec.
        GenerationError: If rendering fails.
    """
    groups: Dict[Optional[str], List[str]] = {}
    sections: List[str] = []
    transformed = 0

    for decl in declarations:
      handler = self._handlers.get(decl.kind)
      if handler is None:
        raise BridgeError(f"No generator registered for declaration kind '{decl.kind}'")

      bodies = handler(decl, config, preview)
      if not bodies:
        continue
      transformed += 1

      if preview:
        sections.extend(bodies)
      else:
        groups.setdefault(getattr(decl, "enclosing_type", None), []).extend(bodies)

    for type_name, bodies in groups.items():
      if type_name is None:
        sections.extend(bodies)
      else:
        sections.append(render_extension(type_name, bodies))

    logger.debug("Transformed %d of %d declarations", transformed, len(declarations))
    return TransformResult(
      code="\n\n".join(sections),
      declarations_transformed=transformed,
      declarations=list(declarations),
    )

  # --- Per-kind handlers ---

  def _transform_sum(self, decl: SumTypeDeclaration, config: BridgeConfig, preview: bool) -> List[str]:
    """
    Renders one sum type as an enum.

    A sealed type whose variants were all declared in files outside the
    scanned set arrives with no subclasses. It is skipped with a warning
    rather than handed to enum validation, so a partial scan still generates
    everything else. Variants that are present but invalid still raise.
    """
    if not config.transform_sum_types:
      return []
    if config.require_annotations and not decl.has_annotation:
      return []
    if not decl.subclasses:
      logger.warning("Sealed type %s has no variants in scope; skipping", decl.qualified_name)
      return []
    spec = enum_spec_from_declaration(
      decl,
      extra_conformances=config.extra_conformances,
      exhaustive=config.exhaustiveness_override,
    )
    return [self.enum_generator.generate(spec, label=decl.qualified_name)]

  def _transform_async(self, decl: AsyncFunctionDeclaration, config: BridgeConfig, preview: bool) -> List[str]:
    if not config.generate_default_overloads:
      return []
    if config.require_annotations and not decl.has_annotation:
      return []
    spec = function_spec_from_declaration(decl)
    if preview:
      return [self.async_generator.generate(spec, label=decl.qualified_name)]
    # The full-arity async form is already exported natively.
    if not decl.has_default_parameters:
      return []
    return self.async_generator.overload_bodies(spec, max_overloads=config.max_overloads, label=decl.qualified_name)

  def _transform_stream(self, decl: StreamDeclaration, config: BridgeConfig, preview: bool) -> List[str]:
    if not config.transform_streams:
      return []
    if config.require_annotations and not decl.has_annotation:
      return []
    spec = stream_spec_from_declaration(decl)
    if preview:
      return [self.stream_generator.generate(spec, label=decl.qualified_name)]
    return [self.stream_generator.generate_with_implementation(spec, label=decl.qualified_name)]
