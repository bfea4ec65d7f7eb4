"""
Swift Declaration Specs.

Target-side descriptions consumed by the generators. A spec is built from a
source declaration by the `*_from_declaration` helpers below, which apply the
type mapping, default-value translation and naming rules. Specs can also be
constructed directly (tests, custom pipelines); the generators validate them
before emitting anything.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ktbridge.enums import AccessLevel
from ktbridge.model import AsyncFunctionDeclaration, ParameterDeclaration, StreamDeclaration, SumTypeDeclaration
from ktbridge.swift.types import SwiftType, VoidType, map_default_value, map_type

_TYPE_PARAMETER_MODIFIERS = ("out", "in", "reified")


@dataclass(frozen=True)
class AssociatedValue:
  """
  A labeled payload of an enum case.
  """

  label: str
  """Payload label (the Kotlin property name)."""

  type: SwiftType
  """Mapped payload type."""


@dataclass(frozen=True)
class EnumCase:
  name: str
  """Swift case name (lower camel case)."""

  associated_values: Tuple[AssociatedValue, ...] = ()
  """Empty for object variants."""


@dataclass(frozen=True)
class EnumSpec:
  """
  Description of a Swift enum generated from a sealed hierarchy.
  """

  name: str
  cases: Tuple[EnumCase, ...]
  type_parameters: Tuple[str, ...] = ()
  conformances: Tuple[str, ...] = ()
  is_frozen: bool = True
  """Emit ``@frozen`` (closed, non-extensible enum)."""

  access: AccessLevel = AccessLevel.PUBLIC


@dataclass(frozen=True)
class SwiftParameter:
  name: str
  type: SwiftType
  default_value: Optional[str] = None
  """Swift default expression, or None if unknown/absent."""

  is_variadic: bool = False

  def render(self, include_default: bool = True) -> str:
    text = f"{self.name}: {self.type.render()}"
    if self.is_variadic:
      text += "..."
    if include_default and self.default_value is not None:
      text += f" = {self.default_value}"
    return text


@dataclass(frozen=True)
class FunctionSpec:
  """
  Description of a Swift ``async`` function bridged from a suspend function.
  """

  name: str
  parameters: Tuple[SwiftParameter, ...] = ()
  return_type: SwiftType = VoidType()
  type_parameters: Tuple[str, ...] = ()
  is_throwing: bool = True
  access: AccessLevel = AccessLevel.PUBLIC
  is_member: bool = False
  """Calls the native function through `self` (declared inside a type)."""


@dataclass(frozen=True)
class StreamSpec:
  """
  Description of an ``AsyncStream`` wrapper around a Flow.
  """

  name: str
  element_type: SwiftType
  parameters: Tuple[SwiftParameter, ...] = ()
  is_property: bool = False
  type_parameters: Tuple[str, ...] = ()
  access: AccessLevel = AccessLevel.PUBLIC
  is_member: bool = False


def lower_first(name: str) -> str:
  """``Success`` -> ``success``."""
  return name[:1].lower() + name[1:]


def strip_variance(type_parameter: str) -> str:
  """
  Removes Kotlin declaration-site modifiers from a type parameter.

  ``out T`` -> ``T``; ``reified T`` -> ``T``.
  """
  words = type_parameter.split()
  while words and words[0] in _TYPE_PARAMETER_MODIFIERS:
    words = words[1:]
  return " ".join(words)


def _map_parameters(params: Iterable[ParameterDeclaration]) -> Tuple[SwiftParameter, ...]:
  return tuple(
    SwiftParameter(
      name=p.name,
      type=map_type(p.type_name, p.is_nullable),
      default_value=map_default_value(p.default_value),
      is_variadic=p.is_vararg,
    )
    for p in params
  )


def enum_spec_from_declaration(
  decl: SumTypeDeclaration,
  extra_conformances: Iterable[str] = (),
  exhaustive: Optional[bool] = None,
) -> EnumSpec:
  """
  Builds an `EnumSpec` for a sum type.

  Args:
      decl: The sealed hierarchy.
      extra_conformances: Protocols appended after the declaration's own
          conformances (duplicates dropped, order kept).
      exhaustive: Overrides the declaration's exhaustiveness flag when not None.

  Returns:
      EnumSpec: The target enum description.
  """
  cases = tuple(
    EnumCase(
      name=lower_first(variant.name),
      associated_values=tuple(
        AssociatedValue(label=prop.name, type=map_type(prop.type_name, prop.is_nullable)) for prop in variant.properties
      ),
    )
    for variant in decl.subclasses
  )
  conformances = tuple(dict.fromkeys(tuple(decl.conformances) + tuple(extra_conformances)))
  return EnumSpec(
    name=decl.rename or decl.simple_name,
    cases=cases,
    type_parameters=tuple(strip_variance(t) for t in decl.type_parameters),
    conformances=conformances,
    is_frozen=decl.is_exhaustive if exhaustive is None else exhaustive,
  )


def function_spec_from_declaration(decl: AsyncFunctionDeclaration) -> FunctionSpec:
  return FunctionSpec(
    name=decl.simple_name,
    parameters=_map_parameters(decl.parameters),
    return_type=map_type(decl.return_type),
    type_parameters=tuple(strip_variance(t) for t in decl.type_parameters),
    is_throwing=decl.is_failable,
    is_member=decl.enclosing_type is not None,
  )


def stream_spec_from_declaration(decl: StreamDeclaration) -> StreamSpec:
  return StreamSpec(
    name=decl.simple_name,
    element_type=map_type(decl.element_type),
    parameters=_map_parameters(decl.parameters),
    is_property=decl.is_property,
    is_member=decl.enclosing_type is not None,
  )
