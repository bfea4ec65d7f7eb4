"""
Declaration Model.

Immutable records describing the source declarations the bridge understands.
They are created by the scanner (from source text) or by the manifest codec
(from interchange text), and consumed read-only by the generators and the
transformation engine.

Collections are stored as tuples so that records are hashable and compare by
value, which is what the manifest round trip relies on.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ktbridge.enums import DeclarationKind

VOID_TYPE = "Unit"
"""Return type recorded when a function declares none."""

UNKNOWN_DEFAULT = "default"
"""Marker for a parameter known to have a default whose text could not be recovered."""


@dataclass(frozen=True)
class PropertyDeclaration:
  """
  A typed field of a data-case variant.
  """

  name: str
  type_name: str
  is_nullable: bool = False


@dataclass(frozen=True)
class SubclassVariant:
  """
  One variant of a sum type.

  An object-case carries no properties; a data-case carries its primary
  constructor properties in declaration order.
  """

  name: str
  properties: Tuple[PropertyDeclaration, ...] = ()
  is_object: bool = False


@dataclass(frozen=True)
class ParameterDeclaration:
  """
  A function parameter.

  `default_value` holds the literal source text after ``=``, the
  `UNKNOWN_DEFAULT` marker, or None when the parameter is required.
  """

  name: str
  type_name: str
  is_nullable: bool = False
  default_value: Optional[str] = None
  is_vararg: bool = False

  @property
  def has_default(self) -> bool:
    return self.default_value is not None


@dataclass(frozen=True)
class SumTypeDeclaration:
  """
  A sealed class or interface, bridged to a Swift enum.
  """

  qualified_name: str
  simple_name: str
  namespace: str
  type_parameters: Tuple[str, ...] = ()
  subclasses: Tuple[SubclassVariant, ...] = ()
  rename: Optional[str] = None
  is_exhaustive: bool = True
  conformances: Tuple[str, ...] = ()

  kind = DeclarationKind.SUM

  @property
  def has_annotation(self) -> bool:
    """The adoption annotation is the one that names the Swift enum."""
    return self.rename is not None


@dataclass(frozen=True)
class AsyncFunctionDeclaration:
  """
  A suspend function, bridged to a Swift ``async`` function.

  `enclosing_type` is the simple name of the containing class, or None for
  top-level functions.
  """

  qualified_name: str
  simple_name: str
  namespace: str
  parameters: Tuple[ParameterDeclaration, ...] = ()
  return_type: str = VOID_TYPE
  type_parameters: Tuple[str, ...] = ()
  is_failable: bool = True
  enclosing_type: Optional[str] = None
  has_annotation: bool = False

  kind = DeclarationKind.ASYNC

  @property
  def has_default_parameters(self) -> bool:
    return any(p.has_default for p in self.parameters)


@dataclass(frozen=True)
class StreamDeclaration:
  """
  A function or property returning a Flow, bridged to ``AsyncStream``.
  """

  qualified_name: str
  simple_name: str
  namespace: str
  element_type: str
  parameters: Tuple[ParameterDeclaration, ...] = ()
  enclosing_type: Optional[str] = None
  is_property: bool = False
  has_annotation: bool = False

  kind = DeclarationKind.STREAM


Declaration = Union[SumTypeDeclaration, AsyncFunctionDeclaration, StreamDeclaration]


def declaration_key(declaration: Declaration) -> Tuple[str, str]:
  """
  Returns the uniqueness key of a declaration: (kind tag, qualified name).

  Args:
      declaration: Any declaration record.

  Returns:
      Tuple[str, str]: e.g. ``("async", "com.example.Repo.fetch")``.
  """
  return declaration.kind.value, declaration.qualified_name
