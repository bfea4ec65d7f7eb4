"""
Swift Type Mapping.

Converts Kotlin type names into a small structured representation of Swift
types. Each variant knows how to render itself as Swift source.

Only one level of container syntax is interpreted (``List<X>``,
``Map<K, V>``); container arguments are mapped recursively through
`map_type`, so nested containers still resolve. A bare single uppercase
letter is assumed to be a type parameter reference. Genuine one-letter
concrete types are misclassified by this rule.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

from ktbridge.frontends.kotlin.patterns import split_top_level
from ktbridge.model import UNKNOWN_DEFAULT

SCALAR_TYPES: Dict[str, str] = {
  "String": "String",
  "Int": "Int32",
  "Long": "Int64",
  "Short": "Int16",
  "Byte": "Int8",
  "Float": "Float",
  "Double": "Double",
  "Boolean": "Bool",
  "Bool": "Bool",
  "Char": "Character",
  "ByteArray": "Data",
  "Throwable": "Error",
  "Exception": "Error",
  "Any": "Any",
}
"""Kotlin scalar names and their Swift counterparts."""

VOID_NAMES = ("Unit", "Void")
ARRAY_CONTAINERS = ("List", "MutableList", "Collection", "Iterable", "Set", "MutableSet", "Array")
DICTIONARY_CONTAINERS = ("Map", "MutableMap", "HashMap")

_CONTAINER_PATTERN = re.compile(r"^(?P<container>[\w.]+)\s*<(?P<args>.*)>$", re.DOTALL)
_TYPE_PARAMETER_PATTERN = re.compile(r"^[A-Z]$")
_NUMERIC_SUFFIX_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)[LfF]$")


@dataclass(frozen=True)
class NamedType:
  name: str

  def render(self) -> str:
    return self.name


@dataclass(frozen=True)
class GenericParam:
  """Reference to a type parameter of the enclosing declaration."""

  name: str

  def render(self) -> str:
    return self.name


@dataclass(frozen=True)
class OptionalType:
  wrapped: "SwiftType"

  def render(self) -> str:
    return f"{self.wrapped.render()}?"


@dataclass(frozen=True)
class ArrayType:
  element: "SwiftType"

  def render(self) -> str:
    return f"[{self.element.render()}]"


@dataclass(frozen=True)
class DictionaryType:
  key: "SwiftType"
  value: "SwiftType"

  def render(self) -> str:
    return f"[{self.key.render()}: {self.value.render()}]"


@dataclass(frozen=True)
class VoidType:
  def render(self) -> str:
    return "Void"


SwiftType = Union[NamedType, GenericParam, OptionalType, ArrayType, DictionaryType, VoidType]


def _simple_name(name: str) -> str:
  return name.rsplit(".", 1)[-1]


def _map_base(name: str) -> SwiftType:
  if name in VOID_NAMES:
    return VoidType()

  container = _CONTAINER_PATTERN.match(name)
  if container:
    simple = _simple_name(container.group("container"))
    args = split_top_level(container.group("args"))
    if simple in ARRAY_CONTAINERS and len(args) == 1:
      return ArrayType(map_type(args[0]))
    if simple in DICTIONARY_CONTAINERS and len(args) == 2:
      return DictionaryType(map_type(args[0]), map_type(args[1]))
    rendered = ", ".join(map_type(a).render() for a in args)
    return NamedType(f"{simple}<{rendered}>")

  simple = _simple_name(name)
  if simple in SCALAR_TYPES:
    return NamedType(SCALAR_TYPES[simple])
  if _TYPE_PARAMETER_PATTERN.match(name):
    return GenericParam(name)
  return NamedType(name)


def map_type(type_name: str, is_nullable: bool = False) -> SwiftType:
  """
  Maps a Kotlin type to its Swift representation.

  A trailing ``?`` on `type_name` is treated like ``is_nullable=True``.
  ``Unit`` maps to Void and is never wrapped in an Optional.

  Args:
      type_name: Kotlin type text (e.g. ``List<String>``).
      is_nullable: Whether the declaration marked the type nullable.

  Returns:
      SwiftType: The structured Swift type.
  """
  name = type_name.strip()
  if name.endswith("?"):
    name = name[:-1].strip()
    is_nullable = True
  base = _map_base(name)
  if is_nullable and not isinstance(base, VoidType):
    return OptionalType(base)
  return base


def map_default_value(default: Optional[str]) -> Optional[str]:
  """
  Translates a Kotlin default expression into Swift.

  Returns None when there is no default or the default is the unknown marker.

  Examples:
      >>> map_default_value("null")
      'nil'
      >>> map_default_value("10L")
      '10'
  """
  if default is None:
    return None
  text = default.strip()
  if text == UNKNOWN_DEFAULT:
    return None
  if text == "null":
    return "nil"
  numeric = _NUMERIC_SUFFIX_PATTERN.match(text)
  if numeric:
    return numeric.group(1)
  return text
