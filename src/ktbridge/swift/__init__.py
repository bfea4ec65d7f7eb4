"""
Swift target model: type mapping and generator specs.
"""

from ktbridge.swift.specs import (
  AssociatedValue,
  EnumCase,
  EnumSpec,
  FunctionSpec,
  StreamSpec,
  SwiftParameter,
  enum_spec_from_declaration,
  function_spec_from_declaration,
  stream_spec_from_declaration,
)
from ktbridge.swift.types import (
  ArrayType,
  DictionaryType,
  GenericParam,
  NamedType,
  OptionalType,
  SwiftType,
  VoidType,
  map_default_value,
  map_type,
)

__all__ = [
  "ArrayType",
  "AssociatedValue",
  "DictionaryType",
  "EnumCase",
  "EnumSpec",
  "FunctionSpec",
  "GenericParam",
  "NamedType",
  "OptionalType",
  "StreamSpec",
  "SwiftParameter",
  "SwiftType",
  "VoidType",
  "enum_spec_from_declaration",
  "function_spec_from_declaration",
  "map_default_value",
  "map_type",
  "stream_spec_from_declaration",
]
