"""
Declaration Model Package.

Plain immutable records for the three declaration kinds (sum types, async
functions, streams) and their nested value types.
"""

from ktbridge.model.declarations import (
  UNKNOWN_DEFAULT,
  VOID_TYPE,
  AsyncFunctionDeclaration,
  Declaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
  declaration_key,
)

__all__ = [
  "UNKNOWN_DEFAULT",
  "VOID_TYPE",
  "AsyncFunctionDeclaration",
  "Declaration",
  "ParameterDeclaration",
  "PropertyDeclaration",
  "StreamDeclaration",
  "SubclassVariant",
  "SumTypeDeclaration",
  "declaration_key",
]
