"""
Tests for Swift Declaration Specs.

Verifies:
1. Enum specs: case naming, payload mapping, rename, conformance merging.
2. Exhaustiveness override.
3. Function and stream specs map parameters, defaults and membership.
"""

from ktbridge.model import (
  AsyncFunctionDeclaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
)
from ktbridge.swift import (
  AssociatedValue,
  EnumCase,
  SwiftParameter,
  enum_spec_from_declaration,
  function_spec_from_declaration,
  stream_spec_from_declaration,
)
from ktbridge.swift.specs import lower_first, strip_variance
from ktbridge.swift.types import GenericParam, NamedType, OptionalType, VoidType

SHAPE = SumTypeDeclaration(
  qualified_name="p.Shape",
  simple_name="Shape",
  namespace="p",
  type_parameters=("out T",),
  subclasses=(
    SubclassVariant("Circle", (PropertyDeclaration("radius", "Double"), PropertyDeclaration("tag", "T", True))),
    SubclassVariant("Empty", is_object=True),
  ),
  conformances=("Equatable",),
  is_exhaustive=False,
)


def test_helpers():
  assert lower_first("Success") == "success"
  assert lower_first("") == ""
  assert strip_variance("out T") == "T"
  assert strip_variance("reified T") == "T"
  assert strip_variance("T : Comparable<T>") == "T : Comparable<T>"


def test_enum_spec():
  spec = enum_spec_from_declaration(SHAPE, extra_conformances=["Sendable", "Equatable"])

  assert spec.name == "Shape"
  assert spec.type_parameters == ("T",)
  assert spec.conformances == ("Equatable", "Sendable")
  assert spec.is_frozen is False
  assert spec.cases == (
    EnumCase(
      "circle",
      (AssociatedValue("radius", NamedType("Double")), AssociatedValue("tag", OptionalType(GenericParam("T")))),
    ),
    EnumCase("empty"),
  )


def test_enum_spec_rename_and_override():
  renamed = SumTypeDeclaration("p.Shape", "Shape", "p", rename="SwiftShape", is_exhaustive=False)
  spec = enum_spec_from_declaration(renamed, exhaustive=True)
  assert spec.name == "SwiftShape"
  assert spec.is_frozen is True


def test_function_spec():
  decl = AsyncFunctionDeclaration(
    qualified_name="p.Repo.find",
    simple_name="find",
    namespace="p",
    parameters=(
      ParameterDeclaration("ids", "String", is_vararg=True),
      ParameterDeclaration("limit", "Long", default_value="5L"),
      ParameterDeclaration("filter", "Filter", default_value="default"),
    ),
    return_type="List<User>?",
    is_failable=False,
    enclosing_type="Repo",
  )
  spec = function_spec_from_declaration(decl)

  assert spec.name == "find"
  assert spec.is_throwing is False
  assert spec.is_member is True
  assert spec.return_type.render() == "[User]?"
  assert spec.parameters[0] == SwiftParameter("ids", NamedType("String"), is_variadic=True)
  assert spec.parameters[0].render() == "ids: String..."
  assert spec.parameters[1].render() == "limit: Int64 = 5"
  assert spec.parameters[1].render(include_default=False) == "limit: Int64"
  assert spec.parameters[2].default_value is None


def test_function_spec_unit_return():
  decl = AsyncFunctionDeclaration("p.ping", "ping", "p")
  spec = function_spec_from_declaration(decl)
  assert spec.return_type == VoidType()
  assert spec.is_member is False


def test_stream_spec():
  decl = StreamDeclaration("p.Repo.updates", "updates", "p", element_type="Int", enclosing_type="Repo", is_property=True)
  spec = stream_spec_from_declaration(decl)

  assert spec.element_type == NamedType("Int32")
  assert spec.is_property is True
  assert spec.is_member is True
  assert spec.parameters == ()
