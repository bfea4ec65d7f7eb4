"""
Tests for the Enum Generator.

Verifies:
1. Rendering of payload and payload-free cases.
2. Frozen attribute, generics and conformances.
"""

from ktbridge.generators import EnumGenerator
from ktbridge.model import PropertyDeclaration, SubclassVariant, SumTypeDeclaration
from ktbridge.swift import AssociatedValue, EnumCase, EnumSpec, enum_spec_from_declaration
from ktbridge.swift.types import GenericParam, NamedType, OptionalType


def test_network_result():
  spec = EnumSpec(
    name="NetworkResult",
    cases=(
      EnumCase("success", (AssociatedValue("data", GenericParam("T")),)),
      EnumCase(
        "error",
        (AssociatedValue("message", NamedType("String")), AssociatedValue("code", OptionalType(NamedType("Int32")))),
      ),
      EnumCase("loading"),
    ),
    type_parameters=("T",),
  )

  assert EnumGenerator().generate(spec) == (
    "@frozen\n"
    "public enum NetworkResult<T> {\n"
    "    case success(data: T)\n"
    "    case error(message: String, code: Int32?)\n"
    "    case loading\n"
    "}"
  )


def test_not_frozen_with_conformances():
  spec = EnumSpec(name="Event", cases=(EnumCase("tick"),), conformances=("Equatable", "Sendable"), is_frozen=False)

  assert EnumGenerator().generate(spec) == "public enum Event: Equatable, Sendable {\n    case tick\n}"


def test_from_declaration():
  decl = SumTypeDeclaration(
    qualified_name="p.Status",
    simple_name="Status",
    namespace="p",
    subclasses=(SubclassVariant("Active", (PropertyDeclaration("since", "Long"),)), SubclassVariant("Idle", is_object=True)),
  )
  code = EnumGenerator().generate(enum_spec_from_declaration(decl))

  assert "case active(since: Int64)" in code
  assert "case idle" in code


def test_implementation_equals_signature():
  spec = EnumSpec(name="Event", cases=(EnumCase("tick"),))
  generator = EnumGenerator()
  assert generator.generate_with_implementation(spec) == generator.generate(spec)
