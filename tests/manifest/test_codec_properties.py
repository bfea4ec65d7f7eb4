"""
Property-based tests for the manifest codec.

Verifies:
1. decode(encode(x)) == x for arbitrary well-formed declarations.
2. Merging is idempotent: merge([m, m]) == merge([m]).
"""

import string

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from ktbridge.manifest import decode, encode, merge
from ktbridge.model import (
  AsyncFunctionDeclaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
)

identifiers = st.builds(
  lambda head, tail: head + tail,
  st.sampled_from(string.ascii_lowercase),
  st.text(alphabet=string.ascii_letters + string.digits, max_size=8),
)
type_names = st.sampled_from(["Int", "String", "Boolean", "T", "List<String>", "Map<String, Int>", "User"])
defaults = st.none() | st.sampled_from(["null", "true", "10", '"x"', "default", "Color.RED"])
namespaces = st.sampled_from(["", "com.example", "org.demo.core"])

properties = st.builds(PropertyDeclaration, name=identifiers, type_name=type_names, is_nullable=st.booleans())

parameters = st.builds(
  ParameterDeclaration,
  name=identifiers,
  type_name=type_names,
  is_nullable=st.booleans(),
  default_value=defaults,
  is_vararg=st.booleans(),
)


@st.composite
def variants(draw):
  name = draw(identifiers).capitalize()
  if draw(st.booleans()):
    return SubclassVariant(name, is_object=True)
  return SubclassVariant(name, tuple(draw(st.lists(properties, max_size=3))))


@st.composite
def declarations(draw, index):
  namespace = draw(namespaces)
  simple = draw(identifiers)
  kind = draw(st.sampled_from(["sum", "async", "stream"]))
  # Index makes qualified names unique so merge cannot drop anything
  qualified = ".".join(p for p in (namespace, f"{simple}{index}") if p)

  if kind == "sum":
    return SumTypeDeclaration(
      qualified_name=qualified,
      simple_name=simple.capitalize(),
      namespace=namespace,
      type_parameters=tuple(draw(st.lists(st.sampled_from(["T", "out E", "in K"]), max_size=2, unique=True))),
      subclasses=tuple(draw(st.lists(variants(), max_size=3))),
      rename=draw(st.none() | identifiers),
      is_exhaustive=draw(st.booleans()),
      conformances=tuple(draw(st.lists(st.sampled_from(["Equatable", "Sendable"]), max_size=2, unique=True))),
    )
  if kind == "async":
    return AsyncFunctionDeclaration(
      qualified_name=qualified,
      simple_name=simple,
      namespace=namespace,
      parameters=tuple(draw(st.lists(parameters, max_size=4))),
      return_type=draw(type_names | st.just("Unit")),
      type_parameters=tuple(draw(st.lists(st.sampled_from(["T", "R"]), max_size=2, unique=True))),
      is_failable=draw(st.booleans()),
      enclosing_type=draw(st.none() | identifiers.map(str.capitalize)),
      has_annotation=draw(st.booleans()),
    )
  is_property = draw(st.booleans())
  return StreamDeclaration(
    qualified_name=qualified,
    simple_name=simple,
    namespace=namespace,
    element_type=draw(type_names),
    parameters=() if is_property else tuple(draw(st.lists(parameters, max_size=3))),
    enclosing_type=draw(st.none() | identifiers.map(str.capitalize)),
    is_property=is_property,
    has_annotation=draw(st.booleans()),
  )


@st.composite
def declaration_lists(draw):
  size = draw(st.integers(min_value=0, max_value=5))
  return [draw(declarations(i)) for i in range(size)]


@settings(max_examples=75, suppress_health_check=[HealthCheck.too_slow])
@given(declaration_lists())
def test_encode_decode_round_trip(decls):
  assert decode(encode(decls)) == decls


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(declaration_lists())
def test_merge_is_idempotent(decls):
  text = encode(decls)
  assert merge([text, text]) == merge([text])
  assert decode(merge([text])) == decls
