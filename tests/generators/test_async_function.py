"""
Tests for the Async Function Generator.

Verifies:
1. Signature rendering (effects, generics, defaults, Void return).
2. Implementation bodies resume the continuation exactly once on every path.
3. Convenience overloads: count, ordering, forwarded defaults and the cap.
"""

import pytest

from ktbridge.generators import AsyncFunctionGenerator, trailing_default_count
from ktbridge.swift import FunctionSpec, SwiftParameter
from ktbridge.swift.types import ArrayType, GenericParam, NamedType, OptionalType, VoidType

INT = NamedType("Int32")
BOOL = NamedType("Bool")
STRING = NamedType("String")


@pytest.fixture
def generator():
  return AsyncFunctionGenerator()


def _f(return_type=VoidType(), is_throwing=True):
  return FunctionSpec(
    name="f",
    parameters=(
      SwiftParameter("a", INT),
      SwiftParameter("b", BOOL, default_value="true"),
      SwiftParameter("c", INT, default_value="0"),
    ),
    return_type=return_type,
    is_throwing=is_throwing,
  )


def test_signature(generator):
  assert generator.generate(_f()) == "public func f(a: Int32, b: Bool = true, c: Int32 = 0) async throws"

  spec = FunctionSpec(
    name="load",
    parameters=(SwiftParameter("key", GenericParam("K")),),
    return_type=ArrayType(GenericParam("K")),
    type_parameters=("K",),
    is_throwing=False,
  )
  assert generator.generate(spec) == "public func load<K>(key: K) async -> [K]"


def test_trailing_default_count():
  assert trailing_default_count(_f().parameters) == 2
  middle_default = (SwiftParameter("a", INT, default_value="1"), SwiftParameter("b", INT))
  assert trailing_default_count(middle_default) == 0
  assert trailing_default_count(()) == 0


def test_overloads_for_two_trailing_defaults(generator):
  overloads = generator.overload_bodies(_f())

  assert overloads == [
    "public func f(a: Int32) async throws {\n    try await f(a: a, b: true, c: 0)\n}",
    "public func f(a: Int32, b: Bool) async throws {\n    try await f(a: a, b: b, c: 0)\n}",
  ]


def test_overloads_return_and_non_throwing(generator):
  (short, _) = generator.overload_bodies(_f(return_type=STRING, is_throwing=False))
  assert short == "public func f(a: Int32) async -> String {\n    return await f(a: a, b: true, c: 0)\n}"

  (short, _) = generator.overload_bodies(_f(return_type=STRING))
  assert "return try await f(a: a, b: true, c: 0)" in short


def test_overloads_respect_cap(generator):
  assert len(generator.overload_bodies(_f(), max_overloads=1)) == 1
  assert generator.overload_bodies(_f(), max_overloads=0) == []


def test_no_overloads_without_trailing_defaults(generator):
  spec = FunctionSpec(name="g", parameters=(SwiftParameter("a", INT, default_value="1"), SwiftParameter("b", INT)))
  assert generator.overload_bodies(spec) == []


def test_implementation_throwing_value(generator):
  spec = FunctionSpec(name="fetch", parameters=(SwiftParameter("id", STRING),), return_type=STRING)

  assert generator.generate_with_implementation(spec) == (
    "public func fetch(id: String) async throws -> String {\n"
    "    return try await withCheckedThrowingContinuation { continuation in\n"
    "        fetch(id: id, completionHandler: { result, error in\n"
    "            if let error = error {\n"
    "                continuation.resume(throwing: error)\n"
    "            } else if let result = result {\n"
    "                continuation.resume(returning: result)\n"
    "            } else {\n"
    "                continuation.resume(throwing: KtBridgeError.nullResult)\n"
    "            }\n"
    "        })\n"
    "    }\n"
    "}"
  )


def test_implementation_void_member(generator):
  spec = FunctionSpec(name="delete", parameters=(SwiftParameter("id", STRING),), is_member=True)
  code = generator.generate_with_implementation(spec)

  assert "try await withCheckedThrowingContinuation { (continuation: CheckedContinuation<Void, Error>) in" in code
  assert "self.delete(id: id, completionHandler: { error in" in code
  assert code.count("continuation.resume(") == 2
  assert "continuation.resume(returning: ())" in code
  assert "return " not in code


def test_implementation_optional_result(generator):
  spec = FunctionSpec(name="find", return_type=OptionalType(STRING))
  code = generator.generate_with_implementation(spec)

  assert "-> String?" in code
  assert "continuation.resume(returning: result)" in code
  assert "nullResult" not in code


def test_implementation_non_throwing(generator):
  spec = FunctionSpec(name="count", return_type=INT, is_throwing=False)
  code = generator.generate_with_implementation(spec)

  assert "public func count() async -> Int32 {" in code
  assert "return await withCheckedContinuation { continuation in" in code
  assert "count(completionHandler: { result, _ in" in code
  assert "continuation.resume(returning: result!)" in code
  assert "throwing" not in code
