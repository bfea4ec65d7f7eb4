"""
Tests for the Stream Generator.

Verifies:
1. Property streams are renamed with the Stream suffix.
2. Function streams keep their parameters.
3. Implementation wiring: collector callbacks, termination and collect call.
"""

from ktbridge.generators import StreamGenerator, stream_member_name
from ktbridge.swift import StreamSpec, SwiftParameter
from ktbridge.swift.types import NamedType

UPDATES = StreamSpec(name="updates", element_type=NamedType("Int32"), is_property=True, is_member=True)
OBSERVE = StreamSpec(
  name="observe",
  element_type=NamedType("User"),
  parameters=(SwiftParameter("userId", NamedType("String")),),
  is_member=True,
)


def test_member_names():
  assert stream_member_name(UPDATES) == "updatesStream"
  assert stream_member_name(OBSERVE) == "observe"


def test_signatures():
  generator = StreamGenerator()
  assert generator.generate(UPDATES) == "public var updatesStream: AsyncStream<Int32> { get }"
  assert generator.generate(OBSERVE) == "public func observe(userId: String) -> AsyncStream<User>"


def test_property_implementation():
  code = StreamGenerator().generate_with_implementation(UPDATES)
  lines = code.split("\n")

  assert lines[0] == "public var updatesStream: AsyncStream<Int32> {"
  assert lines[1] == "    return AsyncStream { continuation in"
  assert lines[-1] == "}"
  assert "KtBridgeFlowCollector<Int32>(" in code
  assert "continuation.yield(value)" in code
  assert code.count("continuation.finish()") == 2
  assert "continuation.onTermination = { _ in" in code
  assert "collector.cancel()" in code
  assert "self.updates.collect(collector: collector, completionHandler: { error in" in code
  assert "collector.error(error)" in code
  assert "collector.complete()" in code


def test_function_implementation():
  code = StreamGenerator().generate_with_implementation(OBSERVE)

  assert code.startswith("public func observe(userId: String) -> AsyncStream<User> {\n")
  assert "self.observe(userId: userId).collect(collector: collector" in code


def test_top_level_function():
  spec = StreamSpec(name="ticks", element_type=NamedType("Int64"))
  code = StreamGenerator().generate_with_implementation(spec)
  assert "    ticks().collect(collector: collector" in code
  assert "self." not in code
