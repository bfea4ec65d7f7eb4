"""
Stream Generator.

Wraps a Flow-returning member in an ``AsyncStream``. The implementation builds
a ``KtBridgeFlowCollector`` whose callbacks drive the stream continuation
(yield on emit, finish on completion, finish and drop the error on failure)
and cancels the collector when the consumer stops iterating, which makes the
upstream ``collect`` call fail and tears the subscription down.

Properties are exposed under ``<name>Stream`` so that they do not collide with
the original Flow property still exported by the native framework.
"""

from typing import List

from ktbridge.enums import DeclarationKind
from ktbridge.errors import ValidationIssue
from ktbridge.generators.base import INDENT, SwiftGenerator, collect_parameter_issues, indent_block, render_generics
from ktbridge.generators.runtime_support import COLLECTOR_CLASS
from ktbridge.swift.specs import StreamSpec

PROPERTY_SUFFIX = "Stream"


def stream_member_name(spec: StreamSpec) -> str:
  return f"{spec.name}{PROPERTY_SUFFIX}" if spec.is_property else spec.name


class StreamGenerator(SwiftGenerator[StreamSpec]):
  """
  Generates ``AsyncStream`` properties and functions.
  """

  kind = DeclarationKind.STREAM.value

  def collect_issues(self, spec: StreamSpec) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not spec.name.strip():
      issues.append(ValidationIssue("Stream name cannot be blank", field="name", value=spec.name))
    issues.extend(collect_parameter_issues(list(spec.parameters)))
    if spec.is_property and spec.parameters:
      issues.append(ValidationIssue("Stream property cannot take parameters", field="parameters"))
    return issues

  def _stream_type(self, spec: StreamSpec) -> str:
    return f"AsyncStream<{spec.element_type.render()}>"

  def _header(self, spec: StreamSpec) -> str:
    name = stream_member_name(spec)
    if spec.is_property:
      return f"{spec.access.value} var {name}: {self._stream_type(spec)}"
    params = ", ".join(p.render() for p in spec.parameters)
    return f"{spec.access.value} func {name}{render_generics(spec.type_parameters)}({params}) -> {self._stream_type(spec)}"

  def render_signature(self, spec: StreamSpec) -> str:
    if spec.is_property:
      return self._header(spec) + " { get }"
    return self._header(spec)

  def _source_expression(self, spec: StreamSpec) -> str:
    target = f"self.{spec.name}" if spec.is_member else spec.name
    if spec.is_property:
      return target
    args = ", ".join(f"{p.name}: {p.name}" for p in spec.parameters)
    return f"{target}({args})"

  def render_implementation(self, spec: StreamSpec) -> str:
    element = spec.element_type.render()
    body = [
      "return AsyncStream { continuation in",
      f"{INDENT}let collector = {COLLECTOR_CLASS}<{element}>(",
      f"{INDENT * 2}onEmit: {{ value in",
      f"{INDENT * 3}continuation.yield(value)",
      f"{INDENT * 2}}},",
      f"{INDENT * 2}onComplete: {{",
      f"{INDENT * 3}continuation.finish()",
      f"{INDENT * 2}}},",
      f"{INDENT * 2}onError: {{ _ in",
      f"{INDENT * 3}continuation.finish()",
      f"{INDENT * 2}}}",
      f"{INDENT})",
      f"{INDENT}continuation.onTermination = {{ _ in",
      f"{INDENT * 2}collector.cancel()",
      f"{INDENT}}}",
      f"{INDENT}{self._source_expression(spec)}.collect(collector: collector, completionHandler: {{ error in",
      f"{INDENT * 2}if let error = error {{",
      f"{INDENT * 3}collector.error(error)",
      f"{INDENT * 2}}} else {{",
      f"{INDENT * 3}collector.complete()",
      f"{INDENT * 2}}}",
      f"{INDENT}}})",
      "}",
    ]
    return "\n".join([self._header(spec) + " {", indent_block("\n".join(body)), "}"])
