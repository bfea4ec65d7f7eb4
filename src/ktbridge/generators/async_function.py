"""
Async Function Generator.

Renders suspend functions as Swift ``async`` functions. Three forms exist:

1.  **Signature**: ``public func f(a: Int32) async throws -> String``.
2.  **Implementation**: the signature plus a body that suspends on a checked
    continuation and calls the callback-based native export. Every path
    through the callback resumes the continuation exactly once.
3.  **Convenience overloads**: for a function with k trailing parameters
    whose defaults are known, k overloads taking the required parameters plus
    0 .. k-1 of the defaulted ones, forwarding to the full function with the
    omitted defaults spelled out. The full-arity form is never regenerated.
"""

from typing import List, Optional, Sequence

from ktbridge.enums import DeclarationKind
from ktbridge.errors import ValidationIssue
from ktbridge.generators.base import INDENT, SwiftGenerator, collect_parameter_issues, indent_block, render_generics
from ktbridge.swift.specs import FunctionSpec, SwiftParameter
from ktbridge.swift.types import OptionalType, VoidType

NULL_RESULT_ERROR = "KtBridgeError.nullResult"


def trailing_default_count(parameters: Sequence[SwiftParameter]) -> int:
  """
  Counts the parameters at the end of the list that carry a known default.

  A parameter without a known default stops the count, so a default that
  precedes a required parameter is never elided.
  """
  count = 0
  for param in reversed(parameters):
    if param.default_value is None:
      break
    count += 1
  return count


class AsyncFunctionGenerator(SwiftGenerator[FunctionSpec]):
  """
  Generates Swift async functions and their default-argument overloads.
  """

  kind = DeclarationKind.ASYNC.value

  def collect_issues(self, spec: FunctionSpec) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not spec.name.strip():
      issues.append(ValidationIssue("Function name cannot be blank", field="name", value=spec.name))
    issues.extend(collect_parameter_issues(list(spec.parameters)))
    return issues

  # --- Signature ---

  def _effects(self, spec: FunctionSpec) -> str:
    text = " async"
    if spec.is_throwing:
      text += " throws"
    if not isinstance(spec.return_type, VoidType):
      text += f" -> {spec.return_type.render()}"
    return text

  def _header(self, spec: FunctionSpec, parameters: Sequence[SwiftParameter], include_defaults: bool) -> str:
    params = ", ".join(p.render(include_default=include_defaults) for p in parameters)
    return f"{spec.access.value} func {spec.name}{render_generics(spec.type_parameters)}({params}){self._effects(spec)}"

  def render_signature(self, spec: FunctionSpec) -> str:
    return self._header(spec, spec.parameters, include_defaults=True)

  # --- Implementation ---

  def _native_call(self, spec: FunctionSpec, callback: str) -> str:
    target = f"self.{spec.name}" if spec.is_member else spec.name
    args = [f"{p.name}: {p.name}" for p in spec.parameters]
    args.append(f"completionHandler: {{ {callback} in")
    return f"{target}({', '.join(args)}"

  def _resume_lines(self, spec: FunctionSpec) -> List[str]:
    if isinstance(spec.return_type, VoidType):
      if not spec.is_throwing:
        return ["continuation.resume(returning: ())"]
      return [
        "if let error = error {",
        INDENT + "continuation.resume(throwing: error)",
        "} else {",
        INDENT + "continuation.resume(returning: ())",
        "}",
      ]

    optional = isinstance(spec.return_type, OptionalType)
    if not spec.is_throwing:
      return ["continuation.resume(returning: result)" if optional else "continuation.resume(returning: result!)"]
    if optional:
      return [
        "if let error = error {",
        INDENT + "continuation.resume(throwing: error)",
        "} else {",
        INDENT + "continuation.resume(returning: result)",
        "}",
      ]
    return [
      "if let error = error {",
      INDENT + "continuation.resume(throwing: error)",
      "} else if let result = result {",
      INDENT + "continuation.resume(returning: result)",
      "} else {",
      INDENT + f"continuation.resume(throwing: {NULL_RESULT_ERROR})",
      "}",
    ]

  def render_implementation(self, spec: FunctionSpec) -> str:
    is_void = isinstance(spec.return_type, VoidType)

    # 1. Continuation kind
    if spec.is_throwing:
      keyword = "try await withCheckedThrowingContinuation"
      annotated = "(continuation: CheckedContinuation<Void, Error>)"
    else:
      keyword = "await withCheckedContinuation"
      annotated = "(continuation: CheckedContinuation<Void, Never>)"
    if is_void:
      opener = f"{keyword} {{ {annotated} in"
    else:
      opener = f"return {keyword} {{ continuation in"

    # 2. Callback shape
    if is_void:
      callback = "error" if spec.is_throwing else "_"
    else:
      callback = "result, error" if spec.is_throwing else "result, _"

    body = [
      opener,
      INDENT + self._native_call(spec, callback),
      *(INDENT * 2 + line for line in self._resume_lines(spec)),
      INDENT + "})",
      "}",
    ]
    return "\n".join([self.render_signature(spec) + " {", indent_block("\n".join(body)), "}"])

  # --- Convenience overloads ---

  def overload_bodies(self, spec: FunctionSpec, max_overloads: int = 5, label: Optional[str] = None) -> List[str]:
    """
    Renders the default-argument convenience overloads of `spec`.

    Args:
        spec: Function with its full parameter list.
        max_overloads: Upper bound on the number of overloads; extra
            defaults are simply not given overloads.
        label: Name used to tag failures (defaults to the spec name).

    Returns:
        List[str]: Overload declarations, shortest parameter list first.
    """
    self.validate(spec)
    return self._guarded(lambda s: self._render_overloads(s, max_overloads), spec, "Failed to generate overloads", label)

  def _render_overloads(self, spec: FunctionSpec, max_overloads: int) -> List[str]:
    params = list(spec.parameters)
    defaults = trailing_default_count(params)
    required = len(params) - defaults
    limit = min(defaults, max(max_overloads, 0))

    is_void = isinstance(spec.return_type, VoidType)
    call_prefix = ("" if is_void else "return ") + ("try " if spec.is_throwing else "") + "await "

    overloads = []
    for extra in range(limit):
      kept = params[: required + extra]
      args = [f"{p.name}: {p.name}" if i < len(kept) else f"{p.name}: {p.default_value}" for i, p in enumerate(params)]
      header = self._header(spec, kept, include_defaults=False)
      call = f"{call_prefix}{spec.name}({', '.join(args)})"
      overloads.append(f"{header} {{\n{INDENT}{call}\n}}")
    return overloads
