"""
Generator Protocol.

Defines the shared contract of the per-kind Swift generators: exhaustive
validation of a spec, followed by rendering that either succeeds or raises a
`GenerationError` tagged with the generator kind and the spec name.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

from ktbridge.errors import GenerationError, ValidationError, ValidationIssue
from ktbridge.swift.specs import SwiftParameter

SpecT = TypeVar("SpecT")

INDENT = "    "
"""Indentation unit of generated Swift."""


def indent_block(text: str, levels: int = 1) -> str:
  """
  Indents every non-empty line of `text`.
  """
  prefix = INDENT * levels
  return "\n".join(prefix + line if line.strip() else "" for line in text.split("\n"))


def render_generics(type_parameters) -> str:
  return f"<{', '.join(type_parameters)}>" if type_parameters else ""


def collect_parameter_issues(parameters: List[SwiftParameter]) -> List[ValidationIssue]:
  issues = []
  for index, param in enumerate(parameters):
    if not param.name.strip():
      issues.append(ValidationIssue("Parameter name cannot be blank", field=f"parameters[{index}].name", value=param.name))
  return issues


class SwiftGenerator(ABC, Generic[SpecT]):
  """
  Abstract base class for declaration generators.

  Subclasses implement `collect_issues` and `render_signature`; generators
  that can emit bridging code also override `render_implementation`.
  """

  kind: str = "declaration"
  """Tag attached to generation failures (e.g. "sum", "async")."""

  @abstractmethod
  def collect_issues(self, spec: SpecT) -> List[ValidationIssue]:
    """
    Returns every problem with `spec`, in field order. Empty means valid.
    """

  @abstractmethod
  def render_signature(self, spec: SpecT) -> str:
    """Renders the declaration without a bridging body."""

  def render_implementation(self, spec: SpecT) -> str:
    return self.render_signature(spec)

  def validate(self, spec: SpecT) -> None:
    """
    Raises:
        ValidationError: With all issues found, if there are any.
    """
    issues = self.collect_issues(spec)
    if issues:
      raise ValidationError(issues)

  def generate(self, spec: SpecT, label: Optional[str] = None) -> str:
    """
    Validates and renders the signature-only form.

    Args:
        spec: The target description.
        label: Name used to tag failures; defaults to the spec name
            (the orchestrator passes the qualified name).

    Returns:
        str: Swift source text.
    """
    self.validate(spec)
    return self._guarded(self.render_signature, spec, "Failed to generate Swift declaration", label)

  def generate_with_implementation(self, spec: SpecT, label: Optional[str] = None) -> str:
    """
    Validates and renders the declaration including its bridging body.
    """
    self.validate(spec)
    return self._guarded(self.render_implementation, spec, "Failed to generate Swift implementation", label)

  def _guarded(self, render: Callable[[SpecT], str], spec: SpecT, message: str, label: Optional[str]):
    try:
      return render(spec)
    except ValidationError:
      raise
    except Exception as e:
      name = label or getattr(spec, "name", None)
      raise GenerationError(f"{message}: {e}", kind=self.kind, name=name) from e
