"""
Exception hierarchy for the bridge pipeline.

Validation problems are collected exhaustively and reported together through a
single `ValidationError`. Failures while rendering Swift text are wrapped in a
`GenerationError` tagged with the declaration kind and name, keeping the
original exception as ``__cause__``.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence


class BridgeError(Exception):
  """Base class for all ktbridge errors."""


@dataclass(frozen=True)
class ValidationIssue:
  """
  A single offending field found while validating a generator spec.

  Attributes:
      message (str): Human readable description.
      field (Optional[str]): Dotted path of the field (e.g. ``parameters[1].name``).
      value (Any): The offending value, when useful for diagnostics.
  """

  message: str
  field: Optional[str] = None
  value: Any = None


class ValidationError(BridgeError):
  """
  Raised when a spec fails validation. Carries every issue found, in order.
  """

  def __init__(self, issues: Sequence[ValidationIssue]) -> None:
    self.issues: List[ValidationIssue] = list(issues)
    super().__init__(self._build_message(self.issues))

  @staticmethod
  def _build_message(issues: List[ValidationIssue]) -> str:
    if len(issues) == 1:
      return issues[0].message
    lines = ["Multiple validation errors:"]
    lines.extend(f"  - {issue.message}" for issue in issues)
    return "\n".join(lines)

  @property
  def fields(self) -> List[Optional[str]]:
    """Field paths of all issues, in report order."""
    return [issue.field for issue in self.issues]


class GenerationError(BridgeError):
  """
  Raised when emitting Swift text for a declaration fails.

  Attributes:
      kind (Optional[str]): Declaration kind tag (e.g. "sum", "async").
      name (Optional[str]): Name of the offending declaration/spec.
  """

  def __init__(self, message: str, kind: Optional[str] = None, name: Optional[str] = None) -> None:
    self.kind = kind
    self.name = name
    super().__init__(self._build_message(message, kind, name))

  @staticmethod
  def _build_message(message: str, kind: Optional[str], name: Optional[str]) -> str:
    if kind is None and name is None:
      return message
    tag = kind or ""
    if name is not None:
      tag = f"{tag}: {name}" if tag else name
    return f"{message} [{tag}]"


class ConfigurationError(BridgeError):
  """Raised when a configuration value is invalid."""

  def __init__(self, message: str, key: Optional[str] = None) -> None:
    self.key = key
    super().__init__(f"{message} (key: {key})" if key else message)
