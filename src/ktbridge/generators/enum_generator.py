"""
Enum Generator.

Renders a sealed hierarchy as a Swift enum: one case per variant, object
variants without payload, data variants with one labeled associated value per
property.
"""

from typing import List

from ktbridge.enums import DeclarationKind
from ktbridge.errors import ValidationIssue
from ktbridge.generators.base import INDENT, SwiftGenerator, render_generics
from ktbridge.swift.specs import EnumCase, EnumSpec


class EnumGenerator(SwiftGenerator[EnumSpec]):
  """
  Generates ``enum`` declarations from `EnumSpec`.

  Example output::

      @frozen
      public enum NetworkResult<T> {
          case success(data: T)
          case loading
      }
  """

  kind = DeclarationKind.SUM.value

  def collect_issues(self, spec: EnumSpec) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not spec.name.strip():
      issues.append(ValidationIssue("Enum name cannot be blank", field="name", value=spec.name))
    if not spec.cases:
      issues.append(ValidationIssue("Enum must have at least one case", field="cases"))
    for index, case in enumerate(spec.cases):
      field = f"cases[{index}].name"
      if not case.name.strip():
        issues.append(ValidationIssue("Case name cannot be blank", field=field, value=case.name))
      elif not case.name[0].islower():
        issues.append(ValidationIssue(f"Case name '{case.name}' must start with a lowercase letter", field=field, value=case.name))
      for value_index, value in enumerate(case.associated_values):
        if not value.label.strip():
          issues.append(
            ValidationIssue(
              "Associated value label cannot be blank",
              field=f"cases[{index}].associated_values[{value_index}].label",
              value=value.label,
            )
          )
    return issues

  def render_signature(self, spec: EnumSpec) -> str:
    lines = []
    if spec.is_frozen:
      lines.append("@frozen")
    header = f"{spec.access.value} enum {spec.name}{render_generics(spec.type_parameters)}"
    if spec.conformances:
      header += f": {', '.join(spec.conformances)}"
    lines.append(header + " {")
    lines.extend(INDENT + self._render_case(case) for case in spec.cases)
    lines.append("}")
    return "\n".join(lines)

  @staticmethod
  def _render_case(case: EnumCase) -> str:
    if not case.associated_values:
      return f"case {case.name}"
    payload = ", ".join(f"{v.label}: {v.type.render()}" for v in case.associated_values)
    return f"case {case.name}({payload})"
