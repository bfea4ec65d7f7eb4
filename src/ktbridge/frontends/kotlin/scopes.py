"""
Type Scope Tracking.

Resolves which named type (class, interface, object) contains a given offset
in comment-stripped Kotlin text. Braces are matched with an explicit stack so
that nested members are attributed to their innermost type and braces of
function bodies or lambdas are not confused with type bodies.

Types whose body brace is never closed are reported separately so that the
scanner can ignore declarations inside them.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ktbridge.frontends.kotlin.patterns import TYPE_KEYWORD_PATTERN

_STRING_LITERAL = re.compile(r'"""[\s\S]*?"""|"(?:\\.|[^"\\\n])*"|\'(?:\\.|[^\'\\\n])*\'')


@dataclass(frozen=True)
class ScopeRange:
  """
  Half-open character range ``[start, end)`` occupied by a named type.

  `start` is the offset of the type keyword; `name_start` the offset of the
  type name, which the scanner uses to look a scope up from a header match.
  """

  name: str
  start: int
  end: int
  name_start: int

  def contains(self, offset: int) -> bool:
    return self.start <= offset < self.end


@dataclass
class ScopeIndex:
  """
  Result of scope analysis over one source text.
  """

  ranges: List[ScopeRange] = field(default_factory=list)
  unterminated: List[ScopeRange] = field(default_factory=list)
  by_name_start: Dict[int, ScopeRange] = field(default_factory=dict)

  def containing_type(self, offset: int) -> Optional[str]:
    """
    Returns the innermost type containing `offset`.

    When several ranges contain the offset, the one starting last wins.
    """
    best: Optional[ScopeRange] = None
    for scope in self.ranges:
      if scope.contains(offset) and (best is None or scope.start > best.start):
        best = scope
    return best.name if best else None

  def is_unterminated(self, offset: int) -> bool:
    """True if `offset` lies inside a type whose body never closes."""
    return any(scope.contains(offset) for scope in self.unterminated)

  def is_unterminated_header(self, name_start: int) -> bool:
    return any(scope.name_start == name_start for scope in self.unterminated)


def mask_literals(text: str) -> str:
  """
  Replaces the contents of string and character literals with spaces.

  The result has the same length as `text`, so offsets stay valid.
  """

  def _blank(match: "re.Match[str]") -> str:
    literal = match.group(0)
    quote = 3 if literal.startswith('"""') else 1
    inner = literal[quote:-quote]
    return literal[:quote] + re.sub(r"[^\n]", " ", inner) + literal[-quote:]

  return _STRING_LITERAL.sub(_blank, text)


def _next_non_space(text: str, index: int) -> int:
  while index < len(text) and text[index].isspace():
    index += 1
  return index


def _prev_non_space(text: str, index: int) -> str:
  while index >= 0 and text[index].isspace():
    index -= 1
  return text[index] if index >= 0 else ""


def find_type_body(text: str, pos: int) -> Optional[int]:
  """
  Locates the opening brace of the body of a type header ending at `pos`.

  The header may continue across lines (constructor parameters, supertypes,
  ``where`` clauses). A ``=``, ``;``, ``}`` or a line break that does not
  continue the header means the type has no body.

  Args:
      text: Literal-masked, comment-free source.
      pos: Offset just after the type name.

  Returns:
      Optional[int]: Offset of the body ``{``, or None.
  """
  parens = 0
  angles = 0
  i = pos
  while i < len(text):
    ch = text[i]
    if ch == "(":
      parens += 1
    elif ch == ")":
      parens -= 1
      if parens < 0:
        return None
    elif ch == "<":
      angles += 1
    elif ch == ">" and text[i - 1] != "-" and angles > 0:
      angles -= 1
    elif parens == 0 and angles == 0:
      if ch == "{":
        return i
      if ch in ";=}":
        return None
      if ch == "\n":
        j = _next_non_space(text, i)
        if j >= len(text):
          return None
        continues = text[j] in ":,{(<" or text.startswith("where", j) or _prev_non_space(text, i - 1) in ":,"
        if not continues:
          return None
        i = j
        continue
    i += 1
  return None


def build_scope_index(text: str) -> ScopeIndex:
  """
  Computes the type ranges of a comment-stripped source text.

  Args:
      text: Comment-free Kotlin source.

  Returns:
      ScopeIndex: Closed ranges, unterminated ranges and a lookup by name offset.
  """
  masked = mask_literals(text)

  openers: Dict[int, Tuple[str, int, int]] = {}
  for match in TYPE_KEYWORD_PATTERN.finditer(masked):
    brace = find_type_body(masked, match.end())
    if brace is not None and brace not in openers:
      openers[brace] = (match.group("name"), match.start(), match.start("name"))

  index = ScopeIndex()
  stack: List[Tuple[Optional[str], int, int]] = []
  for offset, ch in enumerate(masked):
    if ch == "{":
      stack.append(openers.get(offset, (None, offset, offset)))
    elif ch == "}":
      if not stack:
        continue
      name, start, name_start = stack.pop()
      if name is not None:
        scope = ScopeRange(name=name, start=start, end=offset + 1, name_start=name_start)
        index.ranges.append(scope)
        index.by_name_start[name_start] = scope

  for name, start, name_start in stack:
    if name is not None:
      index.unterminated.append(ScopeRange(name=name, start=start, end=len(text), name_start=name_start))

  return index
