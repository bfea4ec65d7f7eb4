"""
Kotlin Pattern Definitions.

Regex patterns for the declaration headers the scanner recognizes, plus small
balanced-delimiter readers used to capture parameter lists and generic
arguments that a single regex cannot match reliably.

The readers operate on comment-stripped text. They skip over double-quoted
string literals so that delimiters inside default values do not affect depth.
"""

import re
from typing import List, Optional, Tuple

# Declaration modifiers that may precede the keyword we are interested in.
_MODIFIER = (
  r"(?:public|internal|private|protected|override|open|abstract|final|actual|expect|inline|operator|tailrec|external)"
)
MODIFIERS = rf"(?:{_MODIFIER}\s+)*"

ANNOTATION_ARGS = r"(?:\s*\([^)]*\))?"

# `@SerialName("id") `, `@field:Json(name = "x") `
USE_ANNOTATIONS = r"(?:@[\w:.]+(?:\([^)]*\))?\s+)*"

PACKAGE_PATTERN = re.compile(r"^\s*package\s+([\w.]+)", re.MULTILINE)

BLOCK_COMMENT_PATTERN = re.compile(r'("(?:\\.|[^"\\\n])*")|/\*[\s\S]*?\*/')
LINE_COMMENT_PATTERN = re.compile(r'("(?:\\.|[^"\\\n])*")|//[^\n]*')

# `@SwiftEnum(name = "X", exhaustive = false) sealed class Name<out T>`
SUM_TYPE_PATTERN = re.compile(
  rf"(?P<annotation>@SwiftEnum\b{ANNOTATION_ARGS}\s*)?{MODIFIERS}sealed\s+(?:class|interface)\s+(?P<name>\w+)"
)
ENUM_NAME_ARG_PATTERN = re.compile(r'name\s*=\s*"(\w+)"')
ENUM_EXHAUSTIVE_ARG_PATTERN = re.compile(r"exhaustive\s*=\s*(true|false)")

# `data class Success<T>(` ... `) : Parent<T>()`
DATA_CASE_PATTERN = re.compile(r"\bdata\s+class\s+(?P<name>\w+)\s*(?:<[^>]*>)?\s*\(")
OBJECT_CASE_PATTERN = re.compile(r"\b(?:data\s+)?object\s+(?P<name>\w+)\s*:\s*(?P<parent>[\w.]+)")
SUPERTYPE_PATTERN = re.compile(r"\s*:\s*(?P<parent>[\w.]+)")
PROPERTY_PATTERN = re.compile(
  rf"^\s*{USE_ANNOTATIONS}(?:(?:private|public|internal|protected|override)\s+)*va[lr]\s+(?P<name>\w+)\s*:"
)

# `@SwiftAsync(throwing = false) suspend fun <T> name(`
ASYNC_FUNCTION_PATTERN = re.compile(
  rf"(?P<annotation>@Swift(?:Async|Defaults)\b{ANNOTATION_ARGS}\s*)?{MODIFIERS}suspend\s+{MODIFIERS}"
  r"fun\s+(?:(?P<tparams><[^>]*>)\s*)?(?P<name>\w+)\s*\("
)
THROWING_ARG_PATTERN = re.compile(r"throwing\s*=\s*(true|false)")

# `@SwiftFlow fun name(` ... `): Flow<T>` (suspend variants are async functions, not streams)
STREAM_FUNCTION_PATTERN = re.compile(
  rf"(?P<annotation>@SwiftFlow\b{ANNOTATION_ARGS}\s*)?{MODIFIERS}(?P<suspend>suspend\s+)?{MODIFIERS}"
  r"fun\s+(?:<[^>]*>\s*)?(?P<name>\w+)\s*\("
)
STREAM_PROPERTY_PATTERN = re.compile(
  rf"(?P<annotation>@SwiftFlow\b{ANNOTATION_ARGS}\s*)?{MODIFIERS}va[lr]\s+(?P<name>\w+)\s*:\s*"
  r"(?:[\w.]*\.)?(?:Flow|StateFlow|SharedFlow)\s*<"
)
FLOW_RETURN_PATTERN = re.compile(r"\s*:\s*(?:[\w.]*\.)?(?:Flow|StateFlow|SharedFlow)\s*<")
RETURN_TYPE_PATTERN = re.compile(r"\s*:\s*")

# Any named type declaration; used for containing-type resolution.
TYPE_KEYWORD_PATTERN = re.compile(r"\b(?:class|interface|object)\s+(?P<name>\w+)")

PARAMETER_PATTERN = re.compile(
  rf"^\s*{USE_ANNOTATIONS}"
  r"(?P<modifiers>(?:(?:vararg|noinline|crossinline|va[lr]|override|private|public|internal|protected)\s+)*)"
  r"(?P<name>\w+)\s*:\s*(?P<type>.+?)\s*(?:=\s*(?P<default>.+?))?\s*$",
  re.DOTALL,
)

# Default expressions we can carry over verbatim; anything else is recorded as unknown.
LITERAL_DEFAULT_PATTERN = re.compile(r'null|true|false|-?\d+(?:\.\d+)?[LfF]?|"(?:\\.|[^"\\])*"|\w+\.\w+')

_OPENERS = "(<[{"
_CLOSERS = ")>]}"


def strip_comments(source: str) -> str:
  """
  Removes block comments, then line comments, leaving string literals intact.

  Args:
      source: Raw Kotlin source.

  Returns:
      str: Source without comments.
  """
  without_blocks = BLOCK_COMMENT_PATTERN.sub(lambda m: m.group(1) or " ", source)
  return LINE_COMMENT_PATTERN.sub(lambda m: m.group(1) or "", without_blocks)


def _skip_string(text: str, index: int) -> int:
  """Returns the index of the closing quote of the literal opened at `index`."""
  i = index + 1
  while i < len(text):
    if text[i] == "\\":
      i += 2
      continue
    if text[i] == '"':
      return i
    i += 1
  return len(text) - 1


def _is_arrow(text: str, index: int) -> bool:
  return text[index] == ">" and index > 0 and text[index - 1] == "-"


def find_closing(text: str, open_index: int) -> int:
  """
  Finds the delimiter matching the one at `open_index`.

  Args:
      text: Text to search.
      open_index: Index of an opening ``(``, ``<``, ``[`` or ``{``.

  Returns:
      int: Index of the matching closer, or -1 if the delimiter is unbalanced.
  """
  open_char = text[open_index]
  close_char = _CLOSERS[_OPENERS.index(open_char)]
  depth = 0
  i = open_index
  while i < len(text):
    ch = text[i]
    if ch == '"':
      i = _skip_string(text, i)
    elif ch == open_char:
      depth += 1
    elif ch == close_char and not _is_arrow(text, i):
      depth -= 1
      if depth == 0:
        return i
    i += 1
  return -1


def split_top_level(text: str, separator: str = ",") -> List[str]:
  """
  Splits on `separator` occurrences that are not nested in any bracket pair.

  Args:
      text: The text to split (e.g. a parameter list).
      separator: Single separator character.

  Returns:
      List[str]: Non-empty, stripped chunks.
  """
  chunks: List[str] = []
  depth = 0
  current = 0
  i = 0
  while i < len(text):
    ch = text[i]
    if ch == '"':
      i = _skip_string(text, i)
    elif ch in _OPENERS:
      depth += 1
    elif ch in _CLOSERS and not _is_arrow(text, i):
      depth = max(depth - 1, 0)
    elif ch == separator and depth == 0:
      chunks.append(text[current:i])
      current = i + 1
    i += 1
  chunks.append(text[current:])
  return [c.strip() for c in chunks if c.strip()]


def read_type(text: str, pos: int) -> Tuple[Optional[str], int]:
  """
  Reads a type reference starting at `pos`.

  Supports dotted names, one or more levels of generic arguments, function
  types and a trailing ``?``.

  Args:
      text: Source text.
      pos: Index where the type starts (leading whitespace is skipped).

  Returns:
      Tuple[Optional[str], int]: The type text (None if nothing was read) and the index after it.
  """
  i = pos
  while i < len(text) and text[i] in " \t":
    i += 1
  start = i

  if i < len(text) and text[i] == "(":
    close = find_closing(text, i)
    if close < 0:
      return None, pos
    i = close + 1
    arrow = re.compile(r"\s*->\s*").match(text, i)
    if arrow:
      _, i = read_type(text, arrow.end())
  else:
    name = re.compile(r"[\w.]+").match(text, i)
    if not name:
      return None, pos
    i = name.end()
    if i < len(text) and text[i] == "<":
      close = find_closing(text, i)
      if close < 0:
        return None, pos
      i = close + 1

  if i < len(text) and text[i] == "?":
    i += 1
  return text[start:i], i


def read_generic_argument(text: str, open_index: int) -> Optional[str]:
  """
  Returns the text between the ``<`` at `open_index` and its matching ``>``.
  """
  close = find_closing(text, open_index)
  if close < 0:
    return None
  return text[open_index + 1 : close].strip()


def split_type_parameters(raw: Optional[str]) -> List[str]:
  """
  Splits a ``<...>`` type-parameter clause into its entries.

  Variance modifiers (``out T``) are preserved; generators strip them.
  """
  if not raw:
    return []
  inner = raw.strip()
  if inner.startswith("<") and inner.endswith(">"):
    inner = inner[1:-1]
  return split_top_level(inner)
