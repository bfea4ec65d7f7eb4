"""
Kotlin Declaration Scanner.

Extracts sum types (sealed hierarchies), suspend functions and Flow-returning
members from Kotlin source text without a full parse. Recognition is
structural: comments are removed, headers are matched with the patterns in
`ktbridge.frontends.kotlin.patterns` against a copy of the text whose string
literals are blanked, and enclosing types are resolved with
`ktbridge.frontends.kotlin.scopes`. The blanked copy keeps every offset, so
parameter lists and annotation arguments are sliced from the original text.

The scanner never raises on malformed input. Unbalanced delimiters cause the
affected declaration to be skipped.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ktbridge.frontends.kotlin import patterns as P
from ktbridge.frontends.kotlin.scopes import ScopeIndex, build_scope_index, mask_literals
from ktbridge.model import (
  UNKNOWN_DEFAULT,
  VOID_TYPE,
  AsyncFunctionDeclaration,
  Declaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
)
from ktbridge.utils.console import log_warning

logger = logging.getLogger(__name__)


def _qualify(*parts: Optional[str]) -> str:
  return ".".join(p for p in parts if p)


def _clean_type(type_text: str) -> str:
  """Collapses whitespace runs so multi-line types become single-line manifest values."""
  return " ".join(type_text.split())


def _split_nullable(type_text: str) -> Tuple[str, bool]:
  text = _clean_type(type_text)
  if text.endswith("?"):
    return text[:-1].strip(), True
  return text, False


def _normalize_default(raw: Optional[str]) -> Optional[str]:
  if raw is None:
    return None
  text = raw.strip()
  if P.LITERAL_DEFAULT_PATTERN.fullmatch(text):
    return text
  return UNKNOWN_DEFAULT


def parse_parameters(param_text: str) -> Tuple[ParameterDeclaration, ...]:
  """
  Parses the inside of a parameter list.

  Chunks that do not look like ``name: Type`` are dropped.

  Args:
      param_text: Text between the parentheses.

  Returns:
      Tuple[ParameterDeclaration, ...]: Parameters in declaration order.
  """
  params: List[ParameterDeclaration] = []
  for chunk in P.split_top_level(param_text):
    match = P.PARAMETER_PATTERN.match(chunk)
    if not match:
      logger.debug("Ignoring unrecognized parameter chunk: %r", chunk)
      continue
    type_name, nullable = _split_nullable(match.group("type"))
    params.append(
      ParameterDeclaration(
        name=match.group("name"),
        type_name=type_name,
        is_nullable=nullable,
        default_value=_normalize_default(match.group("default")),
        is_vararg="vararg" in match.group("modifiers").split(),
      )
    )
  return tuple(params)


def parse_properties(param_text: str) -> Tuple[PropertyDeclaration, ...]:
  """
  Parses ``val``/``var`` constructor properties of a data case.

  Plain constructor parameters (without ``val``/``var``) are not properties
  and are skipped.
  """
  props: List[PropertyDeclaration] = []
  for chunk in P.split_top_level(param_text):
    if not P.PROPERTY_PATTERN.match(chunk):
      continue
    match = P.PARAMETER_PATTERN.match(chunk)
    if not match:
      continue
    type_name, nullable = _split_nullable(match.group("type"))
    props.append(PropertyDeclaration(name=match.group("name"), type_name=type_name, is_nullable=nullable))
  return tuple(props)


def _group_text(text: str, match: "re.Match[str]", group: str) -> Optional[str]:
  """Returns `group` of a match made on the masked text, read from the original."""
  if match.start(group) < 0:
    return None
  return text[match.start(group) : match.end(group)]


class KotlinScanner:
  """
  Stateless scanner turning Kotlin source text into declaration records.

  Usage:
      >>> scanner = KotlinScanner()
      >>> decls = scanner.scan(source_text)
  """

  def scan(self, source: str) -> List[Declaration]:
    """
    Scans one source text.

    Declaration-like text inside string literals is ignored.

    Args:
        source: Kotlin source.

    Returns:
        List[Declaration]: Sum types, then async functions, then streams,
        each group in source order.
    """
    text = P.strip_comments(source)
    masked = mask_literals(text)
    package = P.PACKAGE_PATTERN.search(masked)
    namespace = package.group(1) if package else ""
    scopes = build_scope_index(text)

    declarations: List[Declaration] = []
    declarations.extend(self._scan_sum_types(text, masked, namespace, scopes))
    declarations.extend(self._scan_async_functions(text, masked, namespace, scopes))
    declarations.extend(self._scan_streams(text, masked, namespace, scopes))
    logger.debug("Scanned %d declarations (namespace=%r)", len(declarations), namespace)
    return declarations

  def scan_files(self, paths: Iterable[Path]) -> List[Declaration]:
    """
    Scans several files, concatenating results in the given order.

    Unreadable files are reported and skipped.
    """
    results: List[Declaration] = []
    for path in paths:
      try:
        source = Path(path).read_text(encoding="utf-8")
      except (OSError, UnicodeDecodeError) as e:
        log_warning(f"Skipping unreadable source {path}: {e}")
        continue
      results.extend(self.scan(source))
    return results

  # --- Sum types ---

  def _scan_sum_types(self, text: str, masked: str, namespace: str, scopes: ScopeIndex) -> List[SumTypeDeclaration]:
    found: List[SumTypeDeclaration] = []
    for match in P.SUM_TYPE_PATTERN.finditer(masked):
      name_start = match.start("name")
      if scopes.is_unterminated_header(name_start) or scopes.is_unterminated(match.start()):
        logger.debug("Skipping sealed type with unterminated body: %s", match.group("name"))
        continue

      name = match.group("name")
      type_params: Tuple[str, ...] = ()
      after = match.end()
      if after < len(masked) and masked[after] == "<":
        raw = P.read_generic_argument(masked, after)
        if raw is None:
          continue
        type_params = tuple(P.split_type_parameters(raw))

      rename = None
      exhaustive = True
      annotation = _group_text(text, match, "annotation")
      if annotation:
        name_arg = P.ENUM_NAME_ARG_PATTERN.search(annotation)
        rename = name_arg.group(1) if name_arg else name
        exhaustive_arg = P.ENUM_EXHAUSTIVE_ARG_PATTERN.search(annotation)
        exhaustive = exhaustive_arg is None or exhaustive_arg.group(1) == "true"

      enclosing = scopes.containing_type(match.start())
      found.append(
        SumTypeDeclaration(
          qualified_name=_qualify(namespace, enclosing, name),
          simple_name=name,
          namespace=namespace,
          type_parameters=type_params,
          subclasses=tuple(self._find_variants(text, masked, name, scopes)),
          rename=rename,
          is_exhaustive=exhaustive,
        )
      )
    return found

  def _find_variants(self, text: str, masked: str, parent: str, scopes: ScopeIndex) -> List[SubclassVariant]:
    variants: List[Tuple[int, SubclassVariant]] = []

    for match in P.DATA_CASE_PATTERN.finditer(masked):
      if scopes.is_unterminated(match.start()):
        continue
      open_paren = match.end() - 1
      close = P.find_closing(masked, open_paren)
      if close < 0:
        continue
      supertype = P.SUPERTYPE_PATTERN.match(masked, close + 1)
      if not supertype or supertype.group("parent").split(".")[-1] != parent:
        continue
      props = parse_properties(text[open_paren + 1 : close])
      variants.append((match.start(), SubclassVariant(name=match.group("name"), properties=props)))

    for match in P.OBJECT_CASE_PATTERN.finditer(masked):
      if scopes.is_unterminated(match.start()):
        continue
      if match.group("parent").split(".")[-1] != parent:
        continue
      variants.append((match.start(), SubclassVariant(name=match.group("name"), is_object=True)))

    variants.sort(key=lambda item: item[0])
    return [variant for _, variant in variants]

  # --- Async functions ---

  def _scan_async_functions(
    self, text: str, masked: str, namespace: str, scopes: ScopeIndex
  ) -> List[AsyncFunctionDeclaration]:
    found: List[AsyncFunctionDeclaration] = []
    for match in P.ASYNC_FUNCTION_PATTERN.finditer(masked):
      if scopes.is_unterminated(match.start()):
        continue
      open_paren = match.end() - 1
      close = P.find_closing(masked, open_paren)
      if close < 0:
        logger.debug("Skipping suspend fun with unbalanced parameters: %s", match.group("name"))
        continue

      return_type = VOID_TYPE
      colon = P.RETURN_TYPE_PATTERN.match(masked, close + 1)
      if colon:
        read, _ = P.read_type(masked, colon.end())
        if read:
          return_type = _clean_type(read)

      annotation = _group_text(text, match, "annotation") or ""
      throwing = P.THROWING_ARG_PATTERN.search(annotation)
      enclosing = scopes.containing_type(match.start())
      name = match.group("name")
      found.append(
        AsyncFunctionDeclaration(
          qualified_name=_qualify(namespace, enclosing, name),
          simple_name=name,
          namespace=namespace,
          parameters=parse_parameters(text[open_paren + 1 : close]),
          return_type=return_type,
          type_parameters=tuple(P.split_type_parameters(match.group("tparams"))),
          is_failable=not (throwing and throwing.group(1) == "false"),
          enclosing_type=enclosing,
          has_annotation=bool(annotation),
        )
      )
    return found

  # --- Streams ---

  def _scan_streams(self, text: str, masked: str, namespace: str, scopes: ScopeIndex) -> List[StreamDeclaration]:
    found: List[StreamDeclaration] = []

    for match in P.STREAM_FUNCTION_PATTERN.finditer(masked):
      if match.group("suspend") or scopes.is_unterminated(match.start()):
        continue
      open_paren = match.end() - 1
      close = P.find_closing(masked, open_paren)
      if close < 0:
        continue
      flow = P.FLOW_RETURN_PATTERN.match(masked, close + 1)
      if not flow:
        continue
      element = P.read_generic_argument(masked, flow.end() - 1)
      if not element:
        continue
      enclosing = scopes.containing_type(match.start())
      name = match.group("name")
      found.append(
        StreamDeclaration(
          qualified_name=_qualify(namespace, enclosing, name),
          simple_name=name,
          namespace=namespace,
          element_type=_clean_type(element),
          parameters=parse_parameters(text[open_paren + 1 : close]),
          enclosing_type=enclosing,
          is_property=False,
          has_annotation=bool(match.group("annotation")),
        )
      )

    for match in P.STREAM_PROPERTY_PATTERN.finditer(masked):
      if scopes.is_unterminated(match.start()):
        continue
      element = P.read_generic_argument(masked, match.end() - 1)
      if not element:
        continue
      enclosing = scopes.containing_type(match.start())
      name = match.group("name")
      found.append(
        StreamDeclaration(
          qualified_name=_qualify(namespace, enclosing, name),
          simple_name=name,
          namespace=namespace,
          element_type=_clean_type(element),
          enclosing_type=enclosing,
          is_property=True,
          has_annotation=bool(match.group("annotation")),
        )
      )

    return found
