"""
Manifest Codec.

Line-oriented interchange format for the declaration model::

    # comment
    [sum:com.example.Result]
    name=Result
    namespace=com.example
    exhaustive=true
    typeParams=out T
    subclass=Success|data:T|false
    subclass=Loading||true

    [async:com.example.Repo.fetch]
    name=fetch
    namespace=com.example
    failable=true
    return=String
    class=Repo
    param=id:String
    param=limit:Int=10

Decoding is a single pass over the lines. The section being read is an
immutable `_Section` value that is replaced on every line and flushed into the
output list when the next header (or end of input) is reached. Lines that
cannot be understood are skipped, never fatal.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ktbridge.enums import DeclarationKind
from ktbridge.frontends.kotlin.patterns import split_top_level
from ktbridge.model import (
  VOID_TYPE,
  AsyncFunctionDeclaration,
  Declaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
)

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^\[(?P<kind>\w+):(?P<qualified_name>[^\]]+)\]$")
MANIFEST_BANNER = "# ktbridge manifest"
VARARG_PREFIX = "vararg "

Entries = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class _Section:
  """A section under construction. `kind` is None for unrecognized headers."""

  kind: Optional[DeclarationKind]
  qualified_name: str
  entries: Entries = ()

  def with_entry(self, key: str, value: str) -> "_Section":
    return replace(self, entries=self.entries + ((key, value),))

  def first(self, key: str) -> Optional[str]:
    for k, v in self.entries:
      if k == key:
        return v
    return None

  def all(self, key: str) -> List[str]:
    return [v for k, v in self.entries if k == key]


def parse_kind(tag: str) -> Optional[DeclarationKind]:
  try:
    return DeclarationKind(tag)
  except ValueError:
    return None


def _parse_bool(value: Optional[str], default: bool) -> bool:
  if value is None:
    return default
  return value.strip().lower() == "true"


def _format_bool(value: bool) -> str:
  return "true" if value else "false"


def _split_list(value: Optional[str]) -> Tuple[str, ...]:
  if not value:
    return ()
  return tuple(split_top_level(value))


def _namespace_of(section: _Section) -> str:
  namespace = section.first("namespace")
  if namespace is not None:
    return namespace
  return section.qualified_name.rpartition(".")[0]


def _split_type(type_text: str) -> Tuple[str, bool]:
  text = type_text.strip()
  if text.endswith("?"):
    return text[:-1].strip(), True
  return text, False


def _format_type(type_name: str, nullable: bool) -> str:
  return f"{type_name}?" if nullable else type_name


# --- Field codecs ---


def encode_parameter(param: ParameterDeclaration) -> str:
  """
  Formats a parameter as ``[vararg ]name:type[?][=default]``.
  """
  prefix = VARARG_PREFIX if param.is_vararg else ""
  text = f"{prefix}{param.name}:{_format_type(param.type_name, param.is_nullable)}"
  if param.default_value is not None:
    text += f"={param.default_value}"
  return text


def decode_parameter(value: str) -> Optional[ParameterDeclaration]:
  """
  Parses a ``param=`` value. Returns None if the value has no ``name:type`` pair.
  """
  is_vararg = value.startswith(VARARG_PREFIX)
  if is_vararg:
    value = value[len(VARARG_PREFIX) :]
  name, sep, rest = value.partition(":")
  if not sep or not name.strip() or not rest.strip():
    return None
  type_text, has_default, default = rest.partition("=")
  type_name, nullable = _split_type(type_text)
  if not type_name:
    return None
  return ParameterDeclaration(
    name=name.strip(),
    type_name=type_name,
    is_nullable=nullable,
    default_value=default if has_default else None,
    is_vararg=is_vararg,
  )


def encode_subclass(variant: SubclassVariant) -> str:
  """
  Formats a variant as ``name|prop:type,prop:type|isObject``.
  """
  props = ",".join(f"{p.name}:{_format_type(p.type_name, p.is_nullable)}" for p in variant.properties)
  return f"{variant.name}|{props}|{_format_bool(variant.is_object)}"


def decode_subclass(value: str) -> Optional[SubclassVariant]:
  """
  Parses a ``subclass=`` value. Returns None when fewer than three fields are present.
  """
  fields = value.split("|")
  if len(fields) < 3 or not fields[0].strip():
    return None
  name, props_text, is_object = fields[0].strip(), fields[1], fields[2]
  props: List[PropertyDeclaration] = []
  for chunk in split_top_level(props_text):
    prop_name, sep, type_text = chunk.partition(":")
    if not sep or not prop_name.strip():
      logger.debug("Skipping malformed property %r of subclass %s", chunk, name)
      continue
    type_name, nullable = _split_type(type_text)
    props.append(PropertyDeclaration(name=prop_name.strip(), type_name=type_name, is_nullable=nullable))
  return SubclassVariant(name=name, properties=tuple(props), is_object=_parse_bool(is_object, False))


def _decode_parameters(section: _Section) -> Tuple[ParameterDeclaration, ...]:
  params: List[ParameterDeclaration] = []
  for value in section.all("param"):
    param = decode_parameter(value)
    if param is None:
      logger.debug("Skipping malformed param line %r in %s", value, section.qualified_name)
      continue
    params.append(param)
  return tuple(params)


# --- Section builders (decode) ---


def _build_sum(section: _Section) -> Optional[SumTypeDeclaration]:
  name = section.first("name")
  if not name:
    return None
  subclasses: List[SubclassVariant] = []
  for value in section.all("subclass"):
    variant = decode_subclass(value)
    if variant is None:
      logger.debug("Skipping malformed subclass line %r in %s", value, section.qualified_name)
      continue
    subclasses.append(variant)
  return SumTypeDeclaration(
    qualified_name=section.qualified_name,
    simple_name=name,
    namespace=_namespace_of(section),
    type_parameters=_split_list(section.first("typeParams")),
    subclasses=tuple(subclasses),
    rename=section.first("rename") or None,
    is_exhaustive=_parse_bool(section.first("exhaustive"), True),
    conformances=_split_list(section.first("conformances")),
  )


def _build_async(section: _Section) -> Optional[AsyncFunctionDeclaration]:
  name = section.first("name")
  if not name:
    return None
  return AsyncFunctionDeclaration(
    qualified_name=section.qualified_name,
    simple_name=name,
    namespace=_namespace_of(section),
    parameters=_decode_parameters(section),
    return_type=section.first("return") or VOID_TYPE,
    type_parameters=_split_list(section.first("typeParams")),
    is_failable=_parse_bool(section.first("failable"), True),
    enclosing_type=section.first("class") or None,
    has_annotation=_parse_bool(section.first("hasAnnotation"), False),
  )


def _build_stream(section: _Section) -> Optional[StreamDeclaration]:
  name = section.first("name")
  element = section.first("element")
  if not name or not element:
    return None
  return StreamDeclaration(
    qualified_name=section.qualified_name,
    simple_name=name,
    namespace=_namespace_of(section),
    element_type=element,
    parameters=_decode_parameters(section),
    enclosing_type=section.first("class") or None,
    is_property=_parse_bool(section.first("isProperty"), False),
    has_annotation=_parse_bool(section.first("hasAnnotation"), False),
  )


_BUILDERS: Dict[DeclarationKind, Callable[[_Section], Optional[Declaration]]] = {
  DeclarationKind.SUM: _build_sum,
  DeclarationKind.ASYNC: _build_async,
  DeclarationKind.STREAM: _build_stream,
}


# --- Section writers (encode) ---


def _lines_sum(decl: SumTypeDeclaration) -> List[str]:
  lines = [
    f"name={decl.simple_name}",
    f"namespace={decl.namespace}",
    f"exhaustive={_format_bool(decl.is_exhaustive)}",
  ]
  if decl.rename:
    lines.append(f"rename={decl.rename}")
  if decl.type_parameters:
    lines.append(f"typeParams={','.join(decl.type_parameters)}")
  if decl.conformances:
    lines.append(f"conformances={','.join(decl.conformances)}")
  lines.extend(f"subclass={encode_subclass(v)}" for v in decl.subclasses)
  return lines


def _lines_async(decl: AsyncFunctionDeclaration) -> List[str]:
  lines = [
    f"name={decl.simple_name}",
    f"namespace={decl.namespace}",
    f"failable={_format_bool(decl.is_failable)}",
    f"return={decl.return_type}",
  ]
  if decl.enclosing_type:
    lines.append(f"class={decl.enclosing_type}")
  if decl.has_annotation:
    lines.append("hasAnnotation=true")
  if decl.type_parameters:
    lines.append(f"typeParams={','.join(decl.type_parameters)}")
  lines.extend(f"param={encode_parameter(p)}" for p in decl.parameters)
  return lines


def _lines_stream(decl: StreamDeclaration) -> List[str]:
  lines = [
    f"name={decl.simple_name}",
    f"namespace={decl.namespace}",
    f"element={decl.element_type}",
  ]
  if decl.enclosing_type:
    lines.append(f"class={decl.enclosing_type}")
  if decl.is_property:
    lines.append("isProperty=true")
  if decl.has_annotation:
    lines.append("hasAnnotation=true")
  lines.extend(f"param={encode_parameter(p)}" for p in decl.parameters)
  return lines


_WRITERS: Dict[DeclarationKind, Callable] = {
  DeclarationKind.SUM: _lines_sum,
  DeclarationKind.ASYNC: _lines_async,
  DeclarationKind.STREAM: _lines_stream,
}


def encode_section(declaration: Declaration) -> List[str]:
  """
  Renders one declaration as its header line plus key/value lines.
  """
  header = f"[{declaration.kind.value}:{declaration.qualified_name}]"
  return [header] + _WRITERS[declaration.kind](declaration)


def encode(declarations: Iterable[Declaration]) -> str:
  """
  Serializes declarations into manifest text.

  Args:
      declarations: Records to write, in output order.

  Returns:
      str: Manifest text; sections separated by one blank line.
  """
  blocks = [MANIFEST_BANNER]
  for decl in declarations:
    blocks.append("\n".join(encode_section(decl)))
  return "\n\n".join(blocks) + "\n"


def _flush(section: Optional[_Section], output: List[Declaration]) -> None:
  if section is None or section.kind is None:
    return
  decl = _BUILDERS[section.kind](section)
  if decl is None:
    logger.debug("Skipping [%s:%s]: missing required keys", section.kind.value, section.qualified_name)
    return
  output.append(decl)


def decode(text: str) -> List[Declaration]:
  """
  Parses manifest text into declarations.

  Unknown kinds, lines outside a section, lines without ``=`` and sections
  missing required keys are skipped.

  Args:
      text: Manifest text.

  Returns:
      List[Declaration]: Declarations in section order.
  """
  output: List[Declaration] = []
  current: Optional[_Section] = None

  for lineno, raw in enumerate(text.splitlines(), start=1):
    line = raw.strip()
    if not line or line.startswith("#"):
      continue

    header = HEADER_PATTERN.match(line)
    if header:
      _flush(current, output)
      kind = parse_kind(header.group("kind"))
      if kind is None:
        logger.debug("Line %d: unknown section kind %r", lineno, header.group("kind"))
      current = _Section(kind=kind, qualified_name=header.group("qualified_name").strip())
      continue

    if current is None or current.kind is None:
      logger.debug("Line %d: ignoring line outside a known section", lineno)
      continue

    key, sep, value = line.partition("=")
    if not sep or not key.strip():
      logger.debug("Line %d: malformed entry %r", lineno, line)
      continue
    current = current.with_entry(key.strip(), value.strip())

  _flush(current, output)
  return output
