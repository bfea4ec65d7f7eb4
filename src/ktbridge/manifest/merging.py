"""
Manifest Merging.

Combines manifests produced for different compilation units. Sections are
concatenated in input order and deduplicated on (kind, qualified name); the
first occurrence of a key wins. Sections are carried as raw text so that keys
unknown to this version survive a merge.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from ktbridge.manifest.codec import HEADER_PATTERN, MANIFEST_BANNER
from ktbridge.model import Declaration, declaration_key

logger = logging.getLogger(__name__)

RawSection = Tuple[Tuple[str, str], List[str]]


def split_sections(text: str) -> List[RawSection]:
  """
  Splits manifest text into ``((kind, qualified_name), lines)`` groups.

  Blank lines, comments and lines before the first header are dropped.
  """
  sections: List[RawSection] = []
  for raw in text.splitlines():
    line = raw.strip()
    if not line or line.startswith("#"):
      continue
    header = HEADER_PATTERN.match(line)
    if header:
      key = (header.group("kind"), header.group("qualified_name").strip())
      sections.append((key, [line]))
    elif sections:
      sections[-1][1].append(line)
  return sections


def merge(texts: Sequence[str]) -> str:
  """
  Merges several manifests into one.

  Args:
      texts: Manifest texts, in priority order.

  Returns:
      str: A manifest containing every unique (kind, qualified name) once.
  """
  seen = set()
  blocks = [MANIFEST_BANNER]
  duplicates = 0
  for text in texts:
    for key, lines in split_sections(text):
      if key in seen:
        duplicates += 1
        continue
      seen.add(key)
      blocks.append("\n".join(lines))
  if duplicates:
    logger.debug("Dropped %d duplicate manifest sections", duplicates)
  return "\n\n".join(blocks) + "\n"


def merge_declarations(groups: Iterable[Iterable[Declaration]]) -> List[Declaration]:
  """
  Model-level counterpart of `merge`: first declaration per key wins.
  """
  seen = set()
  merged: List[Declaration] = []
  for group in groups:
    for decl in group:
      key = declaration_key(decl)
      if key in seen:
        continue
      seen.add(key)
      merged.append(decl)
  return merged
