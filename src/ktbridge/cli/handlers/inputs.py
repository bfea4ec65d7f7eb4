"""
Input Collection Helpers.

Shared by the handlers that accept Kotlin sources and manifests on the
command line.
"""

from pathlib import Path
from typing import List, Sequence

from ktbridge.frontends.kotlin import KotlinScanner
from ktbridge.manifest import decode, find_manifests, merge_declarations, merge_files
from ktbridge.model import Declaration
from ktbridge.utils.console import log_warning

KOTLIN_SUFFIXES = (".kt", ".kts")


def collect_kotlin_files(paths: Sequence[Path]) -> List[Path]:
  """
  Expands files and directories into a sorted list of Kotlin sources.

  Args:
      paths: Files or directories given by the user.

  Returns:
      List[Path]: Kotlin files, directories searched recursively.
  """
  files: List[Path] = []
  for path in paths:
    if path.is_dir():
      files.extend(sorted(p for p in path.rglob("*") if p.suffix in KOTLIN_SUFFIXES))
    elif path.is_file():
      files.append(path)
    else:
      log_warning(f"Source not found: [path]{path}[/path]")
  return files


def collect_manifests(paths: Sequence[Path]) -> List[Path]:
  """
  Expands manifest arguments. Directories contribute every ``*.manifest`` below them.

  Missing paths are passed through so that the loader reports them.
  """
  manifests: List[Path] = []
  for path in paths:
    if path.is_dir():
      manifests.extend(find_manifests(path))
    else:
      manifests.append(path)
  return manifests


def load_declarations(manifests: Sequence[Path], sources: Sequence[Path]) -> List[Declaration]:
  """
  Decodes merged manifests, then scans sources; the first declaration per key wins.

  Args:
      manifests: Manifest files or directories.
      sources: Kotlin files or directories.

  Returns:
      List[Declaration]: Unique declarations, manifest entries first.
  """
  from_manifests: List[Declaration] = []
  if manifests:
    from_manifests = decode(merge_files(collect_manifests(manifests)))
  from_sources = KotlinScanner().scan_files(collect_kotlin_files(sources)) if sources else []
  return merge_declarations([from_manifests, from_sources])
