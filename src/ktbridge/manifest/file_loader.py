"""
Manifest File Loading.

Reads manifest artifacts from disk. A path that is missing or unreadable is
reported and treated as an empty manifest, so one bad build target does not
abort a multi-target merge.
"""

from pathlib import Path
from typing import Iterable, List, Union

from ktbridge.manifest.merging import merge
from ktbridge.utils.console import log_warning

MANIFEST_SUFFIX = ".manifest"

PathLike = Union[str, Path]


def read_manifest(path: PathLike) -> str:
  """
  Returns the text of one manifest, or an empty string if it cannot be read.

  Args:
      path: Manifest file location.
  """
  try:
    return Path(path).read_text(encoding="utf-8")
  except FileNotFoundError:
    log_warning(f"Manifest not found: {path}")
  except (OSError, UnicodeDecodeError) as e:
    log_warning(f"Manifest unreadable: {path} ({e})")
  return ""


def find_manifests(root: PathLike) -> List[Path]:
  """
  Recursively collects ``*.manifest`` files below `root`, sorted by path.
  """
  base = Path(root)
  if base.is_file():
    return [base]
  if not base.is_dir():
    return []
  return sorted(base.rglob(f"*{MANIFEST_SUFFIX}"))


def merge_files(paths: Iterable[PathLike]) -> str:
  """
  Reads and merges manifests in the given order.

  Args:
      paths: Manifest files. Missing entries contribute nothing.

  Returns:
      str: Merged manifest text.
  """
  return merge([read_manifest(p) for p in paths])
