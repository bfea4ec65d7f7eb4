"""
Merge Command Handler.
"""

from pathlib import Path
from typing import List, Optional

from ktbridge.cli.handlers.inputs import collect_manifests
from ktbridge.manifest import merge_files
from ktbridge.manifest.merging import split_sections
from ktbridge.utils.console import console, log_success


def handle_merge(paths: List[Path], output_path: Optional[Path]) -> int:
  """
  Merges manifests, first occurrence of each (kind, qualified name) winning.

  Missing inputs are reported and treated as empty.

  Args:
      paths: Manifest files or directories, in priority order.
      output_path: Destination; printed to stdout when None.

  Returns:
      int: Exit code (always 0; unreadable inputs only warn).
  """
  text = merge_files(collect_manifests(paths))
  if output_path is None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")
    return 0

  output_path.parent.mkdir(parents=True, exist_ok=True)
  output_path.write_text(text, encoding="utf-8")
  log_success(f"Merged {len(split_sections(text))} sections into [path]{output_path}[/path]")
  return 0
