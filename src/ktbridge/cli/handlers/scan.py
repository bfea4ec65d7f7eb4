"""
Scan Command Handler.

Scans Kotlin sources and writes the declarations as a manifest, the artifact
normally persisted per compilation unit.
"""

from pathlib import Path
from typing import List, Optional

from ktbridge.cli.handlers.inputs import collect_kotlin_files
from ktbridge.frontends.kotlin import KotlinScanner
from ktbridge.manifest import encode
from ktbridge.utils.console import console, log_error, log_success, log_warning


def handle_scan(paths: List[Path], output_path: Optional[Path]) -> int:
  """
  Handles the 'scan' command.

  Args:
      paths: Kotlin files or directories.
      output_path: Manifest destination; printed to stdout when None.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  files = collect_kotlin_files(paths)
  if not files:
    log_error("No Kotlin sources found.")
    return 1

  declarations = KotlinScanner().scan_files(files)
  if not declarations:
    log_warning(f"No bridgeable declarations found in {len(files)} file(s).")

  text = encode(declarations)
  if output_path is None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")
    return 0

  output_path.parent.mkdir(parents=True, exist_ok=True)
  output_path.write_text(text, encoding="utf-8")
  log_success(f"Wrote {len(declarations)} declarations to [path]{output_path}[/path]")
  return 0
