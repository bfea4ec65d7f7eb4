"""
Main Entry Point for the ktbridge CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `ktbridge.cli.commands`.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from ktbridge import __version__
from ktbridge.cli import commands
from ktbridge.config import parse_cli_key_values


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
  parser.add_argument(
    "--manifest",
    type=Path,
    nargs="*",
    default=[],
    help="Manifest files or directories (searched for *.manifest)",
  )
  parser.add_argument("--source", type=Path, nargs="*", default=[], help="Kotlin files or directories to scan")
  parser.add_argument(
    "--set",
    dest="settings",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. max_overloads=2 require_annotations=true)",
  )


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="ktbridge: Kotlin to Swift declaration bridge generator")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: SCAN ---
  cmd_scan = subparsers.add_parser("scan", help="Scan Kotlin sources into a manifest")
  cmd_scan.add_argument("paths", type=Path, nargs="+", help="Kotlin files or directories")
  cmd_scan.add_argument("--out", type=Path, default=None, help="Manifest destination (default: stdout)")

  # --- Command: MERGE ---
  cmd_merge = subparsers.add_parser("merge", help="Merge manifests, removing duplicate declarations")
  cmd_merge.add_argument("paths", type=Path, nargs="+", help="Manifest files or directories, in priority order")
  cmd_merge.add_argument("--out", type=Path, default=None, help="Merged manifest destination (default: stdout)")

  # --- Command: GENERATE ---
  cmd_gen = subparsers.add_parser("generate", help="Generate Swift bridge and runtime support files")
  _add_input_arguments(cmd_gen)
  cmd_gen.add_argument("--out-dir", type=Path, required=True, help="Directory for the generated Swift files")

  # --- Command: PREVIEW ---
  cmd_prev = subparsers.add_parser("preview", help="Print generated signatures without writing files")
  _add_input_arguments(cmd_prev)

  args = parser.parse_args(argv)

  if args.command == "scan":
    return commands.handle_scan(args.paths, args.out)

  elif args.command == "merge":
    return commands.handle_merge(args.paths, args.out)

  elif args.command == "generate":
    settings = parse_cli_key_values(args.settings)
    return commands.handle_generate(args.manifest, args.source, args.out_dir, settings)

  elif args.command == "preview":
    settings = parse_cli_key_values(args.settings)
    return commands.handle_preview(args.manifest, args.source, settings)

  return 0
