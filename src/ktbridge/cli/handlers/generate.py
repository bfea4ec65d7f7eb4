"""
Generate Command Handler.

Build-step equivalent: merges manifests and/or scans sources, runs the
transformation engine and writes the two fixed output files.
"""

from pathlib import Path
from typing import Any, Dict, List

from ktbridge.cli.handlers.inputs import load_declarations
from ktbridge.config import BridgeConfig
from ktbridge.core.engine import TransformEngine
from ktbridge.errors import BridgeError
from ktbridge.generators import runtime_support
from ktbridge.utils.console import log_error, log_info, log_success, log_warning

GENERATED_HEADER = "// Generated by ktbridge. Do not edit.\n\nimport Foundation\n"


def render_generated_file(code: str) -> str:
  """
  Adds the file banner and imports to engine output.
  """
  if not code:
    return GENERATED_HEADER
  return f"{GENERATED_HEADER}\n{code}\n"


def handle_generate(
  manifests: List[Path],
  sources: List[Path],
  out_dir: Path,
  settings: Dict[str, Any],
) -> int:
  """
  Handles the 'generate' command.

  Args:
      manifests: Manifest files or directories.
      sources: Kotlin files or directories scanned in addition to manifests.
      out_dir: Directory receiving the generated and runtime files.
      settings: ``--set`` overrides for `BridgeConfig`, applied over the
          ``[tool.ktbridge]`` table found from the working directory.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not manifests and not sources:
    log_error("Nothing to do: pass --manifest and/or --source.")
    return 1

  try:
    config = BridgeConfig.load(**settings)
    declarations = load_declarations(manifests, sources)
    result = TransformEngine().transform(declarations, config)
  except BridgeError as e:
    log_error(str(e))
    return 1

  if result.is_empty:
    log_warning(f"No declarations transformed ({len(declarations)} found).")

  out_dir.mkdir(parents=True, exist_ok=True)
  generated = out_dir / runtime_support.GENERATED_FILENAME
  runtime = out_dir / runtime_support.RUNTIME_FILENAME
  generated.write_text(render_generated_file(result.code), encoding="utf-8")
  runtime.write_text(runtime_support.generate(), encoding="utf-8")

  log_info(f"Runtime support written to [path]{runtime}[/path]")
  log_success(f"Transformed {result.declarations_transformed} declarations -> [path]{generated}[/path]")
  return 0
