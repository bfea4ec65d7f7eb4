"""
Transformation Configuration.

`BridgeConfig` is an immutable value passed explicitly into every transform
call. Values are resolved from the ``[tool.ktbridge]`` table of the nearest
``pyproject.toml`` and then overridden by explicit keyword arguments (the CLI
passes ``--set key=value`` pairs through `parse_cli_key_values`).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ktbridge.errors import ConfigurationError
from ktbridge.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

TOOL_SECTION = "ktbridge"


class BridgeConfig(BaseModel):
  """
  Options controlling which declarations are transformed and how.
  """

  model_config = ConfigDict(frozen=True)

  require_annotations: bool = Field(False, description="Only transform declarations carrying an adoption annotation.")
  generate_default_overloads: bool = Field(True, description="Emit convenience overloads for suspend functions.")
  transform_streams: bool = Field(True, description="Emit AsyncStream wrappers for Flow members.")
  transform_sum_types: bool = Field(True, description="Emit Swift enums for sealed hierarchies.")
  max_overloads: int = Field(5, ge=0, description="Upper bound on overloads generated per function.")
  extra_conformances: List[str] = Field(default_factory=list, description="Protocols added to every generated enum.")
  exhaustiveness_override: Optional[bool] = Field(
    None, description="Force every enum frozen (True) or open (False). None keeps each declaration's flag."
  )

  @field_validator("extra_conformances", mode="before")
  @classmethod
  def split_conformances(cls, v: Any) -> Any:
    """
    Accepts a comma separated string as well as a list.

    Args:
        v (Any): Raw value.

    Returns:
        Any: A list of protocol names when `v` was a string.
    """
    if isinstance(v, str):
      return [part.strip() for part in v.split(",") if part.strip()]
    return v

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "BridgeConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        **overrides: Field values taking precedence over the file. None values
            are ignored.

    Returns:
        BridgeConfig: The resolved configuration.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config = _read_tool_table(start_dir)

    values: Dict[str, Any] = dict(toml_config)
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(values) - set(cls.model_fields))
    for key in unknown:
      log_warning(f"Ignoring unknown configuration key '{key}'")
      values.pop(key)

    try:
      return cls(**values)
    except ValidationError as e:
      first = e.errors()[0]
      key = ".".join(str(part) for part in first.get("loc", ())) or None
      raise ConfigurationError(f"Invalid configuration: {first.get('msg')}", key=key) from e


def find_pyproject(start_path: Path) -> Optional[Path]:
  """
  Returns the nearest ``pyproject.toml`` at or above `start_path`.

  Args:
      start_path (Path): Directory the upward search begins in.

  Returns:
      Optional[Path]: The file, or None when no ancestor has one.
  """
  current = start_path.resolve()
  for directory in (current, *current.parents):
    candidate = directory / "pyproject.toml"
    if candidate.is_file():
      return candidate
  return None


def _read_tool_table(start_path: Path) -> Dict[str, Any]:
  if tomllib is None:
    return {}
  pyproject = find_pyproject(start_path)
  if pyproject is None:
    return {}
  try:
    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
  except (OSError, tomllib.TOMLDecodeError) as e:
    log_warning(f"Could not read {pyproject}: {e}")
    return {}
  return data.get("tool", {}).get(TOOL_SECTION, {})


_BOOLEANS = {"true": True, "false": False}


def _coerce(raw: str) -> Any:
  """Types a ``--set`` value: bool, comma list, int, float, else the string."""
  if raw.lower() in _BOOLEANS:
    return _BOOLEANS[raw.lower()]
  if "," in raw:
    return [part.strip() for part in raw.split(",") if part.strip()]
  for number in (int, float):
    try:
      return number(raw)
    except ValueError:
      continue
  return raw


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Turns ``--set`` arguments into configuration overrides.

  Keys have dashes normalized to underscores so ``max-overloads=3`` and
  ``max_overloads=3`` are equivalent. Entries without ``=`` are reported and
  skipped.

  Args:
      items (Optional[List[str]]): Raw ``key=value`` strings from argparse.

  Returns:
      Dict[str, Any]: Override values keyed by field name.
  """
  overrides: Dict[str, Any] = {}
  for item in items or ():
    key, sep, raw = item.partition("=")
    if not sep:
      log_warning(f"Ignoring --set '{item}': expected key=value")
      continue
    overrides[key.strip().replace("-", "_")] = _coerce(raw.strip())
  return overrides
