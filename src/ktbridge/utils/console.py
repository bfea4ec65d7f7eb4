"""
Console and Logging Utilities.

All user-facing output of ktbridge goes through the ``ktbridge`` logger,
rendered by `rich`. Library modules log through ``logging.getLogger(__name__)``
and so propagate into it; the helpers below (`log_info`, `log_success`, ...)
are meant for the CLI layer and for conditions the user should always see,
such as a missing manifest file.

The Rich console sits behind a proxy so that the destination can be swapped
at runtime (e.g. to a recording console in tests) without re-importing the
module-level `console` reference.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.theme import Theme

LOGGER_NAME = "ktbridge"

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme({"logging.level.success": "bold green", "path": "bold blue"})

_logger = logging.getLogger(LOGGER_NAME)


def _new_console() -> Console:
  return Console(theme=_THEME)


class _ConsoleProxy:
  """
  Forwards printing to a swappable `rich.console.Console` backend.

  Every backend swap re-creates the single RichHandler on the ``ktbridge``
  logger, so log records and ``console.print`` output share a destination.
  """

  def __init__(self) -> None:
    self._backend: Console = _new_console()
    self._attach_handler()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """
    Installs `new_console` as the output destination.

    Args:
        new_console (Console): The Rich console to write to.
    """
    self._backend = new_console
    self._attach_handler()

  def reset(self) -> None:
    """Restores a fresh standard-output console."""
    self.set_backend(_new_console())

  def _attach_handler(self) -> None:
    for handler in [h for h in _logger.handlers if isinstance(h, RichHandler)]:
      _logger.removeHandler(handler)
    _logger.addHandler(
      RichHandler(
        console=self._backend,
        show_time=False,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
      )
    )
    _logger.setLevel(logging.INFO)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and logging to `new_console`.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Routes console output and logging back to standard output."""
  console.reset()


def get_console() -> Console:
  """
  Returns the active console backend.

  Returns:
      Console: The Rich console currently receiving output.
  """
  return console.backend


def print_swift(code: str) -> None:
  """
  Prints generated Swift with syntax highlighting.

  Args:
      code (str): Swift source text.
  """
  console.print(Syntax(code, "swift", theme="ansi_dark", background_color="default"))


def _emit(level: int, prefix: str, msg: str) -> None:
  _logger.log(level, f"{prefix} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  _emit(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  _emit(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  """
  Logs a warning the user should always see.

  Args:
      msg (str): The message content. May contain rich markup such as ``[path]``.
  """
  _emit(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  _emit(logging.ERROR, "❌", msg)
