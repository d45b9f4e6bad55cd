"""
Console and Logging Setup.

typify reports progress through the ``typify`` logger. Records are rendered by
a ``RichHandler`` bound to one shared Rich console, and the CLI prints its
tables on that same console, so logs and tables always land in one place.

The shared console is reached through ``console``, a proxy whose backend can
be replaced (``set_console``), e.g. by a recording console in tests. Swapping
the backend moves the log handler along with it.

Levels: the standard ones plus SUCCESS (25), used for finished conversions.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "typify"
logger = logging.getLogger(LOGGER_NAME)

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

TYPIFY_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "type": "bold green",
  }
)


def _new_console() -> Console:
  return Console(theme=TYPIFY_THEME)


def _bind_handler(target: Console) -> None:
  """Points the ``typify`` logger at ``target``, replacing any earlier Rich handler."""
  for old in [h for h in logger.handlers if isinstance(h, RichHandler)]:
    logger.removeHandler(old)
  logger.addHandler(
    RichHandler(
      console=target,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
  )
  logger.setLevel(logging.INFO)
  logger.propagate = False


class _ConsoleProxy:
  """
  Stable stand-in for the active `rich.console.Console`.

  Modules keep a reference to the proxy; attribute access is forwarded to
  whichever console is active at call time.
  """

  def __init__(self) -> None:
    self._backend = _new_console()
    _bind_handler(self._backend)

  @property
  def backend(self) -> Console:
    return self._backend

  def swap(self, new_console: Console) -> None:
    self._backend = new_console
    _bind_handler(new_console)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends console output and log records to another Rich console.

  Args:
      new_console (Console): The console to use from now on.
  """
  console.swap(new_console)


def reset_console() -> None:
  """Goes back to a fresh console on standard output."""
  console.swap(_new_console())


def get_console() -> Console:
  """Returns the Rich console currently behind the proxy."""
  return console.backend


def _emit(level: int, icon: str, msg: str) -> None:
  logger.log(level, f"{icon} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs a progress message.

  Args:
      msg (str): Text; Rich markup such as ``[path]...[/path]`` is allowed.
  """
  _emit(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  """Logs a finished conversion at the SUCCESS level."""
  _emit(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  """Logs a recoverable problem (e.g. nothing to convert)."""
  _emit(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  """Logs a failed conversion or unreadable input."""
  _emit(logging.ERROR, "❌", msg)
