"""
Console output and logging for slimport.

Everything the tool reports goes through the ``slimport`` logger, rendered by
a single `rich` handler. Engine modules log with
``logging.getLogger(__name__)`` (debug details about bindings and injected
imports); the CLI uses the ``log_*`` helpers below for user-facing lines.

The console is held behind a proxy so tests (or an embedding tool) can swap
the destination with `set_console` while other modules keep the same
`console` object.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

PACKAGE_LOGGER = "slimport"

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_cli_logger = logging.getLogger(f"{PACKAGE_LOGGER}.cli")


def _make_console() -> Console:
  return Console(theme=_THEME)


class _ConsoleProxy:
  """
  Forwards to a swappable `rich.console.Console`.

  Swapping the backend re-points the ``slimport`` log handler at it.
  """

  def __init__(self) -> None:
    self._backend: Console = _make_console()
    self._level = logging.INFO
    self._attach_handler()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._attach_handler()

  def reset(self) -> None:
    """Goes back to a fresh stdout console at the default verbosity."""
    self._backend = _make_console()
    self._level = logging.INFO
    self._attach_handler()

  def set_level(self, level: int) -> None:
    self._level = level
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

  def _attach_handler(self) -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    logger.addHandler(
      RichHandler(
        console=self._backend,
        show_time=False,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
      )
    )
    logger.setLevel(self._level)
    # Host applications keep their own root handlers out of our output
    logger.propagate = False

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends printing and logging to ``new_console``.

  Args:
      new_console (Console): e.g. ``Console(record=True)`` to capture output.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def get_console() -> Console:
  """
  Retrieves the currently active console backend.

  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def set_verbosity(verbose: int = 0, quiet: bool = False) -> None:
  """
  Adjusts how much the ``slimport`` loggers report.

  Args:
      verbose: 1 or more shows debug output (bindings, injected imports).
      quiet: Only warnings and errors. Wins over ``verbose``.
  """
  if quiet:
    console.set_level(logging.WARNING)
  elif verbose > 0:
    console.set_level(logging.DEBUG)
  else:
    console.set_level(logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs an informational line.

  Args:
      msg (str): The message. Can include rich markup like [path].
  """
  _cli_logger.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  _cli_logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  _cli_logger.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs a per-file or configuration failure.

  Args:
      msg (str): The message content.
  """
  _cli_logger.error(f"❌ {msg}", extra={"markup": True})
