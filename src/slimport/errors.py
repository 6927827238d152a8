"""
Error types raised by the rewrite engine.

All errors are fatal for the program unit being rewritten. The engine never
emits partial output for a unit that raised one of these.
"""

from typing import Optional


class SlimportError(ValueError):
  """Base class for rewrite failures."""


class UnsupportedPatternError(SlimportError):
  """
  Raised when a module uses the library in a way that cannot be rewritten
  into per-function imports (e.g. ``from toolz import *``).
  """


class UnresolvableNameError(SlimportError):
  """
  Raised when the resolver does not know which module exports a function.

  Attributes:
      name: The canonical function name that failed to resolve.
      library: The library the name was looked up in.
  """

  def __init__(self, name: str, library: Optional[str] = None, reason: Optional[str] = None):
    self.name = name
    self.library = library
    where = f" in '{library}'" if library else ""
    message = f"Cannot resolve module for '{name}'{where}"
    if reason:
      message = f"{message}: {reason}"
    super().__init__(message)
