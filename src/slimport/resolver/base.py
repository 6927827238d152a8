"""
Resolver interface.

A resolver answers a single question: which module exports a given function of
the target library on its own. The rewrite engine treats it as a pure function.
"""

from abc import ABC, abstractmethod


class ModuleResolver(ABC):
  """
  Maps canonical function names to the module path that defines them.

  Implementations must be deterministic and raise
  :class:`~slimport.errors.UnresolvableNameError` for unknown names.
  """

  library: str

  @abstractmethod
  def resolve(self, name: str) -> str:
    """
    Returns the module path exporting ``name``.

    Args:
        name: Canonical function name as exported by the library.

    Returns:
        str: Dotted module path (e.g. "toolz.functoolz").
    """

  def __call__(self, name: str) -> str:
    return self.resolve(name)
