"""
Import Memoizer.

Hands out references to direct per-function imports, creating each import at
most once per module. The first request for a function asks the resolver for
its module and queues ``from <module> import <name>``; later requests reuse
the same local name.
"""

import logging
from typing import Dict, Iterable, List, Set

import libcst as cst

from slimport.core.rewriter.utils import make_import_from
from slimport.errors import UnresolvableNameError
from slimport.resolver.base import ModuleResolver

logger = logging.getLogger(__name__)


class ImportMemoizer:
  """
  Per-unit cache of injected imports.

  Attributes:
      resolver (ModuleResolver): Maps canonical names to module paths.
      library (str): The library being split; never a valid injection source.
  """

  def __init__(self, resolver: ModuleResolver, library: str, taken_names: Iterable[str] = ()):
    self.resolver = resolver
    self.library = library
    self._taken: Set[str] = set(taken_names)
    self._injected: Dict[str, cst.Name] = {}
    self._modules: Dict[str, str] = {}
    self._explicit_reexports: Set[str] = set()

  def reserve(self, names: Iterable[str]) -> None:
    """Marks names as unavailable for injected imports."""
    self._taken.update(names)

  @property
  def injected(self) -> Dict[str, str]:
    """Canonical function name -> local name of its injected import."""
    return {name: ref.value for name, ref in self._injected.items()}

  def statements(self) -> List[cst.SimpleStatementLine]:
    """
    Builds the queued import statements, in first-use order.

    Functions marked via :meth:`mark_reexported` keep the redundant
    ``import name as name`` form that type checkers treat as a re-export.
    """
    return [
      make_import_from(
        self._modules[name],
        name,
        ref.value,
        explicit_reexport=name in self._explicit_reexports,
      )
      for name, ref in self._injected.items()
    ]

  def inject(self, canonical: str) -> cst.Name:
    """
    Returns a fresh reference to the direct import of ``canonical``.

    Args:
        canonical: The function's name as exported by the library.

    Returns:
        cst.Name: A new node naming the injected import.

    Raises:
        UnresolvableNameError: If the resolver cannot place the function.
    """
    ref = self._injected.get(canonical)
    if ref is None:
      module_path = self.module_for(canonical)
      local = self._unique_name(canonical)
      ref = cst.Name(local)
      self._injected[canonical] = ref
      logger.debug(f"Injected `from {module_path} import {canonical}` as '{local}'")

    return ref.deep_clone()

  def module_for(self, canonical: str) -> str:
    """
    Resolves the module defining ``canonical``, remembering the answer.

    Raises:
        UnresolvableNameError: If the resolver has no answer, or answers with
            the library itself.
    """
    module_path = self._modules.get(canonical)
    if module_path is None:
      module_path = self.resolver.resolve(canonical)
      if not module_path or module_path == self.library:
        raise UnresolvableNameError(canonical, self.library, f"resolved back to '{module_path}'")
      self._modules[canonical] = module_path
    return module_path

  def mark_reexported(self, canonical: str) -> None:
    """Requests the explicit ``as`` re-export form for an injected import."""
    if canonical in self._injected and self._injected[canonical].value == canonical:
      self._explicit_reexports.add(canonical)

  def _unique_name(self, hint: str) -> str:
    candidate = hint
    if candidate in self._taken:
      candidate = f"_{hint}"
      counter = 2
      while candidate in self._taken:
        candidate = f"_{hint}_{counter}"
        counter += 1
    self._taken.add(candidate)
    return candidate
