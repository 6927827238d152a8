"""
Binding Tracker.

Records which local names of a module are bound to the target library as a
whole (``import toolz as tz``) or to one of its functions
(``from toolz import curry as c``), and answers whether a given ``Name`` node
still refers to such an import at its use site.

Use sites are resolved through LibCST scope analysis: a name only counts when
every assignment it refers to is a recorded library import. Parameters,
locals, ``def``/``class`` names or comprehension targets with the same name
shadow the import and are left alone.
"""

import logging
from typing import Collection, Dict, Iterable, Optional, Set, Union

import libcst as cst
from libcst.metadata import Access, BaseAssignment, ImportAssignment, Scope

from slimport.core.rewriter.utils import bound_name
from slimport.core.scanners import get_full_name, imports_library
from slimport.errors import UnsupportedPatternError

logger = logging.getLogger(__name__)

ImportNode = Union[cst.Import, cst.ImportFrom]


def find_access(node: cst.Name, scope: Optional[Scope]) -> Optional[Access]:
  """
  Finds the scope access recorded for a ``Name`` node.

  Walks from ``scope`` outwards, since some positions (decorators, default
  values) are recorded in an enclosing scope.

  Args:
      node: The name node.
      scope: The scope LibCST attached to ``node``.

  Returns:
      Optional[Access]: The access, or None if ``node`` is not a reference.
  """
  current = scope
  visited: Set[int] = set()
  while current is not None and id(current) not in visited:
    visited.add(id(current))
    for access in current.accesses[node.value]:
      if access.node is node:
        return access
    current = getattr(current, "parent", None)
  return None


class BindingTracker:
  """
  Per-unit record of library bindings.

  Attributes:
      library (str): The dotted library name.
      library_aliases (Set[str]): Local names bound to the whole library.
      function_aliases (Dict[str, str]): Local name -> canonical function name.
      exported_names (Set[str]): Names listed in the module-level ``__all__``.
  """

  def __init__(self, library: str):
    self.library = library
    self.library_aliases: Set[str] = set()
    self.function_aliases: Dict[str, str] = {}
    self.exported_names: Set[str] = set()
    self._imports: Set[ImportNode] = set()
    self._rebound: Dict[ImportNode, Set[str]] = {}

  def reset(self) -> None:
    """Clears every table. Called at the start of each module."""
    self.library_aliases.clear()
    self.function_aliases.clear()
    self.exported_names.clear()
    self._imports.clear()
    self._rebound.clear()

  @property
  def has_imports(self) -> bool:
    return len(self._imports) > 0

  def matches(self, node: ImportNode) -> bool:
    """True if ``node`` imports the target library."""
    return imports_library(node, self.library)

  def is_recorded(self, node: ImportNode) -> bool:
    return node in self._imports

  def record_import(self, node: ImportNode) -> bool:
    """
    Records the bindings introduced by an import of the target library.

    Later declarations of the same local name override earlier ones.

    Args:
        node: An ``Import`` or ``ImportFrom`` statement.

    Returns:
        bool: True if the statement imports the library and was recorded.

    Raises:
        UnsupportedPatternError: For ``from lib import *``, or a dotted library
            imported whole without an ``as`` alias.
    """
    if not self.matches(node):
      return False

    if isinstance(node, cst.ImportFrom):
      if isinstance(node.names, cst.ImportStar):
        raise UnsupportedPatternError(
          f"`from {self.library} import *` re-exports an unknown set of functions and cannot be split"
        )
      for alias in node.names:
        local = bound_name(alias)
        self.function_aliases[local] = get_full_name(alias.name)
        self.library_aliases.discard(local)
    else:
      for alias in node.names:
        if get_full_name(alias.name) != self.library:
          continue
        if "." in self.library and alias.asname is None:
          raise UnsupportedPatternError(
            f"`import {self.library}` binds '{self.library.split('.')[0]}', not the library; use `import {self.library} as <name>`"
          )
        local = bound_name(alias)
        self.library_aliases.add(local)
        self.function_aliases.pop(local, None)

    self._imports.add(node)
    logger.debug(f"Recorded {self.library} import binding(s) at {type(node).__name__}")
    return True

  def record_exports(self, names: Collection[str]) -> None:
    """
    Records names re-exported through ``__all__``.

    Raises:
        UnsupportedPatternError: If the whole library is re-exported.
    """
    self.exported_names.update(names)
    reexported = sorted(self.exported_names & self.library_aliases)
    if reexported:
      raise UnsupportedPatternError(
        f"Re-exporting the whole of '{self.library}' as {reexported} cannot be split into function imports"
      )

  def is_reexported(self, local: str) -> bool:
    return local in self.exported_names

  def record_rebindings(self, scopes: Iterable[Scope]) -> None:
    """
    Checks how each scope binds the names of library imports.

    A name one scope binds to two different library objects
    (``import toolz as op`` and ``from toolz import curry as op``) cannot be
    attributed per use site and is rejected. A function alias the scope also
    binds otherwise keeps its uses as they are, and its import is replaced in
    place by the direct import. A whole-library alias has no direct import to
    be replaced by.

    Args:
        scopes: Every scope of the module.

    Raises:
        UnsupportedPatternError: On conflicting library bindings of one name, or
            if a library alias is rebound.
    """
    for scope in scopes:
      for assignment in scope.assignments:
        if not self.is_library_assignment(assignment):
          continue
        bindings = scope.assignments[assignment.name]
        targets = {self._target(a) for a in bindings if self.is_library_assignment(a)}
        if len(targets) > 1:
          described = sorted(self.library if t is None else f"{self.library}.{t}" for t in targets)
          raise UnsupportedPatternError(
            f"'{assignment.name}' is bound to {described} in the same scope; cannot tell which one each use refers to"
          )
        if all(self.is_library_assignment(a) for a in bindings):
          continue
        if isinstance(assignment.node, cst.Import):
          raise UnsupportedPatternError(
            f"'{assignment.name}' is bound to '{self.library}' and rebound in the same scope"
          )
        self._rebound.setdefault(assignment.node, set()).add(assignment.name)

  def is_rebound(self, node: ImportNode, local: str) -> bool:
    return local in self._rebound.get(node, ())

  def check_string_references(self, scopes: Iterable[Scope]) -> None:
    """
    Rejects library bindings referenced from inside string annotations.

    ``def f(x: "tz.curry")`` reads ``tz`` from a string literal, which has no
    name node to rewrite.

    Raises:
        UnsupportedPatternError: If such a reference exists.
    """
    for scope in scopes:
      for access in scope.accesses:
        if not isinstance(access.node, cst.BaseString):
          continue
        if any(self.is_library_assignment(a) for a in access.referents):
          raise UnsupportedPatternError(
            f"String annotation '{access.node.evaluated_value}' refers to the '{self.library}' import and cannot be rewritten"
          )

  def _target(self, assignment: BaseAssignment) -> Optional[str]:
    """Canonical function an import assignment binds, None for the whole library."""
    statement = assignment.node
    if not isinstance(statement, cst.ImportFrom) or isinstance(statement.names, cst.ImportStar):
      return None
    as_name = getattr(assignment, "as_name", None)
    for alias in statement.names:
      if (alias.asname is not None and alias.asname.name is as_name) or alias.name is as_name:
        return get_full_name(alias.name)
    for alias in statement.names:
      if bound_name(alias) == assignment.name:
        return get_full_name(alias.name)
    return None

  def _library_referents(self, node: cst.Name, scope: Optional[Scope]) -> Collection[BaseAssignment]:
    access = find_access(node, scope)
    if access is None:
      return ()
    referents = access.referents
    if not referents:
      return ()
    if all(self.is_library_assignment(a) for a in referents):
      return referents
    return ()

  def is_library_assignment(self, assignment: BaseAssignment) -> bool:
    """True if ``assignment`` was created by a recorded library import."""
    if not isinstance(assignment, ImportAssignment) or assignment.node not in self._imports:
      return False
    statement = assignment.node
    if isinstance(statement, cst.ImportFrom):
      return True
    # `import os, toolz` also binds `os` through the recorded statement
    return any(
      bound_name(alias) == assignment.name and get_full_name(alias.name) == self.library for alias in statement.names
    )

  def is_library_alias(self, node: cst.Name, scope: Optional[Scope]) -> bool:
    """
    True iff ``node`` names the whole library at this use site.

    Args:
        node: A name node from the tree being rewritten.
        scope: Its LibCST scope.
    """
    if node.value not in self.library_aliases:
      return False
    referents = self._library_referents(node, scope)
    return bool(referents) and all(isinstance(a.node, cst.Import) for a in referents)

  def is_function_alias(self, node: cst.Name, scope: Optional[Scope]) -> bool:
    """
    True iff ``node`` names a function imported from the library at this use site.

    Args:
        node: A name node from the tree being rewritten.
        scope: Its LibCST scope.
    """
    if node.value not in self.function_aliases:
      return False
    referents = self._library_referents(node, scope)
    return bool(referents) and all(isinstance(a.node, cst.ImportFrom) for a in referents)

  def canonical_name(self, node: cst.Name, scope: Optional[Scope]) -> str:
    """
    Returns the library's name for the function ``node`` refers to.

    The declaration the name resolves to is consulted first, so the same local
    name imported differently in two functions maps correctly. Falls back to
    the module-wide table.
    """
    for assignment in self._library_referents(node, scope):
      target = self._target(assignment)
      if target is not None:
        return target
    return self.function_aliases[node.value]
