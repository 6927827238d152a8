"""
Base Import Rewriter Logic.

Defines the base transformer: per-module state reset, the pre-scan that
records library bindings before any use site is visited, name availability
for injected imports, and the final insertion of the injected imports.
"""

from typing import Iterable, Optional, Set, Union

import libcst as cst
from libcst.metadata import ExpressionContextProvider, ParentNodeProvider, Scope, ScopeProvider

from slimport.core.rewriter.bindings import BindingTracker
from slimport.core.rewriter.context import RewriteContext
from slimport.core.rewriter.memoizer import ImportMemoizer
from slimport.core.rewriter.positions import Position, classify
from slimport.core.rewriter.utils import import_insertion_index
from slimport.core.scanners import ExportedNamesScanner, LibraryImportScanner
from slimport.resolver.base import ModuleResolver


class BaseImportRewriter(cst.CSTTransformer):
  """
  Base class for splitting library imports.

  Must be run through a ``libcst.MetadataWrapper`` so scope, parent and
  expression-context metadata are available.
  """

  METADATA_DEPENDENCIES = (ScopeProvider, ParentNodeProvider, ExpressionContextProvider)

  def __init__(self, library: str, resolver: ModuleResolver):
    """
    Initializes the rewriter.

    Args:
        library: Dotted name of the library whose imports are split.
        resolver: Maps function names to the modules defining them.
    """
    super().__init__()
    self.library = library
    self.resolver = resolver
    self.context = RewriteContext(library, resolver)

  @property
  def bindings(self) -> BindingTracker:
    return self.context.bindings

  @property
  def imports(self) -> ImportMemoizer:
    return self.context.imports

  @property
  def changed(self) -> bool:
    """True if the last visited module imported the library."""
    return self.bindings.has_imports

  def visit_Module(self, node: cst.Module) -> bool:
    """
    Starts a fresh context and records every library binding up front.

    Returns False (skip the module) when the library is not imported.
    """
    self.context = RewriteContext(self.library, self.resolver)

    scanner = LibraryImportScanner(self.library)
    node.visit(scanner)
    for statement in scanner.imports:
      self.bindings.record_import(statement)

    if not self.bindings.has_imports:
      return False

    exports = ExportedNamesScanner()
    node.visit(exports)
    self.bindings.record_exports(exports.names)

    scopes = self._scopes()
    self.bindings.record_rebindings(scopes)
    self.bindings.check_string_references(scopes)
    self.imports.reserve(self._taken_names(scopes))
    return True

  def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
    """
    Inserts the injected imports after the docstring and ``__future__`` imports.
    """
    injections = self.imports.statements()
    if not injections:
      return updated_node

    body = list(updated_node.body)
    insert_idx = import_insertion_index(updated_node)
    return updated_node.with_changes(body=body[:insert_idx] + injections + body[insert_idx:])

  def _scopes(self) -> Set[Scope]:
    return {scope for scope in self.metadata[ScopeProvider].values() if scope is not None}

  def _taken_names(self, scopes: Iterable[Scope]) -> Set[str]:
    """
    Collects names an injected import must not reuse.

    Every name bound or read anywhere in the module counts, except bindings
    made by the library imports that are about to be removed.
    """
    taken: Set[str] = set()

    for scope in scopes:
      for assignment in scope.assignments:
        if not self.bindings.is_library_assignment(assignment):
          taken.add(assignment.name.split(".")[0])
      for access in scope.accesses:
        if not isinstance(access.node, cst.Name):
          continue
        referents = access.referents
        if referents and all(self.bindings.is_library_assignment(a) for a in referents):
          continue
        taken.add(access.node.value)

    return taken

  def _scope_of(self, node: cst.CSTNode) -> Optional[Scope]:
    return self.get_metadata(ScopeProvider, node, None)

  def _position_of(self, node: cst.Name) -> Position:
    parent = self.get_metadata(ParentNodeProvider, node, None)
    grandparent = self.get_metadata(ParentNodeProvider, parent, None) if parent is not None else None
    return classify(node, parent, grandparent)

  def _is_function_alias(self, node: Union[cst.BaseExpression, cst.CSTNode, None]) -> bool:
    return isinstance(node, cst.Name) and self.bindings.is_function_alias(node, self._scope_of(node))

  def _is_library_alias(self, node: Union[cst.BaseExpression, cst.CSTNode, None]) -> bool:
    return isinstance(node, cst.Name) and self.bindings.is_library_alias(node, self._scope_of(node))

  def _inject_alias(self, node: cst.Name) -> cst.Name:
    """Returns the injected reference for a function alias ``node``."""
    canonical = self.bindings.canonical_name(node, self._scope_of(node))
    return self.imports.inject(canonical)
