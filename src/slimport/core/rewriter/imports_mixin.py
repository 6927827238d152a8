"""
Import Logic Mixin.

Removes the statements that import the target library and turns re-exports
of its functions into re-exports of the injected direct imports.

Python has no dedicated re-export syntax. A named import counts as a
re-export when it uses the redundant alias form (``from toolz import curry as
curry``) or when its local name is listed in the module-level ``__all__``.
"""

from typing import List, Optional, Union

import libcst as cst

from slimport.core.rewriter.utils import bound_name, import_from_node
from slimport.core.scanners import get_full_name


class ImportsMixin(cst.CSTTransformer):
  """
  Mixin for processing ``import`` and ``from ... import`` statements.
  """

  def visit_Import(self, node: cst.Import) -> bool:
    # Names inside import statements are bindings, never use sites
    return False

  def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
    return False

  def leave_Import(self, original_node: cst.Import, updated_node: cst.Import) -> Union[cst.Import, cst.RemovalSentinel]:
    """
    Drops the library from ``import ...`` statements.

    Other modules imported by the same statement (``import os, toolz``) stay.
    """
    if not self.bindings.is_recorded(original_node):
      return updated_node

    remaining = [alias for alias in updated_node.names if get_full_name(alias.name) != self.library]
    if not remaining:
      return cst.RemoveFromParent()

    remaining[-1] = remaining[-1].with_changes(comma=cst.MaybeSentinel.DEFAULT)
    return updated_node.with_changes(names=remaining)

  def leave_ImportFrom(
    self, original_node: cst.ImportFrom, updated_node: cst.ImportFrom
  ) -> Union[cst.BaseSmallStatement, cst.FlattenSentinel, cst.RemovalSentinel]:
    """
    Removes ``from <library> import ...``.

    Re-exported names stay bound, now to the injected direct import. A name
    the same scope also binds otherwise is imported directly right here, so
    the statement keeps its place in the control flow (``try`` / ``except
    ImportError`` fallbacks, conditional imports).
    """
    if not self.bindings.is_recorded(original_node):
      return updated_node

    replacements: List[cst.BaseSmallStatement] = []
    for alias in original_node.names:
      canonical = get_full_name(alias.name)
      local = bound_name(alias)
      if self.bindings.is_rebound(original_node, local):
        replacements.append(
          import_from_node(
            self.imports.module_for(canonical),
            canonical,
            local,
            explicit_reexport=alias.asname is not None and self._is_reexport(alias),
          )
        )
        continue
      if not self._is_reexport(alias):
        continue
      binding = self.bind_injected(canonical, local, explicit=alias.asname is not None)
      if binding is not None:
        replacements.append(binding)

    if not replacements:
      return cst.RemoveFromParent()
    if len(replacements) == 1:
      return replacements[0]
    return cst.FlattenSentinel(replacements)

  def bind_injected(self, imported: str, exported: str, explicit: bool = False) -> Optional[cst.Assign]:
    """
    Binds the injected import of ``imported`` to ``exported``.

    When the injected import already binds ``exported`` no statement is
    needed; otherwise an assignment ``exported = <injected>`` is returned.

    Args:
        imported: Canonical function name.
        exported: Name the module exports it as.
        explicit: The source used the ``as`` form; keep it on the injected import.

    Returns:
        Optional[cst.Assign]: The binding statement, if one is needed.
    """
    reference = self.imports.inject(imported)
    if reference.value == exported:
      if explicit and imported == exported:
        self.imports.mark_reexported(imported)
      return None
    return cst.Assign(targets=[cst.AssignTarget(target=cst.Name(exported))], value=reference)

  def _is_reexport(self, alias: cst.ImportAlias) -> bool:
    local = bound_name(alias)
    if alias.asname is not None and local == get_full_name(alias.name):
      return True
    return self.bindings.is_reexported(local)
