"""
Utilities for the Import Rewriter.

Static helpers for reading import aliases, building CST nodes and locating the
insertion point for new imports.
"""

from typing import Optional, Union

import libcst as cst

from slimport.core.scanners import get_full_name


def create_dotted_name(name_str: str) -> Union[cst.Name, cst.Attribute]:
  """
  Creates a CST node structure for a dotted path string.

  Args:
      name_str (str): Dot-separated path (e.g. "toolz.functoolz").

  Returns:
      Union[cst.Name, cst.Attribute]: The constructed AST node.
  """
  parts = name_str.split(".")
  node = cst.Name(parts[0])
  for part in parts[1:]:
    node = cst.Attribute(value=node, attr=cst.Name(part))
  return node


def bound_name(alias: cst.ImportAlias) -> str:
  """
  Returns the local name an import alias binds.

  ``import toolz as tz`` binds ``tz``; ``import toolz.curried`` binds ``toolz``;
  ``from toolz import curry`` binds ``curry``.

  Args:
      alias: The CST ImportAlias node.

  Returns:
      str: The bound identifier.
  """
  if alias.asname:
    target = alias.asname.name
    if isinstance(target, cst.Name):
      return target.value
  return get_full_name(alias.name).split(".")[0]


def import_from_node(
  module_path: str,
  name: str,
  asname: Optional[str] = None,
  explicit_reexport: bool = False,
) -> cst.ImportFrom:
  """
  Builds ``from <module_path> import <name> [as <asname>]``.

  Args:
      module_path: Dotted module path.
      name: Imported name.
      asname: Optional local alias (omitted when equal to ``name``).
      explicit_reexport: Keep ``as <name>`` even when redundant.

  Returns:
      cst.ImportFrom: The import statement.
  """
  alias_node = None
  if asname and (asname != name or explicit_reexport):
    alias_node = cst.AsName(name=cst.Name(asname))
  elif explicit_reexport:
    alias_node = cst.AsName(name=cst.Name(name))

  return cst.ImportFrom(
    module=create_dotted_name(module_path),
    names=[cst.ImportAlias(name=cst.Name(name), asname=alias_node)],
  )


def make_import_from(
  module_path: str,
  name: str,
  asname: Optional[str] = None,
  explicit_reexport: bool = False,
) -> cst.SimpleStatementLine:
  """Same as `import_from_node`, wrapped in its own statement line."""
  return cst.SimpleStatementLine(body=[import_from_node(module_path, name, asname, explicit_reexport)])


def is_docstring(node: cst.CSTNode, idx: int) -> bool:
  """
  Determines if a statement node represents a module docstring.

  Args:
      node: The statement node from the module body.
      idx: The index of this statement in the body list.

  Returns:
      bool: True if it is a docstring (string expression at index 0).
  """
  if idx != 0:
    return False
  if isinstance(node, cst.SimpleStatementLine):
    if len(node.body) == 1 and isinstance(node.body[0], cst.Expr):
      expr = node.body[0].value
      if isinstance(expr, (cst.SimpleString, cst.ConcatenatedString)):
        return True
  return False


def is_future_import(node: cst.CSTNode) -> bool:
  """
  Determines if a statement is a `from __future__ import ...` directive.

  Args:
      node: The statement node.

  Returns:
      bool: True if it is a future import.
  """
  if isinstance(node, cst.SimpleStatementLine):
    for small_stmt in node.body:
      if isinstance(small_stmt, cst.ImportFrom):
        if small_stmt.module and isinstance(small_stmt.module, cst.Name):
          if small_stmt.module.value == "__future__":
            return True
  return False


def import_insertion_index(module: cst.Module) -> int:
  """
  Finds where injected imports go: after the docstring and ``__future__`` imports.

  Args:
      module: The module being rewritten.

  Returns:
      int: Index into ``module.body``.
  """
  insert_idx = 0
  for i, stmt in enumerate(module.body):
    if is_docstring(stmt, i) or is_future_import(stmt):
      insert_idx = i + 1
      continue
    break
  return insert_idx
