"""
AST Scanners for Library Import Detection.

LibCST visitors that locate the statements importing the target library and
the names a module re-exports through ``__all__``. They run before rewriting
so that bindings are known before any use site is visited, regardless of
where the import appears in the file.
"""

from typing import List, Set, Union

import libcst as cst


def get_full_name(node: Union[cst.Name, cst.Attribute, None]) -> str:
  """
  Recursively resolves a CST Name or Attribute chain to a dot-separated string.

  Args:
    node: The CST node representing the identifier.

  Returns:
    str: The dotted representation (e.g., "toolz.curried").
    Returns an empty string if the node is not a Name/Attribute chain.

  Example:
    >>> get_full_name(cst.Attribute(value=cst.Name("toolz"), attr=cst.Name("curried")))
    'toolz.curried'
  """
  if isinstance(node, cst.Name):
    return node.value
  elif isinstance(node, cst.Attribute):
    return f"{get_full_name(node.value)}.{node.attr.value}"
  return ""


def imports_library(node: Union[cst.Import, cst.ImportFrom], library: str) -> bool:
  """
  Checks whether an import statement refers to ``library`` itself.

  Submodules (``import toolz.itertoolz``) and relative imports do not count.

  Args:
    node: An ``Import`` or ``ImportFrom`` node.
    library: The dotted library name.

  Returns:
    bool: True if the statement imports the library.
  """
  if isinstance(node, cst.ImportFrom):
    if node.relative or node.module is None:
      return False
    return get_full_name(node.module) == library
  return any(get_full_name(alias.name) == library for alias in node.names)


class LibraryImportScanner(cst.CSTVisitor):
  """
  Collects every statement that imports the target library, at any depth.

  Attributes:
    library (str): The dotted library name.
    imports (List[Union[cst.Import, cst.ImportFrom]]): Matching statements in source order.
  """

  def __init__(self, library: str) -> None:
    self.library = library
    self.imports: List[Union[cst.Import, cst.ImportFrom]] = []

  @property
  def found(self) -> bool:
    """True if at least one matching import was seen."""
    return len(self.imports) > 0

  def visit_Import(self, node: cst.Import) -> bool:
    if imports_library(node, self.library):
      self.imports.append(node)
    return False

  def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
    if imports_library(node, self.library):
      self.imports.append(node)
    return False


class ExportedNamesScanner(cst.CSTVisitor):
  """
  Reads the string entries of a module-level ``__all__``.

  Handles ``__all__ = [...]``, ``__all__ = (...)``, ``__all__ += [...]`` and
  annotated assignments. Non-literal entries are ignored.

  Attributes:
    names (Set[str]): Exported names.
  """

  def __init__(self) -> None:
    self.names: Set[str] = set()

  def visit_Module(self, node: cst.Module) -> bool:
    for stmt in node.body:
      if not isinstance(stmt, cst.SimpleStatementLine):
        continue
      for small in stmt.body:
        self._collect(small)
    return False

  def _collect(self, small: cst.BaseSmallStatement) -> None:
    value = None
    if isinstance(small, cst.Assign):
      if any(self._is_dunder_all(t.target) for t in small.targets):
        value = small.value
    elif isinstance(small, (cst.AugAssign, cst.AnnAssign)):
      if self._is_dunder_all(small.target):
        value = small.value

    if isinstance(value, (cst.List, cst.Tuple, cst.Set)):
      for element in value.elements:
        if isinstance(element.value, cst.SimpleString):
          text = element.value.evaluated_value
          if isinstance(text, str):
            self.names.add(text)

  @staticmethod
  def _is_dunder_all(target: cst.BaseExpression) -> bool:
    return isinstance(target, cst.Name) and target.value == "__all__"
