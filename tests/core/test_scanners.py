"""
Tests for the library import and ``__all__`` scanners.

Verifies that:
1. Only absolute imports of the exact library are collected.
2. Imports nested in functions are found.
3. ``__all__`` is read from list, tuple and augmented assignments.
"""

import libcst as cst

from slimport.core.scanners import (
  ExportedNamesScanner,
  LibraryImportScanner,
  get_full_name,
  imports_library,
)


def scan_imports(code: str, library: str = "toolz") -> LibraryImportScanner:
  scanner = LibraryImportScanner(library)
  cst.parse_module(code).visit(scanner)
  return scanner


def scan_exports(code: str) -> set:
  scanner = ExportedNamesScanner()
  cst.parse_module(code).visit(scanner)
  return scanner.names


def test_get_full_name_dotted():
  node = cst.parse_expression("toolz.curried.map")
  assert get_full_name(node) == "toolz.curried.map"
  assert get_full_name(None) == ""


def test_imports_library_exact_match():
  stmt = cst.parse_statement("from toolz import curry").body[0]
  assert imports_library(stmt, "toolz")
  assert not imports_library(stmt, "tool")


def test_submodule_and_relative_imports_ignored():
  code = """
import toolz.itertoolz
from toolz.functoolz import curry
from . import toolz
from .toolz import pipe
"""
  assert not scan_imports(code).found


def test_collects_nested_imports_in_order():
  code = """
import os, toolz

def f():
    from toolz import pipe
    return pipe
"""
  scanner = scan_imports(code)
  assert len(scanner.imports) == 2
  assert isinstance(scanner.imports[0], cst.Import)
  assert isinstance(scanner.imports[1], cst.ImportFrom)


def test_dotted_library():
  scanner = scan_imports("import toolz.curried as tc\nimport toolz", library="toolz.curried")
  assert len(scanner.imports) == 1


def test_exports_from_list_and_tuple():
  assert scan_exports("__all__ = ['a', \"b\"]") == {"a", "b"}
  assert scan_exports("__all__ = ('c',)") == {"c"}


def test_exports_augmented_and_annotated():
  code = """
__all__: list = ["a"]
__all__ += ["b"]
"""
  assert scan_exports(code) == {"a", "b"}


def test_exports_ignore_non_literals_and_nested_scopes():
  code = """
__all__ = [name, "kept"]

def f():
    __all__ = ["hidden"]
"""
  assert scan_exports(code) == {"kept"}
