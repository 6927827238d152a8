"""
Tests for ImportMemoizer.

Verifies that:
1. Each function is resolved and imported at most once.
2. Every request returns a distinct node naming the same import.
3. Taken names are avoided with ``_name``, ``_name_2``, ...
4. Resolver failures propagate.
"""

import libcst as cst
import pytest

from slimport.core.rewriter.memoizer import ImportMemoizer
from slimport.errors import UnresolvableNameError
from slimport.resolver import StaticResolver


class CountingResolver(StaticResolver):
  """Records how often each name is resolved."""

  def __init__(self, table):
    super().__init__(table, library="lib")
    self.calls = []

  def resolve(self, name: str) -> str:
    self.calls.append(name)
    return super().resolve(name)


def render(statements) -> str:
  return cst.Module(body=statements).code


def test_injects_once_per_function():
  resolver = CountingResolver({"add": "lib.add"})
  memo = ImportMemoizer(resolver, "lib")

  first = memo.inject("add")
  second = memo.inject("add")

  assert first.value == second.value == "add"
  assert first is not second
  assert resolver.calls == ["add"]
  assert render(memo.statements()) == "from lib.add import add\n"


def test_statements_in_first_use_order():
  memo = ImportMemoizer(StaticResolver({"add": "lib.add", "map": "lib.map"}, library="lib"), "lib")
  memo.inject("map")
  memo.inject("add")
  memo.inject("map")
  assert render(memo.statements()) == "from lib.map import map\nfrom lib.add import add\n"
  assert memo.injected == {"map": "map", "add": "add"}


def test_taken_names_get_prefixed():
  memo = ImportMemoizer(StaticResolver({"add": "lib.add"}, library="lib"), "lib", taken_names={"add"})
  ref = memo.inject("add")
  assert ref.value == "_add"
  assert render(memo.statements()) == "from lib.add import add as _add\n"


def test_prefixed_name_also_taken():
  memo = ImportMemoizer(StaticResolver({"add": "lib.add"}, library="lib"), "lib")
  memo.reserve(["add", "_add", "_add_2"])
  assert memo.inject("add").value == "_add_3"


def test_injected_names_do_not_collide():
  memo = ImportMemoizer(StaticResolver({"prop": "lib.object.prop", "_prop": "lib._prop"}, library="lib"), "lib")
  memo.reserve(["prop"])
  assert memo.inject("prop").value == "_prop"
  assert memo.inject("_prop").value == "__prop"


def test_nested_module_path():
  memo = ImportMemoizer(StaticResolver({"prop": "lib.object.prop"}, library="lib"), "lib")
  memo.inject("prop")
  assert render(memo.statements()) == "from lib.object.prop import prop\n"


def test_explicit_reexport_keeps_alias():
  memo = ImportMemoizer(StaticResolver({"add": "lib.add"}, library="lib"), "lib")
  memo.inject("add")
  memo.mark_reexported("add")
  assert render(memo.statements()) == "from lib.add import add as add\n"


def test_unknown_name_raises():
  memo = ImportMemoizer(StaticResolver({}, library="lib"), "lib")
  with pytest.raises(UnresolvableNameError) as excinfo:
    memo.inject("nope")
  assert excinfo.value.name == "nope"
  assert memo.statements() == []


def test_resolving_to_library_root_raises():
  memo = ImportMemoizer(StaticResolver({"add": "lib"}, library="lib"), "lib")
  with pytest.raises(UnresolvableNameError, match="resolved back"):
    memo.inject("add")


def test_module_for_resolves_without_queueing():
  resolver = CountingResolver({"add": "lib.add"})
  memo = ImportMemoizer(resolver, "lib")

  assert memo.module_for("add") == "lib.add"
  assert memo.statements() == []
  assert memo.injected == {}

  memo.inject("add")
  assert resolver.calls == ["add"]
  assert render(memo.statements()) == "from lib.add import add\n"
