"""
Tests for the node rewriting rules.

Verifies that:
1. Callees and call arguments naming a function alias become direct references.
2. ``alias.func`` collapses to ``func``.
3. Dict keys and values are rewritten.
4. Other bare references go through the generic name rule.
5. Bare references to the whole library become ``None``.
6. Mutating the library namespace is rejected.
"""

import textwrap

import pytest

from slimport.errors import UnsupportedPatternError


def rw(engine, code: str) -> str:
  """Rewrites dedented code."""
  return engine.rewrite(textwrap.dedent(code).lstrip())


def test_nested_calls(lib_engine):
  code = """
  from lib import add, map
  map(add(1), [1, 2, 3])
  """
  assert rw(lib_engine, code) == ("from lib.add import add\nfrom lib.map import map\nmap(add(1), [1, 2, 3])\n")


def test_member_access_call(lib_engine):
  code = """
  import lib as R
  R.add(1, 2)
  """
  assert rw(lib_engine, code) == "from lib.add import add\nadd(1, 2)\n"


def test_aliased_function_is_renamed(lib_engine):
  code = """
  from lib import add as plus
  total = plus(1, 2)
  """
  assert rw(lib_engine, code) == "from lib.add import add\ntotal = add(1, 2)\n"


def test_function_passed_as_argument(lib_engine):
  code = """
  from lib import identity as ident
  result = apply(ident, key=ident)
  """
  assert rw(lib_engine, code) == "from lib.identity import identity\nresult = apply(identity, key=identity)\n"


def test_keyword_label_is_not_a_reference(lib_engine):
  code = """
  from lib import add
  result = call(add=add)
  """
  assert rw(lib_engine, code) == "from lib.add import add\nresult = call(add=add)\n"


def test_member_access_without_call(lib_engine):
  code = """
  import lib
  op = lib.compose
  """
  assert rw(lib_engine, code) == "from lib.compose import compose\nop = compose\n"


def test_member_access_as_argument(lib_engine):
  code = """
  import lib as R
  R.map(R.identity, xs)
  """
  assert rw(lib_engine, code) == ("from lib.map import map\nfrom lib.identity import identity\nmap(identity, xs)\n")


def test_dict_keys_and_values(lib_engine):
  code = """
  from lib import add as a, map as m
  table = {a: 1, "m": m}
  """
  assert rw(lib_engine, code) == ('from lib.add import add\nfrom lib.map import map\ntable = {add: 1, "m": map}\n')


def test_generic_references(lib_engine):
  code = """
  from lib import add as a, compose as c
  pair = [a, (c,)]
  flag = a if c else None
  """
  expected = """
  from lib.add import add
  from lib.compose import compose
  pair = [add, (compose,)]
  flag = add if compose else None
  """
  assert rw(lib_engine, code) == textwrap.dedent(expected).lstrip()


def test_attribute_of_function_alias(lib_engine):
  code = """
  from lib import add as a
  doc = a.__doc__
  """
  assert rw(lib_engine, code) == "from lib.add import add\ndoc = add.__doc__\n"


def test_decorator(lib_engine):
  code = """
  import lib as R

  @R.identity
  def f(x):
      return x
  """
  result = rw(lib_engine, code)
  assert result.startswith("from lib.identity import identity\n")
  assert "@identity\ndef f(x):" in result
  assert "R" not in result


def test_bare_library_reference_becomes_none(lib_engine):
  code = """
  import lib as R
  modules = [R]
  """
  assert rw(lib_engine, code) == "modules = [None]\n"


def test_library_passed_to_call_becomes_none(lib_engine):
  code = """
  import lib as R
  inspect(R)
  """
  assert rw(lib_engine, code) == "inspect(None)\n"


def test_assigning_library_attribute_is_fatal(lib_engine):
  code = """
  import lib as R
  R.add = None
  """
  with pytest.raises(UnsupportedPatternError, match="mutates"):
    rw(lib_engine, code)


def test_deleting_library_attribute_is_fatal(lib_engine):
  code = """
  import lib as R
  del R.add
  """
  with pytest.raises(UnsupportedPatternError):
    rw(lib_engine, code)


def test_deleting_library_alias_is_fatal(lib_engine):
  code = """
  import lib as R
  del R
  """
  with pytest.raises(UnsupportedPatternError, match="del R"):
    rw(lib_engine, code)


def test_other_modules_in_import_statement_survive(lib_engine):
  code = """
  import os, lib
  lib.add(os.sep)
  """
  assert rw(lib_engine, code) == "from lib.add import add\nimport os\nadd(os.sep)\n"


def test_unused_import_is_removed(lib_engine):
  code = """
  from lib import add
  x = 1
  """
  assert rw(lib_engine, code) == "x = 1\n"


def test_import_inside_function(lib_engine):
  code = """
  def f(xs):
      from lib import map
      return list(map(str, xs))
  """
  expected = """
  from lib.map import map
  def f(xs):
      return list(map(str, xs))
  """
  assert rw(lib_engine, code) == textwrap.dedent(expected).lstrip()


def test_import_after_use_site(lib_engine):
  code = """
  def f():
      return add(1, 2)

  from lib import add
  """
  assert rw(lib_engine, code) == "from lib.add import add\ndef f():\n    return add(1, 2)\n"
