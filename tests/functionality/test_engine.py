"""
Tests for RewriteEngine.

Verifies that:
1. Whole-module rewrites produce direct imports for every function used.
2. No import of the library itself survives a rewrite.
3. Each function is imported at most once, whatever alias reached it.
4. Rewriting is idempotent.
5. `run()` reports failures instead of raising them.
"""

import textwrap

import pytest

import slimport
from slimport import ConversionResult, RewriteEngine, RuntimeConfig
from slimport.errors import UnresolvableNameError, UnsupportedPatternError


def src(code: str) -> str:
  return textwrap.dedent(code).lstrip()


MIXED_USAGE = src(
  """
  \"\"\"Pipeline helpers.\"\"\"
  from __future__ import annotations

  import toolz
  import toolz as tz
  from toolz import curry, pipe as run, valmap

  @curry
  def scale(k, x):
      return k * x

  def process(data):
      doubled = valmap(scale(2), data)
      return run(doubled, tz.keyfilter(bool), toolz.curry(len))
  """
)


def test_rewrites_mixed_usage(toolz_engine):
  expected = src(
    """
    \"\"\"Pipeline helpers.\"\"\"
    from __future__ import annotations
    from toolz.functoolz import curry
    from toolz.dicttoolz import valmap
    from toolz.dicttoolz import keyfilter
    from toolz.functoolz import pipe

    @curry
    def scale(k, x):
        return k * x

    def process(data):
        doubled = valmap(scale(2), data)
        return pipe(doubled, keyfilter(bool), curry(len))
    """
  )
  assert toolz_engine.rewrite(MIXED_USAGE) == expected


def test_no_library_import_remains(toolz_engine):
  result = toolz_engine.rewrite(MIXED_USAGE)
  assert "import toolz\n" not in result
  assert "from toolz import" not in result
  assert "tz." not in result


def test_one_import_per_function(toolz_engine):
  code = src(
    """
    import toolz
    import toolz as tz
    from toolz import curry, curry as c

    a = curry(f)
    b = c(g)
    d = tz.curry(h)
    e = toolz.curry
    """
  )
  result = toolz_engine.rewrite(code)
  assert result.count("import curry") == 1
  assert result.startswith("from toolz.functoolz import curry\n")


def test_rewrite_is_idempotent(toolz_engine):
  once = toolz_engine.rewrite(MIXED_USAGE)
  assert toolz_engine.rewrite(once) == once


def test_module_without_library_is_unchanged(toolz_engine):
  code = "import os\nfrom toolz.itertoolz import unique\nprint(unique(os.listdir()))\n"
  assert toolz_engine.rewrite(code) == code

  result = toolz_engine.run(code)
  assert result.success
  assert not result.changed
  assert result.code == code


def test_run_reports_injected_imports(toolz_engine):
  result = toolz_engine.run("from toolz import first as head\nx = head(xs)\n")
  assert isinstance(result, ConversionResult)
  assert result.success
  assert result.changed
  assert result.injected == {"first": "first"}
  assert result.code == "from toolz.itertoolz import first\nx = first(xs)\n"


def test_run_reports_wildcard(toolz_engine):
  result = toolz_engine.run("from toolz import *\n")
  assert not result.success
  assert result.code == ""
  assert "import *" in result.errors[0]


def test_run_reports_syntax_errors(toolz_engine):
  result = toolz_engine.run("def broken(:\n")
  assert not result.success
  assert result.has_errors
  assert result.errors[0].startswith("Parse Error")


def test_unknown_function_is_fatal(toolz_engine):
  with pytest.raises(UnresolvableNameError) as excinfo:
    toolz_engine.rewrite("import toolz\ntoolz.not_a_function(1)\n")
  assert excinfo.value.name == "not_a_function"
  assert excinfo.value.library == "toolz"


def test_unused_unknown_import_is_dropped(toolz_engine):
  assert toolz_engine.rewrite("from toolz import not_a_function\nx = 1\n") == "x = 1\n"


def test_stdlib_reexports_in_table(toolz_engine):
  code = "from toolz import reduce\ntotal = reduce(add, xs)\n"
  assert toolz_engine.rewrite(code) == "from functools import reduce\ntotal = reduce(add, xs)\n"


def test_module_map_override():
  engine = RewriteEngine(config=RuntimeConfig(module_map={"curry": "toolz.curried"}))
  result = engine.rewrite("import toolz as tz\nf = tz.curry(g)\n")
  assert result == "from toolz.curried import curry\nf = curry(g)\n"


def test_dotted_library(lib_resolver):
  engine = RewriteEngine(config=RuntimeConfig(library="lib.sub"), resolver=lib_resolver)
  result = engine.rewrite("import lib.sub as s\nimport lib\ns.add(lib.version)\n")
  assert result == "from lib.add import add\nimport lib\nadd(lib.version)\n"


def test_dotted_library_without_alias_is_fatal(lib_resolver):
  engine = RewriteEngine(config=RuntimeConfig(library="lib.sub"), resolver=lib_resolver)
  with pytest.raises(UnsupportedPatternError):
    engine.rewrite("import lib.sub\nlib.sub.add(1)\n")


def test_engine_is_reusable(lib_engine):
  first = lib_engine.rewrite("from lib import add\nadd(1)\n")
  second = lib_engine.rewrite("import lib\nlib.map(f)\n")
  assert first == "from lib.add import add\nadd(1)\n"
  assert second == "from lib.map import map\nmap(f)\n"


def test_package_level_rewrite_helper():
  assert slimport.rewrite("import toolz as tz\ny = tz.pipe(x, f)\n") == "from toolz.functoolz import pipe\ny = pipe(x, f)\n"
