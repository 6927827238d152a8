"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A small deterministic resolver for a fictional library named ``lib``.
- Console isolation so rich output from one test never leaks into another.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'slimport' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from slimport.config import RuntimeConfig  # noqa: E402
from slimport.core.engine import RewriteEngine  # noqa: E402
from slimport.resolver import StaticResolver  # noqa: E402
from slimport.utils.console import reset_console  # noqa: E402

LIB_TABLE = {
  "add": "lib.add",
  "map": "lib.map",
  "filter": "lib.filter",
  "compose": "lib.compose",
  "identity": "lib.identity",
  "prop": "lib.object.prop",
}


@pytest.fixture
def lib_resolver():
  """Resolver for the fictional ``lib`` package used in rewrite tests."""
  return StaticResolver(LIB_TABLE, library="lib")


@pytest.fixture
def lib_engine(lib_resolver):
  """Engine splitting imports of ``lib``."""
  return RewriteEngine(config=RuntimeConfig(library="lib"), resolver=lib_resolver)


@pytest.fixture
def toolz_engine():
  """Engine for the real default library, backed by the bundled table."""
  return RewriteEngine(config=RuntimeConfig())


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the default console after every test."""
  yield
  reset_console()
