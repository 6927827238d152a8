"""
Table-driven resolver.

Function-to-module tables are bundled as JSON files under ``resolver/data``
(one file per library, grouped by module) and can be extended with explicit
overrides from configuration.
"""

import json
from importlib.resources import files
from pathlib import Path
from typing import Dict, Mapping, Optional

from slimport.errors import UnresolvableNameError
from slimport.resolver.base import ModuleResolver


def resolve_data_dir() -> Path:
  """
  Locates the directory holding the bundled resolver tables.

  Returns:
      Path: The absolute path to the 'data' directory.
  """
  local_path = Path(__file__).parent / "data"
  if local_path.exists():
    return local_path

  return Path(str(files("slimport.resolver") / "data"))


def load_bundled_table(library: str) -> Dict[str, str]:
  """
  Loads the bundled table for ``library`` as a flat ``name -> module`` dict.

  Args:
      library: The library name (e.g. "toolz").

  Returns:
      Dict[str, str]: The mapping. Empty if no table is bundled for the library.

  Raises:
      ValueError: If the JSON file exists but is malformed.
  """
  fpath = resolve_data_dir() / f"{library}.json"
  if not fpath.exists():
    return {}

  with open(fpath, "r", encoding="utf-8") as f:
    content = json.load(f)

  modules = content.get("modules")
  if not isinstance(modules, dict):
    raise ValueError(f"Resolver table {fpath.name} has no 'modules' section")

  table: Dict[str, str] = {}
  for module_path, names in modules.items():
    for name in names:
      table[name] = module_path
  return table


class StaticResolver(ModuleResolver):
  """
  Resolves names from an in-memory table.

  Attributes:
      library (str): The library the table describes.
      table (Dict[str, str]): Function name -> module path.
  """

  def __init__(self, table: Mapping[str, str], library: Optional[str] = None):
    self.table = dict(table)
    self.library = library or ""

  @classmethod
  def for_library(cls, library: str, overrides: Optional[Mapping[str, str]] = None) -> "StaticResolver":
    """
    Builds a resolver from the bundled table merged with ``overrides``.

    Args:
        library: The library name.
        overrides: Extra entries; these win over the bundled table.

    Returns:
        StaticResolver: The configured resolver.
    """
    table = load_bundled_table(library)
    table.update(overrides or {})
    return cls(table, library=library)

  def resolve(self, name: str) -> str:
    try:
      return self.table[name]
    except KeyError:
      raise UnresolvableNameError(name, self.library or None, "not in resolver table") from None
