"""
Runtime Configuration Store.

Resolves which library triggers rewriting and how function names are mapped
to the modules that define them. Values come from ``[tool.slimport]`` in the
nearest ``pyproject.toml`` and are overridden by CLI arguments.
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_LIBRARY = "toolz"

_DOTTED_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class RuntimeConfig(BaseModel):
  """
  Configuration container for the rewrite engine.
  """

  library: str = Field(DEFAULT_LIBRARY, description="Importable name of the library whose imports are split.")
  resolver: Literal["static", "introspect"] = Field(
    "static", description="How function names are mapped to modules (bundled table or runtime import)."
  )
  module_map: Dict[str, str] = Field(
    default_factory=dict, description="Extra 'function -> module' entries overriding the resolver table."
  )

  @field_validator("library")
  @classmethod
  def validate_library(cls, v: str) -> str:
    """
    Ensures the library is a valid dotted module path.

    Args:
        v (str): The raw library name.

    Returns:
        str: The stripped library name.

    Raises:
        ValueError: If the name is not an importable dotted path.
    """
    v_clean = v.strip()
    if not _DOTTED_IDENTIFIER.match(v_clean):
      raise ValueError(f"Invalid library name: '{v}'. Expected a dotted module path like 'toolz'.")
    return v_clean

  @field_validator("module_map")
  @classmethod
  def validate_module_map(cls, v: Dict[str, str]) -> Dict[str, str]:
    """
    Ensures every override maps an identifier to a dotted module path.

    Args:
        v (Dict[str, str]): Raw mapping.

    Returns:
        Dict[str, str]: The validated mapping.
    """
    for name, module in v.items():
      if not name.isidentifier():
        raise ValueError(f"Invalid function name in module_map: '{name}'")
      if not isinstance(module, str) or not _DOTTED_IDENTIFIER.match(module):
        raise ValueError(f"Invalid module path for '{name}': '{module}'")
    return v

  @classmethod
  def load(
    cls,
    library: Optional[str] = None,
    resolver: Optional[str] = None,
    module_map: Optional[Dict[str, str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        library (Optional[str]): Override for the target library.
        resolver (Optional[str]): Override for the resolver kind.
        module_map (Optional[Dict]): Additional CLI module mappings.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_library = library or toml_config.get("library", DEFAULT_LIBRARY)
    final_resolver = resolver or toml_config.get("resolver", "static")

    toml_map = toml_config.get("module_map", {})
    cli_map = module_map or {}
    final_map = {**toml_map, **cli_map}

    return cls(library=final_library, resolver=final_resolver, module_map=final_map)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the ``[tool.slimport]`` table.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {toml_path}: {e}") from e

      tool_section = data.get("tool", {})
      return tool_section.get("slimport", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Args:
      items (Optional[List[str]]): Raw CLI strings directly from argparse.

  Returns:
      Dict[str, str]: Parsed dictionary.

  Raises:
      ValueError: If an item has no '=' separator.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      raise ValueError(f"Invalid mapping format: '{item}'. Expected 'key=value'.")

    key, val_str = item.split("=", 1)
    config[key.strip()] = val_str.strip()

  return config
