"""
Resolve Command Handler.

Prints which module each requested function would be imported from, using the
same resolver configuration as `slimport rewrite`.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from slimport.config import RuntimeConfig
from slimport.errors import UnresolvableNameError
from slimport.resolver import build_resolver
from slimport.utils.console import console, log_error


def handle_resolve(
  names: List[str],
  library: Optional[str],
  resolver: Optional[str],
  module_map: Dict[str, str],
  search_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'resolve' command execution.

  Args:
      names: Canonical function names to look up.
      library: Override for the library.
      resolver: Override for the resolver kind.
      module_map: Extra ``function -> module`` entries.
      search_path: Directory to search for pyproject.toml (defaults to cwd).

  Returns:
      int: 0 if every name resolved, 1 otherwise.
  """
  try:
    config = RuntimeConfig.load(library=library, resolver=resolver, module_map=module_map, search_path=search_path)
    module_resolver = build_resolver(config)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  table = Table(title=f"Direct imports for '{config.library}'")
  table.add_column("Function", style="cyan")
  table.add_column("Import", style="green")

  exit_code = 0
  for name in names:
    try:
      module_path = module_resolver.resolve(name)
      table.add_row(name, f"from {module_path} import {name}")
    except UnresolvableNameError as e:
      table.add_row(name, f"[red]{e}[/red]")
      exit_code = 1

  console.print(table)
  return exit_code
