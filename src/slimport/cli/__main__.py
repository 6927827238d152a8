"""
Main Entry Point for slimport CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `slimport.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from slimport import __version__
from slimport.cli import commands
from slimport.config import parse_cli_key_values
from slimport.utils.console import log_error, set_verbosity


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="slimport: split wholesale library imports into direct imports")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="count", default=0, help="Show bindings and injected imports")
  parser.add_argument("-q", "--quiet", action="store_true", help="Only report warnings and errors")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: REWRITE ---
  cmd_rw = subparsers.add_parser("rewrite", help="Rewrite a Python file or directory")
  cmd_rw.add_argument("path", type=Path, help="Input source file or directory")
  cmd_rw.add_argument("--out", type=Path, help="Output destination (file or dir). Files default to stdout.")
  cmd_rw.add_argument("--in-place", action="store_true", help="Overwrite input files")
  cmd_rw.add_argument(
    "--check",
    action="store_true",
    help="Write nothing; exit 1 if any file would be rewritten",
  )
  _add_resolver_arguments(cmd_rw)

  # --- Command: RESOLVE ---
  cmd_res = subparsers.add_parser("resolve", help="Show where functions would be imported from")
  cmd_res.add_argument("names", nargs="+", help="Function names (e.g. curry pipe)")
  _add_resolver_arguments(cmd_res)

  args = parser.parse_args(argv)
  set_verbosity(args.verbose, args.quiet)

  try:
    module_map = parse_cli_key_values(args.map)
  except ValueError as e:
    log_error(str(e))
    return 2

  if args.command == "rewrite":
    return commands.handle_rewrite(
      args.path,
      args.out,
      args.library,
      args.resolver,
      module_map,
      check=args.check,
      in_place=args.in_place,
    )

  elif args.command == "resolve":
    return commands.handle_resolve(args.names, args.library, args.resolver, module_map)

  return 0


def _add_resolver_arguments(cmd: argparse.ArgumentParser) -> None:
  cmd.add_argument("--library", default=None, help="Library to split (default: from toml, else 'toolz')")
  cmd.add_argument(
    "--resolver",
    choices=["static", "introspect"],
    default=None,
    help="Resolve modules from the bundled table or by importing the library (default: from toml, else static)",
  )
  cmd.add_argument(
    "--map",
    nargs="*",
    help="Extra function=module mappings (e.g. curry=toolz.functoolz)",
  )


if __name__ == "__main__":
  sys.exit(main())
