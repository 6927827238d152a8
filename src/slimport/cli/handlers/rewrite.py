"""
Rewrite Command Handler.

This module implements the logic for the `slimport rewrite` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Engine construction.
3. Rewriting a single file or every ``*.py`` file under a directory.
4. Output writing (destination, in place, or stdout) and the batch summary.

A failure in one file never stops the others.
"""

from pathlib import Path
from typing import Dict, Optional

from rich.table import Table

from slimport.config import RuntimeConfig
from slimport.core.conversion_result import ConversionResult
from slimport.core.engine import RewriteEngine
from slimport.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_rewrite(
  input_path: Path,
  output_path: Optional[Path],
  library: Optional[str],
  resolver: Optional[str],
  module_map: Dict[str, str],
  check: bool = False,
  in_place: bool = False,
) -> int:
  """
  Handles the 'rewrite' command execution.

  Args:
      input_path: Source file or directory.
      output_path: Destination file or directory.
      library: Override for the library to split (e.g. 'toolz').
      resolver: Override for the resolver kind ('static' or 'introspect').
      module_map: Extra ``function -> module`` entries from the CLI.
      check: Only report files that would change; write nothing.
      in_place: Overwrite the input files.

  Returns:
      int: Exit code (0 for success, 1 for failure or, with ``check``, pending changes).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      library=library,
      resolver=resolver,
      module_map=module_map,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
    engine = RewriteEngine(config=config)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _rewrite_single_file(input_path, output_path, engine, check, in_place)
    batch_results[input_path.name] = result

  else:
    if not output_path and not (in_place or check):
      log_error("Directory rewriting requires --out destination directory (or --in-place / --check).")
      return 1

    py_files = sorted(input_path.rglob("*.py"))
    if not py_files:
      log_warning(f"No .py files found in {input_path}")
      return 0

    log_info(f"Processing {len(py_files)} files from {input_path}...")

    for src_file in py_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path if output_path else None
      batch_results[str(rel_path)] = _rewrite_single_file(src_file, dest_file, engine, check, in_place)

  _print_batch_summary(batch_results)

  if any(not r.success for r in batch_results.values()):
    return 1
  if check and any(r.changed for r in batch_results.values()):
    return 1
  return 0


def _rewrite_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: RewriteEngine,
  check: bool = False,
  in_place: bool = False,
) -> ConversionResult:
  """
  Rewrites one file.

  Args:
      input_path: Source file path.
      output_path: Destination file path (None prints to stdout unless ``in_place``).
      engine: The configured engine.
      check: Report only.
      in_place: Overwrite ``input_path``.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code)
  if not result.success:
    log_error(f"Failed to rewrite [path]{input_path}[/path]: {'; '.join(result.errors)}")
    return result

  if check:
    if result.changed:
      log_warning(f"Would rewrite [path]{input_path}[/path] ({len(result.injected)} direct imports)")
    return result

  destination = input_path if in_place else output_path
  if destination is None:
    print(result.code, end="")
    return result

  if destination == input_path and not result.changed:
    return result

  try:
    destination.parent.mkdir(parents=True, exist_ok=True)
    with open(destination, "wt", encoding="utf-8") as f:
      f.write(result.code)
  except OSError as e:
    log_error(f"Failed to write {destination}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  if result.changed:
    log_success(f"Rewrote: [path]{input_path}[/path] -> [path]{destination}[/path]")
  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  rewritten = sum(1 for r in results.values() if r.success and r.changed)
  failures = sum(1 for r in results.values() if not r.success)

  if failures == 0:
    log_success(f"Batch Complete: {rewritten}/{total} files imported the library and were rewritten.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    issues = "; ".join(res.errors) if res.has_errors else "Unknown Error"
    table.add_row(filename, "❌ Failed", issues)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - failures} Passed, {failures} Failed.")
