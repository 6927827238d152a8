"""
CLI Command Handlers Facade.

Re-exports handlers from `slimport.cli.handlers`.
"""

from slimport.cli.handlers.resolve import handle_resolve
from slimport.cli.handlers.rewrite import (
  handle_rewrite,
  _print_batch_summary,
  _rewrite_single_file,
)

__all__ = [
  "_print_batch_summary",
  "_rewrite_single_file",
  "handle_resolve",
  "handle_rewrite",
]
