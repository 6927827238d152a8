from .resolve import handle_resolve
from .rewrite import handle_rewrite, _rewrite_single_file, _print_batch_summary

__all__ = [
  "_print_batch_summary",
  "_rewrite_single_file",
  "handle_resolve",
  "handle_rewrite",
]
