"""
Import Rewriter Package.

This package provides the ``ImportRewriter`` class, a LibCST transformer that:
1.  **Tracks** local names bound to the target library or its functions.
2.  **Removes** the aggregate library imports.
3.  **Rewrites** every use site to a direct reference.
4.  **Injects** one ``from <module> import <name>`` per function actually used.

It is composed of mixins handling specific node types.
"""

from slimport.core.rewriter.base import BaseImportRewriter
from slimport.core.rewriter.context import RewriteContext
from slimport.core.rewriter.expressions_mixin import ExpressionsMixin
from slimport.core.rewriter.imports_mixin import ImportsMixin


class ImportRewriter(ExpressionsMixin, ImportsMixin, BaseImportRewriter):
  """
  Composite Transformer splitting aggregate library imports.

  Inherits functionality from:
  - :class:`ExpressionsMixin`: calls, member access, dict elements and bare names.
  - :class:`ImportsMixin`: removing library imports and rewriting re-exports.
  - :class:`BaseImportRewriter`: per-module state and import injection.
  """


__all__ = ["ImportRewriter", "RewriteContext"]
