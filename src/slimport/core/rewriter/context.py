"""
Rewriter Context Module.

Holds the per-module state of one rewrite pass: the binding tables and the
cache of injected imports. A fresh context is built every time the rewriter
enters a module, so nothing carries over between files.
"""

from slimport.core.rewriter.bindings import BindingTracker
from slimport.core.rewriter.memoizer import ImportMemoizer
from slimport.resolver.base import ModuleResolver


class RewriteContext:
  """
  Shared state container for one module.

  Attributes:
      library (str): The library being split.
      bindings (BindingTracker): Local names bound to the library or its functions.
      imports (ImportMemoizer): Direct imports injected so far.
  """

  def __init__(self, library: str, resolver: ModuleResolver):
    self.library = library
    self.bindings = BindingTracker(library)
    self.imports = ImportMemoizer(resolver, library)
