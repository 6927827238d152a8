"""
Orchestration Engine for Import Splitting.

This module provides the `RewriteEngine`, the driver that turns one module's
source into source where every function of the target library is imported
directly from the submodule defining it.

The pipeline per module:

1.  **Parsing**: Source text -> LibCST Module.
2.  **Detection**: If the library is not imported, the source is returned as is.
3.  **Rewriting**: A fresh `ImportRewriter` runs once over the module through a
    `MetadataWrapper`, so scope analysis is available at every use site.
4.  **Emission**: Module -> source text.

Each call works on its own tree and rewriter; engines hold no per-module state
and can be used for many files in a row or from several threads.
"""

import logging
from typing import Optional, Tuple

import libcst as cst

from slimport.config import RuntimeConfig
from slimport.core.conversion_result import ConversionResult
from slimport.core.rewriter import ImportRewriter
from slimport.core.scanners import LibraryImportScanner
from slimport.errors import SlimportError
from slimport.resolver import ModuleResolver, build_resolver

logger = logging.getLogger(__name__)


class RewriteEngine:
  """
  The main compilation unit.

  Attributes:
      config (RuntimeConfig): Active configuration.
      resolver (ModuleResolver): Function name -> module path mapping.
      library (str): The library whose imports are split.
  """

  def __init__(
    self,
    config: Optional[RuntimeConfig] = None,
    resolver: Optional[ModuleResolver] = None,
  ):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration. Defaults are used if None.
        resolver (ModuleResolver, optional): Overrides the resolver built from ``config``.
    """
    self.config = config or RuntimeConfig()
    self.resolver = resolver or build_resolver(self.config)
    self.library = self.config.library

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    """
    Converts CST back to source string.

    Args:
        tree (cst.Module): The modified syntax tree.

    Returns:
        str: Generated Python code.
    """
    return tree.code

  def imports_library(self, tree: cst.Module) -> bool:
    """
    Checks whether the module imports the target library anywhere.

    Args:
        tree: The parsed module.

    Returns:
        bool: True if rewriting is needed.
    """
    scanner = LibraryImportScanner(self.library)
    tree.visit(scanner)
    return scanner.found

  def transform(self, tree: cst.Module) -> Tuple[cst.Module, ImportRewriter]:
    """
    Runs the rewriter over a parsed module.

    Args:
        tree: The parsed module.

    Returns:
        Tuple[cst.Module, ImportRewriter]: The new tree and the rewriter that
        produced it (for inspecting injected imports).

    Raises:
        SlimportError: On unsupported patterns or unresolvable names.
    """
    rewriter = ImportRewriter(self.library, self.resolver)
    wrapper = cst.MetadataWrapper(tree)
    new_tree = wrapper.visit(rewriter)
    return new_tree, rewriter

  def rewrite(self, code: str) -> str:
    """
    Rewrites a module's source.

    Args:
        code (str): The input source string.

    Returns:
        str: The rewritten source, or ``code`` unchanged when the library is not imported.

    Raises:
        SlimportError: On unsupported patterns or unresolvable names.
        libcst.ParserSyntaxError: If the input is not valid Python.
    """
    return self._rewrite(code).code

  def run(self, code: str) -> ConversionResult:
    """
    Rewrites a module's source, reporting failures instead of raising them.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Rewritten code, or ``success=False`` with the error
        and no code.
    """
    try:
      return self._rewrite(code)
    except cst.ParserSyntaxError as e:
      return ConversionResult(code="", errors=[f"Parse Error: {e.message}"], success=False)
    except SlimportError as e:
      return ConversionResult(code="", errors=[str(e)], success=False)

  def _rewrite(self, code: str) -> ConversionResult:
    tree = self.parse(code)

    if not self.imports_library(tree):
      logger.debug(f"No '{self.library}' import found; nothing to rewrite")
      return ConversionResult(code=code, changed=False)

    new_tree, rewriter = self.transform(tree)
    injected = rewriter.imports.injected
    logger.debug(f"Split '{self.library}' into {len(injected)} direct import(s): {sorted(injected)}")
    return ConversionResult(code=self.to_source(new_tree), changed=True, injected=injected)
