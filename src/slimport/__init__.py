"""
slimport Package.

Splits wholesale imports of a utility library into one direct import per
function actually used, so the unused parts of the library are never loaded.

Usage
-----

Simple String Rewrite
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import slimport
    code = "import toolz as tz\\ny = tz.pipe(x, f)"
    print(slimport.rewrite(code))
    # from toolz.functoolz import pipe
    # y = pipe(x, f)

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from slimport import RewriteEngine, RuntimeConfig

    engine = RewriteEngine(config=RuntimeConfig(library="toolz"))
    res = engine.run("from toolz import curry\\ncurry(f)")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Dict, Optional

from slimport.config import RuntimeConfig
from slimport.core.conversion_result import ConversionResult
from slimport.core.engine import RewriteEngine
from slimport.errors import SlimportError, UnresolvableNameError, UnsupportedPatternError

__version__ = "0.1.0"


def rewrite(
  code: str,
  library: str = "toolz",
  module_map: Optional[Dict[str, str]] = None,
  resolver: str = "static",
) -> str:
  """
  Rewrites a string of Python code.

  This is a convenience wrapper around :class:`RewriteEngine`.

  Args:
      code (str): The source code to rewrite.
      library (str): The library whose imports are split.
      module_map (dict, optional): Extra ``function -> module`` entries.
      resolver (str): "static" (bundled table) or "introspect" (import the library).

  Returns:
      str: The rewritten source code.

  Raises:
      SlimportError: If the module uses the library in an unsupported way or a
          function cannot be resolved.
  """
  config = RuntimeConfig(library=library, resolver=resolver, module_map=module_map or {})
  engine = RewriteEngine(config=config)
  return engine.rewrite(code)


__all__ = [
  "ConversionResult",
  "RewriteEngine",
  "RuntimeConfig",
  "SlimportError",
  "UnresolvableNameError",
  "UnsupportedPatternError",
  "rewrite",
  "__version__",
]
