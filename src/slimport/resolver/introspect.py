"""
Runtime-introspection resolver.

Imports the target library and asks each exported object which module defined
it (``obj.__module__``). Answers are verified by importing that module and
checking it exports the same object under the same name.
"""

import importlib
import logging
from types import ModuleType
from typing import Dict, Optional

from slimport.errors import UnresolvableNameError
from slimport.resolver.base import ModuleResolver

logger = logging.getLogger(__name__)


class IntrospectionResolver(ModuleResolver):
  """
  Resolves function modules by importing the library.

  Attributes:
      library (str): Importable name of the library.
  """

  def __init__(self, library: str):
    self.library = library
    self._module: Optional[ModuleType] = None
    self._cache: Dict[str, str] = {}

  def _load(self) -> ModuleType:
    if self._module is None:
      try:
        self._module = importlib.import_module(self.library)
      except ImportError as e:
        raise UnresolvableNameError("*", self.library, f"library is not importable ({e})") from e
    return self._module

  def resolve(self, name: str) -> str:
    if name in self._cache:
      return self._cache[name]

    library = self._load()
    obj = getattr(library, name, None)
    if obj is None:
      raise UnresolvableNameError(name, self.library, "no such attribute")

    module_path = getattr(obj, "__module__", None)
    if not isinstance(module_path, str) or module_path == self.library:
      raise UnresolvableNameError(name, self.library, "defined in the library root")

    try:
      defining = importlib.import_module(module_path)
    except ImportError as e:
      raise UnresolvableNameError(name, self.library, f"module '{module_path}' is not importable") from e

    if getattr(defining, name, None) is not obj:
      raise UnresolvableNameError(name, self.library, f"'{module_path}' does not export it by that name")

    logger.debug(f"Resolved {self.library}.{name} -> {module_path}")
    self._cache[name] = module_path
    return module_path
