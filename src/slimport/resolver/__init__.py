"""
Import Resolvers.

Map a canonical function name to the module that exports it alone:

- :class:`StaticResolver`: bundled JSON tables plus configured overrides.
- :class:`IntrospectionResolver`: imports the library and inspects ``__module__``.
"""

from slimport.config import RuntimeConfig
from slimport.resolver.base import ModuleResolver
from slimport.resolver.introspect import IntrospectionResolver
from slimport.resolver.static import StaticResolver, load_bundled_table


class _OverlayResolver(ModuleResolver):
  """Consults explicit overrides before a fallback resolver."""

  def __init__(self, overrides: StaticResolver, fallback: ModuleResolver):
    self.library = fallback.library
    self.overrides = overrides
    self.fallback = fallback

  def resolve(self, name: str) -> str:
    if name in self.overrides.table:
      return self.overrides.table[name]
    return self.fallback.resolve(name)


def build_resolver(config: RuntimeConfig) -> ModuleResolver:
  """
  Creates the resolver described by ``config``.

  Args:
      config: The runtime configuration.

  Returns:
      ModuleResolver: A resolver for ``config.library``.
  """
  if config.resolver == "introspect":
    resolver: ModuleResolver = IntrospectionResolver(config.library)
    if config.module_map:
      resolver = _OverlayResolver(StaticResolver(config.module_map, library=config.library), resolver)
    return resolver
  return StaticResolver.for_library(config.library, overrides=config.module_map)


__all__ = [
  "IntrospectionResolver",
  "ModuleResolver",
  "StaticResolver",
  "build_resolver",
  "load_bundled_table",
]
