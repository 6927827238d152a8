"""
Expression Logic Mixin.

Rewrites every place a library binding can be used:

- ``curry(f)`` and ``map(curry, xs)``: callee and arguments (``leave_Call``).
- ``tz.curry``: member access on the library (``leave_Attribute``).
- ``{curry: 1, "f": compose}``: dict keys and values (``leave_DictElement``).
- Any other reference (``leave_Name``), which only acts on positions the
  rules above do not own. A bare reference to the whole library becomes
  ``None`` because nothing is left to refer to once its import is gone.
"""

from typing import Any, Dict, List

import libcst as cst
from libcst.metadata import ExpressionContext, ExpressionContextProvider

from slimport.core.rewriter.positions import CLAIMED_POSITIONS, NON_REFERENCE_POSITIONS, Position
from slimport.errors import UnsupportedPatternError


class ExpressionsMixin(cst.CSTTransformer):
  """
  Mixin for processing expressions that reference library bindings.
  """

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    """
    Rewrites a function-alias callee and function aliases passed as arguments.
    """
    changes: Dict[str, Any] = {}

    if self._is_function_alias(original_node.func):
      changes["func"] = self._inject_alias(original_node.func)

    new_args: List[cst.Arg] = []
    args_changed = False
    for original_arg, updated_arg in zip(original_node.args, updated_node.args):
      if self._is_function_alias(original_arg.value):
        updated_arg = updated_arg.with_changes(value=self._inject_alias(original_arg.value))
        args_changed = True
      new_args.append(updated_arg)
    if args_changed:
      changes["args"] = new_args

    if not changes:
      return updated_node
    return updated_node.with_changes(**changes)

  def leave_Attribute(self, original_node: cst.Attribute, updated_node: cst.Attribute) -> cst.BaseExpression:
    """
    Collapses ``alias.func`` into a direct reference to ``func``.

    Raises:
        UnsupportedPatternError: When assigning to or deleting an attribute of the library.
    """
    value = original_node.value

    if self._is_library_alias(value):
      context = self.get_metadata(ExpressionContextProvider, original_node, None)
      if context in (ExpressionContext.STORE, ExpressionContext.DEL):
        raise UnsupportedPatternError(
          f"Cannot rewrite assignment to '{value.value}.{original_node.attr.value}': "
          f"it mutates the '{self.library}' namespace"
        )
      return self.imports.inject(original_node.attr.value)

    if self._is_function_alias(value):
      # e.g. curry.__doc__
      return updated_node.with_changes(value=self._inject_alias(value))

    return updated_node

  def leave_DictElement(self, original_node: cst.DictElement, updated_node: cst.DictElement) -> cst.DictElement:
    """
    Rewrites function aliases used as dict keys or values.
    """
    changes: Dict[str, Any] = {}
    if self._is_function_alias(original_node.key):
      changes["key"] = self._inject_alias(original_node.key)
    if self._is_function_alias(original_node.value):
      changes["value"] = self._inject_alias(original_node.value)

    if not changes:
      return updated_node
    return updated_node.with_changes(**changes)

  def leave_Name(self, original_node: cst.Name, updated_node: cst.Name) -> cst.BaseExpression:
    """
    Generic rule for references not owned by a more specific rule.
    """
    position = self._position_of(original_node)
    if position in NON_REFERENCE_POSITIONS:
      return updated_node

    if self._is_function_alias(original_node):
      if position in CLAIMED_POSITIONS:
        return updated_node
      return self._inject_alias(original_node)

    if position is not Position.MEMBER_OBJECT and self._is_library_alias(original_node):
      context = self.get_metadata(ExpressionContextProvider, original_node, None)
      if context is ExpressionContext.DEL:
        raise UnsupportedPatternError(f"Cannot rewrite `del {original_node.value}` of the '{self.library}' import")
      return cst.Name("None")

    return updated_node
