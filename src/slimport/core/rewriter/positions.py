"""
Syntactic positions of names.

The rewriter decides how to treat a ``Name`` from where it sits in its parent.
Positions owned by a node-specific rule (call, dict element, member access)
are rewritten by that rule; the generic name rule only handles the rest.
"""

from enum import Enum
from typing import Optional

import libcst as cst


class Position(Enum):
  """Where a name appears relative to its parent node."""

  CALLEE = "callee"
  CALL_ARGUMENT = "call_argument"
  DICT_KEY = "dict_key"
  DICT_VALUE = "dict_value"
  MEMBER_OBJECT = "member_object"
  MEMBER_NAME = "member_name"
  KEYWORD = "keyword"
  VALUE = "value"


# Rewritten by leave_Call / leave_DictElement / leave_Attribute
CLAIMED_POSITIONS = frozenset(
  {
    Position.CALLEE,
    Position.CALL_ARGUMENT,
    Position.DICT_KEY,
    Position.DICT_VALUE,
    Position.MEMBER_OBJECT,
  }
)

# Names that are labels, not references
NON_REFERENCE_POSITIONS = frozenset({Position.MEMBER_NAME, Position.KEYWORD})


def classify(node: cst.Name, parent: Optional[cst.CSTNode], grandparent: Optional[cst.CSTNode] = None) -> Position:
  """
  Classifies the position of ``node`` under ``parent``.

  Args:
      node: The name being visited (original tree).
      parent: Its parent node.
      grandparent: The parent's parent, needed to tell call arguments from
          class bases (both are ``Arg`` nodes).

  Returns:
      Position: The classified position.
  """
  if isinstance(parent, cst.Call) and parent.func is node:
    return Position.CALLEE
  if isinstance(parent, cst.Arg):
    if parent.keyword is node:
      return Position.KEYWORD
    if parent.value is node and isinstance(grandparent, cst.Call):
      return Position.CALL_ARGUMENT
  if isinstance(parent, cst.DictElement):
    if parent.key is node:
      return Position.DICT_KEY
    if parent.value is node:
      return Position.DICT_VALUE
  if isinstance(parent, cst.Attribute):
    if parent.attr is node:
      return Position.MEMBER_NAME
    if parent.value is node:
      return Position.MEMBER_OBJECT
  return Position.VALUE
