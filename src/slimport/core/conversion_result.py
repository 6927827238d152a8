"""
Data structures representing the output of a rewrite.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code, any errors encountered, and the imports that were injected.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the result of rewriting one module.
  """

  code: str = Field(default="", description="The rewritten source code. Empty when the rewrite failed.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the module was rewritten (or needed no rewrite) without fatal errors.",
  )
  changed: bool = Field(default=False, description="True if the module imported the library and was rewritten.")
  injected: Dict[str, str] = Field(
    default_factory=dict, description="Canonical function name -> local name of its injected import."
  )

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
