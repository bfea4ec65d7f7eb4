"""
Transform Result Schema.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class TransformResult(BaseModel):
  """
  Output of a single `TransformEngine.transform` call.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  code: str = Field(default="", description="The generated Swift source.")
  declarations_transformed: int = Field(default=0, description="Number of declarations that produced output.")
  declarations: List[Any] = Field(
    default_factory=list, description="The input declarations, unfiltered, for preview and diagnostics."
  )

  @property
  def is_empty(self) -> bool:
    """
    Returns True if no declaration produced output.

    Returns:
        bool: True if nothing was generated.
    """
    return self.declarations_transformed == 0
