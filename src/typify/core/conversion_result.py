"""
Data structures representing the output of the conversion pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code, any errors encountered, the per-parameter annotation report
and the execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from typify.enums import ConversionStage, VerdictSource


class ParameterReport(BaseModel):
  """
  The annotation decision for one function parameter.
  """

  function: str = Field(..., description="Name of the declaring function, or '<anonymous>'.")
  name: str = Field(..., description="Parameter name.")
  annotation: str = Field(..., description="TypeScript type text that was attached (or already present).")
  source: VerdictSource = Field(..., description="Which stage of the inference chain decided.")
  line: int = Field(..., description="1-based source line of the parameter.")


class ConversionResult(BaseModel):
  """
  Container for the results of a conversion job.
  """

  code: str = Field(default="", description="The generated TypeScript source code.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal failures.",
  )
  stage: ConversionStage = Field(ConversionStage.PENDING, description="Last stage the conversion reached.")
  parameters: List[ParameterReport] = Field(default_factory=list, description="Annotation decisions, in traversal order.")
  imports: List[str] = Field(default_factory=list, description="Rendered import statements placed before the body.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
