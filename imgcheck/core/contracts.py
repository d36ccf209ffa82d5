"""
Core contracts for the stage architecture.

Every stage of a check run follows the same shape:
1. Reads what it needs from the shared RunContext
2. Returns a StageOutput (state updates + verification notes)
3. The updates are applied to the context before the next stage runs
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from imgcheck.config import CheckerConfig
from imgcheck.schema import InspectionResult


# =============================================================================
# Stage Configuration
# =============================================================================

class StageConfig(BaseModel):
    """Static description of a stage."""
    stage_name: str = Field(..., description="Unique stage identifier")
    display_name: str = Field(..., description="Human-readable name")
    description: str = Field(default="", description="What this stage does")


# =============================================================================
# Stage Input/Output Contracts
# =============================================================================

class RunContext(BaseModel):
    """
    State shared by the stages of one run.

    Holds the live page handle, so arbitrary types are allowed; the context
    itself never crosses into the page.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: CheckerConfig
    executable_path: Optional[str] = None
    page: Optional[Any] = None
    result: Optional[InspectionResult] = None
    exit_code: Optional[int] = None
    verification_notes: List[str] = Field(default_factory=list)

    def apply(self, output: "StageOutput") -> None:
        """Merge a stage's output into the context."""
        for key, value in output.state_updates.items():
            if key not in type(self).model_fields:
                raise KeyError(f"Unknown context field: {key}")
            setattr(self, key, value)
        self.verification_notes.extend(output.verification_notes)


class StageOutput(BaseModel):
    """
    Standardized output from all stages.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    state_updates: Dict[str, Any] = Field(
        default_factory=dict,
        description="RunContext fields to update"
    )
    verification_notes: List[str] = Field(
        default_factory=list,
        description="Notes about what was checked"
    )
