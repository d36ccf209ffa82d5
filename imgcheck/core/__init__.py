# Core architecture components
from imgcheck.core.contracts import (
    RunContext,
    StageConfig,
    StageOutput,
)
from imgcheck.core.base_stage import BaseStage

__all__ = [
    "RunContext",
    "StageConfig",
    "StageOutput",
    "BaseStage",
]
