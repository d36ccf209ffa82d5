"""
Base Stage - Abstract base class for the steps of a check run.

Each stage should:
1. Declare a StageConfig describing itself
2. Implement process() against the shared RunContext
3. Return its findings as a StageOutput instead of mutating the context

This base class provides:
- Uniform start/finish logging under "stage.<name>"
- A verification-note trail merged into the output
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from imgcheck.core.contracts import RunContext, StageConfig, StageOutput
from imgcheck.utils.logger import get_logger


class BaseStage(ABC):
    """
    Abstract base class for pipeline stages.

    Subclass this to create a new stage:

        class MyStage(BaseStage):
            @classmethod
            def get_config(cls) -> StageConfig:
                return StageConfig(stage_name="my_stage", display_name="My Stage")

            async def process(self, ctx: RunContext) -> StageOutput:
                ...
    """

    def __init__(self, config: Optional[StageConfig] = None):
        """Initialize stage with optional config override."""
        self._config = config or self.get_config()
        self._verification_notes: List[str] = []

    @classmethod
    @abstractmethod
    def get_config(cls) -> StageConfig:
        """Return the default configuration for this stage."""
        pass

    @abstractmethod
    async def process(self, ctx: RunContext) -> StageOutput:
        """
        Main processing logic for the stage.

        Errors are not caught here; they propagate to the run's
        top-level handler.
        """
        pass

    @property
    def config(self) -> StageConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.stage_name

    def _add_note(self, note: str):
        self._verification_notes.append(note)

    def _log(self, message: str, *args):
        logger = get_logger(f"stage.{self._config.stage_name}")
        logger.info(message, *args)

    async def __call__(self, ctx: RunContext) -> StageOutput:
        """Run the stage and apply its output to the context."""
        self._verification_notes = []

        self._log("Starting %s...", self._config.display_name)
        output = await self.process(ctx)

        output.verification_notes = self._verification_notes + output.verification_notes
        ctx.apply(output)

        self._log("Complete. Notes: %d", len(output.verification_notes))
        return output
