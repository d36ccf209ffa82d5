"""
Executable Locator Stage - Finds a usable browser binary.

INPUT:
  - config.executable_candidates (ordered)

OUTPUT:
  - executable_path: first candidate that exists as a file

RAISES:
  - ExecutableNotFoundError
"""

import os
from typing import Iterable

from imgcheck.core.base_stage import BaseStage
from imgcheck.core.contracts import RunContext, StageConfig, StageOutput
from imgcheck.errors import ExecutableNotFoundError
from imgcheck.utils.logger import get_logger

logger = get_logger(__name__)


def locate_executable(candidates: Iterable[str]) -> str:
    """Return the first candidate path that is an existing file."""
    tried = []
    for path in candidates:
        tried.append(path)
        if os.path.isfile(path):
            logger.info("Chrome found at: %s", path)
            return path
        logger.info("Chrome not found at: %s", path)
    raise ExecutableNotFoundError(tried)


class ExecutableLocatorStage(BaseStage):

    @classmethod
    def get_config(cls) -> StageConfig:
        return StageConfig(
            stage_name="executable_locator",
            display_name="Executable Locator",
            description="Checks fixed filesystem paths for a browser binary",
        )

    async def process(self, ctx: RunContext) -> StageOutput:
        path = locate_executable(ctx.config.executable_candidates)
        return StageOutput(
            state_updates={"executable_path": path},
            verification_notes=[f"Browser executable: {path}"],
        )
