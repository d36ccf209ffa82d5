"""
Reporter Stage - Maps the inspection result to logs and an exit code.

INPUT:
  - result: InspectionResult

OUTPUT:
  - exit_code: 0 for ok, 1 for broken / not found

report_error() is the run's single handler for anything raised by a stage.
"""

import asyncio

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from imgcheck.core.base_stage import BaseStage
from imgcheck.core.contracts import RunContext, StageConfig, StageOutput
from imgcheck.errors import LaunchTimeoutError, LoginFailedError
from imgcheck.schema import CheckStatus, InspectionResult
from imgcheck.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
SAMPLE_LIMIT = 10

TIMEOUT_ERRORS = (PlaywrightTimeoutError, LaunchTimeoutError, asyncio.TimeoutError)


def report_result(result: InspectionResult) -> int:
    """Log the outcome of an inspection and return the exit code."""
    logger.info("Image check result: %s", result.model_dump_json(indent=2))

    if result.status == CheckStatus.OK:
        image = result.image
        logger.info("Image OK (%s)", result.match_type.value)
        logger.info("Searched path: %s", result.base_path)
        logger.info("Actual src: %s", image.src)
        logger.info("Natural size: %sx%s", image.natural_width, image.natural_height)
        logger.info(
            "Rendered size: %sx%s", image.bounding_box.width, image.bounding_box.height
        )
        return EXIT_OK

    if result.status == CheckStatus.BROKEN:
        image = result.image
        logger.error("Image display error")
        logger.error("Match type: %s", result.match_type.value)
        logger.error("Searched path: %s", result.base_path)
        logger.error("Actual src: %s", image.src)
        logger.error("Failed checks: %s", ", ".join(result.failures))
        logger.error("Details:")
        logger.error("  complete: %s", image.complete)
        logger.error("  naturalWidth: %s", image.natural_width)
        logger.error("  naturalHeight: %s", image.natural_height)
        logger.error("  display: %s", image.display)
        logger.error("  visibility: %s", image.visibility)
        logger.error("  opacity: %s", image.opacity)
        logger.error("  boundingBox: %s", image.bounding_box.model_dump_json())
        return EXIT_FAILURE

    logger.error("Image is not present in the DOM")
    logger.error("Searched base path: %s", result.base_path)
    logger.error("Searched filename: %s", result.searched_filename)
    logger.error("Images on page (first %d):", SAMPLE_LIMIT)
    for index, info in enumerate(result.all_images[:SAMPLE_LIMIT], start=1):
        logger.error("  %d: %s", index, info.src)
        if info.alt:
            logger.error("     alt: %s", info.alt)
        if info.class_name:
            logger.error("     class: %s", info.class_name)
    remaining = len(result.all_images) - SAMPLE_LIMIT
    if remaining > 0:
        logger.error("  ... and %d more images", remaining)
    return EXIT_FAILURE


def report_error(error: BaseException) -> int:
    """Log an error that aborted the run and return the exit code."""
    logger.error("Error occurred during image check:")
    logger.error("Error name: %s", type(error).__name__)
    logger.error("Error message: %s", error)
    logger.error("Stack trace:", exc_info=error)

    if isinstance(error, TIMEOUT_ERRORS):
        logger.error("This is a timeout error. Possible causes:")
        logger.error("1. Chrome failed to start within the timeout period")
        logger.error("2. Missing Chrome dependencies")
        logger.error("3. Insufficient system resources")
        logger.error("4. Network connectivity issues")

    if isinstance(error, LoginFailedError):
        logger.error("Login failed. Please check:")
        logger.error("1. LOGIN_ID and LOGIN_PASS environment variables are set correctly")
        logger.error("2. Website login process has not changed")
        logger.error("3. Account is not locked or suspended")

    return EXIT_FAILURE


class ReporterStage(BaseStage):

    @classmethod
    def get_config(cls) -> StageConfig:
        return StageConfig(
            stage_name="reporter",
            display_name="Reporter",
            description="Logs the inspection outcome and sets the exit code",
        )

    async def process(self, ctx: RunContext) -> StageOutput:
        if ctx.result is None:
            raise RuntimeError("Reporter ran before the page was inspected")
        exit_code = report_result(ctx.result)
        return StageOutput(state_updates={"exit_code": exit_code})
