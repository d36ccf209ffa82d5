"""
Check workflow - the linear pipeline of one run.

    locate executable -> open session -> login -> inspect -> (close) -> report

Every stage error unwinds to the single handler in run_check(). The browser
session is scoped with `async with`, so it is closed on every exit path.
"""

from imgcheck.config import CheckerConfig
from imgcheck.core.contracts import RunContext
from imgcheck.core.session import open_session
from imgcheck.core.stages import (
    AuthenticatorStage,
    ExecutableLocatorStage,
    PageInspectorStage,
    ReporterStage,
)
from imgcheck.core.stages.reporter import report_error
from imgcheck.utils.logger import get_logger

logger = get_logger(__name__)


async def run_pipeline(ctx: RunContext) -> int:
    """Run all stages against ctx; errors propagate to the caller."""
    await ExecutableLocatorStage()(ctx)

    async with open_session(ctx.executable_path, ctx.config) as page:
        ctx.page = page
        try:
            await AuthenticatorStage()(ctx)
            await PageInspectorStage()(ctx)
        finally:
            ctx.page = None

    await ReporterStage()(ctx)
    return ctx.exit_code


async def run_check(config: CheckerConfig) -> int:
    """
    Run one login + image check and return the process exit code.

    Never raises for failures inside the pipeline; they are logged and
    mapped to exit code 1.
    """
    logger.info("Starting image check for %s", config.target_url)
    ctx = RunContext(config=config)
    try:
        return await run_pipeline(ctx)
    except Exception as e:
        return report_error(e)
    finally:
        for note in ctx.verification_notes:
            logger.debug("note: %s", note)
