"""
Authenticator Stage - Logs in once with the configured credentials.

INPUT:
  - page (open session)
  - config.login_url, username, password, form field names, submit selector

OUTPUT:
  - verification_notes: landing URL after login

RAISES:
  - LoginFailedError if the page is still on the login path after submitting
"""

from urllib.parse import urlparse

from imgcheck.core.base_stage import BaseStage
from imgcheck.core.contracts import RunContext, StageConfig, StageOutput
from imgcheck.core.session import NAVIGATION_TIMEOUT_MS
from imgcheck.errors import LoginFailedError

WAIT_UNTIL = "networkidle"


def is_login_page(url: str, login_path: str) -> bool:
    """True if url's path still contains the login path (trailing slash ignored)."""
    current = urlparse(url).path
    needle = login_path.rstrip("/")
    # A root login path would match every page; only the root itself counts
    if not needle:
        return current in ("", "/")
    return needle in current


async def disable_cache(page) -> None:
    """Turn off the HTTP cache for the page via the DevTools protocol."""
    client = await page.context.new_cdp_session(page)
    await client.send("Network.setCacheDisabled", {"cacheDisabled": True})


class AuthenticatorStage(BaseStage):

    @classmethod
    def get_config(cls) -> StageConfig:
        return StageConfig(
            stage_name="authenticator",
            display_name="Authenticator",
            description="Fills the login form, submits it and confirms the redirect",
        )

    async def process(self, ctx: RunContext) -> StageOutput:
        config = ctx.config
        page = ctx.page

        await disable_cache(page)
        await page.goto(config.login_url, wait_until=WAIT_UNTIL, timeout=NAVIGATION_TIMEOUT_MS)
        self._log("Login page loaded")

        await page.fill(f'input[name="{config.username_field}"]', config.username)
        await page.fill(
            f'input[name="{config.password_field}"]',
            config.password.get_secret_value(),
        )
        self._log("Credentials entered")

        # Arm the navigation listener before the click can trigger it
        async with page.expect_navigation(wait_until=WAIT_UNTIL, timeout=NAVIGATION_TIMEOUT_MS):
            await page.click(config.submit_selector)

        if is_login_page(page.url, config.effective_login_path):
            raise LoginFailedError(page.url)

        self._log("Login successful, landed on %s", page.url)
        return StageOutput(verification_notes=[f"Logged in, landed on {page.url}"])
