import pytest
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from imgcheck.config import CheckerConfig


def make_image(**overrides) -> Dict[str, Any]:
    """Raw in-page record for a fully loaded, visible image."""
    image = {
        "src": "https://cdn.example.com/img/logo.png",
        "srcAttribute": "https://cdn.example.com/img/logo.png",
        "alt": "Logo",
        "className": "brand",
        "complete": True,
        "naturalWidth": 120,
        "naturalHeight": 40,
        "display": "inline",
        "visibility": "visible",
        "opacity": "1",
        "boundingBox": {"width": 120, "height": 40, "x": 10, "y": 10},
    }
    image.update(overrides)
    return image


class FakeCDPSession:
    def __init__(self, calls: list):
        self.calls = calls

    async def send(self, method: str, params: Optional[dict] = None):
        self.calls.append(("cdp", method, params))
        return {}


class FakeContext:
    def __init__(self, calls: list):
        self.calls = calls

    async def new_cdp_session(self, page):
        return FakeCDPSession(self.calls)


class FakePage:
    """Stands in for playwright.async_api.Page; records calls in order."""

    def __init__(
        self,
        images: Optional[List[dict]] = None,
        landing_url: str = "https://example.com/dashboard",
        fail_on: Optional[str] = None,
        error: Optional[BaseException] = None,
    ):
        self.calls: List[tuple] = []
        self.url = "about:blank"
        self.images = images if images is not None else [make_image()]
        self.landing_url = landing_url
        self.fail_on = fail_on
        self.error = error or RuntimeError("page exploded")
        self.context = FakeContext(self.calls)
        self.navigation_timeout = None
        self.default_timeout = None

    def _maybe_fail(self, name: str):
        if self.fail_on == name:
            raise self.error

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    async def goto(self, url, **kwargs):
        self.calls.append(("goto", url, kwargs))
        self._maybe_fail("goto")
        self.url = url

    async def fill(self, selector, value):
        self.calls.append(("fill", selector, value))
        self._maybe_fail("fill")

    async def click(self, selector):
        self.calls.append(("click", selector))
        self._maybe_fail("click")
        self.url = self.landing_url

    @asynccontextmanager
    async def expect_navigation(self, **kwargs):
        self.calls.append(("expect_navigation", kwargs))
        yield
        self.calls.append(("navigation_done",))

    async def wait_for_timeout(self, timeout):
        self.calls.append(("wait_for_timeout", timeout))

    async def evaluate(self, script, arg=None):
        self.calls.append(("evaluate", arg))
        self._maybe_fail("evaluate")
        return {"searchedFor": arg, "images": self.images}


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.close_count = 0

    async def new_page(self):
        return self.page

    async def close(self):
        self.close_count += 1


class FakeChromium:
    def __init__(self, browser: FakeBrowser, launch_error: Optional[BaseException] = None):
        self.browser = browser
        self.launch_error = launch_error
        self.launch_kwargs: Optional[dict] = None

    async def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(self, chromium: FakeChromium):
        self.chromium = chromium
        self.stopped = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.stopped = True
        return False


@pytest.fixture
def env() -> Dict[str, str]:
    return {
        "URL_LOGIN": "https://example.com/accounts/login/",
        "URL_TARGET": "https://example.com/gallery",
        "LOGIN_ID": "ci-user",
        "LOGIN_PASS": "s3cret",
        "TARGET_IMG": "/img/logo.png?v=2",
    }


@pytest.fixture
def config(env, tmp_path) -> CheckerConfig:
    chrome = tmp_path / "chrome"
    chrome.write_text("")
    return CheckerConfig.from_env(env, executable_candidates=[str(chrome)], settle_ms=0)


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_browser(fake_page) -> FakeBrowser:
    return FakeBrowser(fake_page)


@pytest.fixture
def fake_playwright(fake_browser) -> FakePlaywright:
    return FakePlaywright(FakeChromium(fake_browser))
