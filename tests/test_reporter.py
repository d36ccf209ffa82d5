import asyncio
import logging

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from conftest import make_image
from imgcheck.core.contracts import RunContext
from imgcheck.core.stages.inspector import evaluate_snapshot
from imgcheck.core.stages.reporter import ReporterStage, report_error, report_result
from imgcheck.errors import LaunchTimeoutError, LoginFailedError


def test_ok_exits_zero(caplog):
    result = evaluate_snapshot([make_image()], "/img/logo.png?v=2")

    with caplog.at_level(logging.INFO):
        assert report_result(result) == 0

    assert "Image OK (base_path_match)" in caplog.text
    assert "Natural size: 120x40" in caplog.text


def test_broken_exits_one_and_logs_failed_checks(caplog):
    result = evaluate_snapshot([make_image(display="none")], "/img/logo.png")

    with caplog.at_level(logging.INFO):
        assert report_result(result) == 1

    assert "Image display error" in caplog.text
    assert "Failed checks: display != none" in caplog.text
    assert "display: none" in caplog.text


def test_not_found_caps_sample_at_ten(caplog):
    images = [make_image(src=f"https://example.com/pic{i}.png", alt="", className="") for i in range(13)]
    result = evaluate_snapshot(images, "/img/missing.png")

    with caplog.at_level(logging.INFO):
        assert report_result(result) == 1

    assert "Searched filename: missing.png" in caplog.text
    assert "10: https://example.com/pic9.png" in caplog.text
    assert "  11: " not in caplog.text
    assert "... and 3 more images" in caplog.text
    assert len(result.all_images) == 13


def test_not_found_without_remainder(caplog):
    result = evaluate_snapshot([make_image(src="https://example.com/banner.jpg")], "/img/missing.png")

    with caplog.at_level(logging.INFO):
        report_result(result)

    assert "alt: Logo" in caplog.text
    assert "class: brand" in caplog.text
    assert "more images" not in caplog.text


@pytest.mark.parametrize("error", [
    PlaywrightTimeoutError("Timeout 30000ms exceeded."),
    LaunchTimeoutError("Browser failed to start"),
    asyncio.TimeoutError(),
])
def test_timeout_errors_get_hints(caplog, error):
    assert report_error(error) == 1

    assert "This is a timeout error" in caplog.text
    assert "Login failed. Please check" not in caplog.text


def test_login_failure_gets_hints(caplog):
    assert report_error(LoginFailedError("https://example.com/accounts/login/")) == 1

    assert "Error name: LoginFailedError" in caplog.text
    assert "LOGIN_ID and LOGIN_PASS" in caplog.text
    assert "timeout error" not in caplog.text


def test_generic_error_logs_name_and_stack(caplog):
    try:
        raise RuntimeError("unexpected")
    except RuntimeError as e:
        assert report_error(e) == 1

    assert "Error name: RuntimeError" in caplog.text
    assert "Error message: unexpected" in caplog.text
    assert any(record.exc_info for record in caplog.records)


@pytest.mark.asyncio
async def test_stage_sets_exit_code(config):
    ctx = RunContext(config=config, result=evaluate_snapshot([], "/img/missing.png"))

    await ReporterStage()(ctx)

    assert ctx.exit_code == 1
