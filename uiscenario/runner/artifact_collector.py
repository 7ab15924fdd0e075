"""
Failure diagnostics for scenario runs.

On failure the runner leaves exactly one artifact behind: a full-page
screenshot under ``<results_dir>/screenshots`` named after the
sanitized scenario id and a timestamp. The same bytes are attached to
the test report when a sink is available. Tracing helpers for the
pytest harness live here as well.
"""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

import allure
import structlog
from playwright.sync_api import BrowserContext

from uiscenario.runner.driver import Driver

logger = structlog.get_logger(__name__)

DEFAULT_RESULTS_DIR = "test-results"


class ReportSink(Protocol):
    def attach(self, name: str, body: bytes, content_type: str) -> None: ...


class AllureReportSink:
    """Attach artifacts to the current Allure test result."""

    _TYPES: Dict[str, allure.attachment_type] = {
        "image/png": allure.attachment_type.PNG,
    }

    def attach(self, name: str, body: bytes, content_type: str) -> None:
        allure.attach(body, name=name, attachment_type=self._TYPES.get(content_type, content_type))


def sanitize_id(scenario_id: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]", "_", scenario_id)


def timestamp_slug(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with ``:`` and ``.`` made filename safe."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return re.sub(r"[:.]", "-", iso)


def results_root(results_dir: Optional[str] = None) -> str:
    return os.path.abspath(results_dir or os.path.join(os.getcwd(), DEFAULT_RESULTS_DIR))


def screenshot_path(scenario_id: str, results_dir: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """Return ``<results_dir>/screenshots/<sanitized-id>-<timestamp>.png``."""
    return os.path.join(
        results_root(results_dir),
        "screenshots",
        f"{sanitize_id(scenario_id)}-{timestamp_slug(now)}.png",
    )


def capture_failure_screenshot(
    driver: Driver,
    scenario_id: str,
    report_sink: Optional[ReportSink] = None,
    results_dir: Optional[str] = None,
) -> Optional[str]:
    """
    Save a full-page screenshot of a failed scenario.

    Does nothing when the page is already closed. Errors raised while
    capturing are not suppressed.

    :return: The screenshot path, or ``None`` if nothing was captured
    """
    if driver.is_closed():
        logger.warning("failure.screenshot_skipped", scenario_id=scenario_id, reason="page closed")
        return None

    path = screenshot_path(scenario_id, results_dir)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    body = driver.screenshot(path, full_page=True)
    logger.info("failure.screenshot", scenario_id=scenario_id, path=path)

    if report_sink is not None:
        report_sink.attach(f"failure-{sanitize_id(scenario_id)}", body, "image/png")
    return path


def start_tracing(context: BrowserContext) -> None:
    """Start Playwright tracing on ``context`` (call right after creating it)."""
    context.tracing.start(screenshots=True, snapshots=True, sources=True)


def stop_tracing(context: BrowserContext, scenario_id: str, keep: bool, results_dir: Optional[str] = None) -> Optional[str]:
    """
    Stop tracing, saving ``<results_dir>/traces/<sanitized-id>.zip`` when ``keep``.

    :return: The trace path, or ``None`` when the trace was discarded
    """
    if not keep:
        context.tracing.stop()
        return None
    path = os.path.join(results_root(results_dir), "traces", f"{sanitize_id(scenario_id)}.zip")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    context.tracing.stop(path=path)
    return path
