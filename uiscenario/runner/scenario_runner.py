"""
Execution of a complete scenario.

A run is linear: resolve placeholders, navigate, run the steps, check
the expectations. Any error after placeholder resolution triggers
failure diagnostics (screenshot plus report attachment) and is then
re-raised unchanged.
"""

from __future__ import annotations

from typing import Mapping, Optional

import structlog

from uiscenario.runner.artifact_collector import ReportSink, capture_failure_screenshot
from uiscenario.runner.driver import Driver
from uiscenario.runner.interpolation import normalize_scenario
from uiscenario.runner.playwright_steps import execute_steps
from uiscenario.runner.scenario import TestScenario, scenario_summary
from uiscenario.runner.validators import validate_expectations

logger = structlog.get_logger(__name__)


def run_scenario(
    driver: Driver,
    scenario: TestScenario,
    env_vars: Optional[Mapping[str, str]] = None,
    report_sink: Optional[ReportSink] = None,
    results_dir: Optional[str] = None,
) -> None:
    """
    Run ``scenario`` against ``driver``.

    :param env_vars: Placeholder values; when empty the scenario is used as-is
    :param report_sink: Receives the failure screenshot, if given
    :param results_dir: Root for failure screenshots (default ``./test-results``)
    :raises MissingVariable: Before any driver call, if a placeholder is unresolved
    :raises Exception: Whatever the steps or expectations raised, unchanged
    """
    # Placeholder errors surface before the driver is touched, so there is
    # nothing to capture for them.
    processed = normalize_scenario(scenario, env_vars) if env_vars else scenario
    log = logger.bind(**scenario_summary(processed))
    log.info("scenario.start", url=processed.url)

    try:
        driver.navigate(processed.url)
        execute_steps(driver, processed.steps)
        validate_expectations(driver, processed.expectations)
    except Exception as e:
        log.error("scenario.failed", error=str(e), error_type=type(e).__name__)
        capture_failure_screenshot(driver, processed.id, report_sink, results_dir)
        raise

    log.info("scenario.passed")
