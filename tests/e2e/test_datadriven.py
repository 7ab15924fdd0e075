"""
Data-driven UI scenarios.

One test per scenario of the ``--scenarios`` document (see
``tests/conftest.py`` for selection). Each runs in its own browser
context; on failure a screenshot lands under
``<RESULTS_DIR>/screenshots`` and is attached to the Allure report.
"""

from typing import Mapping

from playwright.sync_api import Page

from uiscenario.core.config import settings
from uiscenario.runner.artifact_collector import AllureReportSink
from uiscenario.runner.driver import PlaywrightDriver
from uiscenario.runner.scenario import TestScenario
from uiscenario.runner.scenario_runner import run_scenario


def test_scenario(scenario: TestScenario, scenario_page: Page, env_vars: Mapping[str, str], results_dir: str) -> None:
    driver = PlaywrightDriver(scenario_page, timeout=settings.SELECTOR_TIMEOUT)
    run_scenario(driver, scenario, env_vars, report_sink=AllureReportSink(), results_dir=results_dir)
