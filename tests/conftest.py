"""
Shared pytest configuration.

Adds the ``--scenarios`` and ``--env-file`` command-line options and the
fixtures the data-driven suite needs. Any test that requests the
``scenario`` fixture is parametrized with the scenarios of the
``--scenarios`` document, narrowed by the ``TEST_ID``, ``TEST_TAG`` and
``TEST_NAME`` settings. Without ``--scenarios`` the parameter set is
empty and such tests are reported as skipped.

Every scenario gets its own browser context and page; the browser
itself is shared per engine for the session.
"""

import os
from typing import Iterator, List, Mapping

import pytest
from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from uiscenario.core.config import settings
from uiscenario.runner.artifact_collector import results_root, start_tracing, stop_tracing
from uiscenario.runner.env_file import load_env_file
from uiscenario.runner.pytest_entry import scenario_context_options, scenario_markers
from uiscenario.runner.scenario import TestScenario, load_scenarios, select_scenarios


def pytest_addoption(parser):
    """Hook to add custom command-line options to pytest."""
    parser.addoption("--scenarios", action="store", default=None)
    parser.addoption("--env-file", action="store", default=None)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item so fixtures can see failures."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _selected_scenarios(config) -> List[TestScenario]:
    path = config.getoption("--scenarios")
    if not path:
        return []
    return select_scenarios(
        load_scenarios(path),
        test_id=settings.TEST_ID,
        test_tag=settings.TEST_TAG,
        test_name=settings.TEST_NAME,
    )


def pytest_collection_modifyitems(config, items):
    """Apply the scenario deadline and rerun count to every scenario test."""
    markers = scenario_markers(settings.SCRIPT_TIMEOUT, settings.RETRY)
    for item in items:
        if "scenario" in getattr(item, "fixturenames", ()):
            for marker in markers:
                item.add_marker(marker)


def pytest_generate_tests(metafunc):
    if "scenario" not in metafunc.fixturenames:
        return
    scenarios = _selected_scenarios(metafunc.config)
    metafunc.parametrize("scenario", scenarios, ids=[f"[{s.id}] {s.name}" for s in scenarios])
    if "browser_name" in metafunc.fixturenames:
        metafunc.parametrize("browser_name", settings.browsers(), scope="session")


@pytest.fixture(scope="session")
def env_vars(pytestconfig) -> Mapping[str, str]:
    """
    Placeholder values for the scenarios.

    A missing env file is a setup error, not an empty mapping.
    """
    return load_env_file(pytestconfig.getoption("--env-file") or settings.ENV_FILE)


@pytest.fixture(scope="session")
def results_dir() -> str:
    return results_root(settings.RESULTS_DIR)


@pytest.fixture(scope="session")
def playwright() -> Iterator[Playwright]:
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser(playwright: Playwright, browser_name: str) -> Iterator[Browser]:
    browser = getattr(playwright, browser_name).launch(headless=settings.HEADLESS, slow_mo=settings.SLOWMO)
    yield browser
    browser.close()


@pytest.fixture
def scenario_page(
    request, playwright: Playwright, browser: Browser, browser_name: str, scenario: TestScenario, results_dir: str
) -> Iterator[Page]:
    """Fresh desktop-device context and page for one scenario, with tracing/video per settings."""
    context_options = scenario_context_options(
        playwright.devices,
        browser_name,
        settings.DEMO_APP_URL,
        video_dir=os.path.join(results_dir, "videos") if settings.VIDEO else None,
    )
    context = browser.new_context(**context_options)
    context.set_default_timeout(settings.SELECTOR_TIMEOUT)
    context.set_default_navigation_timeout(settings.SELECTOR_TIMEOUT)
    if settings.TRACE:
        start_tracing(context)
    page = context.new_page()
    yield page

    failed = bool(getattr(request.node, "rep_call", None) and request.node.rep_call.failed)
    try:
        if settings.TRACE:
            stop_tracing(context, scenario.id, keep=failed, results_dir=results_dir)
    finally:
        context.close()
