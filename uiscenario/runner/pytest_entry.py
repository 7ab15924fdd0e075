"""
Entry point for running the data-driven scenario suite via pytest.

pytest owns discovery, per-scenario browser contexts, timeouts and
reporting; this module assembles the command line and the per-scenario
harness options, and calls ``pytest.main``. Relative paths (results
directory, ``.env``) keep resolving against the caller's working
directory.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATADRIVEN_TESTS = PROJECT_ROOT / "tests" / "e2e" / "test_datadriven.py"

# Playwright device descriptor used for each engine.
DESKTOP_DEVICES = {
    "chromium": "Desktop Chrome",
    "firefox": "Desktop Firefox",
    "webkit": "Desktop Safari",
}


def scenario_markers(script_timeout_ms: int, retries: int) -> List[pytest.MarkDecorator]:
    """
    Markers applied to every scenario test.

    ``timeout`` is read by pytest-timeout (seconds, 0 disables it) and
    ``flaky`` by pytest-rerunfailures.
    """
    markers = [pytest.mark.timeout(script_timeout_ms / 1000)]
    if retries > 0:
        markers.append(pytest.mark.flaky(reruns=retries))
    return markers


def scenario_context_options(
    devices: Mapping[str, Mapping[str, Any]],
    browser_name: str,
    base_url: str,
    video_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """Keyword arguments for ``Browser.new_context`` on the given engine."""
    options = dict(devices.get(DESKTOP_DEVICES.get(browser_name, ""), {}))
    # new_context rejects this key.
    options.pop("default_browser_type", None)
    options["base_url"] = base_url
    if video_dir:
        options["record_video_dir"] = video_dir
    return options


def build_pytest_args(
    scenario_path: Path,
    env_file: Optional[Path] = None,
    allure_dir: Optional[Path] = None,
    extra_args: Sequence[str] = (),
) -> List[str]:
    """
    Build the pytest argument list for a scenario file.

    :param scenario_path: JSON/YAML document with a ``testScenarios`` array
    :param env_file: Placeholder values (defaults to ``settings.ENV_FILE``)
    :param allure_dir: Directory where Allure results should be stored
    :return: Arguments suitable for ``pytest.main``
    """
    args: List[str] = [
        str(DATADRIVEN_TESTS),
        f"--scenarios={Path(scenario_path).resolve()}",
        f"--rootdir={PROJECT_ROOT}",
    ]
    if env_file is not None:
        args.append(f"--env-file={Path(env_file).resolve()}")
    if allure_dir is not None:
        args.append(f"--alluredir={Path(allure_dir).resolve()}")
    args.extend(extra_args)
    return args


def run_scenarios_pytest(
    scenario_path: Path,
    env_file: Optional[Path] = None,
    allure_dir: Optional[Path] = None,
    extra_args: Sequence[str] = (),
) -> int:
    """
    Execute pytest for the given scenario file.

    :return: Exit code returned by pytest
    """
    args = build_pytest_args(scenario_path, env_file, allure_dir, extra_args)
    return int(pytest.main(args))
