"""
Run data-driven UI scenarios from the command line.

Usage:
  uiscenario --scenarios data/testScenarios.json
  uiscenario --scenarios data/testScenarios.json --tag smoke --browser chromium --headless
  uiscenario --id login-001 --alluredir ./allure-results -- -x

Filters and browser options are exported as environment variables
(``TEST_ID``, ``TEST_TAG``, ``TEST_NAME``, ``BROWSER``, ``HEADLESS``) so
the pytest session reads them through ``Settings``. Arguments after
``--`` are passed to pytest unchanged.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from uiscenario.core.logging import configure_logging
from uiscenario.runner.pytest_entry import run_scenarios_pytest

logger = structlog.get_logger(__name__)


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="uiscenario", description=__doc__.splitlines()[1])
    ap.add_argument("--scenarios", default=None, help="Scenario document (default: SCENARIO_FILE)")
    ap.add_argument("--env-file", default=None, help="Placeholder values (default: ENV_FILE)")
    ap.add_argument("--id", dest="test_id", default=None, help="Run only the scenario with this id")
    ap.add_argument("--tag", dest="test_tag", default=None, help="Run only scenarios carrying this tag")
    ap.add_argument("--name", dest="test_name", default=None, help="Case-insensitive regex on scenario names")
    ap.add_argument("--browser", choices=["all", "chromium", "firefox", "webkit"], default=None)
    ap.add_argument("--headless", action="store_true", help="Run browsers headless")
    ap.add_argument("--alluredir", default=None, help="Write Allure results here")
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest arguments after --")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    configure_logging(args.log_level)

    for env_key, value in (
        ("TEST_ID", args.test_id),
        ("TEST_TAG", args.test_tag),
        ("TEST_NAME", args.test_name),
        ("BROWSER", args.browser),
    ):
        if value is not None:
            os.environ[env_key] = value
    if args.headless:
        os.environ["HEADLESS"] = "true"

    # Imported after the environment is prepared so the filters above apply.
    from uiscenario.core.config import Settings

    settings = Settings()
    scenario_path = Path(args.scenarios or settings.SCENARIO_FILE)
    env_file = Path(args.env_file or settings.ENV_FILE)
    extra = [a for a in args.pytest_args if a != "--"]

    logger.info(
        "suite.start",
        scenarios=str(scenario_path),
        test_id=settings.TEST_ID or None,
        test_tag=settings.TEST_TAG or None,
        test_name=settings.TEST_NAME or None,
        browsers=settings.browsers(),
    )
    code = run_scenarios_pytest(
        scenario_path,
        env_file=env_file,
        allure_dir=Path(args.alluredir) if args.alluredir else None,
        extra_args=extra,
    )
    logger.info("suite.finished", exit_code=code)
    return code


if __name__ == "__main__":
    sys.exit(main())
