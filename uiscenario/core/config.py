"""
Centralised configuration using Pydantic settings.

This module defines a ``Settings`` class which encapsulates the knobs
of the scenario harness. Environment variables override the defaults
defined here, either exported before starting pytest or placed in a
``.env`` file at the project root.

``SELECTOR_TIMEOUT``: Timeout for actions, navigation and assertions.
``SCRIPT_TIMEOUT`` / ``RETRY``: Per-scenario deadline and rerun count.
``BROWSER``: ``chromium``, ``firefox``, ``webkit`` or ``all``.
``TEST_ID`` / ``TEST_TAG`` / ``TEST_NAME``: Optional scenario filters.
"""

from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class Settings(BaseSettings):
    """
    Harness configuration loaded from environment variables.

    The ``.env`` file is shared with the placeholder values used by
    scenarios, so unknown keys are ignored here.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SELECTOR_TIMEOUT: int = 30000
    # Deadline for a whole scenario in ms (0 disables it)
    SCRIPT_TIMEOUT: int = 30000
    # Reruns of a failed scenario
    RETRY: int = 0
    HEADLESS: bool = False
    SLOWMO: int = 0
    BROWSER: str = "all"
    DEMO_APP_URL: str = "https://example.com"

    # Artifacts
    VIDEO: bool = True
    TRACE: bool = False
    RESULTS_DIR: str = "test-results"

    # Inputs
    SCENARIO_FILE: str = "data/testScenarios.json"
    ENV_FILE: str = ".env"

    # Scenario selection (empty string means "no filter")
    TEST_ID: str = ""
    TEST_TAG: str = ""
    TEST_NAME: str = ""

    @field_validator("BROWSER")
    @classmethod
    def _check_browser(cls, v: str) -> str:
        v = v.strip().lower()
        if v != "all" and v not in SUPPORTED_BROWSERS:
            raise ValueError(f"BROWSER must be one of: all, {', '.join(SUPPORTED_BROWSERS)}")
        return v

    @field_validator("SCRIPT_TIMEOUT", "RETRY")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("TEST_ID", "TEST_TAG", "TEST_NAME")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    def browsers(self) -> List[str]:
        """Browser engines to run each scenario on."""
        if self.BROWSER == "all":
            return list(SUPPORTED_BROWSERS)
        return [self.BROWSER]


settings = Settings()
