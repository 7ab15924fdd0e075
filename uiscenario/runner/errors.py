"""
Error taxonomy for the scenario interpreter.

Driver failures (Playwright ``TimeoutError`` or the ``AssertionError``
raised by ``expect``) are not wrapped; they reach the caller unchanged.
"""

from __future__ import annotations

from typing import List


class ScenarioError(Exception):
    """Base class for interpreter errors."""


class MissingVariable(ScenarioError):
    """A ``${NAME}`` placeholder had no value, or an empty one."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Environment variable "{name}" not found')
        self.name = name


class MissingSelector(ScenarioError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Missing selector for {action} action")
        self.action = action


class UnknownAction(ScenarioError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown action: {action}")
        self.action = action


class UnknownExpectation(ScenarioError):
    def __init__(self, type_: str) -> None:
        super().__init__(f"Unknown expectation type: {type_}")
        self.type = type_


class ScenarioValidationError(ScenarioError):
    """Scenario document could not be read or does not match the schema."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("Invalid scenario data:\n" + "\n".join(f"  - {e}" for e in errors))
        self.errors = errors


class EnvFileNotFoundError(ScenarioError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f".env file not found at {path}. Please create it using .env.example as a template."
        )
        self.path = path
