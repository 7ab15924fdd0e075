"""
``${NAME}`` placeholder substitution for scenarios.

Substitution is a single pass: a substituted value is never scanned
again, so values may safely contain ``${...}`` text of their own.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from uiscenario.runner.errors import MissingVariable
from uiscenario.runner.scenario import TestScenario

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")

# Fields of steps and expectations that may carry placeholders.
_TEMPLATED_FIELDS: Tuple[str, ...] = ("selector", "value", "skip_if_has_class")


def interpolate(text: str, env_vars: Mapping[str, str]) -> str:
    """
    Replace every ``${NAME}`` marker in ``text`` with ``env_vars[NAME]``.

    Empty values count as missing.

    :raises MissingVariable: If a referenced name is absent or empty
    """

    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1)
        value = env_vars.get(key)
        if not value:
            raise MissingVariable(key)
        return value

    return _PLACEHOLDER.sub(_sub, text)


def _interpolate_optional(text: Optional[str], env_vars: Mapping[str, str]) -> Optional[str]:
    # None and "" pass through untouched.
    return interpolate(text, env_vars) if text else text


def _interpolate_record(record: BaseModel, env_vars: Mapping[str, str]) -> BaseModel:
    update: Dict[str, Any] = {}
    for field in _TEMPLATED_FIELDS:
        if field in type(record).model_fields:
            update[field] = _interpolate_optional(getattr(record, field), env_vars)
    return record.model_copy(update=update)


def normalize_scenario(scenario: TestScenario, env_vars: Mapping[str, str]) -> TestScenario:
    """
    Return a copy of ``scenario`` with placeholders resolved.

    The URL and the templated fields of every step and expectation are
    interpolated; absent optional fields stay absent. With an empty
    ``env_vars`` the scenario is copied without any lookup.

    :raises MissingVariable: On the first unresolved placeholder
    """
    if not env_vars:
        return scenario.model_copy()
    return scenario.model_copy(
        update={
            "url": interpolate(scenario.url, env_vars),
            "steps": [_interpolate_record(s, env_vars) for s in scenario.steps],
            "expectations": [_interpolate_record(e, env_vars) for e in scenario.expectations],
        }
    )
