"""
Loading of scenario definitions.

A scenario document holds a ``testScenarios`` array. Each scenario has
a target URL, an ordered list of interaction steps and an ordered list
of post-condition checks (expectations). Steps are discriminated by
their ``action`` field and expectations by their ``type`` field, so a
record with an unsupported tag is rejected while the document is
loaded rather than halfway through a browser session.

Documents are read as JSON, or as YAML when the file extension says so.
"""

from __future__ import annotations

import json
import os
import re
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Sequence, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from uiscenario.runner.errors import ScenarioValidationError


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ---- steps -----------------------------------------------------------------


class FillStep(_Record):
    action: Literal["fill"] = "fill"
    selector: Optional[str] = None
    value: Optional[str] = None


class ClickStep(_Record):
    action: Literal["click"] = "click"
    selector: Optional[str] = None
    # Skip the click (without failing) when the element carries this class.
    skip_if_has_class: Optional[str] = Field(default=None, alias="skipIfHasClass")


class TypeStep(_Record):
    action: Literal["type"] = "type"
    selector: Optional[str] = None
    value: Optional[str] = None
    delay: Optional[float] = Field(default=None, ge=0)


class SelectStep(_Record):
    action: Literal["select"] = "select"
    selector: Optional[str] = None
    value: Optional[str] = None


class CheckStep(_Record):
    action: Literal["check"] = "check"
    selector: Optional[str] = None


class UncheckStep(_Record):
    action: Literal["uncheck"] = "uncheck"
    selector: Optional[str] = None


class HoverStep(_Record):
    action: Literal["hover"] = "hover"
    selector: Optional[str] = None


class WaitStep(_Record):
    action: Literal["wait"] = "wait"
    # Duration in milliseconds.
    value: Optional[str] = None


TestStep = Annotated[
    Union[
        FillStep,
        ClickStep,
        TypeStep,
        SelectStep,
        CheckStep,
        UncheckStep,
        HoverStep,
        WaitStep,
    ],
    Field(discriminator="action"),
]


# ---- expectations ----------------------------------------------------------


class UrlExpectation(_Record):
    type: Literal["url"] = "url"
    value: Optional[str] = None


class TextExpectation(_Record):
    type: Literal["text"] = "text"
    selector: Optional[str] = None
    value: Optional[str] = None


class NotTextExpectation(_Record):
    type: Literal["notText"] = "notText"
    selector: Optional[str] = None
    value: Optional[str] = None


class VisibleExpectation(_Record):
    type: Literal["visible"] = "visible"
    selector: Optional[str] = None


class HiddenExpectation(_Record):
    type: Literal["hidden"] = "hidden"
    selector: Optional[str] = None


class AttributeExpectation(_Record):
    type: Literal["attribute"] = "attribute"
    selector: Optional[str] = None
    attribute: Optional[str] = None
    value: Optional[str] = None


class CountExpectation(_Record):
    type: Literal["count"] = "count"
    selector: Optional[str] = None
    value: Optional[str] = None


Expectation = Annotated[
    Union[
        UrlExpectation,
        TextExpectation,
        NotTextExpectation,
        VisibleExpectation,
        HiddenExpectation,
        AttributeExpectation,
        CountExpectation,
    ],
    Field(discriminator="type"),
]


class TestScenario(_Record):
    # Not a pytest test class.
    __test__: ClassVar[bool] = False

    id: str
    name: str
    url: str
    steps: List[TestStep] = Field(default_factory=list)
    expectations: List[Expectation] = Field(default_factory=list)
    tags: frozenset[str] = frozenset()


class ScenarioDocument(_Record):
    test_scenarios: List[TestScenario] = Field(alias="testScenarios")


def _format_errors(exc: ValidationError) -> List[str]:
    errors: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        errors.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return errors


def parse_scenarios(data: Any) -> List[TestScenario]:
    """Validate an already-decoded scenario document."""
    try:
        doc = ScenarioDocument.model_validate(data)
    except ValidationError as e:
        raise ScenarioValidationError(_format_errors(e)) from e
    return list(doc.test_scenarios)


def load_scenarios(path: str) -> List[TestScenario]:
    """
    Read and validate the scenarios stored at ``path``.

    :param path: JSON file (``.yaml``/``.yml`` are read as YAML)
    :raises ScenarioValidationError: If the file is unreadable or malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ScenarioValidationError([f"cannot read {path}: {e}"]) from e

    ext = os.path.splitext(path)[1].lower()
    try:
        if ext in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (ValueError, yaml.YAMLError) as e:
        raise ScenarioValidationError([f"cannot parse {path}: {e}"]) from e

    return parse_scenarios(data)


# ---- selection -------------------------------------------------------------


def get_scenario_by_id(scenarios: Sequence[TestScenario], scenario_id: str) -> Optional[TestScenario]:
    return next((s for s in scenarios if s.id == scenario_id), None)


def get_scenarios_by_tag(scenarios: Sequence[TestScenario], tag: str) -> List[TestScenario]:
    return [s for s in scenarios if tag in s.tags]


def get_scenarios_by_name(scenarios: Sequence[TestScenario], name_pattern: str) -> List[TestScenario]:
    """Case-insensitive regular-expression search against scenario names."""
    regex = re.compile(name_pattern, re.IGNORECASE)
    return [s for s in scenarios if regex.search(s.name)]


def select_scenarios(
    scenarios: Sequence[TestScenario],
    test_id: str = "",
    test_tag: str = "",
    test_name: str = "",
) -> List[TestScenario]:
    """
    Narrow ``scenarios`` by id, then tag, then name pattern.

    Empty filters are ignored; with none set every scenario is kept.
    """
    selected = list(scenarios)
    if test_id:
        match = get_scenario_by_id(selected, test_id)
        selected = [match] if match else []
    if test_tag:
        selected = get_scenarios_by_tag(selected, test_tag)
    if test_name:
        selected = get_scenarios_by_name(selected, test_name)
    return selected


def scenario_summary(scenario: TestScenario) -> Dict[str, Any]:
    """Short description used in log events."""
    return {
        "scenario_id": scenario.id,
        "steps": len(scenario.steps),
        "expectations": len(scenario.expectations),
    }
