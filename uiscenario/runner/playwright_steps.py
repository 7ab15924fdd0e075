"""
Implementation of step execution.

Each supported ``action`` is mapped to a primitive of the ``Driver``.
Steps run strictly in order and the first failure aborts the sequence;
nothing is retried at this layer.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, Optional

import structlog

from uiscenario.runner.driver import Driver
from uiscenario.runner.errors import MissingSelector, UnknownAction

logger = structlog.get_logger(__name__)

DEFAULT_WAIT_MS = 1000

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(text: Optional[str], default: int) -> int:
    """
    Lenient integer parse: leading digits win, anything else is ``default``.

    ``"250"`` and ``"250ms"`` both give 250; ``None``, ``""`` and ``"abc"``
    give ``default``.
    """
    if not text:
        return default
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else default


def _selector(step: Any) -> str:
    selector = getattr(step, "selector", None)
    if not selector:
        raise MissingSelector(step.action)
    return selector


def _value(step: Any) -> str:
    return getattr(step, "value", None) or ""


def _fill(driver: Driver, step: Any) -> None:
    driver.fill(_selector(step), _value(step))


def _click(driver: Driver, step: Any) -> None:
    selector = _selector(step)
    skip_class = getattr(step, "skip_if_has_class", None)
    if skip_class and skip_class in driver.class_list(selector):
        logger.debug("step.skipped", action="click", selector=selector, has_class=skip_class)
        return
    driver.click(selector)


def _type(driver: Driver, step: Any) -> None:
    driver.type_text(_selector(step), _value(step), getattr(step, "delay", None) or 0)


def _select(driver: Driver, step: Any) -> None:
    driver.select_option(_selector(step), _value(step))


def _check(driver: Driver, step: Any) -> None:
    driver.check(_selector(step))


def _uncheck(driver: Driver, step: Any) -> None:
    driver.uncheck(_selector(step))


def _hover(driver: Driver, step: Any) -> None:
    driver.hover(_selector(step))


def _wait(driver: Driver, step: Any) -> None:
    driver.wait(max(0, parse_int(getattr(step, "value", None), DEFAULT_WAIT_MS)))


STEP_HANDLERS: Dict[str, Callable[[Driver, Any], None]] = {
    "fill": _fill,
    "click": _click,
    "type": _type,
    "select": _select,
    "check": _check,
    "uncheck": _uncheck,
    "hover": _hover,
    "wait": _wait,
}


def execute_step(driver: Driver, step: Any) -> None:
    """
    Execute a single step against ``driver``.

    :param step: Any of the step models from ``uiscenario.runner.scenario``
    :raises UnknownAction: If ``step.action`` is not supported
    :raises MissingSelector: If the action needs a selector and has none
    """
    handler = STEP_HANDLERS.get(step.action)
    if handler is None:
        raise UnknownAction(step.action)
    handler(driver, step)


def execute_steps(driver: Driver, steps: Iterable[Any]) -> None:
    for step in steps:
        execute_step(driver, step)
