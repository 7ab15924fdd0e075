"""
Validation of scenario expectations against the page state.

Unlike steps, most expectation types are permissive about missing
inputs: ``visible``, ``hidden`` and ``count`` are skipped without a
selector, and ``attribute`` is skipped without a selector or attribute
name. ``text`` and ``notText`` still fail loudly when their selector or
value is missing. Keep the two policies apart; scenario files rely on
the skips.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable

from uiscenario.runner.driver import Driver
from uiscenario.runner.errors import UnknownExpectation
from uiscenario.runner.playwright_steps import parse_int


def _url(driver: Driver, exp: Any) -> None:
    driver.expect_url(exp.value or "")


def _text(driver: Driver, exp: Any) -> None:
    if not exp.selector:
        raise ValueError("Missing selector for text expectation")
    if not exp.value:
        raise ValueError("Missing value for text expectation")
    driver.expect_text(exp.selector, exp.value)


def _not_text(driver: Driver, exp: Any) -> None:
    if not exp.selector:
        raise ValueError("Missing selector for notText expectation")
    if not exp.value:
        raise ValueError("Missing value for notText expectation")
    driver.expect_not_text(exp.selector, exp.value)


def _visible(driver: Driver, exp: Any) -> None:
    if exp.selector:
        driver.expect_visible(exp.selector)


def _hidden(driver: Driver, exp: Any) -> None:
    if exp.selector:
        driver.expect_hidden(exp.selector)


def _attribute(driver: Driver, exp: Any) -> None:
    if exp.selector and exp.attribute:
        driver.expect_attribute(exp.selector, exp.attribute, exp.value or "")


def _count(driver: Driver, exp: Any) -> None:
    if exp.selector:
        driver.expect_count(exp.selector, parse_int(exp.value, 0))


EXPECTATION_HANDLERS: Dict[str, Callable[[Driver, Any], None]] = {
    "url": _url,
    "text": _text,
    "notText": _not_text,
    "visible": _visible,
    "hidden": _hidden,
    "attribute": _attribute,
    "count": _count,
}


def validate_expectation(driver: Driver, expectation: Any) -> None:
    """
    Check a single expectation.

    :raises UnknownExpectation: If ``expectation.type`` is not supported
    :raises AssertionError: Propagated from the driver on mismatch
    """
    handler = EXPECTATION_HANDLERS.get(expectation.type)
    if handler is None:
        raise UnknownExpectation(expectation.type)
    handler(driver, expectation)


def validate_expectations(driver: Driver, expectations: Iterable[Any]) -> None:
    for expectation in expectations:
        validate_expectation(driver, expectation)
