"""
Fixtures for driving the interpreter without a browser.

``FakeDriver`` records every primitive call as ``(name, *args)`` and
can be told to raise from a given primitive or to report the page as
closed.
"""

from typing import Dict, List, Tuple

import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class FakeDriver:
    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.classes: Dict[str, List[str]] = {}
        self.errors: Dict[str, BaseException] = {}
        self.closed = False

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def navigate(self, url):
        self._record("navigate", url)

    def fill(self, selector, text):
        self._record("fill", selector, text)

    def click(self, selector):
        self._record("click", selector)

    def type_text(self, selector, text, delay):
        self._record("type_text", selector, text, delay)

    def select_option(self, selector, value):
        self._record("select_option", selector, value)

    def check(self, selector):
        self._record("check", selector)

    def uncheck(self, selector):
        self._record("uncheck", selector)

    def hover(self, selector):
        self._record("hover", selector)

    def wait(self, ms):
        self._record("wait", ms)

    def class_list(self, selector):
        self._record("class_list", selector)
        return list(self.classes.get(selector, []))

    def expect_url(self, url):
        self._record("expect_url", url)

    def expect_text(self, selector, text):
        self._record("expect_text", selector, text)

    def expect_not_text(self, selector, text):
        self._record("expect_not_text", selector, text)

    def expect_visible(self, selector):
        self._record("expect_visible", selector)

    def expect_hidden(self, selector):
        self._record("expect_hidden", selector)

    def expect_attribute(self, selector, name, value):
        self._record("expect_attribute", selector, name, value)

    def expect_count(self, selector, count):
        self._record("expect_count", selector, count)

    def screenshot(self, path, full_page=True):
        self._record("screenshot", path, full_page)
        with open(path, "wb") as f:
            f.write(PNG_BYTES)
        return PNG_BYTES

    def is_closed(self):
        return self.closed


class RecordingSink:
    def __init__(self) -> None:
        self.attachments: List[Tuple[str, bytes, str]] = []

    def attach(self, name, body, content_type):
        self.attachments.append((name, body, content_type))


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
