"""
Page-automation surface used by the interpreter.

``Driver`` lists the primitives the step executor, the expectation
validator and the scenario runner rely on. ``PlaywrightDriver`` maps
them onto a Playwright sync ``Page``; assertions go through
``playwright.sync_api.expect`` so they auto-wait up to the configured
timeout and raise ``AssertionError`` on mismatch.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from playwright.sync_api import Page, expect


class Driver(Protocol):
    # interactions
    def navigate(self, url: str) -> None: ...

    def fill(self, selector: str, text: str) -> None: ...

    def click(self, selector: str) -> None: ...

    def type_text(self, selector: str, text: str, delay: float) -> None: ...

    def select_option(self, selector: str, value: str) -> None: ...

    def check(self, selector: str) -> None: ...

    def uncheck(self, selector: str) -> None: ...

    def hover(self, selector: str) -> None: ...

    def wait(self, ms: int) -> None: ...

    def class_list(self, selector: str) -> List[str]: ...

    # assertions
    def expect_url(self, url: str) -> None: ...

    def expect_text(self, selector: str, text: str) -> None: ...

    def expect_not_text(self, selector: str, text: str) -> None: ...

    def expect_visible(self, selector: str) -> None: ...

    def expect_hidden(self, selector: str) -> None: ...

    def expect_attribute(self, selector: str, name: str, value: str) -> None: ...

    def expect_count(self, selector: str, count: int) -> None: ...

    # diagnostics
    def screenshot(self, path: str, full_page: bool = True) -> bytes: ...

    def is_closed(self) -> bool: ...


class PlaywrightDriver:
    """
    ``Driver`` backed by a Playwright ``Page``.

    :param page: Page owned by the caller (one per scenario)
    :param timeout: Assertion timeout in milliseconds; ``None`` keeps
        Playwright's default
    """

    def __init__(self, page: Page, timeout: Optional[float] = None) -> None:
        self.page = page
        self.timeout = timeout

    def navigate(self, url: str) -> None:
        self.page.goto(url)

    def fill(self, selector: str, text: str) -> None:
        self.page.fill(selector, text)

    def click(self, selector: str) -> None:
        self.page.click(selector)

    def type_text(self, selector: str, text: str, delay: float) -> None:
        self.page.locator(selector).press_sequentially(text, delay=delay)

    def select_option(self, selector: str, value: str) -> None:
        self.page.select_option(selector, value)

    def check(self, selector: str) -> None:
        self.page.check(selector)

    def uncheck(self, selector: str) -> None:
        self.page.uncheck(selector)

    def hover(self, selector: str) -> None:
        self.page.hover(selector)

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)

    def class_list(self, selector: str) -> List[str]:
        class_attr = self.page.locator(selector).first.get_attribute("class")
        return class_attr.split() if class_attr else []

    def expect_url(self, url: str) -> None:
        expect(self.page).to_have_url(url, timeout=self.timeout)

    def expect_text(self, selector: str, text: str) -> None:
        # Narrow to the elements holding the text first, so a selector that
        # matches several elements does not trip strict mode.
        filtered = self.page.locator(selector).filter(has_text=text).first
        expect(filtered, f'"{text}" not found in element "{selector}"').to_contain_text(
            text, timeout=self.timeout
        )

    def expect_not_text(self, selector: str, text: str) -> None:
        expect(self.page.locator(selector)).not_to_contain_text(text, timeout=self.timeout)

    def expect_visible(self, selector: str) -> None:
        expect(self.page.locator(selector)).to_be_visible(timeout=self.timeout)

    def expect_hidden(self, selector: str) -> None:
        expect(self.page.locator(selector)).to_be_hidden(timeout=self.timeout)

    def expect_attribute(self, selector: str, name: str, value: str) -> None:
        expect(self.page.locator(selector)).to_have_attribute(name, value, timeout=self.timeout)

    def expect_count(self, selector: str, count: int) -> None:
        expect(self.page.locator(selector)).to_have_count(count, timeout=self.timeout)

    def screenshot(self, path: str, full_page: bool = True) -> bytes:
        return self.page.screenshot(path=path, full_page=full_page)

    def is_closed(self) -> bool:
        return self.page.is_closed()
