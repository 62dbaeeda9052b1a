"""Headless browser sessions.

Every operation gets its own browser: launched on entry, closed on exit,
including when navigation or probing raises. Sessions are never pooled.
"""

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator

from playwright.sync_api import Page, sync_playwright

from pageaudit.core.config import Settings

SessionFactory = Callable[[Settings], ContextManager[Page]]


@contextmanager
def browser_session(settings: Settings) -> Iterator[Page]:
    """Yield a fresh page in a fresh Chromium instance."""
    with sync_playwright() as pw:
        browser = pw.chromium.launch(
            headless=settings.headless, args=settings.launch_args)
        try:
            context = browser.new_context()
            yield context.new_page()
        finally:
            browser.close()
