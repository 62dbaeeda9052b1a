"""In-memory stand-ins for a Playwright page, and shared fixtures."""

from contextlib import contextmanager
from pathlib import Path

import pytest

from pageaudit.api.app import create_app
from pageaudit.core.config import Settings
from pageaudit.core.storage import ensure_dirs
from pageaudit.reporters.console import Log


class FakeResponse:
    def __init__(self, status=200, headers=None, set_cookie=()):
        self.status = status
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.set_cookie = list(set_cookie)

    def headers_array(self):
        arr = [{"name": k, "value": v} for k, v in self.headers.items()]
        arr += [{"name": "Set-Cookie", "value": c} for c in self.set_cookie]
        return arr


class FakeRequest:
    def __init__(self, url):
        self.url = url


class FakeConsoleMessage:
    def __init__(self, type_, text):
        self.type = type_
        self.text = text


class FakeContext:
    def __init__(self, cookies):
        self._cookies = cookies

    def cookies(self):
        return list(self._cookies)


class FakePage:
    """Serves canned documents.

    *site* maps a URL to ``(FakeResponse, html)``; it may raise to simulate a
    navigation failure. Without one every URL answers 200 with an empty page.
    """

    def __init__(self, site=None, cookies=(), subresources=(), page_errors=(),
                 console=(), eval_result=None, hops=()):
        self.site = site or (lambda url: (FakeResponse(), "<html></html>"))
        self.context = FakeContext(list(cookies))
        self.subresources = list(subresources)
        # Responses seen before the final one on the first navigation
        self.hops = list(hops)
        self.page_errors = list(page_errors)
        self.console = list(console)
        self.eval_result = eval_result
        self.handlers = {}
        self.visited = []
        self.waits = []
        self.html = ""
        self.viewport = None
        self.screenshots = []
        self.pdfs = []
        self.evaluations = []

    def on(self, event, fn):
        self.handlers.setdefault(event, []).append(fn)

    def _emit(self, event, arg):
        for fn in self.handlers.get(event, []):
            fn(arg)

    def goto(self, url, wait_until=None, timeout=None):
        first = not self.visited
        self.visited.append(url)
        self.waits.append((wait_until, timeout))
        self._emit("request", FakeRequest(url))
        response, self.html = self.site(url)
        if first:
            for hop in self.hops:
                self._emit("response", hop)
        if response is not None:
            self._emit("response", response)
        for sub in self.subresources:
            self._emit("request", FakeRequest(sub))
        if first:
            for err in self.page_errors:
                self._emit("pageerror", Exception(err))
            for type_, text in self.console:
                self._emit("console", FakeConsoleMessage(type_, text))
        return response

    def content(self):
        return self.html

    def evaluate(self, expression, arg=None):
        self.evaluations.append((expression, arg))
        if "innerHTML" in expression:
            return arg in self.html
        return self.eval_result

    def set_viewport_size(self, size):
        self.viewport = size

    def screenshot(self, path, full_page=False):
        Path(path).write_bytes(b"\x89PNG\r\n")
        self.screenshots.append((path, full_page))

    def pdf(self, path, **kwargs):
        Path(path).write_bytes(b"%PDF-1.4\n")
        self.pdfs.append((path, kwargs))


class FakeBrowser:
    """Session factory handing out one FakePage; counts opens and closes."""

    def __init__(self, page=None):
        self.page = page or FakePage()
        self.opened = 0
        self.closed = 0

    @contextmanager
    def __call__(self, settings):
        self.opened += 1
        try:
            yield self.page
        finally:
            self.closed += 1


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path, verbose=0)
    ensure_dirs(s)
    return s


@pytest.fixture
def log():
    return Log(verbose=0)


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def app(settings, browser, log):
    app = create_app(settings, session_factory=browser, logger=log)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fakes():
    """Expose the fake classes to test modules."""
    class _Fakes:
        Page = FakePage
        Response = FakeResponse
        Browser = FakeBrowser
    return _Fakes
