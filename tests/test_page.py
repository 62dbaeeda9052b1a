from pathlib import Path

import pytest

from pageaudit.core.errors import ValidationError
from pageaudit.core.page import scrape, screenshot


def test_scrape_uses_light_wait_and_caps_links(settings, log, fakes):
    page = fakes.Page(eval_result={
        "title": "T",
        "h1": ["One", ""],
        "links": [{"text": str(i), "href": f"https://a.test/{i}"} for i in range(30)],
    })
    browser = fakes.Browser(page)
    result = scrape("https://a.test", settings, log, browser)

    assert page.waits == [("domcontentloaded", 45000)]
    assert result.title == "T"
    assert result.meta_description == ""
    assert result.h1 == ["One"]
    assert len(result.links) == 20
    assert browser.closed == 1


def test_screenshot_sets_viewport_and_writes_png(settings, log, fakes):
    page = fakes.Page()
    url = screenshot("https://a.test", settings, log, fakes.Browser(page))

    assert page.viewport == {"width": 1366, "height": 768}
    assert page.waits == [("networkidle", 45000)]
    assert url.startswith("/screenshots/screenshot_") and url.endswith(".png")
    assert (Path(settings.screenshots_dir) / url.rsplit("/", 1)[-1]).is_file()


def test_scrape_rejects_non_http_before_launch(settings, log, fakes):
    browser = fakes.Browser()
    with pytest.raises(ValidationError):
        scrape("file:///etc/passwd", settings, log, browser)
    assert browser.opened == 0
