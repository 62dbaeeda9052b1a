"""Single-page read operations: metadata scrape and screenshot."""

from pathlib import Path
from typing import Optional

from pageaudit.core.browser import SessionFactory, browser_session
from pageaudit.core.config import Settings
from pageaudit.core.models import ScrapeResult
from pageaudit.core import storage
from pageaudit.parsers.body import require_url

MAX_LINKS = 20

_EXTRACT_JS = """(maxLinks) => {
  const pick = (sel, attr) => {
    const el = document.querySelector(sel);
    if (!el) return '';
    return attr ? el.getAttribute(attr) || '' : (el.textContent || '').trim();
  };
  return {
    title: document.title || '',
    metaDescription: pick('meta[name="description"]', 'content'),
    canonical: pick('link[rel="canonical"]', 'href'),
    robots: pick('meta[name="robots"]', 'content'),
    h1: Array.from(document.querySelectorAll('h1'))
      .map(el => (el.textContent || '').trim()).filter(Boolean),
    links: Array.from(document.querySelectorAll('a[href]')).slice(0, maxLinks)
      .map(el => ({ text: (el.textContent || '').trim(), href: el.href }))
  };
}"""


def scrape(url: str, settings: Settings, logger=None,
           session_factory: Optional[SessionFactory] = None) -> ScrapeResult:
    url = require_url(url)
    session_factory = session_factory or browser_session
    if logger:
        logger.info(f"Scraping {url}")

    with session_factory(settings) as page:
        page.goto(url, wait_until="domcontentloaded",
                  timeout=settings.scrape_timeout)
        data = page.evaluate(_EXTRACT_JS, MAX_LINKS)

    result = ScrapeResult.from_page_data(data or {})
    result.links = result.links[:MAX_LINKS]
    if logger:
        logger.ok(f"Scraped {url}: {len(result.h1)} h1, {len(result.links)} link(s)")
    return result


def screenshot(url: str, settings: Settings, logger=None,
               session_factory: Optional[SessionFactory] = None) -> str:
    """Capture a full-page PNG and return its public URL."""
    url = require_url(url)
    session_factory = session_factory or browser_session
    filename = f"screenshot_{storage.now_ms()}.png"

    with session_factory(settings) as page:
        page.set_viewport_size(settings.viewport)
        page.goto(url, wait_until="networkidle",
                  timeout=settings.screenshot_timeout)
        page.screenshot(path=str(Path(settings.screenshots_dir) / filename),
                        full_page=True)

    if logger:
        logger.ok(f"Screenshot of {url} saved as {filename}")
    return storage.screenshot_url(filename)
