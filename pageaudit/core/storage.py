"""Output directories, file identifiers and public file URLs."""

import re
import time
from pathlib import Path

from pageaudit.core.config import Settings

_UNSAFE = re.compile(r"[^a-z0-9]", re.I)
_UNSAFE_ID = re.compile(r"[^A-Za-z0-9_-]")


def ensure_dirs(settings: Settings) -> None:
    """Create the screenshot and report folders. Safe to call repeatedly."""
    for d in (settings.screenshots_dir, settings.reports_dir):
        Path(d).mkdir(parents=True, exist_ok=True)


def now_ms() -> int:
    return int(time.time() * 1000)


def report_base_id(url: str, stamp: int | None = None) -> str:
    """Identifier for an audit: sanitized URL prefix plus a millisecond stamp.

    Two audits of the same URL in the same millisecond collide.
    """
    stamp = now_ms() if stamp is None else stamp
    return f"{_UNSAFE.sub('_', url)[:60]}_{stamp}"


def sanitize_id(value: str) -> str:
    """Make a client-supplied identifier safe to use as a file stem."""
    return _UNSAFE_ID.sub("_", value)


def screenshot_url(filename: str) -> str:
    return f"/screenshots/{filename}"


def report_url(filename: str) -> str:
    return f"/reports/{filename}"


def resolve_report_file(settings: Settings, url: str) -> Path:
    """Map a /reports/... URL back to a file inside the reports directory.

    Only the last path segment is honored, so the result never leaves the
    reports directory.
    """
    name = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if not name:
        raise FileNotFoundError(f"No report file in {url!r}")
    path = Path(settings.reports_dir) / name
    if not path.is_file():
        raise FileNotFoundError(f"Report not found: {name}")
    return path
