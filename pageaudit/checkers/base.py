"""Abstract base for the injection probes."""

from abc import ABC, abstractmethod
from typing import List, Dict
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from playwright.sync_api import Page


class BaseProbe(ABC):
    """A probe drives an open page through crafted URL variants."""

    name: str = "Unnamed Probe"
    param: str = "probe"

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def get_payloads(self) -> List[str]:
        """Return the ordered list of payloads to inject."""
        ...

    @abstractmethod
    def check(self, page: Page, payload: str) -> bool:
        """Inspect the page after navigating to the probe URL."""
        ...

    def run(self, page: Page, url: str, timeout: int) -> List[Dict[str, str]]:
        """Try each payload in order and stop at the first hit.

        Exceptions propagate; the caller decides whether probing is fatal.
        """
        for payload in self.get_payloads():
            probe_url = with_query_param(url, self.param, payload)
            page.goto(probe_url, wait_until="domcontentloaded", timeout=timeout)
            if self.check(page, payload):
                return [self.indicator(payload, probe_url)]
        return []

    def indicator(self, payload: str, probe_url: str) -> Dict[str, str]:
        return {"payload": payload, "url": probe_url}


# ── shared helpers ──────────────────────────────────────────────

def with_query_param(url: str, name: str, value: str) -> str:
    """Set *name* to *value* in the query string, replacing earlier values."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
             if k != name]
    query.append((name, value))
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/",
                       urlencode(query), parts.fragment))
