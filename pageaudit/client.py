"""Thin client for a running pageaudit server."""

from typing import Any, Dict, Optional

import httpx


class ApiClient:
    def __init__(self, base_url: str = "http://127.0.0.1:4000",
                 timeout: float = 180.0, transport: httpx.BaseTransport | None = None):
        # Audits navigate several times; the read timeout has to outlast them
        self.client = httpx.Client(base_url=base_url, timeout=timeout,
                                   transport=transport)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.client.post(path, json=body)
        try:
            data = resp.json()
        except ValueError:
            data = {"success": False, "error": "Non-JSON response",
                    "details": resp.text}
        data.setdefault("success", resp.is_success)
        return data

    def hello(self) -> Dict[str, Any]:
        return self.client.get("/api/hello").json()

    def scrape(self, url: str) -> Dict[str, Any]:
        return self._post("/api/scrape", {"url": url})

    def screenshot(self, url: str) -> Dict[str, Any]:
        return self._post("/api/screenshot", {"url": url})

    def audit(self, url: str) -> Dict[str, Any]:
        return self._post("/api/audit", {"url": url})

    def export(self, fmt: str, report: Optional[Dict[str, Any]] = None,
               report_id: Optional[str] = None,
               report_url: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"format": fmt}
        if report is not None:
            body["report"] = report
        if report_id:
            body["reportId"] = report_id
        if report_url:
            body["reportUrl"] = report_url
        return self._post("/api/export", body)
