"""Validation of JSON request bodies."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pageaudit.core.errors import ValidationError

URL_RE = re.compile(r"^https?://", re.I)

BAD_URL = "Provide a valid http(s) URL."
MISSING_FORMAT = 'Missing "format". Use json | csv | issues_csv | pdf.'
MISSING_REPORT = 'Provide "report" JSON to export.'
MISSING_REPORT_URL = 'Provide "reportUrl" (HTML report) for PDF export.'
UNSUPPORTED_FORMAT = "Unsupported format. Use json | csv | issues_csv | pdf."

EXPORT_FORMATS = ("json", "csv", "issues_csv", "pdf")


def require_url(value: Any) -> str:
    """Return *value* when it looks like an http(s) URL, else raise."""
    if not isinstance(value, str) or not URL_RE.match(value):
        raise ValidationError(BAD_URL)
    return value


def url_from_body(body: Optional[Dict[str, Any]]) -> str:
    return require_url((body or {}).get("url"))


@dataclass
class ExportRequest:
    format: str
    report: Optional[Dict[str, Any]] = None
    report_id: Optional[str] = None
    report_url: Optional[str] = None


def parse_export(body: Optional[Dict[str, Any]]) -> ExportRequest:
    body = body or {}
    fmt = body.get("format")
    if not fmt:
        raise ValidationError(MISSING_FORMAT)
    fmt = str(fmt).lower()
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(UNSUPPORTED_FORMAT)

    req = ExportRequest(
        format=fmt,
        report=body.get("report") or None,
        report_id=body.get("reportId") or None,
        report_url=body.get("reportUrl") or None,
    )

    if fmt in ("json", "csv", "issues_csv"):
        if not isinstance(req.report, dict):
            raise ValidationError(MISSING_REPORT)
    elif fmt == "pdf" and not (req.report_url or req.report_id):
        raise ValidationError(MISSING_REPORT_URL)
    return req
