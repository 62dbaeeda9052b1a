"""Report exports: JSON, key/value CSV, issues CSV and PDF.

The two CSV shapes are distinct on purpose. ``csv`` is a key/value summary of
one report's security section; ``issues_csv`` is one row per issue with
area/title/severity/details/fix columns.
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pageaudit.core.browser import SessionFactory, browser_session
from pageaudit.core.config import Settings
from pageaudit.core import storage
from pageaudit.parsers.body import ExportRequest

ISSUE_COLUMNS = ["area", "title", "severity", "details", "fix"]

_HEADER_LABELS = [
    ("strictTransportSecurity", "Strict-Transport-Security",
     "Add HSTS to enforce HTTPS.", "medium"),
    ("contentSecurityPolicy", "Content-Security-Policy",
     "Define a strict Content-Security-Policy.", "high"),
    ("xContentTypeOptions", "X-Content-Type-Options",
     "Set X-Content-Type-Options: nosniff.", "low"),
    ("xFrameOptions", "X-Frame-Options",
     "Set X-Frame-Options or CSP frame-ancestors.", "medium"),
    ("referrerPolicy", "Referrer-Policy",
     "Set a Referrer-Policy.", "low"),
]


def _present(value: Any) -> str:
    return "Present" if value else "Missing"


def summary_rows(report: Dict[str, Any]) -> List[List[Any]]:
    """Flatten a report's security section into key/value rows."""
    s = report.get("security") or {}
    h = s.get("headers") or {}
    probes = s.get("probes") or {}
    status = s.get("status")
    return [
        ["URL", report.get("url") or ""],
        ["HTTPS", str(s.get("isHTTPS")).lower()],
        ["Status", "" if status is None else status],
        ["HSTS", _present(h.get("strictTransportSecurity"))],
        ["CSP", _present(h.get("contentSecurityPolicy"))],
        ["X-Content-Type-Options", h.get("xContentTypeOptions") or "Missing"],
        ["X-Frame-Options", h.get("xFrameOptions") or "Missing"],
        ["Referrer-Policy", h.get("referrerPolicy") or "Missing"],
        ["Permissions-Policy", h.get("permissionsPolicy") or "-"],
        ["Cookies", len(s.get("cookies") or [])],
        ["MixedContentCount", len(s.get("mixedContent") or [])],
        ["JSErrorsCount", len(s.get("javascriptErrors") or [])],
        ["SQLiIndicators", len(probes.get("possibleSQLiIndicators") or [])],
        ["XSSIndicators", len(probes.get("possibleXSSIndicators") or [])],
    ]


def derive_issues(report: Dict[str, Any]) -> List[Dict[str, str]]:
    """Issue list for a report; uses ``report["issues"]`` when provided."""
    if isinstance(report.get("issues"), list):
        return report["issues"]

    s = report.get("security") or {}
    h = s.get("headers") or {}
    probes = s.get("probes") or {}
    is_https = bool(s.get("isHTTPS"))
    issues: List[Dict[str, str]] = []

    def add(area, title, severity, details="", fix=""):
        issues.append({"area": area, "title": title, "severity": severity,
                       "details": details, "fix": fix})

    if not is_https:
        add("transport", "Site not served over HTTPS", "high",
            report.get("url") or "", "Serve the site over HTTPS.")
    for key, label, fix, severity in _HEADER_LABELS:
        if not h.get(key):
            add("headers", f"Missing {label}", severity, "", fix)
    mixed = s.get("mixedContent") or []
    if mixed:
        add("content", "Mixed content", "medium",
            f"{len(mixed)} HTTP resource(s) on an HTTPS page",
            "Load every resource over HTTPS.")
    for c in s.get("cookies") or []:
        name = c.get("name", "")
        if not c.get("httpOnly"):
            add("cookies", f'Cookie "{name}" without HttpOnly', "medium", "",
                "Set the HttpOnly flag.")
        if is_https and not c.get("secure"):
            add("cookies", f'Cookie "{name}" without Secure', "medium", "",
                "Set the Secure flag.")
        if not c.get("sameSite"):
            add("cookies", f'Cookie "{name}" without SameSite', "low", "",
                "Set SameSite=Lax or Strict.")
    for ind in probes.get("possibleSQLiIndicators") or []:
        add("injection", "Possible SQL injection", "high",
            f"payload {ind.get('payload', '')!r} at {ind.get('url', '')}",
            "Parameterize queries and validate inputs.")
    for ind in probes.get("possibleXSSIndicators") or []:
        add("injection", "Reflected input", "high",
            f"parameter {ind.get('param', '')} at {ind.get('url', '')}",
            "Escape output and enforce a strict CSP.")
    errors = s.get("javascriptErrors") or []
    if errors:
        add("javascript", "JavaScript errors", "low",
            f"{len(errors)} error(s) captured", "Fix runtime/console errors.")
    return issues


# ---------- writers ----------

def write_json(report: Dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(report, indent=2), encoding="utf-8")


def write_csv(report: Dict[str, Any], path: Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(["key", "value"])
        writer.writerows(summary_rows(report))


def write_issues_csv(report: Dict[str, Any], path: Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
        writer.writerow(ISSUE_COLUMNS)
        for issue in derive_issues(report):
            writer.writerow([str(issue.get(col) or "") for col in ISSUE_COLUMNS])


def write_pdf(html_file: Path, path: Path, settings: Settings,
              session_factory: SessionFactory) -> None:
    with session_factory(settings) as page:
        page.goto(html_file.resolve().as_uri(), wait_until="networkidle",
                  timeout=settings.pdf_timeout)
        page.pdf(path=str(path), print_background=True, format="A4")


def export(req: ExportRequest, settings: Settings, logger=None,
           session_factory: Optional[SessionFactory] = None) -> str:
    """Write one export file under the reports directory; return its URL."""
    base = storage.sanitize_id(req.report_id) if req.report_id \
        else f"report_{storage.now_ms()}"
    reports = Path(settings.reports_dir)

    if req.format == "json":
        filename = f"{base}.json"
        write_json(req.report, reports / filename)
    elif req.format == "csv":
        filename = f"{base}.csv"
        write_csv(req.report, reports / filename)
    elif req.format == "issues_csv":
        filename = f"{base}_issues.csv"
        write_issues_csv(req.report, reports / filename)
    elif req.format == "pdf":
        source = req.report_url or storage.report_url(f"{base}.html")
        html_file = storage.resolve_report_file(settings, source)
        filename = f"{base}.pdf"
        write_pdf(html_file, reports / filename, settings,
                  session_factory or browser_session)
    else:
        raise ValueError(f"Unsupported export format: {req.format}")

    if logger:
        logger.ok(f"Exported {req.format} to {filename}")
    return storage.report_url(filename)
