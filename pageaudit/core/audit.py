"""Auditor: one URL in, one security report out.

Sequence: listeners → navigate → headers/cookies → probes → restore →
screenshot → recommendations → HTML report. Anything that raises outside the
probe phase aborts the audit.
"""

from pathlib import Path
from typing import List, Optional

from pageaudit.checkers.base import BaseProbe
from pageaudit.checkers.cookies import collect_cookies, set_cookie_headers
from pageaudit.checkers.headers import collect_headers
from pageaudit.checkers.recommendations import recommend
from pageaudit.checkers.sqli import SQLi
from pageaudit.checkers.xss import XSS
from pageaudit.core.browser import SessionFactory, browser_session
from pageaudit.core.config import Settings
from pageaudit.core.models import AuditResult, SecurityReport
from pageaudit.core import storage
from pageaudit.parsers.body import require_url
from pageaudit.reporters.html import render_report


class Auditor:
    def __init__(self, settings: Settings, logger=None,
                 session_factory: Optional[SessionFactory] = None):
        self.settings = settings
        self.logger = logger
        self.session_factory = session_factory or browser_session
        self.sqli = SQLi()
        self.xss = XSS()

    # ---------- listeners ----------
    def _watch(self, page, report: SecurityReport, responses: list) -> None:
        def on_request(req):
            if report.is_https and req.url.startswith("http://"):
                report.mixed_content.append(req.url)

        def on_console(msg):
            if msg.type == "error":
                report.javascript_errors.append(f"console.error: {msg.text}")

        page.on("request", on_request)
        page.on("pageerror", lambda err: report.javascript_errors.append(str(err)))
        page.on("console", on_console)
        # Redirect hops and sub-resources may set cookies the final response does not
        page.on("response", responses.append)

    # ---------- probes ----------
    def _run_probe(self, probe: BaseProbe, page, url: str) -> List[dict]:
        if self.logger:
            self.logger.debug(f"Probe {probe.name} on {probe.param}=")
        found = probe.run(page, url, self.settings.probe_timeout)
        if found and self.logger:
            self.logger.finding("high", f"Possible {probe.name}", found[0]["url"])
        return found

    def _probe(self, page, url: str, report: SecurityReport) -> None:
        """SQLi loop, XSS marker, then back to the original page.

        A failure at any point ends probing; indicators already found stay.
        """
        try:
            report.probes.sqli.extend(self._run_probe(self.sqli, page, url))
            report.probes.xss.extend(self._run_probe(self.xss, page, url))
            page.goto(url, wait_until="networkidle",
                      timeout=self.settings.probe_timeout)
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Probing abandoned: {e}")

    # ---------- main ----------
    def audit(self, url: str) -> AuditResult:
        url = require_url(url)
        report = SecurityReport(url=url, is_https=url.lower().startswith("https://"))
        base = storage.report_base_id(url)
        shot_file = f"{base}.png"
        report_file = f"{base}.html"

        if self.logger:
            self.logger.info(f"Auditing {url}")

        with self.session_factory(self.settings) as page:
            responses = []
            self._watch(page, report, responses)

            response = page.goto(url, wait_until="networkidle",
                                 timeout=self.settings.audit_timeout)
            if response is not None:
                report.status = response.status
                report.headers = collect_headers(response.headers)
                # Main response last so its Set-Cookie wins
                responses.append(response)

            set_cookie = []
            for resp in list(responses):
                set_cookie.extend(set_cookie_headers(resp.headers_array()))

            report.cookies = collect_cookies(page.context.cookies(), set_cookie)

            self._probe(page, url, report)

            page.screenshot(path=str(Path(self.settings.screenshots_dir) / shot_file),
                            full_page=True)

        report.recommendations = recommend(report)

        html = render_report(report, shot_file)
        (Path(self.settings.reports_dir) / report_file).write_text(html, encoding="utf-8")

        if self.logger:
            for header, value in report.headers.to_dict().items():
                if value is None:
                    self.logger.finding("low", f"Missing header {header}")
            self.logger.ok(f"Audit of {url} done: "
                           f"{len(report.recommendations)} recommendation(s)")

        return AuditResult(
            report=report,
            report_id=base,
            report_url=storage.report_url(report_file),
            screenshot_url=storage.screenshot_url(shot_file),
        )
