"""Fixed rule table turning audit findings into advice."""

from typing import List

from pageaudit.core.models import SecurityReport

HTTPS = "Serve the site over HTTPS to protect data in transit."
HSTS = "Add HSTS (Strict-Transport-Security) to enforce HTTPS."
CSP = "Define a strict Content-Security-Policy to mitigate XSS and injections."
NOSNIFF = "Set X-Content-Type-Options: nosniff to prevent MIME sniffing."
FRAME = "Set X-Frame-Options or CSP frame-ancestors to prevent clickjacking."
REFERRER = "Set a Referrer-Policy to limit referrer leakage."
MIXED = "Remove/upgrade mixed-content HTTP resources on HTTPS pages."
SQLI = "Potential SQL injection indicators: parameterize queries and validate inputs."
XSS = "Reflected content indicator: sanitize/escape input and enforce a strict CSP."
JS_ERRORS = "Fix JavaScript runtime/console errors that may expose vulnerabilities."


def cookie_httponly(name: str) -> str:
    return f'Set HttpOnly on cookie "{name}" to block JS access.'


def cookie_secure(name: str) -> str:
    return f'Set Secure on cookie "{name}" so it is only sent over HTTPS.'


def cookie_samesite(name: str) -> str:
    return f'Set SameSite (Lax/Strict) on cookie "{name}" to mitigate CSRF.'


def recommend(report: SecurityReport) -> List[str]:
    """Apply every rule in order; drop exact duplicates, keeping the first."""
    recs: List[str] = []
    h = report.headers

    if not report.is_https:
        recs.append(HTTPS)
    if not h.strict_transport_security:
        recs.append(HSTS)
    if not h.content_security_policy:
        recs.append(CSP)
    if not h.x_content_type_options:
        recs.append(NOSNIFF)
    if not h.x_frame_options:
        recs.append(FRAME)
    if not h.referrer_policy:
        recs.append(REFERRER)
    if report.mixed_content:
        recs.append(MIXED)

    for c in report.cookies:
        if not c.http_only:
            recs.append(cookie_httponly(c.name))
        if report.is_https and not c.secure:
            recs.append(cookie_secure(c.name))
        if not c.same_site:
            recs.append(cookie_samesite(c.name))

    if report.probes.sqli:
        recs.append(SQLI)
    if report.probes.xss:
        recs.append(XSS)
    if report.javascript_errors:
        recs.append(JS_ERRORS)

    return list(dict.fromkeys(recs))
