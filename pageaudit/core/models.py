"""Shared data models for the page auditor."""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

# Caps applied to list fields of the report
MAX_MIXED_CONTENT = 25
MAX_JS_ERRORS = 25


@dataclass
class SecurityHeaders:
    """Security-relevant response headers; None means the header was absent."""
    strict_transport_security: Optional[str] = None
    content_security_policy: Optional[str] = None
    x_content_type_options: Optional[str] = None
    x_frame_options: Optional[str] = None
    referrer_policy: Optional[str] = None
    permissions_policy: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "strictTransportSecurity": self.strict_transport_security,
            "contentSecurityPolicy": self.content_security_policy,
            "xContentTypeOptions": self.x_content_type_options,
            "xFrameOptions": self.x_frame_options,
            "referrerPolicy": self.referrer_policy,
            "permissionsPolicy": self.permissions_policy,
        }


@dataclass
class CookieInfo:
    name: str
    http_only: bool = False
    secure: bool = False
    same_site: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "secure": self.secure,
            "httpOnly": self.http_only,
            "sameSite": self.same_site,
        }


@dataclass
class ProbeResults:
    """Indicators collected by the injection probes."""
    sqli: List[Dict[str, str]] = field(default_factory=list)
    xss: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            "possibleSQLiIndicators": list(self.sqli),
            "possibleXSSIndicators": list(self.xss),
        }


@dataclass
class SecurityReport:
    """Result of one audit. Produced once, never updated."""
    url: str
    status: Optional[int] = None
    is_https: bool = False
    headers: SecurityHeaders = field(default_factory=SecurityHeaders)
    cookies: List[CookieInfo] = field(default_factory=list)
    mixed_content: List[str] = field(default_factory=list)
    javascript_errors: List[str] = field(default_factory=list)
    probes: ProbeResults = field(default_factory=ProbeResults)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "security": {
                "status": self.status,
                "isHTTPS": self.is_https,
                "headers": self.headers.to_dict(),
                "cookies": [c.to_dict() for c in self.cookies],
                "mixedContent": self.mixed_content[:MAX_MIXED_CONTENT],
                "javascriptErrors": self.javascript_errors[:MAX_JS_ERRORS],
                "probes": self.probes.to_dict(),
                "recommendations": list(self.recommendations),
            },
        }


@dataclass
class AuditResult:
    """An audit report plus the identifiers of the files written for it."""
    report: SecurityReport
    report_id: str
    report_url: str
    screenshot_url: str


@dataclass
class Link:
    text: str
    href: str


@dataclass
class ScrapeResult:
    """Basic page metadata."""
    title: str = ""
    meta_description: str = ""
    canonical: str = ""
    robots: str = ""
    h1: List[str] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_page_data(cls, data: Dict[str, Any]) -> "ScrapeResult":
        return cls(
            title=data.get("title") or "",
            meta_description=data.get("metaDescription") or "",
            canonical=data.get("canonical") or "",
            robots=data.get("robots") or "",
            h1=[h for h in (data.get("h1") or []) if h],
            links=[Link(text=l.get("text") or "", href=l.get("href") or "")
                   for l in (data.get("links") or [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "metaDescription": self.meta_description,
            "canonical": self.canonical,
            "robots": self.robots,
            "h1": list(self.h1),
            "links": [{"text": l.text, "href": l.href} for l in self.links],
        }
