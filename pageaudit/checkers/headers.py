"""Security response header collection."""

from typing import Dict, Optional

from pageaudit.core.models import SecurityHeaders

# header name (lower-case) → SecurityHeaders attribute
SECURITY_HEADERS = {
    "strict-transport-security": "strict_transport_security",
    "content-security-policy": "content_security_policy",
    "x-content-type-options": "x_content_type_options",
    "x-frame-options": "x_frame_options",
    "referrer-policy": "referrer_policy",
    "permissions-policy": "permissions_policy",
}


def collect_headers(raw: Optional[Dict[str, str]]) -> SecurityHeaders:
    """Pick the security headers out of a response header mapping.

    Empty values count as absent.
    """
    lowered = {k.lower(): v for k, v in (raw or {}).items()}
    values = {attr: lowered.get(name) or None
              for name, attr in SECURITY_HEADERS.items()}
    return SecurityHeaders(**values)
