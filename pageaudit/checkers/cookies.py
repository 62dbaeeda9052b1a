"""Cookie flag collection.

Browsers report a SameSite value even for cookies set without the attribute,
so when any response of the navigation carries a Set-Cookie header for a
cookie, the attribute is read from the header instead. The last header wins.
"""

from http.cookies import SimpleCookie, CookieError
from typing import Dict, Iterable, List, Optional

from pageaudit.core.models import CookieInfo


def samesite_from_set_cookie(headers: Iterable[str]) -> Dict[str, Optional[str]]:
    """Map cookie name → SameSite attribute (None when the header omits it)."""
    found: Dict[str, Optional[str]] = {}
    for header in headers:
        jar = SimpleCookie()
        try:
            jar.load(header)
        except CookieError:
            continue
        for morsel in jar.values():
            found[morsel.key] = str(morsel["samesite"] or "").strip() or None
    return found


def set_cookie_headers(header_array: Optional[List[Dict[str, str]]]) -> List[str]:
    """Extract Set-Cookie values from a [{name, value}] header list."""
    values: List[str] = []
    for h in header_array or []:
        if h.get("name", "").lower() == "set-cookie":
            # Some stacks fold several cookies into one value, newline-separated
            values.extend(v for v in h.get("value", "").split("\n") if v.strip())
    return values


def collect_cookies(browser_cookies: Iterable[dict],
                    set_cookie: Iterable[str] = ()) -> List[CookieInfo]:
    declared = samesite_from_set_cookie(set_cookie)
    cookies = []
    for c in browser_cookies:
        name = c.get("name", "")
        if name in declared:
            same_site = declared[name]
        else:
            same_site = c.get("sameSite") or None
        cookies.append(CookieInfo(
            name=name,
            http_only=bool(c.get("httpOnly")),
            secure=bool(c.get("secure")),
            same_site=same_site,
        ))
    return cookies
