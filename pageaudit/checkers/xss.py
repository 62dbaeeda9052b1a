from pageaudit.checkers.base import BaseProbe

MARKER = "xss_probe_<img>"

_REFLECTED_JS = "m => document.documentElement.innerHTML.includes(m)"


class XSS(BaseProbe):
    """
    Reflected input indicator.
    Injects a harmless marker containing a tag into ``q`` and reports when the
    live DOM still holds the marker verbatim, i.e. the angle brackets were not
    escaped. One request, no script execution.
    """

    name = "Reflected XSS"
    param = "q"

    def __init__(self, marker: str = MARKER):
        self.marker = marker

    def get_payloads(self):
        return [self.marker]

    def check(self, page, payload):
        return bool(page.evaluate(_REFLECTED_JS, payload))

    def indicator(self, payload, probe_url):
        return {"param": self.param, "value": payload, "url": probe_url}
