import re

from pageaudit.checkers.base import BaseProbe


class SQLi(BaseProbe):
    """Error-based SQL injection indicator.

    Appends classic quote-breaking payloads to the ``probe`` parameter and
    looks for database error text in the rendered page. Passive: nothing is
    written, nothing is timed.
    """

    name = "SQL Injection"
    param = "probe"

    def __init__(self):
        self.payloads = [
            "'",
            '"',
            "1 OR 1=1",
            "' OR '1'='1",
            "');--",
        ]

        # Matched against the lower-cased page body
        self._err_rx = [
            r"sql syntax",
            r"mysql",
            r"postgres",
            r"sqlite",
            r"mssql",
            r"odbc",
            r"ora-\d+",
            r"unterminated",
            r"warning:.*mysqli",
        ]
        self._err_compiled = [re.compile(p, re.I) for p in self._err_rx]

    def get_payloads(self):
        return self.payloads

    def check_body(self, body: str) -> bool:
        lower = (body or "").lower()
        return any(rx.search(lower) for rx in self._err_compiled)

    def check(self, page, payload):
        return self.check_body(page.content())
