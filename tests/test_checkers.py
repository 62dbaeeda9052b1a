from pageaudit.checkers.base import with_query_param
from pageaudit.checkers.cookies import (
    collect_cookies, samesite_from_set_cookie, set_cookie_headers)
from pageaudit.checkers.headers import collect_headers
from pageaudit.checkers import recommendations as rules
from pageaudit.checkers.sqli import SQLi
from pageaudit.core.models import CookieInfo, SecurityHeaders, SecurityReport


def test_with_query_param_replaces_existing_value():
    url = with_query_param("https://a.test/p?x=1&probe=old", "probe", "' OR '1'='1")
    assert url == "https://a.test/p?x=1&probe=%27+OR+%271%27%3D%271"


def test_with_query_param_adds_root_path():
    assert with_query_param("http://a.test", "q", "v") == "http://a.test/?q=v"


def test_collect_headers_is_case_insensitive_and_treats_empty_as_absent():
    h = collect_headers({"X-Frame-Options": "SAMEORIGIN", "referrer-policy": ""})
    assert h.x_frame_options == "SAMEORIGIN"
    assert h.referrer_policy is None
    assert h.strict_transport_security is None


def test_collect_headers_handles_missing_response():
    assert collect_headers(None) == SecurityHeaders()


def test_samesite_from_set_cookie():
    found = samesite_from_set_cookie([
        "a=1; Path=/; SameSite=Strict",
        "b=2; HttpOnly",
    ])
    assert found == {"a": "Strict", "b": None}


def test_set_cookie_headers_splits_folded_values():
    values = set_cookie_headers([
        {"name": "content-type", "value": "text/html"},
        {"name": "set-cookie", "value": "a=1\nb=2"},
    ])
    assert values == ["a=1", "b=2"]


def test_collect_cookies_falls_back_to_browser_value():
    cookies = collect_cookies(
        [{"name": "a", "httpOnly": 1, "secure": 0, "sameSite": "Lax"},
         {"name": "b", "sameSite": ""}],
    )
    assert cookies == [CookieInfo("a", True, False, "Lax"), CookieInfo("b", False, False, None)]


def test_sqli_signatures():
    probe = SQLi()
    assert probe.check_body("ORA-00933: SQL command not properly ended")
    assert probe.check_body("Unterminated quoted string")
    assert probe.check_body("PostgreSQL query failed")
    assert not probe.check_body("<html>all good</html>")
    assert probe.get_payloads()[0] == "'"


def test_permissions_policy_has_no_rule():
    report = SecurityReport(url="https://a.test", is_https=True, headers=SecurityHeaders(
        strict_transport_security="x", content_security_policy="x",
        x_content_type_options="x", x_frame_options="x", referrer_policy="x"))
    assert rules.recommend(report) == []


def test_rule_order():
    report = SecurityReport(url="http://a.test", cookies=[CookieInfo("c")])
    report.probes.sqli.append({"payload": "'", "url": "u"})
    report.javascript_errors.append("e")
    recs = rules.recommend(report)

    assert recs[0] == rules.HTTPS
    assert recs.index(rules.cookie_httponly("c")) < recs.index(rules.cookie_samesite("c"))
    assert recs[-2:] == [rules.SQLI, rules.JS_ERRORS]
