import pytest

from pageaudit.parsers.body import BAD_URL


@pytest.mark.parametrize("endpoint", ["/api/scrape", "/api/screenshot", "/api/audit"])
@pytest.mark.parametrize("url", ["ftp://example.com", "example.com", "javascript:alert(1)", "", None])
def test_invalid_url_is_400_without_browser(client, browser, endpoint, url):
    resp = client.post(endpoint, json={"url": url})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": BAD_URL}
    assert browser.opened == 0


def test_missing_body_is_400(client, browser):
    resp = client.post("/api/audit", data="not json", content_type="text/plain")
    assert resp.status_code == 400
    assert browser.opened == 0


def test_url_scheme_is_case_insensitive(client, browser):
    resp = client.post("/api/screenshot", json={"url": "HTTPS://example.com"})
    assert resp.status_code == 200
    assert browser.opened == 1


def test_audit_endpoint(client, browser, fakes):
    browser.page = fakes.Page(cookies=[
        {"name": "sid", "httpOnly": False, "secure": False, "sameSite": None}])
    resp = client.post("/api/audit", json={"url": "https://example.com/"})
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["success"] is True
    security = data["report"]["security"]
    assert security["isHTTPS"] is True
    assert security["headers"]["contentSecurityPolicy"] is None
    assert security["cookies"] == [
        {"name": "sid", "secure": False, "httpOnly": False, "sameSite": None}]
    assert any('"sid"' in r and "SameSite" in r for r in security["recommendations"])
    assert data["reportUrl"] == f"/reports/{data['reportId']}.html"
    assert data["screenshotUrl"] == f"/screenshots/{data['reportId']}.png"

    # Generated files are served back
    assert client.get(data["reportUrl"]).status_code == 200
    assert client.get(data["screenshotUrl"]).status_code == 200


def test_audit_failure_is_500_with_details(client, browser, fakes):
    def site(url):
        raise RuntimeError("Timeout 60000ms exceeded")

    browser.page = fakes.Page(site=site)
    resp = client.post("/api/audit", json={"url": "https://example.com/"})

    assert resp.status_code == 500
    assert resp.get_json() == {
        "success": False,
        "error": "Audit (security) failed",
        "details": "Timeout 60000ms exceeded",
    }
    assert browser.closed == 1


def test_scrape_endpoint(client, browser, fakes):
    browser.page = fakes.Page(eval_result={
        "title": "Example",
        "metaDescription": "desc",
        "canonical": "https://example.com/",
        "robots": "",
        "h1": ["Hello"],
        "links": [{"text": "More", "href": "https://example.com/more"}],
    })
    resp = client.post("/api/scrape", json={"url": "https://example.com"})
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["url"] == "https://example.com"
    assert data["scraped"]["title"] == "Example"
    assert data["scraped"]["links"] == [{"text": "More", "href": "https://example.com/more"}]


def test_screenshot_failure_is_500(client, browser, fakes):
    def site(url):
        raise RuntimeError("boom")

    browser.page = fakes.Page(site=site)
    resp = client.post("/api/screenshot", json={"url": "https://example.com"})
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Screenshot failed"


def test_hello(client):
    data = client.get("/api/hello").get_json()
    assert data["success"] is True
    assert data["name"] == "PageAudit"


def test_frontend_is_served(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"PageAudit" in resp.data


@pytest.mark.parametrize("endpoint", ["/api/scrape", "/api/screenshot", "/api/audit", "/api/export"])
@pytest.mark.parametrize("body", [["https://example.com"], "https://example.com", 42])
def test_non_object_json_body_is_400(client, browser, endpoint, body):
    resp = client.post(endpoint, json=body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert browser.opened == 0
