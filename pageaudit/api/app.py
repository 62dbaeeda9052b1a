"""HTTP API: JSON endpoints plus static files for reports and the frontend.

Each browser-backed request launches and closes its own browser; nothing is
kept between requests.
"""

from functools import wraps

from flask import Flask, current_app, jsonify, request, send_from_directory

from pageaudit.core.audit import Auditor
from pageaudit.core.browser import browser_session
from pageaudit.core.config import APP_NAME, APP_VERSION, Settings
from pageaudit.core.errors import ValidationError
from pageaudit.core.page import scrape, screenshot
from pageaudit.core.storage import ensure_dirs
from pageaudit.parsers.body import parse_export, url_from_body
from pageaudit.reporters.console import Log
from pageaudit.reporters.export import export


def api_endpoint(failure: str):
    """Map ValidationError → 400 and any other exception → 500."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except ValidationError as e:
                return jsonify(success=False, error=e.message), 400
            except Exception as e:
                _log().fail(f"{failure}: {e}")
                return jsonify(success=False, error=failure, details=str(e)), 500
        return wrapper
    return decorator


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _log() -> Log:
    return current_app.config["LOG"]


def _sessions():
    return current_app.config["SESSION_FACTORY"]


def _body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def create_app(settings: Settings | None = None, session_factory=None,
               logger: Log | None = None) -> Flask:
    settings = settings or Settings.from_env()
    ensure_dirs(settings)

    app = Flask(__name__, static_folder=None)
    app.config["SETTINGS"] = settings
    app.config["LOG"] = logger or Log(verbose=settings.verbose)
    app.config["SESSION_FACTORY"] = session_factory or browser_session

    # ══════════════════════════════════════════════════════════════
    #  API
    # ══════════════════════════════════════════════════════════════

    @app.get("/api/hello")
    def hello():
        return jsonify(success=True, name=APP_NAME, version=APP_VERSION)

    @app.post("/api/scrape")
    @api_endpoint("Scrape failed")
    def api_scrape():
        url = url_from_body(_body())
        result = scrape(url, _settings(), _log(), _sessions())
        return jsonify(success=True, url=url, scraped=result.to_dict())

    @app.post("/api/screenshot")
    @api_endpoint("Screenshot failed")
    def api_screenshot():
        url = url_from_body(_body())
        image_url = screenshot(url, _settings(), _log(), _sessions())
        return jsonify(success=True, imageUrl=image_url)

    @app.post("/api/audit")
    @api_endpoint("Audit (security) failed")
    def api_audit():
        url = url_from_body(_body())
        auditor = Auditor(_settings(), logger=_log(), session_factory=_sessions())
        result = auditor.audit(url)
        return jsonify(
            success=True,
            report=result.report.to_dict(),
            reportId=result.report_id,
            reportUrl=result.report_url,
            screenshotUrl=result.screenshot_url,
        )

    @app.post("/api/export")
    @api_endpoint("Export failed")
    def api_export():
        req = parse_export(_body())
        file_url = export(req, _settings(), _log(), _sessions())
        return jsonify(success=True, fileUrl=file_url)

    # ══════════════════════════════════════════════════════════════
    #  Static files
    # ══════════════════════════════════════════════════════════════

    @app.get("/screenshots/<path:filename>")
    def screenshots(filename):
        return send_from_directory(settings.screenshots_dir, filename)

    @app.get("/reports/<path:filename>")
    def reports(filename):
        return send_from_directory(settings.reports_dir, filename)

    @app.get("/")
    def index():
        return send_from_directory(settings.public_dir, "index.html")

    @app.get("/<path:filename>")
    def public(filename):
        return send_from_directory(settings.public_dir, filename)

    return app
