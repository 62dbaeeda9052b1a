import argparse
import json
import sys

from pageaudit.api.app import create_app
from pageaudit.client import ApiClient
from pageaudit.core.config import Settings
from pageaudit.parsers.body import EXPORT_FORMATS
from pageaudit.reporters.console import Log


def _serve(args, log: Log) -> int:
    settings = Settings.from_env()
    settings.host = args.host or settings.host
    settings.port = args.port or settings.port
    if args.verbose is not None:
        settings.verbose = args.verbose
    log.verbose = settings.verbose
    app = create_app(settings, logger=log)
    log.ok(f"Server is running → http://{settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port, threaded=True)
    return 0


def _call(args, log: Log) -> int:
    with ApiClient(args.server) as api:
        if args.cmd == "export":
            report = None
            if args.report:
                with open(args.report, "r", encoding="utf-8") as f:
                    report = json.load(f)
            report_id, report_url = args.report_id, args.report_url
            # Accept a saved /api/audit response as well as a bare report
            if report and "report" in report and "security" not in report:
                report_id = report_id or report.get("reportId")
                report_url = report_url or report.get("reportUrl")
                report = report["report"]
            data = api.export(args.format, report=report,
                              report_id=report_id, report_url=report_url)
        else:
            log.info(f"{args.cmd} {args.url} via {args.server}")
            data = getattr(api, args.cmd)(args.url)

    print(json.dumps(data, indent=2))
    if not data.get("success"):
        log.fail(f"{data.get('error')}: {data.get('details', '')}".rstrip(": "))
        return 1
    for rec in (data.get("report") or {}).get("security", {}).get("recommendations", []):
        log.finding("medium", rec)
    return 0


def _verbosity(top, sub):
    """None when no -v was given anywhere, else 1 plus the number of -v."""
    if top is None and sub is None:
        return None
    return 1 + (top or 0) + (sub or 0)


def main(argv=None):
    p = argparse.ArgumentParser(description="Headless browser page auditor")
    p.add_argument("-v", "--verbose", action="count", default=None,
                   help="-v, -vv")
    sub = p.add_subparsers(dest="cmd", required=True)

    # -v is also accepted after the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="count", default=None,
                        dest="sub_verbose", help="-v, -vv")

    s = sub.add_parser("serve", parents=[common], help="Run the HTTP API")
    s.add_argument("--host")
    s.add_argument("--port", type=int)

    for name, help_text in (("audit", "Security audit of one page"),
                            ("scrape", "Basic page metadata"),
                            ("screenshot", "Full-page screenshot")):
        c = sub.add_parser(name, parents=[common], help=help_text)
        c.add_argument("url")
        c.add_argument("--server", default="http://127.0.0.1:4000")

    e = sub.add_parser("export", parents=[common], help="Export a report")
    e.add_argument("--format", required=True, choices=EXPORT_FORMATS)
    e.add_argument("--report", help="Report JSON file (json/csv/issues_csv)")
    e.add_argument("--report-id")
    e.add_argument("--report-url", help="HTML report URL (pdf)")
    e.add_argument("--server", default="http://127.0.0.1:4000")

    args = p.parse_args(argv)
    args.verbose = _verbosity(args.verbose, args.sub_verbose)
    log = Log(verbose=1 if args.verbose is None else args.verbose)

    if args.cmd == "serve":
        return _serve(args, log)
    return _call(args, log)


if __name__ == "__main__":
    sys.exit(main())
