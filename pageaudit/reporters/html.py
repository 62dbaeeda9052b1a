"""HTML report rendering.

The report links its screenshot as ``../screenshots/<file>``, so it renders
both when served from /reports/ and when opened straight from disk.
"""

from jinja2 import Environment

from pageaudit.core.models import SecurityReport, MAX_MIXED_CONTENT, MAX_JS_ERRORS

_REPORT = """<!doctype html><html><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Security Report - {{ r.url }}</title>
<style>
body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Arial,sans-serif;margin:24px;line-height:1.45}
h1{margin:0 0 8px;font-size:22px} h2{margin:16px 0 8px;font-size:18px}
table{border-collapse:collapse;width:100%} th,td{border:1px solid #eee;padding:6px;text-align:left}
.kv{display:grid;grid-template-columns:220px 1fr;gap:8px;margin:8px 0}
.bad{color:#b00020}
img{max-width:100%;border:1px solid #eee;border-radius:8px}
</style>
</head><body>
<h1>Security Report</h1>
<div class="kv">
  <div>URL</div><div><a href="{{ r.url }}">{{ r.url }}</a></div>
  <div>Status</div><div>{{ r.status if r.status is not none else '-' }}</div>
  <div>HTTPS</div><div>{% if r.is_https %}Yes{% else %}<span class="bad">No</span>{% endif %}</div>
</div>
<h2>Screenshot</h2><img src="../screenshots/{{ screenshot }}" alt="screenshot">
<h2>Security Headers</h2>
<table><tbody>
{% for label, value, required in headers %}
<tr><th>{{ label }}</th><td>{% if value %}{{ value }}{% elif required %}<span class="bad">Missing</span>{% else %}-{% endif %}</td></tr>
{% endfor %}
</tbody></table>
<h2>Cookies</h2>
<table><thead><tr><th>Name</th><th>HttpOnly</th><th>Secure</th><th>SameSite</th></tr></thead>
<tbody>{% for c in r.cookies %}<tr><td>{{ c.name }}</td><td>{{ c.http_only|lower }}</td><td>{{ c.secure|lower }}</td><td>{{ c.same_site or '-' }}</td></tr>{% endfor %}</tbody></table>
<h2>Mixed Content</h2>
{% if mixed %}<ul>{% for u in mixed %}<li>{{ u }}</li>{% endfor %}</ul>{% else %}None{% endif %}
<h2>JavaScript Errors</h2>
{% if js_errors %}<ul>{% for e in js_errors %}<li><code>{{ e }}</code></li>{% endfor %}</ul>{% else %}None{% endif %}
<h2>Indicators</h2>
<p><b>SQLi:</b> {{ 'Possible' if r.probes.sqli else 'None' }}</p>
<p><b>XSS:</b> {{ 'Possible' if r.probes.xss else 'None' }}</p>
<h2>Recommendations</h2>
{% if r.recommendations %}<ul>{% for rec in r.recommendations %}<li>{{ rec }}</li>{% endfor %}</ul>{% else %}No major issues detected.{% endif %}
</body></html>
"""

_env = Environment(autoescape=True)
_template = _env.from_string(_REPORT)


def render_report(report: SecurityReport, screenshot_file: str) -> str:
    h = report.headers
    headers = [
        ("HSTS", h.strict_transport_security, True),
        ("CSP", h.content_security_policy, True),
        ("X-Content-Type-Options", h.x_content_type_options, True),
        ("X-Frame-Options", h.x_frame_options, True),
        ("Referrer-Policy", h.referrer_policy, True),
        ("Permissions-Policy", h.permissions_policy, False),
    ]
    return _template.render(
        r=report,
        screenshot=screenshot_file,
        headers=headers,
        mixed=report.mixed_content[:MAX_MIXED_CONTENT],
        js_errors=report.javascript_errors[:MAX_JS_ERRORS],
    )
