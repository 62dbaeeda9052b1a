"""AuditLab: deliberately careless site for trying pageaudit end to end.

Every page ships without security headers and sets a cookie with no flags.
Individual pages add one weakness each: SQL error text, unescaped
reflection, an HTTP sub-resource and a JavaScript error.
"""

import os
import sqlite3

from flask import Flask, request, render_template_string, make_response, g

app = Flask(__name__)
app.config["DB_PATH"] = os.path.join(os.path.dirname(__file__), "auditlab.db")

# ── Database helpers ────────────────────────────────────────────

def get_db():
    """Get a per-request SQLite connection."""
    if "db" not in g:
        g.db = sqlite3.connect(app.config["DB_PATH"])
        g.db.row_factory = sqlite3.Row
    return g.db


@app.teardown_appcontext
def close_db(exc):
    db = g.pop("db", None)
    if db:
        db.close()


def init_db(path=None):
    """Create the items table and seed it."""
    conn = sqlite3.connect(path or app.config["DB_PATH"])
    cur = conn.cursor()
    cur.execute("DROP TABLE IF EXISTS items")
    cur.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    cur.executemany("INSERT INTO items VALUES (?,?)",
                    [(1, "lamp"), (2, "chair"), (3, "desk")])
    conn.commit()
    conn.close()


# ── Shared HTML layout ──────────────────────────────────────────

_LAYOUT = """<!DOCTYPE html>
<html><head><title>AuditLab: {{ title }}</title>
<meta name="description" content="Careless pages for pageaudit">
<link rel="canonical" href="/">
<style>
body{font-family:monospace;background:#111;color:#0f0;max-width:900px;margin:0 auto;padding:2rem}
a{color:#0ff}h1{color:#f00}h2{color:#ff0}
.result{background:#1a1a1a;padding:1rem;border:1px solid #333;margin:1rem 0}
</style></head>
<body>
<h1>AuditLab</h1>
<p><a href="/">Home</a></p>
<h2>{{ title }}</h2>
{{ content|safe }}
</body></html>
"""


def page(title, content):
    resp = make_response(render_template_string(_LAYOUT, title=title, content=content))
    # No HttpOnly, no Secure, no SameSite
    resp.headers.add("Set-Cookie", "lab_session=abc123; Path=/")
    return resp


# ══════════════════════════════════════════════════════════════════
#  HOME
# ══════════════════════════════════════════════════════════════════

@app.route("/")
def home():
    return page("Home", """
    <ul>
        <li><a href="/search?q=lamp">Reflected search</a></li>
        <li><a href="/item?probe=1">Item lookup (SQL)</a></li>
        <li><a href="/mixed">Mixed content</a></li>
        <li><a href="/broken">Broken script</a></li>
    </ul>
    """)


# ══════════════════════════════════════════════════════════════════
#  Reflected input
# ══════════════════════════════════════════════════════════════════

@app.route("/search")
def search():
    q = request.args.get("q", "")
    # Unescaped reflection
    return page("Search", f'<div class="result"><p>Results for: {q}</p></div>')


# ══════════════════════════════════════════════════════════════════
#  SQL error disclosure
# ══════════════════════════════════════════════════════════════════

@app.route("/item")
def item():
    probe = request.args.get("probe", "1")
    try:
        # String-built query; a quote breaks it and the error is shown
        rows = get_db().execute(
            "SELECT id, name FROM items WHERE id = '" + probe + "'").fetchall()
    except sqlite3.Error as e:
        return page("Item", f'<div class="result">SQLite error: {e}</div>')
    names = ", ".join(r["name"] for r in rows) or "no match"
    return page("Item", f'<div class="result">{names}</div>')


# ══════════════════════════════════════════════════════════════════
#  Mixed content / JS errors
# ══════════════════════════════════════════════════════════════════

@app.route("/mixed")
def mixed():
    return page("Mixed content",
                '<img src="http://example.com/pixel.png" alt="pixel">')


@app.route("/broken")
def broken():
    return page("Broken script", """
    <script>console.error("lab console error"); undefinedFunction();</script>
    """)


# ══════════════════════════════════════════════════════════════════
#  Main
# ══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    init_db()
    print("\n  AuditLab starting on http://127.0.0.1:5000\n")
    app.run(host="127.0.0.1", port=5000, debug=True)
