"""Root landing page with API links."""

from html import escape


def render_root_page(app_name: str, app_version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    version = escape(app_version)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #0c0c0c;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-weight: 600; color: #fff; margin-bottom: 0.25rem; }}
        .tagline {{ color: #888; margin-top: 0; }}
        code, .code {{ font-family: monospace; color: #b0b0b0; }}
        .code {{
            background: #111;
            border: 1px solid #1a1a1a;
            padding: 0.6rem 0.85rem;
            margin: 0.5rem 0 1rem 0;
        }}
        a.btn {{
            display: inline-block;
            padding: 0.6rem 1.2rem;
            margin-right: 0.5rem;
            background: #222;
            color: #e0e0e0;
            text-decoration: none;
            border: 1px solid #333;
        }}
        a.btn.primary {{ background: #fff; color: #000; border-color: #fff; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <p class="tagline">In-memory task tracking with change history.</p>
        <p>API routes live under <code>/api/v1</code>. Tasks are kept in memory
        and are lost when the process stops.</p>
        <div class="code">uvicorn tasktracker.main:app --reload</div>
        <p>
            <a href="/docs" class="btn primary">Open API docs (Swagger)</a>
            <a href="/redoc" class="btn">ReDoc</a>
        </p>
        <p class="tagline">version {version}</p>
    </div>
</body>
</html>
""".strip()
