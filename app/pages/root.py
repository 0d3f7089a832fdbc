"""Root page: a minimal upload form plus a link to the document list."""

import html


def render_root_page(app_name: str) -> str:
    """Return HTML for the root page. The form posts field `file` to /upload."""
    title = html.escape(app_name)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            max-width: 560px;
            margin: 3rem auto;
            padding: 0 1rem;
            color: #222;
        }}
        h1 {{
            font-size: 1.5rem;
            font-weight: 600;
        }}
        form {{
            display: flex;
            gap: 0.75rem;
            align-items: center;
            margin: 1.5rem 0;
        }}
        .foot {{
            color: #777;
            font-size: 0.875rem;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <form action="/upload" method="post" enctype="multipart/form-data">
        <input type="file" name="file" required>
        <button type="submit">Upload</button>
    </form>
    <p class="foot">Uploaded files are listed at <a href="/documents">/documents</a>.</p>
</body>
</html>
""".strip()
