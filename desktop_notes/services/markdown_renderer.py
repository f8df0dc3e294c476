from __future__ import annotations

import html

import markdown as md

from desktop_notes.core.sanitize import sanitize_rendered_html

MD_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

LIGHT_CSS = """
    body { font-family: sans-serif; line-height: 1.5; color: #2d3748; }
    code, pre { background: #f5f5f5; }
    a { text-decoration: none; }
"""

DARK_CSS = """
    body { font-family: sans-serif; line-height: 1.5; color: #e2e8f0; }
    code, pre { background: #2d3748; }
    a { color: #90cdf4; text-decoration: none; }
"""


class MarkdownRenderer:
    """note body -> sanitized HTML page for the preview tab."""

    def __init__(self, *, theme: str = "light"):
        self.theme = theme

    def render_fragment(self, text: str) -> str:
        rendered = md.markdown(text or "", extensions=MD_EXTENSIONS)
        return sanitize_rendered_html(rendered)

    def render_page(self, text: str, *, title: str = "") -> str:
        css = DARK_CSS if self.theme == "dark" else LIGHT_CSS
        heading = f"<h1>{html.escape(title)}</h1>" if title else ""
        return f"""\
<html>
<head>
  <meta charset="utf-8"/>
  <style>{css}</style>
</head>
<body>{heading}{self.render_fragment(text)}</body>
</html>
"""
