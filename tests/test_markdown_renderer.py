from desktop_notes.core.sanitize import sanitize_rendered_html
from desktop_notes.services.markdown_renderer import MarkdownRenderer


def test_script_is_stripped():
    out = sanitize_rendered_html('<p>hi</p><script>alert(1)</script>')
    assert "<script" not in out
    assert "<p>hi</p>" in out


def test_javascript_links_lose_href():
    out = sanitize_rendered_html('<a href="javascript:alert(1)">x</a>')
    assert "javascript:" not in out


def test_render_fragment_markdown():
    out = MarkdownRenderer().render_fragment("# Title\n\n**bold** text")
    assert "<h1>Title</h1>" in out
    assert "<strong>bold</strong>" in out


def test_render_page_escapes_title_and_themes():
    renderer = MarkdownRenderer(theme="dark")
    page = renderer.render_page("body", title="<b>T</b>")
    assert "&lt;b&gt;T&lt;/b&gt;" in page
    assert "#2d3748" in page
