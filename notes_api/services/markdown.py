"""Markdown preview rendering for a small, HTML-safe subset.

Supported: headings (#, ##, ###), paragraphs, unordered lists (- item),
blockquotes (> text), fenced code blocks, and inline code, bold, italic
and http(s) links. Raw HTML in the input is always escaped.
"""

import re
from time import time

import structlog

from ..observability import get_app_metrics, get_tracer

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)

FENCE = "```"

# Checked in order, longest prefix first
HEADING_PREFIXES = [("### ", "h3"), ("## ", "h2"), ("# ", "h1")]

INLINE_CODE = re.compile(r"`([^`]+)`")
BOLD = re.compile(r"\*\*([^*]+)\*\*")
ITALIC = re.compile(r"\*([^*]+)\*")
LINK = re.compile(r"\[([^\]]+)\]\((https?://[^\s)]+)\)")


def escape_html(text: str) -> str:
    """Escape the characters that could open markup or break out of attributes."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def render_inline(text: str) -> str:
    """Escape text, then apply code, bold, italic and link substitutions."""
    out = escape_html(text)
    out = INLINE_CODE.sub(r"<code>\1</code>", out)
    out = BOLD.sub(r"<strong>\1</strong>", out)
    out = ITALIC.sub(r"<em>\1</em>", out)
    out = LINK.sub(r'<a href="\2" target="_blank" rel="noreferrer">\1</a>', out)
    return out


class _Renderer:
    """Line-by-line state machine behind render_markdown()."""

    def __init__(self):
        self.parts: list[str] = []
        self.in_code = False
        self.code_lines: list[str] = []
        self.in_list = False

    def close_list(self):
        if self.in_list:
            self.parts.append("</ul>")
            self.in_list = False

    def flush_code(self):
        code = escape_html("\n".join(self.code_lines))
        self.parts.append(f"<pre><code>{code}</code></pre>")
        self.in_code = False
        self.code_lines = []

    def feed(self, line: str):
        trimmed = line.strip()

        if trimmed.startswith(FENCE):
            if self.in_code:
                self.flush_code()
            else:
                self.close_list()
                self.in_code = True
                self.code_lines = []
            return

        if self.in_code:
            self.code_lines.append(line)
            return

        if not trimmed:
            self.close_list()
            return

        for prefix, tag in HEADING_PREFIXES:
            if trimmed.startswith(prefix):
                self.close_list()
                self.parts.append(f"<{tag}>{render_inline(trimmed[len(prefix):])}</{tag}>")
                return

        if trimmed.startswith("> "):
            self.close_list()
            self.parts.append(f"<blockquote>{render_inline(trimmed[2:])}</blockquote>")
            return

        if trimmed.startswith("- "):
            if not self.in_list:
                self.in_list = True
                self.parts.append("<ul>")
            self.parts.append(f"<li>{render_inline(trimmed[2:])}</li>")
            return

        self.close_list()
        self.parts.append(f"<p>{render_inline(trimmed)}</p>")

    def finish(self) -> str:
        # An unterminated fence still shows what was typed after it
        if self.in_code:
            self.flush_code()
        self.close_list()
        return "".join(self.parts)


def render_markdown(markdown: str) -> str:
    """
    Render the supported markdown subset to HTML.

    Args:
        markdown: Note body or any markdown text

    Returns:
        HTML fragment; only tags produced by the renderer itself appear in it
    """
    with tracer.start_as_current_span("render_markdown") as span:
        start_time = time()

        lines = markdown.replace("\r\n", "\n").split("\n")
        span.set_attribute("markdown.lines", len(lines))

        renderer = _Renderer()
        for line in lines:
            renderer.feed(line)
        html = renderer.finish()

        duration = (time() - start_time) * 1000
        get_app_metrics().render_duration.record(duration)
        logger.debug("markdown_rendered", lines=len(lines), html_length=len(html))

        return html
