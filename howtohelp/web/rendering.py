"""
Template helpers for the web layer.

Article bodies are authored as markdown in the CMS. They are converted with
Python-Markdown and then passed through bleach, so only an allow-list of
tags and attributes reaches the page.
"""
from datetime import datetime
from typing import Optional

import bleach
import markdown as md
from markupsafe import Markup

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

ALLOWED_TAGS = set(bleach.sanitizer.ALLOWED_TAGS) | {
    "p", "br", "hr", "pre", "span", "div",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "img", "table", "thead", "tbody", "tr", "th", "td",
    "del", "sup", "sub", "dl", "dt", "dd",
}
ALLOWED_ATTRIBUTES = {
    **bleach.sanitizer.ALLOWED_ATTRIBUTES,
    "img": ["src", "alt", "title"],
    "th": ["align"],
    "td": ["align"],
    "code": ["class"],
}
ALLOWED_PROTOCOLS = {"http", "https", "mailto"}


def render_markdown(text: Optional[str]) -> Markup:
    """Convert markdown to sanitized HTML safe to drop into a template."""
    if not text:
        return Markup("")
    html = md.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
    return Markup(cleaned)


def format_date(value: Optional[datetime]) -> str:
    """Long US-style date, e.g. ``January 5, 2025``."""
    if value is None:
        return ""
    return f"{value.strftime('%B')} {value.day}, {value.year}"
