"""
Purpose: Normalize search API records into posts and prepare text for display.
Constraints: Pure helpers only; no side effects.
"""

# Imports
import html
from textwrap import shorten
from typing import Any, Mapping

from error_trigram_study.core.models import Post


# Helpers
def _field(post: Any, name: str, default: Any = None) -> Any:
    if isinstance(post, Mapping):
        return post.get(name, default)
    return getattr(post, name, default)


def preview_text(text: str, width: int = 200) -> str:
    """Return a single-line preview of text, trimmed to width."""
    if not text:
        return "(no body text)"
    sanitized = " ".join(text.split())
    return shorten(sanitized, width=width, placeholder="...")


def normalize_post(post: Any) -> Post:
    """Convert an API item (dict) or any object with a body attribute into a Post."""
    if isinstance(post, Post):
        return post
    post_id = _field(post, "question_id") or _field(post, "post_id") or _field(post, "id")
    return Post(
        body=_field(post, "body") or "",
        post_id=str(post_id) if post_id is not None else None,
        title=_field(post, "title") or "",
        link=_field(post, "link") or "",
        tags=tuple(_field(post, "tags") or ()),
    )


def unescape_body(body: str) -> str:
    """Decode HTML entities such as &lt; and &quot; in a post body."""
    return html.unescape(body) if body else ""
