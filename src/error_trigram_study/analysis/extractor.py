"""
Purpose: Pull error-message text out of post bodies.
Constraints: Pure helpers only; no I/O.

An error message starts at the word "Error", runs to the first colon, and then
takes the shortest stretch of text (newlines included) that ends right before a
terminator marker. The marker itself is not part of the result.
"""

# Imports
import re
from functools import lru_cache
from typing import Iterable, Iterator, Optional, Sequence

from error_trigram_study.core.config_models import DEFAULT_TERMINATORS
from error_trigram_study.core.models import Post


# Helpers
@lru_cache(maxsize=32)
def _compile(terminators: tuple) -> "re.Pattern[str]":
    lookahead = "|".join(re.escape(t) for t in terminators)
    return re.compile(r"Error[^:]*:.*?(?=" + lookahead + ")", re.DOTALL)


def build_error_pattern(terminators: Sequence[str] = DEFAULT_TERMINATORS) -> "re.Pattern[str]":
    """Compile the extraction pattern for the given terminator markers."""
    markers = tuple(t for t in terminators if t)
    if not markers:
        raise ValueError("at least one non-empty terminator is required")
    return _compile(markers)


def _strip_one_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


# Public API
def extract_errors(
    body: Optional[str],
    terminators: Sequence[str] = DEFAULT_TERMINATORS,
) -> Iterator[str]:
    """Yield every error string found in body; nothing for an empty or missing body."""
    pattern = build_error_pattern(terminators)
    return (_strip_one_newline(m.group(0)) for m in pattern.finditer(body or ""))


def extract_from_posts(
    posts: Iterable[Post],
    terminators: Sequence[str] = DEFAULT_TERMINATORS,
) -> Iterator[str]:
    """Flatten error strings across posts; posts without matches contribute nothing."""
    for post in posts:
        yield from extract_errors(post.body, terminators)
