"""
Purpose: Shared data models for cross-module communication.
Constraints: Data containers only; no logic.
"""

# Imports

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# Public API
@dataclass(frozen=True)
class Post:
    """A forum post as returned by the search client."""

    body: str
    post_id: Optional[str] = None
    title: str = ""
    link: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TrigramCount:
    """One row of the ranked trigram list."""

    trigram: str
    count: int


@dataclass(frozen=True)
class CoverageReport:
    """Share of error strings containing at least one of the top trigrams."""

    trigrams: List[str]
    matched: int
    total: int
    ratio: float
