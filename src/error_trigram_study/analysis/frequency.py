"""
Purpose: Count trigram occurrences across the corpus and rank them.
Constraints: Pure helpers only.
"""

from collections import Counter
from typing import Iterable, List, Mapping

from error_trigram_study.analysis.trigrams import index_corpus
from error_trigram_study.core.models import TrigramCount


def count_trigrams(trigrams: Iterable[str]) -> Counter:
    """Frequency table: each distinct trigram mapped to its number of occurrences."""
    return Counter(trigrams)


def rank_trigrams(table: Mapping[str, int]) -> List[TrigramCount]:
    """Sort by count descending; equal counts fall back to the trigram text, ascending."""
    ordered = sorted(table.items(), key=lambda item: (-item[1], item[0]))
    return [TrigramCount(trigram=t, count=c) for t, c in ordered]


def aggregate(error_strings: Iterable[str]) -> List[TrigramCount]:
    return rank_trigrams(count_trigrams(index_corpus(error_strings)))


def top_k(ranked: List[TrigramCount], k: int) -> List[TrigramCount]:
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    return ranked[:k]


def total_occurrences(ranked: Iterable[TrigramCount]) -> int:
    return sum(entry.count for entry in ranked)
