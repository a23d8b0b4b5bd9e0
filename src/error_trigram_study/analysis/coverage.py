"""
Purpose: Measure how many error strings the most frequent trigrams account for.
Constraints: Pure helpers only.

A string is covered when it contains at least one of the chosen trigrams as a
literal substring. All trigrams are folded into one alternation pattern so each
string is scanned once.
"""

import re
from typing import Iterable, List, Optional, Sequence

from error_trigram_study.analysis.frequency import top_k
from error_trigram_study.core.models import CoverageReport, TrigramCount


def build_coverage_pattern(trigrams: Iterable[str]) -> Optional["re.Pattern[str]"]:
    """Alternation of the escaped trigrams, or None when there are none."""
    escaped = [re.escape(t) for t in trigrams if t]
    if not escaped:
        # an empty alternation would match every string
        return None
    return re.compile("|".join(escaped))


def count_covered(pattern: Optional["re.Pattern[str]"], error_strings: Sequence[str]) -> int:
    if pattern is None:
        return 0
    return sum(1 for s in error_strings if pattern.search(s))


def coverage_ratio(top_trigrams: Iterable[str], error_strings: Sequence[str]) -> float:
    """Fraction in [0, 1] of error strings containing any of top_trigrams."""
    if not error_strings:
        return 0.0
    pattern = build_coverage_pattern(top_trigrams)
    return count_covered(pattern, error_strings) / len(error_strings)


def coverage_report(ranked: List[TrigramCount], error_strings: Sequence[str], k: int) -> CoverageReport:
    chosen = [entry.trigram for entry in top_k(ranked, k)]
    matched = count_covered(build_coverage_pattern(chosen), error_strings)
    total = len(error_strings)
    return CoverageReport(
        trigrams=chosen,
        matched=matched,
        total=total,
        ratio=matched / total if total else 0.0,
    )


def coverage_curve(ranked: List[TrigramCount], error_strings: Sequence[str], max_k: int) -> List[float]:
    """Coverage ratio for k = 1..max_k (capped at the number of ranked trigrams)."""
    head = top_k(ranked, max_k)
    if not error_strings:
        return [0.0] * len(head)
    covered = [False] * len(error_strings)
    curve: List[float] = []
    for entry in head:
        needle = entry.trigram
        for idx, text in enumerate(error_strings):
            if not covered[idx] and needle in text:
                covered[idx] = True
        curve.append(sum(covered) / len(error_strings))
    return curve
