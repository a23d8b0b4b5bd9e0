"""
Purpose: Draw example error strings per trigram for manual categorization.
Constraints: Pure helpers; sampling is seeded so reruns show the same examples.
"""

import random
from typing import Dict, List, Sequence

from error_trigram_study.analysis.frequency import top_k
from error_trigram_study.core.models import TrigramCount


def samples_for_trigram(
    error_strings: Sequence[str],
    trigram: str,
    n: int = 5,
    seed: int = 0,
) -> List[str]:
    """Up to n error strings containing trigram literally, in corpus order."""
    if n <= 0 or not trigram:
        return []
    hits = [idx for idx, text in enumerate(error_strings) if trigram in text]
    if len(hits) > n:
        hits = sorted(random.Random(seed).sample(hits, n))
    return [error_strings[idx] for idx in hits]


def build_inspection_table(
    ranked: List[TrigramCount],
    error_strings: Sequence[str],
    k: int,
    n: int = 5,
    seed: int = 0,
) -> Dict[str, List[str]]:
    return {
        entry.trigram: samples_for_trigram(error_strings, entry.trigram, n=n, seed=seed)
        for entry in top_k(ranked, k)
    }
