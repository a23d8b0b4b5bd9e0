"""
Purpose: Write the ranked trigram list to CSV for ad-hoc inspection.
Constraints: Storage helper only; no analysis logic.
"""

# Imports
import csv
from pathlib import Path
from typing import Iterable

from error_trigram_study.core.models import TrigramCount

HEADER = ["rank", "trigram", "count"]


# Helpers
def write_ranked_csv(path: Path, ranked: Iterable[TrigramCount]) -> int:
    """Overwrite path with one row per trigram; return the number of rows written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=HEADER)
        writer.writeheader()
        for rank, entry in enumerate(ranked, start=1):
            writer.writerow({"rank": rank, "trigram": entry.trigram, "count": entry.count})
            rows += 1
    return rows
