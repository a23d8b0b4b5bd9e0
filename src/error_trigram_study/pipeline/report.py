"""
Purpose: Render a study result as console text.
Constraints: Formatting only.
"""

from datetime import datetime
from typing import List

from error_trigram_study.core.text_normalization import preview_text
from error_trigram_study.pipeline.scan import StudyResult


def render_report(result: StudyResult, top_k: int = 30, show_samples: bool = True) -> str:
    lines: List[str] = [
        "# Error Trigram Study",
        f"Generated: {datetime.now().isoformat(timespec='seconds')}",
        "",
        "## Summary",
        f"- Posts scanned: {len(result.posts)}" + (" (mock data)" if result.used_mock else ""),
        f"- Error strings extracted: {len(result.error_strings)}",
        f"- Trigrams emitted: {result.total_trigrams}",
        f"- Distinct trigrams: {len(result.ranked)}",
        "",
        f"## Top {top_k} Trigrams",
    ]
    if not result.ranked:
        lines.append("(no trigrams)")
    for rank, entry in enumerate(result.ranked[:top_k], start=1):
        lines.append(f"{rank:>4}. {entry.count:5d}  {entry.trigram}")

    cov = result.coverage
    lines.extend([
        "",
        "## Coverage",
        f"- Top {len(cov.trigrams)} trigrams cover {cov.matched}/{cov.total} error strings ({cov.ratio:.1%})",
    ])
    if result.curve:
        marks = [k for k in (1, 5, 10, 20, 30, 50) if k <= len(result.curve)]
        lines.append("- Curve: " + ", ".join(f"k={k}: {result.curve[k - 1]:.1%}" for k in marks))

    if show_samples and result.samples:
        lines.extend(["", "## Samples"])
        for trigram, samples in result.samples.items():
            lines.append(f"### {trigram}")
            for sample in samples:
                lines.append(f"  - {preview_text(sample, width=120)}")
    return "\n".join(lines)


def print_report(result: StudyResult, top_k: int = 30, show_samples: bool = True) -> None:
    print(render_report(result, top_k=top_k, show_samples=show_samples))
