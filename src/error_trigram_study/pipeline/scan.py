"""
Purpose: Run one study end to end: fetch posts, extract errors, rank trigrams, measure coverage.
Constraints: Orchestration only; analysis lives in error_trigram_study.analysis.

Without a working search client the run falls back to the bundled mock posts,
so the analysis can always be exercised offline.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

import requests

from error_trigram_study.analysis.coverage import coverage_curve, coverage_report
from error_trigram_study.analysis.extractor import extract_from_posts
from error_trigram_study.analysis.frequency import count_trigrams, rank_trigrams
from error_trigram_study.analysis.sampling import build_inspection_table
from error_trigram_study.analysis.trigrams import index_corpus
from error_trigram_study.core.config import ConfigManager
from error_trigram_study.core.logging import UnifiedLogger
from error_trigram_study.core.metrics import get_metrics
from error_trigram_study.core.models import CoverageReport, Post, TrigramCount
from error_trigram_study.core.search_client import (
    MockSearchClient,
    SearchClient,
    SearchClientError,
    fetch_posts,
    make_search_client,
)
from error_trigram_study.core.text_normalization import normalize_post, unescape_body
from error_trigram_study.pipeline.mock_posts import MOCK_POSTS


@dataclass
class StudyResult:
    posts: List[Post]
    error_strings: List[str]
    ranked: List[TrigramCount]
    total_trigrams: int
    coverage: CoverageReport
    curve: List[float] = field(default_factory=list)
    samples: Dict[str, List[str]] = field(default_factory=dict)
    used_mock: bool = False


def analyze_posts(posts: List[Post], config: ConfigManager) -> StudyResult:
    """Run the analysis stages over an already fetched corpus."""
    analysis = config.analysis
    log = UnifiedLogger(__name__)
    metrics = get_metrics()

    with log.time_operation("extract"):
        error_strings = list(extract_from_posts(posts, analysis.terminators))
    metrics.record("errors.extracted", amount=len(error_strings))

    with log.time_operation("index_and_rank"):
        table = count_trigrams(index_corpus(error_strings))
        ranked = rank_trigrams(table)
    total_trigrams = sum(table.values())
    metrics.record("trigrams.emitted", amount=total_trigrams)

    coverage = coverage_report(ranked, error_strings, analysis.top_k)
    log.log_activity("study.analyzed", {
        "posts": len(posts),
        "error_strings": len(error_strings),
        "unique_trigrams": len(ranked),
        "total_trigrams": total_trigrams,
        "top_k": analysis.top_k,
        "coverage": round(coverage.ratio, 4),
    })
    return StudyResult(
        posts=posts,
        error_strings=error_strings,
        ranked=ranked,
        total_trigrams=total_trigrams,
        coverage=coverage,
        curve=coverage_curve(ranked, error_strings, analysis.top_k),
        samples=build_inspection_table(
            ranked, error_strings, analysis.top_k, n=analysis.sample_size, seed=analysis.sample_seed
        ),
    )


def run_study(
    config: Optional[ConfigManager] = None,
    client: Optional[SearchClient] = None,
    fallback: bool = True,
) -> StudyResult:
    config = config or ConfigManager().load_all()
    search = config.search
    log = UnifiedLogger(__name__)

    # an explicit client wins over MOCK_MODE
    used_mock = client is None and search.mock_mode
    if used_mock:
        log.get_logger().info("MOCK_MODE is set; running with mock posts.")
        client = MockSearchClient(MOCK_POSTS)
    elif client is None:
        client = make_search_client(search)

    log.get_logger().info(
        "Searching %s for [%s] posts containing %r (%d pages x %d)",
        search.site, search.tagged, search.body_filter, search.num_pages, search.pagesize,
    )
    try:
        with log.time_operation("fetch"):
            raw = fetch_posts(
                client,
                tagged=search.tagged,
                body=search.body_filter,
                num_pages=search.num_pages,
                pagesize=search.pagesize,
                sort=search.sort,
                order=search.order,
            )
    except (SearchClientError, requests.RequestException) as exc:
        if not fallback:
            raise
        log.log_error_with_context(exc, {"stage": "fetch", "site": search.site, "tagged": search.tagged},
                                   level="WARNING")
        log.get_logger().warning("Search API not available. Running on mock posts instead.")
        raw = [dict(p) for p in MOCK_POSTS]
        used_mock = True

    posts = [normalize_post(item) for item in raw]
    if config.analysis.unescape_html:
        posts = [replace(p, body=unescape_body(p.body)) for p in posts]

    result = analyze_posts(posts, config)
    result.used_mock = used_mock
    return result
