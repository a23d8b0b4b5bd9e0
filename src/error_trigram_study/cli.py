#!/usr/bin/env python3
"""
Unified CLI entrypoint with subcommands.
"""

import argparse
from pathlib import Path
from typing import List, Optional

import requests
from pydantic import ValidationError

from error_trigram_study.analysis.sampling import samples_for_trigram
from error_trigram_study.core.config import ConfigManager
from error_trigram_study.core.config_models import AnalysisSettings, SearchSettings
from error_trigram_study.core.logging import setup_logger
from error_trigram_study.core.metrics import get_metrics
from error_trigram_study.core.search_client import SearchClientError
from error_trigram_study.core.storage.csv_report import write_ranked_csv
from error_trigram_study.pipeline.report import print_report
from error_trigram_study.pipeline.scan import run_study


def _add_search_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tagged", help="Tag to search (default from config)")
    parser.add_argument("--pages", type=int, help="Number of result pages to fetch")
    parser.add_argument("--mock", action="store_true", help="Use bundled mock posts")
    parser.add_argument("--no-fallback", action="store_true", help="Fail instead of using mock posts")
    parser.add_argument("--config-dir", type=Path, help="Directory holding settings.json")


def _load_config(args: argparse.Namespace) -> ConfigManager:
    """Load config and apply command-line overrides through the settings models."""
    config = ConfigManager(config_dir=args.config_dir).load_all()
    search_overrides = {}
    analysis_overrides = {}
    if getattr(args, "tagged", None):
        search_overrides["tagged"] = args.tagged
    if getattr(args, "pages", None) is not None:
        search_overrides["num_pages"] = args.pages
    if getattr(args, "mock", False):
        search_overrides["mock_mode"] = True
    if getattr(args, "top_k", None) is not None:
        analysis_overrides["top_k"] = args.top_k

    try:
        search = SearchSettings(**{**config.search_settings, **search_overrides})
        analysis = AnalysisSettings(**{**config.analysis_settings, **analysis_overrides})
    except ValidationError as exc:
        first = exc.errors()[0]
        # parser.error exits with status 2
        args.parser.error(f"invalid value for {first['loc'][0]}: {first['msg']}")
    config.search_settings = search.model_dump()
    config.analysis_settings = analysis.model_dump()
    return config


def _cmd_run(args: argparse.Namespace) -> int:
    config = _load_config(args)
    result = run_study(config, fallback=not args.no_fallback)
    print_report(result, top_k=config.analysis.top_k, show_samples=not args.no_samples)
    if args.csv:
        rows = write_ranked_csv(args.csv, result.ranked)
        print(f"\n✓ Wrote {rows} trigrams to {args.csv}")
    if args.metrics_out:
        get_metrics().write_snapshot(args.metrics_out)
    return 0


def _cmd_samples(args: argparse.Namespace) -> int:
    config = _load_config(args)
    result = run_study(config, fallback=not args.no_fallback)
    samples = samples_for_trigram(result.error_strings, args.trigram, n=args.n, seed=config.analysis.sample_seed)
    if not samples:
        print(f"No error strings contain {args.trigram!r}")
        return 1
    for sample in samples:
        print(sample)
        print("-" * 40)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    _load_config(args).print_summary()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="error-trigrams", description="Error message trigram study")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Fetch posts and report the most frequent error trigrams")
    _add_search_args(run)
    run.add_argument("--top-k", type=int, help="Number of trigrams to report and use for coverage")
    run.add_argument("--csv", type=Path, help="Also write the ranked list to this CSV file")
    run.add_argument("--metrics-out", type=Path, help="Append a metrics snapshot (JSON lines)")
    run.add_argument("--no-samples", action="store_true", help="Skip the per-trigram sample section")
    run.set_defaults(func=_cmd_run, parser=run)

    samples = sub.add_parser("samples", help="Print example error strings containing a trigram")
    _add_search_args(samples)
    samples.add_argument("trigram")
    samples.add_argument("--n", type=int, default=5)
    samples.set_defaults(func=_cmd_samples, parser=samples)

    cfg = sub.add_parser("config", help="Print configuration summary")
    cfg.add_argument("--config-dir", type=Path, help="Directory holding settings.json")
    cfg.set_defaults(func=_cmd_config, parser=cfg)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger("error_trigram_study.cli")
    try:
        return args.func(args)
    except (SearchClientError, requests.RequestException) as exc:
        logger.error("Search failed: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
