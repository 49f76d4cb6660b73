"""Command-line interface for the SEO tag analyzer."""

import json
import logging
import sys
from typing import Optional

from seo_tags.analyzer import SEOTagAnalyzer
from seo_tags.config import AnalysisThresholds, settings
from seo_tags.exceptions import FetchError, InvalidURLError
from seo_tags.logging_config import setup_logging
from seo_tags.models import AnalysisResult, RecommendationKind, TagStatus
from seo_tags.request_log import BackgroundRequestLogger, get_request_log
from seo_tags.utils import normalize_url

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to analyze website. Please try again."

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_URL = 2

STATUS_ICONS = {
    TagStatus.OPTIMAL: "✅",
    TagStatus.GOOD: "✅",
    TagStatus.IMPROVE: "⚠️ ",
    TagStatus.MISSING: "❌",
    TagStatus.NOT_APPLICABLE: "➖",
}

RECOMMENDATION_ICONS = {
    RecommendationKind.CRITICAL: "❌",
    RecommendationKind.IMPROVEMENT: "⚠️ ",
    RecommendationKind.ADDITIONAL: "💡",
}


def format_report(result: AnalysisResult) -> str:
    """Format an analysis report as text.

    Args:
        result: AnalysisResult to format
    """
    lines = [
        f"\n{'=' * 60}",
        f"SEO Tag Analysis for: {result.url}",
        f"{'=' * 60}",
        f"\n📊 Overall Score: {result.score}/100",
        f"   {result.present_count} present • {result.improve_count} to improve • "
        f"{result.missing_count} missing",
    ]

    for section in result.sections:
        lines.append(f"\n{STATUS_ICONS[section.status]} {section.title}: {section.status_text}")
        for tag in section.tags:
            lines.append(f"  • {tag.name}: {tag.status_text}")
            if tag.content is not None:
                lines.append(f"      {tag.content}")

    for group in result.recommendations:
        lines.append(f"\n{RECOMMENDATION_ICONS[group.kind]} {group.title}")
        for item in group.items:
            lines.append(f"  • {item}")

    lines.append(f"\n{'=' * 60}\n")
    return "\n".join(lines)


def _write_output(output: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Results written to {output_file}")
    else:
        print(output)


def _load_thresholds(path: Optional[str]) -> AnalysisThresholds:
    if path:
        return AnalysisThresholds.from_file(path)
    return AnalysisThresholds.from_env()


def _build_request_logger() -> Optional[BackgroundRequestLogger]:
    try:
        return BackgroundRequestLogger(get_request_log())
    except Exception as e:
        # A broken request log must not stop analysis
        logger.warning(f"Request logging disabled: {e}")
        return None


def analyze_command(args) -> int:
    """Analyze one or more URLs for SEO tags."""
    urls = [normalize_url(url) for url in args.urls]

    try:
        thresholds = _load_thresholds(args.thresholds)
    except (OSError, ValueError) as e:
        logger.exception(f"Could not load thresholds from {args.thresholds}")
        print(f"Error: Invalid thresholds file {args.thresholds}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    logger.debug(f"Using thresholds: {thresholds.to_dict()}")

    request_logger = _build_request_logger()
    analyzer = SEOTagAnalyzer(thresholds=thresholds, request_logger=request_logger)

    try:
        outcomes = analyzer.analyze_urls(urls, max_workers=args.max_workers)
    except Exception:
        logger.exception("Unexpected failure during analysis")
        print(f"Error: {GENERIC_FAILURE_MESSAGE}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        if request_logger is not None:
            request_logger.shutdown(wait=True)
            request_logger.request_log.close()

    exit_code = EXIT_OK
    for outcome in outcomes:
        if isinstance(outcome.error, InvalidURLError):
            exit_code = max(exit_code, EXIT_INVALID_URL)
        elif outcome.error is not None:
            exit_code = max(exit_code, EXIT_FAILURE)

    if args.output == "json":
        results = []
        for outcome in outcomes:
            if outcome.success:
                results.append(outcome.result.to_dict())
            else:
                entry = {"url": outcome.url, "message": outcome.error.message}
                if isinstance(outcome.error, FetchError) and outcome.error.status_code is not None:
                    entry["status"] = outcome.error.status_code
                results.append(entry)
        payload = results[0] if len(results) == 1 else results
        _write_output(json.dumps(payload, indent=2, ensure_ascii=False), args.output_file)
    else:
        reports = []
        for outcome in outcomes:
            if outcome.success:
                reports.append(format_report(outcome.result))
            else:
                reports.append(f"\n❌ Failed to analyze {outcome.url}: {outcome.error.message}")
        _write_output("\n".join(reports), args.output_file)

    return exit_code


def history_command(args) -> int:
    """List logged analysis requests."""
    if settings.REQUEST_LOG_BACKEND != "sqlite":
        logger.warning(
            f"Request log backend '{settings.REQUEST_LOG_BACKEND}' keeps no history between runs; "
            "set REQUEST_LOG_BACKEND=sqlite"
        )
    request_log = get_request_log()
    try:
        if args.url:
            records = request_log.get_requests_by_url(normalize_url(args.url))
        else:
            records = request_log.get_all_requests()
    finally:
        request_log.close()

    if args.output == "json":
        print(json.dumps([r.to_dict() for r in records], indent=2))
    elif not records:
        print("No requests logged yet.")
    else:
        for record in records:
            print(f"{record.id:>5}  {record.request_date}  {record.url}")
    return EXIT_OK


def build_parser():
    """Build the argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="SEO Tag Analyzer - Evaluate a page's meta, social and technical SEO tags"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=settings.LOG_LEVEL.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze one or more URLs."
    )
    analyze_parser.add_argument(
        "urls", nargs="+", help="URLs to analyze (https:// is added when missing)"
    )
    analyze_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    analyze_parser.add_argument(
        "--output-file",
        "-f",
        help="Write the report to a file instead of stdout",
    )
    analyze_parser.add_argument(
        "--thresholds",
        help="JSON file overriding evaluation thresholds",
    )
    analyze_parser.add_argument(
        "--max-workers",
        type=int,
        default=settings.MAX_WORKERS,
        help=f"Pages analyzed concurrently (default: {settings.MAX_WORKERS})",
    )
    analyze_parser.set_defaults(func=analyze_command)

    history_parser = subparsers.add_parser(
        "history", help="List logged analysis requests."
    )
    history_parser.add_argument(
        "--url", help="Only show requests for this URL"
    )
    history_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    history_parser.set_defaults(func=history_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
