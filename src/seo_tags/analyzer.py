"""SEO tag analyzer that combines fetching, extraction, evaluation and scoring."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from seo_tags.config import AnalysisThresholds, default_thresholds, settings
from seo_tags.constants import CATEGORY_MEMBERS
from seo_tags.document import Document, parse_html
from seo_tags.evaluators import EvaluationContext, evaluate_all
from seo_tags.exceptions import FetchError, InvalidURLError, SEOTagsError
from seo_tags.extractor import TagExtractor
from seo_tags.fetcher import WebFetcher
from seo_tags.models import AnalysisResult, TagStatus
from seo_tags.recommendations import generate_recommendations
from seo_tags.request_log import BackgroundRequestLogger
from seo_tags.scoring import calculate_score
from seo_tags.sections import build_sections, group_by_category
from seo_tags.utils import is_valid_url

logger = logging.getLogger(__name__)

# Tag types that take part in the report, in section order
REPORTED_TAG_TYPES = [t for members in CATEGORY_MEMBERS.values() for t in members]


@dataclass
class UrlAnalysis:
    """Outcome of analyzing one URL in a batch."""

    url: str
    result: Optional[AnalysisResult] = None
    error: Optional[SEOTagsError] = None

    @property
    def success(self) -> bool:
        return self.result is not None


class SEOTagAnalyzer:
    """Analyzes a page's SEO tags and builds a scored report."""

    def __init__(
        self,
        fetcher: Optional[WebFetcher] = None,
        extractor: Optional[TagExtractor] = None,
        thresholds: Optional[AnalysisThresholds] = None,
        request_logger: Optional[BackgroundRequestLogger] = None,
        html_parser: Optional[str] = None,
    ):
        """Initialize the analyzer.

        Args:
            fetcher: Page fetcher (created lazily when a URL is analyzed)
            extractor: Tag extractor
            thresholds: Evaluation limits. Defaults to default_thresholds.
            request_logger: Optional best-effort request logger
            html_parser: BeautifulSoup parser name. Defaults to settings.HTML_PARSER.
        """
        self._fetcher = fetcher
        self.extractor = extractor or TagExtractor()
        self.thresholds = thresholds or default_thresholds
        self.request_logger = request_logger
        self.html_parser = html_parser or settings.HTML_PARSER

    @property
    def fetcher(self) -> WebFetcher:
        if self._fetcher is None:
            self._fetcher = WebFetcher()
        return self._fetcher

    def analyze_document(self, document: Document, url: str) -> AnalysisResult:
        """Build the report for an already parsed document.

        Args:
            document: Parsed page
            url: The page URL (used to resolve relative canonical links)

        Returns:
            AnalysisResult for the page
        """
        raw_values = self.extractor.extract(document, url)
        context = EvaluationContext(page_url=url, thresholds=self.thresholds)
        findings = evaluate_all(raw_values, context, REPORTED_TAG_TYPES)

        tags_by_category = group_by_category(findings)
        all_findings = [f for tags in tags_by_category.values() for f in tags]

        result = AnalysisResult(
            url=url,
            score=calculate_score(all_findings),
            tags_by_category=tags_by_category,
            sections=build_sections(tags_by_category),
            present_count=sum(1 for f in all_findings if f.status.is_healthy),
            improve_count=sum(1 for f in all_findings if f.status == TagStatus.IMPROVE),
            missing_count=sum(1 for f in all_findings if f.status == TagStatus.MISSING),
            recommendations=generate_recommendations(all_findings),
        )
        logger.info(
            f"Analyzed {url}: score {result.score}/100 "
            f"({result.present_count} present, {result.improve_count} to improve, "
            f"{result.missing_count} missing)"
        )
        return result

    def analyze_html(self, url: str, html: Optional[str]) -> AnalysisResult:
        """Parse markup and build the report."""
        return self.analyze_document(parse_html(html, self.html_parser), url)

    def analyze_url(self, url: str) -> AnalysisResult:
        """Fetch a URL and analyze its tags.

        Args:
            url: Absolute URL of the page

        Returns:
            AnalysisResult for the page

        Raises:
            InvalidURLError: If the URL is malformed (nothing is fetched)
            FetchError: If the page cannot be fetched or returns a non-success status
        """
        if not is_valid_url(url):
            raise InvalidURLError(url)

        if self.request_logger is not None:
            self.request_logger.submit(url)

        logger.info(f"Fetching {url}")
        response = self.fetcher.fetch(url)

        if not response.ok:
            raise FetchError(
                url,
                f"Failed to fetch URL: {response.status_text}",
                status_code=response.status_code,
                status_text=response.status_text,
            )

        return self.analyze_html(url, response.body)

    def analyze_urls(self, urls: list[str], max_workers: Optional[int] = None) -> list[UrlAnalysis]:
        """Analyze several URLs concurrently.

        Each URL is independent; failures are reported per URL and the
        output keeps the input order.

        Args:
            urls: URLs to analyze
            max_workers: Thread pool size. Defaults to settings.MAX_WORKERS.

        Returns:
            List of UrlAnalysis, one per input URL
        """
        workers = max(1, min(max_workers or settings.MAX_WORKERS, len(urls) or 1))
        fetcher = self.fetcher  # Shared by all workers
        logger.debug(f"Analyzing {len(urls)} URLs with {workers} workers via {type(fetcher).__name__}")

        def run(url: str) -> UrlAnalysis:
            try:
                return UrlAnalysis(url=url, result=self.analyze_url(url))
            except SEOTagsError as e:
                logger.warning(f"Analysis of {url} failed: {e}")
                return UrlAnalysis(url=url, error=e)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(run, urls))
