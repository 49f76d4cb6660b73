"""SEO tag analyzer: evaluates a page's meta, social and technical tags."""

__version__ = "0.1.0"

from seo_tags.analyzer import SEOTagAnalyzer, UrlAnalysis
from seo_tags.document import Document, SoupDocument, parse_html
from seo_tags.evaluators import EVALUATORS, EvaluationContext, evaluate, evaluate_all
from seo_tags.exceptions import FetchError, InvalidURLError, SEOTagsError
from seo_tags.extractor import TagExtractor
from seo_tags.fetcher import FetchResponse, WebFetcher
from seo_tags.models import (
    AnalysisResult,
    Category,
    Finding,
    RecommendationGroup,
    RecommendationKind,
    RequestRecord,
    Section,
    TagStatus,
    TagType,
    worst_status,
)
from seo_tags.recommendations import generate_recommendations
from seo_tags.request_log import (
    BackgroundRequestLogger,
    InMemoryRequestLog,
    SqliteRequestLog,
    get_request_log,
)
from seo_tags.scoring import calculate_score
from seo_tags.sections import build_sections, group_by_category
from seo_tags.config import AnalysisThresholds, settings

__all__ = [
    # Core
    "SEOTagAnalyzer",
    "UrlAnalysis",
    "TagExtractor",
    "EVALUATORS",
    "EvaluationContext",
    "evaluate",
    "evaluate_all",
    "build_sections",
    "group_by_category",
    "calculate_score",
    "generate_recommendations",
    # Collaborators
    "Document",
    "SoupDocument",
    "parse_html",
    "WebFetcher",
    "FetchResponse",
    "BackgroundRequestLogger",
    "InMemoryRequestLog",
    "SqliteRequestLog",
    "get_request_log",
    # Models
    "AnalysisResult",
    "Category",
    "Finding",
    "RecommendationGroup",
    "RecommendationKind",
    "RequestRecord",
    "Section",
    "TagStatus",
    "TagType",
    "worst_status",
    # Errors
    "SEOTagsError",
    "InvalidURLError",
    "FetchError",
    "AnalysisThresholds",
    "settings",
]
