"""Tests for tag evaluators."""

import json

import pytest

from seo_tags.config import AnalysisThresholds
from seo_tags.evaluators import (
    EVALUATORS,
    EvaluationContext,
    evaluate,
    evaluate_all,
    evaluate_canonical,
    evaluate_description,
    evaluate_hreflang,
    evaluate_og_description,
    evaluate_og_image,
    evaluate_og_title,
    evaluate_open_search,
    evaluate_robots,
    evaluate_schema,
    evaluate_title,
    evaluate_twitter_card,
    evaluate_twitter_image,
    evaluate_viewport,
)
from seo_tags.models import TagStatus, TagType


@pytest.fixture
def context():
    """Evaluation context for a typical article page."""
    return EvaluationContext(page_url="https://x.com/page")


class TestMissingTags:
    """Absent tags are classified, never raised."""

    @pytest.mark.parametrize("tag_type", [t for t in EVALUATORS if t != TagType.HREFLANG])
    def test_absent_tag_is_missing(self, tag_type, context):
        """Every evaluator except hreflang reports missing with a fix."""
        finding = evaluate(tag_type, None, context)

        assert finding.type == tag_type
        assert finding.status == TagStatus.MISSING
        assert finding.status_text == "Missing"
        assert finding.content is None
        assert finding.recommendation
        assert finding.best_practices

    def test_absent_hreflang_is_not_applicable(self, context):
        """Single-language pages are not penalized for lacking hreflang."""
        finding = evaluate_hreflang(None, context)

        assert finding.status == TagStatus.NOT_APPLICABLE
        assert finding.status_text == "N/A"
        assert finding.content is None

    def test_missing_canonical_proposes_page_url(self, context):
        """The fix for a missing canonical points at the page itself."""
        finding = evaluate_canonical(None, context)
        assert finding.recommendation == 'Add <link rel="canonical" href="https://x.com/page">'

    def test_present_findings_have_content(self, context):
        """Present tags always carry their content."""
        finding = evaluate_og_image("https://x.com/share.png", context)
        assert finding.content == "https://x.com/share.png"


class TestTitle:
    """Title length boundaries."""

    @pytest.mark.parametrize("length", [10, 40, 70])
    def test_title_in_range_is_optimal(self, length, context):
        finding = evaluate_title("a" * length, context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Optimal"
        assert finding.recommendation is None

    def test_title_too_short(self, context):
        finding = evaluate_title("a" * 9, context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Too Short"
        assert finding.recommendation

    def test_title_too_long(self, context):
        finding = evaluate_title("a" * 71, context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Too Long"

    def test_best_practices_report_current_length(self, context):
        finding = evaluate_title("Hello World Page", context)
        assert finding.best_practices[0] == "55-60 characters in length (current: 16)"

    def test_custom_thresholds(self):
        """Limits come from the configured thresholds."""
        context = EvaluationContext(
            page_url="https://x.com/",
            thresholds=AnalysisThresholds(title_min=30, title_max=60),
        )
        assert evaluate_title("a" * 20, context).status_text == "Too Short"
        assert evaluate_title("a" * 61, context).status_text == "Too Long"
        assert evaluate_title("a" * 45, context).status == TagStatus.OPTIMAL


class TestDescription:
    """Meta description length boundaries."""

    @pytest.mark.parametrize("length,status,text", [
        (69, TagStatus.IMPROVE, "Too Short"),
        (70, TagStatus.OPTIMAL, "Optimal"),
        (160, TagStatus.OPTIMAL, "Optimal"),
        (161, TagStatus.IMPROVE, "Too Long"),
    ])
    def test_description_boundaries(self, length, status, text, context):
        finding = evaluate_description("d" * length, context)
        assert finding.status == status
        assert finding.status_text == text


class TestViewport:
    """Viewport content checks."""

    def test_complete_viewport_is_optimal(self, context):
        finding = evaluate_viewport("width=device-width, initial-scale=1.0", context)
        assert finding.status == TagStatus.OPTIMAL

    def test_missing_initial_scale_is_incomplete(self, context):
        finding = evaluate_viewport("width=device-width", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Incomplete"

    def test_missing_device_width_is_incomplete(self, context):
        finding = evaluate_viewport("initial-scale=1, user-scalable=no", context)
        assert finding.status_text == "Incomplete"

    def test_user_scalable_no_is_accessibility_issue(self, context):
        """Zoom blocking is reported only once the required parts are present."""
        finding = evaluate_viewport(
            "width=device-width, initial-scale=1.0, user-scalable=no", context
        )
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Accessibility Issue"


class TestRobots:
    """Robots directive checks."""

    def test_noindex_blocks_indexing(self, context):
        finding = evaluate_robots("noindex, nofollow", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Blocking Indexing"

    def test_uppercase_noindex(self, context):
        assert evaluate_robots("NOINDEX", context).status_text == "Blocking Indexing"

    def test_index_follow_is_optimal(self, context):
        finding = evaluate_robots("index, follow", context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.content == "index, follow"


class TestSocialMedia:
    """Open Graph and Twitter Card checks."""

    def test_og_title_too_long(self, context):
        finding = evaluate_og_title("t" * 91, context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Too Long"

    def test_og_title_present(self, context):
        finding = evaluate_og_title("t" * 90, context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Present"

    def test_og_description_too_short(self, context):
        finding = evaluate_og_description("d" * 99, context)
        assert finding.status_text == "Too Short"
        assert "Current length: 99 characters" in finding.best_practices

    def test_og_description_present(self, context):
        finding = evaluate_og_description("d" * 100, context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Present"

    def test_og_image_has_no_length_rule(self, context):
        assert evaluate_og_image("x", context).status_text == "Present"

    def test_twitter_summary_card_is_suboptimal(self, context):
        finding = evaluate_twitter_card("summary", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Suboptimal"

    def test_twitter_large_image_card_is_optimal(self, context):
        finding = evaluate_twitter_card("summary_large_image", context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Optimal"

    def test_twitter_image_present(self, context):
        assert evaluate_twitter_image("https://x.com/t.png", context).status_text == "Present"


class TestCanonical:
    """Canonical URL resolution against the page URL."""

    def test_relative_canonical_to_other_page(self, context):
        finding = evaluate_canonical("/other-page", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Different URL"

    def test_relative_canonical_to_same_page(self, context):
        finding = evaluate_canonical("/page", context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Present"

    def test_absolute_canonical_ignores_query(self, context):
        """Only the path is compared."""
        finding = evaluate_canonical("https://www.x.com/page?utm=1", context)
        assert finding.status == TagStatus.OPTIMAL

    def test_root_paths_match(self):
        context = EvaluationContext(page_url="https://x.com")
        assert evaluate_canonical("https://x.com/", context).status == TagStatus.OPTIMAL

    def test_unparseable_canonical(self, context):
        finding = evaluate_canonical("http://[::1", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Invalid URL"


class TestHreflang:

    def test_present_hreflang(self, context):
        finding = evaluate_hreflang("3", context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.content == "Multiple hreflang tags present"


class TestSchema:
    """JSON-LD structured data checks."""

    def test_invalid_json(self, context):
        finding = evaluate_schema("{not json", context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Invalid Format"
        assert finding.content == "{not json"

    def test_json_null_is_invalid(self, context):
        assert evaluate_schema("null", context).status_text == "Invalid Format"

    def test_missing_type_is_incomplete(self, context):
        finding = evaluate_schema('{"@context": "https://schema.org", "name": "A", "url": "B"}', context)
        assert finding.status_text == "Incomplete"

    def test_array_is_incomplete(self, context):
        assert evaluate_schema('[{"@type": "Thing"}]', context).status_text == "Incomplete"

    def test_two_keys_is_basic_only(self, context):
        """Both required keys but nothing else."""
        finding = evaluate_schema('{"@context":"https://schema.org","@type":"Article"}', context)
        assert finding.status == TagStatus.IMPROVE
        assert finding.status_text == "Basic Only"

    def test_rich_schema_is_present(self, context):
        raw = json.dumps({
            "@context": "https://schema.org",
            "@type": "Organization",
            "name": "Example Corp",
            "url": "https://www.example.com",
            "logo": "https://www.example.com/images/logo.png",
        })
        finding = evaluate_schema(raw, context)

        assert finding.status == TagStatus.OPTIMAL
        assert finding.status_text == "Present"
        assert finding.content == raw[:100] + "..."

    def test_short_schema_content_is_not_truncated(self, context):
        raw = '{"@context":"a","@type":"b","c":1,"d":2}'
        finding = evaluate_schema(raw, context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.content == raw


class TestOpenSearch:

    def test_present(self, context):
        finding = evaluate_open_search("/opensearch.xml", context)
        assert finding.status == TagStatus.OPTIMAL
        assert finding.content == "/opensearch.xml"


class TestDispatch:
    """Evaluator table behavior."""

    def test_evaluate_all_treats_missing_keys_as_absent(self, context):
        findings = evaluate_all({TagType.TITLE: "A perfectly fine title"}, context)

        assert set(findings) == set(EVALUATORS)
        assert findings[TagType.TITLE].status == TagStatus.OPTIMAL
        assert findings[TagType.DESCRIPTION].status == TagStatus.MISSING

    def test_evaluate_all_subset(self, context):
        findings = evaluate_all({}, context, [TagType.ROBOTS])
        assert list(findings) == [TagType.ROBOTS]

    def test_unregistered_type_raises_key_error(self, context):
        with pytest.raises(KeyError):
            evaluate(TagType.OG_URL, "https://x.com", context)

    @pytest.mark.parametrize("tag_type", list(EVALUATORS))
    def test_non_healthy_findings_carry_recommendation(self, tag_type, context):
        """Every finding that needs action explains how to fix it."""
        for raw in (None, "", "x", "summary", "noindex", "{bad", "/elsewhere"):
            finding = evaluate(tag_type, raw, context)
            if not finding.status.is_healthy:
                assert finding.recommendation
