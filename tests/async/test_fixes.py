"""
Fix dispatch tests.

Category selection is pure; the HTTP generator is exercised against an
httpx.MockTransport so no network is needed.
"""

import json

import httpx
import pytest

from aeo_audit import (
    AEOCategory,
    AnalysisResult,
    CategoryIssue,
    CodeLanguage,
    FixType,
    GeneratedFix,
    Heading,
    HttpFixGenerator,
    Severity,
    dispatch_fixes,
    select_fix_categories,
)
from aeo_audit.fixes import build_excerpt, build_fix_request, needs_remediation


ENDPOINT = "https://fixes.example.com/generate"


def _result(**scores):
    category_scores = {category: 100 for category in AEOCategory}
    for key, score in scores.items():
        category_scores[AEOCategory(key)] = score
    issues = [
        CategoryIssue(category=AEOCategory.FAQ_SCHEMA, severity=Severity.CRITICAL,
                      title="Missing FAQ Schema"),
        CategoryIssue(category=AEOCategory.META_TAGS, severity=Severity.MEDIUM,
                      title="Title Too Short"),
    ]
    return AnalysisResult(overall_score=50, category_scores=category_scores, issues=issues)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:

    @pytest.mark.parametrize(
        "category,score,expected",
        [
            (AEOCategory.SCHEMA_MARKUP, 50, False),
            (AEOCategory.SCHEMA_MARKUP, 49, True),
            (AEOCategory.FAQ_SCHEMA, 55, False),
            (AEOCategory.CONTENT_STRUCTURE, 60, False),
            (AEOCategory.CONTENT_STRUCTURE, 59, True),
        ],
    )
    def test_thresholds(self, category, score, expected):
        assert needs_remediation(category, score) is expected

    def test_lowest_score_first_then_heaviest(self):
        result = _result(
            schema_markup=55, faq_schema=49, meta_tags=59,
            technical_seo=10, voice_search=10,
        )
        assert select_fix_categories(result, limit=None) == [
            AEOCategory.VOICE_SEARCH,
            AEOCategory.TECHNICAL_SEO,
            AEOCategory.FAQ_SCHEMA,
            AEOCategory.META_TAGS,
        ]
        assert len(select_fix_categories(result)) == 3

    def test_nothing_to_fix(self):
        assert select_fix_categories(_result()) == []


class TestFixRequest:

    def test_excerpt_truncation(self, make_doc):
        doc = make_doc(
            content="x" * 2500,
            headings=[Heading(level=2, text=f"H{i}") for i in range(12)],
        )
        excerpt = build_excerpt(doc)
        assert len(excerpt.content) == 2003
        assert excerpt.content.endswith("...")
        assert len(excerpt.headings) == 10

    def test_request_carries_category_issues(self, make_doc):
        request = build_fix_request(AEOCategory.FAQ_SCHEMA, make_doc(), _result(faq_schema=0))
        assert request.fix_type == FixType.FAQ_GENERATION
        assert request.severity == Severity.HIGH
        assert request.score == 0
        assert [i.title for i in request.issues] == ["Missing FAQ Schema"]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class _RecordingGenerator:
    def __init__(self, fail_for=()):
        self.requests = []
        self._fail_for = set(fail_for)

    async def generate(self, request):
        self.requests.append(request)
        if request.category in self._fail_for:
            raise RuntimeError("generator unavailable")
        return GeneratedFix(category=request.category, fix_type=request.fix_type, title="fix")


@pytest.mark.asyncio
async def test_dispatch_skips_failures(make_doc):
    generator = _RecordingGenerator(fail_for=[AEOCategory.META_TAGS])
    result = _result(faq_schema=0, meta_tags=10, technical_seo=20)

    fixes = await dispatch_fixes(result, make_doc(), generator)

    assert [r.category for r in generator.requests] == [
        AEOCategory.FAQ_SCHEMA, AEOCategory.META_TAGS, AEOCategory.TECHNICAL_SEO,
    ]
    assert [f.category for f in fixes] == [AEOCategory.FAQ_SCHEMA, AEOCategory.TECHNICAL_SEO]


@pytest.mark.asyncio
async def test_http_generator_posts_request(make_doc):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append((request.headers.get("Authorization"), body))
        if body["category"] == "meta_tags":
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json={
            "title": "Add FAQPage JSON-LD",
            "code": '{"@type": "FAQPage"}',
            "language": "json-ld",
        })

    generator = HttpFixGenerator(
        ENDPOINT, api_key="secret", transport=httpx.MockTransport(handler)
    )
    fixes = await dispatch_fixes(_result(faq_schema=0, meta_tags=10), make_doc(), generator)

    assert [auth for auth, _ in seen] == ["Bearer secret", "Bearer secret"]
    assert seen[0][1]["fix_type"] == "faq_generation"
    assert seen[0][1]["excerpt"]["url"] == "https://example.com/page"

    assert len(fixes) == 1
    fix = fixes[0]
    assert fix.category == AEOCategory.FAQ_SCHEMA
    assert fix.title == "Add FAQPage JSON-LD"
    assert fix.language == CodeLanguage.JSON_LD
    assert fix.severity == Severity.HIGH
    assert fix.estimated_impact == 25


@pytest.mark.asyncio
async def test_http_generator_defaults(make_doc):
    generator = HttpFixGenerator(
        ENDPOINT, transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    )
    request = build_fix_request(AEOCategory.SEMANTIC_HTML, make_doc(), _result(semantic_html=0))
    fix = await generator.generate(request)
    assert fix.title == "semantic html - html restructure"
    assert fix.fix_type == FixType.HTML_RESTRUCTURE
    assert fix.estimated_impact == 15
