"""
Category analyzer tests.

Each analyzer is called directly with a hand-built DocumentModel; the
orchestrator is covered separately in test_orchestrator.py.
"""

import pytest

from aeo_audit import (
    ANALYZERS,
    CoreWebVitals,
    Heading,
    LinkData,
    PerformanceMetrics,
    SchemaBlock,
    Severity,
)
from aeo_audit.analyzers import content_structure, faq_schema, schema_markup, technical_seo
from aeo_audit.analyzers.signals import (
    analyze_entity_optimization,
    analyze_featured_snippets,
    analyze_knowledge_graph,
    analyze_semantic_html,
    analyze_voice_search,
    is_authority_link,
)

from conftest import FAQ_QUESTIONS, GOOD_ANSWER, faq_schema as make_faq


def _titles(result):
    return [issue.title for issue in result.issues]


def _sentence(words):
    return " ".join(["word"] * words) + "."


# ---------------------------------------------------------------------------
# FAQ schema
# ---------------------------------------------------------------------------


class TestFAQSchema:

    def test_missing_faq_is_zero_with_one_critical_issue(self, make_doc):
        result = faq_schema.analyze(make_doc(), False)
        assert result.score == 0
        assert len(result.issues) == 1
        assert result.issues[0].severity == Severity.CRITICAL
        assert result.issues[0].title == "Missing FAQ Schema"
        assert [r.title for r in result.recommendations] == ["Add FAQ Schema Markup"]

    def test_six_good_entries_score_high(self, rich_doc):
        result = faq_schema.analyze(rich_doc, False)
        assert result.score >= 80
        assert result.score == 100
        assert not any(i.severity == Severity.CRITICAL for i in result.issues)

    def test_all_blocks_invalid(self, make_doc):
        result = faq_schema.analyze(make_doc(schemas=[make_faq(is_valid=False)]), False)
        assert result.score == 20
        assert result.issues[0].severity == Severity.HIGH

    def test_empty_faq(self, make_doc):
        result = faq_schema.analyze(make_doc(schemas=[make_faq(questions=[])]), False)
        assert result.score == 30
        assert _titles(result) == ["Empty FAQ Schema"]

    def test_too_few_entries(self, make_doc):
        doc = make_doc(schemas=[make_faq(questions=FAQ_QUESTIONS[:2])])
        result = faq_schema.analyze(doc, False)
        assert result.score == 50
        assert _titles(result) == ["Insufficient FAQ Content"]

    def test_low_quality_entries_get_optimize_recommendation(self, make_doc):
        doc = make_doc(schemas=[make_faq(questions=["faq one", "faq two", "faq three"],
                                          answer="Yes.")])
        result = faq_schema.analyze(doc, False)
        assert result.score == 70
        assert "Optimize FAQ Content" in [r.title for r in result.recommendations]

    def test_convert_existing_faq_content(self, make_doc):
        doc = make_doc(
            headings=[Heading(level=1, text="Frequently Asked Questions")],
            content="What is answer engine optimization? Read on.",
        )
        full = faq_schema.analyze(doc, False)
        quick = faq_schema.analyze(doc, True)
        assert "Convert Existing FAQ Content" in [r.title for r in full.recommendations]
        assert "Convert Existing FAQ Content" not in [r.title for r in quick.recommendations]

    def test_single_question_object(self):
        entry = {"@type": "Question", "name": "What is it?"}
        assert faq_schema.faq_entries({"mainEntity": entry}) == [entry]
        assert faq_schema.faq_entries({"mainEntity": "nope"}) == []

    def test_faq_type_in_list(self):
        block = SchemaBlock(type="WebPage", data={"@type": ["WebPage", "FAQPage"]})
        assert faq_schema.is_faq_block(block)

    @pytest.mark.parametrize(
        "question,expected",
        [
            ("What is AEO?", True),
            ("Does this page need FAQ markup?", True),
            ("What is AEO", False),
            ("Is it?", False),
            ("Tell me more?", False),
            ("Somewhat odd?", False),
        ],
    )
    def test_is_good_question(self, question, expected):
        assert faq_schema.is_good_question(question) is expected

    def test_is_good_answer(self):
        assert faq_schema.is_good_answer(GOOD_ANSWER)
        assert not faq_schema.is_good_answer("Too short.")
        assert not faq_schema.is_good_answer(" ".join(["word"] * 81))


# ---------------------------------------------------------------------------
# Schema markup
# ---------------------------------------------------------------------------


class TestSchemaMarkup:

    def test_no_schema(self, make_doc):
        result = schema_markup.analyze(make_doc(), False)
        assert result.score == 0
        assert result.issues[0].severity == Severity.CRITICAL
        assert result.issues[0].title == "No Schema Markup Found"

    def test_all_invalid(self, make_doc):
        invalid = SchemaBlock(type="Invalid", is_valid=False,
                              errors=["Invalid JSON-LD: Expecting value"])
        result = schema_markup.analyze(make_doc(schemas=[invalid]), False)
        assert result.score == 10
        assert _titles(result) == ["Invalid Schema Markup", "1 Invalid Schema(s)"]
        assert "Expecting value" in result.issues[1].description

    def test_rich_schemas(self, rich_doc):
        valid = [s for s in rich_doc.schemas if s.is_valid]
        # FAQPage: 3 keys, generic. Article: 13 property points.
        assert schema_markup.completeness_points(valid[0]) == 3
        assert schema_markup.completeness_points(valid[1]) == 13
        # 30 base + 20 for two types + 20 for Article + 8 average completeness
        assert schema_markup.calculate_schema_score(valid) == 78

        result = schema_markup.analyze(rich_doc, False)
        assert result.score == 78
        assert not any(t.startswith("Incomplete") for t in _titles(result))

    def test_incomplete_schema_only_in_full_mode(self, make_doc):
        org = SchemaBlock(type="Organization", data={"@type": "Organization", "name": "Acme"})
        doc = make_doc(schemas=[org])
        assert schema_markup.missing_properties(org) == ["url", "logo"]
        assert "Incomplete Organization Schema" in _titles(schema_markup.analyze(doc, False))
        assert "Incomplete Organization Schema" not in _titles(schema_markup.analyze(doc, True))

    def test_suggests_missing_types(self, make_doc):
        doc = make_doc(
            content="Our company was founded in 1999. Visit us at our address.",
            schemas=[SchemaBlock(type="Organization", data={"name": "Acme"})],
        )
        missing = schema_markup.find_missing_schemas(doc.schemas, doc)
        assert "WebSite" in missing
        assert "LocalBusiness" in missing
        assert "Organization" not in missing


# ---------------------------------------------------------------------------
# Content structure
# ---------------------------------------------------------------------------


class TestContentStructure:

    def test_skipped_heading_level_flags_structure(self, make_doc):
        doc = make_doc(headings=[Heading(level=1, text="Top"), Heading(level=3, text="Deep")])
        result = content_structure.analyze(doc, False)
        structure = [i for i in result.issues if i.title == "Poor Heading Structure"]
        assert len(structure) == 1
        assert structure[0].severity == Severity.MEDIUM
        assert "H1 to H3" in structure[0].description

    def test_empty_page_blend(self, make_doc):
        # headings 30*40, readability 40*30, length 20*30
        result = content_structure.analyze(make_doc(), False)
        assert result.score == 30
        assert "Insufficient Content Length" in _titles(result)

    def test_good_structure_and_length(self, rich_doc):
        result = content_structure.analyze(rich_doc, False)
        assert "Poor Heading Structure" not in _titles(result)
        assert "Insufficient Content Length" not in _titles(result)
        assert len(result.recommendations) == 1

    def test_quick_skips_recommendations(self, rich_doc):
        assert content_structure.analyze(rich_doc, True).recommendations == []


# ---------------------------------------------------------------------------
# Signal analyzers
# ---------------------------------------------------------------------------


class TestFeaturedSnippets:

    def test_no_candidates(self, make_doc):
        result = analyze_featured_snippets(make_doc(content="Too short."), False)
        assert result.score == 20
        assert result.issues[0].severity == Severity.MEDIUM

    @pytest.mark.parametrize("count,expected", [(1, 60), (2, 65), (5, 80), (8, 80)])
    def test_candidate_scaling(self, make_doc, count, expected):
        doc = make_doc(content=" ".join([_sentence(45)] * count))
        assert analyze_featured_snippets(doc, False).score == expected


class TestEntityOptimization:

    def test_entities_found(self, make_doc):
        result = analyze_entity_optimization(make_doc(content="written by jane for Acme Corp"), False)
        assert result.score == 70
        assert result.issues == []

    def test_no_entities(self, make_doc):
        result = analyze_entity_optimization(make_doc(content="all lowercase words here"), False)
        assert result.score == 30
        assert _titles(result) == ["Limited Entity Coverage"]


class TestSemanticHTML:

    def test_headings_and_long_content(self, make_doc):
        doc = make_doc(headings=[Heading(level=1, text="T")], content="x" * 301)
        assert analyze_semantic_html(doc, False).score == 60

    def test_content_at_threshold_is_not_enough(self, make_doc):
        doc = make_doc(headings=[Heading(level=1, text="T")], content="x" * 300)
        assert analyze_semantic_html(doc, False).score == 40

    def test_no_headings(self, make_doc):
        assert analyze_semantic_html(make_doc(content="x" * 500), False).score == 40


class TestVoiceSearch:

    def test_conversational(self, make_doc):
        assert analyze_voice_search(make_doc(content="Here is how to do it."), False).score == 70

    def test_not_conversational(self, make_doc):
        result = analyze_voice_search(make_doc(content="Product specifications."), False)
        assert result.score == 30
        assert result.issues[0].severity == Severity.MEDIUM


class TestKnowledgeGraph:

    def test_authority_link(self, rich_doc):
        assert analyze_knowledge_graph(rich_doc, False).score == 50

    def test_no_authority_link(self, make_doc):
        doc = make_doc(links=[LinkData(href="https://example.com/about", text="About")])
        result = analyze_knowledge_graph(doc, False)
        assert result.score == 30
        assert result.issues[0].severity == Severity.LOW

    @pytest.mark.parametrize(
        "href,expected",
        [
            ("https://en.wikipedia.org/wiki/AEO", True),
            ("https://wikipedia.org/", True),
            ("https://www.nasa.gov/missions", True),
            ("https://cs.stanford.edu/", True),
            ("https://notwikipedia.org/", False),
            ("https://example.com/gov", False),
            ("/relative/path", False),
        ],
    )
    def test_is_authority_link(self, href, expected):
        assert is_authority_link(href) is expected


# ---------------------------------------------------------------------------
# Technical SEO
# ---------------------------------------------------------------------------


class TestTechnicalSEO:

    def test_baseline(self, make_doc):
        result = technical_seo.analyze(make_doc(), False)
        assert result.score == 60
        assert result.issues == []
        assert len(result.recommendations) == 1

    def test_slow_load(self, make_doc):
        doc = make_doc(performance=PerformanceMetrics(load_time_ms=4000))
        result = technical_seo.analyze(doc, False)
        assert result.score == 40
        assert result.issues[0].severity == Severity.HIGH

    def test_large_page(self, make_doc):
        doc = make_doc(performance=PerformanceMetrics(page_size_bytes=4_000_000))
        assert technical_seo.analyze(doc, False).score == 50

    def test_core_web_vitals(self, make_doc):
        cwv = CoreWebVitals(lcp=3000, fid=150, cls=0.2)
        doc = make_doc(performance=PerformanceMetrics(core_web_vitals=cwv))
        result = technical_seo.analyze(doc, False)
        assert result.score == 35
        assert _titles(result) == [
            "Poor Largest Contentful Paint",
            "Slow First Input Delay",
            "High Cumulative Layout Shift",
        ]

    def test_everything_wrong(self, make_doc):
        perf = PerformanceMetrics(
            load_time_ms=9000,
            page_size_bytes=9_000_000,
            core_web_vitals=CoreWebVitals(lcp=6000, fid=400, cls=0.5),
        )
        assert technical_seo.analyze(make_doc(performance=perf), False).score == 5


# ---------------------------------------------------------------------------
# Registry-wide properties
# ---------------------------------------------------------------------------


class TestAllAnalyzers:

    @pytest.mark.parametrize("category", list(ANALYZERS))
    @pytest.mark.parametrize("quick", [True, False])
    def test_scores_in_range(self, category, quick, make_doc, rich_doc):
        analyzer = ANALYZERS[category]
        for doc in (make_doc(), rich_doc):
            result = analyzer(doc, quick)
            assert 0 <= result.score <= 100

    @pytest.mark.parametrize("category", list(ANALYZERS))
    def test_deterministic(self, category, rich_doc):
        analyzer = ANALYZERS[category]
        assert analyzer(rich_doc, False) == analyzer(rich_doc, False)

    def test_registry_covers_every_category(self):
        from aeo_audit import AEOCategory
        assert set(ANALYZERS) == set(AEOCategory)
