"""Shared fixtures: synthetic documents for analyzer and orchestrator tests."""

import pytest

from aeo_audit import (
    DocumentModel,
    Heading,
    LinkData,
    MetaTag,
    OpenGraphTag,
    PerformanceMetrics,
    SchemaBlock,
)


GOOD_ANSWER = (
    "Answer engine optimization structures page content so that assistants "
    "and search engines can quote it directly, which means short factual "
    "answers, clear headings and valid structured data on every page."
)

FAQ_QUESTIONS = [
    "What is answer engine optimization?",
    "How does FAQ schema help voice search?",
    "Why do featured snippets matter?",
    "When should I update my structured data?",
    "Where should the FAQ block live on the page?",
    "Who benefits from semantic HTML?",
]


def faq_schema(questions=FAQ_QUESTIONS, answer=GOOD_ANSWER, is_valid=True):
    return SchemaBlock(
        type="FAQPage",
        is_valid=is_valid,
        data={
            "@context": "https://schema.org",
            "@type": "FAQPage",
            "mainEntity": [
                {
                    "@type": "Question",
                    "name": q,
                    "acceptedAnswer": {"@type": "Answer", "text": answer},
                }
                for q in questions
            ],
        },
    )


RICH_CONTENT = (
    "What is answer engine optimization? It is the practice of shaping web "
    "pages so that assistants can read them aloud. Jane Smith from Acme Corp "
    "explains how to structure a page. "
    "A featured snippet answer works best when it gives the reader one "
    "complete idea in plain language, names the subject in the first few "
    "words, explains the key steps or facts in order, and ends before the "
    "assistant would need to cut the reply short for time. "
    + "Short clear sentences help every reader follow the main idea quickly. " * 40
)


@pytest.fixture
def make_doc():
    """Factory for DocumentModel with overridable fields."""

    def _make(**overrides):
        fields = dict(url="https://example.com/page")
        fields.update(overrides)
        return DocumentModel(**fields)

    return _make


@pytest.fixture
def rich_doc():
    """A well-optimized page that exercises every analyzer's positive branch."""
    return DocumentModel(
        url="https://example.com/guide",
        title="Answer Engine Optimization Guide | Example Publishing",
        meta_description=(
            "Learn how answer engine optimization works, which structured data "
            "matters most, and how to write content that voice assistants quote."
        ),
        headings=[
            Heading(level=1, text="Answer Engine Optimization"),
            Heading(level=2, text="What is AEO?"),
            Heading(level=2, text="Structured data"),
            Heading(level=3, text="FAQ schema"),
        ],
        content=RICH_CONTENT,
        schemas=[
            faq_schema(),
            SchemaBlock(
                type="Article",
                data={
                    "@type": "Article",
                    "headline": "Answer Engine Optimization Guide",
                    "author": {"@type": "Person", "name": "Jane Smith"},
                    "datePublished": "2024-01-01",
                    "image": "https://example.com/cover.png",
                    "publisher": {"@type": "Organization", "name": "Example"},
                },
            ),
        ],
        meta_tags=[
            MetaTag(name="description", content="Learn about AEO"),
            MetaTag(name="keywords", content="aeo, seo"),
            MetaTag(name="author", content="Jane Smith"),
            MetaTag(name="viewport", content="width=device-width, initial-scale=1"),
            MetaTag(name="robots", content="index, follow"),
            MetaTag(name="twitter:card", content="summary_large_image"),
            MetaTag(name="twitter:title", content="AEO Guide"),
        ],
        open_graph_tags=[
            OpenGraphTag(property="og:title", content="AEO Guide"),
            OpenGraphTag(property="og:description", content="All about AEO"),
            OpenGraphTag(property="og:image", content="https://example.com/og.png"),
            OpenGraphTag(property="og:url", content="https://example.com/guide"),
            OpenGraphTag(property="og:type", content="article"),
        ],
        links=[
            LinkData(href="https://example.com/", text="Home", is_internal=True),
            LinkData(
                href="https://en.wikipedia.org/wiki/Search_engine_optimization",
                text="SEO on Wikipedia",
            ),
        ],
        performance=PerformanceMetrics(load_time_ms=800, page_size_bytes=120_000),
    )
