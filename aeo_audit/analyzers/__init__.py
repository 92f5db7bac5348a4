"""
Category analyzer registry.

Every analyzer is a pure function ``analyze(doc, quick) -> AnalyzerResult``;
``ANALYZERS`` maps each category key to its implementation.
"""

from types import MappingProxyType
from typing import Callable, Mapping

from ..models import AEOCategory, AnalyzerResult, DocumentModel
from . import content_structure, faq_schema, meta_tags, schema_markup, technical_seo
from .signals import (
    analyze_entity_optimization,
    analyze_featured_snippets,
    analyze_knowledge_graph,
    analyze_semantic_html,
    analyze_voice_search,
)

Analyzer = Callable[[DocumentModel, bool], AnalyzerResult]


ANALYZERS: Mapping[AEOCategory, Analyzer] = MappingProxyType({
    AEOCategory.FAQ_SCHEMA: faq_schema.analyze,
    AEOCategory.SCHEMA_MARKUP: schema_markup.analyze,
    AEOCategory.CONTENT_STRUCTURE: content_structure.analyze,
    AEOCategory.FEATURED_SNIPPETS: analyze_featured_snippets,
    AEOCategory.ENTITY_OPTIMIZATION: analyze_entity_optimization,
    AEOCategory.META_TAGS: meta_tags.analyze,
    AEOCategory.SEMANTIC_HTML: analyze_semantic_html,
    AEOCategory.VOICE_SEARCH: analyze_voice_search,
    AEOCategory.KNOWLEDGE_GRAPH: analyze_knowledge_graph,
    AEOCategory.TECHNICAL_SEO: technical_seo.analyze,
})

__all__ = ["ANALYZERS", "Analyzer"]
