"""
Category weighting table and overall-score aggregation.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple

from .models import AEOCategory, Severity


class CategoryConfig(NamedTuple):
    name: str
    description: str
    weight: int


CATEGORY_CONFIG: Mapping[AEOCategory, CategoryConfig] = MappingProxyType({
    AEOCategory.FAQ_SCHEMA: CategoryConfig(
        "FAQ Schema",
        "Structured FAQ data for voice search and featured snippets",
        15,
    ),
    AEOCategory.SCHEMA_MARKUP: CategoryConfig(
        "Schema Markup Suite",
        "Complete structured data implementation",
        20,
    ),
    AEOCategory.CONTENT_STRUCTURE: CategoryConfig(
        "AI-Optimized Content Structure",
        "Content formatted for LLM comprehension",
        15,
    ),
    AEOCategory.FEATURED_SNIPPETS: CategoryConfig(
        "Featured Snippet Optimization",
        "Content optimized for snippet capture",
        12,
    ),
    AEOCategory.ENTITY_OPTIMIZATION: CategoryConfig(
        "Entity & Keyword Optimization",
        "Semantic entity coverage and relationships",
        10,
    ),
    AEOCategory.META_TAGS: CategoryConfig(
        "Meta & Open Graph Tags",
        "Optimized meta tags for AI platforms",
        8,
    ),
    AEOCategory.SEMANTIC_HTML: CategoryConfig(
        "Semantic HTML Enhancement",
        "Proper HTML structure and accessibility",
        8,
    ),
    AEOCategory.VOICE_SEARCH: CategoryConfig(
        "Voice Search Optimization",
        "Conversational query optimization",
        5,
    ),
    AEOCategory.KNOWLEDGE_GRAPH: CategoryConfig(
        "Knowledge Graph Enhancement",
        "Entity relationships and authority signals",
        4,
    ),
    AEOCategory.TECHNICAL_SEO: CategoryConfig(
        "Technical SEO for AI Crawlers",
        "Technical optimization for AI systems",
        3,
    ),
})

CATEGORY_WEIGHTS: Mapping[AEOCategory, int] = MappingProxyType(
    {category: config.weight for category, config in CATEGORY_CONFIG.items()}
)

SEVERITY_RANK: Mapping[Severity, int] = MappingProxyType({
    Severity.CRITICAL: 1,
    Severity.HIGH: 2,
    Severity.MEDIUM: 3,
    Severity.LOW: 4,
})


def calculate_overall_score(category_scores: Mapping[AEOCategory, int]) -> int:
    """
    Weighted mean over all ten categories.

    A category absent from ``category_scores`` counts as 0, so an incomplete
    analysis scores lower than a complete one.
    """
    total_weight = sum(CATEGORY_WEIGHTS.values())
    weighted = sum(
        weight * category_scores.get(category, 0)
        for category, weight in CATEGORY_WEIGHTS.items()
    )
    return int(round(weighted / total_weight))


def format_category_name(category: AEOCategory) -> str:
    config = CATEGORY_CONFIG.get(category)
    return config.name if config else category.value.replace("_", " ")
