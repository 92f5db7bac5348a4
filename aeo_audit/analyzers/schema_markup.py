"""
Structured-data suite analyzer.

Scores JSON-LD coverage: valid vs invalid blocks, type variety, presence of
the high-value schema.org types and per-type property completeness. Also
suggests types the page content looks like it should declare.
"""

import re
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ..helpers import clamp_score, contains_keywords, count_words
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    Heading,
    SchemaBlock,
    Severity,
)


IMPORTANT_SCHEMA_TYPES = frozenset([
    "Article",
    "BlogPosting",
    "Product",
    "LocalBusiness",
    "Organization",
    "Person",
    "WebSite",
    "WebPage",
    "BreadcrumbList",
    "HowTo",
    "Recipe",
    "Event",
])

# (property, points) per type; a generic scorer handles everything else.
_PROPERTY_POINTS: Dict[str, Sequence[Tuple[str, int]]] = {
    "Article": (
        ("headline", 3), ("author", 3), ("datePublished", 3), ("image", 2),
        ("publisher", 2), ("description", 2), ("mainEntityOfPage", 2),
        ("dateModified", 1), ("wordCount", 1), ("articleSection", 1),
    ),
    "Organization": (
        ("name", 4), ("url", 3), ("logo", 3), ("address", 3),
        ("telephone", 2), ("email", 2), ("sameAs", 2), ("description", 1),
    ),
    "LocalBusiness": (
        ("name", 3), ("address", 4), ("telephone", 3), ("openingHours", 3),
        ("geo", 3), ("url", 2), ("priceRange", 1), ("image", 1),
    ),
    "Product": (
        ("name", 4), ("description", 3), ("image", 3), ("offers", 4),
        ("brand", 2), ("sku", 2), ("aggregateRating", 2),
    ),
}
_PROPERTY_POINTS["BlogPosting"] = _PROPERTY_POINTS["Article"]

RECOMMENDED_PROPERTIES: Dict[str, Sequence[str]] = {
    "Article": ("headline", "author", "datePublished", "image"),
    "BlogPosting": ("headline", "author", "datePublished", "image"),
    "Organization": ("name", "url", "logo"),
    "LocalBusiness": ("address", "telephone", "openingHours"),
}

ARTICLE_INDICATORS = [
    "published", "author", "article", "blog", "post",
    "written by", "published on", "updated",
]
ORGANIZATION_INDICATORS = [
    "company", "corporation", "organization", "business",
    "founded", "headquarters", "contact us", "about us",
]
BREADCRUMB_INDICATORS = ["home >", "home /", "breadcrumb", "navigation"]
HOWTO_INDICATORS = [
    "how to", "step", "steps", "tutorial", "guide",
    "instructions", "method", "process",
]
LOCAL_INDICATORS = [
    "address", "phone", "hours", "location", "visit us",
    "directions", "map", "contact", "call us",
]

_STEP_HEADING = re.compile(r"step \d+|^\d+\.|first|second|third|next|finally", re.IGNORECASE)


# ─── Completeness ─────────────────────────────────────────────────────


def _generic_completeness(data: Dict[str, Any]) -> int:
    score = min(10, len(data))
    for prop, points in (("name", 2), ("description", 2), ("url", 1), ("image", 1)):
        if data.get(prop):
            score += points
    return score


def completeness_points(schema: SchemaBlock) -> int:
    points = _PROPERTY_POINTS.get(schema.type)
    if points is None:
        return _generic_completeness(schema.data)
    return sum(p for prop, p in points if schema.data.get(prop))


def average_completeness(schemas: Sequence[SchemaBlock]) -> float:
    if not schemas:
        return 0.0
    total = sum(completeness_points(s) for s in schemas)
    return min(20.0, total / len(schemas))


def missing_properties(schema: SchemaBlock) -> List[str]:
    return [
        prop
        for prop in RECOMMENDED_PROPERTIES.get(schema.type, ())
        if not schema.data.get(prop)
    ]


def calculate_schema_score(valid: Sequence[SchemaBlock]) -> int:
    score = 30.0
    unique_types = {s.type for s in valid}
    score += min(30, len(unique_types) * 10)
    if unique_types & IMPORTANT_SCHEMA_TYPES:
        score += 20
    score += average_completeness(valid)
    return min(100, int(round(score)))


# ─── Content-based suggestions ────────────────────────────────────────


def _looks_like_article(content: str, headings: Sequence[Heading]) -> bool:
    return (
        contains_keywords(content, ARTICLE_INDICATORS)
        and len(headings) >= 3
        and count_words(content) >= 300
    )


def _looks_like_howto(content: str, headings: Sequence[Heading]) -> bool:
    return contains_keywords(content, HOWTO_INDICATORS) and any(
        _STEP_HEADING.search(h.text) for h in headings
    )


def _has_breadcrumbs(doc: DocumentModel) -> bool:
    return contains_keywords(doc.content, BREADCRUMB_INDICATORS) or any(
        ">" in link.text or "/" in link.text for link in doc.links
    )


_SUGGESTIONS: Sequence[Tuple[str, Tuple[str, ...], Callable[[DocumentModel], bool]]] = (
    ("Article", ("Article", "BlogPosting"),
     lambda d: _looks_like_article(d.content, d.headings)),
    ("Organization", ("Organization",),
     lambda d: contains_keywords(d.content, ORGANIZATION_INDICATORS)),
    ("WebSite", ("WebSite",), lambda d: True),
    ("BreadcrumbList", ("BreadcrumbList",), _has_breadcrumbs),
    ("HowTo", ("HowTo",), lambda d: _looks_like_howto(d.content, d.headings)),
    ("LocalBusiness", ("LocalBusiness",),
     lambda d: contains_keywords(d.content, LOCAL_INDICATORS)),
)


def find_missing_schemas(valid: Sequence[SchemaBlock], doc: DocumentModel) -> List[str]:
    existing = {s.type for s in valid}
    return [
        suggested
        for suggested, covered_by, applies in _SUGGESTIONS
        if not existing.intersection(covered_by) and applies(doc)
    ]


# ─── Analyzer ─────────────────────────────────────────────────────────


def analyze(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    recommendations: List[AnalyzerRecommendation] = []

    if not doc.schemas:
        issues.append(AnalyzerIssue(
            severity=Severity.CRITICAL,
            title="No Schema Markup Found",
            description="No structured data markup detected on the page",
            impact="Reduced visibility in search results and AI platforms",
        ))
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Implement Basic Schema Markup",
            description="Add appropriate schema types based on content type",
            estimated_impact=30,
            implementation_time_minutes=45,
        ))
        return AnalyzerResult(score=0, issues=issues, recommendations=recommendations)

    valid = [s for s in doc.schemas if s.is_valid]
    invalid = [s for s in doc.schemas if not s.is_valid]

    if not valid:
        score = 10
        issues.append(AnalyzerIssue(
            severity=Severity.HIGH,
            title="Invalid Schema Markup",
            description="All schema markup contains errors and may not be recognized",
            impact="Schema benefits not realized due to validation errors",
        ))
    else:
        score = calculate_schema_score(valid)

    if invalid:
        errors = sorted({e for s in invalid for e in s.errors})
        description = "Some schema markup contains validation errors"
        if errors:
            description += ": " + "; ".join(errors[:3])
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title=f"{len(invalid)} Invalid Schema(s)",
            description=description,
            impact="Partial loss of structured data benefits",
        ))
        recommendations.append(AnalyzerRecommendation(
            priority=2,
            title="Fix Schema Validation Errors",
            description="Correct errors in existing schema markup",
            estimated_impact=15,
            implementation_time_minutes=20,
        ))

    missing = find_missing_schemas(valid, doc)
    if missing:
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Add Missing Schema Types",
            description=f"Consider adding: {', '.join(missing)}",
            estimated_impact=20,
            implementation_time_minutes=30,
        ))

    if not quick:
        for schema in valid:
            props = missing_properties(schema)
            if props:
                issues.append(AnalyzerIssue(
                    severity=Severity.LOW,
                    title=f"Incomplete {schema.type} Schema",
                    description=f"Missing recommended properties: {', '.join(props)}",
                    impact="Reduced schema effectiveness",
                ))

    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=recommendations,
    )
