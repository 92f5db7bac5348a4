"""
aeo_audit: answer-engine-optimization scoring for web pages.

Turns a page into a normalized DocumentModel, scores it across ten
optimization categories and returns a weighted scorecard with ranked issues
and recommendations.

Usage:
    from aeo_audit import AEOAnalyzer, build_document

    analyzer = AEOAnalyzer()

    # From raw HTML
    doc = build_document(url, html)
    result = analyzer.analyze_document(doc, include_recommendations=True)

    # Single-category drill-down
    summary = analyzer.get_category_summary(doc, AEOCategory.META_TAGS)

    # Fetch over plain HTTP, then request fixes for weak categories
    doc = await HttpxFetcher().fetch(url)
    fixes = await dispatch_fixes(result, doc, HttpFixGenerator(endpoint))
"""

from .analyzer import AEOAnalyzer
from .analyzers import ANALYZERS
from .extract import build_document
from .fetch import DocumentFetcher, FetchError, HttpxFetcher
from .fixes import (
    FixGenerator,
    FixRequest,
    GeneratedFix,
    HttpFixGenerator,
    dispatch_fixes,
    select_fix_categories,
)
from .scoring import CATEGORY_CONFIG, CATEGORY_WEIGHTS, calculate_overall_score
from .models import (
    AEOCategory,
    Severity,
    AnalysisStatus,
    FixType,
    CodeLanguage,
    DocumentModel,
    Heading,
    SchemaBlock,
    MetaTag,
    OpenGraphTag,
    ImageData,
    LinkData,
    PerformanceMetrics,
    CoreWebVitals,
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    AnalysisOptions,
    AnalysisResult,
    CategoryIssue,
    CategoryRecommendation,
    CategorySummary,
)

__all__ = [
    # Main entry points
    "AEOAnalyzer",
    "ANALYZERS",
    "build_document",
    "calculate_overall_score",
    # Collaborator boundaries
    "DocumentFetcher",
    "HttpxFetcher",
    "FetchError",
    "FixGenerator",
    "HttpFixGenerator",
    "FixRequest",
    "GeneratedFix",
    "dispatch_fixes",
    "select_fix_categories",
    # Configuration
    "CATEGORY_CONFIG",
    "CATEGORY_WEIGHTS",
    # Enums
    "AEOCategory",
    "Severity",
    "AnalysisStatus",
    "FixType",
    "CodeLanguage",
    # Document model
    "DocumentModel",
    "Heading",
    "SchemaBlock",
    "MetaTag",
    "OpenGraphTag",
    "ImageData",
    "LinkData",
    "PerformanceMetrics",
    "CoreWebVitals",
    # Results
    "AnalyzerIssue",
    "AnalyzerRecommendation",
    "AnalyzerResult",
    "AnalysisOptions",
    "AnalysisResult",
    "CategoryIssue",
    "CategoryRecommendation",
    "CategorySummary",
]
