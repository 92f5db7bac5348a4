"""
Content structure analyzer: heading hierarchy, readability and length.
"""

from typing import List

from ..helpers import (
    analyze_readability,
    calculate_score,
    clamp_score,
    count_words,
    validate_heading_structure,
)
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    Severity,
)


MIN_WORDS = 300
MIN_READABILITY = 60


def _heading_score(doc: DocumentModel, issues: List[AnalyzerIssue]) -> int:
    is_valid, messages = validate_heading_structure(doc.headings)
    if is_valid:
        return 80
    issues.append(AnalyzerIssue(
        severity=Severity.MEDIUM,
        title="Poor Heading Structure",
        description=", ".join(messages),
        impact="Reduced content comprehension for AI systems",
    ))
    return 30


def _readability_score(doc: DocumentModel, issues: List[AnalyzerIssue]) -> int:
    readability = analyze_readability(doc.content)
    if readability.score >= MIN_READABILITY:
        return 80
    issues.append(AnalyzerIssue(
        severity=Severity.MEDIUM,
        title="Poor Content Readability",
        description=f"Readability score: {readability.score:.1f}",
        impact="Difficult for AI systems to understand and extract information",
    ))
    return 40


def _length_score(doc: DocumentModel, issues: List[AnalyzerIssue]) -> int:
    words = count_words(doc.content)
    if words >= MIN_WORDS:
        return 70
    issues.append(AnalyzerIssue(
        severity=Severity.HIGH,
        title="Insufficient Content Length",
        description=f"Content has {words} words. Recommended: {MIN_WORDS}+ words",
        impact="Limited information for AI systems to process",
    ))
    return 20


def analyze(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    recommendations: List[AnalyzerRecommendation] = []

    score = calculate_score([
        (40, _heading_score(doc, issues)),
        (30, _readability_score(doc, issues)),
        (30, _length_score(doc, issues)),
    ])

    if not quick:
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Optimize Content Structure",
            description="Restructure content with clear headings and concise paragraphs",
            estimated_impact=20,
            implementation_time_minutes=45,
        ))

    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=recommendations,
    )
