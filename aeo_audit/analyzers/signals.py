"""
Lightweight content-signal analyzers.

Each of these scores one heuristic signal in the page text or link profile
and returns a mostly binary result.
"""

import re
from typing import List

from ..helpers import (
    answers_common_questions,
    clamp_score,
    extract_domain,
    find_snippet_candidates,
    matches_any,
)
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    Severity,
)


ENTITY_PATTERNS = [
    # Person names
    re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b"),
    # Companies
    re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+(?:Inc|Corp|LLC|Ltd)\b"),
    # Institutions
    re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+(?:University|College|School)\b"),
]

AUTHORITY_DOMAINS = ("wikipedia.org",)
AUTHORITY_TLDS = (".gov", ".edu")

SEMANTIC_MIN_CONTENT_CHARS = 300


# ─── Featured snippets ────────────────────────────────────────────────


def analyze_featured_snippets(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    candidates = find_snippet_candidates(doc.content)

    if candidates:
        score = min(80, 60 + 5 * (len(candidates) - 1))
    else:
        score = 20
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="No Featured Snippet Optimization",
            description="Content not optimized for featured snippets",
            impact="Missing opportunities for position zero rankings",
        ))

    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=1,
            title="Optimize for Featured Snippets",
            description="Create 40-60 word answers to common questions",
            estimated_impact=25,
            implementation_time_minutes=30,
        )],
    )


# ─── Entities ─────────────────────────────────────────────────────────


def has_entity_mentions(content: str) -> bool:
    return matches_any(content, ENTITY_PATTERNS)


def analyze_entity_optimization(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    score = 70

    if not has_entity_mentions(doc.content):
        score = 30
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Limited Entity Coverage",
            description="Content lacks clear entity mentions and relationships",
            impact="Reduced semantic understanding by AI systems",
        ))

    return AnalyzerResult(
        score=score,
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=2,
            title="Enhance Entity Coverage",
            description="Add relevant entity mentions and semantic relationships",
            estimated_impact=15,
            implementation_time_minutes=25,
        )],
    )


# ─── Semantic HTML ────────────────────────────────────────────────────


def analyze_semantic_html(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    score = 60

    # Headings plus a real body of text stand in for structural richness.
    if not (doc.headings and len(doc.content) > SEMANTIC_MIN_CONTENT_CHARS):
        score = 40
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Poor Semantic HTML Structure",
            description="Content lacks proper semantic HTML elements",
            impact="Reduced accessibility and AI comprehension",
        ))

    return AnalyzerResult(
        score=score,
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=2,
            title="Improve Semantic HTML",
            description="Use proper semantic elements like <article>, <section>, <nav>",
            estimated_impact=15,
            implementation_time_minutes=30,
        )],
    )


# ─── Voice search ─────────────────────────────────────────────────────


def analyze_voice_search(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    conversational = answers_common_questions(doc.content)

    if not conversational:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Not Optimized for Voice Search",
            description="Content lacks conversational, question-answering format",
            impact="Reduced visibility in voice search results",
        ))

    return AnalyzerResult(
        score=70 if conversational else 30,
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=3,
            title="Optimize for Voice Search",
            description="Add natural language answers to common questions",
            estimated_impact=12,
            implementation_time_minutes=25,
        )],
    )


# ─── Knowledge graph ──────────────────────────────────────────────────


def is_authority_link(href: str) -> bool:
    host = extract_domain(href)
    if not host:
        return False
    return (
        any(host == d or host.endswith("." + d) for d in AUTHORITY_DOMAINS)
        or host.endswith(AUTHORITY_TLDS)
    )


def analyze_knowledge_graph(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    score = 50

    if not any(is_authority_link(link.href) for link in doc.links):
        score = 30
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Limited Knowledge Graph Signals",
            description="Content lacks clear authority and entity relationship signals",
            impact="Reduced knowledge graph visibility",
        ))

    return AnalyzerResult(
        score=score,
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=4,
            title="Enhance Knowledge Graph Signals",
            description="Add author profiles, entity relationships, and authority links",
            estimated_impact=10,
            implementation_time_minutes=20,
        )],
    )
