"""
FAQ structured-data analyzer.

Scores the presence, validity, size and quality of FAQPage markup.
"""

import re
from typing import Any, Dict, List

from ..helpers import clamp_score, count_words
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    SchemaBlock,
    Severity,
)


INTERROGATIVES = [
    "what", "how", "why", "when", "where", "who",
    "which", "can", "is", "are", "do", "does",
]

_INTERROGATIVE_RE = re.compile(r"\b(?:%s)\b" % "|".join(INTERROGATIVES), re.IGNORECASE)

_CONTENT_QUESTION_PATTERNS = [
    re.compile(r"what is [^?]+\?", re.IGNORECASE),
    re.compile(r"how to [^?]+\?", re.IGNORECASE),
    re.compile(r"why [^?]+\?", re.IGNORECASE),
    re.compile(r"when [^?]+\?", re.IGNORECASE),
    re.compile(r"where [^?]+\?", re.IGNORECASE),
]

GOOD_ANSWER_WORDS = (20, 80)


def is_faq_block(schema: SchemaBlock) -> bool:
    if schema.type == "FAQPage":
        return True
    declared = schema.data.get("@type")
    if isinstance(declared, list):
        return "FAQPage" in declared
    return isinstance(declared, str) and "FAQPage" in declared


def is_good_question(question: str) -> bool:
    question = (question or "").strip()
    if len(question) < 10 or not question.endswith("?"):
        return False
    return bool(_INTERROGATIVE_RE.search(question))


def is_good_answer(answer: str) -> bool:
    low, high = GOOD_ANSWER_WORDS
    return low <= count_words(answer) <= high


def faq_entries(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """mainEntity as a list of dicts (it may be a single Question object)."""
    entities = data.get("mainEntity") or []
    if isinstance(entities, dict):
        entities = [entities]
    if not isinstance(entities, list):
        return []
    return [e for e in entities if isinstance(e, dict)]


def _answer_text(entry: Dict[str, Any]) -> str:
    answer = entry.get("acceptedAnswer") or {}
    if isinstance(answer, list):
        answer = answer[0] if answer else {}
    if isinstance(answer, dict):
        return str(answer.get("text") or "")
    return str(answer)


def evaluate_faq_quality(entries: List[Dict[str, Any]]) -> int:
    score = 70
    for entry in entries:
        if is_good_question(str(entry.get("name") or "")):
            score += 3
        if is_good_answer(_answer_text(entry)):
            score += 2
    return min(100, score)


def find_faq_indicators(doc: DocumentModel) -> List[str]:
    """FAQ-looking headings and question sentences in the visible content."""
    indicators: List[str] = []
    for heading in doc.headings:
        text = heading.text.lower()
        if (
            "faq" in text
            or "frequently asked" in text
            or "common questions" in text
            or (text.split(" ", 1)[0] in INTERROGATIVES and "?" in text)
        ):
            indicators.append(heading.text)

    for pattern in _CONTENT_QUESTION_PATTERNS:
        indicators.extend(pattern.findall(doc.content)[:3])
    return indicators


def analyze(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    recommendations: List[AnalyzerRecommendation] = []

    faq_blocks = [s for s in doc.schemas if is_faq_block(s)]
    valid_blocks = [s for s in faq_blocks if s.is_valid]

    if not faq_blocks:
        score = 0
        issues.append(AnalyzerIssue(
            severity=Severity.CRITICAL,
            title="Missing FAQ Schema",
            description="No FAQ schema markup found on the page",
            impact="Reduced visibility in voice search and featured snippets",
        ))
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Add FAQ Schema Markup",
            description="Generate and implement FAQ schema based on page content",
            estimated_impact=25,
            implementation_time_minutes=30,
        ))
    elif not valid_blocks:
        score = 20
        issues.append(AnalyzerIssue(
            severity=Severity.HIGH,
            title="Invalid FAQ Schema",
            description="FAQ schema markup contains errors",
            impact="Schema may not be recognized by search engines",
        ))
    else:
        entries = faq_entries(valid_blocks[0].data)
        if not entries:
            score = 30
            issues.append(AnalyzerIssue(
                severity=Severity.MEDIUM,
                title="Empty FAQ Schema",
                description="FAQ schema exists but contains no questions",
                impact="No benefit from FAQ schema implementation",
            ))
        elif len(entries) < 3:
            score = 50
            issues.append(AnalyzerIssue(
                severity=Severity.MEDIUM,
                title="Insufficient FAQ Content",
                description=f"Only {len(entries)} FAQ entries found. Recommended: 5-8 entries",
                impact="Limited coverage for voice search queries",
            ))
            recommendations.append(AnalyzerRecommendation(
                priority=2,
                title="Expand FAQ Content",
                description="Add more relevant FAQ entries to improve coverage",
                estimated_impact=15,
                implementation_time_minutes=20,
            ))
        else:
            score = evaluate_faq_quality(entries)
            if score < 80:
                recommendations.append(AnalyzerRecommendation(
                    priority=3,
                    title="Optimize FAQ Content",
                    description="Improve FAQ answers for better voice search optimization",
                    estimated_impact=10,
                    implementation_time_minutes=15,
                ))

    if not quick and not faq_blocks:
        indicators = find_faq_indicators(doc)
        if indicators:
            recommendations.append(AnalyzerRecommendation(
                priority=1,
                title="Convert Existing FAQ Content",
                description=(
                    f"Found {len(indicators)} potential FAQ sections that could "
                    "be structured as schema"
                ),
                estimated_impact=20,
                implementation_time_minutes=25,
            ))

    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=recommendations,
    )
