"""
Fix dispatch boundary.

Picks the categories whose score fell below their remediation threshold and
forwards them, with a document excerpt and the triggering issues, to an
external fix generator. The generator itself (an LLM-backed service) is
opaque to the scoring engine.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Protocol

import httpx
from pydantic import BaseModel, Field

from .models import (
    AEOCategory,
    AnalysisResult,
    CategoryIssue,
    CodeLanguage,
    DocumentModel,
    FixType,
    Heading,
    SchemaBlock,
    Severity,
)
from .scoring import CATEGORY_WEIGHTS

logger = logging.getLogger(__name__)

DEFAULT_REMEDIATION_THRESHOLD = 60
MAX_EXCERPT_CHARS = 2000
MAX_EXCERPT_HEADINGS = 10
MAX_FIX_CATEGORIES = 3

REMEDIATION_THRESHOLDS: Mapping[AEOCategory, int] = MappingProxyType({
    category: DEFAULT_REMEDIATION_THRESHOLD for category in AEOCategory
} | {
    AEOCategory.SCHEMA_MARKUP: 50,
    AEOCategory.FAQ_SCHEMA: 50,
})

CATEGORY_FIX_TYPES: Mapping[AEOCategory, FixType] = MappingProxyType({
    AEOCategory.FAQ_SCHEMA: FixType.FAQ_GENERATION,
    AEOCategory.SCHEMA_MARKUP: FixType.SCHEMA_GENERATION,
    AEOCategory.META_TAGS: FixType.META_OPTIMIZATION,
    AEOCategory.CONTENT_STRUCTURE: FixType.CONTENT_REWRITE,
    AEOCategory.FEATURED_SNIPPETS: FixType.CONTENT_REWRITE,
    AEOCategory.ENTITY_OPTIMIZATION: FixType.CONTENT_REWRITE,
    AEOCategory.SEMANTIC_HTML: FixType.HTML_RESTRUCTURE,
    AEOCategory.VOICE_SEARCH: FixType.CONTENT_REWRITE,
    AEOCategory.KNOWLEDGE_GRAPH: FixType.SCHEMA_GENERATION,
    AEOCategory.TECHNICAL_SEO: FixType.TECHNICAL_FIX,
})

CATEGORY_FIX_SEVERITY: Mapping[AEOCategory, Severity] = MappingProxyType({
    AEOCategory.FAQ_SCHEMA: Severity.HIGH,
    AEOCategory.SCHEMA_MARKUP: Severity.CRITICAL,
    AEOCategory.META_TAGS: Severity.HIGH,
    AEOCategory.CONTENT_STRUCTURE: Severity.MEDIUM,
    AEOCategory.FEATURED_SNIPPETS: Severity.MEDIUM,
    AEOCategory.ENTITY_OPTIMIZATION: Severity.MEDIUM,
    AEOCategory.SEMANTIC_HTML: Severity.MEDIUM,
    AEOCategory.VOICE_SEARCH: Severity.LOW,
    AEOCategory.KNOWLEDGE_GRAPH: Severity.LOW,
    AEOCategory.TECHNICAL_SEO: Severity.HIGH,
})

_FIX_IMPACT = {
    (AEOCategory.FAQ_SCHEMA, FixType.FAQ_GENERATION): 25,
    (AEOCategory.SCHEMA_MARKUP, FixType.SCHEMA_GENERATION): 30,
    (AEOCategory.META_TAGS, FixType.META_OPTIMIZATION): 20,
    (AEOCategory.CONTENT_STRUCTURE, FixType.CONTENT_REWRITE): 18,
}


def estimate_impact(category: AEOCategory, fix_type: FixType) -> int:
    return _FIX_IMPACT.get((category, fix_type), 15)


# ─── Request / Response Models ────────────────────────────────────────


class DocumentExcerpt(BaseModel):
    url: str
    title: str = ""
    meta_description: str = ""
    content: str = ""
    headings: List[Heading] = Field(default_factory=list)
    schemas: List[SchemaBlock] = Field(default_factory=list)


class FixRequest(BaseModel):
    category: AEOCategory
    fix_type: FixType
    severity: Severity
    score: int
    excerpt: DocumentExcerpt
    issues: List[CategoryIssue] = Field(default_factory=list)


class GeneratedFix(BaseModel):
    category: AEOCategory
    fix_type: FixType
    title: str
    description: str = ""
    code: str = ""
    language: CodeLanguage = CodeLanguage.HTML
    severity: Severity = Severity.MEDIUM
    estimated_impact: int = 0
    implementation_guide: str = ""


class FixGenerator(Protocol):
    async def generate(self, request: FixRequest) -> GeneratedFix: ...


# ─── Selection ────────────────────────────────────────────────────────


def needs_remediation(category: AEOCategory, score: int) -> bool:
    return score < REMEDIATION_THRESHOLDS.get(category, DEFAULT_REMEDIATION_THRESHOLD)


def select_fix_categories(
    result: AnalysisResult, limit: Optional[int] = MAX_FIX_CATEGORIES
) -> List[AEOCategory]:
    """Weak categories, lowest score first; heavier weight wins ties."""
    weak = [
        category
        for category in AEOCategory
        if needs_remediation(category, result.category_scores[category])
    ]
    weak.sort(key=lambda c: (result.category_scores[c], -CATEGORY_WEIGHTS[c]))
    return weak if limit is None else weak[:limit]


def build_excerpt(doc: DocumentModel, max_chars: int = MAX_EXCERPT_CHARS) -> DocumentExcerpt:
    content = doc.content
    if len(content) > max_chars:
        content = content[:max_chars] + "..."
    return DocumentExcerpt(
        url=doc.url,
        title=doc.title,
        meta_description=doc.meta_description,
        content=content,
        headings=list(doc.headings[:MAX_EXCERPT_HEADINGS]),
        schemas=list(doc.schemas),
    )


def build_fix_request(
    category: AEOCategory, doc: DocumentModel, result: AnalysisResult
) -> FixRequest:
    return FixRequest(
        category=category,
        fix_type=CATEGORY_FIX_TYPES[category],
        severity=CATEGORY_FIX_SEVERITY[category],
        score=result.category_scores[category],
        excerpt=build_excerpt(doc),
        issues=result.issues_for(category),
    )


# ─── Dispatch ─────────────────────────────────────────────────────────


async def dispatch_fixes(
    result: AnalysisResult,
    doc: DocumentModel,
    generator: FixGenerator,
    limit: Optional[int] = MAX_FIX_CATEGORIES,
) -> List[GeneratedFix]:
    """
    Request generated fixes for the weakest categories.

    A generator failure for one category is logged and skipped; the others
    are still requested.
    """
    fixes: List[GeneratedFix] = []
    for category in select_fix_categories(result, limit):
        request = build_fix_request(category, doc, result)
        try:
            fixes.append(await generator.generate(request))
        except Exception:
            logger.exception(
                f"Failed to generate {request.fix_type.value} fix for {category.value}"
            )
    logger.info(f"Generated {len(fixes)} fixes for {doc.url}")
    return fixes


class HttpFixGenerator:
    """
    FixGenerator that POSTs the request to a remote fix-writing service.

    The service replies with a JSON object shaped like GeneratedFix; missing
    severity/impact fields fall back to the category defaults.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def generate(self, request: FixRequest) -> GeneratedFix:
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.post(
                self._endpoint,
                json=request.model_dump(mode="json"),
                headers=headers,
            )
            resp.raise_for_status()

        payload: Dict[str, Any] = {
            "category": request.category,
            "fix_type": request.fix_type,
            "severity": request.severity,
            "estimated_impact": estimate_impact(request.category, request.fix_type),
            "title": _default_title(request),
        }
        payload.update(resp.json())
        return GeneratedFix.model_validate(payload)


def _default_title(request: FixRequest) -> str:
    return (
        f"{request.category.value.replace('_', ' ')} - "
        f"{request.fix_type.value.replace('_', ' ')}"
    )
