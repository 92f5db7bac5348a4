"""
AEO audit data models.

Pydantic models for the normalized page document, per-category analyzer
output and the aggregated scorecard handed back to callers.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Dict, Optional, Any, Tuple
from enum import Enum
from urllib.parse import urlparse
import re


MAX_IMAGES = 10
MAX_LINKS = 20


class AEOCategory(str, Enum):
    FAQ_SCHEMA = "faq_schema"
    SCHEMA_MARKUP = "schema_markup"
    CONTENT_STRUCTURE = "content_structure"
    FEATURED_SNIPPETS = "featured_snippets"
    ENTITY_OPTIMIZATION = "entity_optimization"
    META_TAGS = "meta_tags"
    SEMANTIC_HTML = "semantic_html"
    VOICE_SEARCH = "voice_search"
    KNOWLEDGE_GRAPH = "knowledge_graph"
    TECHNICAL_SEO = "technical_seo"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class FixType(str, Enum):
    FAQ_GENERATION = "faq_generation"
    SCHEMA_GENERATION = "schema_generation"
    CONTENT_REWRITE = "content_rewrite"
    META_OPTIMIZATION = "meta_optimization"
    HTML_RESTRUCTURE = "html_restructure"
    TECHNICAL_FIX = "technical_fix"


class CodeLanguage(str, Enum):
    JSON_LD = "json-ld"
    HTML = "html"
    CSS = "css"
    JAVASCRIPT = "javascript"
    MARKDOWN = "markdown"


# ─── Document Model ───────────────────────────────────────────────────


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Heading(_Frozen):
    level: int = Field(ge=1, le=6)
    text: str = ""
    id: Optional[str] = None


class SchemaBlock(_Frozen):
    type: str = "Unknown"
    data: Dict[str, Any] = Field(default_factory=dict)
    is_valid: bool = True
    errors: Tuple[str, ...] = ()


class MetaTag(_Frozen):
    name: Optional[str] = None
    property: Optional[str] = None
    content: str = ""

    @model_validator(mode="after")
    def _name_or_property(self) -> "MetaTag":
        if not self.name and not self.property:
            raise ValueError("meta tag needs a name or a property")
        return self


class OpenGraphTag(_Frozen):
    property: str
    content: str = ""

    @field_validator("property")
    @classmethod
    def _og_prefix(cls, value: str) -> str:
        if not value.startswith("og:"):
            raise ValueError(f"Open Graph property must start with 'og:' (got {value!r})")
        return value


class ImageData(_Frozen):
    src: str
    alt: Optional[str] = None
    title: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class LinkData(_Frozen):
    href: str
    text: str = ""
    is_internal: bool = False
    rel: Optional[str] = None


class CoreWebVitals(_Frozen):
    lcp: Optional[float] = None
    fid: Optional[float] = None
    cls: Optional[float] = None


class PerformanceMetrics(_Frozen):
    load_time_ms: float = Field(default=0, ge=0)
    page_size_bytes: int = Field(default=0, ge=0)
    core_web_vitals: Optional[CoreWebVitals] = None


class DocumentModel(_Frozen):
    """Normalized, analyzer-ready representation of one scraped page.

    Construction validates the input (absolute URL, heading levels, tag
    shapes) so a bad document fails before any analyzer runs.
    """

    url: str
    title: str = ""
    meta_description: str = ""
    headings: Tuple[Heading, ...] = ()
    content: str = ""
    schemas: Tuple[SchemaBlock, ...] = ()
    meta_tags: Tuple[MetaTag, ...] = ()
    open_graph_tags: Tuple[OpenGraphTag, ...] = ()
    images: Tuple[ImageData, ...] = ()
    links: Tuple[LinkData, ...] = ()
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        value = (value or "").strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"url must be an absolute http(s) URL (got {value!r})")
        return value

    @field_validator("content")
    @classmethod
    def _collapse_whitespace(cls, value: str) -> str:
        return re.sub(r"\s+", " ", value or "").strip()

    @field_validator("images")
    @classmethod
    def _cap_images(cls, value: Tuple[ImageData, ...]) -> Tuple[ImageData, ...]:
        return value[:MAX_IMAGES]

    @field_validator("links")
    @classmethod
    def _cap_links(cls, value: Tuple[LinkData, ...]) -> Tuple[LinkData, ...]:
        return value[:MAX_LINKS]

    def meta_content(self, name: str) -> Optional[str]:
        """Content of the first meta tag whose name (case-insensitive) matches."""
        name = name.lower()
        for tag in self.meta_tags:
            if tag.name and tag.name.lower() == name:
                return tag.content
        return None


# ─── Analyzer Output ──────────────────────────────────────────────────


class AnalyzerIssue(BaseModel):
    severity: Severity
    title: str
    description: str = ""
    impact: str = ""
    fixable: bool = True


class AnalyzerRecommendation(BaseModel):
    priority: int = Field(ge=1)
    title: str
    description: str = ""
    estimated_impact: int = 0
    implementation_time_minutes: int = 0


class AnalyzerResult(BaseModel):
    score: int = Field(default=0, ge=0, le=100)
    issues: List[AnalyzerIssue] = Field(default_factory=list)
    recommendations: List[AnalyzerRecommendation] = Field(default_factory=list)


class CategoryIssue(AnalyzerIssue):
    category: AEOCategory


class CategoryRecommendation(AnalyzerRecommendation):
    category: AEOCategory


# ─── Aggregate Results ────────────────────────────────────────────────


class AnalysisOptions(BaseModel):
    categories: Optional[List[AEOCategory]] = None
    quick: bool = False
    include_recommendations: bool = False


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    category_scores: Dict[AEOCategory, int]
    issues: List[CategoryIssue] = Field(default_factory=list)
    recommendations: List[CategoryRecommendation] = Field(default_factory=list)
    status: AnalysisStatus = AnalysisStatus.COMPLETED

    @field_validator("category_scores")
    @classmethod
    def _all_categories(cls, value: Dict[AEOCategory, int]) -> Dict[AEOCategory, int]:
        missing = [c.value for c in AEOCategory if c not in value]
        if missing:
            raise ValueError(f"category_scores missing: {', '.join(missing)}")
        for category, score in value.items():
            if not 0 <= score <= 100:
                raise ValueError(f"{category.value} score out of range: {score}")
        return value

    def issues_for(self, category: AEOCategory) -> List[CategoryIssue]:
        return [i for i in self.issues if i.category == category]


class CategorySummary(BaseModel):
    category: AEOCategory
    score: int = Field(ge=0, le=100)
    severity: Severity
    issues: List[CategoryIssue] = Field(default_factory=list)
    recommendations: List[CategoryRecommendation] = Field(default_factory=list)
