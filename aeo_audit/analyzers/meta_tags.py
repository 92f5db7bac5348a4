"""
Meta tag analyzer.

Blends five sub-checks into one score:

    title tag          30
    meta description   25
    key meta names     20
    Open Graph         15
    Twitter Card       10

Length windows follow the usual SERP truncation limits: titles of 30-60
characters and descriptions of 120-160 characters (both inclusive) get the
"good length" bonus.
"""

from typing import Dict, List, Sequence

from ..helpers import calculate_score, clamp_score, contains_keywords, is_valid_url
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    MetaTag,
    OpenGraphTag,
    Severity,
)


TITLE_LENGTH = (30, 60)
DESCRIPTION_LENGTH = (120, 160)

# Ideal windows used for recommendations (tighter than the scoring windows).
IDEAL_TITLE_LENGTH = (50, 60)
IDEAL_DESCRIPTION_LENGTH = (150, 160)

IMPORTANT_META_TAGS = ["description", "keywords", "author", "viewport", "robots"]
IMPORTANT_OG_TAGS = ["og:title", "og:description", "og:image", "og:url", "og:type"]
IMPORTANT_TWITTER_TAGS = [
    "twitter:card",
    "twitter:title",
    "twitter:description",
    "twitter:image",
]

BRAND_SEPARATORS = ["|", "-", ":", "•"]
CTA_WORDS = [
    "learn", "discover", "find", "get", "download", "buy", "shop",
    "read", "explore", "try", "start", "join", "sign up", "contact",
]
GENERIC_PHRASES = [
    "welcome to our website",
    "this is the homepage",
    "default description",
    "lorem ipsum",
]


# ─── Sub-checks ───────────────────────────────────────────────────────


def score_title(title: str, issues: List[AnalyzerIssue]) -> int:
    title = (title or "").strip()
    if not title:
        issues.append(AnalyzerIssue(
            severity=Severity.CRITICAL,
            title="Missing Title Tag",
            description="No title tag found on the page",
            impact="Severely impacts search engine rankings and click-through rates",
        ))
        return 0

    score = 50
    length = len(title)
    low, high = TITLE_LENGTH
    if length < low:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Title Too Short",
            description=f"Title is {length} characters. Recommended: 50-60 characters",
            impact="May not fully utilize search result space",
        ))
        score -= 15
    elif length > high:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Title Too Long",
            description=f"Title is {length} characters. Recommended: 50-60 characters",
            impact="Title may be truncated in search results",
        ))
        score -= 10
    else:
        score += 20

    words = title.lower().split()
    if len(words) > len(set(words)):
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Duplicate Words in Title",
            description="Title contains repeated words",
            impact="Reduces title effectiveness",
        ))
        score -= 5

    if any(sep in title for sep in BRAND_SEPARATORS):
        score += 10

    return max(0, score)


def score_description(description: str, issues: List[AnalyzerIssue]) -> int:
    description = (description or "").strip()
    if not description:
        issues.append(AnalyzerIssue(
            severity=Severity.HIGH,
            title="Missing Meta Description",
            description="No meta description found",
            impact="Search engines will generate description, reducing click-through rates",
        ))
        return 0

    score = 50
    length = len(description)
    low, high = DESCRIPTION_LENGTH
    if length < low:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Meta Description Too Short",
            description=f"Description is {length} characters. Recommended: 150-160 characters",
            impact="Not fully utilizing search result space",
        ))
        score -= 15
    elif length > high:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Meta Description Too Long",
            description=f"Description is {length} characters. Recommended: 150-160 characters",
            impact="Description may be truncated in search results",
        ))
        score -= 10
    else:
        score += 25

    if contains_keywords(description, CTA_WORDS):
        score += 15
    else:
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="No Call-to-Action in Description",
            description="Meta description lacks compelling call-to-action",
            impact="May reduce click-through rates",
        ))

    if contains_keywords(description, GENERIC_PHRASES):
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Generic Meta Description",
            description="Meta description appears to be generic or duplicated",
            impact="Reduces uniqueness and effectiveness",
        ))
        score -= 10

    return max(0, score)


def _named(meta_tags: Sequence[MetaTag]) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for tag in meta_tags:
        if tag.name:
            tags.setdefault(tag.name.lower(), tag.content)
    return tags


def score_meta_names(meta_tags: Sequence[MetaTag], issues: List[AnalyzerIssue]) -> int:
    tags = _named(meta_tags)
    score = 20 * sum(1 for name in IMPORTANT_META_TAGS if name in tags)

    robots = tags.get("robots")
    if robots is None:
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Missing Robots Meta Tag",
            description="No robots meta tag specified",
            impact="Search engines use default behavior",
        ))
    elif "noindex" in robots.lower() or "nofollow" in robots.lower():
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Restrictive Robots Meta Tag",
            description=f"Robots tag contains: {robots.lower()}",
            impact="May prevent search engine indexing",
        ))

    if "viewport" not in tags:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Missing Viewport Meta Tag",
            description="No viewport meta tag for mobile optimization",
            impact="Poor mobile user experience",
        ))

    return min(100, score)


def score_open_graph(og_tags: Sequence[OpenGraphTag], issues: List[AnalyzerIssue]) -> int:
    if not og_tags:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Missing Open Graph Tags",
            description="No Open Graph tags found for social media sharing",
            impact="Poor social media sharing appearance",
        ))
        return 0

    og: Dict[str, str] = {}
    for tag in og_tags:
        og.setdefault(tag.property.lower(), tag.content)

    score = 20 * sum(1 for prop in IMPORTANT_OG_TAGS if prop in og)

    if "og:image" in og and not is_valid_url(og["og:image"]):
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Invalid OG Image URL",
            description="Open Graph image URL is not valid",
            impact="Image may not display in social shares",
        ))
        score -= 10

    return max(0, min(100, score))


def twitter_tags(meta_tags: Sequence[MetaTag]) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for tag in meta_tags:
        key = (tag.name or tag.property or "").lower()
        if key.startswith("twitter:"):
            tags.setdefault(key, tag.content)
    return tags


def score_twitter(meta_tags: Sequence[MetaTag], issues: List[AnalyzerIssue]) -> int:
    tags = twitter_tags(meta_tags)
    if not tags:
        issues.append(AnalyzerIssue(
            severity=Severity.LOW,
            title="Missing Twitter Card Tags",
            description="No Twitter Card tags found",
            impact="Suboptimal Twitter sharing appearance",
        ))
        return 0
    return min(100, 25 * sum(1 for name in IMPORTANT_TWITTER_TAGS if name in tags))


# ─── Recommendations ──────────────────────────────────────────────────


def _outside(value: str, window) -> bool:
    low, high = window
    return not value or not low <= len(value) <= high


def build_recommendations(doc: DocumentModel) -> List[AnalyzerRecommendation]:
    recommendations: List[AnalyzerRecommendation] = []

    if _outside(doc.title, IDEAL_TITLE_LENGTH):
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Optimize Title Tag",
            description="Create compelling 50-60 character title with target keywords",
            estimated_impact=25,
            implementation_time_minutes=10,
        ))

    if _outside(doc.meta_description, IDEAL_DESCRIPTION_LENGTH):
        recommendations.append(AnalyzerRecommendation(
            priority=1,
            title="Optimize Meta Description",
            description="Write compelling 150-160 character description with call-to-action",
            estimated_impact=20,
            implementation_time_minutes=15,
        ))

    if len(doc.open_graph_tags) < 4:
        recommendations.append(AnalyzerRecommendation(
            priority=2,
            title="Add Complete Open Graph Tags",
            description="Implement full set of OG tags for social media optimization",
            estimated_impact=15,
            implementation_time_minutes=20,
        ))

    if not twitter_tags(doc.meta_tags):
        recommendations.append(AnalyzerRecommendation(
            priority=3,
            title="Add Twitter Card Tags",
            description="Implement Twitter Card markup for better Twitter sharing",
            estimated_impact=10,
            implementation_time_minutes=15,
        ))

    return recommendations


def analyze(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []

    score = calculate_score([
        (30, score_title(doc.title, issues)),
        (25, score_description(doc.meta_description, issues)),
        (20, score_meta_names(doc.meta_tags, issues)),
        (15, score_open_graph(doc.open_graph_tags, issues)),
        (10, score_twitter(doc.meta_tags, issues)),
    ])

    recommendations = [] if quick else build_recommendations(doc)
    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=recommendations,
    )
