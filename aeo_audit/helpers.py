"""
Shared scoring primitives used by the category analyzers.

Plain functions with no state: weighted blending, heading validation,
readability estimation, lexical matching and snippet detection.
"""

import re
from typing import Iterable, List, NamedTuple, Optional, Pattern, Sequence, Tuple, Union
from urllib.parse import urlparse

from .models import Heading, Severity


QUESTION_WORDS = ["what", "how", "why", "when", "where", "who"]

SNIPPET_MIN_WORDS = 40
SNIPPET_MAX_WORDS = 60

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_VOWELS = "aeiouy"


class Readability(NamedTuple):
    score: float
    avg_words_per_sentence: float
    avg_syllables_per_word: float


# ─── Scoring ──────────────────────────────────────────────────────────


def calculate_score(factors: Iterable[Tuple[float, float]]) -> int:
    """Blend (weight, subscore) pairs into round(sum(w*s) / sum(w))."""
    factors = list(factors)
    total_weight = sum(weight for weight, _ in factors)
    if total_weight <= 0:
        return 0
    weighted = sum(weight * score for weight, score in factors)
    return int(round(weighted / total_weight))


def clamp_score(value: float) -> int:
    return int(max(0, min(100, round(value))))


def severity_from_score(score: int) -> Severity:
    if score >= 80:
        return Severity.LOW
    if score >= 60:
        return Severity.MEDIUM
    if score >= 40:
        return Severity.HIGH
    return Severity.CRITICAL


# ─── Text ─────────────────────────────────────────────────────────────


def count_words(text: str) -> int:
    return len((text or "").split())


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]


def contains_keywords(text: str, keywords: Iterable[str]) -> bool:
    lower = (text or "").lower()
    return any(keyword.lower() in lower for keyword in keywords)


def matches_any(text: str, patterns: Sequence[Union[str, Pattern]]) -> bool:
    return any(re.search(pattern, text or "") for pattern in patterns)


def keyword_density(text: str, keyword: str) -> float:
    """Percentage of word positions at which ``keyword`` (may be a phrase) starts."""
    words = (text or "").lower().split()
    phrase = keyword.lower().split()
    if not words or not phrase:
        return 0.0

    matches = 0
    for i in range(len(words) - len(phrase) + 1):
        if words[i:i + len(phrase)] == phrase:
            matches += 1
    return matches / len(words) * 100


def is_snippet_length(text: str) -> bool:
    return SNIPPET_MIN_WORDS <= count_words(text) <= SNIPPET_MAX_WORDS


def find_snippet_candidates(text: str) -> List[str]:
    """Sentences short enough to be read back as a direct answer."""
    return [s for s in split_sentences(text) if is_snippet_length(s)]


def answers_common_questions(text: str) -> bool:
    lower = (text or "").lower()
    return any(
        re.search(rf"\b{word}\s+(?:is|are|to|can)\b", lower)
        for word in QUESTION_WORDS
    )


# ─── Headings ─────────────────────────────────────────────────────────


def validate_heading_structure(headings: Sequence[Heading]) -> Tuple[bool, List[str]]:
    """
    Check heading hierarchy.

    Invalid when there are no headings, when the page has zero or several
    H1s, or when a heading skips a level relative to the one before it
    (H2 -> H4). Returns (is_valid, messages).
    """
    if not headings:
        return False, ["No headings found"]

    issues: List[str] = []
    h1_count = sum(1 for h in headings if h.level == 1)
    if h1_count == 0:
        issues.append("Missing H1 tag")
    elif h1_count > 1:
        issues.append(f"Multiple H1 tags found ({h1_count})")

    for previous, current in zip(headings, headings[1:]):
        if current.level > previous.level + 1:
            issues.append(
                f"Heading level jumps from H{previous.level} to H{current.level}"
            )

    return not issues, issues


# ─── Readability ──────────────────────────────────────────────────────


def count_syllables(word: str) -> int:
    """Approximate syllables by counting vowel groups, minus a silent 'e'."""
    letters = re.sub(r"[^a-z]", "", word.lower())
    syllables = 0
    previous_was_vowel = False
    for char in letters:
        is_vowel = char in _VOWELS
        if is_vowel and not previous_was_vowel:
            syllables += 1
        previous_was_vowel = is_vowel

    if letters.endswith("e"):
        syllables -= 1
    return max(1, syllables)


def analyze_readability(text: str) -> Readability:
    """Flesch Reading Ease, clamped to [0, 100]."""
    sentences = split_sentences(text)
    words = (text or "").split()
    if not sentences or not words:
        return Readability(0.0, 0.0, 0.0)

    avg_words = len(words) / len(sentences)
    avg_syllables = sum(count_syllables(w) for w in words) / len(words)
    score = 206.835 - 1.015 * avg_words - 84.6 * avg_syllables
    return Readability(
        score=max(0.0, min(100.0, score)),
        avg_words_per_sentence=avg_words,
        avg_syllables_per_word=avg_syllables,
    )


# ─── URLs ─────────────────────────────────────────────────────────────


def is_valid_url(url: Optional[str]) -> bool:
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_domain(url: Optional[str]) -> str:
    try:
        return (urlparse(url or "").hostname or "").lower()
    except ValueError:
        return ""
