"""
HTML -> DocumentModel extraction.

Parses raw HTML with lxml and pulls out the signals the analyzers read:
title, description, headings, visible text, JSON-LD blocks, meta/OG tags,
images and links.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urljoin, urlparse

from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement

from .models import (
    MAX_IMAGES,
    MAX_LINKS,
    CoreWebVitals,
    DocumentModel,
    Heading,
    ImageData,
    LinkData,
    MetaTag,
    OpenGraphTag,
    PerformanceMetrics,
    SchemaBlock,
)

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = ("script", "style", "noscript", "nav", "header", "footer", "aside")

MAIN_CONTENT_XPATHS = [
    "//main",
    '//*[@role="main"]',
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' content ')]",
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' main-content ')]",
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' post-content ')]",
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' entry-content ')]",
    "//article",
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' article-body ')]",
]
MIN_MAIN_CONTENT_CHARS = 100

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def _parse_html(raw_html: str) -> Optional[HtmlElement]:
    """Parse HTML string into an lxml tree, returning None on failure."""
    # lxml rejects str input that still carries an encoding declaration.
    raw_html = _XML_DECLARATION.sub("", raw_html, count=1)
    try:
        return lxml_html.document_fromstring(raw_html)
    except (etree.ParserError, ValueError) as e:
        logger.warning(f"Could not parse HTML: {e}")
        return None


# ─── Individual Extractors ────────────────────────────────────────────


def extract_title(tree: HtmlElement) -> str:
    titles = tree.xpath("//title")
    return (titles[0].text_content() or "").strip() if titles else ""


def extract_meta_description(tree: HtmlElement) -> str:
    descs = tree.xpath('//meta[@name="description"]/@content')
    return descs[0].strip() if descs else ""


def extract_headings(tree: HtmlElement) -> List[Heading]:
    """Headings in document order; empty headings are skipped."""
    headings: List[Heading] = []
    for el in tree.xpath("//*[self::h1 or self::h2 or self::h3 or self::h4 or self::h5 or self::h6]"):
        text = " ".join((el.text_content() or "").split())
        if not text:
            continue
        headings.append(Heading(level=int(el.tag[1]), text=text, id=el.get("id")))
    return headings


def _schema_nodes(data: Any) -> List[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and "@type" not in data and isinstance(data.get("@graph"), list):
        return data["@graph"]
    return [data]


def extract_schemas(tree: HtmlElement) -> List[SchemaBlock]:
    """
    Extract JSON-LD blocks.

    Each node becomes one SchemaBlock; ``@graph`` containers and top-level
    arrays are expanded. Unparseable JSON and nodes without ``@type`` are
    kept as invalid blocks so the analyzers can report them.
    """
    schemas: List[SchemaBlock] = []
    for script in tree.xpath('//script[@type="application/ld+json"]'):
        text = (script.text or "").strip()
        if not text:
            continue
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            schemas.append(SchemaBlock(
                type="Invalid",
                is_valid=False,
                errors=[f"Invalid JSON-LD: {e.msg}"],
            ))
            continue

        for node in _schema_nodes(data):
            if not isinstance(node, dict):
                continue
            declared = node.get("@type")
            if isinstance(declared, list):
                declared = next((t for t in declared if isinstance(t, str)), None)
            if not declared:
                schemas.append(SchemaBlock(
                    type="Unknown",
                    data=node,
                    is_valid=False,
                    errors=["Missing @type"],
                ))
                continue
            schemas.append(SchemaBlock(type=str(declared), data=node))
    return schemas


def extract_meta_tags(tree: HtmlElement) -> List[MetaTag]:
    tags: List[MetaTag] = []
    for el in tree.xpath("//meta[@content]"):
        name = el.get("name")
        prop = el.get("property")
        content = el.get("content")
        if content and (name or prop):
            tags.append(MetaTag(name=name, property=prop, content=content))
    return tags


def extract_open_graph_tags(tree: HtmlElement) -> List[OpenGraphTag]:
    tags: List[OpenGraphTag] = []
    for el in tree.xpath('//meta[starts-with(@property, "og:")]'):
        content = el.get("content")
        if content:
            tags.append(OpenGraphTag(property=el.get("property"), content=content))
    return tags


def extract_images(tree: HtmlElement, page_url: str) -> List[ImageData]:
    images: List[ImageData] = []
    for img in tree.xpath("//img"):
        src = (img.get("src") or img.get("data-src") or "").strip()
        if not src:
            continue
        images.append(ImageData(
            src=urljoin(page_url, src),
            alt=img.get("alt"),
            title=img.get("title"),
            width=_int_or_none(img.get("width")),
            height=_int_or_none(img.get("height")),
        ))
        if len(images) >= MAX_IMAGES:
            break
    return images


def extract_links(tree: HtmlElement, page_url: str) -> List[LinkData]:
    page_domain = urlparse(page_url).netloc.lower()
    links: List[LinkData] = []
    for a in tree.xpath("//a[@href]"):
        href = (a.get("href") or "").strip()
        text = " ".join((a.text_content() or "").split())
        if not href or not text or href.startswith(("#", "javascript:", "mailto:", "tel:")):
            continue

        absolute = urljoin(page_url, href)
        links.append(LinkData(
            href=absolute,
            text=text,
            is_internal=urlparse(absolute).netloc.lower() == page_domain,
            rel=a.get("rel"),
        ))
        if len(links) >= MAX_LINKS:
            break
    return links


def extract_content(tree: HtmlElement) -> str:
    """
    Visible body text.

    Drops non-content elements, then prefers the first main-content
    container with real text and falls back to the whole body. Mutates
    ``tree``, so run it after the other extractors.
    """
    for el in tree.xpath("|".join(f"//{tag}" for tag in NON_CONTENT_TAGS)):
        el.drop_tree()

    for xpath in MAIN_CONTENT_XPATHS:
        found = tree.xpath(xpath)
        if found:
            text = " ".join(found[0].text_content().split())
            if len(text) > MIN_MAIN_CONTENT_CHARS:
                return text

    body = tree.xpath("//body")
    root = body[0] if body else tree
    return " ".join(root.text_content().split())


# ─── Document Builder ─────────────────────────────────────────────────


def build_document(
    url: str,
    raw_html: str,
    load_time_ms: float = 0,
    core_web_vitals: Optional[Union[CoreWebVitals, Mapping[str, float]]] = None,
) -> DocumentModel:
    """
    Build a DocumentModel from raw HTML.

    Args:
        url: Absolute page URL (validated by DocumentModel).
        raw_html: The full HTML content of the page.
        load_time_ms: Measured load time, if the fetcher recorded one.
        core_web_vitals: Optional LCP/FID/CLS measurements.

    Returns:
        DocumentModel. Unparseable HTML yields a model with only the URL and
        performance metrics filled in.
    """
    if isinstance(core_web_vitals, Mapping):
        core_web_vitals = CoreWebVitals(**core_web_vitals)

    performance = PerformanceMetrics(
        load_time_ms=load_time_ms,
        page_size_bytes=len((raw_html or "").encode("utf-8")),
        core_web_vitals=core_web_vitals,
    )

    tree = _parse_html(raw_html) if raw_html else None
    if tree is None:
        return DocumentModel(url=url, performance=performance)

    fields: Dict[str, Any] = dict(
        title=extract_title(tree),
        meta_description=extract_meta_description(tree),
        headings=extract_headings(tree),
        schemas=extract_schemas(tree),
        meta_tags=extract_meta_tags(tree),
        open_graph_tags=extract_open_graph_tags(tree),
        images=extract_images(tree, url),
        links=extract_links(tree, url),
    )
    fields["content"] = extract_content(tree)

    return DocumentModel(url=url, performance=performance, **fields)


# ─── Helpers ──────────────────────────────────────────────────────────


def _int_or_none(val: Optional[str]) -> Optional[int]:
    if val is None:
        return None
    try:
        return int(val)
    except (ValueError, TypeError):
        return None
