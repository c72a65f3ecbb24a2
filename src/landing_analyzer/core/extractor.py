"""Feature extraction from fetched page markup.

Turns raw HTML into an unscored :class:`FeatureProfile`. Every query goes
through a :class:`StructuredDocument`, so the extractor does not care which
parser sits underneath. Only the brand check and the whitespace ratio read
the raw markup string.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional
from urllib.parse import urlparse

from .document import SoupDocument, StructuredDocument
from .models import (
    ConversionFeatures,
    FeatureProfile,
    FormFeatures,
    SeoFeatures,
    TechnicalFeatures,
    UxFeatures,
)

logger = logging.getLogger(__name__)

# Page-builder template family that gets the brand bonus
BRAND_MARKERS = ("landin.ir", "templates.landin", "landin", "لندین")

RESOURCE_SELECTOR = 'script, link[rel~="stylesheet"], img'
BASE_PAGE_SPEED = 85.0
BRAND_PAGE_SPEED = 90.0
RESOURCE_PENALTY = 1.5
MAX_RESOURCE_PENALTY = 25.0
MIN_PAGE_SPEED = 60.0

# Rendering is not available, so contrast is a fixed estimate
DEFAULT_CONTRAST_SCORE = 80.0

CTA_SELECTORS = [
    "button",
    'a[href*="signup"]',
    'a[href*="register"]',
    'a[href*="buy"]',
    'a[href*="order"]',
    'a[href*="purchase"]',
    'a[href*="contact"]',
    ".cta",
    ".btn",
    ".button",
    '[class*="call-to-action"]',
]

FORM_FIELD_SELECTOR = 'input[type="text"], input[type="email"], input[type="tel"], textarea, select'

SOCIAL_PROOF_SELECTORS = [
    ".testimonial",
    ".review",
    ".rating",
    ".customer-logo",
    '[class*="testimonial"]',
    '[class*="review"]',
    '[class*="rating"]',
    'img[src*="logo"]',
    '[class*="trust"]',
    '[class*="badge"]',
]

TRUST_SIGNAL_SELECTORS = [
    '[class*="secure"]',
    '[class*="guarantee"]',
    '[class*="warranty"]',
    'img[src*="ssl"]',
    'img[src*="secure"]',
    'img[src*="trust"]',
    '[class*="certified"]',
    '[class*="verified"]',
]

CONTACT_LINK_SELECTOR = 'a[href^="tel:"], a[href^="mailto:"]'
PHONE_PATTERN = re.compile(r"\+?\d{1,4}[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}", re.ASCII)
EMAIL_PATTERN = re.compile(r"[\w._%+-]+@[\w.-]+\.[A-Za-z]{2,}", re.ASCII)

PROMINENT_TEXT_SELECTOR = 'h1, h2, .hero, [class*="headline"]'
USP_KEYWORDS = [
    # Persian
    "فقط",
    "منحصر",
    "بهترین",
    "رایگان",
    "سریع",
    "آسان",
    "تضمین",
    # English
    "exclusive",
    "best",
    "free",
    "fast",
    "easy",
    "guarantee",
]

_TAG_PATTERN = re.compile(r"<[^>]*>")


# ─── Technical ───────────────────────────────────────────────────────────────


def detect_brand(url: str, markup: Optional[str] = None) -> bool:
    """Return True when the URL (or markup, if given) carries a brand marker."""
    haystacks = [url.lower()]
    if markup:
        haystacks.append(markup.lower())
    return any(marker in haystack for haystack in haystacks for marker in BRAND_MARKERS)


def is_secure(url: str) -> bool:
    return urlparse(url).scheme.lower() == "https"


def image_alt_coverage(document: StructuredDocument) -> Optional[float]:
    """Percent of images with a non-blank alt attribute, or None if the page has no images."""
    images = document.select("img")
    if not images:
        return None
    with_alt = sum(1 for img in images if (document.attribute(img, "alt") or "").strip())
    return with_alt / len(images) * 100


def estimate_page_speed(document: StructuredDocument, is_landin: bool) -> float:
    """Estimate page speed from the number of render-affecting resources.

    Starts at a base of 85 (90 for brand pages), loses 1.5 points per
    script, stylesheet, or image up to 25 points, and never drops below 60.
    """
    resources = document.count(RESOURCE_SELECTOR)
    base = BRAND_PAGE_SPEED if is_landin else BASE_PAGE_SPEED
    penalty = min(resources * RESOURCE_PENALTY, MAX_RESOURCE_PENALTY)
    return max(base - penalty, MIN_PAGE_SPEED)


# ─── SEO ─────────────────────────────────────────────────────────────────────


def bucket_alt_coverage(coverage: Optional[float]) -> float:
    if coverage is None or coverage >= 90:
        return 100.0
    if coverage >= 60:
        return 70.0
    return 30.0


def score_url_structure(url: str, document: StructuredDocument) -> float:
    """Canonical link (+40), short or absent query (+30), shallow path (+30)."""
    score = 0.0
    if document.count('link[rel~="canonical"]') > 0:
        score += 40
    if "?" not in url or len(url.split("?", 1)[1]) < 50:
        score += 30
    if len(url.split("/")) <= 6:
        score += 30
    return score


# ─── UX ──────────────────────────────────────────────────────────────────────


def _union(document: StructuredDocument, selectors: Iterable[str]) -> list[Any]:
    """Elements matching any selector, each element once, in first-match order."""
    seen: dict[int, Any] = {}
    for selector in selectors:
        for element in document.select(selector):
            seen.setdefault(id(element), element)
    return list(seen.values())


def find_ctas(document: StructuredDocument) -> list[Any]:
    return _union(document, CTA_SELECTORS)


def estimate_whitespace(markup: str) -> float:
    """Bucket the visible-text to markup ratio; markup-heavy pages read as airy."""
    if not markup:
        return 40.0
    ratio = len(_TAG_PATTERN.sub("", markup).strip()) / len(markup)
    if ratio < 0.3:
        return 100.0
    if ratio < 0.5:
        return 70.0
    return 40.0


# ─── Conversion ──────────────────────────────────────────────────────────────


def find_forms(document: StructuredDocument) -> list[FormFeatures]:
    return [
        FormFeatures(field_count=document.count(FORM_FIELD_SELECTOR, scope=form))
        for form in document.select("form")
    ]


def count_contact_info(document: StructuredDocument) -> int:
    bodies = document.select("body")
    text = document.text(bodies[0]) if bodies else document.text()
    phones = len(PHONE_PATTERN.findall(text))
    emails = len(EMAIL_PATTERN.findall(text))
    return phones + emails + document.count(CONTACT_LINK_SELECTOR)


def score_usp(document: StructuredDocument, is_landin: bool) -> float:
    prominent = " ".join(document.text(el) for el in document.select(PROMINENT_TEXT_SELECTOR)).lower()
    if any(keyword in prominent for keyword in USP_KEYWORDS):
        return 100.0
    return 80.0 if is_landin else 60.0


# ─── Entry point ─────────────────────────────────────────────────────────────


def extract_features(
    markup: str,
    url: str,
    document: Optional[StructuredDocument] = None,
) -> FeatureProfile:
    """Build an unscored feature profile from page markup.

    Args:
        markup: Full HTML of the page.
        url: The URL the markup was fetched from.
        document: Pre-parsed document. Parsed with BeautifulSoup when omitted.
    """
    doc = document if document is not None else SoupDocument(markup)
    is_landin = detect_brand(url, markup)
    has_viewport = doc.count('meta[name="viewport"]') > 0
    coverage = image_alt_coverage(doc)

    titles = doc.select("title")
    title_text = doc.text(titles[0]).strip() if titles else ""
    descriptions = doc.select('meta[name="description"]')
    description = (doc.attribute(descriptions[0], "content") or "") if descriptions else ""

    technical = TechnicalFeatures(
        https=is_secure(url),
        page_size=len(markup.encode("utf-8")),
        responsive=has_viewport,
        is_landin=is_landin,
        image_optimization=100.0 if coverage is None else coverage,
        page_speed=estimate_page_speed(doc, is_landin),
    )
    seo = SeoFeatures(
        has_title=bool(titles),
        title_length=len(title_text),
        has_meta_desc=bool(descriptions),
        meta_desc_length=len(description),
        h1_count=doc.count("h1"),
        h2_count=doc.count("h2"),
        alt_tags_score=bucket_alt_coverage(coverage),
        url_score=score_url_structure(url, doc),
    )
    ux = UxFeatures(
        cta_count=len(find_ctas(doc)),
        contrast_score=DEFAULT_CONTRAST_SCORE,
        whitespace_score=estimate_whitespace(markup),
        mobile_friendly=has_viewport,
    )
    conversion = ConversionFeatures(
        forms=find_forms(doc),
        social_proof_count=len(_union(doc, SOCIAL_PROOF_SELECTORS)),
        trust_signal_count=len(_union(doc, TRUST_SIGNAL_SELECTORS)),
        contact_info=count_contact_info(doc),
        usp_score=score_usp(doc, is_landin),
    )

    logger.debug(
        "Extracted features for %s: %d bytes, %d CTAs, %d forms, brand=%s",
        url, technical.page_size, ux.cta_count, len(conversion.forms), is_landin,
    )
    return FeatureProfile(url=url, technical=technical, seo=seo, ux=ux, conversion=conversion)
