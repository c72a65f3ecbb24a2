"""Category scoring and final-score aggregation.

Converts raw page features into four category scores (technical, SEO, UX,
conversion), combines them into a weighted final score, and maps that to a
letter grade. Everything here is pure: the same profile always scores the
same way.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models import (
    Category,
    ConversionFeatures,
    FeatureProfile,
    FormFeatures,
    Grade,
    Rubric,
    SeoFeatures,
    TechnicalFeatures,
    UxFeatures,
)

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024

CANONICAL_RUBRIC = Rubric(
    name="canonical",
    weights={
        Category.TECHNICAL: 0.35,
        Category.SEO: 0.25,
        Category.UX: 0.25,
        Category.CONVERSION: 0.15,
    },
    grade_bands=((90, Grade.A), (80, Grade.B), (70, Grade.C), (60, Grade.D)),
)

# Older rubric that shipped with the simulated-only analyzer. Grades run
# noticeably higher under it for the same page.
ALTERNATE_RUBRIC = Rubric(
    name="alternate",
    weights={
        Category.TECHNICAL: 0.30,
        Category.SEO: 0.25,
        Category.UX: 0.25,
        Category.CONVERSION: 0.20,
    },
    grade_bands=((85, Grade.A), (70, Grade.B), (55, Grade.C), (40, Grade.D)),
)

RUBRICS: dict[str, Rubric] = {r.name: r for r in (CANONICAL_RUBRIC, ALTERNATE_RUBRIC)}


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# ─── Sub-score buckets ───────────────────────────────────────────────────────


def score_page_size(size_bytes: float) -> float:
    size_mb = size_bytes / BYTES_PER_MB
    if size_mb < 1:
        return 100.0
    if size_mb < 3:
        return 80.0
    if size_mb < 5:
        return 50.0
    return 20.0


def score_title_length(length: int) -> float:
    """Titles of 50-60 characters are ideal; 30-70 are acceptable."""
    if 50 <= length <= 60:
        return 100.0
    if 30 <= length < 50 or 60 < length <= 70:
        return 70.0
    return 30.0


def score_meta_desc_length(length: int) -> float:
    """Descriptions of 120-160 characters are ideal; 80-200 are acceptable."""
    if 120 <= length <= 160:
        return 100.0
    if 80 <= length < 120 or 160 < length <= 200:
        return 70.0
    return 30.0


def score_heading_structure(h1_count: int, h2_count: int) -> float:
    if h1_count == 1 and h2_count >= 1:
        return 100.0
    if h1_count == 1:
        return 80.0
    if h1_count > 1:
        return 50.0
    return 0.0


def score_ctas(cta_count: int) -> float:
    """A handful of calls to action is focused; none or many is not."""
    if 1 <= cta_count <= 3:
        return 100.0
    if 4 <= cta_count <= 5:
        return 70.0
    return 40.0


def score_forms(forms: Sequence[FormFeatures]) -> float:
    """Score form friction by mean field count. Pages without forms are neutral."""
    if not forms:
        return 50.0
    avg_fields = sum(f.field_count for f in forms) / len(forms)
    if avg_fields <= 3:
        return 100.0
    if avg_fields <= 6:
        return 70.0
    return 40.0


def score_social_proof(element_count: int) -> float:
    return 100.0 if element_count > 0 else 0.0


def score_trust_signals(element_count: int) -> float:
    if element_count >= 3:
        return 100.0
    if element_count >= 1:
        return 50.0
    return 0.0


def score_contact_info(contact_count: int) -> float:
    return 100.0 if contact_count > 0 else 0.0


# ─── Category scores ─────────────────────────────────────────────────────────


def score_technical(technical: TechnicalFeatures) -> TechnicalFeatures:
    score = 20.0 if technical.is_landin else 0.0
    score += technical.page_speed / 100 * 20
    score += score_page_size(technical.page_size) / 100 * 15
    score += 20.0 if technical.https else 0.0
    score += 15.0 if technical.responsive else 0.0
    score += technical.image_optimization / 100 * 10
    return technical.model_copy(update={"score": clamp(score)})


def score_seo(seo: SeoFeatures) -> SeoFeatures:
    title_score = score_title_length(seo.title_length)
    meta_desc_score = score_meta_desc_length(seo.meta_desc_length)
    heading_score = score_heading_structure(seo.h1_count, seo.h2_count)

    score = (
        title_score / 100 * 30
        + meta_desc_score / 100 * 25
        + heading_score / 100 * 25
        + seo.alt_tags_score / 100 * 20
    )
    return seo.model_copy(update={
        "title_score": title_score,
        "meta_desc_score": meta_desc_score,
        "heading_structure_score": heading_score,
        "score": clamp(score),
    })


def score_ux(ux: UxFeatures) -> UxFeatures:
    cta_score = score_ctas(ux.cta_count)
    score = (
        cta_score / 100 * 40
        + ux.contrast_score / 100 * 20
        + ux.whitespace_score / 100 * 20
        + (20.0 if ux.mobile_friendly else 0.0)
    )
    return ux.model_copy(update={"cta_score": cta_score, "score": clamp(score)})


def score_conversion(conversion: ConversionFeatures) -> ConversionFeatures:
    form_score = score_forms(conversion.forms)
    social_proof_score = score_social_proof(conversion.social_proof_count)
    trust_score = score_trust_signals(conversion.trust_signal_count)
    contact_score = score_contact_info(conversion.contact_info)

    score = (
        form_score / 100 * 25
        + social_proof_score / 100 * 25
        + trust_score / 100 * 25
        + contact_score / 100 * 12.5
        + conversion.usp_score / 100 * 12.5
    )
    return conversion.model_copy(update={
        "form_score": form_score,
        "social_proof_score": social_proof_score,
        "trust_score": trust_score,
        "contact_score": contact_score,
        "score": clamp(score),
    })


def score_profile(profile: FeatureProfile) -> FeatureProfile:
    """Return a copy of the profile with every sub-score and category score filled in."""
    return profile.model_copy(update={
        "technical": score_technical(profile.technical),
        "seo": score_seo(profile.seo),
        "ux": score_ux(profile.ux),
        "conversion": score_conversion(profile.conversion),
    })


# ─── Aggregation ─────────────────────────────────────────────────────────────


def compute_final_score(profile: FeatureProfile, rubric: Rubric = CANONICAL_RUBRIC) -> float:
    """Weighted sum of the four category scores of a scored profile."""
    total = sum(profile.category_score(category) * weight for category, weight in rubric.weights)
    logger.debug("Final score %.2f under the %s rubric", total, rubric.name)
    return clamp(total)


def grade_for_score(score: float, rubric: Rubric = CANONICAL_RUBRIC) -> Grade:
    for minimum, grade in rubric.grade_bands:
        if score >= minimum:
            return grade
    return Grade.F


def get_rubric(name: str) -> Rubric:
    try:
        return RUBRICS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown rubric '{name}'. Choose one of: {', '.join(RUBRICS)}") from None
