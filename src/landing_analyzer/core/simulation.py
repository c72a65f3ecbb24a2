"""Synthetic feature profiles for pages that could not be fetched.

When the markup is unavailable (network failure, blocked request, error
status) the analyzer still answers with a plausible profile. Each field is
an independent bounded uniform draw. The only input that shapes the
ranges is whether the URL looks like a brand page: brand pages draw from
narrower, higher-quality ranges.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .extractor import DEFAULT_CONTRAST_SCORE, detect_brand, is_secure
from .models import (
    ConversionFeatures,
    FeatureProfile,
    FormFeatures,
    SeoFeatures,
    TechnicalFeatures,
    UxFeatures,
)

logger = logging.getLogger(__name__)

# Markup is unknown, so whitespace gets a conservative middle bucket
SIMULATED_WHITESPACE_SCORE = 70.0


def _chance(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability


def _brand_profile(url: str, rng: random.Random) -> FeatureProfile:
    field_count = rng.randint(2, 4)
    return FeatureProfile(
        url=url,
        technical=TechnicalFeatures(
            https=is_secure(url),
            page_size=rng.uniform(800_000, 2_800_000),
            responsive=True,
            is_landin=True,
            image_optimization=rng.uniform(80, 100),
            page_speed=rng.uniform(80, 95),
        ),
        seo=SeoFeatures(
            has_title=True,
            title_length=int(rng.uniform(50, 70)),
            has_meta_desc=True,
            meta_desc_length=int(rng.uniform(120, 160)),
            h1_count=1,
            h2_count=rng.randint(3, 5),
            alt_tags_score=rng.uniform(75, 95),
            url_score=rng.uniform(70, 90),
        ),
        ux=UxFeatures(
            cta_count=rng.randint(2, 3),
            contrast_score=DEFAULT_CONTRAST_SCORE,
            whitespace_score=SIMULATED_WHITESPACE_SCORE,
            mobile_friendly=True,
        ),
        conversion=ConversionFeatures(
            forms=[FormFeatures(field_count=field_count)],
            social_proof_count=rng.randint(2, 3),
            trust_signal_count=rng.randint(1, 2),
            contact_info=rng.randint(2, 3),
            usp_score=rng.uniform(75, 95),
        ),
    )


def _generic_profile(url: str, rng: random.Random) -> FeatureProfile:
    has_meta_desc = _chance(rng, 0.7)
    meta_desc_length = int(rng.uniform(100, 180))
    form_count = rng.randint(0, 1)
    field_count = rng.randint(2, 7)
    return FeatureProfile(
        url=url,
        technical=TechnicalFeatures(
            https=is_secure(url),
            page_size=rng.uniform(500_000, 3_500_000),
            responsive=_chance(rng, 0.8),
            is_landin=False,
            image_optimization=rng.uniform(60, 100),
            page_speed=rng.uniform(60, 90),
        ),
        seo=SeoFeatures(
            has_title=True,
            title_length=int(rng.uniform(30, 70)),
            has_meta_desc=has_meta_desc,
            meta_desc_length=meta_desc_length if has_meta_desc else 0,
            h1_count=1,
            h2_count=rng.randint(2, 5),
            alt_tags_score=rng.uniform(50, 90),
            url_score=rng.uniform(40, 90),
        ),
        ux=UxFeatures(
            cta_count=rng.randint(1, 4),
            contrast_score=DEFAULT_CONTRAST_SCORE,
            whitespace_score=SIMULATED_WHITESPACE_SCORE,
            mobile_friendly=_chance(rng, 0.7),
        ),
        conversion=ConversionFeatures(
            forms=[FormFeatures(field_count=field_count) for _ in range(form_count)],
            social_proof_count=rng.randint(0, 3),
            trust_signal_count=rng.randint(0, 2),
            contact_info=rng.randint(1, 2),
            usp_score=rng.uniform(40, 90),
        ),
    )


def simulate_features(url: str, rng: Optional[random.Random] = None) -> FeatureProfile:
    """Draw an unscored feature profile for a URL whose markup is unavailable.

    Args:
        url: The page URL. Only its scheme and brand markers are used.
        rng: Random source. Pass a seeded ``random.Random`` for repeatable output.
    """
    rng = rng if rng is not None else random.Random()
    is_landin = detect_brand(url)
    profile = _brand_profile(url, rng) if is_landin else _generic_profile(url, rng)
    logger.debug("Simulated features for %s (brand=%s)", url, is_landin)
    return profile
