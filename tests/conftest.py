"""Shared fixtures: sample pages and profile builders."""

from __future__ import annotations

import pytest

from landing_analyzer.config import AnalyzerSettings
from landing_analyzer.core.models import (
    ConversionFeatures,
    FeatureProfile,
    FormFeatures,
    SeoFeatures,
    TechnicalFeatures,
    UxFeatures,
)

GOOD_URL = "https://acme.example/"
GOOD_TITLE = "Acme Analytics - Fast dashboards for growing product teams"
GOOD_DESCRIPTION = (
    "Acme Analytics turns raw product events into clear dashboards your whole team "
    "can read, so you can ship the right features sooner."
)

GOOD_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Acme Analytics - Fast dashboards for growing product teams</title>
<meta name="description" content="Acme Analytics turns raw product events into clear dashboards your whole team can read, so you can ship the right features sooner.">
<link rel="canonical" href="https://acme.example/">
<link rel="stylesheet" href="/static/site.css">
</head>
<body>
<header class="hero">
<h1>The best analytics for product teams</h1>
<a class="btn" href="/signup">Start your trial</a>
</header>
<section>
<h2>Why teams switch</h2>
<img src="/static/dashboard.png" alt="Dashboard screenshot">
<img src="/static/customer-logo.png" alt="Customer logo">
<button type="button">Book a demo</button>
</section>
<section>
<h2>What customers say</h2>
<div class="testimonial">We cut reporting time in half.</div>
<div class="secure-badge">Secure checkout</div>
</section>
<form action="/subscribe">
<input type="email" name="email">
<input type="text" name="name">
<button type="submit">Subscribe</button>
</form>
<footer><a href="mailto:hello@acme.example">Email us</a></footer>
</body>
</html>
"""

BARE_URL = "http://example.com/a/b/c/d/e/f?x=1"
BARE_PAGE = "<html><body><p>hello</p></body></html>"


def make_profile(
    url: str = GOOD_URL,
    technical: dict | None = None,
    seo: dict | None = None,
    ux: dict | None = None,
    conversion: dict | None = None,
) -> FeatureProfile:
    """Unscored profile with middle-of-the-road defaults, overridable per category."""
    return FeatureProfile(
        url=url,
        technical=TechnicalFeatures(**{
            "https": True,
            "page_size": 500_000,
            "responsive": True,
            "is_landin": False,
            "image_optimization": 100,
            "page_speed": 85,
            **(technical or {}),
        }),
        seo=SeoFeatures(**{
            "has_title": True,
            "title_length": 55,
            "has_meta_desc": True,
            "meta_desc_length": 140,
            "h1_count": 1,
            "h2_count": 2,
            "alt_tags_score": 100,
            "url_score": 100,
            **(seo or {}),
        }),
        ux=UxFeatures(**{
            "cta_count": 2,
            "contrast_score": 80,
            "whitespace_score": 100,
            "mobile_friendly": True,
            **(ux or {}),
        }),
        conversion=ConversionFeatures(**{
            "forms": [FormFeatures(field_count=2)],
            "social_proof_count": 1,
            "trust_signal_count": 3,
            "contact_info": 1,
            "usp_score": 100,
            **(conversion or {}),
        }),
    )


@pytest.fixture
def english() -> AnalyzerSettings:
    return AnalyzerSettings(locale="en")
