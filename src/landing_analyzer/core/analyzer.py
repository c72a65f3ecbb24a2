"""Landing page analysis pipeline.

One analysis = fetch markup, extract (or simulate) features, score,
aggregate, generate feedback, and package the result. The fetch is the only
await point. A failed fetch never fails the analysis: the page is scored
from a simulated profile instead and the result is marked as simulated.
"""

from __future__ import annotations

import functools
import logging
import random
from typing import Awaitable, Callable, Optional

from ..config import AnalyzerSettings
from .clients.markup import fetch_markup
from .extractor import extract_features
from .feedback import CHART_CATEGORIES, DEFAULT_LOCALE, chart_labels, generate_feedback
from .models import AnalysisResult, ChartSeries, FeatureProfile, FeatureSource, Rubric
from .scoring import CANONICAL_RUBRIC, compute_final_score, grade_for_score, score_profile
from .simulation import simulate_features

logger = logging.getLogger(__name__)

MarkupFetcher = Callable[[str], Awaitable[str]]


def assemble_result(
    url: str,
    profile: FeatureProfile,
    source: FeatureSource,
    *,
    rubric: Rubric = CANONICAL_RUBRIC,
    locale: str = DEFAULT_LOCALE,
) -> AnalysisResult:
    """Score an unscored profile and package everything into one result."""
    scored = score_profile(profile)
    final_score = compute_final_score(scored, rubric)
    grade = grade_for_score(final_score, rubric)

    result = AnalysisResult(
        url=url,
        metrics=scored,
        final_score=final_score,
        grade=grade,
        feedback=generate_feedback(scored, locale),
        chart_data=ChartSeries(
            labels=chart_labels(locale),
            values=tuple(scored.category_score(c) for c in CHART_CATEGORIES),
        ),
        source=source,
    )
    logger.info(
        "Analyzed %s from %s: %.1f (%s, rubric=%s)",
        url, source.value, final_score, grade.value, rubric.name,
    )
    return result


def analyze_markup(
    markup: str,
    url: str,
    *,
    settings: Optional[AnalyzerSettings] = None,
    locale: Optional[str] = None,
) -> AnalysisResult:
    """Analyze markup the caller already holds. Deterministic for the same input."""
    settings = settings or AnalyzerSettings()
    profile = extract_features(markup, url)
    return assemble_result(
        url,
        profile,
        FeatureSource.MARKUP,
        rubric=settings.rubric,
        locale=locale or settings.locale,
    )


async def analyze(
    url: str,
    *,
    fetcher: Optional[MarkupFetcher] = None,
    rng: Optional[random.Random] = None,
    settings: Optional[AnalyzerSettings] = None,
    locale: Optional[str] = None,
) -> AnalysisResult:
    """Analyze a landing page by URL.

    Args:
        url: Page URL, already validated by the caller.
        fetcher: Coroutine returning the page markup. Defaults to an HTTP fetch.
        rng: Random source for the simulated fallback.
        settings: Analyzer settings. Library defaults when omitted.
        locale: Overrides ``settings.locale`` for feedback and chart labels.

    Returns:
        A complete result. Fetch failures produce a simulated result rather
        than an exception.
    """
    settings = settings or AnalyzerSettings()
    if fetcher is None:
        fetcher = functools.partial(
            fetch_markup,
            timeout=settings.fetch_timeout,
            user_agent=settings.user_agent,
        )

    try:
        markup = await fetcher(url)
    except Exception as exc:
        logger.warning("Fetch failed for %s, using simulated features: %s", url, exc)
        rng = rng if rng is not None else random.Random(settings.simulation_seed)
        profile = simulate_features(url, rng)
        source = FeatureSource.SIMULATED
    else:
        profile = extract_features(markup, url)
        source = FeatureSource.MARKUP

    return assemble_result(
        url,
        profile,
        source,
        rubric=settings.rubric,
        locale=locale or settings.locale,
    )
