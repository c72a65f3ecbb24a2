from __future__ import annotations

import asyncio
import random

import pytest
from pydantic import ValidationError

from conftest import BARE_PAGE, BARE_URL, GOOD_PAGE, GOOD_URL
from landing_analyzer.config import AnalyzerSettings
from landing_analyzer.core import analyzer
from landing_analyzer.core.analyzer import analyze, analyze_markup
from landing_analyzer.core.clients.markup import RetrievalError
from landing_analyzer.core.feedback import MESSAGES
from landing_analyzer.core.models import FeatureSource, FeedbackTier, Grade
from landing_analyzer.core.scoring import ALTERNATE_RUBRIC

EN = MESSAGES["en"]


def serve(markup: str):
    async def fetcher(url: str) -> str:
        return markup

    return fetcher


def fail_with(exc: BaseException):
    async def fetcher(url: str) -> str:
        raise exc

    return fetcher


class TestMarkupPath:
    def test_good_page(self, english):
        result = analyze_markup(GOOD_PAGE, GOOD_URL, settings=english)

        assert result.source is FeatureSource.MARKUP
        assert not result.simulated
        assert result.metrics.technical.score == pytest.approx(76.1)
        assert result.metrics.seo.score == pytest.approx(100)
        assert result.metrics.ux.score == pytest.approx(96)
        assert result.metrics.conversion.score == pytest.approx(87.5)
        assert result.final_score == pytest.approx(88.76)
        assert result.grade is Grade.B

        assert result.feedback.warning == ()
        assert result.feedback.negative == (EN["trust"][FeedbackTier.NEGATIVE],)
        assert len(result.feedback.positive) == 14

    def test_bare_page(self, english):
        result = analyze_markup(BARE_PAGE, BARE_URL, settings=english)

        assert result.metrics.technical.score == pytest.approx(42)
        assert result.metrics.seo.score == pytest.approx(36.5)
        assert result.metrics.ux.score == pytest.approx(52)
        assert result.metrics.conversion.score == pytest.approx(20)
        assert result.final_score == pytest.approx(39.825)
        assert result.grade is Grade.F
        assert result.feedback.positive == (
            EN["page_speed"][FeedbackTier.POSITIVE],
            EN["page_size"][FeedbackTier.POSITIVE],
            EN["alt_tags"][FeedbackTier.POSITIVE],
            EN["contrast"][FeedbackTier.POSITIVE],
        )
        assert EN["https"][FeedbackTier.NEGATIVE] in result.feedback.negative

    def test_chart_data_mirrors_category_scores(self, english):
        result = analyze_markup(GOOD_PAGE, GOOD_URL, settings=english)
        m = result.metrics
        assert result.chart_data.labels == ("Technical", "SEO", "User Experience", "Conversion")
        assert result.chart_data.values == (m.technical.score, m.seo.score, m.ux.score, m.conversion.score)

    def test_repeatable(self):
        assert analyze_markup(GOOD_PAGE, GOOD_URL) == analyze_markup(GOOD_PAGE, GOOD_URL)

    def test_locale_argument_overrides_settings(self, english):
        result = analyze_markup(GOOD_PAGE, GOOD_URL, settings=english, locale="fa")
        assert result.chart_data.labels[0] == "فنی"

    def test_alternate_rubric(self):
        settings = AnalyzerSettings(rubric=ALTERNATE_RUBRIC)
        result = analyze_markup(BARE_PAGE, BARE_URL, settings=settings)
        # 0.30*42 + 0.25*36.5 + 0.25*52 + 0.20*20
        assert result.final_score == pytest.approx(38.725)
        assert result.grade is Grade.F

    def test_result_is_frozen(self):
        result = analyze_markup(GOOD_PAGE, GOOD_URL)
        with pytest.raises(ValidationError):
            result.final_score = 100
        with pytest.raises(ValidationError):
            result.metrics.technical.https = False
        assert isinstance(result.metrics.conversion.forms, tuple)
        with pytest.raises(AttributeError):
            result.metrics.conversion.forms.append(None)

    def test_camel_case_dump(self):
        data = analyze_markup(GOOD_PAGE, GOOD_URL).model_dump(mode="json", by_alias=True)
        assert set(data) == {"url", "metrics", "finalScore", "grade", "feedback", "chartData", "source"}
        assert data["grade"] == "B"
        assert data["source"] == "markup"
        assert data["metrics"]["technical"]["isLandin"] is False
        assert data["metrics"]["seo"]["headingStructureScore"] == 100
        assert set(data["feedback"]) == {"positive", "warning", "negative"}
        assert len(data["chartData"]["values"]) == 4


class TestAnalyze:
    async def test_uses_fetched_markup(self, english):
        result = await analyze(GOOD_URL, fetcher=serve(GOOD_PAGE), settings=english)
        assert result == analyze_markup(GOOD_PAGE, GOOD_URL, settings=english)

    @pytest.mark.parametrize("exc", [
        RetrievalError(GOOD_URL, "HTTP 403"),
        ConnectionResetError("reset by peer"),
        RuntimeError("blocked by CORS"),
    ])
    async def test_fetch_failure_falls_back_to_simulation(self, exc):
        result = await analyze(GOOD_URL, fetcher=fail_with(exc), rng=random.Random(3))
        assert result.source is FeatureSource.SIMULATED
        assert result.simulated
        assert 0 <= result.final_score <= 100
        assert result.metrics.technical.https

    async def test_fallback_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="landing_analyzer.core.analyzer"):
            await analyze(GOOD_URL, fetcher=fail_with(RetrievalError(GOOD_URL, "HTTP 500")))
        assert "using simulated features" in caplog.text

    async def test_simulation_is_seedable(self):
        first = await analyze(BARE_URL, fetcher=fail_with(RuntimeError()), rng=random.Random(11))
        second = await analyze(BARE_URL, fetcher=fail_with(RuntimeError()), rng=random.Random(11))
        assert first == second

    async def test_seed_from_settings(self):
        settings = AnalyzerSettings(simulation_seed=5)
        first = await analyze(BARE_URL, fetcher=fail_with(RuntimeError()), settings=settings)
        second = await analyze(BARE_URL, fetcher=fail_with(RuntimeError()), settings=settings)
        assert first == second

    async def test_cancellation_propagates(self):
        with pytest.raises(asyncio.CancelledError):
            await analyze(GOOD_URL, fetcher=fail_with(asyncio.CancelledError()))

    async def test_default_fetcher_receives_settings(self, monkeypatch):
        calls = []

        async def fake_fetch(url, timeout, user_agent):
            calls.append((url, timeout, user_agent))
            return GOOD_PAGE

        monkeypatch.setattr(analyzer, "fetch_markup", fake_fetch)
        settings = AnalyzerSettings(fetch_timeout=4, user_agent="probe/1.0")
        result = await analyze(GOOD_URL, settings=settings)

        assert calls == [(GOOD_URL, 4, "probe/1.0")]
        assert result.source is FeatureSource.MARKUP

    async def test_concurrent_analyses_are_independent(self, english):
        good, bare = await asyncio.gather(
            analyze(GOOD_URL, fetcher=serve(GOOD_PAGE), settings=english),
            analyze(BARE_URL, fetcher=serve(BARE_PAGE), settings=english),
        )
        assert good.grade is Grade.B
        assert bare.grade is Grade.F
        assert good.metrics is not bare.metrics
