"""Landing Analyzer MCP Server.

FastMCP server exposing the landing page analyzer as read-only tools.
Run: landing-analyzer-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .config import AnalyzerSettings
from .core.analyzer import analyze, analyze_markup
from .core.models import AnalysisResult
from .core.scoring import ALTERNATE_RUBRIC, CANONICAL_RUBRIC

logger = logging.getLogger(__name__)

LIVE_FETCH = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=False, openWorldHint=True)
OFFLINE = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and validate settings before serving."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    settings = _get_settings()
    logger.info("Landing analyzer ready (locale=%s, rubric=%s)", settings.locale, settings.rubric.name)
    yield


mcp = FastMCP(
    "Landing Analyzer",
    instructions="Score landing pages on technical health, SEO, user experience, and conversion readiness. Returns a 0-100 score, an A-F grade, and categorized feedback.",
    lifespan=lifespan,
)


def _get_settings() -> AnalyzerSettings:
    return AnalyzerSettings.from_env()


def _result_payload(result: AnalysisResult) -> dict:
    payload = result.model_dump(mode="json", by_alias=True)
    payload["summary"] = _summary(result)
    return payload


def _summary(result: AnalysisResult) -> str:
    fb = result.feedback
    text = (
        f"{result.url} scored {result.final_score:.1f}/100 (grade {result.grade.value}): "
        f"{len(fb.positive)} strengths, {len(fb.warning)} warnings, {len(fb.negative)} problems."
    )
    if result.simulated:
        text += " The page could not be fetched, so these numbers are simulated estimates, not measurements."
    return text


# ─── Tool 1: Analyze by URL ──────────────────────────────────────────────────


@mcp.tool(annotations=LIVE_FETCH)
async def analyze_landing_page(url: str, locale: str = "") -> dict:
    """Fetch a landing page and score its technical health, SEO, UX, and conversion readiness.

    If the page cannot be fetched, a simulated estimate is returned and
    marked with source='simulated'.

    Args:
        url: Full page URL, including the scheme (e.g., 'https://example.com/offer').
        locale: Feedback language: 'fa' (Persian) or 'en' (English). Default from LANDING_LOCALE.
    """
    result = await analyze(url, settings=_get_settings(), locale=locale or None)
    return _result_payload(result)


# ─── Tool 2: Analyze supplied markup ─────────────────────────────────────────


@mcp.tool(annotations=OFFLINE)
def analyze_landing_markup(url: str, html: str, locale: str = "") -> dict:
    """Score HTML you already have, without fetching anything.

    Args:
        url: The URL the HTML belongs to. Used for the HTTPS, brand, and URL-structure checks.
        html: Full page markup.
        locale: Feedback language: 'fa' (Persian) or 'en' (English). Default from LANDING_LOCALE.
    """
    result = analyze_markup(html, url, settings=_get_settings(), locale=locale or None)
    return _result_payload(result)


# ─── Tool 3: Rubric ──────────────────────────────────────────────────────────


@mcp.tool(annotations=OFFLINE)
def landing_rubric() -> dict:
    """Category weights and grade bands used for the final score, plus the alternate rubric for comparison."""
    active = _get_settings().rubric
    return {
        "title": "Scoring Rubric",
        "active": active.model_dump(mode="json", by_alias=True),
        "canonical": CANONICAL_RUBRIC.model_dump(mode="json", by_alias=True),
        "alternate": ALTERNATE_RUBRIC.model_dump(mode="json", by_alias=True),
        "summary": f"Active rubric: {active.name}. "
        + ", ".join(f"{c.value} {w:.0%}" for c, w in active.weights)
        + ". Grades: "
        + ", ".join(f"{g.value} >= {m:g}" for m, g in active.grade_bands)
        + ", otherwise F.",
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
