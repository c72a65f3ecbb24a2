"""Landing Analyzer MCP Server.

Score a landing page on technical health, SEO, user experience, and
conversion readiness, with a letter grade and feedback in Persian or English.
"""

__version__ = "0.1.0"

from .core.analyzer import analyze, analyze_markup
from .core.models import AnalysisResult

__all__ = ["AnalysisResult", "analyze", "analyze_markup"]
