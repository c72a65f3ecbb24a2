"""Pydantic data models shared by the extractor, scorer, and server.

Every model is frozen and serializes with camelCase aliases, so
``model_dump(by_alias=True)`` yields the public JSON shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Scoring category."""

    TECHNICAL = "technical"
    SEO = "seo"
    UX = "ux"
    CONVERSION = "conversion"


class FeatureSource(str, Enum):
    """Where a feature profile came from."""

    MARKUP = "markup"
    SIMULATED = "simulated"


class Grade(str, Enum):
    """Letter grade for a final score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class FeedbackTier(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    NEGATIVE = "negative"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ─── Feature profile ─────────────────────────────────────────────────────────


class TechnicalFeatures(_Frozen):
    https: bool
    page_size: float = Field(ge=0, description="Markup size in bytes")
    responsive: bool
    is_landin: bool = Field(description="Built with a known page-builder template family")
    image_optimization: float = Field(ge=0, le=100, description="Percent of images with alt text")
    page_speed: float = Field(ge=0, le=100, description="Heuristic speed estimate")
    score: float = 0.0


class SeoFeatures(_Frozen):
    has_title: bool
    title_length: int = Field(ge=0)
    title_score: float = 0.0
    has_meta_desc: bool
    meta_desc_length: int = Field(ge=0)
    meta_desc_score: float = 0.0
    h1_count: int = Field(ge=0)
    h2_count: int = Field(ge=0)
    heading_structure_score: float = 0.0
    alt_tags_score: float = Field(ge=0, le=100)
    url_score: float = Field(ge=0, le=100)
    score: float = 0.0


class UxFeatures(_Frozen):
    cta_count: int = Field(ge=0, description="Distinct call-to-action elements")
    cta_score: float = 0.0
    contrast_score: float = Field(ge=0, le=100)
    whitespace_score: float = Field(ge=0, le=100)
    mobile_friendly: bool
    score: float = 0.0


class FormFeatures(_Frozen):
    field_count: int = Field(ge=0)


class ConversionFeatures(_Frozen):
    forms: tuple[FormFeatures, ...] = ()
    form_score: float = 0.0
    social_proof_count: int = Field(ge=0)
    social_proof_score: float = 0.0
    trust_signal_count: int = Field(ge=0)
    trust_score: float = 0.0
    contact_info: int = Field(ge=0, description="Phone numbers, emails and contact links found")
    contact_score: float = 0.0
    usp_score: float = Field(ge=0, le=100)
    score: float = 0.0


class FeatureProfile(_Frozen):
    """Raw and derived page signals grouped by category.

    Score fields stay at zero until the profile passes through
    :func:`landing_analyzer.core.scoring.score_profile`.
    """

    url: str
    technical: TechnicalFeatures
    seo: SeoFeatures
    ux: UxFeatures
    conversion: ConversionFeatures

    def category_score(self, category: Category) -> float:
        return getattr(self, category.value).score


# ─── Rubric ──────────────────────────────────────────────────────────────────


class Rubric(_Frozen):
    """Category weights and grade bands used by the aggregator.

    Weights are accepted as a mapping but held as ``(category, weight)``
    pairs so a shared rubric cannot be changed after construction. They
    still serialize as a ``{category: weight}`` object.
    """

    name: str
    weights: tuple[tuple[Category, float], ...]
    grade_bands: tuple[tuple[float, Grade], ...] = Field(
        description="(minimum score, grade) pairs, highest first. Scores below every band get F."
    )

    @field_validator("weights", mode="before")
    @classmethod
    def _weight_pairs(cls, value):
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_serializer("weights")
    def _weights_as_object(self, weights: tuple[tuple[Category, float], ...]) -> dict[str, float]:
        return {category.value: weight for category, weight in weights}

    @model_validator(mode="after")
    def _check(self) -> "Rubric":
        categories = [category for category, _ in self.weights]
        if len(categories) != len(Category) or set(categories) != set(Category):
            raise ValueError("Rubric weights must cover every category exactly once")
        total = sum(weight for _, weight in self.weights)
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Rubric weights must sum to 1, got {total:.3f}")
        minimums = [floor for floor, _ in self.grade_bands]
        if any(a <= b for a, b in zip(minimums, minimums[1:])):
            raise ValueError("Grade bands must be listed with strictly decreasing minimums")
        return self


# ─── Result ──────────────────────────────────────────────────────────────────


class Feedback(_Frozen):
    """Categorized feedback, each list in rule-evaluation order."""

    positive: tuple[str, ...] = ()
    warning: tuple[str, ...] = ()
    negative: tuple[str, ...] = ()


class ChartSeries(_Frozen):
    labels: tuple[str, str, str, str]
    values: tuple[float, float, float, float]


class AnalysisResult(_Frozen):
    """Complete outcome of analyzing one URL."""

    url: str
    metrics: FeatureProfile = Field(description="Scored feature profile")
    final_score: float = Field(ge=0.0, le=100.0)
    grade: Grade
    feedback: Feedback
    chart_data: ChartSeries
    source: FeatureSource = Field(description="markup = fetched page, simulated = synthetic fallback")

    @property
    def simulated(self) -> bool:
        return self.source is FeatureSource.SIMULATED
