"""Rule table that turns scored features into readable feedback.

Rules run in a fixed order (technical, SEO, UX, conversion) and each one
emits at most one message into the positive, warning, or negative list.
Feedback thresholds are chosen for readability and do not always match the
scoring buckets: page speed, for instance, is a continuous weight when
scoring but a three-way split here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .models import Category, FeatureProfile, Feedback, FeedbackTier

DEFAULT_LOCALE = "fa"

CHART_LABELS: dict[str, tuple[str, str, str, str]] = {
    "fa": ("فنی", "سئو", "تجربه کاربری", "نرخ تبدیل"),
    "en": ("Technical", "SEO", "User Experience", "Conversion"),
}

CHART_CATEGORIES = (Category.TECHNICAL, Category.SEO, Category.UX, Category.CONVERSION)

P, W, N = FeedbackTier.POSITIVE, FeedbackTier.WARNING, FeedbackTier.NEGATIVE

MESSAGES: dict[str, dict[str, dict[FeedbackTier, str]]] = {
    "fa": {
        "brand": {P: "صفحه با ابزارهای حرفه‌ای ساخته شده"},
        "page_speed": {
            P: "صفحه خیلی سریع بار می‌شه - این عالیه!",
            W: "صفحه می‌تونه سریع‌تر بار بشه",
            N: "صفحه کند بار می‌شه - کاربرا منتظر نمی‌مونن",
        },
        "https": {
            P: "ارتباط امن داره - کاربرا بهش اعتماد می‌کنن",
            N: "ارتباط امن نداره - خطرناکه برای کاربرا",
        },
        "responsive": {P: "روی گوشی هم خوب کار می‌کنه", N: "روی گوشی بد دیده می‌شه"},
        "page_size": {
            P: "حجم صفحه مناسبه",
            W: "صفحه یکم سنگینه",
            N: "صفحه خیلی سنگینه - اینترنت کند رو اذیت می‌کنه",
        },
        "title": {P: "عنوان صفحه خوبه", W: "عنوان صفحه می‌تونه بهتر بشه", N: "عنوان صفحه مناسب نیست"},
        "meta_desc": {
            P: "توضیح صفحه خوب نوشته شده",
            W: "توضیح صفحه می‌تونه بهتر بشه",
            N: "توضیح صفحه کم یا نداره",
        },
        "headings": {P: "عناوین به خوبی مرتب شدن", N: "عناوین بهم ریختن"},
        "alt_tags": {P: "تمام عکس‌ها توضیح دارن", N: "عکس‌ها توضیح ندارن"},
        "cta": {P: "دکمه‌های کار مناسبه", W: "تعداد دکمه‌ها بهتره کمتر باشه", N: "دکمه‌ها زیاده یا نامفهومه"},
        "contrast": {P: "رنگ‌ها خوب دیده می‌شن", N: "رنگ‌ها بد دیده می‌شن"},
        "mobile": {P: "با گوشی هم راحته", N: "با گوشی مشکل داره"},
        "social_proof": {P: "نظرات خوب کاربرا رو نشون داده", N: "تعریف یا نظر کاربرا نداره"},
        "forms": {P: "فرم‌ها آسونه", N: "فرم‌ها پیچیده و طولانیه"},
        "trust": {P: "علامت‌های اعتماد داره", N: "علامت‌های اعتماد نداره"},
        "contact": {P: "راه تماس راحته", N: "راه تماس مشخص نیست"},
    },
    "en": {
        "brand": {P: "Page is built with professional page-builder tooling"},
        "page_speed": {
            P: "Page loads very fast - excellent!",
            W: "Page could load faster",
            N: "Page loads slowly - visitors will not wait",
        },
        "https": {
            P: "Connection is secure - visitors can trust it",
            N: "Connection is not secure - risky for visitors",
        },
        "responsive": {P: "Works well on phones", N: "Renders poorly on phones"},
        "page_size": {
            P: "Page weight is reasonable",
            W: "Page is a little heavy",
            N: "Page is very heavy - painful on slow connections",
        },
        "title": {P: "Page title is good", W: "Page title could be improved", N: "Page title is not suitable"},
        "meta_desc": {
            P: "Meta description is well written",
            W: "Meta description could be improved",
            N: "Meta description is too short or missing",
        },
        "headings": {P: "Headings are well structured", N: "Heading structure is messy"},
        "alt_tags": {P: "Images have alt text", N: "Images are missing alt text"},
        "cta": {P: "Calls to action are well balanced", W: "Fewer buttons would be better", N: "Too many or unclear calls to action"},
        "contrast": {P: "Colors are easy to read", N: "Colors are hard to read"},
        "mobile": {P: "Comfortable to use on mobile", N: "Has problems on mobile"},
        "social_proof": {P: "Shows customer reviews and testimonials", N: "No testimonials or reviews"},
        "forms": {P: "Forms are easy to fill in", N: "Forms are long and complicated"},
        "trust": {P: "Displays trust signals", N: "No trust signals"},
        "contact": {P: "Contact options are easy to find", N: "No clear way to get in touch"},
    },
}

Evaluator = Callable[[FeatureProfile], Optional[FeedbackTier]]


@dataclass(frozen=True)
class FeedbackRule:
    key: str
    evaluate: Evaluator


def _graded(
    value: Callable[[FeatureProfile], float],
    positive: float,
    warning: Optional[float] = None,
    silent: Optional[float] = None,
) -> Evaluator:
    """Higher is better. Values between ``silent`` and ``positive`` produce no feedback."""

    def evaluate(profile: FeatureProfile) -> Optional[FeedbackTier]:
        v = value(profile)
        if v >= positive:
            return P
        if warning is not None and v >= warning:
            return W
        if silent is not None and v >= silent:
            return None
        return N

    return evaluate


def _below(value: Callable[[FeatureProfile], float], positive: float, warning: float) -> Evaluator:
    """Lower is better."""

    def evaluate(profile: FeatureProfile) -> Optional[FeedbackTier]:
        v = value(profile)
        if v < positive:
            return P
        if v < warning:
            return W
        return N

    return evaluate


def _flag(value: Callable[[FeatureProfile], bool], negative: bool = True) -> Evaluator:
    def evaluate(profile: FeatureProfile) -> Optional[FeedbackTier]:
        if value(profile):
            return P
        return N if negative else None

    return evaluate


RULES: list[FeedbackRule] = [
    # Technical
    FeedbackRule("brand", _flag(lambda p: p.technical.is_landin, negative=False)),
    FeedbackRule("page_speed", _graded(lambda p: p.technical.page_speed, 80, warning=60)),
    FeedbackRule("https", _flag(lambda p: p.technical.https)),
    FeedbackRule("responsive", _flag(lambda p: p.technical.responsive)),
    FeedbackRule("page_size", _below(lambda p: p.technical.page_size / (1024 * 1024), 1, 3)),
    # SEO
    FeedbackRule("title", _graded(lambda p: p.seo.title_score, 80, warning=60)),
    FeedbackRule("meta_desc", _graded(lambda p: p.seo.meta_desc_score, 80, warning=60)),
    FeedbackRule("headings", _graded(lambda p: p.seo.heading_structure_score, 80, silent=60)),
    FeedbackRule("alt_tags", _graded(lambda p: p.seo.alt_tags_score, 80, silent=60)),
    # UX
    FeedbackRule("cta", _graded(lambda p: p.ux.cta_score, 80, warning=60)),
    FeedbackRule("contrast", _graded(lambda p: p.ux.contrast_score, 80, silent=60)),
    FeedbackRule("mobile", _flag(lambda p: p.ux.mobile_friendly)),
    # Conversion
    FeedbackRule("social_proof", _graded(lambda p: p.conversion.social_proof_score, 80, silent=60)),
    FeedbackRule("forms", _graded(lambda p: p.conversion.form_score, 80, silent=60)),
    FeedbackRule("trust", _graded(lambda p: p.conversion.trust_score, 80, silent=60)),
    FeedbackRule("contact", _graded(lambda p: p.conversion.contact_score, 80, silent=60)),
]


def check_locale(locale: str) -> str:
    if locale not in MESSAGES:
        raise ValueError(f"Unsupported locale '{locale}'. Choose one of: {', '.join(MESSAGES)}")
    return locale


def evaluate_rules(profile: FeatureProfile) -> list[tuple[str, FeedbackTier]]:
    """(rule key, tier) for every rule that fires, in rule order."""
    fired = []
    for rule in RULES:
        tier = rule.evaluate(profile)
        if tier is not None:
            fired.append((rule.key, tier))
    return fired


def generate_feedback(profile: FeatureProfile, locale: str = DEFAULT_LOCALE) -> Feedback:
    """Build the feedback set for a scored profile."""
    catalog = MESSAGES[check_locale(locale)]
    buckets: dict[FeedbackTier, list[str]] = {P: [], W: [], N: []}
    seen: set[str] = set()

    for key, tier in evaluate_rules(profile):
        message = catalog[key][tier]
        if message in seen:
            continue
        seen.add(message)
        buckets[tier].append(message)

    return Feedback(positive=tuple(buckets[P]), warning=tuple(buckets[W]), negative=tuple(buckets[N]))


def chart_labels(locale: str = DEFAULT_LOCALE) -> tuple[str, str, str, str]:
    return CHART_LABELS[check_locale(locale)]
