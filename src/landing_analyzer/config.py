"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .core.clients.markup import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from .core.feedback import DEFAULT_LOCALE, check_locale
from .core.models import Rubric
from .core.scoring import CANONICAL_RUBRIC, get_rubric


class AnalyzerSettings(BaseModel):
    """Knobs for the analyzer and the markup fetch."""

    fetch_timeout: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="Seconds to wait for the page")
    user_agent: str = DEFAULT_USER_AGENT
    locale: str = DEFAULT_LOCALE
    rubric: Rubric = CANONICAL_RUBRIC
    simulation_seed: Optional[int] = Field(None, description="Seed for simulated profiles; random when unset")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerSettings":
        env = os.environ if environ is None else environ

        timeout_raw = env.get("LANDING_FETCH_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"LANDING_FETCH_TIMEOUT must be a number of seconds, got '{timeout_raw}'") from None

        seed_raw = env.get("LANDING_SIMULATION_SEED", "")
        try:
            seed = int(seed_raw) if seed_raw else None
        except ValueError:
            raise ValueError(f"LANDING_SIMULATION_SEED must be an integer, got '{seed_raw}'") from None

        return cls(
            fetch_timeout=timeout,
            user_agent=env.get("LANDING_USER_AGENT", DEFAULT_USER_AGENT),
            locale=check_locale(env.get("LANDING_LOCALE", DEFAULT_LOCALE)),
            rubric=get_rubric(env.get("LANDING_RUBRIC", CANONICAL_RUBRIC.name)),
            simulation_seed=seed,
        )
