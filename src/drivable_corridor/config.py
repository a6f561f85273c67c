"""Projection settings for reference-line queries.

Values can be overridden through environment variables (optionally from a
``.env`` file in the working directory):

* ``CORRIDOR_SAMPLES_PER_SEGMENT``
* ``CORRIDOR_MAX_NEWTON_ITERATIONS``
* ``CORRIDOR_TOLERANCE``
* ``CORRIDOR_HINT_WINDOW``
"""

from __future__ import annotations

import functools
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_ENV_PREFIX = "CORRIDOR_"


class ProjectionSettings(BaseModel):
    """Tuning knobs for nearest-point projection onto a reference line."""

    samples_per_segment: int = Field(default=8, ge=1)
    """Coarse-scan samples per knot interval of the reference line."""

    max_newton_iterations: int = Field(default=20, ge=1)
    """Upper bound on Newton refinement steps."""

    tolerance: float = Field(default=1e-9, gt=0.0)
    """Newton stops once the arc-length update is smaller than this (metres)."""

    hint_window: float = Field(default=10.0, gt=0.0)
    """Half-width of the coarse-scan window around an arc length hint (metres)."""


def load_settings() -> ProjectionSettings:
    """Build :class:`ProjectionSettings` from the environment.

    Unset variables keep their defaults.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    load_dotenv()
    overrides: dict[str, str] = {}
    for name in ProjectionSettings.model_fields:
        raw = os.environ.get(_ENV_PREFIX + name.upper())
        if raw is not None:
            overrides[name] = raw
    return ProjectionSettings(**overrides)


@functools.lru_cache(maxsize=1)
def default_settings() -> ProjectionSettings:
    """Return the process-wide settings, loaded once on first use."""
    return load_settings()
