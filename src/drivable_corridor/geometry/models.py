"""Frenet coordinate data structures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FrenetPosition:
    """A point expressed relative to a reference line.

    ``s`` may fall outside ``[0, total_length]`` when the point lies before
    the start or past the end of the line; it is then extrapolated along the
    end tangent.
    """

    s: float
    """Longitudinal arc length along the reference line (metres)."""

    d: float
    """Signed lateral offset (metres). Positive = left of the direction of travel."""


@dataclass(frozen=True)
class FrenetFrame:
    """Local frame at a foot point on the reference line."""

    arc_length: float
    """Arc length of the foot point, within ``[0, total_length]``."""

    origin: tuple[float, float]
    """Cartesian foot point."""

    tangent: tuple[float, float]
    """Unit tangent, pointing in the direction of travel."""

    normal: tuple[float, float]
    """Unit normal, the tangent rotated by +90° (points left)."""

    curvature: float
    """Signed curvature κ = 1/R. Positive = left turn."""


@dataclass(frozen=True)
class FrenetPositionWithFrame:
    """Result of projecting a Cartesian point onto a reference line."""

    position: FrenetPosition
    frame: FrenetFrame
