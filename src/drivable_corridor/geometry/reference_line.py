"""Smooth reference line with nearest-point projection.

The line is a 2-D cubic spline through the given points, parametrized by
cumulative chord length, which serves as its arc length.

Projection algorithm (:meth:`ReferenceLine.frenet_position_with_frame`):
1. Coarse scan over pre-sampled curve points, optionally restricted to a
   window around an arc length hint.
2. Newton refinement of ``(r(s) - p) · r'(s) = 0``, clipped to ``[0, L]``.
3. If the foot point is an end of the line and the query point lies beyond
   it, ``s`` is extrapolated along the end tangent.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike
from scipy.interpolate import CubicSpline

from drivable_corridor.config import ProjectionSettings, default_settings
from drivable_corridor.geometry.models import (
    FrenetFrame,
    FrenetPosition,
    FrenetPositionWithFrame,
)
from drivable_corridor.geometry.polyline import FrenetPolyline

_logger = logging.getLogger(__name__)

_EPS = 1e-12

# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _as_points(points: ArrayLike, name: str = "points") -> np.ndarray:
    """Return *points* as a float array of shape ``(N, 2)``.

    Raises:
        ValueError: If the shape is not ``(N, 2)``.
    """
    arr = np.asarray(points, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"{name} must have shape (N, 2), got {arr.shape}")
    return arr


def _as_point(point: ArrayLike) -> np.ndarray:
    arr = np.asarray(point, dtype=float)
    if arr.shape != (2,):
        raise ValueError(f"point must have shape (2,), got {arr.shape}")
    return arr


def _unit(vector: ArrayLike, name: str) -> np.ndarray:
    v = _as_point(vector)
    norm = float(np.hypot(v[0], v[1]))
    if norm < _EPS:
        raise ValueError(f"{name} must be a non-zero vector")
    return v / norm


def _xy(vector: np.ndarray) -> tuple[float, float]:
    return float(vector[0]), float(vector[1])


# ---------------------------------------------------------------------------
# Reference line
# ---------------------------------------------------------------------------


class ReferenceLine:
    """Arc-length parametrized 2-D cubic spline.

    Args:
        points: Ordered ``(N, 2)`` points in driving direction, ``N >= 2``.
        first_tangent: Optional direction of the line at its first point.
        last_tangent: Optional direction of the line at its last point.
            Must be given together with *first_tangent*.
        settings: Projection tuning; defaults to :func:`default_settings`.

    Raises:
        ValueError: On fewer than two points, duplicate consecutive points,
            a zero tangent, or only one of the two tangents.
    """

    def __init__(
        self,
        points: ArrayLike,
        first_tangent: ArrayLike | None = None,
        last_tangent: ArrayLike | None = None,
        settings: ProjectionSettings | None = None,
    ) -> None:
        pts = _as_points(points)
        if len(pts) < 2:
            raise ValueError(f"ReferenceLine requires at least 2 points, got {len(pts)}")
        seg_len = np.hypot(*np.diff(pts, axis=0).T)
        if np.any(seg_len < _EPS):
            raise ValueError("points contain duplicate consecutive entries")
        if (first_tangent is None) != (last_tangent is None):
            raise ValueError("first_tangent and last_tangent must be given together")

        self._settings = settings if settings is not None else default_settings()
        self._points = pts
        self._arc_lengths = np.concatenate([[0.0], np.cumsum(seg_len)])

        if first_tangent is None:
            bc_type: str | tuple = "not-a-knot"
        else:
            bc_type = (
                (1, _unit(first_tangent, "first_tangent")),
                (1, _unit(last_tangent, "last_tangent")),
            )
        self._spline = CubicSpline(self._arc_lengths, pts, axis=0, bc_type=bc_type)
        self._d1 = self._spline.derivative(1)
        self._d2 = self._spline.derivative(2)

        # Coarse-scan table: samples_per_segment samples per knot interval + endpoint
        n = self._settings.samples_per_segment
        fractions = np.arange(n) / n
        starts = self._arc_lengths[:-1, None]
        spans = np.diff(self._arc_lengths)[:, None]
        self._scan_s = np.append((starts + spans * fractions).ravel(), self._arc_lengths[-1])
        self._scan_xy = self._spline(self._scan_s)

    # ------------------------------------------------------------------
    # Knots
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._arc_lengths)

    @property
    def points(self) -> np.ndarray:
        """Copy of the ``(N, 2)`` knot points."""
        return self._points.copy()

    @property
    def arc_lengths(self) -> tuple[float, ...]:
        """Arc length of every knot; the first is 0."""
        return tuple(float(s) for s in self._arc_lengths)

    def arc_length_at_index(self, index: int) -> float:
        return float(self._arc_lengths[index])

    @property
    def total_length(self) -> float:
        return float(self._arc_lengths[-1])

    @property
    def settings(self) -> ProjectionSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Point queries (arc lengths are clamped to [0, total_length])
    # ------------------------------------------------------------------

    def _clamp(self, arc_length: float) -> float:
        return min(max(float(arc_length), 0.0), self.total_length)

    def position_at(self, arc_length: float) -> np.ndarray:
        return self._spline(self._clamp(arc_length))

    def tangent_at(self, arc_length: float) -> np.ndarray:
        """Unit tangent in the direction of travel."""
        d1 = self._d1(self._clamp(arc_length))
        return d1 / np.hypot(d1[0], d1[1])

    def normal_at(self, arc_length: float) -> np.ndarray:
        """Unit normal pointing left of the direction of travel."""
        t = self.tangent_at(arc_length)
        return np.array([-t[1], t[0]])

    def curvature_at(self, arc_length: float) -> float:
        """Signed curvature; positive for a left (counterclockwise) turn."""
        s = self._clamp(arc_length)
        d1 = self._d1(s)
        d2 = self._d2(s)
        speed = float(np.hypot(d1[0], d1[1]))
        if speed < _EPS:
            return 0.0
        cross_z = d1[0] * d2[1] - d1[1] * d2[0]
        return float(cross_z / speed**3)

    def frame_at(self, arc_length: float) -> FrenetFrame:
        s = self._clamp(arc_length)
        tangent = self.tangent_at(s)
        return FrenetFrame(
            arc_length=s,
            origin=_xy(self.position_at(s)),
            tangent=_xy(tangent),
            normal=(-float(tangent[1]), float(tangent[0])),
            curvature=self.curvature_at(s),
        )

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def frenet_position_with_frame(
        self,
        point: ArrayLike,
        arc_length_hint: float | None = None,
    ) -> FrenetPositionWithFrame:
        """Project *point* onto the line.

        Args:
            point: Cartesian ``(x, y)``.
            arc_length_hint: Optional starting guess.  Restricts the coarse
                scan to ``hint ± hint_window``, which disambiguates points
                near self-intersecting or sharply curved lines.  An empty
                window falls back to scanning the whole line.

        Returns:
            The Frenet position and the frame at the foot point.  ``s`` is
            extrapolated along the end tangent for points before the start
            or past the end.
        """
        p = _as_point(point)
        s = self._refine(p, self._coarse_arc_length(p, arc_length_hint))
        frame = self.frame_at(s)

        offset = p - np.asarray(frame.origin)
        along = float(offset @ np.asarray(frame.tangent))
        lateral = float(offset @ np.asarray(frame.normal))

        longitudinal = s
        if s <= 0.0 and along < 0.0:
            longitudinal = along
        elif s >= self.total_length and along > 0.0:
            longitudinal = self.total_length + along

        return FrenetPositionWithFrame(
            position=FrenetPosition(s=longitudinal, d=lateral),
            frame=frame,
        )

    def to_frenet_polyline(self, points: ArrayLike) -> FrenetPolyline:
        """Project every point of a Cartesian polyline, keeping input order."""
        pts = _as_points(points)
        samples: list[tuple[float, float]] = []
        for p in pts:
            position = self.frenet_position_with_frame(p).position
            samples.append((position.s, position.d))
        return FrenetPolyline(samples)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _coarse_arc_length(self, p: np.ndarray, hint: float | None) -> float:
        """Arc length of the nearest coarse-scan sample."""
        lo, hi = 0, len(self._scan_s)
        if hint is not None:
            window = self._settings.hint_window
            lo = int(np.searchsorted(self._scan_s, hint - window, side="left"))
            hi = int(np.searchsorted(self._scan_s, hint + window, side="right"))
            if lo >= hi:
                lo, hi = 0, len(self._scan_s)
        dist2 = np.sum((self._scan_xy[lo:hi] - p) ** 2, axis=1)
        return float(self._scan_s[lo + int(np.argmin(dist2))])

    def _distance2(self, p: np.ndarray, s: float) -> float:
        r = self._spline(s) - p
        return float(r @ r)

    def _refine(self, p: np.ndarray, s0: float) -> float:
        """Newton iteration on the squared-distance stationarity condition."""
        total = self.total_length
        tol = self._settings.tolerance
        s = s0
        for _ in range(self._settings.max_newton_iterations):
            r = self._spline(s) - p
            d1 = self._d1(s)
            gradient = float(r @ d1)
            hessian = float(d1 @ d1 + r @ self._d2(s))
            if hessian < _EPS:
                # Gauss-Newton step away from local maxima of the distance
                hessian = float(d1 @ d1)
            s_next = min(max(s - gradient / hessian, 0.0), total)
            if abs(s_next - s) < tol:
                s = s_next
                break
            s = s_next
        else:
            _logger.warning(
                "Projection of (%.3f, %.3f) did not converge within %d iterations",
                p[0],
                p[1],
                self._settings.max_newton_iterations,
            )

        if self._distance2(p, s) > self._distance2(p, s0):
            return s0
        return s
