"""A single corridor: reference line plus left and right boundaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from drivable_corridor.config import ProjectionSettings
from drivable_corridor.corridor.formatter import format_corridor
from drivable_corridor.geometry.models import FrenetFrame, FrenetPositionWithFrame
from drivable_corridor.geometry.polyline import FrenetPolyline
from drivable_corridor.geometry.reference_line import ReferenceLine

_logger = logging.getLogger(__name__)


@dataclass
class CartesianPolylines:
    """Resampled corridor geometry; all three arrays have shape ``(N, 2)``."""

    reference: np.ndarray
    left: np.ndarray
    right: np.ndarray


class Corridor:
    """Drivable region around a reference line.

    Left offsets are positive (left of the direction of travel), right
    offsets negative; the sign carries the side.  Boundaries must not cross;
    this is not checked.

    Args:
        corridor_id: Identifier used in diagnostics.
        reference_line: The corridor's reference line.
        left_bound: Left boundary offsets over the reference line's arc length.
        right_bound: Right boundary offsets over the reference line's arc length.
    """

    def __init__(
        self,
        corridor_id: int,
        reference_line: ReferenceLine,
        left_bound: FrenetPolyline,
        right_bound: FrenetPolyline,
    ) -> None:
        self._id = corridor_id
        self._reference_line = reference_line
        self._left_bound = left_bound
        self._right_bound = right_bound

    @classmethod
    def with_constant_width(
        cls,
        corridor_id: int,
        reference_points: ArrayLike,
        left_distance: float,
        right_distance: float,
        first_tangent: ArrayLike | None = None,
        last_tangent: ArrayLike | None = None,
        settings: ProjectionSettings | None = None,
    ) -> Corridor:
        """Corridor with boundaries at fixed distances from the reference line.

        Both distances are magnitudes; the right one is stored negated.
        """
        line = ReferenceLine(reference_points, first_tangent, last_tangent, settings)
        return cls(
            corridor_id,
            line,
            FrenetPolyline.constant(line.arc_lengths, left_distance),
            FrenetPolyline.constant(line.arc_lengths, -right_distance),
        )

    @classmethod
    def from_boundaries(
        cls,
        corridor_id: int,
        reference_points: ArrayLike,
        left_points: ArrayLike,
        right_points: ArrayLike,
        first_tangent: ArrayLike | None = None,
        last_tangent: ArrayLike | None = None,
        settings: ProjectionSettings | None = None,
    ) -> Corridor:
        """Corridor whose boundaries are Cartesian polylines.

        Each boundary point is projected onto the reference line.  The
        projected arc lengths are expected to increase along each boundary;
        a warning is logged when they do not.
        """
        line = ReferenceLine(reference_points, first_tangent, last_tangent, settings)
        left = line.to_frenet_polyline(left_points)
        right = line.to_frenet_polyline(right_points)
        for side, bound in (("left", left), ("right", right)):
            if not bound.is_strictly_increasing():
                _logger.warning(
                    "Corridor %s: %s boundary arc lengths are not strictly increasing",
                    corridor_id,
                    side,
                )
        return cls(corridor_id, line, left, right)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    @property
    def reference_line(self) -> ReferenceLine:
        return self._reference_line

    @property
    def left_bound(self) -> FrenetPolyline:
        return self._left_bound

    @property
    def right_bound(self) -> FrenetPolyline:
        return self._right_bound

    # ------------------------------------------------------------------
    # Arc-length queries
    # ------------------------------------------------------------------

    def signed_distances_at(self, arc_length: float) -> tuple[float, float]:
        """Return ``(left, right)`` boundary offsets; right is normally <= 0."""
        return (
            self._left_bound.deviation_at(arc_length),
            self._right_bound.deviation_at(arc_length),
        )

    def width_at(self, arc_length: float) -> float:
        left, right = self.signed_distances_at(arc_length)
        return left + abs(right)

    def center_offset(self, arc_length: float) -> float:
        """Lateral offset of the corridor's geometric centerline from the reference line."""
        left, right = self.signed_distances_at(arc_length)
        return (left + right) * 0.5

    def curvature_at(self, arc_length: float) -> float:
        return self._reference_line.curvature_at(arc_length)

    def length_reference_line(self) -> float:
        return self._reference_line.total_length

    # ------------------------------------------------------------------
    # Cartesian queries
    # ------------------------------------------------------------------

    def frenet_frame(self, position: ArrayLike) -> FrenetFrame:
        """Frame at the nearest point of the reference line to *position*."""
        return self._reference_line.frenet_position_with_frame(position).frame

    def frenet_position_with_frame(
        self,
        position: ArrayLike,
        arc_length_hint: float | None = None,
    ) -> FrenetPositionWithFrame:
        """Project *position* onto the reference line.

        *arc_length_hint* (local arc length) narrows the search, e.g. to the
        previous position of a moving agent.
        """
        return self._reference_line.frenet_position_with_frame(position, arc_length_hint)

    def sample_cartesian_polylines(self, step: float) -> CartesianPolylines:
        """Resample reference line and both boundaries every *step* metres.

        Samples are taken at ``0, step, 2*step, ...`` up to the total length;
        the exact endpoint is always included as the last sample.

        Raises:
            ValueError: If *step* is not positive.
        """
        if step <= 0.0:
            raise ValueError(f"step must be > 0, got {step}")

        max_length = self.length_reference_line()
        count = int(np.floor(max_length / step)) + 1
        arc_lengths = [i * step for i in range(count) if i * step <= max_length]
        if arc_lengths[-1] < max_length:
            arc_lengths.append(max_length)

        line = self._reference_line
        reference: list[np.ndarray] = []
        left: list[np.ndarray] = []
        right: list[np.ndarray] = []
        for s in arc_lengths:
            position = line.position_at(s)
            normal = line.normal_at(s)
            d_left, d_right = self.signed_distances_at(s)
            reference.append(position)
            left.append(position + d_left * normal)
            right.append(position + d_right * normal)

        return CartesianPolylines(
            reference=np.array(reference),
            left=np.array(left),
            right=np.array(right),
        )

    def __str__(self) -> str:
        return format_corridor(self)
