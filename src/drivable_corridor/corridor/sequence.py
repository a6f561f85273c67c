"""Chained corridors addressed by one global arc length.

Each corridor keeps its own local arc length ``[0, length]``.  An entry
starting at global arc length ``key`` owns the global range
``[key, next_key)``; the last entry owns everything from its key onwards.

Cartesian points are attributed to a corridor by a hand-off walk:

1. Project the point into the corridor owning the start arc length.
2. While the local ``s`` is negative and a predecessor exists, move to the
   predecessor and project again.
3. Otherwise, while ``s`` exceeds the corridor length and a successor
   exists, move to the successor and project again.

The walk never reverses direction, so it visits each corridor at most once.
Results that are still out of range at either end of the sequence are
returned as they are (extrapolated).
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from numpy.typing import ArrayLike

from drivable_corridor.corridor.corridor import Corridor
from drivable_corridor.corridor.path import CorridorPath
from drivable_corridor.geometry.models import FrenetPositionWithFrame

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceProjection:
    """A point resolved against a :class:`CorridorSequence`."""

    start_arc_length: float
    """Global arc length at which the owning corridor starts."""

    corridor: Corridor
    """The corridor the point was attributed to."""

    local: FrenetPositionWithFrame
    """Projection in the owning corridor's local Frenet frame."""

    @property
    def global_s(self) -> float:
        """Longitudinal position along the whole sequence."""
        return self.start_arc_length + self.local.position.s


class CorridorSequence:
    """Ordered corridors keyed by cumulative start arc length.

    Corridors are held by reference and may be shared with other sequences
    or paths.

    Args:
        corridors: Corridors to :meth:`append` in order.
    """

    def __init__(self, corridors: Iterable[Corridor] = ()) -> None:
        self._starts: list[float] = []
        self._corridors: list[Corridor] = []
        for corridor in corridors:
            self.append(corridor)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def insert(self, start_arc_length: float, corridor: Corridor) -> None:
        """Place *corridor* so that it starts at *start_arc_length*.

        Raises:
            ValueError: If another corridor already starts there.
        """
        start = float(start_arc_length)
        idx = bisect.bisect_left(self._starts, start)
        if idx < len(self._starts) and self._starts[idx] == start:
            raise ValueError(f"A corridor already starts at arc length {start}")
        self._starts.insert(idx, start)
        self._corridors.insert(idx, corridor)

    def append(self, corridor: Corridor) -> None:
        """Add *corridor* directly after the current last corridor."""
        start = self.total_length() if self._corridors else 0.0
        self.insert(start, corridor)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._corridors)

    def __iter__(self) -> Iterator[tuple[float, Corridor]]:
        return zip(self._starts, self._corridors)

    def start_arc_lengths(self) -> list[float]:
        return list(self._starts)

    def corridors(self) -> list[Corridor]:
        return list(self._corridors)

    def to_path(self) -> CorridorPath:
        """The sequence's corridors as a :class:`CorridorPath`."""
        return CorridorPath(list(self._corridors))

    # ------------------------------------------------------------------
    # Arc-length queries
    # ------------------------------------------------------------------

    def _index_at(self, arc_length: float) -> int:
        """Index of the entry with the greatest start <= *arc_length*.

        Arc lengths before the first start resolve to the first entry.
        """
        if not self._corridors:
            raise ValueError("CorridorSequence is empty")
        return max(bisect.bisect_right(self._starts, arc_length) - 1, 0)

    def lookup(self, arc_length: float) -> tuple[Corridor, float]:
        """Return ``(corridor, local_arc_length)`` for a global arc length.

        Raises:
            ValueError: If the sequence is empty.
        """
        idx = self._index_at(arc_length)
        return self._corridors[idx], arc_length - self._starts[idx]

    def signed_distances_at(self, arc_length: float) -> tuple[float, float]:
        corridor, local = self.lookup(arc_length)
        return corridor.signed_distances_at(local)

    def width_at(self, arc_length: float) -> float:
        corridor, local = self.lookup(arc_length)
        return corridor.width_at(local)

    def center_offset_at(self, arc_length: float) -> float:
        corridor, local = self.lookup(arc_length)
        return corridor.center_offset(local)

    def curvature_at(self, arc_length: float) -> float:
        corridor, local = self.lookup(arc_length)
        return corridor.curvature_at(local)

    def total_length(self) -> float:
        """Start of the last corridor plus its reference-line length.

        Raises:
            ValueError: If the sequence is empty.
        """
        if not self._corridors:
            raise ValueError("CorridorSequence is empty")
        return self._starts[-1] + self._corridors[-1].length_reference_line()

    # ------------------------------------------------------------------
    # Cartesian queries
    # ------------------------------------------------------------------

    def frenet_position_with_frame(
        self,
        position: ArrayLike,
        start_arc_length: float,
    ) -> FrenetPositionWithFrame:
        """Project *position* into the corridor that owns it.

        Args:
            position: Cartesian ``(x, y)``.
            start_arc_length: Global arc length where the search starts,
                e.g. the last known position of a vehicle along the route.

        Returns:
            The projection in the owning corridor's local frame.  See
            :meth:`locate` for the owning corridor and global arc length.
        """
        return self.locate(position, start_arc_length).local

    def locate(self, position: ArrayLike, start_arc_length: float) -> SequenceProjection:
        """Attribute *position* to a corridor by the hand-off walk.

        Raises:
            ValueError: If the sequence is empty.
        """
        idx = self._index_at(start_arc_length)
        last = len(self._corridors) - 1
        result = self._corridors[idx].frenet_position_with_frame(position)
        direction = 0

        while True:
            s = result.position.s
            length = self._corridors[idx].length_reference_line()
            if s < 0.0 and idx > 0 and direction <= 0:
                direction = -1
            elif s > length and idx < last and direction >= 0:
                direction = 1
            else:
                break
            _logger.debug(
                "Hand-off from corridor %s (s=%.3f) to corridor %s",
                self._corridors[idx].id,
                s,
                self._corridors[idx + direction].id,
            )
            idx += direction
            result = self._corridors[idx].frenet_position_with_frame(position)

        s = result.position.s
        if s < 0.0 or s > self._corridors[idx].length_reference_line():
            _logger.debug(
                "Point resolved outside corridor %s (s=%.3f, length=%.3f); extrapolating",
                self._corridors[idx].id,
                s,
                self._corridors[idx].length_reference_line(),
            )

        return SequenceProjection(
            start_arc_length=self._starts[idx],
            corridor=self._corridors[idx],
            local=result,
        )
