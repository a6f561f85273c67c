"""Arc-length keyed lateral offsets: one boundary of a corridor."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator, Sequence


class FrenetPolyline:
    """Ordered ``(arc_length, lateral_offset)`` samples with linear interpolation.

    Samples are kept in the order given.  Callers are responsible for
    strictly increasing arc lengths; nothing is re-sorted or deduplicated.

    Args:
        points: Iterable of ``(arc_length, lateral_offset)`` pairs.

    Raises:
        ValueError: If *points* is empty.
    """

    def __init__(self, points: Iterable[tuple[float, float]]) -> None:
        samples = [(float(s), float(d)) for s, d in points]
        if not samples:
            raise ValueError("FrenetPolyline requires at least one sample")
        self._arc_lengths = [s for s, _ in samples]
        self._offsets = [d for _, d in samples]

    @classmethod
    def constant(cls, arc_lengths: Iterable[float], offset: float) -> FrenetPolyline:
        """Replicate *offset* at every arc length in *arc_lengths*."""
        return cls((s, offset) for s in arc_lengths)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def arc_lengths(self) -> Sequence[float]:
        return tuple(self._arc_lengths)

    @property
    def offsets(self) -> Sequence[float]:
        return tuple(self._offsets)

    def is_strictly_increasing(self) -> bool:
        """Return True if arc lengths strictly increase from sample to sample."""
        return all(a < b for a, b in zip(self._arc_lengths, self._arc_lengths[1:]))

    def deviation_at(self, arc_length: float) -> float:
        """Lateral offset at *arc_length*.

        Linear interpolation between the two bracketing samples.  Queries
        before the first or after the last sample return that edge sample's
        offset.
        """
        arcs = self._arc_lengths
        if arc_length <= arcs[0]:
            return self._offsets[0]
        if arc_length >= arcs[-1]:
            return self._offsets[-1]
        idx = bisect.bisect_right(arcs, arc_length)
        s0, s1 = arcs[idx - 1], arcs[idx]
        d0, d1 = self._offsets[idx - 1], self._offsets[idx]
        span = s1 - s0
        if span < 1e-12:
            return d0
        t = (arc_length - s0) / span
        return d0 + t * (d1 - d0)

    def __len__(self) -> int:
        return len(self._arc_lengths)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return zip(self._arc_lengths, self._offsets)
