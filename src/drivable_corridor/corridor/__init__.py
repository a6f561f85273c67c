"""Corridors, corridor sequences and corridor paths."""

from drivable_corridor.corridor.corridor import CartesianPolylines, Corridor
from drivable_corridor.corridor.path import CorridorPath, CorridorPaths
from drivable_corridor.corridor.sequence import CorridorSequence, SequenceProjection

__all__ = [
    "CartesianPolylines",
    "Corridor",
    "CorridorPath",
    "CorridorPaths",
    "CorridorSequence",
    "SequenceProjection",
]
