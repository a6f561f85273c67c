"""Reference lines, boundary polylines and Frenet coordinates."""

from drivable_corridor.geometry.models import (
    FrenetFrame,
    FrenetPosition,
    FrenetPositionWithFrame,
)
from drivable_corridor.geometry.polyline import FrenetPolyline
from drivable_corridor.geometry.reference_line import ReferenceLine

__all__ = [
    "FrenetFrame",
    "FrenetPolyline",
    "FrenetPosition",
    "FrenetPositionWithFrame",
    "ReferenceLine",
]
