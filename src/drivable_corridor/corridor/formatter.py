"""Plain-text debug rendering of corridors, boundaries and routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drivable_corridor.corridor.corridor import Corridor
    from drivable_corridor.corridor.path import CorridorPath, CorridorPaths
    from drivable_corridor.geometry.polyline import FrenetPolyline
    from drivable_corridor.geometry.reference_line import ReferenceLine


def format_reference_line(line: ReferenceLine) -> str:
    """``Reference-Line: (x, y) (x, y) ...`` over the knot points."""
    parts = ["Reference-Line:"]
    for x, y in line.points:
        parts.append(f"({x:.3f}, {y:.3f})")
    return " ".join(parts)


def format_polyline(polyline: FrenetPolyline) -> str:
    """``Frenet-Polyline: [s: d] [s: d] ...``"""
    parts = ["Frenet-Polyline:"]
    for s, d in polyline:
        parts.append(f"[{s:.3f}: {d:.3f}]")
    return " ".join(parts)


def format_corridor(corridor: Corridor) -> str:
    lines = [
        f"Corridor {corridor.id}",
        format_reference_line(corridor.reference_line),
        format_polyline(corridor.left_bound),
        format_polyline(corridor.right_bound),
    ]
    return "\n".join(lines) + "\n"


def format_path(path: CorridorPath) -> str:
    """``Corridor-Path: -> 1 -> 2 -> 3``"""
    chain = "".join(f" -> {corridor_id}" for corridor_id in path.ids())
    return f"Corridor-Path:{chain}\n"


def format_paths(paths: CorridorPaths) -> str:
    lines = ["--- Corridor-Paths ---\n"]
    for path in paths:
        lines.append(format_path(path) + "\n")
    return "".join(lines)
