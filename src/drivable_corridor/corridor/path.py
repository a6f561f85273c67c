"""Corridor traversal orders, used for route enumeration and diagnostics."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from drivable_corridor.corridor.corridor import Corridor
from drivable_corridor.corridor.formatter import format_path, format_paths


@dataclass
class CorridorPath:
    """One traversal through a road graph as an ordered list of corridors.

    Corridors are shared references; the same :class:`Corridor` may appear in
    several paths.
    """

    corridors: list[Corridor] = field(default_factory=list)

    def append(self, corridor: Corridor) -> None:
        self.corridors.append(corridor)

    def ids(self) -> list[int]:
        """Corridor identifiers in traversal order."""
        return [c.id for c in self.corridors]

    def __len__(self) -> int:
        return len(self.corridors)

    def __iter__(self) -> Iterator[Corridor]:
        return iter(self.corridors)

    def __str__(self) -> str:
        return format_path(self)


@dataclass
class CorridorPaths:
    """Alternative traversals, e.g. every route between two road-graph nodes."""

    paths: list[CorridorPath] = field(default_factory=list)

    def append(self, path: CorridorPath) -> None:
        self.paths.append(path)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[CorridorPath]:
        return iter(self.paths)

    def __str__(self) -> str:
        return format_paths(self)
