"""Tests for CorridorPath / CorridorPaths and their debug text."""

from __future__ import annotations

from drivable_corridor.corridor.path import CorridorPath, CorridorPaths


def test_path_ids_in_order(corridor_a, corridor_b, corridor_c):
    path = CorridorPath([corridor_c, corridor_a, corridor_b])
    assert path.ids() == [3, 1, 2]
    assert len(path) == 3
    assert list(path) == [corridor_c, corridor_a, corridor_b]


def test_append(corridor_a, corridor_b):
    path = CorridorPath()
    path.append(corridor_a)
    path.append(corridor_b)
    assert path.ids() == [1, 2]


def test_path_str(corridor_a, corridor_b, corridor_c):
    path = CorridorPath([corridor_a, corridor_b, corridor_c])
    assert str(path) == "Corridor-Path: -> 1 -> 2 -> 3\n"


def test_empty_path_str():
    assert str(CorridorPath()) == "Corridor-Path:\n"


def test_paths_str(corridor_a, corridor_b, corridor_c):
    """Alternative routes sharing their first corridor."""
    paths = CorridorPaths()
    paths.append(CorridorPath([corridor_a, corridor_b]))
    paths.append(CorridorPath([corridor_a, corridor_c]))
    assert len(paths) == 2
    assert str(paths) == (
        "--- Corridor-Paths ---\n"
        "Corridor-Path: -> 1 -> 2\n"
        "\n"
        "Corridor-Path: -> 1 -> 3\n"
        "\n"
    )
    first, second = paths
    assert first.corridors[0] is second.corridors[0]
