"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def wrap(value: float, size: float) -> float:
    """Wrap a coordinate onto [0, size)"""
    wrapped = value % size
    # -1e-20 % 800 rounds to 800.0
    if wrapped >= size:
        wrapped = 0.0
    return wrapped


def toroidal_delta(a: float, b: float, size: float) -> float:
    """Shortest signed offset from a to b on a wrapped axis"""
    d = b - a
    if abs(d) > size / 2:
        d -= math.copysign(size, d)
    return d


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def circles_overlap(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching does not count)"""
    return distance(x1, y1, x2, y2) < r1 + r2
