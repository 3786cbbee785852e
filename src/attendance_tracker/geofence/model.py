from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """Geographic point (decimal degrees)."""

    lat: float
    lon: float
