"""Geofence classification: on-site vs remote by great-circle distance."""

from __future__ import annotations

import math

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_KM, EARTH_RADIUS_KM
from ..core.enums import WorkMode
from .model import Coordinate


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance between two points using the Haversine formula."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def classify(
    lat: float,
    lon: float,
    office_lat: float,
    office_lon: float,
    radius_km: float = DEFAULT_GEOFENCE_RADIUS_KM,
) -> WorkMode:
    """ON_SITE iff the point lies within radius_km of the office (boundary inclusive).

    NaN inputs compare false against the radius and therefore come out REMOTE;
    callers validate coordinates before classifying.
    """
    distance = haversine_km(lat, lon, office_lat, office_lon)
    if distance <= radius_km:
        return WorkMode.ON_SITE
    return WorkMode.REMOTE


def classify_point(point: Coordinate, office: Coordinate, radius_km: float) -> WorkMode:
    return classify(point.lat, point.lon, office.lat, office.lon, radius_km)
