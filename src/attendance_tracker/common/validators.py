from __future__ import annotations

import math
from datetime import date

from ..core.exceptions import ValidationError


def require_coordinate(lat: float, lon: float) -> tuple[float, float]:
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError):
        raise ValidationError("Coordinates must be numeric")
    if math.isnan(lat_f) or math.isnan(lon_f):
        raise ValidationError("Coordinates must not be NaN")
    if not -90.0 <= lat_f <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= lon_f <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lat_f, lon_f


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must not be before start date")
