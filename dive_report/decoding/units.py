"""Unit conversion for raw FIT field values.

Every converter passes None through, so mappers can chain them on optional fields.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from dive_report.domain.models import Coordinates

SEMICIRCLE_DIVISOR = 2**31
DEGREES_PER_SEMICIRCLE = 180.0 / SEMICIRCLE_DIVISOR
FIT_EPOCH = dt.datetime(1989, 12, 31, tzinfo=dt.timezone.utc)
ALTITUDE_SCALE = 5.0
ALTITUDE_OFFSET = 500.0
MS_TO_KMH = 3.6


def semicircles_to_degrees(raw: Optional[int]) -> Optional[float]:
    if raw is None:
        return None
    return raw * DEGREES_PER_SEMICIRCLE


def degrees_to_semicircles(degrees: Optional[float]) -> Optional[int]:
    if degrees is None:
        return None
    return round(degrees / DEGREES_PER_SEMICIRCLE)


def coordinates(lat_raw: Optional[int], long_raw: Optional[int]) -> Optional[Coordinates]:
    """Combine a semicircle pair; a position needs both halves."""
    if lat_raw is None or long_raw is None:
        return None
    return Coordinates(
        latitude=semicircles_to_degrees(lat_raw),
        longitude=semicircles_to_degrees(long_raw),
    )


def scaled(raw: Optional[float], scale: float, offset: float = 0.0) -> Optional[float]:
    """Apply a FIT profile scale and offset: value = raw / scale - offset."""
    if raw is None:
        return None
    return raw / scale - offset


def centibar_to_bar(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, 100.0)


def millis_to_seconds(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, 1000.0)


def millimeters_to_meters(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, 1000.0)


def centimeters_to_meters(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, 100.0)


def centiliters_to_liters(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, 100.0)


def mm_per_second_to_kmh(raw: Optional[int]) -> Optional[float]:
    speed = scaled(raw, 1000.0)
    if speed is None:
        return None
    return speed * MS_TO_KMH


def altitude_from_raw(raw: Optional[int]) -> Optional[float]:
    return scaled(raw, ALTITUDE_SCALE, ALTITUDE_OFFSET)


def as_float(raw: Optional[float]) -> Optional[float]:
    if raw is None:
        return None
    return float(raw)


def as_int(raw: Optional[int]) -> Optional[int]:
    if raw is None:
        return None
    return int(raw)


def as_bool(raw: Optional[int]) -> Optional[bool]:
    if raw is None:
        return None
    return bool(raw)


def fit_timestamp_to_datetime(raw: Optional[int]) -> Optional[dt.datetime]:
    """Convert seconds since the FIT epoch (1989-12-31 UTC) to an aware datetime."""
    if raw is None:
        return None
    return FIT_EPOCH + dt.timedelta(seconds=int(raw))


def format_duration(seconds: float) -> str:
    """Render a duration as HH:MM:SS, truncating fractional seconds."""
    if seconds < 0:
        raise ValueError(f"Duration must not be negative: {seconds}")
    whole = int(seconds)
    hours, remainder = divmod(whole, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
