"""Domain models for dive reports."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from dive_report.domain.categories import (
    Event,
    EventType,
    FileType,
    GasMode,
    GasStatus,
    Manufacturer,
    Sport,
    SubSport,
    WaterType,
)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Session:
    start_time: Optional[dt.datetime] = None
    timestamp: Optional[dt.datetime] = None
    start_coordinates: Optional[Coordinates] = None
    end_coordinates: Optional[Coordinates] = None
    min_temperature: Optional[float] = None
    avg_temperature: Optional[float] = None
    max_temperature: Optional[float] = None
    total_elapsed_time: Optional[float] = None
    total_timer_time: Optional[float] = None
    total_moving_time: Optional[float] = None
    max_depth: Optional[float] = None
    dive_number: Optional[int] = None
    sport: Optional[Sport] = None
    sub_sport: Optional[SubSport] = None
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None
    total_distance: Optional[float] = None
    num_laps: Optional[int] = None


@dataclass(frozen=True)
class Summary:
    timestamp: Optional[dt.datetime] = None
    dive_number: Optional[int] = None
    max_depth: Optional[float] = None
    avg_depth: Optional[float] = None
    surface_interval: Optional[int] = None
    descent_time: Optional[float] = None
    ascent_time: Optional[float] = None
    bottom_time: Optional[float] = None


@dataclass(frozen=True)
class Settings:
    water_type: Optional[WaterType] = None
    water_density: Optional[float] = None
    gf_low: Optional[int] = None
    gf_high: Optional[int] = None
    po2_warn: Optional[float] = None
    po2_critical: Optional[float] = None
    safety_stop_enabled: Optional[bool] = None
    bottom_depth: Optional[float] = None


@dataclass(frozen=True)
class Lap:
    timestamp: Optional[dt.datetime] = None
    start_time: Optional[dt.datetime] = None
    start_coordinates: Optional[Coordinates] = None
    end_coordinates: Optional[Coordinates] = None
    total_elapsed_time: Optional[float] = None
    total_timer_time: Optional[float] = None
    total_distance: Optional[float] = None
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None
    min_altitude: Optional[float] = None
    max_altitude: Optional[float] = None
    avg_depth: Optional[float] = None
    max_depth: Optional[float] = None
    synthesized: bool = False


@dataclass(frozen=True)
class SamplePoint:
    timestamp: Optional[dt.datetime] = None
    coordinates: Optional[Coordinates] = None
    depth: Optional[float] = None
    temperature: Optional[float] = None
    heart_rate: Optional[int] = None
    n2_load: Optional[int] = None
    cns_load: Optional[int] = None
    next_stop_depth: Optional[float] = None
    next_stop_time: Optional[int] = None
    time_to_surface: Optional[int] = None
    ndl_time: Optional[int] = None
    absolute_pressure: Optional[int] = None
    altitude: Optional[float] = None


@dataclass(frozen=True)
class Alert:
    event: Event
    event_type: EventType
    timestamp: Optional[dt.datetime] = None
    data: Optional[int] = None
    interpreted_data: Optional[str] = None


@dataclass(frozen=True)
class Gas:
    index: Optional[int] = None
    helium_content: Optional[int] = None
    oxygen_content: Optional[int] = None
    status: Optional[GasStatus] = None
    mode: Optional[GasMode] = None


@dataclass(frozen=True)
class TankSummary:
    timestamp: Optional[dt.datetime] = None
    sensor: Optional[int] = None
    start_pressure: Optional[float] = None
    end_pressure: Optional[float] = None
    volume_used: Optional[float] = None


@dataclass(frozen=True)
class TankUpdate:
    timestamp: Optional[dt.datetime] = None
    sensor: Optional[int] = None
    pressure: Optional[float] = None


@dataclass(frozen=True)
class FileIdentity:
    file_type: Optional[FileType] = None
    manufacturer: Optional[Manufacturer] = None
    product: Optional[int] = None
    serial_number: Optional[int] = None
    time_created: Optional[dt.datetime] = None


@dataclass(frozen=True)
class DeviceInfo:
    timestamp: Optional[dt.datetime] = None
    device_index: Optional[int] = None
    manufacturer: Optional[Manufacturer] = None
    product: Optional[int] = None
    serial_number: Optional[int] = None
    software_version: Optional[float] = None
    battery_voltage: Optional[float] = None
    product_name: Optional[str] = None


@dataclass(frozen=True)
class DiveReport:
    """Everything extracted from one dive file.

    ``session`` is always present and ``laps`` always holds at least one lap.
    """

    session: Session
    laps: tuple[Lap, ...]
    summary: Optional[Summary] = None
    settings: Optional[Settings] = None
    file_identity: Optional[FileIdentity] = None
    samples: tuple[SamplePoint, ...] = ()
    alerts: tuple[Alert, ...] = ()
    gases: tuple[Gas, ...] = ()
    tank_summaries: tuple[TankSummary, ...] = ()
    tank_updates: tuple[TankUpdate, ...] = ()
    devices: tuple[DeviceInfo, ...] = ()

    def __post_init__(self) -> None:
        if not self.laps:
            raise ValueError("DiveReport requires at least one lap")
