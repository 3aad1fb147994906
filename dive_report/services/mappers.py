"""Map decoded FIT messages onto domain records.

Mappers never fail as a whole. Each field is read independently and a value that cannot
be converted is logged and left absent.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Iterable, Optional

from dive_report.decoding.fields import RawMessage, field_value, first_valid
from dive_report.decoding.units import (
    altitude_from_raw,
    as_bool,
    as_float,
    as_int,
    centibar_to_bar,
    centiliters_to_liters,
    centimeters_to_meters,
    coordinates,
    fit_timestamp_to_datetime,
    millimeters_to_meters,
    millis_to_seconds,
    mm_per_second_to_kmh,
    scaled,
)
from dive_report.domain.categories import (
    decode_event,
    decode_event_type,
    decode_file_type,
    decode_gas_mode,
    decode_gas_status,
    decode_manufacturer,
    decode_sport,
    decode_sub_sport,
    decode_water_type,
)
from dive_report.domain.models import (
    Alert,
    Coordinates,
    DeviceInfo,
    FileIdentity,
    Gas,
    Lap,
    SamplePoint,
    Session,
    Settings,
    Summary,
    TankSummary,
    TankUpdate,
)
from dive_report.services.alerts import interpret_event_data

LOGGER = logging.getLogger(__name__)

_CONVERSION_ERRORS = (TypeError, ValueError, OverflowError)


def _read(message: RawMessage, name: str, convert: Callable[[Any], Any] = as_float) -> Any:
    raw = field_value(message, name)
    if raw is None:
        return None
    try:
        return convert(raw)
    except _CONVERSION_ERRORS as exc:
        LOGGER.debug("Dropping %s.%s=%r: %s", message.kind, name, raw, exc)
        return None


def _read_any(message: RawMessage, names: tuple[str, ...], convert: Callable[[Any], Any]) -> Any:
    raw = first_valid(message, *names)
    if raw is None:
        return None
    try:
        return convert(raw)
    except _CONVERSION_ERRORS as exc:
        LOGGER.debug("Dropping %s.%s=%r: %s", message.kind, "/".join(names), raw, exc)
        return None


def _position(message: RawMessage, lat_name: str, long_name: str) -> Optional[Coordinates]:
    try:
        return coordinates(field_value(message, lat_name), field_value(message, long_name))
    except _CONVERSION_ERRORS as exc:
        LOGGER.debug("Dropping %s.%s/%s: %s", message.kind, lat_name, long_name, exc)
        return None


def _timestamp(message: RawMessage, name: str = "timestamp") -> Optional[dt.datetime]:
    return _read(message, name, fit_timestamp_to_datetime)


def map_session(message: RawMessage) -> Session:
    return Session(
        start_time=_timestamp(message, "start_time"),
        timestamp=_timestamp(message),
        start_coordinates=_position(message, "start_position_lat", "start_position_long"),
        end_coordinates=_position(message, "end_position_lat", "end_position_long"),
        min_temperature=_read(message, "min_temperature"),
        avg_temperature=_read(message, "avg_temperature"),
        max_temperature=_read(message, "max_temperature"),
        total_elapsed_time=_read(message, "total_elapsed_time", millis_to_seconds),
        total_timer_time=_read(message, "total_timer_time", millis_to_seconds),
        total_moving_time=_read(message, "total_moving_time", millis_to_seconds),
        max_depth=_read(message, "max_depth", millimeters_to_meters),
        dive_number=_read(message, "dive_number", as_int),
        sport=_read(message, "sport", decode_sport),
        sub_sport=_read(message, "sub_sport", decode_sub_sport),
        avg_speed=_read_any(message, ("enhanced_avg_speed", "avg_speed"), mm_per_second_to_kmh),
        max_speed=_read_any(message, ("enhanced_max_speed", "max_speed"), mm_per_second_to_kmh),
        total_distance=_read(message, "total_distance", centimeters_to_meters),
        num_laps=_read(message, "num_laps", as_int),
    )


def map_summary(message: RawMessage, session: Optional[RawMessage] = None) -> Summary:
    """Map a dive summary message.

    Bottom time falls back to the session's total elapsed time when the summary
    does not record it.
    """
    bottom_time = _read(message, "bottom_time", millis_to_seconds)
    if bottom_time is None and session is not None:
        bottom_time = _read(session, "total_elapsed_time", millis_to_seconds)

    return Summary(
        timestamp=_timestamp(message),
        dive_number=_read(message, "dive_number", as_int),
        max_depth=_read(message, "max_depth", millimeters_to_meters),
        avg_depth=_read(message, "avg_depth", millimeters_to_meters),
        surface_interval=_read(message, "surface_interval", as_int),
        descent_time=_read(message, "descent_time", millis_to_seconds),
        ascent_time=_read(message, "ascent_time", millis_to_seconds),
        bottom_time=bottom_time,
    )


def map_settings(message: RawMessage) -> Settings:
    # PO2 thresholds are stored in centibar and reported in bar.
    return Settings(
        water_type=_read(message, "water_type", decode_water_type),
        water_density=_read(message, "water_density"),
        gf_low=_read(message, "gf_low", as_int),
        gf_high=_read(message, "gf_high", as_int),
        po2_warn=_read(message, "po2_warn", centibar_to_bar),
        po2_critical=_read(message, "po2_critical", centibar_to_bar),
        safety_stop_enabled=_read(message, "safety_stop_enabled", as_bool),
        bottom_depth=_read(message, "bottom_depth"),
    )


def map_lap(message: RawMessage) -> Lap:
    return Lap(
        timestamp=_timestamp(message),
        start_time=_timestamp(message, "start_time"),
        start_coordinates=_position(message, "start_position_lat", "start_position_long"),
        end_coordinates=_position(message, "end_position_lat", "end_position_long"),
        total_elapsed_time=_read(message, "total_elapsed_time", millis_to_seconds),
        total_timer_time=_read(message, "total_timer_time", millis_to_seconds),
        total_distance=_read(message, "total_distance", centimeters_to_meters),
        avg_speed=_read_any(message, ("enhanced_avg_speed", "avg_speed"), mm_per_second_to_kmh),
        max_speed=_read_any(message, ("enhanced_max_speed", "max_speed"), mm_per_second_to_kmh),
        min_altitude=_read_any(message, ("enhanced_min_altitude", "min_altitude"), altitude_from_raw),
        max_altitude=_read_any(message, ("enhanced_max_altitude", "max_altitude"), altitude_from_raw),
        avg_depth=_read(message, "avg_depth", millimeters_to_meters),
        max_depth=_read(message, "max_depth", millimeters_to_meters),
    )


def map_laps(messages: Iterable[RawMessage]) -> tuple[Lap, ...]:
    return tuple(map_lap(message) for message in messages)


def map_sample(message: RawMessage) -> SamplePoint:
    return SamplePoint(
        timestamp=_timestamp(message),
        coordinates=_position(message, "position_lat", "position_long"),
        depth=_read(message, "depth", millimeters_to_meters),
        temperature=_read(message, "temperature"),
        heart_rate=_read(message, "heart_rate", as_int),
        n2_load=_read(message, "n2_load", as_int),
        cns_load=_read(message, "cns_load", as_int),
        next_stop_depth=_read(message, "next_stop_depth", millimeters_to_meters),
        next_stop_time=_read(message, "next_stop_time", as_int),
        time_to_surface=_read(message, "time_to_surface", as_int),
        ndl_time=_read(message, "ndl_time", as_int),
        absolute_pressure=_read(message, "absolute_pressure", as_int),
        altitude=_read_any(message, ("enhanced_altitude", "altitude"), altitude_from_raw),
    )


def map_samples(messages: Iterable[RawMessage]) -> tuple[SamplePoint, ...]:
    return tuple(map_sample(message) for message in messages)


def map_alert(message: RawMessage) -> Optional[Alert]:
    """Map an event message, or return None when its category or sub-type is missing."""
    event = _read(message, "event", decode_event)
    event_type = _read(message, "event_type", decode_event_type)
    if event is None or event_type is None:
        LOGGER.debug("Skipping event without category/sub-type: %r", message)
        return None

    data = _read(message, "data", as_int)
    return Alert(
        event=event,
        event_type=event_type,
        timestamp=_timestamp(message),
        data=data,
        interpreted_data=interpret_event_data(event, data),
    )


def map_alerts(messages: Iterable[RawMessage]) -> tuple[Alert, ...]:
    alerts = (map_alert(message) for message in messages)
    return tuple(alert for alert in alerts if alert is not None)


def map_gas(message: RawMessage) -> Gas:
    return Gas(
        index=_read(message, "message_index", as_int),
        helium_content=_read(message, "helium_content", as_int),
        oxygen_content=_read(message, "oxygen_content", as_int),
        status=_read(message, "status", decode_gas_status),
        mode=_read(message, "mode", decode_gas_mode),
    )


def map_gases(messages: Iterable[RawMessage]) -> tuple[Gas, ...]:
    return tuple(map_gas(message) for message in messages)


def map_tank_summaries(messages: Iterable[RawMessage]) -> tuple[TankSummary, ...]:
    return tuple(
        TankSummary(
            timestamp=_timestamp(message),
            sensor=_read(message, "sensor", as_int),
            start_pressure=_read(message, "start_pressure", centibar_to_bar),
            end_pressure=_read(message, "end_pressure", centibar_to_bar),
            volume_used=_read(message, "volume_used", centiliters_to_liters),
        )
        for message in messages
    )


def map_tank_updates(messages: Iterable[RawMessage]) -> tuple[TankUpdate, ...]:
    return tuple(
        TankUpdate(
            timestamp=_timestamp(message),
            sensor=_read(message, "sensor", as_int),
            pressure=_read(message, "pressure", centibar_to_bar),
        )
        for message in messages
    )


def map_file_identity(message: RawMessage) -> FileIdentity:
    return FileIdentity(
        file_type=_read(message, "type", decode_file_type),
        manufacturer=_read(message, "manufacturer", decode_manufacturer),
        product=_read(message, "product", as_int),
        serial_number=_read(message, "serial_number", as_int),
        time_created=_timestamp(message, "time_created"),
    )


def map_devices(messages: Iterable[RawMessage]) -> tuple[DeviceInfo, ...]:
    return tuple(
        DeviceInfo(
            timestamp=_timestamp(message),
            device_index=_read(message, "device_index", as_int),
            manufacturer=_read(message, "manufacturer", decode_manufacturer),
            product=_read(message, "product", as_int),
            serial_number=_read(message, "serial_number", as_int),
            software_version=_read(message, "software_version", lambda raw: scaled(raw, 100.0)),
            battery_voltage=_read(message, "battery_voltage", lambda raw: scaled(raw, 256.0)),
            product_name=_read(message, "product_name", str),
        )
        for message in messages
    )
