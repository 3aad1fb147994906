from __future__ import annotations

import datetime as dt

import pytest

from conftest import DIVE_START_RAW, make_message
from dive_report.decoding.fields import DecodedMessages, FitMessage, field_value
from dive_report.decoding.units import degrees_to_semicircles
from dive_report.domain.categories import Event, EventType, GasMode, GasStatus
from dive_report.services.mappers import (
    map_alerts,
    map_devices,
    map_file_identity,
    map_gases,
    map_laps,
    map_samples,
    map_session,
    map_settings,
    map_summary,
    map_tank_summaries,
    map_tank_updates,
)

pytestmark = pytest.mark.mappers


def test_field_value_treats_missing_and_sentinels_as_absent() -> None:
    message = make_message("record", depth=1000, heart_rate=None, cns=[None, None], n2=[None, 3])
    assert field_value(message, "depth") == 1000
    assert field_value(message, "heart_rate") is None
    assert field_value(message, "cns") is None
    assert field_value(message, "n2") == [None, 3]
    assert field_value(message, "no_such_field") is None
    assert field_value(None, "depth") is None


def test_decoded_messages_from_sdk_mapping() -> None:
    decoded = DecodedMessages.from_sdk_messages(
        {"session_mesgs": [{"max_depth": 1}], "record_mesgs": [{}, {}], "unknown_mesgs": [{}]}
    )
    assert decoded.counts()["session"] == 1
    assert decoded.counts()["record"] == 2
    assert decoded.lap == ()
    assert decoded.first("lap") is None
    assert isinstance(decoded.first("session"), FitMessage)


def test_map_session(session_message: FitMessage, dive_start: dt.datetime) -> None:
    session = map_session(session_message)
    assert session.start_time == dive_start
    assert isinstance(session.start_time, dt.datetime)
    assert session.max_depth == 18.0
    assert (session.min_temperature, session.avg_temperature, session.max_temperature) == (26.0, 27.0, 32.0)
    assert session.total_elapsed_time == 3480.0
    assert session.dive_number == 1
    assert session.sport.label == "Diving"
    assert session.sub_sport.label == "Single Gas Diving"
    assert session.start_coordinates is None
    assert session.avg_speed is None


def test_map_session_prefers_enhanced_speed_and_keeps_fractional_durations() -> None:
    session = map_session(
        make_message("session", avg_speed=500, enhanced_avg_speed=1000, total_moving_time=1234567)
    )
    assert session.avg_speed == pytest.approx(3.6)
    assert session.total_moving_time == 1234.567


def test_map_session_degrades_bad_field_only() -> None:
    session = map_session(make_message("session", max_depth="deep", dive_number=4))
    assert session.max_depth is None
    assert session.dive_number == 4


def test_map_session_coordinates() -> None:
    session = map_session(
        make_message(
            "session",
            start_position_lat=degrees_to_semicircles(21.5),
            start_position_long=degrees_to_semicircles(-158.25),
            end_position_lat=degrees_to_semicircles(21.5),
        )
    )
    assert session.start_coordinates.latitude == pytest.approx(21.5)
    assert session.start_coordinates.longitude == pytest.approx(-158.25)
    assert session.end_coordinates is None


def test_map_summary_bottom_time_fallback(session_message: FitMessage) -> None:
    summary = map_summary(make_message("dive_summary", surface_interval=4680, max_depth=18000), session_message)
    assert summary.surface_interval == 4680
    assert summary.max_depth == 18.0
    assert summary.bottom_time == 3480.0
    assert summary.avg_depth is None

    recorded = map_summary(make_message("dive_summary", bottom_time=1500500, descent_time=120000), session_message)
    assert recorded.bottom_time == 1500.5
    assert recorded.descent_time == 120.0


def test_map_settings_scales_po2_to_bar() -> None:
    settings = map_settings(
        make_message(
            "dive_settings",
            water_type=1,
            water_density=1025.0,
            gf_low=30,
            gf_high=70,
            po2_warn=140,
            po2_critical=160,
            safety_stop_enabled=1,
            bottom_depth=12.5,
        )
    )
    assert settings.water_type.label == "Salt"
    assert settings.water_density == 1025.0
    assert (settings.gf_low, settings.gf_high) == (30, 70)
    assert settings.po2_warn == pytest.approx(1.4)
    assert settings.po2_critical == pytest.approx(1.6)
    assert settings.safety_stop_enabled is True
    assert settings.bottom_depth == 12.5


def test_map_settings_never_defaults_absent_fields() -> None:
    settings = map_settings(make_message("dive_settings", safety_stop_enabled=0))
    assert settings.safety_stop_enabled is False
    assert settings.water_type is None
    assert settings.po2_warn is None


def test_map_laps() -> None:
    laps = map_laps(
        [
            make_message(
                "lap",
                start_time=DIVE_START_RAW,
                total_elapsed_time=600000,
                total_distance=12345,
                max_speed=500,
                min_altitude=2500,
                max_altitude=2600,
                max_depth=9500,
                avg_depth=4200,
            ),
            make_message("lap"),
        ]
    )
    assert len(laps) == 2
    first = laps[0]
    assert first.total_elapsed_time == 600.0
    assert first.total_distance == 123.45
    assert first.max_speed == pytest.approx(1.8)
    assert (first.min_altitude, first.max_altitude) == (0.0, 20.0)
    assert (first.avg_depth, first.max_depth) == (4.2, 9.5)
    assert first.synthesized is False
    assert laps[1].start_time is None


def test_map_samples() -> None:
    samples = map_samples(
        [
            make_message(
                "record",
                timestamp=DIVE_START_RAW,
                depth=12345,
                temperature=27,
                heart_rate=72,
                n2_load=35,
                cns_load=4,
                next_stop_depth=3000,
                next_stop_time=180,
                time_to_surface=240,
                absolute_pressure=224000,
                enhanced_altitude=2550,
            ),
            make_message("record"),
        ]
    )
    sample = samples[0]
    assert sample.depth == 12.345
    assert sample.temperature == 27.0
    assert sample.heart_rate == 72
    assert (sample.n2_load, sample.cns_load) == (35, 4)
    assert sample.next_stop_depth == 3.0
    assert (sample.next_stop_time, sample.time_to_surface) == (180, 240)
    assert sample.absolute_pressure == 224000
    assert sample.altitude == 10.0
    assert samples[1] == type(sample)()


def test_map_alerts_filters_incomplete_events() -> None:
    alerts = map_alerts(
        [
            make_message("event", event=56, event_type=3, data=0, timestamp=DIVE_START_RAW),
            make_message("event", event=56, data=1),
            make_message("event", event_type=3, data=1),
            make_message("event", event=0, event_type=0),
            make_message("event", event=56, event_type=3, data=250),
            make_message("event", event=57, event_type=3, data=2),
            make_message("event", event=9, event_type=1, data=77),
        ]
    )
    assert len(alerts) == 5

    surface, timer, unknown, gas_switch, lap = alerts
    assert surface.event == Event(code=56, name="Dive Alert")
    assert surface.event_type == EventType(code=3, name="Marker")
    assert surface.data == 0
    assert surface.interpreted_data == "Surface"

    assert timer.data is None
    assert timer.interpreted_data is None

    assert unknown.interpreted_data == "Unknown Alert Data(250)"
    assert gas_switch.interpreted_data == "Gas 2"
    assert lap.interpreted_data == "77"


def test_map_gases() -> None:
    gases = map_gases(
        [
            make_message("dive_gas", message_index=0, oxygen_content=32, helium_content=0, status=1, mode=0),
            make_message("dive_gas", message_index=1, oxygen_content=50, status=2),
        ]
    )
    assert gases[0].oxygen_content == 32
    assert gases[0].status == GasStatus(code=1, name="Enabled")
    assert gases[0].mode == GasMode(code=0, name="Open Circuit")
    assert gases[1].status.label == "Backup Only"
    assert gases[1].mode is None
    assert gases[1].helium_content is None


def test_map_tanks() -> None:
    summaries = map_tank_summaries(
        [make_message("tank_summary", sensor=123456, start_pressure=20700, end_pressure=5050, volume_used=185000)]
    )
    assert summaries[0].sensor == 123456
    assert summaries[0].start_pressure == 207.0
    assert summaries[0].end_pressure == 50.5
    assert summaries[0].volume_used == 1850.0

    updates = map_tank_updates([make_message("tank_update", sensor=123456, pressure=19999), make_message("tank_update")])
    assert updates[0].pressure == 199.99
    assert updates[1].pressure is None
    assert map_tank_updates([]) == ()


def test_map_file_identity_and_devices(dive_start: dt.datetime) -> None:
    identity = map_file_identity(
        make_message("file_id", type=4, manufacturer=1, product=2859, serial_number=3400000000, time_created=DIVE_START_RAW)
    )
    assert identity.file_type.label == "Activity"
    assert identity.manufacturer.label == "Garmin"
    assert identity.serial_number == 3400000000
    assert identity.time_created == dive_start

    devices = map_devices(
        [make_message("device_info", device_index=0, manufacturer=999, software_version=1250, battery_voltage=768)]
    )
    assert devices[0].manufacturer.label == "Unrecognized(999)"
    assert devices[0].software_version == 12.5
    assert devices[0].battery_voltage == 3.0
