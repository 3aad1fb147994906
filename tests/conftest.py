from __future__ import annotations

import datetime as dt
import os
import pathlib
from typing import Any, Optional

import pytest

from dive_report.decoding.fields import DecodedMessages, FitMessage
from dive_report.decoding.fit_source import DecodeError
from dive_report.decoding.units import degrees_to_semicircles

# 2024-06-01T09:00:00Z in seconds since the FIT epoch.
DIVE_START_RAW = 1086166800


def make_message(kind: str, **fields: Any) -> FitMessage:
    return FitMessage(kind, fields)


class StubSource:
    """Stands in for FitFileSource; records whether it was released."""

    def __init__(self, messages: Optional[DecodedMessages], error: Optional[str] = None) -> None:
        self.messages = messages
        self.error = error
        self.entered = False
        self.exited = False
        self.path: Optional[pathlib.Path] = None

    def __call__(self, path: pathlib.Path) -> StubSource:
        self.path = path
        return self

    def __enter__(self) -> StubSource:
        self.entered = True
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.exited = True

    def decode(self) -> DecodedMessages:
        if self.error is not None:
            raise DecodeError(self.error)
        assert self.messages is not None
        return self.messages


@pytest.fixture()
def repo_root() -> pathlib.Path:
    return pathlib.Path(__file__).resolve().parents[1]


@pytest.fixture()
def session_message() -> FitMessage:
    return make_message(
        "session",
        timestamp=DIVE_START_RAW + 3480,
        start_time=DIVE_START_RAW,
        max_depth=18000,
        min_temperature=26,
        avg_temperature=27,
        max_temperature=32,
        total_elapsed_time=3480000,
        total_timer_time=3480000,
        dive_number=1,
        sport=53,
        sub_sport=53,
    )


@pytest.fixture()
def dive_messages(session_message: FitMessage) -> DecodedMessages:
    return DecodedMessages(
        session=(session_message,),
        dive_summary=(
            make_message(
                "dive_summary",
                timestamp=DIVE_START_RAW + 3480,
                dive_number=1,
                max_depth=18000,
                surface_interval=4680,
            ),
        ),
        dive_settings=(
            make_message("dive_settings", water_type=1, water_density=1025.0, po2_warn=140, po2_critical=160),
        ),
        record=(
            make_message("record", timestamp=DIVE_START_RAW, depth=0),
            make_message(
                "record",
                timestamp=DIVE_START_RAW + 1,
                depth=1200,
                position_lat=degrees_to_semicircles(21.5),
                position_long=degrees_to_semicircles(-158.2),
            ),
            make_message(
                "record",
                timestamp=DIVE_START_RAW + 2,
                depth=2500,
                position_lat=degrees_to_semicircles(21.6),
                position_long=degrees_to_semicircles(-158.3),
            ),
            make_message("record", timestamp=DIVE_START_RAW + 3, depth=1800),
        ),
        file_id=(make_message("file_id", type=4, manufacturer=1, product=2859, serial_number=3400000000),),
    )


@pytest.fixture()
def dive_start() -> dt.datetime:
    return dt.datetime(2024, 6, 1, 9, 0, tzinfo=dt.timezone.utc)


def pytest_configure(config: pytest.Config) -> None:
    repo = pathlib.Path(__file__).resolve().parents[1]
    results_dir = repo / "test-results"
    results_dir.mkdir(parents=True, exist_ok=True)

    tag = os.environ.get("PYTEST_REPORT_TAG")
    if tag:
        safe_tag = "".join(ch for ch in tag if ch.isalnum() or ch in ("-", "_"))
        timestamp = safe_tag or dt.datetime.now().strftime("%Y%m%d-%H%M%S")
    else:
        timestamp = dt.datetime.now().strftime("%Y%m%d-%H%M%S")

    config.option.xmlpath = str(results_dir / f"pytest-{timestamp}.xml")
    config.option.htmlpath = str(results_dir / f"pytest-{timestamp}.html")
    config.option.self_contained_html = True
