"""Assemble a dive report from a FIT file."""
from __future__ import annotations

import enum
import logging
import pathlib
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Protocol, Sequence

from dive_report.decoding.fields import DecodedMessages
from dive_report.decoding.fit_source import DecodeError, FitFileSource
from dive_report.domain.models import DiveReport, Lap, SamplePoint, Session
from dive_report.services import mappers

LOGGER = logging.getLogger(__name__)


class ParseError(RuntimeError):
    """Raised when a dive file cannot produce a report."""

    kind = "parse_failure"


class DecodeFailure(ParseError):
    """The container could not be decoded at all."""

    kind = "decode_failure"


class MissingMandatoryMessage(ParseError):
    """The container decoded but lacks a message kind the report requires."""

    kind = "missing_mandatory_message"

    def __init__(self, message_kind: str) -> None:
        super().__init__(f"Missing mandatory message: {message_kind}")
        self.message_kind = message_kind


class AssemblyState(enum.Enum):
    NOT_STARTED = "not_started"
    DECODING = "decoding"
    FAILED = "failed"
    EXTRACTED = "extracted"


class MessageSource(Protocol):
    def decode(self) -> DecodedMessages:
        ...


SourceFactory = Callable[[pathlib.Path], ContextManager[MessageSource]]


@dataclass(frozen=True)
class ParseOutcome:
    state: AssemblyState
    report: Optional[DiveReport] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.state is AssemblyState.EXTRACTED

    def unwrap(self) -> DiveReport:
        if self.report is None:
            raise self.error or ParseError("No report available")
        return self.report


class DiveReportAssembler:
    """Run the decode and mapping pipeline for a single file.

    An assembler moves NOT_STARTED -> DECODING -> FAILED | EXTRACTED once; use a new
    instance per file. Failures are terminal and never retried.
    """

    def __init__(self, source_factory: Optional[SourceFactory] = None) -> None:
        self._source_factory: SourceFactory = source_factory or FitFileSource
        self.state = AssemblyState.NOT_STARTED

    def run(self, path: str | pathlib.Path) -> ParseOutcome:
        if self.state is not AssemblyState.NOT_STARTED:
            raise RuntimeError(f"Assembler already used (state={self.state.value})")

        path_obj = pathlib.Path(path)
        self.state = AssemblyState.DECODING
        try:
            with self._source_factory(path_obj) as source:
                messages = source.decode()
        except DecodeError as exc:
            LOGGER.warning("Decode failed for %s: %s", path_obj, exc)
            return self._fail(DecodeFailure(str(exc)), cause=exc)

        session_message = messages.first("session")
        if session_message is None:
            LOGGER.warning("No session message in %s", path_obj)
            return self._fail(MissingMandatoryMessage("session"))

        report = build_report(messages)
        LOGGER.info(
            "Assembled report for %s (%s laps, %s samples, %s alerts)",
            path_obj,
            len(report.laps),
            len(report.samples),
            len(report.alerts),
        )
        self.state = AssemblyState.EXTRACTED
        return ParseOutcome(state=self.state, report=report)

    def _fail(self, error: ParseError, *, cause: Optional[BaseException] = None) -> ParseOutcome:
        if cause is not None:
            error.__cause__ = cause
        self.state = AssemblyState.FAILED
        return ParseOutcome(state=self.state, error=error)


def build_report(messages: DecodedMessages) -> DiveReport:
    """Map decoded messages into a report. Requires at least one session message."""
    session_message = messages.first("session")
    if session_message is None:
        raise MissingMandatoryMessage("session")

    session = mappers.map_session(session_message)
    samples = mappers.map_samples(messages.record)

    summary_message = messages.first("dive_summary")
    settings_message = messages.first("dive_settings")
    file_id_message = messages.first("file_id")

    laps = mappers.map_laps(messages.lap)
    if not laps:
        LOGGER.warning("No lap messages; synthesizing one lap from the session")
        laps = (synthesize_lap(session, samples),)

    return DiveReport(
        session=session,
        laps=laps,
        summary=mappers.map_summary(summary_message, session_message) if summary_message else None,
        settings=mappers.map_settings(settings_message) if settings_message else None,
        file_identity=mappers.map_file_identity(file_id_message) if file_id_message else None,
        samples=samples,
        alerts=mappers.map_alerts(messages.event),
        gases=mappers.map_gases(messages.dive_gas),
        tank_summaries=mappers.map_tank_summaries(messages.tank_summary),
        tank_updates=mappers.map_tank_updates(messages.tank_update),
        devices=mappers.map_devices(messages.device_info),
    )


def synthesize_lap(session: Session, samples: Sequence[SamplePoint]) -> Lap:
    """Build the single lap used when a file records none.

    Coordinates missing from the session are taken from the first and last samples that
    carry a position, and stay absent when no sample does.
    """
    start = session.start_coordinates
    if start is None:
        start = next((s.coordinates for s in samples if s.coordinates is not None), None)
    end = session.end_coordinates
    if end is None:
        end = next((s.coordinates for s in reversed(samples) if s.coordinates is not None), None)

    return Lap(
        timestamp=session.timestamp,
        start_time=session.start_time,
        start_coordinates=start,
        end_coordinates=end,
        total_elapsed_time=session.total_elapsed_time,
        total_timer_time=session.total_timer_time,
        total_distance=session.total_distance,
        avg_speed=session.avg_speed,
        max_speed=session.max_speed,
        max_depth=session.max_depth,
        synthesized=True,
    )


def parse_dive_file(
    path: str | pathlib.Path,
    *,
    source_factory: Optional[SourceFactory] = None,
) -> ParseOutcome:
    """Parse one dive file into a ParseOutcome."""
    return DiveReportAssembler(source_factory).run(path)


def load_dive_report(
    path: str | pathlib.Path,
    *,
    source_factory: Optional[SourceFactory] = None,
) -> DiveReport:
    """Parse one dive file, raising ParseError on failure."""
    return parse_dive_file(path, source_factory=source_factory).unwrap()
