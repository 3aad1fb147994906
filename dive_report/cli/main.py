"""CLI entrypoint for dive report parsing."""
from __future__ import annotations

import argparse
import functools
import pathlib
from typing import Callable, Optional, TextIO

from dive_report.config import ConfigError, ReportConfig
from dive_report.decoding.fit_source import FitFileSource
from dive_report.decoding.units import format_duration
from dive_report.domain.models import Coordinates, DiveReport
from dive_report.logging_setup import configure_logging
from dive_report.services.assembler import SourceFactory, parse_dive_file
from dive_report.services.export import report_to_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dive-report")
    parser.add_argument("--config", help="Path to TOML/JSON config.")
    parser.add_argument("--log-level", help="Logging level (overrides config).")
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs in JSON format."
    )
    parser.add_argument("--json", action="store_true", help="Print reports as JSON.")
    parser.add_argument(
        "--no-crc-check",
        action="store_true",
        help="Skip the FIT CRC integrity check.",
    )
    parser.add_argument("files", nargs="+", help="FIT file(s) to parse.")
    return parser


def main(
    argv: list[str] | None = None,
    *,
    out: Optional[TextIO] = None,
    source_factory: Optional[SourceFactory] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = ReportConfig()
    if args.config:
        try:
            config = ReportConfig.load(args.config)
        except ConfigError as exc:
            parser.error(str(exc))

    configure_logging(
        level=args.log_level or config.log_level,
        json_format=args.json_logs or config.json_logs,
    )

    if source_factory is None:
        source_factory = functools.partial(
            FitFileSource,
            enable_crc_check=config.enable_crc_check and not args.no_crc_check,
        )

    emit: Callable[[str], None] = functools.partial(print, file=out) if out else print
    failures = 0
    for file_name in args.files:
        path = pathlib.Path(file_name)
        emit(f"Parsing FIT file: {path}")
        outcome = parse_dive_file(path, source_factory=source_factory)
        if outcome.report is None:
            failures += 1
            emit(f"Error parsing FIT file: {outcome.error}")
            continue
        emit(report_to_json(outcome.report) if args.json else render_report(outcome.report))

    return 1 if failures else 0


def render_report(report: DiveReport) -> str:
    """Render a plain-text summary of a report."""
    session = report.session
    lines = ["", "Session:"]
    lines += _row("Start Time", session.start_time.isoformat() if session.start_time else None)
    lines += _row("Start Coordinates", _coords(session.start_coordinates))
    lines += _row("End Coordinates", _coords(session.end_coordinates))
    lines += _row("Sport", f"{session.sport} / {session.sub_sport}" if session.sport else None)
    lines += _row("Max Temperature", _num(session.max_temperature, "°C", 1))
    lines += _row("Min Temperature", _num(session.min_temperature, "°C", 1))
    lines += _row("Avg Temperature", _num(session.avg_temperature, "°C", 1))
    lines += _row("Total Elapsed Time", _duration(session.total_elapsed_time))
    lines += _row("Max Depth", _num(session.max_depth, "m", 3))
    lines += _row("Dive Number", session.dive_number)

    if report.summary is not None:
        summary = report.summary
        lines += ["", "Summary:"]
        lines += _row("Max Depth", _num(summary.max_depth, "m", 3))
        lines += _row("Average Depth", _num(summary.avg_depth, "m", 3))
        lines += _row("Surface Interval", _duration(summary.surface_interval))
        lines += _row("Bottom Time", _duration(summary.bottom_time))
        lines += _row("Descent Time", _duration(summary.descent_time))
        lines += _row("Ascent Time", _duration(summary.ascent_time))

    if report.settings is not None:
        settings = report.settings
        lines += ["", "Settings:"]
        lines += _row("Water Type", settings.water_type)
        lines += _row("Water Density", _num(settings.water_density, "kg/m³", 1))
        if settings.gf_low is not None and settings.gf_high is not None:
            lines += _row("Gradient Factors", f"{settings.gf_low}/{settings.gf_high}")
        lines += _row("PO2 Warning", _num(settings.po2_warn, "bar", 2))
        lines += _row("PO2 Critical", _num(settings.po2_critical, "bar", 2))
        lines += _row("Safety Stop", None if settings.safety_stop_enabled is None else (
            "Enabled" if settings.safety_stop_enabled else "Disabled"
        ))

    lines += ["", f"Laps: {len(report.laps)}"]
    for index, lap in enumerate(report.laps, start=1):
        marker = " (synthesized)" if lap.synthesized else ""
        lines.append(f"  Lap {index}{marker}: {_duration(lap.total_elapsed_time) or '-'}")

    lines += ["", f"Samples: {len(report.samples)}", f"Alerts: {len(report.alerts)}"]
    for alert in report.alerts:
        detail = f" ({alert.interpreted_data})" if alert.interpreted_data else ""
        lines.append(f"  {alert.event} {alert.event_type}{detail}")

    lines += ["", f"Gases: {len(report.gases)}"]
    for gas in report.gases:
        lines.append(f"  Gas {gas.index}: O2 {gas.oxygen_content}% He {gas.helium_content}% {gas.status}")

    lines += ["", f"Tank Summaries: {len(report.tank_summaries)}"]
    for index, tank in enumerate(report.tank_summaries, start=1):
        lines.append(
            f"  Tank {index}: {_num(tank.start_pressure, 'bar', 1)} -> {_num(tank.end_pressure, 'bar', 1)}"
        )
    lines.append(f"Tank Updates: {len(report.tank_updates)}")
    return "\n".join(lines)


def _row(label: str, value: object) -> list[str]:
    if value is None:
        return []
    return [f"  {label}: {value}"]


def _num(value: Optional[float], unit: str, digits: int) -> Optional[str]:
    if value is None:
        return None
    return f"{value:.{digits}f} {unit}"


def _duration(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return format_duration(value)


def _coords(value: Optional[Coordinates]) -> Optional[str]:
    if value is None:
        return None
    return f"{value.latitude:.6f}, {value.longitude:.6f}"


if __name__ == "__main__":
    raise SystemExit(main())
