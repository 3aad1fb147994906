"""Convert dive reports into JSON-compatible structures."""
from __future__ import annotations

import dataclasses
import datetime as dt
import json
from typing import Any

from dive_report.domain.categories import Category
from dive_report.domain.models import DiveReport


def report_to_dict(report: DiveReport) -> dict[str, Any]:
    """Return a plain dict; categories keep both their code and label."""
    return _to_plain(report)


def report_to_json(report: DiveReport, *, indent: int = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent, sort_keys=False)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Category):
        return {"code": value.code, "name": value.name, "label": value.label}
    if isinstance(value, dt.datetime):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value
