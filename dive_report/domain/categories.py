"""Closed vocabularies for categorical FIT fields.

Each decoded value keeps the raw code. A code missing from its table decodes to the
Unrecognized arm (``name is None``) instead of failing, so callers can tell a known
category from an unknown code without parsing text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Type, TypeVar


@dataclass(frozen=True)
class Category:
    code: int
    name: Optional[str] = None

    @property
    def is_recognized(self) -> bool:
        return self.name is not None

    @property
    def label(self) -> str:
        if self.name is None:
            return f"Unrecognized({self.code})"
        return self.name

    def __str__(self) -> str:
        return self.label


class Sport(Category):
    pass


class SubSport(Category):
    pass


class Event(Category):
    pass


class EventType(Category):
    pass


class WaterType(Category):
    pass


class GasStatus(Category):
    pass


class GasMode(Category):
    pass


class FileType(Category):
    pass


class Manufacturer(Category):
    pass


SPORTS: Mapping[int, str] = {
    0: "Generic",
    1: "Running",
    2: "Cycling",
    3: "Transition",
    4: "Fitness Equipment",
    5: "Swimming",
    10: "Training",
    11: "Walking",
    15: "Rowing",
    17: "Hiking",
    18: "Multisport",
    19: "Paddling",
    23: "Boating",
    29: "Fishing",
    32: "Sailing",
    37: "Stand Up Paddleboarding",
    38: "Surfing",
    41: "Kayaking",
    43: "Windsurfing",
    44: "Kitesurfing",
    53: "Diving",
    254: "All",
}

SUB_SPORTS: Mapping[int, str] = {
    0: "Generic",
    17: "Lap Swimming",
    18: "Open Water",
    53: "Single Gas Diving",
    54: "Multi Gas Diving",
    55: "Gauge Diving",
    56: "Apnea Diving",
    57: "Apnea Hunting",
    # Vendor dive mode reported by rebreather-capable computers.
    63: "CCR Diving",
    254: "All",
}

EVENTS: Mapping[int, str] = {
    0: "Timer",
    3: "Workout",
    4: "Workout Step",
    5: "Power Down",
    6: "Power Up",
    8: "Session",
    9: "Lap",
    10: "Course Point",
    11: "Battery",
    13: "HR High Alert",
    14: "HR Low Alert",
    22: "Battery Low",
    23: "Time Duration Alert",
    26: "Activity",
    32: "User Marker",
    36: "Calibration",
    47: "Comm Timeout",
    56: "Dive Alert",
    57: "Dive Gas Switched",
    71: "Tank Pressure Reserve",
    72: "Tank Pressure Critical",
    73: "Tank Lost",
    76: "Tank Battery Low",
}

EVENT_TYPES: Mapping[int, str] = {
    0: "Start",
    1: "Stop",
    2: "Consecutive",
    3: "Marker",
    4: "Stop All",
    5: "Begin",
    6: "End",
    7: "End All",
    8: "Stop Disable",
    9: "Stop Disable All",
}

WATER_TYPES: Mapping[int, str] = {
    0: "Fresh",
    1: "Salt",
    2: "EN13319",
    3: "Custom",
}

GAS_STATUSES: Mapping[int, str] = {
    0: "Disabled",
    1: "Enabled",
    2: "Backup Only",
}

GAS_MODES: Mapping[int, str] = {
    0: "Open Circuit",
    1: "Closed Circuit Diluent",
}

FILE_TYPES: Mapping[int, str] = {
    1: "Device",
    2: "Settings",
    3: "Sport",
    4: "Activity",
    5: "Workout",
    6: "Course",
    7: "Schedules",
    9: "Weight",
    10: "Totals",
    11: "Goals",
    14: "Blood Pressure",
    15: "Monitoring A",
    20: "Activity Summary",
    28: "Monitoring Daily",
    32: "Monitoring B",
    34: "Segment",
    35: "Segment List",
}

MANUFACTURERS: Mapping[int, str] = {
    1: "Garmin",
    2: "Garmin FR405 ANTFS",
    3: "Zephyr",
    4: "Dayton",
    5: "IDT",
    6: "SRM",
    7: "Quarq",
    8: "iBike",
    9: "Saris",
    13: "Dynastream OEM",
    14: "Nautilus",
    15: "Dynastream",
    16: "Timex",
    23: "Suunto",
    32: "Wahoo Fitness",
    37: "Magellan",
    40: "Concept2",
    63: "Specialized",
    68: "CatEye",
    69: "Stages Cycling",
    70: "Sigma Sport",
    71: "TomTom",
    89: "Tacx",
    95: "Stryd",
    123: "Polar Electro",
    255: "Development",
    260: "Zwift",
    265: "Strava",
    294: "Coros",
}

_C = TypeVar("_C", bound=Category)


def _decoder(category: Type[_C], table: Mapping[int, str]) -> Callable[[int], _C]:
    def decode(code: int) -> _C:
        code = int(code)
        return category(code=code, name=table.get(code))

    decode.__name__ = f"decode_{category.__name__.lower()}"
    decode.__doc__ = f"Decode a raw code into a {category.__name__}."
    return decode


decode_sport = _decoder(Sport, SPORTS)
decode_sub_sport = _decoder(SubSport, SUB_SPORTS)
decode_event = _decoder(Event, EVENTS)
decode_event_type = _decoder(EventType, EVENT_TYPES)
decode_water_type = _decoder(WaterType, WATER_TYPES)
decode_gas_status = _decoder(GasStatus, GAS_STATUSES)
decode_gas_mode = _decoder(GasMode, GAS_MODES)
decode_file_type = _decoder(FileType, FILE_TYPES)
decode_manufacturer = _decoder(Manufacturer, MANUFACTURERS)

DIVE_ALERT = 56
DIVE_GAS_SWITCHED = 57
TANK_PRESSURE_EVENTS = frozenset({71, 72, 73, 76})
