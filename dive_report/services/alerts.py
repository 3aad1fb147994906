"""Human readable interpretation of event payloads."""
from __future__ import annotations

from typing import Mapping, Optional

from dive_report.domain.categories import (
    DIVE_ALERT,
    DIVE_GAS_SWITCHED,
    TANK_PRESSURE_EVENTS,
    Event,
)

DIVE_ALERT_DATA: Mapping[int, str] = {
    0: "Surface",
    1: "Gas Switch Prompted",
    2: "Near Surface",
    3: "Approaching NDL",
    4: "PO2 Warning",
    5: "PO2 Critical High",
    6: "PO2 Critical Low",
    7: "Time Alert",
    8: "Depth Alert",
    9: "Deco Ceiling Broken",
    10: "Deco Complete",
    11: "Safety Stop Broken",
    12: "Safety Stop Complete",
    13: "CNS Warning",
    14: "CNS Critical",
    15: "OTU Warning",
    16: "OTU Critical",
    17: "Ascent Critical",
    18: "Alert Dismissed By Key",
    19: "Alert Dismissed By Timeout",
    20: "Battery Low",
    21: "Battery Critical",
    22: "Safety Stop Started",
    23: "Approaching First Deco Stop",
}


def interpret_event_data(event: Event, data: Optional[int]) -> Optional[str]:
    """Describe an event payload in the vocabulary of its event category.

    Returns None when the payload was not recorded.
    """
    if data is None:
        return None
    if event.code == DIVE_ALERT:
        return DIVE_ALERT_DATA.get(data, f"Unknown Alert Data({data})")
    if event.code == DIVE_GAS_SWITCHED:
        return f"Gas {data}"
    if event.code in TANK_PRESSURE_EVENTS:
        return f"Sensor {data}"
    return str(data)
