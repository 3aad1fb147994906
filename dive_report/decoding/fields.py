"""Field access over decoded FIT messages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence

MESSAGE_KINDS = (
    "session",
    "dive_summary",
    "dive_settings",
    "lap",
    "record",
    "event",
    "dive_gas",
    "tank_summary",
    "tank_update",
    "file_id",
    "device_info",
)


class RawMessage(Protocol):
    kind: str

    def is_valid(self, name: str) -> bool:
        ...

    def get(self, name: str) -> Any:
        ...


@dataclass(frozen=True)
class FitMessage:
    """One decoded message as delivered by garmin-fit-sdk.

    The SDK leaves fields holding the FIT invalid sentinel out of the mapping.
    A value of None, or an array with no valid element, is treated the same way.
    """

    kind: str
    fields: Mapping[Any, Any] = field(default_factory=dict)

    def is_valid(self, name: str) -> bool:
        if name not in self.fields:
            return False
        value = self.fields[name]
        if value is None:
            return False
        if isinstance(value, (list, tuple)):
            return any(item is not None for item in value)
        return True

    def get(self, name: str) -> Any:
        return self.fields.get(name)


def field_value(message: Optional[RawMessage], name: str) -> Optional[Any]:
    """Return the raw value of a field, or None when it was not recorded."""
    if message is None or not message.is_valid(name):
        return None
    return message.get(name)


def first_valid(message: Optional[RawMessage], *names: str) -> Optional[Any]:
    """Return the first recorded value among several candidate fields."""
    for name in names:
        value = field_value(message, name)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class DecodedMessages:
    """Per-kind ordered messages from one container."""

    session: tuple[RawMessage, ...] = ()
    dive_summary: tuple[RawMessage, ...] = ()
    dive_settings: tuple[RawMessage, ...] = ()
    lap: tuple[RawMessage, ...] = ()
    record: tuple[RawMessage, ...] = ()
    event: tuple[RawMessage, ...] = ()
    dive_gas: tuple[RawMessage, ...] = ()
    tank_summary: tuple[RawMessage, ...] = ()
    tank_update: tuple[RawMessage, ...] = ()
    file_id: tuple[RawMessage, ...] = ()
    device_info: tuple[RawMessage, ...] = ()

    @classmethod
    def from_sdk_messages(cls, messages: Mapping[str, Sequence[Mapping[Any, Any]]]) -> DecodedMessages:
        """Build from the `<kind>_mesgs` mapping returned by `Decoder.read()`."""
        collected: dict[str, tuple[RawMessage, ...]] = {}
        for kind in MESSAGE_KINDS:
            raw_list = messages.get(f"{kind}_mesgs") or []
            collected[kind] = tuple(FitMessage(kind, dict(raw)) for raw in raw_list)
        return cls(**collected)

    def first(self, kind: str) -> Optional[RawMessage]:
        messages = getattr(self, kind)
        return messages[0] if messages else None

    def counts(self) -> dict[str, int]:
        return {kind: len(getattr(self, kind)) for kind in MESSAGE_KINDS}
