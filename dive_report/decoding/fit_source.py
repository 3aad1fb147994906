"""Adapter around garmin-fit-sdk that yields raw, unscaled messages."""
from __future__ import annotations

import logging
import pathlib
from types import TracebackType
from typing import BinaryIO, Optional

from garmin_fit_sdk.decoder import Decoder
from garmin_fit_sdk.stream import Stream

from dive_report.decoding.fields import DecodedMessages

LOGGER = logging.getLogger(__name__)


class DecodeError(RuntimeError):
    """Raised when a FIT container cannot be decoded."""


class FitFileSource:
    """Scoped access to one FIT file.

    The file handle is opened on ``__enter__`` and closed on ``__exit__`` whether or
    not decoding succeeded. Scaling, enum naming and date conversion are left to the
    mappers, so the SDK is asked for raw field values only.
    """

    def __init__(self, path: str | pathlib.Path, *, enable_crc_check: bool = True) -> None:
        self.path = pathlib.Path(path)
        self.enable_crc_check = enable_crc_check
        self._handle: Optional[BinaryIO] = None

    def __enter__(self) -> FitFileSource:
        try:
            self._handle = self.path.open("rb")
        except OSError as exc:
            raise DecodeError(f"Cannot open FIT file {self.path}: {exc}") from exc
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def decode(self) -> DecodedMessages:
        if self._handle is None:
            raise DecodeError("FitFileSource must be entered before decoding")

        try:
            stream = Stream.from_buffered_reader(self._handle)
            decoder = Decoder(stream)
            if not decoder.is_fit():
                raise DecodeError(f"Not a FIT file: {self.path}")
            if self.enable_crc_check and not decoder.check_integrity():
                raise DecodeError(f"FIT integrity check failed: {self.path}")
            # The integrity check leaves the stream at end of file.
            stream.reset()

            messages, errors = decoder.read(
                apply_scale_and_offset=False,
                convert_datetimes_to_dates=False,
                convert_types_to_strings=False,
                enable_crc_check=self.enable_crc_check,
                expand_sub_fields=False,
                expand_components=False,
                merge_heart_rates=False,
            )
        except DecodeError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"Failed to decode {self.path}: {exc}") from exc

        if errors:
            if not messages:
                raise DecodeError(f"Failed to decode {self.path}: {errors[0]}")
            LOGGER.warning("Decoder reported %s error(s) for %s: %s", len(errors), self.path, errors[0])

        decoded = DecodedMessages.from_sdk_messages(messages)
        LOGGER.info("Decoded %s: %s", self.path, decoded.counts())
        return decoded
