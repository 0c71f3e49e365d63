from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .errors import (
    AscParseError,
    InvalidBusId,
    InvalidFormat,
    InvalidFrameId,
    InvalidLengthField,
    InvalidPayload,
    InvalidPayloadLength,
    InvalidTimestamp,
)
from .frame import CanFrame

CANFD_MARKER = "CANFD"
EXTENDED_ID_MARKER = "x"

MAX_BUS_ID = 0xFF
MAX_FRAME_ID = 0xFFFFFFFF
MAX_BYTE = 0xFF
MAX_LENGTH = 0xFFFFFFFFFFFFFFFF

# Every field fits in 64 bits; longer digit runs are rejected before `int()`.
_MAX_DIGITS = 20

_DECIMAL = re.compile(r"\+?[0-9]+")
_HEX = re.compile(r"\+?[0-9A-Fa-f]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class Dialect(Enum):
    CAN = "can"
    CANFD = "canfd"


@dataclass(frozen=True)
class FieldOffsets:
    """Absolute token positions of each field for one dialect."""

    bus_id: int
    frame_id: int
    length: int

    @property
    def payload(self) -> int:
        return self.length + 1


# Classic: `<ts> <bus> <id> <dir> d <len> <bytes...>`
# CAN-FD:  `<ts> CANFD <bus> <dir> <id> <brs> <esi> <dlc> <len> <bytes...>`
OFFSETS: dict[Dialect, FieldOffsets] = {
    Dialect.CAN: FieldOffsets(bus_id=1, frame_id=2, length=5),
    Dialect.CANFD: FieldOffsets(bus_id=2, frame_id=4, length=8),
}


def detect_dialect(tokens: Sequence[str]) -> Dialect:
    return Dialect.CANFD if CANFD_MARKER in tokens else Dialect.CAN


def _token(tokens: Sequence[str], index: int, line: str) -> str:
    if index >= len(tokens):
        raise InvalidFormat(line)
    return tokens[index]


def _parse_float(text: str) -> float | None:
    if not _FLOAT.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def _parse_uint(text: str, *, base: int, maximum: int | None = None) -> int | None:
    pattern = _HEX if base == 16 else _DECIMAL
    if not pattern.fullmatch(text):
        return None
    if len(text.lstrip("+").lstrip("0")) > _MAX_DIGITS:
        return None
    value = int(text, base)
    if maximum is not None and value > maximum:
        return None
    return value


def decode_line(line: str) -> CanFrame:
    """Decode one ASC trace line into a :class:`CanFrame`.

    Raises an :class:`AscParseError` subclass naming the first field that could
    not be decoded. No frame is produced on failure.
    """

    tokens = line.split()
    offsets = OFFSETS[detect_dialect(tokens)]

    ts_token = _token(tokens, 0, line)
    timestamp = _parse_float(ts_token)
    if timestamp is None:
        raise InvalidTimestamp(ts_token)

    bus_token = _token(tokens, offsets.bus_id, line)
    bus_id = _parse_uint(bus_token, base=10, maximum=MAX_BUS_ID)
    if bus_id is None:
        raise InvalidBusId(bus_token)

    id_token = _token(tokens, offsets.frame_id, line)
    is_extended = id_token.endswith(EXTENDED_ID_MARKER)
    id_digits = id_token[: -len(EXTENDED_ID_MARKER)] if is_extended else id_token
    frame_id = _parse_uint(id_digits, base=16, maximum=MAX_FRAME_ID)
    if frame_id is None:
        raise InvalidFrameId(id_token)

    len_token = _token(tokens, offsets.length, line)
    length = _parse_uint(len_token, base=10, maximum=MAX_LENGTH)
    if length is None:
        raise InvalidLengthField(len_token)

    # Slicing bounds the work by the tokens actually present, not by `length`.
    payload = bytearray()
    for byte_token in tokens[offsets.payload : offsets.payload + length]:
        value = _parse_uint(byte_token, base=16, maximum=MAX_BYTE)
        if value is None:
            raise InvalidPayload(byte_token)
        payload.append(value)

    if len(payload) != length:
        raise InvalidPayloadLength(expected=length, actual=len(payload))

    return CanFrame(
        timestamp=timestamp,
        bus_id=bus_id,
        id=frame_id,
        length=length,
        payload=bytes(payload),
        is_extended=is_extended,
    )


def try_decode_line(line: str) -> CanFrame | AscParseError:
    try:
        return decode_line(line)
    except AscParseError as e:
        return e
