from __future__ import annotations

from typing import Any


class AscParseError(ValueError):
    """Base class for every way a single ASC line can fail to decode.

    Subclasses carry the offending token text (or the expected/actual counts) in
    ``args`` so two errors from the same line compare equal.
    """

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AscParseError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class InvalidTimestamp(AscParseError):
    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Cannot parse timestamp {self.text!r}"


class InvalidBusId(AscParseError):
    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Cannot parse bus id {self.text!r}"


class InvalidFrameId(AscParseError):
    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Cannot parse frame id {self.text!r}"


class InvalidLengthField(AscParseError):
    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Cannot parse length field {self.text!r}"


class InvalidPayload(AscParseError):
    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Cannot parse payload byte {self.text!r}"


class InvalidPayloadLength(AscParseError):
    def __init__(self, expected: int, actual: int):
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"Inconsistent payload length: {self.expected} != {self.actual}"


class InvalidFormat(AscParseError):
    """A required token is missing (the line is too short)."""

    def __init__(self, line: str):
        super().__init__(line)
        self.line = line

    def __str__(self) -> str:
        return f"Invalid format: {self.line!r}"
