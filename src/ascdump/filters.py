from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .frame import CanFrame

_HEX_PREFIXED = re.compile(r"0[xX]([0-9A-Fa-f]+)")
_HEX_EXTENDED = re.compile(r"([0-9A-Fa-f]+)x")
_DECIMAL = re.compile(r"[0-9]+")


def parse_frame_id(text: str) -> int:
    """Parse a user-supplied frame id.

    Accepts `0x7d0` (hex), `7d0x` (hex, ASC extended-id spelling) or `2000` (decimal).
    """

    s = text.strip()
    # A bare `0x` is a missing id, not extended id 0.
    m = _HEX_PREFIXED.fullmatch(s) if s[:2] in ("0x", "0X") else _HEX_EXTENDED.fullmatch(s)
    if m:
        return int(m.group(1), 16)
    if _DECIMAL.fullmatch(s):
        return int(s, 10)
    raise ValueError(f"Invalid frame id: {text!r}")


@dataclass(frozen=True)
class FrameFilter:
    # Empty sets place no constraint on that field.
    bus_ids: frozenset[int] = field(default_factory=frozenset)
    frame_ids: frozenset[int] = field(default_factory=frozenset)

    def matches(self, frame: CanFrame) -> bool:
        if self.bus_ids and frame.bus_id not in self.bus_ids:
            return False
        if self.frame_ids and frame.id not in self.frame_ids:
            return False
        return True

    def apply(self, frames: Iterable[CanFrame]) -> Iterator[CanFrame]:
        return filter(self.matches, frames)
