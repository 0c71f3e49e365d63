from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .decoder import decode_line
from .errors import AscParseError
from .frame import CanFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedLine:
    line_no: int
    raw: str
    frame: CanFrame | None
    error: AscParseError | None

    @property
    def ok(self) -> bool:
        return self.frame is not None


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def iter_decoded_lines(lines: Iterable[str | bytes]) -> Iterator[DecodedLine]:
    """Decode every line of an ASC text stream, keeping failures alongside frames."""

    for line_no, raw in enumerate(lines, start=1):
        line = _as_text(raw).rstrip("\r\n")
        try:
            frame = decode_line(line)
        except AscParseError as e:
            yield DecodedLine(line_no=line_no, raw=line, frame=None, error=e)
            continue
        yield DecodedLine(line_no=line_no, raw=line, frame=frame, error=None)


def iter_frames(
    lines: Iterable[str | bytes],
    *,
    on_error: Callable[[DecodedLine], None] | None = None,
) -> Iterator[CanFrame]:
    """Lazily yield the frames of an ASC text stream, skipping lines that fail to decode.

    Skipped lines are not surfaced unless `on_error` is given; it receives each
    failed :class:`DecodedLine` before the stream moves on.
    """

    for decoded in iter_decoded_lines(lines):
        if decoded.frame is not None:
            yield decoded.frame
            continue
        logger.debug("skipping line %d: %s", decoded.line_no, decoded.error)
        if on_error is not None:
            on_error(decoded)
