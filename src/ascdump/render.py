from __future__ import annotations

import json

from .frame import CanFrame
from .stream import DecodedLine


def format_frame_id(frame: CanFrame) -> str:
    # Keep the ASC spelling: hex digits, `x` suffix for extended ids.
    return f"{frame.id:x}x" if frame.is_extended else f"{frame.id:x}"


def render_text(frame: CanFrame) -> str:
    parts = [
        f"{frame.timestamp:.6f}",
        str(frame.bus_id),
        format_frame_id(frame),
        f"[{frame.length}]",
    ]
    if frame.payload:
        parts.append(frame.payload_hex)
    return " ".join(parts)


def render_json(frame: CanFrame) -> str:
    return json.dumps(frame.to_dict(), ensure_ascii=True)


def render_error(decoded: DecodedLine) -> str:
    return f"line {decoded.line_no}: {decoded.error}"


RENDERERS = {
    "text": render_text,
    "json": render_json,
}
