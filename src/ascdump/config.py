from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .filters import FrameFilter, parse_frame_id
from .paths import find_config_file

OUTPUT_FORMATS = ("text", "json")


@dataclass
class DumpConfig:
    bus_ids: list[int] = field(default_factory=list)
    frame_ids: list[int] = field(default_factory=list)

    # 0 means no limit.
    limit: int = 0

    # text|json
    format: str = "text"

    show_errors: bool = False
    encoding: str = "utf-8"

    def frame_filter(self) -> FrameFilter:
        return FrameFilter(bus_ids=frozenset(self.bus_ids), frame_ids=frozenset(self.frame_ids))


def _as_str(v: Any) -> str | None:
    return v if isinstance(v, str) and v else None


def _as_encoding(v: Any) -> str | None:
    s = _as_str(v)
    if s is None:
        return None
    try:
        codecs.lookup(s)
    except LookupError:
        return None
    return s


def _as_bool(v: Any) -> bool | None:
    return v if isinstance(v, bool) else None


def _as_uint(v: Any) -> int | None:
    # bool is an int subclass; `limit: true` is not a number.
    if isinstance(v, bool) or not isinstance(v, int):
        return None
    return v if v >= 0 else None


def _as_bus_list(v: Any) -> list[int]:
    if not isinstance(v, list):
        return []
    out: list[int] = []
    for item in v:
        n = _as_uint(item)
        if n is not None and n <= 0xFF:
            out.append(n)
    return out


def _as_frame_id_list(v: Any) -> list[int]:
    if not isinstance(v, list):
        return []
    out: list[int] = []
    for item in v:
        n = _as_uint(item)
        if n is None and isinstance(item, str):
            try:
                n = parse_frame_id(item)
            except ValueError:
                n = None
        if n is not None:
            out.append(n)
    return out


def load_dump_config(path: Path | None = None) -> DumpConfig:
    """Load dump defaults from `path`, or from the nearest `ascdump.yaml`; otherwise return defaults."""

    yaml_path = path if path is not None else find_config_file()

    data: dict[str, Any] = {}
    if yaml_path is not None and yaml_path.exists():
        loaded = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
        if isinstance(loaded, dict):
            data = loaded

    cfg = DumpConfig()

    cfg.bus_ids = _as_bus_list(data.get("bus_ids"))
    cfg.frame_ids = _as_frame_id_list(data.get("frame_ids"))

    limit = _as_uint(data.get("limit"))
    cfg.limit = limit if limit is not None else cfg.limit

    fmt = _as_str(data.get("format"))
    cfg.format = fmt if fmt in OUTPUT_FORMATS else cfg.format

    show_errors = _as_bool(data.get("show_errors"))
    cfg.show_errors = show_errors if show_errors is not None else cfg.show_errors

    cfg.encoding = _as_encoding(data.get("encoding")) or cfg.encoding

    return cfg
