from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME = "ascdump.yaml"


def find_config_file(start: Path | None = None) -> Path | None:
    """Find `ascdump.yaml` by walking up from `start` (default: the working directory).

    The nearest file wins, so a trace directory can override a project-wide default.
    """

    cur = (start or Path.cwd()).resolve()
    for p in [cur, *cur.parents]:
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
