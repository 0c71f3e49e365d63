from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `import ascdump` works when running tests without installing the package.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


CLASSIC_LINE = "0.962604 3 368 Rx d 4 cc 55 01 00 Length = 0 BitCount = 0 ID = 872"
CANFD_LINE = "7.392600 CANFD 1 Rx 6e   1 0 6 6 ec 0a 22 ff ff f1 0 0 3000 0 0 0 0 0"
EXTENDED_LINE = (
    "0.962892 3 1f78c410x Rx d 8 02 00 00 00 24 00 70 03 Length = 0 BitCount = 0 ID = 528008208x"
)


@pytest.fixture
def classic_line() -> str:
    return CLASSIC_LINE


@pytest.fixture
def canfd_line() -> str:
    return CANFD_LINE


@pytest.fixture
def extended_line() -> str:
    return EXTENDED_LINE


@pytest.fixture
def trace_file(tmp_path: Path) -> Path:
    path = tmp_path / "trace.asc"
    path.write_text(
        "\n".join(
            [
                "date Wed Jan 17 10:00:00.000 am 2024",
                "base hex  timestamps absolute",
                "Begin Triggerblock Wed Jan 17 10:00:00.000 am 2024",
                CLASSIC_LINE,
                CANFD_LINE,
                EXTENDED_LINE,
                "End TriggerBlock",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path
