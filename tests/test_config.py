from __future__ import annotations

from pathlib import Path

from ascdump.config import DumpConfig, load_dump_config
from ascdump.filters import FrameFilter
from ascdump.paths import find_config_file


def test_load_dump_config_defaults_when_missing(tmp_path: Path) -> None:
    cfg = load_dump_config(tmp_path / "ascdump.yaml")

    assert cfg == DumpConfig()
    assert cfg.frame_filter() == FrameFilter()


def test_load_dump_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "ascdump.yaml"
    path.write_text(
        "\n".join(
            [
                "bus_ids: [1, 3]",
                "frame_ids: [2000, '0x368', 1f78c410x]",
                "limit: 10",
                "format: json",
                "show_errors: true",
                "encoding: latin-1",
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_dump_config(path)

    assert cfg.bus_ids == [1, 3]
    assert cfg.frame_ids == [2000, 0x368, 0x1F78C410]
    assert cfg.limit == 10
    assert cfg.format == "json"
    assert cfg.show_errors is True
    assert cfg.encoding == "latin-1"
    assert cfg.frame_filter().bus_ids == frozenset({1, 3})


def test_load_dump_config_ignores_bad_values(tmp_path: Path) -> None:
    path = tmp_path / "ascdump.yaml"
    path.write_text(
        "\n".join(
            [
                "bus_ids: [1, 300, -1, x]",
                "frame_ids: nope",
                "limit: true",
                "format: xml",
                "show_errors: 1",
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_dump_config(path)

    assert cfg.bus_ids == [1]
    assert cfg.frame_ids == []
    assert cfg.limit == 0
    assert cfg.format == "text"
    assert cfg.show_errors is False


def test_load_dump_config_non_mapping_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "ascdump.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    cfg = load_dump_config(path)
    assert cfg == DumpConfig()


def test_find_config_file_walks_up(tmp_path: Path) -> None:
    (tmp_path / "ascdump.yaml").write_text("limit: 1\n", encoding="utf-8")
    nested = tmp_path / "traces" / "day1"
    nested.mkdir(parents=True)

    assert find_config_file(nested) == (tmp_path / "ascdump.yaml").resolve()


def test_load_dump_config_discovers_from_cwd(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "ascdump.yaml").write_text("limit: 5\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_dump_config().limit == 5


def test_load_dump_config_unknown_encoding_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "ascdump.yaml"
    path.write_text("encoding: nope\n", encoding="utf-8")

    assert load_dump_config(path).encoding == "utf-8"
