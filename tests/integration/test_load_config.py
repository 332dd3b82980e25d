from __future__ import annotations

from pathlib import Path

import pytest

from util.utils import config_section, load_config


@pytest.mark.integration
# What this tests
# - リポジトリ同梱の configs/default.yaml が既定値として読まれる。
def test_load_config_reads_repository_defaults():
    cfg = load_config()
    assert config_section(cfg, "window")["width"] == 1280
    assert config_section(cfg, "snow")["count"] == 1000
    assert config_section(cfg, "frame_loop")["double_render"] is True


@pytest.mark.integration
# What this tests
# - ルート config.yaml はトップレベル単位で上書きし、壊れた YAML は空として扱う。
def test_load_config_root_override_and_fail_soft(tmp_path: Path):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "window:\n  width: 100\nsnow:\n  count: 5\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("snow:\n  count: 7\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg["window"] == {"width": 100}
    assert cfg["snow"] == {"count": 7}

    (tmp_path / "config.yaml").write_text("snow: [unclosed\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg["snow"] == {"count": 5}


def test_config_section_tolerates_bad_shapes():
    assert config_section(None, "window") == {}
    assert config_section({"window": 3}, "window") == {}
