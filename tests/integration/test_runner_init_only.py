from __future__ import annotations

import sys

import pytest


@pytest.mark.integration
# What this tests
# - run_scene(init_only=True) はシーン一式を返し、ウィンドウ/GL を作らない。
def test_run_scene_init_only_builds_bundle(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("SNW_SNOW_COUNT", raising=False)
    from api import run_scene

    bundle = run_scene(snow_count=25, seed=5, init_only=True)
    assert bundle is not None
    assert len(bundle.particles) == 25
    assert sum(len(c.nodes) for c in bundle.composites) == 24
    assert "engine.core.render_window" not in sys.modules


@pytest.mark.integration
def test_run_scene_init_only_honours_env_overrides(monkeypatch: pytest.MonkeyPatch):
    from api import run_scene
    from common import settings

    monkeypatch.setenv("SNW_SNOW_COUNT", "12")
    monkeypatch.setenv("SNW_SEED", "9")
    settings.reload_from_env()
    try:
        a = run_scene(init_only=True)
        b = run_scene(init_only=True)
    finally:
        monkeypatch.undo()
        settings.reload_from_env()
    assert len(a.particles) == 12
    assert (a.particles.positions == b.particles.positions).all()
