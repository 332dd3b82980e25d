"""
どこで: `api.app_runner.render`
何を: RenderWindow/ModernGL コンテキスト/SceneRenderer の初期化と背景色の決定。
なぜ: `api.app` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

from typing import Any, Mapping

import moderngl


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    background: Any,
    caption: str,
    cfg: Mapping[str, Any] | None = None,
    debug: bool = False,
):
    """ウィンドウ/ModernGL/SceneRenderer を生成し、背景色を決定して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, scene_renderer, bg_rgba)
    """

    from engine.core.render_window import RenderWindow
    from engine.render.renderer import SceneRenderer
    from util.color import normalize_color as _normalize_color
    from util.constants import DEFAULT_CLEAR_COLOR
    from util.utils import config_section

    window_cfg = config_section(cfg, "window")
    cfg_bg = window_cfg.get("background")

    # 背景色の決定（引数 → 設定 → 既定の濃紺）
    if background is None:
        bg_src = cfg_bg if cfg_bg is not None else DEFAULT_CLEAR_COLOR
    else:
        bg_src = background
    bg_rgba = _normalize_color(bg_src)

    rendering_window = RenderWindow(window_width, window_height, caption=caption)

    # ModernGL コンテキスト（pyglet が作った GL コンテキストを共有）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    mgl_ctx.enable(moderngl.DEPTH_TEST)

    scene_renderer = SceneRenderer(mgl_ctx, clear_color=bg_rgba, debug=debug)
    return rendering_window, mgl_ctx, scene_renderer, bg_rgba


__all__ = ["create_window_and_renderer"]
