"""
どこで: `api.app`（実行ランナー）。
何を: 設定を解決して雪だるまシーンを構築し、pyglet ウィンドウ + ModernGL で毎フレーム描画する。
なぜ: シーン構築・リサイズ追従・フレームループ・入力/終了処理の結線を 1 箇所にまとめるため。

実行フロー（概要）:
1) 設定解決: `util.utils.load_config()`（YAML）と `common.settings`（環境変数）を引数で上書き。
2) シーン構築: `scene.build_scene()` がメッシュ・ライト・座標軸・雪片・カメラを返す。
   `init_only=True` ならここで `SceneBundle` を返す（pyglet/ModernGL を import しない）。
3) ウィンドウ/GL: `RenderWindow` と `SceneRenderer` を生成。
4) ビューポート: `ViewportController.attach()` で初回に即時反映し、以後 `on_resize` で追従。
5) フレーム駆動: `FrameClock([FrameLoop])` をウィンドウの描画コールバックに登録し、
   `pyglet.app.run(1 / fps)` で回す。ESC で閉じ、`on_close` で GPU リソースを解放する。

挨拶文（`window.caption`）はウィンドウのタイトルとして表示し、起動時に 1 度だけログへ出す。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from common import settings as _settings
from common.logging import setup_default_logging
from util.utils import config_section, load_config

from .app_runner.utils import (
    resolve_camera_config,
    resolve_double_render,
    resolve_fps,
    resolve_snow_config,
    resolve_window_size,
)

if TYPE_CHECKING:
    from scene.snowman import SceneBundle

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = "Snowglobe"


def run_scene(
    *,
    width: int | None = None,
    height: int | None = None,
    fps: int | None = None,
    background: str | tuple[float, ...] | None = None,
    snow_count: int | None = None,
    seed: int | None = None,
    double_render: bool | None = None,
    init_only: bool = False,
) -> "SceneBundle | None":
    """雪だるまシーンを構築して描画ループを回す。

    Parameters
    ----------
    width, height : int | None
        ウィンドウサイズ [px]。None で設定（既定 1280x720）。
    fps : int | None
        描画更新レート。None で設定から解決し、1 以上にクランプ。
    background : str | tuple | None
        クリア色（色名/Hex/RGBA）。None で設定（既定は濃紺）。
    snow_count : int | None
        雪片数。None で `SNW_SNOW_COUNT` → 設定 → 1000。
    seed : int | None
        雪片初期配置の乱数シード。None で `SNW_SEED`（未設定ならランダム）。
    double_render : bool | None
        雪の更新前後で 2 回描画するか。None で `SNW_DOUBLE_RENDER` → 設定 → True。
    init_only : bool, default False
        True でシーン構築だけ行い、ウィンドウを開かずに `SceneBundle` を返す。
    """
    st = _settings.get()
    setup_default_logging(st.LOG_LEVEL)

    cfg = load_config() or {}
    window_width, window_height = resolve_window_size(width, height, cfg)
    fps = resolve_fps(fps, cfg)
    snow_cfg = resolve_snow_config(
        cfg, count=snow_count if snow_count is not None else st.SNOW_COUNT
    )
    camera_cfg = resolve_camera_config(cfg)
    use_double_render = resolve_double_render(double_render, cfg, st.DOUBLE_RENDER)
    show_axes = bool(config_section(cfg, "scene").get("show_axes", True))
    caption = str(config_section(cfg, "window").get("caption") or DEFAULT_CAPTION)

    from scene import build_scene

    bundle = build_scene(
        snow=snow_cfg,
        camera=camera_cfg,
        seed=seed if seed is not None else st.SEED,
        show_axes=show_axes,
    )
    if init_only:
        return bundle

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock
    from engine.render.camera import OrbitControl
    from engine.runtime.frame_loop import FrameLoop
    from engine.runtime.viewport import ViewportController

    from .app_runner.render import create_window_and_renderer

    rendering_window, _mgl_ctx, scene_renderer, _bg_rgba = create_window_and_renderer(
        window_width,
        window_height,
        background=background,
        caption=caption,
        cfg=cfg,
        debug=st.RENDER_DEBUG,
    )
    logger.info("%s", caption)

    # ---- ビューポート（初回は即時、以後はリサイズ毎） ----------------
    viewport = ViewportController(rendering_window, scene_renderer, bundle.camera)
    viewport.attach()

    # ---- マウスでカメラを周回 ------------------------------------------
    orbit = OrbitControl(bundle.camera)
    rendering_window.push_handlers(orbit)

    # ---- フレーム駆動 ----------------------------------------------------
    frame_loop = FrameLoop(
        scene_renderer,
        bundle.scene,
        bundle.camera,
        bundle.particles,
        double_render=use_double_render,
    )
    frame_clock = FrameClock([frame_loop])
    rendering_window.add_draw_callback(frame_clock.tick)

    # ---- pyglet イベント -----------------------------------------------
    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            # 既定の on_close 経由で閉じ、下の後始末を通す
            rendering_window.dispatch_event("on_close")
            return pyglet.event.EVENT_HANDLED
        return None

    closed = False

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ。ウィンドウ自体は既定ハンドラが閉じる
        nonlocal closed
        if closed:
            return
        closed = True
        logger.info(
            "closing after %d frames (%d render failures, %d snowflake resets)",
            frame_loop.frame_count,
            frame_loop.render_failures,
            bundle.particles.reset_count,
        )
        scene_renderer.release()
        pyglet.app.exit()

    logger.info(
        "running %dx%d @ %d fps (double_render=%s)",
        window_width,
        window_height,
        fps,
        use_double_render,
    )
    pyglet.app.run(1 / fps)
    return None


def run() -> None:
    """既定設定でシーンを実行する（`main.py` から呼ばれる）。"""
    run_scene()


__all__ = ["run_scene", "run"]
