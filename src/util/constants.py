"""
どこで: `util.constants`。
何を: 描画系で共有する定数（Primitive Restart Index・既定クリア色など）。
なぜ: マジックナンバーの散在を避けるため。
"""

PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

# 夜空の濃紺（RGBA 0–1）
DEFAULT_CLEAR_COLOR = (0.0, 0.0, 0.2, 1.0)

DEFAULT_WINDOW_SIZE = (1280, 720)

# ウィンドウの GL フレームバッファ要求。ステンシルは使わないので確保しない
# （Renderer のクリアはカラー/深度のみ）。
WINDOW_GL_CONFIG = {
    "double_buffer": True,
    "sample_buffers": 1,
    "samples": 4,
    "depth_size": 24,
    "vsync": True,
}
