"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトイン shape（球/円柱/円錐/トーラス/直方体/平面/座標軸）を import 副作用で登録する。
なぜ: シーン構築側が名前とパラメータだけで形状を解決できるようにするため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import axis as _register_axis  # noqa: F401
from . import box as _register_box  # noqa: F401
from . import cone as _register_cone  # noqa: F401
from . import cylinder as _register_cylinder  # noqa: F401
from . import plane as _register_plane  # noqa: F401
from . import sphere as _register_sphere  # noqa: F401
from . import torus as _register_torus  # noqa: F401
from .registry import get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
]
