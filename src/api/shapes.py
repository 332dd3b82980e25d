"""
どこで: `api.shapes`（形状生成の高レベル API）。
何を: 登録済み shape 関数を名前で解決し、同一パラメータの `Geometry` を共有する `G` ファサード。
なぜ: 目・ボタン・雪片のように同じ形状を使い回すノードが 1 つの Geometry（=1 つの GPU バッファ）
      を参照できるようにするため。

Examples
--------
    from api import G

    eye = G.sphere(radius=0.15, width_segments=16, height_segments=16)
    assert eye is G.sphere(radius=0.15, width_segments=16, height_segments=16)
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable

# レジストリ登録の副作用を発火させるため、shapes パッケージを 1 度だけ import すれば十分
import shapes  # noqa: F401  (登録目的の副作用)
from engine.core.geometry import Geometry
from shapes.registry import get_shape as get_shape_generator
from shapes.registry import is_shape_registered
from shapes.registry import list_shapes as list_registered_shapes

ParamsTuple = tuple[tuple[str, Any], ...]

_CACHE_MAXSIZE = 128


def _params_signature(params: dict[str, Any]) -> ParamsTuple:
    """キーワード引数をハッシュ可能なキーへ正規化する（float は丸めて揺れを吸収）。"""
    items = []
    for k in sorted(params):
        v = params[k]
        if isinstance(v, float):
            v = round(v, 9)
        elif isinstance(v, (list, tuple)):
            v = tuple(v)
        items.append((k, v))
    return tuple(items)


class ShapesAPI:
    """キャッシュ付き形状 API（`G` の実体）。

    - 形状名→生成関数の動的ディスパッチ（属性アクセスで遅延解決）
    - `(名前, パラメータ)` 単位の LRU。Geometry は不変なので共有して安全
    """

    def __init__(self, maxsize: int = _CACHE_MAXSIZE) -> None:
        self._maxsize = int(maxsize)
        self._cache: "OrderedDict[tuple[str, ParamsTuple], Geometry]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def make(self, shape_name: str, **params: Any) -> Geometry:
        """`shape_name` の形状を生成（またはキャッシュから返す）。"""
        key = (shape_name, _params_signature(params))
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self._hits += 1
            return cached
        self._misses += 1
        fn = get_shape_generator(shape_name)
        out = fn(**params)
        geometry = out if isinstance(out, Geometry) else Geometry.from_lines(out)
        self._cache[key] = geometry
        if len(self._cache) > self._maxsize:
            self._cache.popitem(last=False)
        return geometry

    def __getattr__(self, name: str) -> Callable[..., Geometry]:
        if name.startswith("_") or not is_shape_registered(name):
            raise AttributeError(f"unknown shape: {name!r}")

        def _factory(**params: Any) -> Geometry:
            return self.make(name, **params)

        _factory.__name__ = name
        return _factory

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(list_registered_shapes()))

    def cache_info(self) -> dict[str, int]:
        return {"hits": self._hits, "misses": self._misses, "size": len(self._cache)}

    def clear_cache(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0


G = ShapesAPI()

__all__ = ["G", "ShapesAPI"]
