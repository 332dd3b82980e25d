"""
どこで: `shapes.registry`
何を: シーンで使う形状関数（sphere/cylinder/cone/torus/box/plane/axis）を `@shape` で登録し、名前で引く。
なぜ: `api.shapes.G` が属性名だけで生成関数を解決し、同じ引数の Geometry を共有できるようにするため。

登録できるのは関数のみ。戻り値は `Geometry` またはポリライン列（`G` 側で `Geometry` に揃える）。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from common.base_registry import BaseRegistry

ShapeFn = Callable[..., Any]

_shape_registry = BaseRegistry("shape")


def shape(arg: Any | None = None, /, name: str | None = None):
    """形状関数を登録するデコレータ。

    `@shape` / `@shape()` は関数名で、`@shape("name")` / `@shape(name="name")` は明示名で登録する。
    関数以外を渡すと `TypeError`。
    """

    def _register(fn: Any, resolved: str | None) -> ShapeFn:
        if not inspect.isfunction(fn):
            raise TypeError(f"@shape can only register functions, got {fn!r}")
        return _shape_registry.register(resolved)(fn)

    if inspect.isfunction(arg) and name is None:
        return _register(arg, None)

    explicit = arg if isinstance(arg, str) else name
    return lambda fn: _register(fn, explicit)


def get_shape(name: str) -> ShapeFn:
    """登録済みの形状関数を返す。未登録なら `KeyError`。"""
    return _shape_registry.get(name)


def list_shapes() -> list[str]:
    return _shape_registry.names()


def is_shape_registered(name: str) -> bool:
    return name in _shape_registry


__all__ = ["shape", "get_shape", "list_shapes", "is_shape_registered"]
