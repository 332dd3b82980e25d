"""
どこで: `common.base_registry`
何を: 名前 → 生成関数の小さなレジストリ。`shapes` が形状関数の登録先として使う。
なぜ: `G.sphere(...)` のような属性アクセスを、登録名だけで生成関数へ解決するため。
"""

from __future__ import annotations

from typing import Any, Callable, Iterator


class BaseRegistry:
    """名前 → 関数のレジストリ。

    キーは小文字化し、`-` を `_` に揃える（"Snow-Flake" と "snow_flake" は同じ名前）。
    別の関数を同じ名前で登録しようとすると `ValueError`。
    """

    def __init__(self, kind: str = "entry") -> None:
        self.kind = kind
        self._entries: dict[str, Callable[..., Any]] = {}

    @staticmethod
    def normalize(name: str) -> str:
        if not isinstance(name, str):
            raise TypeError(f"registry key must be str, got {type(name).__name__}")
        key = name.strip().replace("-", "_").lower()
        if not key:
            raise ValueError("registry key must not be empty")
        return key

    def register(self, name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """関数を登録するデコレータ。`name` 省略時は関数名を使う。"""

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            key = self.normalize(name or fn.__name__)
            current = self._entries.get(key)
            if current is not None and current is not fn:
                raise ValueError(f"{self.kind} '{key}' is already registered")
            self._entries[key] = fn
            return fn

        return decorator

    def get(self, name: str) -> Callable[..., Any]:
        key = self.normalize(name)
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"unknown {self.kind}: {name!r}") from None

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(name.strip()) and self.normalize(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["BaseRegistry"]
