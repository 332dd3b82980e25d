"""
統合 Geometry 型（ワイヤーフレーム表現）

本モジュールは、シーン内のメッシュ/ヘルパが参照する唯一の幾何表現 `Geometry` を提供する。
形状ジェネレータ（`shapes`）が生成し、Renderer が VBO/IBO に変換して LINE_STRIP で描画する。

データモデル（不変条件）:
- `coords: float32 ndarray (N, 3)` — 全頂点を 1 本の連続メモリで保持（行は XYZ）。
- `offsets: int32 ndarray (M+1,)` — 各ポリラインの開始 index（末尾は必ず N）。
- i 本目の線分配列は `coords[offsets[i] : offsets[i+1]]` で取り出せる。
- 生成後は不変として扱う。

直感図（複数線の格納）:

    # 2 本のポリライン（線0は3点、線1は2点）
    #   coords (N=5): [[0,0,0], [1,0,0], [1,1,0], [2,2,0], [3,2,0]]
    #   offsets (M+1=3): [0, 3, 5]
    #   線0 = coords[0:3], 線1 = coords[3:5]

補足:
- 空ジオメトリは `coords.shape==(0,3)`, `offsets==[0]`（線本数 M=0）。
- メッシュの配置（位置/回転/スケール）は `Transform` 側で持ち、Geometry は原点基準のまま共有する。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

NumberLike = float | int
LineLike = np.ndarray | Sequence[NumberLike] | Sequence[Sequence[NumberLike]]


def _normalize_geometry_input(
    coords: np.ndarray,
    offsets: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` 生成時の内部正規化ヘルパ。"""

    coords_arr = np.ascontiguousarray(coords, dtype=np.float32)
    if coords_arr.ndim != 2 or coords_arr.shape[1] != 3:
        raise ValueError("coords は形状 (N, 3) の配列である必要があります。")

    offsets_arr = np.ascontiguousarray(offsets, dtype=np.int32)
    if offsets_arr.ndim != 1 or offsets_arr.size == 0:
        raise ValueError("offsets は少なくとも1要素を含む 1 次元配列である必要があります。")
    if offsets_arr[0] != 0:
        raise ValueError("offsets[0] は常に 0 である必要があります。")
    if offsets_arr[-1] != coords_arr.shape[0]:
        raise ValueError("offsets[-1] は coords の行数と一致する必要があります。")
    if np.any(np.diff(offsets_arr) < 0):
        raise ValueError("offsets は単調非減少である必要があります。")

    return coords_arr, offsets_arr


class Geometry:
    """ワイヤーフレームのポリライン集合。

    フィールド:
    - `coords (N,3) float32`: すべての点列を連結した配列。
    - `offsets (M+1,) int32`: 各ポリラインの開始 index（末尾は N）。
    """

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        self.coords, self.offsets = _normalize_geometry_input(coords, offsets)

    # ── ファクトリ ───────────────────
    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """線分集合を統一表現に正規化して `Geometry` を生成する。

        Parameters
        ----------
        lines : Iterable[LineLike]
            各要素は座標列。形状は `(K, 2)`（Z=0 を補完）/`(K, 3)`/`(3K,)` のいずれか。

        Raises
        ------
        ValueError
            形状が上記いずれにも適合しない場合。
        """
        np_lines: list[np.ndarray] = []
        for line in lines:
            arr = np.asarray(line, dtype=np.float32)
            if arr.ndim == 1:
                if arr.size % 3 != 0:
                    raise ValueError(
                        "1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）"
                    )
                arr = arr.reshape(-1, 3)
            elif arr.ndim != 2:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            elif arr.shape[1] == 2:
                arr = np.hstack([arr, np.zeros((arr.shape[0], 1), dtype=np.float32)])
            elif arr.shape[1] != 3:
                raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
            np_lines.append(arr)

        if not np_lines:
            return cls(np.empty((0, 3), dtype=np.float32), np.array([0], dtype=np.int32))

        lengths = np.array([a.shape[0] for a in np_lines], dtype=np.int32)
        offsets = np.concatenate([np.zeros(1, dtype=np.int32), np.cumsum(lengths, dtype=np.int32)])
        return cls(np.concatenate(np_lines, axis=0), offsets)

    # ── 参照 ───────────────────────
    @property
    def n_vertices(self) -> int:
        """頂点数 `N` を返す。"""
        return int(self.coords.shape[0])

    def __len__(self) -> int:
        return int(self.offsets.shape[0] - 1)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Geometry(N={self.n_vertices}, M={len(self)})"


__all__ = ["Geometry", "LineLike"]
