"""
どこで: `engine.animation.particles`。
何を: 落下する雪片の固定長プール `ParticleField`（初期配置・落下・上端への巻き戻し）。
なぜ: 1000 個規模の雪片を Python ループなしで毎フレーム更新するため。

設計:
- 位置は `(N, 3)` float32 の 1 枚のアリーナに持つ。各雪片ノードの `Transform.position`
  はアリーナの行ビューなので、`advance()` のベクトル演算がそのままノードへ反映される。
- 更新対象は y のみ。x/z/回転は初期化後に変化しない。
- `y - fall_speed * elapsed < floor` となった雪片は y を `ceiling` に戻す（サブステップ無し）。
  初期 y は [5, 10) で `ceiling` より上から降り始める。1 度巻き戻った後は [floor, ceiling] に収まる。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from common.types import Range
from engine.core.geometry import Geometry
from engine.core.node import Material, MeshNode
from engine.core.transform import Transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnowConfig:
    """雪片プールの既定パラメータ（YAML `snow` セクションに対応）。"""

    count: int = 1000
    x_range: Range = (-5.0, 5.0)
    y_range: Range = (5.0, 10.0)
    z_range: Range = (-5.0, 5.0)
    fall_speed: float = 1.0
    floor: float = -1.0
    ceiling: float = 5.0


def _check_range(name: str, value: Range) -> tuple[float, float]:
    lo, hi = float(value[0]), float(value[1])
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo > hi:
        raise ValueError(f"{name} must be a finite (lo, hi) with lo <= hi, got {value!r}")
    return lo, hi


class ParticleField:
    """雪片の固定長プール。`tick(dt)` で `FrameClock`/`FrameLoop` から駆動できる。

    インスタンスは `initialize()` で作る。
    """

    def __init__(
        self,
        positions: np.ndarray,
        nodes: list[MeshNode],
        *,
        fall_speed: float = 1.0,
        floor: float = -1.0,
        ceiling: float = 5.0,
    ) -> None:
        if not floor < ceiling:
            raise ValueError(f"require floor < ceiling, got floor={floor}, ceiling={ceiling}")
        if not math.isfinite(fall_speed) or fall_speed < 0.0:
            raise ValueError(f"fall_speed must be >= 0, got {fall_speed}")
        self._positions = positions
        self._nodes = nodes
        self.fall_speed = float(fall_speed)
        self.floor = float(floor)
        self.ceiling = float(ceiling)
        self._reset_count = 0

    @classmethod
    def initialize(
        cls,
        count: int,
        x_range: Range,
        y_range: Range,
        z_range: Range,
        *,
        geometry: Geometry,
        material: Material,
        rng: np.random.Generator | None = None,
        fall_speed: float = 1.0,
        floor: float = -1.0,
        ceiling: float = 5.0,
    ) -> "ParticleField":
        """`count` 個の雪片を各範囲 `[lo, hi)` の一様乱数で配置して返す。

        すべての雪片は `geometry` と `material` を共有する。
        """
        n = int(count)
        if n < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        ranges = [
            _check_range("x_range", x_range),
            _check_range("y_range", y_range),
            _check_range("z_range", z_range),
        ]
        gen = rng if rng is not None else np.random.default_rng()

        positions = np.empty((n, 3), dtype=np.float32)
        for axis, (lo, hi) in enumerate(ranges):
            positions[:, axis] = gen.uniform(lo, hi, size=n)

        nodes = [
            MeshNode(geometry, material, name=f"snowflake_{i}", transform=Transform(positions[i]))
            for i in range(n)
        ]
        logger.debug("initialized %d snowflakes", n)
        return cls(positions, nodes, fall_speed=fall_speed, floor=floor, ceiling=ceiling)

    # ---- 参照 ----
    @property
    def positions(self) -> np.ndarray:
        """位置アリーナの読み取り専用ビュー `(N, 3)`。"""
        view = self._positions.view()
        view.setflags(write=False)
        return view

    @property
    def nodes(self) -> list[MeshNode]:
        return list(self._nodes)

    @property
    def reset_count(self) -> int:
        """これまでに上端へ巻き戻した回数の累計。"""
        return self._reset_count

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[MeshNode]:
        return iter(self._nodes)

    # ---- 更新 ----
    def advance(self, elapsed: float) -> int:
        """全雪片を `elapsed` 秒ぶん落下させ、床を下回ったものを上端へ戻す。

        返り値は今回巻き戻した雪片の数。`elapsed <= 0` は何もしない。
        """
        dt = float(elapsed)
        if not dt > 0.0 or len(self._nodes) == 0:
            return 0
        y = self._positions[:, 1]
        y -= np.float32(self.fall_speed * dt)
        below = y < self.floor
        wrapped = int(np.count_nonzero(below))
        if wrapped:
            y[below] = self.ceiling
            self._reset_count += wrapped
        return wrapped

    def tick(self, dt: float) -> None:
        self.advance(dt)


__all__ = ["ParticleField", "SnowConfig"]
