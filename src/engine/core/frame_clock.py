"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（dt 測定とループ管理）。
なぜ: ウィンドウの描画コールバックから呼ぶだけで、更新順と経過時間の扱いを統一するため。
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(
        self,
        tickables: Sequence[Tickable],
        *,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._tickables = tuple(tickables)
        self._clock = clock
        self._last_time = clock()

    # pyglet の schedule 系は dt を渡す。on_draw から呼ぶ場合は dt=None で自前計測。
    def tick(self, dt: float | None = None) -> None:
        now = self._clock()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        for t in self._tickables:
            t.tick(dt)
