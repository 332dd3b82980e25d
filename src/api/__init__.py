"""
どこで: `api` 入口（高レベル公開 API）。
何を: 実行ランナー `run_scene`/`run`、形状 `G`・装飾子 `shape`・`Geometry` を再輸出。
なぜ: 利用者が単一名前空間から形状生成→シーン実行まで完結できるようにするため。

Usage:
    from api import run_scene

    run_scene(snow_count=2000, double_render=False)
"""

# コアクラス（高度な使用）
from engine.core.geometry import Geometry
from shapes.registry import shape as shape  # 公開唯一経路（api.shape）

from .app import run as run
from .app import run_scene as run_scene

# 主要API
from .shapes import G, ShapesAPI

__all__ = [
    # メインAPI
    "G",  # 形状ファクトリ
    "shape",  # ユーザー拡張用デコレータ
    "run_scene",  # 実行（詳細指定）
    "run",  # 実行（既定設定）
    # クラス（高度な使用）
    "ShapesAPI",
    "Geometry",
]

__version__ = "2026.10"
