"""
どこで: `engine.animation`。
何を: フレームごとに状態を進めるアニメーション部品（雪片の落下など）。
なぜ: シーン構築（静的）と毎フレーム更新（動的）を分けて持つため。
"""

from .particles import ParticleField, SnowConfig

__all__ = ["ParticleField", "SnowConfig"]
