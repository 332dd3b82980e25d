"""
どこで: `scene` パッケージ。
何を: 雪だるまシーンの構築（`build_scene`）と構築結果 `SceneBundle` を公開。
なぜ: ランナーとテストが同じ入口でシーン一式を得られるようにするため。
"""

from .snowman import CameraConfig, Composite, SceneBundle, build_scene

__all__ = ["build_scene", "SceneBundle", "Composite", "CameraConfig"]
