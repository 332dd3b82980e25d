"""
どこで: `engine.core` サブパッケージ。
何を: Geometry・Transform/Node/SceneGraph・フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: シーン構成と描画の基盤を構成し、上位層（runtime/render/scene）から再利用可能にするため。
"""
