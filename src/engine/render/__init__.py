"""
どこで: `engine.render` サブパッケージ。
何を: カメラ・シェーダ・GPU バッファ・SceneRenderer（SceneGraph → ModernGL 描画）を提供。
なぜ: シーン構成/アニメーションと描画の責務を分離し、GPU リソース管理を局所化するため。
"""
