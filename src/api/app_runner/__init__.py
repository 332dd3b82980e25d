"""
どこで: `api.app_runner` パッケージ。
何を: `api.app.run_scene` の補助（設定値の解決・ウィンドウ/GL 初期化）。
なぜ: ランナー本体を「組み立てと結線」だけに保つため。
"""
