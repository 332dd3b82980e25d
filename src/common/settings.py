"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

環境変数（すべて任意）:
- `SNW_LOG_LEVEL`      : ログレベル名（既定 "INFO"）。
- `SNW_SEED`           : 雪片初期配置の乱数シード（未設定なら毎回ランダム）。
- `SNW_SNOW_COUNT`     : 雪片数の上書き（0 以上）。
- `SNW_DOUBLE_RENDER`  : 1 フレーム 2 回描画の有効/無効（未設定なら YAML 設定に従う）。
- `SNW_RENDER_DEBUG`   : メッシュ単位の描画ログを DEBUG で出す。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_flag, env_int, env_log_level


@dataclass
class _Settings:
    LOG_LEVEL: str = "INFO"

    # 雪
    SEED: int | None = None
    SNOW_COUNT: int | None = None

    # フレームループ
    DOUBLE_RENDER: bool | None = None

    # Renderer
    RENDER_DEBUG: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 三値（未設定=None）の項目は `env_flag`、ログレベルは `env_log_level` で解釈する。
    """
    _settings.LOG_LEVEL = env_log_level("SNW_LOG_LEVEL", "INFO")

    _settings.SEED = env_int("SNW_SEED", None, min_value=0)
    _settings.SNOW_COUNT = env_int("SNW_SNOW_COUNT", None, min_value=0)

    _settings.DOUBLE_RENDER = env_flag("SNW_DOUBLE_RENDER")

    _settings.RENDER_DEBUG = env_bool("SNW_RENDER_DEBUG", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
