"""
どこで: `common.env`
何を: `SNW_*` 環境変数の読み取りヘルパ（整数・真偽・三値フラグ・ログレベル名）。
なぜ: `common.settings` が空文字や不正値を一様に「未設定」として扱えるようにするため。
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _raw(name: str) -> Optional[str]:
    """前後空白を除いた値。未設定/空文字は `None`。"""
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数。未設定/不正値は `default`、`min_value` 未満は下限に丸める。"""
    raw = _raw(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_flag(name: str) -> Optional[bool]:
    """三値フラグ。未設定や解釈できない値は `None`（=呼び出し側の既定に任せる）。

    数値は 0 以外を真とする。
    """
    raw = _raw(name)
    if raw is None:
        return None
    s = raw.lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    try:
        return int(s) != 0
    except ValueError:
        return None


def env_bool(name: str, default: bool = False) -> bool:
    flag = env_flag(name)
    return bool(default) if flag is None else flag


def env_log_level(name: str, default: str = "INFO") -> str:
    """`logging` が知っているレベル名だけを受け付け、大文字で返す。"""
    raw = _raw(name)
    if raw is None:
        return default
    level = raw.upper()
    return level if isinstance(logging.getLevelName(level), int) else default


__all__ = ["env_int", "env_flag", "env_bool", "env_log_level"]
