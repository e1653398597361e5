"""
どこで: `common.env`
何を: `FIELD_*` 環境変数を型付きで読むヘルパ（int / float / bool / ログレベル名）。
なぜ: `common.settings` が値ごとに `os.getenv` と例外処理を書かずに済むようにするため。

不正値は例外にせず既定値へ戻す（ログ出力前に呼ばれるので警告も出さない）。
"""

from __future__ import annotations

import math
import os
from typing import Callable, Optional, TypeVar

_N = TypeVar("_N", int, float)

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})
_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"})


def _env_number(
    name: str,
    cast: Callable[[str], _N],
    default: Optional[_N],
    min_value: Optional[_N],
) -> Optional[_N]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        val = cast(raw.strip())
    except ValueError:
        return default
    if isinstance(val, float) and not math.isfinite(val):
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得する（例: `FIELD_FPS`）。

    未設定・空文字・整数でない値は `default`。`min_value` 指定時は下限に丸める。
    """
    return _env_number(name, int, default, min_value)


def env_float(
    name: str, default: Optional[float] = None, *, min_value: Optional[float] = None
) -> Optional[float]:
    """実数環境変数を取得する（例: `FIELD_MAX_ELAPSED`）。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[float]
        未設定/不正時の値。`None` なら「指定なし」として扱える。
    min_value : Optional[float]
        下限（指定時、結果が下回れば下限に丸める）。

    Returns
    -------
    Optional[float]
        取得した値。`nan`/`inf` は不正値として `default` を返す。
    """
    return _env_number(name, float, default, min_value)


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得（0/1, true/false, yes/no, on/off）。"""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return bool(default)


def env_log_level(name: str, default: str = "INFO") -> str:
    """ログレベル名を大文字で返す。未知の名前は `default`。"""
    raw = (os.getenv(name) or "").strip().upper()
    return raw if raw in _LEVELS else default


__all__ = ["env_int", "env_float", "env_bool", "env_log_level"]
