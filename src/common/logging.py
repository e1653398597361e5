"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 既定では各モジュールが `logging.getLogger(__name__)` でロガーを取得する。
- アプリ側で設定が無い場合でも、妥当な最小構成を 1 度だけ適用するヘルパーを提供する。
- レベル未指定時は `common.settings`（`FIELD_LOG_LEVEL` / `FIELD_VERBOSE`）から解決する。
"""

from __future__ import annotations

import logging


def resolve_level(level: int | str | None = None) -> int:
    """ログレベルを int に解決する（不明な文字列は INFO）。"""
    if level is None:
        from .settings import get as _get_settings

        s = _get_settings()
        return logging.DEBUG if s.VERBOSE else resolve_level(s.LOG_LEVEL)
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 上位のランナーから呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["resolve_level", "setup_default_logging"]
