"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

`None` は「環境変数で指定なし」を表し、`api.config` が設定ファイル/既定値へ解決する。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_log_level


@dataclass
class _Settings:
    # Runner
    FPS: int | None = None
    MAX_ELAPSED: float | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    VERBOSE: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。不正値は既定（指定なし）へ戻る。"""
    _settings.FPS = env_int("FIELD_FPS", None, min_value=1)
    _settings.MAX_ELAPSED = env_float("FIELD_MAX_ELAPSED", None)
    _settings.LOG_LEVEL = env_log_level("FIELD_LOG_LEVEL", "INFO")
    _settings.VERBOSE = env_bool("FIELD_VERBOSE", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
