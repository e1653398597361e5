"""
どこで: `common.errors`
何を: 設定境界で送出する `ConfigError` を定義。
なぜ: 不正な行数/列数や非有限値を、レイアウト/モーション計算に入る前に早期に弾くため。
"""

from __future__ import annotations


class ConfigError(ValueError):
    """配置/形状/動作設定が意味的に不正なときに送出する。"""


__all__ = ["ConfigError"]
