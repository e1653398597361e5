"""
どこで: `common` パッケージ。
何を: シード導出・設定エラー・環境設定など、engine/api 双方で使う軽量ユーティリティ。
なぜ: 依存の少ない最内層に置き、依存の向きを単純化するため。
"""

from .errors import ConfigError
from .seed import seed, seeds_for

__all__ = [
    "ConfigError",
    "seed",
    "seeds_for",
]
