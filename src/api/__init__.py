"""
どこで: `api` 入口（高レベル公開 API）。
何を: Field・設定レコード・シード関数・実行ランナーを再輸出。
なぜ: 利用者が単一名前空間から設定→構築→駆動まで完結できるようにするため。

Usage:
    from api import Field, DistributionConfig, ShapeConfig, MovementConfig

    field = Field()
    field.rebuild(DistributionConfig(rows=3, columns=3), ShapeConfig())
    positions = field.tick(1.5, MovementConfig(amplitude=0.5))
"""

from common.errors import ConfigError
from common.seed import seed
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig
from engine.core.field import Field, Instance
from engine.core.motion import vertical_offset

from .config import load_field_config
from .runner import build_field, run

__all__ = [
    # メインAPI
    "Field",
    "run",
    "build_field",
    "load_field_config",
    # 設定
    "DistributionConfig",
    "ShapeConfig",
    "MovementConfig",
    "ConfigError",
    # 純関数（高度な使用）
    "Instance",
    "seed",
    "vertical_offset",
]

# バージョン情報
__version__ = "2026.10"
