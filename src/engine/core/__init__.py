"""
どこで: `engine.core` サブパッケージ。
何を: 設定レコード・グリッド配置・上下動スケジューラ・Field・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: 描画に依存しない計算の基盤を構成し、上位層（API/描画アダプタ）から再利用可能にするため。
"""

from .config import DistributionConfig, MovementConfig, ShapeConfig
from .field import Field, Instance
from .frame_clock import FieldDriver, FrameClock, Tickable
from .layout import iter_cells, layout
from .motion import vertical_offset, vertical_offsets

__all__ = [
    "DistributionConfig",
    "MovementConfig",
    "ShapeConfig",
    "Field",
    "Instance",
    "FieldDriver",
    "FrameClock",
    "Tickable",
    "iter_cells",
    "layout",
    "vertical_offset",
    "vertical_offsets",
]
