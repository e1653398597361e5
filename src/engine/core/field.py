"""
どこで: `engine.core.field`
何を: グリッド配置とシード導出からアーティファクト個体群を構築し、毎フレームの高さを更新する。
なぜ: 描画層からは「位置の列」だけを読めばよい形にし、状態の書き手を Field 1 つに限定するため。

状態モデル:
- 個体（`Instance`）のシード/基準位置は生成時に確定し不変。`current_y` のみ `tick` が更新。
- `rebuild` は個体群を丸ごと置換する（個体単位の差分更新はしない）。
- `tick` と `rebuild` の直列化は呼び出し側（駆動ループ）の責務。
"""

from __future__ import annotations

import logging
import math

import numpy as np

from common.errors import ConfigError
from common.seed import seeds_for

from .config import DistributionConfig, MovementConfig, ShapeConfig
from .layout import layout
from .motion import jitter_arrays, vertical_offsets

logger = logging.getLogger(__name__)


class Instance:
    """配置済みアーティファクト 1 個。`seed` と基準位置は読み取り専用。"""

    __slots__ = ("_seed", "_base_x", "_base_z", "current_y")

    def __init__(self, seed: float, base_x: float, base_z: float, current_y: float = 0.0) -> None:
        self._seed = float(seed)
        self._base_x = float(base_x)
        self._base_z = float(base_z)
        self.current_y = float(current_y)

    @property
    def seed(self) -> float:
        return self._seed

    @property
    def base_x(self) -> float:
        return self._base_x

    @property
    def base_z(self) -> float:
        return self._base_z

    @property
    def base_position(self) -> tuple[float, float]:
        return (self._base_x, self._base_z)

    def position(self) -> tuple[float, float, float]:
        """描画用の `(x, current_y, z)`。"""
        return (self._base_x, self.current_y, self._base_z)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return (
            f"Instance(seed={self._seed:.6f}, x={self._base_x:g}, z={self._base_z:g}, "
            f"y={self.current_y:g})"
        )


class Field:
    """アーティファクトの場（個体群の所有者）。

    使い方:
        field = Field()
        field.rebuild(DistributionConfig(rows=3, columns=3), ShapeConfig())
        positions = field.tick(t, MovementConfig())  # (N, 3) float32
    """

    def __init__(
        self,
        distribution: DistributionConfig | None = None,
        shape: ShapeConfig | None = None,
    ) -> None:
        self._distribution: DistributionConfig | None = None
        self._shape: ShapeConfig | None = None
        self._instances: tuple[Instance, ...] = ()
        self._base = np.empty((0, 3), dtype=np.float64)
        self._seeds = np.empty((0,), dtype=np.float64)
        if distribution is not None or shape is not None:
            self.rebuild(distribution or DistributionConfig(), shape or ShapeConfig())

    # ---- 読み取り ---------------------------------------------------------
    @property
    def instances(self) -> tuple[Instance, ...]:
        return self._instances

    @property
    def seeds(self) -> np.ndarray:
        return self._seeds.copy()

    @property
    def distribution(self) -> DistributionConfig | None:
        return self._distribution

    @property
    def shape(self) -> ShapeConfig | None:
        return self._shape

    def __len__(self) -> int:
        return len(self._instances)

    def positions(self) -> np.ndarray:
        """描画層へ渡す `(x, current_y, z)` の (N, 3) float32 配列。"""
        out = self._base.astype(np.float32)
        if out.shape[0]:
            out[:, 1] = [inst.current_y for inst in self._instances]
        return out

    # ---- 更新 -------------------------------------------------------------
    def rebuild(
        self, distribution: DistributionConfig, shape: ShapeConfig
    ) -> tuple[Instance, ...]:
        """個体群を破棄し、配置からシードを導出して作り直す。

        同一設定での再呼び出しは同一のシード/位置を返す（冪等）。
        """
        distribution.validate()
        shape.validate()

        base = layout(distribution, shape.width, shape.depth)
        seeds = seeds_for(base)

        self._distribution = distribution
        self._shape = shape
        self._base = base
        self._seeds = seeds
        self._instances = tuple(
            Instance(s, x, z) for s, (x, _y, z) in zip(seeds.tolist(), base.tolist())
        )
        logger.debug(
            "field rebuilt: %d instances (%dx%d)",
            len(self._instances),
            distribution.rows,
            distribution.columns,
        )
        return self._instances

    def tick(self, elapsed_time: float, movement: MovementConfig) -> np.ndarray:
        """全個体の `current_y` を時刻 `elapsed_time` の値へ更新し、位置配列を返す。"""
        try:
            t = float(elapsed_time)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"elapsed_time は数値が必要: {elapsed_time!r}") from e
        if not math.isfinite(t) or t < 0.0:
            raise ConfigError(f"elapsed_time は 0 以上の有限値が必要: {elapsed_time!r}")
        movement.validate()

        if not self._instances:
            return self.positions()

        speeds, inactivity, amplitudes = jitter_arrays(movement, self._seeds)
        y = vertical_offsets(t, self._seeds, speeds, inactivity, amplitudes)

        dist = self._distribution
        if dist is not None and (dist.x_slope or dist.z_slope):
            y = y - self._base[:, 2] * dist.z_slope - self._base[:, 0] * dist.x_slope

        for inst, value in zip(self._instances, y.tolist()):
            inst.current_y = value
        return self.positions()


__all__ = ["Instance", "Field"]
