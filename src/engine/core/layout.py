"""
どこで: `engine.core.layout`
何を: 配置設定からグリッド各セルの基準位置 (x, 0, z) を決定的に生成する。
なぜ: フィールド再構築時の配置を純関数として切り出し、シード導出と同じ順序を保証するため。

座標:
- 行 r は x 方向、列 c は z 方向に並ぶ（y は高さなので平面は x-z）。
- 原点中心: `initial_x = -w*rows/2 + w/2`, `initial_z = -d*columns/2 + d/2`。
- せん断（slippage）は列ごとに x、行ごとに z をずらし、平行四辺形の配置を作る。
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .config import DistributionConfig


def iter_cells(
    distribution: DistributionConfig, cell_width: float, cell_depth: float
) -> Iterator[tuple[int, int, float, float]]:
    """`(row, column, x, z)` を行優先（row 外側、column 内側）で列挙する。"""
    rows = int(distribution.rows)
    columns = int(distribution.columns)
    w = float(cell_width)
    d = float(cell_depth)
    initial_x = -w * rows / 2 + w / 2
    initial_z = -d * columns / 2 + d / 2
    for r in range(rows):
        for c in range(columns):
            x = initial_x + r * (w + distribution.x_gap) + distribution.x_slippage * c
            z = initial_z + c * (d + distribution.z_gap) + distribution.z_slippage * r
            yield r, c, x, z


def layout(distribution: DistributionConfig, cell_width: float, cell_depth: float) -> np.ndarray:
    """全セルの基準位置を (rows*columns, 3) の float64 配列で返す（y は常に 0）。

    rows か columns が 0 の場合は (0, 3) の空配列を返す。負の gap はセルの重なりとして許容。
    """
    rows = int(distribution.rows)
    columns = int(distribution.columns)
    if rows <= 0 or columns <= 0:
        return np.empty((0, 3), dtype=np.float64)

    w = float(cell_width)
    d = float(cell_depth)
    r = np.repeat(np.arange(rows, dtype=np.float64), columns)
    c = np.tile(np.arange(columns, dtype=np.float64), rows)

    out = np.zeros((rows * columns, 3), dtype=np.float64)
    out[:, 0] = (-w * rows / 2 + w / 2) + r * (w + distribution.x_gap) + distribution.x_slippage * c
    out[:, 2] = (-d * columns / 2 + d / 2) + c * (d + distribution.z_gap) + distribution.z_slippage * r
    return out


__all__ = ["iter_cells", "layout"]
