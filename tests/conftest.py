"""共通フィクスチャ。

- 乱数シード固定
- 小さな Field 試料（せん断/傾斜なし）
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig
from engine.core.field import Field


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def flat_distribution() -> DistributionConfig:
    """3x3、間隔/せん断/傾斜なし。"""
    return DistributionConfig(
        rows=3,
        columns=3,
        x_gap=0.0,
        z_gap=0.0,
        x_slippage=0.0,
        z_slippage=0.0,
        x_slope=0.0,
        z_slope=0.0,
    )


@pytest.fixture()
def shape_2x1() -> ShapeConfig:
    return ShapeConfig(width=2.0, height=2.0, depth=1.0)


@pytest.fixture()
def still_movement() -> MovementConfig:
    """振幅 0・ノイズ 0（常に y=0）。"""
    return MovementConfig(
        amplitude=0.0,
        amplitude_noise=0.0,
        speed=0.2,
        speed_noise=0.0,
        inactivity=2.0,
        inactivity_noise=0.0,
    )


@pytest.fixture()
def field_3x3(flat_distribution: DistributionConfig, shape_2x1: ShapeConfig) -> Field:
    f = Field()
    f.rebuild(flat_distribution, shape_2x1)
    return f


@pytest.fixture()
def env_clean(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("FIELD_FPS", "FIELD_MAX_ELAPSED", "FIELD_LOG_LEVEL", "FIELD_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    settings.reload_from_env()
