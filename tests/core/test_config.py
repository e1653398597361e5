from __future__ import annotations

import math

import pytest

from common.errors import ConfigError
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig


@pytest.mark.smoke
def test_defaults_validate() -> None:
    assert DistributionConfig().validate().count == 200
    ShapeConfig().validate()
    MovementConfig().validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rows": -1},
        {"columns": -3},
        {"rows": 2.5},
        {"rows": True},
        {"x_gap": float("nan")},
        {"z_slope": float("inf")},
    ],
)
def test_distribution_rejects_invalid(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        DistributionConfig(**kwargs).validate()  # type: ignore[arg-type]


def test_distribution_allows_zero_and_negative_gaps() -> None:
    DistributionConfig(rows=0, columns=0, x_gap=-1.0, z_gap=-0.5).validate()


def test_shape_rejects_non_positive_cell() -> None:
    with pytest.raises(ConfigError):
        ShapeConfig(width=0.0).validate()
    with pytest.raises(ConfigError):
        ShapeConfig(depth=-1.0).validate()


def test_movement_rejects_non_finite_but_allows_negative() -> None:
    MovementConfig(speed=-1.0, amplitude=-2.0).validate()
    with pytest.raises(ConfigError):
        MovementConfig(speed=math.nan).validate()


def test_from_mapping_accepts_camel_case_and_ignores_unknown() -> None:
    d = DistributionConfig.from_mapping(
        {"rows": 4, "columns": 6.0, "xGap": 0.5, "zSlippage": 0.1, "unknown": 1}
    )
    assert d.rows == 4 and d.columns == 6
    assert isinstance(d.columns, int)
    assert d.x_gap == 0.5 and d.z_slippage == 0.1
    m = MovementConfig.from_mapping({"amplitudeNoise": 2, "speed_noise": 0})
    assert m.amplitude_noise == 2.0 and m.speed_noise == 0.0
    assert ShapeConfig.from_mapping(None) == ShapeConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"rows": "ten"},
        {"rows": 1.5},
        {"xGap": True},
        {"rows": -2},
    ],
)
def test_from_mapping_rejects_bad_values(data: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        DistributionConfig.from_mapping(data)


def test_from_mapping_requires_mapping() -> None:
    with pytest.raises(ConfigError):
        MovementConfig.from_mapping([1, 2, 3])  # type: ignore[arg-type]


def test_jitter_weights_noise_by_seed() -> None:
    m = MovementConfig(
        amplitude=1.0, amplitude_noise=1.0, speed=0.2, speed_noise=0.5,
        inactivity=2.0, inactivity_noise=2.0,
    )
    assert m.jitter(0.5) == (0.2, 2, 1.0)
    speed, inactivity, amplitude = m.jitter(0.0)
    assert speed == pytest.approx(0.45)
    assert inactivity == 3
    assert amplitude == pytest.approx(1.5)
    # 0.5 ちょうどは正方向に丸める
    assert MovementConfig(inactivity=0.0, inactivity_noise=1.0).jitter(0.0)[1] == 1
    # 下限 0
    assert MovementConfig(inactivity=0.0, inactivity_noise=10.0).jitter(0.99)[1] == 0


def test_param_meta_covers_fields() -> None:
    from dataclasses import fields

    for cls in (DistributionConfig, ShapeConfig, MovementConfig):
        assert {f.name for f in fields(cls)} == set(cls.__param_meta__)
    assert DistributionConfig.__param_meta__["rows"]["min"] == 1
