from __future__ import annotations

import numpy as np
import pytest

from common.errors import ConfigError
from common.seed import seed
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig
from engine.core.field import Field, Instance
from engine.core.motion import vertical_offset


@pytest.mark.smoke
def test_end_to_end_3x3_zero_amplitude(
    flat_distribution: DistributionConfig, shape_2x1: ShapeConfig, still_movement: MovementConfig
) -> None:
    field = Field()
    instances = field.rebuild(flat_distribution, shape_2x1)
    assert len(instances) == 9
    assert len({inst.seed for inst in instances}) == 9

    expected = [(-2.0 + 2.0 * r, -1.0 + 1.0 * c) for r in range(3) for c in range(3)]
    assert [inst.base_position for inst in instances] == expected
    for inst in instances:
        assert inst.seed == seed(inst.base_x, 0.0, inst.base_z)

    positions = field.tick(0.0, still_movement)
    assert all(inst.current_y == 0 for inst in field.instances)
    assert positions.shape == (9, 3)
    assert positions.dtype == np.float32
    assert np.all(positions[:, 1] == 0.0)


def test_rebuild_is_idempotent(
    flat_distribution: DistributionConfig, shape_2x1: ShapeConfig
) -> None:
    field = Field()
    a = field.rebuild(flat_distribution, shape_2x1)
    b = field.rebuild(flat_distribution, shape_2x1)
    assert a is not b
    assert [(i.seed, i.base_position) for i in a] == [(i.seed, i.base_position) for i in b]
    other = Field(flat_distribution, shape_2x1)
    np.testing.assert_array_equal(other.seeds, field.seeds)


def test_rebuild_replaces_instances_wholesale(
    flat_distribution: DistributionConfig, shape_2x1: ShapeConfig
) -> None:
    field = Field(flat_distribution, shape_2x1)
    field.tick(3.0, MovementConfig(amplitude=1.0))
    bigger = DistributionConfig(rows=4, columns=5, x_slope=0.0, z_slope=0.0)
    field.rebuild(bigger, shape_2x1)
    assert len(field) == 20
    assert all(inst.current_y == 0.0 for inst in field.instances)
    assert field.distribution is bigger


def test_tick_applies_jitter_and_slope(shape_2x1: ShapeConfig) -> None:
    dist = DistributionConfig(rows=2, columns=3, x_slope=-0.05, z_slope=0.12)
    movement = MovementConfig(
        amplitude=0.8, amplitude_noise=0.4, speed=0.3, speed_noise=0.2,
        inactivity=1.0, inactivity_noise=2.0,
    )
    field = Field(dist, shape_2x1)
    t = 7.25
    field.tick(t, movement)
    for inst in field.instances:
        speed, n, amp = movement.jitter(inst.seed)
        raw = vertical_offset(t, inst.seed, speed, n, amp)
        expected = raw - inst.base_z * dist.z_slope - inst.base_x * dist.x_slope
        assert inst.current_y == pytest.approx(expected, abs=1e-9)


def test_positions_layout_matches_instances(field_3x3: Field) -> None:
    pos = field_3x3.tick(2.0, MovementConfig(amplitude=1.0, amplitude_noise=0.0))
    for row, inst in zip(pos.tolist(), field_3x3.instances):
        assert row == pytest.approx(list(inst.position()), abs=1e-6)


def test_instance_seed_and_base_are_read_only() -> None:
    inst = Instance(0.25, 1.0, -2.0)
    with pytest.raises(AttributeError):
        inst.seed = 0.5  # type: ignore[misc]
    with pytest.raises(AttributeError):
        inst.extra = 1  # type: ignore[attr-defined]
    inst.current_y = 3.0
    assert inst.position() == (1.0, 3.0, -2.0)


def test_empty_field_ticks_to_empty(shape_2x1: ShapeConfig) -> None:
    field = Field(DistributionConfig(rows=0, columns=4), shape_2x1)
    assert len(field) == 0
    assert field.tick(1.0, MovementConfig()).shape == (0, 3)
    assert Field().positions().shape == (0, 3)


@pytest.mark.parametrize("t", [float("nan"), float("inf"), -1.0, "soon"])
def test_tick_rejects_invalid_time(field_3x3: Field, t: object) -> None:
    with pytest.raises(ConfigError):
        field_3x3.tick(t, MovementConfig())  # type: ignore[arg-type]


def test_rebuild_rejects_invalid_config(shape_2x1: ShapeConfig) -> None:
    field = Field()
    with pytest.raises(ConfigError):
        field.rebuild(DistributionConfig(rows=-1), shape_2x1)
    with pytest.raises(ConfigError):
        field.rebuild(DistributionConfig(), ShapeConfig(width=float("nan")))
    assert len(field) == 0


def test_live_movement_change_keeps_instances(field_3x3: Field) -> None:
    before = [(i.seed, i.base_position) for i in field_3x3.instances]
    field_3x3.tick(1.0, MovementConfig(amplitude=0.5))
    field_3x3.tick(1.1, MovementConfig(amplitude=2.0, speed=1.0))
    assert [(i.seed, i.base_position) for i in field_3x3.instances] == before


def test_default_field_moves_without_snapping() -> None:
    # 既定の 10x20 配置。1 ms 刻みで 3 秒進めても 1 フレームの変位は sin の傾き程度
    field = Field(DistributionConfig(), ShapeConfig())
    movement = MovementConfig(amplitude=0.6)
    prev = field.tick(0.0, movement)[:, 1].copy()
    worst = 0.0
    for i in range(1, 3001):
        y = field.tick(i * 1e-3, movement)[:, 1]
        worst = max(worst, float(np.abs(y - prev).max()))
        prev = y.copy()
    assert worst < 0.05
