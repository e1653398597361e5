"""
どこで: `engine.core.motion`
何を: 個体のシードと動作パラメータから、任意時刻の上下オフセットを計算する。
なぜ: 「正弦波で動く半周期」と「静止する半周期」を交互に繰り返す上下動を、決定的に再現するため。

アルゴリズム:
- 搬送波の位相 `phase = time*speed + seed*2`（周期単位）、角度 `phase * 2π`。
- 半周期インデックス `h = floor((phase - 0.25) * 2)`。境界は sin の極値（山/谷）に一致する。
- 非活動周期 `n` のとき、1 サイクルは `2n+1` 個の半周期。`h > 0` かつ `h` が `2n+1` の倍数の
  半周期だけ動く。`last_active = h - rem` の剰余は切り捨て除算（符号は h に従う）で、
  開始直後の `h = -1` も `last_active = 0`（-amplitude）に留まり、最初の活動半周期の始点と一致する。
- 静止中は直前の活動半周期の終端値に留まる（奇数なら +amplitude、偶数なら -amplitude）。
  終端値は sin の極値なので、静止→再開で値が跳ばない。
- `speed <= 0` は位相の進行を 0 に固定（静止個体）。`n <= 0` は常時活動（純粋な正弦波）。
"""

from __future__ import annotations

import math

import numpy as np

from .config import MovementConfig

TAU = 2.0 * math.pi


def _progress(time: float, speed: float) -> float:
    return float(time) * float(speed) if speed > 0 else 0.0


def _trunc_rem(h: int, k: int) -> int:
    """切り捨て除算の剰余（符号は h に従う）。h = -1 は last_active = 0 に落ちる。"""
    r = abs(h) % k
    return r if h >= 0 else -r


def half_period_index(time: float, seed: float, speed: float) -> int:
    """時刻 `time` における半周期インデックスを返す。"""
    phase = _progress(time, speed) + float(seed) * 2.0
    return int(math.floor((phase - 0.25) * 2.0))


def vertical_offset(
    time: float, seed: float, speed: float, inactivity_periods: int, amplitude: float
) -> float:
    """個体 1 つの上下オフセットを返す（スカラ版）。

    引数:
        time: フィールド開始からの経過秒（単調非減少）。
        seed: 個体のシード [0,1)。
        speed: 搬送波の速度 [周期/秒]。0 以下で静止。
        inactivity_periods: 動きの間に静止する周期数。0 以下で常時活動。
        amplitude: 振幅。0 なら常に 0。

    返り値:
        float: y 方向のオフセット（傾斜補正前）。
    """
    phase = _progress(time, speed) + float(seed) * 2.0
    moving_value = math.sin(phase * TAU) * amplitude

    n = int(inactivity_periods)
    if n <= 0:
        return moving_value

    h = int(math.floor((phase - 0.25) * 2.0))
    rem = _trunc_rem(h, n * 2 + 1)
    if h > 0 and rem == 0:
        return moving_value
    last_active = h - rem
    return amplitude if last_active % 2 == 1 else -amplitude


def vertical_offsets(
    time: float,
    seeds: np.ndarray,
    speeds: np.ndarray | float,
    inactivity_periods: np.ndarray | int,
    amplitudes: np.ndarray | float,
) -> np.ndarray:
    """`vertical_offset` のベクトル化版。要素ごとにスカラ版と同じ値を返す。"""
    seeds_a = np.asarray(seeds, dtype=np.float64)
    speeds_a = np.broadcast_to(np.asarray(speeds, dtype=np.float64), seeds_a.shape)
    amps_a = np.broadcast_to(np.asarray(amplitudes, dtype=np.float64), seeds_a.shape)
    n = np.broadcast_to(np.asarray(inactivity_periods, dtype=np.int64), seeds_a.shape)

    progress = np.where(speeds_a > 0, float(time) * speeds_a, 0.0)
    phase = progress + seeds_a * 2.0
    moving_value = np.sin(phase * TAU) * amps_a

    # h は float64 のまま扱う（巨大な時刻でも int64 に溢れない。fmod は厳密）
    h = np.floor((phase - 0.25) * 2.0)
    cycle = (np.maximum(n, 0) * 2 + 1).astype(np.float64)
    rem = np.fmod(h, cycle)
    moving = (n <= 0) | ((h > 0) & (rem == 0))
    # last_active = h - rem の偶奇（h と rem は同符号なので fmod(., 2) の不一致が奇数）
    last_odd = np.fmod(h, 2.0) != np.fmod(rem, 2.0)
    idle_value = np.where(last_odd, amps_a, -amps_a)
    return np.where(moving, moving_value, idle_value)


def jitter_arrays(
    movement: MovementConfig, seeds: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """`MovementConfig.jitter` のベクトル化版。`(speeds, inactivity_periods, amplitudes)` を返す。"""
    w = 0.5 - np.asarray(seeds, dtype=np.float64)
    speeds = movement.speed + w * movement.speed_noise
    inactivity = np.floor(movement.inactivity + w * movement.inactivity_noise + 0.5)
    inactivity = np.maximum(inactivity, 0).astype(np.int64)
    amplitudes = movement.amplitude + w * movement.amplitude_noise
    return speeds, inactivity, amplitudes


__all__ = [
    "TAU",
    "half_period_index",
    "vertical_offset",
    "vertical_offsets",
    "jitter_arrays",
]
