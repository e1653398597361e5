"""
どこで: `common.seed`
何を: 初期配置座標 (x, y, z) から [0,1) の決定的シード値を導出する。
なぜ: フィールドを何度再構築しても同じ位置のアーティファクトが同じ動きをするようにするため。

設計方針:
- 鍵は固定小数点 6 桁の 10 進表記を `-` で連結した文字列（ロケール非依存）。
- `-0.0` は `0.0` に正規化（表記揺れで別シードにならないように）。
- blake2b の上位 53bit を IEEE754 の仮数として 0..1 に正規化。
"""

from __future__ import annotations

import hashlib
import math
from typing import Iterable

import numpy as np

from .errors import ConfigError

_KEY_DIGITS = 6
_MANTISSA_BITS = 53


def _canonical(v: float) -> str:
    f = float(v)
    if not math.isfinite(f):
        raise ConfigError(f"seed 座標は有限値が必要: {v!r}")
    s = f"{f:.{_KEY_DIGITS}f}"
    # "-0.000000" と "0.000000" を同一視
    if float(s) == 0.0:
        return f"{0.0:.{_KEY_DIGITS}f}"
    return s


def seed_key(x: float, y: float, z: float) -> str:
    """座標三つ組の正規化キーを返す（例: ``"-1.000000-0.000000-0.500000"``）。"""
    return "-".join(_canonical(v) for v in (x, y, z))


def seed(x: float, y: float, z: float) -> float:
    """座標 (x, y, z) から [0,1) の擬似乱数を決定的に返す。

    同じ三つ組は実行環境によらず常に同じ値を返す。隣接セル同士の値には
    目に見える相関が出ない（暗号学的ハッシュで拡散）。
    """
    h = hashlib.blake2b(seed_key(x, y, z).encode("ascii"), digest_size=8)
    x64 = int.from_bytes(h.digest(), "big")
    mant = x64 >> (64 - _MANTISSA_BITS)
    return mant / float(1 << _MANTISSA_BITS)


def seeds_for(positions: np.ndarray | Iterable[Iterable[float]]) -> np.ndarray:
    """(N, 3) の座標列に対するシード配列（float64, 入力順）を返す。"""
    arr = np.asarray(positions, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0,), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ConfigError(f"positions は (N, 3) が必要: shape={arr.shape}")
    return np.fromiter((seed(x, y, z) for x, y, z in arr), dtype=np.float64, count=arr.shape[0])


__all__ = ["seed", "seed_key", "seeds_for"]
