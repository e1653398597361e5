"""
どこで: `engine.core.config`
何を: 配置（DistributionConfig）・形状（ShapeConfig）・動作（MovementConfig）の設定レコードと検証。
なぜ: レイアウト/モーション計算へ渡す前に、境界で一度だけ意味検証するため。

設計方針:
- いずれも frozen dataclass。再構築ごとに不変、動作設定はフレーム間で差し替え可能。
- `from_mapping` は YAML 由来の辞書を受け付け、snake_case / camelCase の両方を解釈する。
- 負の gap/速度/振幅は芸術的に有効な構成として許容（エラーにしない）。
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Mapping, TypeVar

from common.errors import ConfigError

logger = logging.getLogger(__name__)

_C = TypeVar("_C")

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _require_finite(owner: str, name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{owner}.{name} は数値が必要: {value!r}")
    if not math.isfinite(float(value)):
        raise ConfigError(f"{owner}.{name} は有限値が必要: {value!r}")


def _require_count(owner: str, name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{owner}.{name} は整数が必要: {value!r}")
    if value < 0:
        raise ConfigError(f"{owner}.{name} は 0 以上が必要: {value!r}")


def _coerce(owner: str, name: str, value: Any, kind: type) -> Any:
    """YAML 値をフィールド型へ寄せる（整数値の float → int のみ許容）。"""
    if isinstance(value, bool):
        raise ConfigError(f"{owner}.{name} に bool は指定できない: {value!r}")
    if kind is int:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if not isinstance(value, int):
            raise ConfigError(f"{owner}.{name} は整数が必要: {value!r}")
        return value
    if isinstance(value, (int, float)):
        return float(value)
    raise ConfigError(f"{owner}.{name} は数値が必要: {value!r}")


def _from_mapping(cls: type[_C], data: Mapping[str, Any] | None) -> _C:
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise ConfigError(f"{cls.__name__} には辞書が必要: {type(data).__name__}")
    known = {f.name: f for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _snake(str(raw_key))
        f = known.get(key)
        if f is None:
            logger.debug("%s: unknown key ignored: %s", cls.__name__, raw_key)
            continue
        kind = int if f.type in ("int", int) else float
        kwargs[key] = _coerce(cls.__name__, key, value, kind)
    cfg = cls(**kwargs)
    cfg.validate()
    return cfg


@dataclass(frozen=True)
class DistributionConfig:
    """グリッド配置の設定（行数・列数・間隔・せん断・傾斜）。"""

    rows: int = 10
    columns: int = 20
    x_gap: float = 0.0
    z_gap: float = 0.0
    x_slippage: float = 0.3
    z_slippage: float = 0.26
    x_slope: float = -0.05
    z_slope: float = 0.12

    __param_meta__: ClassVar[dict[str, dict[str, Any]]] = {
        "rows": {"type": "integer", "min": 1, "max": 200, "step": 1},
        "columns": {"type": "integer", "min": 1, "max": 200, "step": 1},
        "x_gap": {"type": "number", "min": -2.0, "max": 2.0, "step": 0.01},
        "z_gap": {"type": "number", "min": -2.0, "max": 2.0, "step": 0.01},
        "x_slippage": {"type": "number", "min": -2.0, "max": 2.0, "step": 0.01},
        "z_slippage": {"type": "number", "min": -2.0, "max": 2.0, "step": 0.01},
        "x_slope": {"type": "number", "min": -1.0, "max": 1.0, "step": 0.01},
        "z_slope": {"type": "number", "min": -1.0, "max": 1.0, "step": 0.01},
    }

    def validate(self) -> "DistributionConfig":
        name = type(self).__name__
        _require_count(name, "rows", self.rows)
        _require_count(name, "columns", self.columns)
        for key in ("x_gap", "z_gap", "x_slippage", "z_slippage", "x_slope", "z_slope"):
            _require_finite(name, key, getattr(self, key))
        return self

    @property
    def count(self) -> int:
        return int(self.rows) * int(self.columns)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "DistributionConfig":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class ShapeConfig:
    """アーティファクト 1 個の寸法。`width`/`depth` がセル寸法になる。

    `height`/`polygons` はレンダリング層が消費する値で、ここでは保持のみ。
    """

    width: float = 2.0
    height: float = 2.0
    depth: float = 1.0
    polygons: int = 100

    __param_meta__: ClassVar[dict[str, dict[str, Any]]] = {
        "width": {"type": "number", "min": 1.0, "max": 10.0, "step": 0.1},
        "height": {"type": "number", "min": 1.0, "max": 10.0, "step": 0.1},
        "depth": {"type": "number", "min": 1.0, "max": 10.0, "step": 0.1},
        "polygons": {"type": "integer", "min": 0, "max": 720, "step": 1},
    }

    def validate(self) -> "ShapeConfig":
        name = type(self).__name__
        for key in ("width", "height", "depth"):
            _require_finite(name, key, getattr(self, key))
        if self.width <= 0 or self.depth <= 0:
            raise ConfigError(
                f"{name}.width/depth は正の値が必要: width={self.width}, depth={self.depth}"
            )
        _require_count(name, "polygons", self.polygons)
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ShapeConfig":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class MovementConfig:
    """上下動の全体パラメータと、シードで重み付けするノイズ量。"""

    amplitude: float = 0.0
    amplitude_noise: float = 1.0
    speed: float = 0.2
    speed_noise: float = 0.5
    inactivity: float = 2.0
    inactivity_noise: float = 2.0

    __param_meta__: ClassVar[dict[str, dict[str, Any]]] = {
        "amplitude": {"type": "number", "min": -5.0, "max": 5.0, "step": 0.1},
        "amplitude_noise": {"type": "number", "min": 0.0, "max": 5.0, "step": 0.1},
        "speed": {"type": "number", "min": -2.0, "max": 2.0, "step": 0.1},
        "speed_noise": {"type": "number", "min": 0.0, "max": 2.0, "step": 0.1},
        "inactivity": {"type": "number", "min": 0.0, "max": 20.0, "step": 1.0},
        "inactivity_noise": {"type": "number", "min": 0.0, "max": 20.0, "step": 1.0},
    }

    def validate(self) -> "MovementConfig":
        name = type(self).__name__
        for f in fields(self):
            _require_finite(name, f.name, getattr(self, f.name))
        return self

    def jitter(self, seed: float) -> tuple[float, int, float]:
        """シード `seed` に対する個体別 `(speed, inactivity_periods, amplitude)` を返す。

        各値は `base + (0.5 - seed) * noise`。非活動周期は四捨五入（.5 は正方向）して 0 で下限。
        """
        w = 0.5 - float(seed)
        speed = self.speed + w * self.speed_noise
        inactivity = max(0, int(math.floor(self.inactivity + w * self.inactivity_noise + 0.5)))
        amplitude = self.amplitude + w * self.amplitude_noise
        return speed, inactivity, amplitude

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "MovementConfig":
        return _from_mapping(cls, data)


__all__ = ["DistributionConfig", "ShapeConfig", "MovementConfig"]
