"""
どこで: `api.config`（設定解決の純粋関数/小ヘルパ）。
何を: YAML 設定から配置/形状/動作レコードと FPS・停止時刻を解決する。
なぜ: `api.runner` を薄く保ち、テスト容易性と再利用性を上げるため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import get as get_settings
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig
from util.utils import config_section, load_config, runner_option

logger = logging.getLogger(__name__)

DEFAULT_MAX_ELAPSED = 100_000.0


def load_field_config(
    cfg: Mapping[str, Any] | None = None,
) -> tuple[DistributionConfig, ShapeConfig, MovementConfig]:
    """`artefact.{distribution,shape,movement}` から 3 つの設定レコードを構築する。

    - `cfg` 未指定時は `util.utils.load_config()` を使用。
    - 欠けたセクションは既定値。値の型不正/範囲外は `ConfigError`。
    """
    data = load_config() if cfg is None else cfg
    distribution = DistributionConfig.from_mapping(
        config_section(data, "artefact", "distribution")
    )
    shape = ShapeConfig.from_mapping(config_section(data, "artefact", "shape"))
    movement = MovementConfig.from_mapping(config_section(data, "artefact", "movement"))
    return distribution, shape, movement


def resolve_fps(
    requested_fps: int | None, cfg: Mapping[str, Any] | None = None, *, default: int = 60
) -> int:
    """FPS を解決して 1 以上の int を返す。

    優先順: 引数 > 環境変数 `FIELD_FPS` > 設定 `runner.fps` > 既定値。
    数値化できない値は次の候補へフォールバックする。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError):
            logger.warning("invalid fps %r; falling back", requested_fps)
    env_fps = get_settings().FPS
    if env_fps is not None:
        return max(1, env_fps)
    data = load_config() if cfg is None else cfg
    cfg_fps = runner_option(data, "fps")
    return max(1, int(cfg_fps if cfg_fps is not None else default))


def resolve_max_elapsed(
    requested: float | None, cfg: Mapping[str, Any] | None = None
) -> float | None:
    """停止時刻 [秒] を解決する。0 以下は無制限（None）。

    優先順: 引数 > 環境変数 `FIELD_MAX_ELAPSED` > 設定 `runner.max_elapsed` > 既定 100000。
    `resolve_fps` と同じ順序。
    """
    if requested is None:
        requested = get_settings().MAX_ELAPSED
    if requested is None:
        data = load_config() if cfg is None else cfg
        requested = runner_option(data, "max_elapsed")
    if requested is None:
        requested = DEFAULT_MAX_ELAPSED
    value = float(requested)
    return value if value > 0 else None


__all__ = ["load_field_config", "resolve_fps", "resolve_max_elapsed"]
