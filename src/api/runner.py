"""
どこで: `api.runner`（実行ランナー）。
何を: 設定を解決して Field を構築し、`pyglet.clock` のフレームごとに高さを更新して描画コールバックへ渡す。
なぜ: 駆動ループを明示的な外部呼び出しとして組み立て、描画層を差し替え可能な薄いコールバックに保つため。

実行フロー（概要）:
1) 設定解決: 引数 > ルート `config.yaml` > `configs/default.yaml` > 既定値。
2) Field 構築: `Field.rebuild(distribution, shape)`。
3) フレーム駆動: `FieldDriver` を `FrameClock` に登録し、`pyglet.clock.schedule_interval` で駆動。
4) `on_frame(positions)` に (N, 3) float32 の `(x, y, z)` を渡す。描画自体は呼び出し側の責務。
5) `max_elapsed` 経過で駆動を止め、イベントループを抜ける。

注意/制限:
- `init_only=True` なら pyglet を import せずに構築済み Field を返す（ヘッドレス検証用）。
- ヘッドレス/仮想環境では `pyglet.app` の起動に失敗する場合がある。
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from common.logging import setup_default_logging
from engine.core.config import DistributionConfig, MovementConfig, ShapeConfig
from engine.core.field import Field
from engine.core.frame_clock import FieldDriver, FrameClock
from util.utils import load_config

from .config import load_field_config, resolve_fps, resolve_max_elapsed

logger = logging.getLogger(__name__)


def build_field(
    *,
    distribution: DistributionConfig | None = None,
    shape: ShapeConfig | None = None,
    movement: MovementConfig | None = None,
) -> tuple[Field, MovementConfig]:
    """設定を解決して Field を構築し、使用する動作設定と共に返す。"""
    cfg_dist, cfg_shape, cfg_move = load_field_config(load_config())
    field = Field()
    field.rebuild(distribution or cfg_dist, shape or cfg_shape)
    return field, movement or cfg_move


def run(
    on_frame: Callable[[np.ndarray], None] | None = None,
    *,
    fps: int | None = None,
    distribution: DistributionConfig | None = None,
    shape: ShapeConfig | None = None,
    movement: MovementConfig | Callable[[], MovementConfig] | None = None,
    max_elapsed: float | None = None,
    init_only: bool = False,
) -> Field:
    """フィールドを構築し、pyglet のイベントループで毎フレーム更新する。

    Parameters
    ----------
    on_frame : Callable[[np.ndarray], None] | None
        各フレームの `(x, current_y, z)` 配列を受け取る描画コールバック。
    fps : int | None
        更新レート。None で環境変数/設定から解決（既定 60）。
    distribution, shape : 設定レコード | None
        None で設定ファイルの値。変更時は呼び出し側が `Field.rebuild` を呼ぶ。
    movement : MovementConfig | Callable[[], MovementConfig] | None
        動作設定。呼び出し可能を渡すとフレームごとに最新値を読む（ライブ調整）。
    max_elapsed : float | None
        この秒数を超えたら停止。None で `FIELD_MAX_ELAPSED` → 設定 → 既定 100000 の順に解決、0 以下で無制限。
    init_only : bool
        True で pyglet を読み込まず、構築済み Field を返して終了。

    Returns
    -------
    Field
        構築（および駆動）した Field。
    """
    setup_default_logging()
    cfg = load_config()
    fps_v = resolve_fps(fps, cfg)
    stop_at = resolve_max_elapsed(max_elapsed, cfg)

    movement_src: MovementConfig | Callable[[], MovementConfig]
    if callable(movement):
        field, _ = build_field(distribution=distribution, shape=shape)
        movement_src = movement
    else:
        field, movement_src = build_field(
            distribution=distribution, shape=shape, movement=movement
        )
    logger.info("field ready: %d instances, fps=%d", len(field), fps_v)

    if init_only:
        return field

    # 遅延インポート（ヘッドレス環境での初期化を避ける）
    import pyglet

    driver = FieldDriver(field, movement_src, on_frame, max_elapsed=stop_at)
    frame_clock = FrameClock([driver])

    def _tick(dt: float) -> None:
        frame_clock.tick(dt)
        if driver.finished:
            pyglet.clock.unschedule(_tick)
            pyglet.app.exit()

    pyglet.clock.schedule_interval(_tick, 1 / fps_v)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(_tick)
    return field


__all__ = ["build_field", "run"]
