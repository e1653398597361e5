"""
どこで: `engine.core` のフレーム駆動。
何を: 更新インターフェース `Tickable`、それを固定順序で呼ぶ `FrameClock`、Field を経過時間で進める `FieldDriver`。
なぜ: 駆動ループを明示的な外部呼び出しにし、`tick` の完了前に次の `tick` が走らない形にするため。
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, Sequence

import numpy as np

from .config import MovementConfig
from .field import Field

logger = logging.getLogger(__name__)


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """内部状態を `dt` 秒ぶん進める。"""


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        for t in self._tickables:
            t.tick(dt)


class FieldDriver:
    """`dt` を積算して `Field.tick` を呼び、結果の位置を描画コールバックへ渡す。

    引数:
        field: 駆動対象。
        movement: 動作設定、またはフレームごとに最新値を返す呼び出し可能（ライブ調整用）。
        on_frame: `(N, 3)` float32 の位置配列を受け取るコールバック（描画層）。
        max_elapsed: この秒数を超えたら以降のフレームでは進めない。None で無制限。
    """

    def __init__(
        self,
        field: Field,
        movement: MovementConfig | Callable[[], MovementConfig],
        on_frame: Callable[[np.ndarray], None] | None = None,
        *,
        max_elapsed: float | None = None,
    ) -> None:
        self._field = field
        self._movement = movement
        self._on_frame = on_frame
        self._max_elapsed = None if max_elapsed is None else float(max_elapsed)
        self._elapsed = 0.0
        self._finished = False

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def finished(self) -> bool:
        return self._finished

    def _current_movement(self) -> MovementConfig:
        m = self._movement
        return m if isinstance(m, MovementConfig) else m()

    def tick(self, dt: float) -> None:
        if self._finished:
            return
        # 時刻は単調非減少（負の dt は 0 とみなす）
        self._elapsed += max(0.0, float(dt))
        positions = self._field.tick(self._elapsed, self._current_movement())
        if self._on_frame is not None:
            self._on_frame(positions)
        if self._max_elapsed is not None and self._elapsed >= self._max_elapsed:
            self._finished = True
            logger.info("field driver stopped at %.3fs", self._elapsed)


__all__ = ["Tickable", "FrameClock", "FieldDriver"]
