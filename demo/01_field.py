#!/usr/bin/env python3
"""
デモ: フィールドを pyglet のクロックで駆動し、毎秒の高さの統計をログに出す（描画なし）。
"""

import logging
import os
import sys

# src を import path の先頭に追加
SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from api import MovementConfig, run

logger = logging.getLogger("demo.field")


class _Stats:
    def __init__(self, fps: int) -> None:
        self.fps = fps
        self.frame = 0

    def __call__(self, positions) -> None:
        self.frame += 1
        if self.frame % self.fps == 0:
            y = positions[:, 1]
            logger.info(
                "t=%ds n=%d y[min=%.3f mean=%.3f max=%.3f]",
                self.frame // self.fps, len(y), y.min(), y.mean(), y.max(),
            )


if __name__ == "__main__":
    fps = 30
    run(_Stats(fps), fps=fps, movement=MovementConfig(amplitude=0.6), max_elapsed=20.0)
