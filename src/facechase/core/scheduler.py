"""
Per-frame scheduled task.

Runs a callback once per frame on the asyncio loop until it is
stopped. The game controller starts it when a run begins, stops it when
the player is caught, and restarts it whenever the viewport changes.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameTask:
    """
    Cancellable "call this every display refresh" task.

    The callback receives the milliseconds elapsed since the previous
    frame. It runs to completion between awaits, so no frame is ever
    interleaved with another.
    """

    def __init__(self, callback: FrameCallback, fps: int = 60, name: str = "frame") -> None:
        self._callback = callback
        self._frame_interval = 1.0 / max(1, fps)
        self._name = name
        self._task: Optional[asyncio.Task] = None
        self._frames = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def frames(self) -> int:
        """Frames delivered since the last start()."""
        return self._frames

    def start(self) -> None:
        """Schedule the task on the running loop. No-op if already running."""
        if self.running:
            return
        self._frames = 0
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)
        logger.debug(f"FrameTask '{self._name}' started")

    def stop(self) -> None:
        """Cancel the task. Safe to call when it is not running."""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.debug(f"FrameTask '{self._name}' stopped after {self._frames} frames")
        self._task = None

    def restart(self) -> None:
        self.stop()
        self.start()

    async def _run(self) -> None:
        last = time.perf_counter()
        while True:
            await asyncio.sleep(self._frame_interval)
            now = time.perf_counter()
            delta_ms = (now - last) * 1000.0
            last = now
            try:
                self._callback(delta_ms)
            except Exception as e:
                logger.exception(f"FrameTask '{self._name}' callback failed: {e}")
                return
            self._frames += 1
