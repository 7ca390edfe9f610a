"""Fixed-step tick drivers.

A match never schedules itself: whoever creates it hands it a ticker, and the
match calls ``start(step, on_error)`` / ``stop()`` on it. ``BackgroundTicker``
runs the step on a Socket.IO background task at a fixed rate; ``ManualTicker``
only steps when told to, which keeps tests free of wall-clock time.

When a step raises, the ticker stops and passes the exception to
``on_error``; without an ``on_error`` the exception propagates.
"""

import logging
import time
from typing import Callable, Optional

from .constants import DEFAULT_TICK_RATE_HZ

logger = logging.getLogger(__name__)

Step = Callable[[], object]
ErrorHandler = Callable[[Exception], object]


class ManualTicker:
    def __init__(self):
        self._step: Optional[Step] = None
        self._on_error: Optional[ErrorHandler] = None
        self.running = False
        self.ticks = 0

    def start(self, step: Step, on_error: Optional[ErrorHandler] = None) -> None:
        self._step = step
        self._on_error = on_error
        self.running = True

    def stop(self) -> None:
        self.running = False

    def advance(self, ticks: int = 1) -> int:
        """Run up to ``ticks`` steps; stops early once the ticker is stopped.

        Returns the number of steps actually run.
        """
        done = 0
        for _ in range(ticks):
            if not self.running or self._step is None:
                break
            try:
                self._step()
            except Exception as exc:
                self.running = False
                if self._on_error is None:
                    raise
                self._on_error(exc)
                break
            self.ticks += 1
            done += 1
        return done


class BackgroundTicker:
    """Calls ``step`` every ``1 / rate_hz`` seconds on a background task.

    ``socketio`` is the Flask-SocketIO instance, used only for
    ``start_background_task`` and ``sleep`` so the loop cooperates with
    whatever async mode the server runs in.
    """

    def __init__(self, socketio, rate_hz: float = DEFAULT_TICK_RATE_HZ, name: str = ''):
        if rate_hz <= 0:
            raise ValueError('rate_hz must be positive')
        self._socketio = socketio
        self.interval = 1.0 / rate_hz
        self.name = name
        self._generation = 0
        self.running = False
        self.ticks = 0

    def start(self, step: Step, on_error: Optional[ErrorHandler] = None) -> None:
        if self.running:
            return
        self.running = True
        self._generation += 1
        logger.info(f"[ticker-start] game={self.name} interval={self.interval:.4f}s")
        self._socketio.start_background_task(self._run, step, on_error, self._generation)

    def stop(self) -> None:
        if self.running:
            logger.info(f"[ticker-stop] game={self.name}")
        self.running = False

    def _active(self, generation: int) -> bool:
        return self.running and generation == self._generation

    def _run(self, step: Step, on_error: Optional[ErrorHandler], generation: int) -> None:
        next_at = time.monotonic()
        while self._active(generation):
            next_at += self.interval
            self._socketio.sleep(max(0.0, next_at - time.monotonic()))
            if not self._active(generation):
                break
            try:
                step()
            except Exception as exc:
                logger.exception(f"[ticker-error] game={self.name} step failed, stopping")
                self.running = False
                if on_error is None:
                    raise
                on_error(exc)
                return
            self.ticks += 1
