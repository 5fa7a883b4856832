"""Cancellable one-second countdown used for rest intervals."""

from __future__ import annotations

import logging
from typing import Callable

from backend import REST_TICK_INTERVAL


class RestTimer:
    """Count a rest interval down to zero on a scheduler's clock.

    ``scheduler`` is anything exposing ``schedule_interval(callback,
    interval)`` that returns an event with ``cancel()``; Kivy's ``Clock`` is
    used when none is given.  ``on_tick`` receives the seconds still
    remaining after every step, ``on_expire`` is called once when the count
    reaches zero.  After :meth:`cancel` no callback is delivered again, even
    if the scheduler still fires an already queued step.
    """

    def __init__(self, scheduler=None, interval: float = REST_TICK_INTERVAL):
        if scheduler is None:
            from kivy.clock import Clock

            scheduler = Clock
        self.scheduler = scheduler
        self.interval = interval
        self.remaining = 0
        self._event = None
        self._generation = 0
        self._on_tick: Callable[[int], None] | None = None
        self._on_expire: Callable[[], None] | None = None

    @property
    def active(self) -> bool:
        return self._event is not None

    def start(
        self,
        seconds: int,
        on_tick: Callable[[int], None] | None = None,
        on_expire: Callable[[], None] | None = None,
    ) -> None:
        """Begin counting down ``seconds``, replacing any running countdown."""

        self.cancel()
        self.remaining = max(0, int(seconds))
        self._on_tick = on_tick
        self._on_expire = on_expire
        if self.remaining == 0:
            self._expire()
            return
        generation = self._generation
        self._event = self.scheduler.schedule_interval(
            lambda dt: self._step(generation), self.interval
        )

    def cancel(self) -> None:
        """Stop the countdown; pending steps become no-ops."""

        self._generation += 1
        if self._event is not None:
            self._event.cancel()
            self._event = None

    def _step(self, generation: int):
        if generation != self._generation or self._event is None:
            logging.debug("Ignoring stale rest tick")
            return False
        self.remaining = max(0, self.remaining - 1)
        if self.remaining > 0:
            if self._on_tick:
                self._on_tick(self.remaining)
            return True
        self._expire()
        # returning False also unschedules a Kivy interval event
        return False

    def _expire(self) -> None:
        on_expire = self._on_expire
        self.cancel()
        self._on_tick = None
        self._on_expire = None
        if on_expire:
            on_expire()
