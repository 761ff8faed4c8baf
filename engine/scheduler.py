"""
Cooperative scheduling of delayed actions.
Used for the computer's "thinking" delay; everything runs on the
caller's thread when run_pending() is pumped.
"""

import sched
import time
from typing import Callable, Optional


class ScheduledAction:
    """
    Handle to an action queued on a Scheduler.

    Cancelling is safe at any time: cancelling twice, or after the
    action already ran, does nothing.
    """

    def __init__(self, scheduler: "Scheduler", callback: Callable, args: tuple):
        self._scheduler = scheduler
        self._callback = callback
        self._args = args
        self._event: Optional[sched.Event] = None
        self.cancelled = False
        self.done = False

    @property
    def active(self) -> bool:
        """True while the action is still waiting to run."""
        return not (self.cancelled or self.done)

    def cancel(self):
        """Cancel the action if it has not run yet."""
        if not self.active:
            return
        self.cancelled = True
        self._scheduler._discard(self)

    def _fire(self):
        if not self.active:
            return
        self.done = True
        self._callback(*self._args)


class Scheduler:
    """
    Delayed-action queue on top of sched.scheduler.

    Time and sleep functions are injectable so tests can drive the queue
    with a fake clock.
    """

    def __init__(
        self,
        timefunc: Callable[[], float] = time.monotonic,
        delayfunc: Callable[[float], None] = time.sleep
    ):
        self._queue = sched.scheduler(timefunc, delayfunc)

    def call_later(self, delay_ms: float, callback: Callable, *args) -> ScheduledAction:
        """
        Queue callback(*args) to run after delay_ms milliseconds.

        Args:
            delay_ms: Delay in milliseconds.
            callback: Function to call.
            *args: Arguments passed to the callback.

        Returns:
            A ScheduledAction handle that can cancel the call.
        """
        action = ScheduledAction(self, callback, args)
        action._event = self._queue.enter(delay_ms / 1000.0, 0, action._fire)
        return action

    def _discard(self, action: ScheduledAction):
        if action._event is None:
            return
        self._queue.cancel(action._event)
        action._event = None

    def run_pending(self, blocking: bool = False) -> Optional[float]:
        """
        Run queued actions.

        Args:
            blocking: If True, wait for and run everything in the queue
                      (including actions queued while running). If False,
                      run only actions that are already due.

        Returns:
            Seconds until the next queued action, or None if the queue is empty.
        """
        return self._queue.run(blocking=blocking)

    def pending_count(self) -> int:
        """Number of actions still queued."""
        return len(self._queue.queue)

    def is_empty(self) -> bool:
        return self._queue.empty()
