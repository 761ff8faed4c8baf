"""
Shared pytest fixtures: a scripted random source and a fake clock.
"""

import random

import pytest

from engine.scheduler import Scheduler


class FixedRandom(random.Random):
    """
    Random source with scripted answers.

    randrange() cycles through `ranges`, random() always returns `value`,
    choice() picks the first element (or the last with pick_last=True).
    """

    def __init__(self, ranges=(0,), value=0.0, pick_last=False):
        super().__init__(0)
        self.ranges = list(ranges)
        self.value = value
        self.pick_last = pick_last
        self.calls = 0

    def randrange(self, *args, **kwargs):
        result = self.ranges[self.calls % len(self.ranges)]
        self.calls += 1
        return result

    def random(self):
        return self.value

    def choice(self, seq):
        return seq[-1] if self.pick_last else seq[0]


class FakeClock:
    """Manual clock for sched-based schedulers."""

    def __init__(self):
        self.now = 0.0

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.now += seconds

    def advance_ms(self, ms: float):
        self.now += ms / 1000.0


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scheduler(fake_clock):
    return Scheduler(timefunc=fake_clock.time, delayfunc=fake_clock.sleep)
