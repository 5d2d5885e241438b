"""Shared fakes for driving the game loop without a real terminal."""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager

import pytest


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeTerminal:
    """Scripted terminal.

    Each poll consumes one scripted item: a ``KeyEvent`` arrives after
    10 ms, an exception instance is raised, ``None`` times out. Once the
    script is exhausted every poll times out.
    """

    KEY_DELAY = 0.01

    def __init__(self, clock, events=(), size=(80, 24)) -> None:
        self.clock = clock
        self.events = deque(events)
        self.size = size
        self.polls: list[float] = []
        self.frames: list[dict] = []
        self.session_entered = False
        self.session_exited = False

    def measure(self):
        return self.size

    @contextmanager
    def session(self, width, height):
        self.session_entered = True
        try:
            yield
        finally:
            self.session_exited = True

    def poll_input(self, timeout):
        self.polls.append(timeout)
        if self.events:
            item = self.events.popleft()
            if isinstance(item, Exception):
                raise item
            if item is not None:
                self.clock.now += min(timeout, self.KEY_DELAY)
                return item
        self.clock.now += timeout
        return None

    def render(self, width, height, body, food, score=0, speed=0):
        self.frames.append({
            "width": width,
            "height": height,
            "body": list(body),
            "food": food,
            "score": score,
            "speed": speed,
        })


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_terminal(clock):
    def factory(events=(), size=(80, 24)):
        return FakeTerminal(clock, events=events, size=size)
    return factory
