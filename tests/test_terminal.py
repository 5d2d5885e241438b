"""Tests for curses key decoding and the terminal guard rails."""

import curses
from types import SimpleNamespace

import pytest

from terminal_snake import terminal as terminal_mod
from terminal_snake.errors import InputSourceError, TerminalError
from terminal_snake.terminal import (
    ESCDELAY_MS,
    CursesTerminal,
    KeyCode,
    KeyEvent,
    Modifier,
    decode_key,
)


class TestDecodeKey:
    @pytest.mark.parametrize(("ch", "code"), [
        (curses.KEY_UP, KeyCode.UP),
        (curses.KEY_RIGHT, KeyCode.RIGHT),
        (curses.KEY_DOWN, KeyCode.DOWN),
        (curses.KEY_LEFT, KeyCode.LEFT),
    ])
    def test_arrows(self, ch, code):
        assert decode_key(ch) == KeyEvent(code)

    @pytest.mark.parametrize("ch", [ord("q"), ord("Q"), 27])
    def test_quit_keys(self, ch):
        assert decode_key(ch).code is KeyCode.QUIT

    def test_ctrl_c(self):
        event = decode_key(3)
        assert event.code is KeyCode.OTHER
        assert event.char == "c"
        assert event.modifiers == frozenset({Modifier.CONTROL})

    def test_plain_letter(self):
        event = decode_key(ord("x"))
        assert event == KeyEvent(KeyCode.OTHER, "x")
        assert not event.modifiers

    def test_unknown_key(self):
        assert decode_key(curses.KEY_F1) == KeyEvent(KeyCode.OTHER)


class TestCursesTerminalGuards:
    def test_poll_outside_session(self):
        with pytest.raises(TerminalError, match="not active"):
            CursesTerminal().poll_input(0.1)

    def test_render_outside_session(self):
        with pytest.raises(TerminalError, match="not active"):
            CursesTerminal().render(10, 10, [], None)


class StubScreen:
    """Stand-in for a curses window."""

    def __init__(self, size=(24, 80), keys=()):
        self.size = size
        self.keys = list(keys)
        self.keypad_calls = []
        self.timeouts = []

    def keypad(self, flag):
        self.keypad_calls.append(flag)

    def getmaxyx(self):
        return self.size

    def clear(self):
        pass

    def timeout(self, ms):
        self.timeouts.append(ms)

    def getch(self):
        key = self.keys.pop(0) if self.keys else -1
        if isinstance(key, Exception):
            raise key
        return key


@pytest.fixture
def fake_curses(monkeypatch):
    calls = []
    fake = SimpleNamespace(calls=calls, screen=StubScreen())

    def record(name, result=None):
        def fn(*args):
            calls.append((name, *args))
            return result
        return fn

    monkeypatch.setattr(terminal_mod.curses, "initscr", lambda: fake.screen)
    monkeypatch.setattr(terminal_mod.curses, "noecho", record("noecho"))
    monkeypatch.setattr(terminal_mod.curses, "echo", record("echo"))
    monkeypatch.setattr(terminal_mod.curses, "raw", record("raw"))
    monkeypatch.setattr(terminal_mod.curses, "noraw", record("noraw"))
    monkeypatch.setattr(terminal_mod.curses, "curs_set", record("curs_set", 1))
    monkeypatch.setattr(terminal_mod.curses, "endwin", record("endwin"))
    monkeypatch.setattr(
        terminal_mod.curses, "set_escdelay", record("set_escdelay"),
    )
    return fake


class TestCursesTerminalSession:
    def test_setup(self, fake_curses):
        term = CursesTerminal()
        with term.session(10, 10):
            assert ("raw",) in fake_curses.calls
            assert ("curs_set", 0) in fake_curses.calls
            assert ("set_escdelay", ESCDELAY_MS) in fake_curses.calls
            assert fake_curses.screen.keypad_calls == [True]

    def test_restores_when_body_raises(self, fake_curses):
        term = CursesTerminal()
        with pytest.raises(RuntimeError, match="boom"):
            with term.session(10, 10):
                raise RuntimeError("boom")
        assert ("noraw",) in fake_curses.calls
        assert ("echo",) in fake_curses.calls
        assert ("curs_set", 1) in fake_curses.calls
        assert fake_curses.calls[-1] == ("endwin",)
        assert fake_curses.screen.keypad_calls == [True, False]

    def test_too_small_restores(self, fake_curses):
        fake_curses.screen.size = (5, 5)
        term = CursesTerminal()
        with pytest.raises(TerminalError, match="needs 12x13"):
            with term.session(10, 10):
                pass
        assert ("noraw",) in fake_curses.calls
        assert fake_curses.calls[-1] == ("endwin",)

    def test_session_inactive_afterwards(self, fake_curses):
        term = CursesTerminal()
        with term.session(10, 10):
            pass
        with pytest.raises(TerminalError, match="not active"):
            term.poll_input(0.1)


class TestCursesTerminalPoll:
    def test_timeout_in_milliseconds(self, fake_curses):
        fake_curses.screen.keys = [curses.KEY_UP]
        term = CursesTerminal()
        with term.session(10, 10):
            assert term.poll_input(0.05) == KeyEvent(KeyCode.UP)
        assert fake_curses.screen.timeouts == [50]

    def test_no_key(self, fake_curses):
        term = CursesTerminal()
        with term.session(10, 10):
            assert term.poll_input(0.2) is None

    def test_getch_error(self, fake_curses):
        fake_curses.screen.keys = [curses.error("read failed")]
        term = CursesTerminal()
        with term.session(10, 10):
            with pytest.raises(InputSourceError, match="read failed"):
                term.poll_input(0.05)
        assert fake_curses.calls[-1] == ("endwin",)
