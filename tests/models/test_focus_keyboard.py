"""Unit tests for KeyboardHandler.

Terminal calls are mocked for the setup and teardown paths; key reading uses
a real pipe so select() behaves as it does on a terminal.
"""

from __future__ import annotations

import os
import termios
from unittest.mock import MagicMock

import pytest

from pogodoro.models.focus.keyboard import ENTER, ESCAPE, KeyboardHandler


def _make_keyboard_handler(mocker, old_settings=None):
    """Create a KeyboardHandler on a fake stream with terminal calls patched."""
    stream = MagicMock()
    stream.fileno.return_value = 7
    mocker.patch("termios.tcgetattr", return_value=old_settings or ["saved"])
    mocker.patch("tty.setcbreak")
    return KeyboardHandler(stream=stream)


@pytest.fixture()
def pipe():
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "r", newline="")
    writer = os.fdopen(write_fd, "w")
    yield reader, writer
    reader.close()
    writer.close()


class TestKeyboardHandlerSetup:
    def test_saves_old_settings(self, mocker):
        sentinel = ["saved_settings"]
        handler = _make_keyboard_handler(mocker, old_settings=sentinel)
        assert handler.old_settings == sentinel

    def test_enters_cbreak_mode(self, mocker):
        mocker.patch("termios.tcgetattr", return_value=["settings"])
        setcbreak = mocker.patch("tty.setcbreak")
        stream = MagicMock()
        stream.fileno.return_value = 7

        KeyboardHandler(stream=stream)

        setcbreak.assert_called_once_with(7)

    def test_non_terminal_stream_is_tolerated(self, pipe):
        reader, _ = pipe
        handler = KeyboardHandler(stream=reader)
        assert handler.old_settings is None

    def test_stream_without_fileno_is_tolerated(self):
        stream = MagicMock()
        stream.fileno.side_effect = ValueError("I/O operation on closed file")
        assert KeyboardHandler(stream=stream).old_settings is None


class TestKeyboardHandlerStop:
    def test_restores_settings(self, mocker):
        handler = _make_keyboard_handler(mocker, old_settings=["saved"])
        tcsetattr = mocker.patch("termios.tcsetattr")

        handler.stop()

        tcsetattr.assert_called_once_with(7, termios.TCSADRAIN, ["saved"])
        assert handler.old_settings is None

    def test_second_stop_is_noop(self, mocker):
        handler = _make_keyboard_handler(mocker)
        tcsetattr = mocker.patch("termios.tcsetattr")
        handler.stop()
        handler.stop()
        assert tcsetattr.call_count == 1

    def test_restore_failure_is_logged(self, mocker):
        handler = _make_keyboard_handler(mocker)
        mocker.patch("termios.tcsetattr", side_effect=termios.error("bad fd"))
        logger = mocker.patch("pogodoro.models.focus.keyboard.logger")

        handler.stop()

        logger.warning.assert_called_once()


class TestGetKey:
    def test_none_when_nothing_pressed(self, pipe):
        reader, _ = pipe
        assert KeyboardHandler(stream=reader).get_key() is None

    def test_reads_lowercased_key(self, pipe):
        reader, writer = pipe
        writer.write("P")
        writer.flush()
        assert KeyboardHandler(stream=reader).get_key() == "p"

    def test_carriage_return_is_enter(self, pipe):
        reader, writer = pipe
        handler = KeyboardHandler(stream=reader)
        writer.write("\r")
        writer.flush()
        assert handler.get_key() == ENTER

    def test_closed_writer_reads_none(self, pipe):
        reader, writer = pipe
        writer.close()
        assert KeyboardHandler(stream=reader).get_key() is None

    def test_lone_escape(self, pipe):
        reader, writer = pipe
        writer.write(ESCAPE)
        writer.flush()
        assert KeyboardHandler(stream=reader).get_key() == ESCAPE

    def test_arrow_key_is_read_as_one_sequence(self, pipe):
        reader, writer = pipe
        handler = KeyboardHandler(stream=reader)
        writer.write("\x1b[A")
        writer.flush()

        assert handler.get_key() == "\x1b[A"
        assert handler.get_key() is None

    def test_keys_after_each_other(self, pipe):
        reader, writer = pipe
        handler = KeyboardHandler(stream=reader)
        writer.write("pq")
        writer.flush()
        assert handler.get_key() == "p"
        assert handler.get_key() == "q"
