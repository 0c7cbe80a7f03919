import os
import pty
import queue
import termios

from dotfiles_installer.ui.terminal import KeyReader, cbreak, decode_keys


def test_arrow_keys():
    assert decode_keys(b"\x1b[A\x1b[B\x1b[C\x1b[D") == ["up", "down", "right", "left"]


def test_application_mode_arrows():
    assert decode_keys(b"\x1bOA\x1bOD") == ["up", "left"]


def test_plain_keys():
    assert decode_keys(b"jk q\r") == ["j", "k", "space", "q", "enter"]
    assert decode_keys(b"\x03") == ["ctrl+c"]
    assert decode_keys(b"\n") == ["enter"]


def test_unknown_escape_sequence_is_dropped():
    # F5 and a bracketed-paste start marker
    assert decode_keys(b"\x1b[15~x\x1b[200~") == ["x"]


def test_lone_escape():
    assert decode_keys(b"\x1b") == ["esc"]


def test_key_reader_posts_keys_and_joins_on_stop():
    r, w = os.pipe()
    inbox = queue.Queue()
    reader = KeyReader(inbox, fd=r, poll=0.01).start()
    try:
        os.write(w, b"j\x1b[C ")
        keys = [inbox.get(timeout=5).key for _ in range(3)]
    finally:
        reader.stop()
        os.close(w)
        os.close(r)
    assert keys == ["j", "right", "space"]
    assert not reader._thread.is_alive()


def test_stop_before_start_is_harmless():
    r, w = os.pipe()
    try:
        KeyReader(queue.Queue(), fd=r).stop()
    finally:
        os.close(w)
        os.close(r)


def test_cbreak_restores_terminal_mode():
    master, slave = pty.openpty()
    try:
        before = termios.tcgetattr(slave)
        with cbreak(slave):
            assert not termios.tcgetattr(slave)[3] & termios.ICANON
        assert termios.tcgetattr(slave) == before
    finally:
        os.close(master)
        os.close(slave)


def test_cbreak_is_a_noop_off_a_tty():
    r, w = os.pipe()
    try:
        with cbreak(r):
            pass
    finally:
        os.close(w)
        os.close(r)
