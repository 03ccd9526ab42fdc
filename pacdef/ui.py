"""Interaction with the user on the terminal."""

from __future__ import annotations

import os
import sys
import termios

_STDIN_FD = 0


def get_user_confirmation() -> bool:
    """Ask whether to continue; an empty reply or one containing 'y' means yes."""
    print("Continue? [Y/n] ", end="", flush=True)
    reply = sys.stdin.readline()
    return not reply.strip() or "y" in reply.lower()


def read_single_char_from_terminal() -> str:
    """Read one byte from the terminal in non-canonical mode and echo it.

    The previous terminal mode is restored afterwards.
    """
    original = termios.tcgetattr(_STDIN_FD)
    raw = termios.tcgetattr(_STDIN_FD)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    raw[6][termios.VMIN] = 1
    raw[6][termios.VTIME] = 0
    termios.tcsetattr(_STDIN_FD, termios.TCSANOW, raw)
    try:
        data = os.read(_STDIN_FD, 1)
    finally:
        termios.tcsetattr(_STDIN_FD, termios.TCSANOW, original)

    if not data:
        raise EOFError("reading one byte from stdin")
    char = chr(data[0])
    print(char)
    return char