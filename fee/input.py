"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens,
then maps the tokens the browser understands onto actions.
"""

from __future__ import annotations

import enum
import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_ARROW_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


class KeyAction(enum.Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ACTIVATE = "activate"
    GO_BACK = "go_back"
    QUIT = "quit"
    NONE = "none"


KEY_ACTIONS: dict[str, KeyAction] = {
    "UP": KeyAction.MOVE_UP,
    "DOWN": KeyAction.MOVE_DOWN,
    "ENTER": KeyAction.ACTIVATE,
    "RIGHT": KeyAction.ACTIVATE,
    "ESC": KeyAction.GO_BACK,
    "LEFT": KeyAction.GO_BACK,
    "CTRL_C": KeyAction.QUIT,
}


def action_for_key(key: str) -> KeyAction:
    """Return the browser action bound to ``key``; unbound keys map to NONE."""
    return KEY_ACTIONS.get(key, KeyAction.NONE)


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte character whose first byte is ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = lead
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key press from ``fd`` and return its token.

    Returns ``""`` on EOF or when ``timeout_ms`` elapses without input.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]
    if ch != b"\x1b" and ch[0] < 0x20:
        return f"CTRL_{chr(ch[0] + 0x40)}"

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences (CSI "ESC [" and SS3 "ESC O" forms).
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROW_KEYS:
        return _ARROW_KEYS[seq]
    # Swallow the rest of an unknown CSI sequence up to its final byte.
    while not (b"@" <= seq <= b"~"):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            break
    return "UNKNOWN"
