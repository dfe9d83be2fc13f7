"""Low-level terminal input decoding.

Reads raw bytes from the controlling tty and translates them into the key
tokens defined in ``lazypager.events``. Handles ESC-sequence timing and
multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from . import events

ESC_SEQUENCE_TIMEOUT_MS = 25
EOF = "EOF"
ENTER_CR = "ENTER_CR"
ENTER_LF = "ENTER_LF"
_CSI_MAX_PARAM_BYTES = 16
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": events.CTRL_C,
    b"\t": events.TAB,
    b"\x08": events.BACKSPACE,
    b"\x7f": events.BACKSPACE,
    b"\r": ENTER_CR,
    b"\n": ENTER_LF,
}

_CSI_FINAL_KEYS = {
    b"A": events.UP,
    b"B": events.DOWN,
    b"C": events.RIGHT,
    b"D": events.LEFT,
    b"H": events.HOME,
    b"F": events.END,
}

_CSI_TILDE_KEYS = {
    b"1": events.HOME,
    b"4": events.END,
    b"5": events.PAGE_UP,
    b"6": events.PAGE_DOWN,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Consume a CSI sequence through its final byte.

    Sequences outside the tables (Delete, F-keys, modified arrows) decode to
    ``UNKNOWN`` so none of their bytes leak out as printable keys.
    """
    params = b""
    while len(params) < _CSI_MAX_PARAM_BYTES:
        byte = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if byte is None:
            return events.UNKNOWN
        if 0x40 <= byte[0] <= 0x7E:
            if not params and byte in _CSI_FINAL_KEYS:
                return _CSI_FINAL_KEYS[byte]
            if byte == b"~" and params in _CSI_TILDE_KEYS:
                return _CSI_TILDE_KEYS[params]
            return events.UNKNOWN
        params += byte
    return events.UNKNOWN


def _read_ss3(fd: int) -> str:
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return events.UNKNOWN
    return _CSI_FINAL_KEYS.get(final, events.UNKNOWN)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input and ``EOF`` when
    the key source is closed.
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
            return EOF

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return events.ESC
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        return _read_ss3(fd)
    _PENDING_BYTES.append(seq)
    return events.ESC
