"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing so a lone Escape is reported without a second key.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_char(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose first byte is ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        remaining = 3
    elif first >= 0xE0:
        remaining = 2
    elif first >= 0xC0:
        remaining = 1
    else:
        remaining = 0
    data = lead
    for _ in range(remaining):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
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

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    key = _CSI_KEYS.get(final)
    if key is not None:
        return key
    # Swallow the rest of unknown CSI sequences such as ``ESC [ 3 ~``.
    while final is not None and not (b"@" <= final <= b"~"):
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "ESC"
