"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, Alt combos, arrows and the F1 variants that
common terminals emit.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x03": "CTRL_C",
    b"\x15": "CTRL_U",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"11": "F1",
    b"3": "DELETE",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        needed = 3
    elif first >= 0xE0:
        needed = 2
    elif first >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = lead
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` sequence."""
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in _CSI_FINAL_KEYS and not params:
            return _CSI_FINAL_KEYS[part]
        if part == b"[" and not params:
            # Linux console F1: ESC [ [ A
            final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            return "F1" if final == b"A" else "ESC"
        if part == b"~":
            return _CSI_TILDE_KEYS.get(params, "ESC")
        if part.isdigit() or part == b";":
            params += part
            if len(params) > 16:
                return "ESC"
            continue
        if part in _CSI_FINAL_KEYS:
            # Modified arrows (ESC [ 1 ; 3 A) collapse to the plain arrow.
            return _CSI_FINAL_KEYS[part]
        if part == b"P" and params in {b"1", b"1;1"}:
            return "F1"
        return "ESC"


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

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_tail(fd, ch)
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final == b"P":
            return "F1"
        if final is not None and final in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[final]
        return "ESC"
    if seq.isalnum():
        return f"ALT_{seq.decode('ascii').upper()}"
    # ESC followed by something else: replay that byte as its own key.
    _PENDING_BYTES.append(seq)
    return "ESC"
