"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Only the keys the status view binds are decoded. Other escape sequences are
consumed up to their final byte and reported as ``"UNKNOWN_ESCAPE"``, so only
a lone ESC reads as ``"ESC"``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_SEQUENCE_BYTES = 32
UNKNOWN_ESCAPE = "UNKNOWN_ESCAPE"
_PENDING_BYTES: list[bytes] = []
_ARROWS = {b"A": "UP", b"B": "DOWN", b"C": "RIGHT", b"D": "LEFT"}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _is_final_byte(ch: bytes) -> bool:
    return 0x40 <= ch[0] <= 0x7E


def _read_csi(fd: int) -> str:
    """Consume ``ESC [`` parameters through the final byte."""
    for _ in range(MAX_SEQUENCE_BYTES):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_ESCAPE
        if _is_final_byte(part):
            # Modified arrows (``ESC [ 1 ; 5 A``) still move.
            return _ARROWS.get(part, UNKNOWN_ESCAPE)
    return UNKNOWN_ESCAPE


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses."""
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

    if ch == b"\x03":
        return "CTRL_C"
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch != b"\x1b":
        return _decode_utf8(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return UNKNOWN_ESCAPE
        return _ARROWS.get(final, UNKNOWN_ESCAPE)
    if seq == b"\x1b":
        # ESC pressed twice: report the first and re-read the second.
        _PENDING_BYTES.append(seq)
        return "ESC"
    # Alt+key arrives as ESC followed by the key itself.
    return UNKNOWN_ESCAPE


def _decode_utf8(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``first``."""
    lead = first[0]
    if lead < 0x80:
        return first.decode("ascii")
    if lead >= 0xF0:
        missing = 3
    elif lead >= 0xE0:
        missing = 2
    elif lead >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = first
    for _ in range(missing):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")
