"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing and xterm modifier encodings so that Alt/Ctrl
arrows and page keys arrive as ``ALT_DOWN``, ``CTRL_PAGE_UP`` and so on.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_LENGTH = 16
# Unrecognized escape sequences (function keys, Insert, unsupported modifiers).
UNKNOWN_KEY = "UNKNOWN"
# Returned once stdin reports readable but yields no bytes.
EOF_KEY = "EOF"
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
}

_NAVIGATION_KEYS = frozenset(_CSI_FINAL_KEYS.values()) | frozenset(_CSI_TILDE_KEYS.values())

# xterm modifier parameter: 1 + (shift:1 | alt:2 | ctrl:4); 9 is meta on some terminals.
_MODIFIER_PREFIXES = {
    "2": "SHIFT_",
    "3": "ALT_",
    "5": "CTRL_",
    "9": "ALT_",
}

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _decode_csi(params: str, final: bytes) -> str:
    """Map a CSI parameter string and final byte to a key token."""
    parts = params.split(";")
    modifier = parts[1] if len(parts) > 1 else ""
    if final == b"~":
        base = _CSI_TILDE_KEYS.get(parts[0])
    else:
        base = _CSI_FINAL_KEYS.get(final)
    if base is None:
        return UNKNOWN_KEY
    if not modifier or modifier == "1":
        return base
    prefix = _MODIFIER_PREFIXES.get(modifier)
    if prefix is None:
        return UNKNOWN_KEY
    return prefix + base


def _read_csi(fd: int) -> str:
    """Read the remainder of ``ESC [`` up to its final byte."""
    params: list[bytes] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if 0x40 <= part[0] <= 0x7E:
            break
        params.append(part)
        if len(params) > MAX_CSI_LENGTH:
            return UNKNOWN_KEY
    try:
        param_text = b"".join(params).decode("ascii")
    except UnicodeDecodeError:
        return UNKNOWN_KEY
    return _decode_csi(param_text, part)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` on timeout and ``EOF_KEY`` when the descriptor is at end of
    file. Only a lone escape byte decodes to ``ESC``.
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
            return EOF_KEY

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"\x1b":
        # Meta-sends-escape terminals prefix the whole sequence with ESC.
        inner = read_key(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if inner in _NAVIGATION_KEYS:
            return "ALT_" + inner
        if inner in {"", "ESC", EOF_KEY}:
            return "ESC"
        return UNKNOWN_KEY
    if seq == b"O":
        # SS3 arrows sent in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return UNKNOWN_KEY
        return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
    if seq == b"[":
        return _read_csi(fd)
    if 0x20 <= seq[0] < 0x7F:
        # Alt+printable arrives as ESC followed by the character.
        return "ALT_" + seq.decode("ascii")
    _PENDING_BYTES.append(seq)
    return "ESC"
