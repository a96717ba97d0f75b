"""Segments of character/binary/control data and the modes that encode them.

A segment is immutable. The usual way to build one is a factory such as
:func:`make_numeric`; :func:`make_segments` picks the most compact single mode
for a whole string. Segments impose no length limit themselves: the version
selector rejects anything a symbol cannot hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .bitbuffer import BitBuffer

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"


class Mode(Enum):
    """Segment mode: 4-bit indicator plus character-count widths per version range."""

    NUMERIC = (0x1, (10, 12, 14))
    ALPHANUMERIC = (0x2, (9, 11, 13))
    BYTE = (0x4, (8, 16, 16))
    KANJI = (0x8, (8, 10, 12))
    ECI = (0x7, (0, 0, 0))

    def __init__(self, mode_bits: int, char_count_bits: Tuple[int, int, int]):
        self.mode_bits = mode_bits
        self.char_count_bits = char_count_bits

    def num_char_count_bits(self, version: int) -> int:
        # versions 1-9, 10-26, 27-40
        return self.char_count_bits[(version + 7) // 17]


@dataclass(frozen=True)
class QrSegment:
    mode: Mode
    num_chars: int
    data: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.num_chars < 0:
            raise ValueError("Invalid value")


def _segment(mode: Mode, num_chars: int, bb: BitBuffer) -> QrSegment:
    return QrSegment(mode, num_chars, tuple(bb))


def is_numeric(text: str) -> bool:
    return all("0" <= c <= "9" for c in text)


def is_alphanumeric(text: str) -> bool:
    return all(c in ALPHANUMERIC_CHARSET for c in text)


def make_bytes(data: Iterable[int]) -> QrSegment:
    """Return a byte-mode segment holding ``data`` (each value 0-255)."""
    bb = BitBuffer()
    count = 0
    for b in data:
        bb.append_bits(b, 8)
        count += 1
    return _segment(Mode.BYTE, count, bb)


def make_numeric(digits: str) -> QrSegment:
    """Return a numeric-mode segment; groups of 3 digits take 10 bits."""
    bb = BitBuffer()
    accum_data = 0
    accum_count = 0
    for c in digits:
        if not "0" <= c <= "9":
            raise ValueError("String contains non-numeric characters")
        accum_data = accum_data * 10 + (ord(c) - ord("0"))
        accum_count += 1
        if accum_count == 3:
            bb.append_bits(accum_data, 10)
            accum_data = 0
            accum_count = 0
    if accum_count > 0:
        # 1 digit -> 4 bits, 2 digits -> 7 bits
        bb.append_bits(accum_data, accum_count * 3 + 1)
    return _segment(Mode.NUMERIC, len(digits), bb)


def make_alphanumeric(text: str) -> QrSegment:
    """Return an alphanumeric-mode segment; pairs of characters take 11 bits."""
    bb = BitBuffer()
    accum_data = 0
    accum_count = 0
    for c in text:
        index = ALPHANUMERIC_CHARSET.find(c)
        if index == -1:
            raise ValueError("String contains unencodable characters in alphanumeric mode")
        accum_data = accum_data * 45 + index
        accum_count += 1
        if accum_count == 2:
            bb.append_bits(accum_data, 11)
            accum_data = 0
            accum_count = 0
    if accum_count > 0:
        bb.append_bits(accum_data, 6)
    return _segment(Mode.ALPHANUMERIC, len(text), bb)


def make_eci(assign_val: int) -> QrSegment:
    """Return an ECI segment designating the character set ``assign_val``."""
    bb = BitBuffer()
    if assign_val < 0:
        raise ValueError("ECI assignment value out of range")
    elif assign_val < (1 << 7):
        bb.append_bits(assign_val, 8)
    elif assign_val < (1 << 14):
        bb.append_bits(0b10, 2)
        bb.append_bits(assign_val, 14)
    elif assign_val < 1_000_000:
        bb.append_bits(0b110, 3)
        bb.append_bits(assign_val, 21)
    else:
        raise ValueError("ECI assignment value out of range")
    return _segment(Mode.ECI, 0, bb)


def utf16_code_units(text: str) -> List[int]:
    raw = text.encode("utf-16-be", "surrogatepass")
    return [(raw[i] << 8) | raw[i + 1] for i in range(0, len(raw), 2)]


def make_segments(text: str, code_units: bool = True) -> List[QrSegment]:
    """Split ``text`` into segments using the most compact single mode.

    Text that is neither numeric nor alphanumeric becomes one byte segment
    holding each UTF-16 code unit as one byte, so only text below U+0100
    fits. Pass ``code_units=False`` to encode the UTF-8 bytes instead.
    """
    if text == "":
        return []
    if is_numeric(text):
        return [make_numeric(text)]
    if is_alphanumeric(text):
        return [make_alphanumeric(text)]
    if code_units:
        return [make_bytes(utf16_code_units(text))]
    return [make_bytes(text.encode("utf-8"))]


def get_total_bits(segments: Sequence[QrSegment], version: int) -> Optional[int]:
    """Return the bits needed to encode ``segments`` at ``version``.

    ``None`` means a character count does not fit its field at this version.
    """
    result = 0
    for seg in segments:
        ccbits = seg.mode.num_char_count_bits(version)
        if seg.num_chars >= (1 << ccbits):
            return None
        result += 4 + ccbits + len(seg.data)
    return result
