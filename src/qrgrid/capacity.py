"""Error correction levels, capacity tables and version selection."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple

from .errors import DataTooLongError
from .segment import QrSegment, get_total_bits

MIN_VERSION = 1
MAX_VERSION = 40


class Ecc(Enum):
    """Error correction level: table index and 2-bit format field value."""

    LOW = (0, 1)
    MEDIUM = (1, 0)
    QUARTILE = (2, 3)
    HIGH = (3, 2)

    def __init__(self, ordinal: int, format_bits: int):
        self.ordinal = ordinal
        self.format_bits = format_bits


# Indexed [ecc.ordinal][version]; column 0 is padding.
ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)


def check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError("Version number out of range")


def num_raw_data_modules(version: int) -> int:
    """Return the number of modules left for data and ECC after function patterns.

    Includes the remainder bits, so the result is not always a multiple of 8.
    """
    check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    assert 208 <= result <= 29648
    return result


def num_data_codewords(version: int, ecl: Ecc) -> int:
    return (
        num_raw_data_modules(version) // 8
        - ECC_CODEWORDS_PER_BLOCK[ecl.ordinal][version] * NUM_ERROR_CORRECTION_BLOCKS[ecl.ordinal][version]
    )


def choose_version(
    segments: Sequence[QrSegment],
    ecl: Ecc,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION,
    boost_ecl: bool = True,
) -> Tuple[int, Ecc, int]:
    """Return ``(version, ecl, data_used_bits)`` for the smallest fitting version.

    When ``boost_ecl`` is set the level is raised as far as the chosen version
    still holds the data; it is never lowered.
    """
    if not MIN_VERSION <= min_version <= max_version <= MAX_VERSION:
        raise ValueError("Invalid value")
    version = min_version
    while True:
        capacity_bits = num_data_codewords(version, ecl) * 8
        used_bits = get_total_bits(segments, version)
        if used_bits is not None and used_bits <= capacity_bits:
            break
        if version >= max_version:
            if used_bits is None:
                raise DataTooLongError("Segment too long", None, capacity_bits)
            raise DataTooLongError(
                f"Data length = {used_bits} bits, Max capacity = {capacity_bits} bits",
                used_bits,
                capacity_bits,
            )
        version += 1

    if boost_ecl:
        for new_ecl in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
            if used_bits <= num_data_codewords(version, new_ecl) * 8:
                ecl = new_ecl
    return version, ecl, used_bits
