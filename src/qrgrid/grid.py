"""Working module grid: function patterns and codeword placement."""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from .capacity import Ecc, check_version

# Mask conditions indexed by mask number; True means the module is inverted.
MASK_PATTERNS: Tuple[Callable[[int, int], bool], ...] = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


def format_bits(ecl: Ecc, mask: int) -> int:
    """Return the 15-bit format word (level, mask, BCH remainder, XOR mask)."""
    data = (ecl.format_bits << 3) | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * 0x537)
    bits = ((data << 10) | rem) ^ 0x5412
    assert bits >> 15 == 0
    return bits


def version_bits(version: int) -> int:
    """Return the 18-bit version word (version, BCH remainder)."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
    bits = (version << 12) | rem
    assert bits >> 18 == 0
    return bits


def alignment_pattern_positions(version: int) -> List[int]:
    """Return the ascending centre coordinates shared by rows and columns."""
    check_version(version)
    if version == 1:
        return []
    size = version * 4 + 17
    num_align = version // 7 + 2
    if version == 32:
        step = 26
    else:
        step = (version * 4 + num_align * 2 + 1) // (num_align * 2 - 2) * 2
    return [6] + [size - 7 - i * step for i in reversed(range(num_align - 1))]


def _get_bit(value: int, index: int) -> bool:
    return (value >> index) & 1 != 0


class ModuleGrid:
    """Square module matrix plus the marks of which cells are function patterns.

    ``modules[y][x]`` is True for a dark module. Function cells are never
    overwritten by codeword placement or masking.
    """

    def __init__(self, version: int, ecl: Ecc):
        check_version(version)
        self.version = version
        self.ecl = ecl
        self.size = version * 4 + 17
        self.modules = [[False] * self.size for _ in range(self.size)]
        self.is_function = [[False] * self.size for _ in range(self.size)]
        self.draw_function_patterns()

    def set_function_module(self, x: int, y: int, is_dark: bool) -> None:
        self.modules[y][x] = is_dark
        self.is_function[y][x] = True

    def draw_function_patterns(self) -> None:
        size = self.size
        for i in range(size):
            self.set_function_module(6, i, i % 2 == 0)
            self.set_function_module(i, 6, i % 2 == 0)

        self.draw_finder_pattern(3, 3)
        self.draw_finder_pattern(size - 4, 3)
        self.draw_finder_pattern(3, size - 4)

        positions = alignment_pattern_positions(self.version)
        last = len(positions) - 1
        for i, px in enumerate(positions):
            for j, py in enumerate(positions):
                # Skip the three corners occupied by finder patterns
                if (i, j) in ((0, 0), (0, last), (last, 0)):
                    continue
                self.draw_alignment_pattern(px, py)

        # Reserve the format area; real bits are drawn once the mask is known
        self.draw_format_bits(0)
        self.draw_version()

    def draw_finder_pattern(self, cx: int, cy: int) -> None:
        """Draw a 7x7 finder with its light separator, clipped to the grid."""
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                x = cx + dx
                y = cy + dy
                if 0 <= x < self.size and 0 <= y < self.size:
                    dist = max(abs(dx), abs(dy))
                    self.set_function_module(x, y, dist not in (2, 4))

    def draw_alignment_pattern(self, cx: int, cy: int) -> None:
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                self.set_function_module(cx + dx, cy + dy, max(abs(dx), abs(dy)) != 1)

    def draw_format_bits(self, mask: int) -> None:
        bits = format_bits(self.ecl, mask)
        size = self.size

        # First copy, around the top left finder
        for i in range(0, 6):
            self.set_function_module(8, i, _get_bit(bits, i))
        self.set_function_module(8, 7, _get_bit(bits, 6))
        self.set_function_module(8, 8, _get_bit(bits, 7))
        self.set_function_module(7, 8, _get_bit(bits, 8))
        for i in range(9, 15):
            self.set_function_module(14 - i, 8, _get_bit(bits, i))

        # Second copy, split between the other two finders
        for i in range(0, 8):
            self.set_function_module(size - 1 - i, 8, _get_bit(bits, i))
        for i in range(8, 15):
            self.set_function_module(8, size - 15 + i, _get_bit(bits, i))
        self.set_function_module(8, size - 8, True)

    def draw_version(self) -> None:
        if self.version < 7:
            return
        bits = version_bits(self.version)
        for i in range(18):
            bit = _get_bit(bits, i)
            a = self.size - 11 + i % 3
            b = i // 3
            self.set_function_module(a, b, bit)
            self.set_function_module(b, a, bit)

    def data_module_count(self) -> int:
        return sum(row.count(False) for row in self.is_function)

    def draw_codewords(self, codewords: Sequence[int]) -> int:
        """Place ``codewords`` MSB first in the zig-zag order; return bits placed."""
        size = self.size
        total_bits = len(codewords) * 8
        i = 0
        right = size - 1
        while right >= 1:
            if right == 6:
                right = 5
            upward = ((right + 1) & 2) == 0
            for vert in range(size):
                y = size - 1 - vert if upward else vert
                for x in (right, right - 1):
                    if not self.is_function[y][x] and i < total_bits:
                        self.modules[y][x] = _get_bit(codewords[i >> 3], 7 - (i & 7))
                        i += 1
            right -= 2
        assert i == total_bits
        return i

    def apply_mask(self, mask: int) -> None:
        """XOR mask ``mask`` onto the data modules. Applying it twice undoes it."""
        if not 0 <= mask <= 7:
            raise ValueError("Mask value out of range")
        pattern = MASK_PATTERNS[mask]
        for y in range(self.size):
            row = self.modules[y]
            function_row = self.is_function[y]
            for x in range(self.size):
                if not function_row[x] and pattern(x, y):
                    row[x] = not row[x]
