"""Append-only bit sequence used to assemble segment payloads and codewords."""

from __future__ import annotations

from typing import Iterator, List


class BitBuffer:
    """Sequence of bits (0/1 ints), written most significant bit first."""

    def __init__(self) -> None:
        self.bits: List[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def __getitem__(self, index: int) -> int:
        return self.bits[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.bits)

    def append_bits(self, value: int, length: int) -> None:
        """Append ``value`` using exactly ``length`` bits."""
        if not 0 <= length <= 31 or value >> length != 0:
            raise ValueError("Value out of range")
        for i in reversed(range(length)):
            self.bits.append((value >> i) & 1)

    def to_codewords(self) -> List[int]:
        if len(self.bits) % 8 != 0:
            raise ValueError("Bit length is not a multiple of 8")
        codewords = []
        for i in range(0, len(self.bits), 8):
            chunk = 0
            for bit in self.bits[i:i + 8]:
                chunk = (chunk << 1) | bit
            codewords.append(chunk)
        return codewords
