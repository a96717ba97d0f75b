"""Data codeword assembly and Reed-Solomon error correction over GF(256)."""

from __future__ import annotations

from typing import List, Sequence

from .bitbuffer import BitBuffer
from .capacity import (
    ECC_CODEWORDS_PER_BLOCK,
    NUM_ERROR_CORRECTION_BLOCKS,
    Ecc,
    num_data_codewords,
    num_raw_data_modules,
)
from .segment import QrSegment

PAD_CODEWORDS = (0xEC, 0x11)


class ReedSolomonGenerator:
    """Divisor polynomial of a given degree and the remainder computation.

    ``coefficients`` are stored from highest to lowest power with the leading
    term (always 1) omitted; the roots are 2^0, 2^1, ..., 2^(degree-1).
    """

    def __init__(self, degree: int):
        if degree < 1 or degree > 255:
            raise ValueError("Degree out of range")
        coefficients = [0] * (degree - 1) + [1]
        root = 1
        for _ in range(degree):
            # Multiply the running product by (x - root)
            for j in range(degree):
                coefficients[j] = gf_multiply(coefficients[j], root)
                if j + 1 < degree:
                    coefficients[j] ^= coefficients[j + 1]
            root = gf_multiply(root, 0x02)
        self.coefficients = coefficients

    def remainder(self, data: Sequence[int]) -> List[int]:
        result = [0] * len(self.coefficients)
        for byte in data:
            factor = byte ^ result.pop(0)
            result.append(0)
            for i, coef in enumerate(self.coefficients):
                result[i] ^= gf_multiply(coef, factor)
        return result


def gf_multiply(x: int, y: int) -> int:
    """Multiply two field elements modulo x^8 + x^4 + x^3 + x^2 + 1."""
    z = 0
    for i in reversed(range(8)):
        z = (z << 1) ^ ((z >> 7) * 0x11D)
        z ^= ((y >> i) & 1) * x
    assert z >> 8 == 0
    return z


def assemble_data_codewords(segments: Sequence[QrSegment], version: int, ecl: Ecc) -> List[int]:
    """Concatenate segment headers and payloads, then terminate and pad to capacity."""
    bb = BitBuffer()
    for seg in segments:
        bb.append_bits(seg.mode.mode_bits, 4)
        bb.append_bits(seg.num_chars, seg.mode.num_char_count_bits(version))
        for bit in seg.data:
            bb.append_bits(bit, 1)

    capacity_bits = num_data_codewords(version, ecl) * 8
    if len(bb) > capacity_bits:
        raise ValueError("Segments exceed the data capacity of the version")
    bb.append_bits(0, min(4, capacity_bits - len(bb)))
    bb.append_bits(0, -len(bb) % 8)
    assert len(bb) % 8 == 0

    codewords = bb.to_codewords()
    i = 0
    while len(codewords) < capacity_bits // 8:
        codewords.append(PAD_CODEWORDS[i % 2])
        i += 1
    return codewords


def add_ecc_and_interleave(data: Sequence[int], version: int, ecl: Ecc) -> List[int]:
    """Split ``data`` into blocks, append ECC to each and interleave the result."""
    if len(data) != num_data_codewords(version, ecl):
        raise ValueError("Invalid argument")
    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecl.ordinal][version]
    block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecl.ordinal][version]
    raw_codewords = num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks

    rs = ReedSolomonGenerator(block_ecc_len)
    blocks = []
    k = 0
    for i in range(num_blocks):
        data_len = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
        block = list(data[k:k + data_len])
        k += data_len
        ecc = rs.remainder(block)
        if i < num_short_blocks:
            # Placeholder keeping all blocks the same length; skipped below
            block.append(0)
        blocks.append(block + ecc)

    result = []
    for i in range(len(blocks[0])):
        for j, block in enumerate(blocks):
            if i != short_block_len - block_ecc_len or j >= num_short_blocks:
                result.append(block[i])
    assert len(result) == raw_codewords
    return result
