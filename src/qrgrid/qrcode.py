"""QR Code symbols (ISO/IEC 18004, Model 2), versions 1 to 40.

Ways to create a symbol:

* High level: :meth:`QrCode.encode_text` or :meth:`QrCode.encode_binary`.
* Mid level: build a list of segments and call :meth:`QrCode.encode_segments`.
* Low level: pass the padded data codewords (segment headers included, error
  correction excluded) and a version to the :class:`QrCode` constructor.

All ways require the desired error correction level.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .capacity import MAX_VERSION, MIN_VERSION, Ecc, check_version, choose_version
from .grid import ModuleGrid
from .masking import choose_mask
from .reedsolomon import add_ecc_and_interleave, assemble_data_codewords
from .segment import QrSegment, make_bytes, make_segments

logger = logging.getLogger(__name__)


class QrCode:
    MIN_VERSION = MIN_VERSION
    MAX_VERSION = MAX_VERSION

    LOW = Ecc.LOW
    MEDIUM = Ecc.MEDIUM
    QUARTILE = Ecc.QUARTILE
    HIGH = Ecc.HIGH

    def __init__(self, version: int, ecc: Ecc, data_codewords: Sequence[int], mask: int = -1):
        check_version(version)
        if not -1 <= mask <= 7:
            raise ValueError("Mask value out of range")
        self.version = version
        self.size = version * 4 + 17
        self.error_correction_level = ecc

        grid = ModuleGrid(version, ecc)
        grid.draw_codewords(add_ecc_and_interleave(data_codewords, version, ecc))
        if mask == -1:
            mask = choose_mask(grid)
        self.mask = mask
        grid.apply_mask(mask)
        grid.draw_format_bits(mask)
        # Only the modules outlive construction
        self._modules = grid.modules

    def __repr__(self) -> str:
        return (
            f"QrCode(version={self.version}, "
            f"error_correction_level={self.error_correction_level.name}, mask={self.mask})"
        )

    @staticmethod
    def encode_text(text: str, ecc: Ecc = Ecc.LOW) -> "QrCode":
        return QrCode.encode_segments(make_segments(text), ecc)

    @staticmethod
    def encode_binary(data: Iterable[int], ecc: Ecc = Ecc.LOW) -> "QrCode":
        return QrCode.encode_segments([make_bytes(data)], ecc)

    @staticmethod
    def encode_segments(
        segments: Sequence[QrSegment],
        ecc: Ecc,
        min_version: int = MIN_VERSION,
        max_version: int = MAX_VERSION,
        mask: int = -1,
        boost_ecl: bool = True,
    ) -> "QrCode":
        """Encode ``segments`` in the smallest version within the given range.

        ``mask`` -1 searches all eight masks; 0-7 forces one. Raises
        ``ValueError`` on bad arguments and
        :class:`~qrgrid.errors.DataTooLongError` when nothing fits.
        """
        if not MIN_VERSION <= min_version <= max_version <= MAX_VERSION or not -1 <= mask <= 7:
            raise ValueError("Invalid value")
        version, ecl, used_bits = choose_version(segments, ecc, min_version, max_version, boost_ecl)
        data_codewords = assemble_data_codewords(segments, version, ecl)
        qr = QrCode(version, ecl, data_codewords, mask)
        logger.debug(
            "Encoded %d data bits as version %d, level %s, mask %d",
            used_bits, qr.version, ecl.name, qr.mask,
        )
        return qr

    def get_module(self, x: int, y: int) -> bool:
        """Return True for a dark module; coordinates outside the symbol are light."""
        return 0 <= x < self.size and 0 <= y < self.size and self._modules[y][x]

    def get_matrix(self) -> List[List[bool]]:
        return [row[:] for row in self._modules]


encode_text = QrCode.encode_text
encode_binary = QrCode.encode_binary
encode_segments = QrCode.encode_segments
