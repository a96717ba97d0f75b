"""Exceptions raised by the encoder."""

from __future__ import annotations

from typing import Optional


class DataTooLongError(ValueError):
    """The payload does not fit in any allowed version at the requested level.

    ``data_bits`` is ``None`` when some segment's character count cannot be
    represented at any version in range; otherwise it is the encoded length
    checked against ``capacity_bits`` of the largest allowed version.
    """

    def __init__(self, message: str, data_bits: Optional[int] = None, capacity_bits: Optional[int] = None):
        super().__init__(message)
        self.data_bits = data_bits
        self.capacity_bits = capacity_bits

    @property
    def segment_too_long(self) -> bool:
        return self.data_bits is None
