"""QR Code symbol encoder."""

from .capacity import Ecc
from .errors import DataTooLongError
from .generator import build_totp_uri, matrix_from_bytes, matrix_from_text
from .qrcode import QrCode, encode_binary, encode_segments, encode_text
from .segment import (
    Mode,
    QrSegment,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_numeric,
    make_segments,
)

__all__ = [
    "DataTooLongError",
    "Ecc",
    "Mode",
    "QrCode",
    "QrSegment",
    "build_totp_uri",
    "encode_binary",
    "encode_segments",
    "encode_text",
    "make_alphanumeric",
    "make_bytes",
    "make_eci",
    "make_numeric",
    "make_segments",
    "matrix_from_bytes",
    "matrix_from_text",
]
