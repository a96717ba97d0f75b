"""Payload and matrix helpers for callers that paint symbols."""

from __future__ import annotations

from typing import Iterable, List
from urllib.parse import quote

from .capacity import Ecc
from .qrcode import QrCode

_ECC_LEVELS = {
    "low": Ecc.LOW,
    "medium": Ecc.MEDIUM,
    "quartile": Ecc.QUARTILE,
    "high": Ecc.HIGH,
    "l": Ecc.LOW,
    "m": Ecc.MEDIUM,
    "q": Ecc.QUARTILE,
    "h": Ecc.HIGH,
}


def ecc_from_name(name: str) -> Ecc:
    try:
        return _ECC_LEVELS[name.lower()]
    except KeyError as exc:
        raise ValueError(f"unknown ECC level: {name}") from exc


def build_totp_uri(key: str, service_name: str, user_name: str, digits: int = 6, period: int = 30) -> str:
    """Return the ``otpauth://totp/`` key URI authenticator apps scan.

    The label is ``service_name:user_name``; the service also goes in the
    ``issuer`` parameter. The algorithm is always SHA1. Reserved characters in
    the label, issuer and secret are percent-encoded, so such labels produce a
    different URI than unquoted concatenation would.
    """
    if not key:
        raise ValueError("key must not be empty")
    if not service_name or not user_name:
        raise ValueError("service_name and user_name must not be empty")
    if digits not in (6, 7, 8):
        raise ValueError("digits must be 6, 7 or 8")
    if period <= 0:
        raise ValueError("period must be positive")
    label = f"{quote(service_name, safe='')}:{quote(user_name, safe='@')}"
    return (
        f"otpauth://totp/{label}?secret={quote(key, safe='')}"
        f"&issuer={quote(service_name, safe='')}&algorithm=SHA1&digits={digits}&period={period}"
    )


def matrix_from_text(text: str, ecc: str = "low", border: int = 4) -> List[List[bool]]:
    """Encode ``text`` into a matrix of booleans, ``matrix[y][x]``, with a quiet zone."""
    qr = QrCode.encode_text(text, ecc_from_name(ecc))
    return add_border(qr.get_matrix(), border)


def matrix_from_bytes(data: Iterable[int], ecc: str = "low", border: int = 4) -> List[List[bool]]:
    qr = QrCode.encode_binary(data, ecc_from_name(ecc))
    return add_border(qr.get_matrix(), border)


def add_border(matrix: List[List[bool]], border: int) -> List[List[bool]]:
    """Return a copy of ``matrix`` surrounded by ``border`` light modules."""
    border = max(border, 0)
    padding = [False] * border
    blank = [False] * (len(matrix) + border * 2)
    body = [padding + list(row) + padding for row in matrix]
    return [blank[:] for _ in range(border)] + body + [blank[:] for _ in range(border)]
