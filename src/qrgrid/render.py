"""Raster rendering of finished symbols with Pillow."""

from __future__ import annotations

import io

from PIL import Image, ImageDraw

from .qrcode import QrCode


def render_image(qr: QrCode, square_size: int = 5, border: int = 4) -> Image.Image:
    """Paint each dark module as a ``square_size`` black square on white."""
    if square_size <= 0:
        raise ValueError("square_size must be positive")
    if border < 0:
        raise ValueError("border must not be negative")
    dimension = (qr.size + border * 2) * square_size
    image = Image.new("1", (dimension, dimension), 255)
    draw = ImageDraw.Draw(image)
    for y in range(qr.size):
        for x in range(qr.size):
            if not qr.get_module(x, y):
                continue
            left = (x + border) * square_size
            top = (y + border) * square_size
            draw.rectangle((left, top, left + square_size - 1, top + square_size - 1), fill=0)
    return image


def render_png(qr: QrCode, square_size: int = 5, border: int = 4) -> bytes:
    buffer = io.BytesIO()
    render_image(qr, square_size, border).save(buffer, format="PNG")
    return buffer.getvalue()


def render_text(qr: QrCode, border: int = 4, dark: str = "##", light: str = "  ") -> str:
    """Return the symbol as lines of text, two characters per module."""
    lines = []
    for y in range(-border, qr.size + border):
        lines.append("".join(dark if qr.get_module(x, y) else light for x in range(-border, qr.size + border)))
    return "\n".join(lines) + "\n"
