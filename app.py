from __future__ import annotations

import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from flask import Flask, current_app, jsonify, request, send_file

from qrgrid.errors import DataTooLongError
from qrgrid.generator import build_totp_uri, ecc_from_name
from qrgrid.qrcode import QrCode
from qrgrid.render import render_png
from qrgrid.segment import make_segments

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "QR_DEFAULT_ECC": "low",
    "QR_SQUARE_SIZE": 5,
    "QR_BORDER": 4,
    "QR_MAX_SQUARE_SIZE": 40,
}


def _parse_int(payload: Mapping[str, object], key: str, default: int) -> int:
    raw_value = payload.get(key, default)
    if raw_value in (None, ""):
        return default
    try:
        return int(raw_value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer.") from exc


@dataclass
class QRRequest:
    data: str
    ecc: str
    border: int
    square_size: int
    mask: int
    boost: bool
    utf8: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, object], config: Mapping[str, Any]) -> "QRRequest":
        data = str(payload.get("data") or "")
        if not data:
            raise ValueError("data must not be empty.")

        ecc = str(payload.get("errorCorrection") or config["QR_DEFAULT_ECC"])
        ecc_from_name(ecc)

        border = _parse_int(payload, "border", config["QR_BORDER"])
        if border < 0:
            raise ValueError("border must be 0 or greater.")

        max_square = config["QR_MAX_SQUARE_SIZE"]
        square_size = _parse_int(payload, "squareSize", config["QR_SQUARE_SIZE"])
        if not 1 <= square_size <= max_square:
            raise ValueError(f"squareSize must be between 1 and {max_square}.")

        mask = _parse_int(payload, "mask", -1)
        if not -1 <= mask <= 7:
            raise ValueError("mask must be between -1 and 7.")

        boost = str(payload.get("boost", "true")).lower() not in ("false", "0", "no")
        utf8 = str(payload.get("utf8", "false")).lower() in ("true", "1", "yes")

        return cls(data=data, ecc=ecc, border=border, square_size=square_size, mask=mask, boost=boost, utf8=utf8)

    def encode(self) -> QrCode:
        return QrCode.encode_segments(
            make_segments(self.data, code_units=not self.utf8),
            ecc_from_name(self.ecc),
            mask=self.mask,
            boost_ecl=self.boost,
        )


def _request_payload() -> Dict[str, object]:
    if request.method == "GET":
        return {key: value for key, value in request.args.items()}
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _png_response(qr: QrCode, qr_request: QRRequest):
    buffer = io.BytesIO(render_png(qr, square_size=qr_request.square_size, border=qr_request.border))
    buffer.seek(0)
    return send_file(buffer, mimetype="image/png")


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("QRGRID")
    if config:
        app.config.update(config)

    @app.errorhandler(DataTooLongError)
    def data_too_long(exc: DataTooLongError):
        logger.warning("Rejected payload: %s", exc)
        return (
            jsonify({"message": str(exc), "dataBits": exc.data_bits, "capacityBits": exc.capacity_bits}),
            413,
        )

    @app.errorhandler(ValueError)
    def invalid_request(exc: ValueError):
        return jsonify({"message": str(exc)}), 400

    @app.route("/api/qr-preview", methods=["GET", "POST"])
    def qr_preview():
        qr_request = QRRequest.from_payload(_request_payload(), current_app.config)
        return _png_response(qr_request.encode(), qr_request)

    @app.route("/api/qr-matrix", methods=["GET", "POST"])
    def qr_matrix():
        qr_request = QRRequest.from_payload(_request_payload(), current_app.config)
        qr = qr_request.encode()
        rows = ["".join("1" if cell else "0" for cell in row) for row in qr.get_matrix()]
        return jsonify(
            {
                "version": qr.version,
                "size": qr.size,
                "mask": qr.mask,
                "errorCorrection": qr.error_correction_level.name.lower(),
                "modules": rows,
            }
        )

    @app.post("/api/totp-qr")
    def totp_qr():
        payload = _request_payload()
        uri = build_totp_uri(
            str(payload.get("secret") or ""),
            str(payload.get("service") or ""),
            str(payload.get("user") or ""),
            digits=_parse_int(payload, "digits", 6),
        )
        qr_request = QRRequest.from_payload({**payload, "data": uri}, current_app.config)
        return _png_response(qr_request.encode(), qr_request)

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
