from unittest import TestCase

from qrgrid.capacity import Ecc
from qrgrid.generator import add_border, build_totp_uri, ecc_from_name, matrix_from_bytes, matrix_from_text
from qrgrid.qrcode import QrCode


class TotpUriTests(TestCase):
    def test_key_uri(self):
        uri = build_totp_uri("JBSWY3DPEHPK3PXP", "Example", "alice@example.com", 6)
        self.assertEqual(
            uri,
            "otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP"
            "&issuer=Example&algorithm=SHA1&digits=6&period=30",
        )

    def test_label_is_quoted(self):
        uri = build_totp_uri("ABC", "My App", "bob smith", digits=8)
        self.assertTrue(uri.startswith("otpauth://totp/My%20App:bob%20smith?"))
        self.assertIn("&issuer=My%20App&", uri)
        self.assertIn("&digits=8&", uri)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            build_totp_uri("", "Example", "alice")
        with self.assertRaises(ValueError):
            build_totp_uri("ABC", "", "alice")
        with self.assertRaises(ValueError):
            build_totp_uri("ABC", "Example", "alice", digits=5)
        with self.assertRaises(ValueError):
            build_totp_uri("ABC", "Example", "alice", period=0)


class MatrixTests(TestCase):
    def test_ecc_names(self):
        self.assertEqual(ecc_from_name("Quartile"), Ecc.QUARTILE)
        self.assertEqual(ecc_from_name("H"), Ecc.HIGH)
        with self.assertRaises(ValueError):
            ecc_from_name("extreme")

    def test_matrix_from_text_has_quiet_zone(self):
        qr = QrCode.encode_text("HELLO", Ecc.MEDIUM)
        matrix = matrix_from_text("HELLO", ecc="medium", border=2)
        self.assertEqual(len(matrix), qr.size + 4)
        self.assertFalse(any(matrix[0]))
        self.assertFalse(any(row[1] for row in matrix))
        self.assertEqual(matrix[2][2], qr.get_module(0, 0))
        self.assertEqual(matrix[2:-2], [[False, False] + row + [False, False] for row in qr.get_matrix()])

    def test_matrix_from_bytes_without_border(self):
        qr = QrCode.encode_binary(b"\x00\x01\x02", Ecc.LOW)
        self.assertEqual(matrix_from_bytes(b"\x00\x01\x02", border=0), qr.get_matrix())

    def test_add_border_copies(self):
        matrix = [[True]]
        copy = add_border(matrix, 0)
        copy[0][0] = False
        self.assertTrue(matrix[0][0])

    def test_add_border_pads_every_side(self):
        bordered = add_border([[True, False], [False, True]], 1)
        self.assertEqual(
            bordered,
            [
                [False, False, False, False],
                [False, True, False, False],
                [False, False, True, False],
                [False, False, False, False],
            ],
        )
        bordered[0][0] = True
        self.assertFalse(bordered[3][0])
        self.assertEqual(add_border([[True]], -2), [[True]])
