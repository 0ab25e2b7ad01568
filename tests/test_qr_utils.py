"""
Tests for QR code generation and reading in `qr_utils.py`.
"""

from __future__ import annotations

import pytest

from qr_utils import adalah_id_profil, ambil_id_profil, baca_qr_dari_gambar, buat_qr_png, buat_url_profil


def test_buat_url_profil_strips_trailing_slash() -> None:
    assert buat_url_profil("http://localhost:8501/", 12) == "http://localhost:8501/Profil_Lansia?id=12"


@pytest.mark.parametrize(
    "teks, expected",
    [
        ("http://localhost:8501/Profil_Lansia?id=12", "12"),
        ("https://lansia.posyandu.id/Profil_Lansia?foo=1&id=7", "7"),
        ("http://localhost:3000/profile/45", "45"),
        ("http://localhost:3000/profile/45/", "45"),
        ("  31 ", "31"),
        ("https://contoh.com/halaman-lain", None),
        ("http://localhost:8501/Profil_Lansia?id=\u00b2", None),
        ("\u0661\u0662", None),
        ("", None),
        (None, None),
    ],
)
def test_ambil_id_profil(teks, expected) -> None:
    assert ambil_id_profil(teks) == expected


def test_buat_qr_png_is_png() -> None:
    assert buat_qr_png("http://localhost:8501/Profil_Lansia?id=3").startswith(b"\x89PNG")


def test_qr_can_be_read_back() -> None:
    url = buat_url_profil("http://localhost:8501", 3)
    teks = baca_qr_dari_gambar(buat_qr_png(url))
    assert teks == url
    assert ambil_id_profil(teks) == "3"


def test_baca_qr_dari_gambar_rejects_garbage() -> None:
    assert baca_qr_dari_gambar(b"bukan gambar") is None


@pytest.mark.parametrize("teks, expected", [("12", True), ("007", True), ("", False), (None, False),
                                            ("12a", False), ("12\n", False), ("²", False), ("١٢", False)])
def test_adalah_id_profil_accepts_ascii_digits_only(teks, expected: bool) -> None:
    assert adalah_id_profil(teks) is expected
