"""
Tests for the PDF checkup history report in `laporan_utils.py`.
"""

from __future__ import annotations

from data_utils import siapkan_riwayat_pemeriksaan
from laporan_utils import generate_pdf_riwayat

PROFILE = {
    "id": 1,
    "nama": "Siti Aminah",
    "usia": 67,
    "alamat": "Jl. Mawar 3",
    "riwayat_medis": "",
    "created_at": "2025-01-10T08:00:00Z",
}


def test_pdf_without_history() -> None:
    buffer = generate_pdf_riwayat(PROFILE, siapkan_riwayat_pemeriksaan([]))
    assert buffer.read(4) == b"%PDF"


def test_pdf_with_history() -> None:
    df = siapkan_riwayat_pemeriksaan([
        {"id": 1, "tekanan_darah": "145/92", "gula_darah": 130, "tanggal": "2025-08-01T09:00:00Z",
         "catatan": "Rujuk ke puskesmas"},
        {"id": 2, "tekanan_darah": "118/76", "gula_darah": None, "tanggal": "2025-07-01T09:00:00Z",
         "catatan": ""},
    ])

    pdf = generate_pdf_riwayat(PROFILE, df, nama_posyandu="Posyandu Mawar").getvalue()

    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000
