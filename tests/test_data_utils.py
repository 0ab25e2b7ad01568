"""
Tests for the pandas / date helpers in `data_utils.py`.
"""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from data_utils import (
    buat_payload_pendaftaran,
    cari_dan_urutkan_profil,
    format_tanggal,
    hari_sejak,
    hitung_ringkasan_profil,
    kategori_usia,
    parse_tanggal,
    pisahkan_tekanan_darah,
    profil_ke_dataframe,
    siapkan_riwayat_pemeriksaan,
    status_kunjungan,
    validasi_pemeriksaan,
    validasi_pendaftaran,
)

ACUAN = datetime(2025, 8, 20, 10, 0)

PROFILES = [
    {"id": 1, "nama": "Siti Aminah", "usia": 67, "alamat": "Jl. Mawar 3", "riwayat_medis": "",
     "total_checkups": 4, "last_checkup": "2025-08-18T09:00:00Z", "created_at": "2025-01-10T08:00:00Z"},
    {"id": 2, "nama": "Made Sudarsana", "usia": 72, "alamat": "Karang Baru", "riwayat_medis": "Hipertensi",
     "total_checkups": 2, "last_checkup": "2025-07-30T09:00:00Z", "created_at": "2025-03-02T08:00:00Z"},
    {"id": 3, "nama": "Ketut Rai", "usia": 80, "alamat": "Jl. Melati 1", "riwayat_medis": None,
     "total_checkups": 1, "last_checkup": "2025-05-01T09:00:00Z", "created_at": "2025-05-01T08:00:00Z"},
    {"id": 4, "nama": "Nyoman Sari", "usia": 61, "alamat": "Karang Baru Utara", "riwayat_medis": "",
     "total_checkups": 0, "last_checkup": None, "created_at": "2025-08-19T08:00:00Z"},
]


def test_parse_tanggal_converts_to_naive_utc() -> None:
    assert parse_tanggal("2025-08-18T17:30:00+08:00") == datetime(2025, 8, 18, 9, 30)
    assert parse_tanggal("2025-08-18") == datetime(2025, 8, 18)
    assert parse_tanggal(None) is None
    assert parse_tanggal("") is None
    assert parse_tanggal("bukan tanggal") is None
    assert parse_tanggal(math.nan) is None


def test_format_tanggal_indonesia() -> None:
    assert format_tanggal("2025-08-05T09:30:00Z") == "5 Agustus 2025, 09.30"
    assert format_tanggal("2025-12-25T00:00:00Z", dengan_jam=False) == "25 Desember 2025"
    assert format_tanggal(None) == "-"


def test_hari_sejak() -> None:
    assert hari_sejak("2025-08-18T09:00:00Z", ACUAN) == 2
    assert hari_sejak(None, ACUAN) is None


@pytest.mark.parametrize(
    "last_checkup, expected",
    [
        (None, "Belum Periksa"),
        ("2025-08-13T10:00:00Z", "Baru Periksa"),
        ("2025-08-12T10:00:00Z", "Perlu Kontrol"),
        ("2025-07-21T10:00:00Z", "Perlu Kontrol"),
        ("2025-07-20T09:00:00Z", "Perlu Periksa"),
    ],
)
def test_status_kunjungan(last_checkup, expected: str) -> None:
    assert status_kunjungan(last_checkup, ACUAN)[0] == expected


def test_hitung_ringkasan_profil() -> None:
    ringkasan = hitung_ringkasan_profil(PROFILES, ACUAN)
    assert ringkasan == {
        "total_lansia": 4,
        "total_pemeriksaan": 7,
        "lansia_aktif": 2,
        "perlu_periksa": 2,
        "pemeriksaan_bulan_ini": 1,
        "rata_rata_usia": 70,
    }


def test_hitung_ringkasan_profil_kosong() -> None:
    ringkasan = hitung_ringkasan_profil([], ACUAN)
    assert ringkasan["total_lansia"] == 0
    assert ringkasan["rata_rata_usia"] == 0


def test_profil_ke_dataframe_adds_visit_status() -> None:
    df = profil_ke_dataframe(PROFILES, ACUAN)
    assert df["status_kunjungan"].tolist() == ["Baru Periksa", "Perlu Kontrol", "Perlu Periksa", "Belum Periksa"]


def test_profil_ke_dataframe_kosong() -> None:
    df = profil_ke_dataframe([], ACUAN)
    assert df.empty
    assert "status_kunjungan" in df.columns


def test_search_matches_name_or_address_case_insensitive() -> None:
    df = profil_ke_dataframe(PROFILES, ACUAN)
    hasil = cari_dan_urutkan_profil(df, "karang baru", "nama", "asc")
    assert hasil["nama"].tolist() == ["Made Sudarsana", "Nyoman Sari"]

    hasil = cari_dan_urutkan_profil(df, "SITI")
    assert hasil["id"].tolist() == [1]

    assert cari_dan_urutkan_profil(df, "tidak ada").empty


def test_sort_by_age_and_dates() -> None:
    df = profil_ke_dataframe(PROFILES, ACUAN)
    assert cari_dan_urutkan_profil(df, "", "usia", "asc")["id"].tolist() == [4, 1, 2, 3]
    assert cari_dan_urutkan_profil(df, "", "created_at", "desc")["id"].tolist() == [4, 3, 2, 1]
    # Profil tanpa pemeriksaan dianggap paling lama
    assert cari_dan_urutkan_profil(df, "", "last_checkup", "desc")["id"].tolist() == [1, 2, 3, 4]
    assert cari_dan_urutkan_profil(df, "", "last_checkup", "asc")["id"].tolist() == [4, 3, 2, 1]


def test_sort_rejects_unknown_column() -> None:
    df = profil_ke_dataframe(PROFILES, ACUAN)
    with pytest.raises(ValueError):
        cari_dan_urutkan_profil(df, "", "alamat")


def test_siapkan_riwayat_pemeriksaan_classifies_each_row() -> None:
    checkups = [
        {"id": 10, "profile_id": 1, "tekanan_darah": "120/80", "gula_darah": 95,
         "tanggal": "2025-07-01T09:00:00Z", "catatan": ""},
        {"id": 11, "profile_id": 1, "tekanan_darah": "165/100", "gula_darah": 140,
         "tanggal": "2025-08-01T09:00:00Z", "catatan": "Kontrol ke puskesmas"},
        {"id": 12, "profile_id": 1, "tekanan_darah": "data lama", "gula_darah": None,
         "tanggal": None, "catatan": None},
    ]
    df = siapkan_riwayat_pemeriksaan(checkups)

    assert df["id"].tolist() == [11, 10, 12]
    assert df["status_tekanan_darah"].tolist() == ["Hipertensi Tingkat 2", "Normal Tinggi", "Tidak Valid"]
    assert df["status_gula_darah"].tolist() == ["Diabetes", "Normal", "Tidak Valid"]
    assert df["catatan"].tolist() == ["Kontrol ke puskesmas", "-", "-"]
    assert df["tanggal_teks"].tolist() == ["1 Agustus 2025, 09.00", "1 Juli 2025, 09.00", "-"]


def test_siapkan_riwayat_pemeriksaan_kosong() -> None:
    df = siapkan_riwayat_pemeriksaan([])
    assert df.empty
    assert "status_tekanan_darah" in df.columns


def test_pisahkan_tekanan_darah() -> None:
    df = siapkan_riwayat_pemeriksaan([
        {"id": 1, "tekanan_darah": "135/85", "gula_darah": 100, "tanggal": "2025-08-01", "catatan": ""},
        {"id": 2, "tekanan_darah": "rusak", "gula_darah": 100, "tanggal": "2025-07-01", "catatan": ""},
    ])
    df = pisahkan_tekanan_darah(df)
    assert df.loc[0, "sistolik"] == 135
    assert df.loc[0, "diastolik"] == 85
    assert math.isnan(df.loc[1, "sistolik"])


def test_validasi_pendaftaran() -> None:
    assert validasi_pendaftaran("Siti", 67, "Jl. Mawar", "130/85", 110) == []

    kesalahan = validasi_pendaftaran(" ", 45, "", "12/8", None)
    assert kesalahan == [
        "Nama lengkap wajib diisi",
        "Usia harus antara 50-120 tahun",
        "Alamat wajib diisi",
        "Format harus: sistolik/diastolik (contoh: 120/80)",
        "Gula darah harus diisi",
    ]


def test_validasi_pemeriksaan_gula_darah_range() -> None:
    assert validasi_pemeriksaan("120/70", 40) == ["Gula darah harus antara 50-500 mg/dL"]
    assert validasi_pemeriksaan("80/120", 100) == ["Tekanan sistolik harus lebih tinggi dari diastolik"]


def test_buat_payload_pendaftaran_trims_fields() -> None:
    payload = buat_payload_pendaftaran(" Siti ", 67, " Jl. Mawar ", None, " 130/85 ", 110, "")
    assert payload == {
        "nama": "Siti",
        "usia": 67,
        "alamat": "Jl. Mawar",
        "riwayat_medis": "",
        "tekanan_darah": "130/85",
        "gula_darah": 110,
        "catatan": "",
    }


@pytest.mark.parametrize(
    "usia, expected",
    [
        (50, "Pra-Lansia"),
        (59, "Pra-Lansia"),
        (60, "Lansia Muda"),
        (69, "Lansia Muda"),
        (70, "Lansia Madya"),
        (79, "Lansia Madya"),
        (80, "Lansia Tua"),
        (105, "Lansia Tua"),
    ],
)
def test_kategori_usia_boundaries(usia: int, expected: str) -> None:
    assert kategori_usia(usia)[0] == expected


def test_profil_ke_dataframe_adds_age_category() -> None:
    df = profil_ke_dataframe(PROFILES, ACUAN)
    assert df["kategori_usia"].tolist() == ["Lansia Muda", "Lansia Madya", "Lansia Tua", "Lansia Muda"]
