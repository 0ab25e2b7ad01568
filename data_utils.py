# data_utils.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from health_utils import (
    get_blood_pressure_status,
    get_blood_sugar_status,
    parse_blood_pressure,
    validate_blood_pressure_format,
)

logger = logging.getLogger(__name__)

NAMA_BULAN = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

BATAS_HARI_AKTIF = 30
BATAS_HARI_BARU_PERIKSA = 7

KOLOM_URUT = ("nama", "usia", "created_at", "last_checkup")
KOLOM_TANGGAL = ("created_at", "last_checkup")


def sekarang() -> datetime:
    """Waktu saat ini dalam UTC tanpa zona waktu, sama dengan hasil parse_tanggal."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_tanggal(value) -> Optional[datetime]:
    """
    Mengubah string tanggal dari backend (ISO 8601, boleh dengan zona waktu) menjadi datetime.
    Tanggal ber-zona waktu dikonversi ke UTC lalu zona waktunya dibuang.
    Nilai kosong atau tidak terbaca menghasilkan None.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)) or value == "":
        return None
    if isinstance(value, datetime):
        tanggal = value
    else:
        try:
            tanggal = date_parser.isoparse(str(value))
        except (ValueError, OverflowError):
            logger.warning("Format tanggal tidak dikenali: %r", value)
            return None
    if tanggal.tzinfo is not None:
        tanggal = tanggal.astimezone(timezone.utc).replace(tzinfo=None)
    return tanggal


def format_tanggal(value, dengan_jam: bool = True) -> str:
    """Format tanggal untuk tampilan Indonesia, misalnya '5 Agustus 2025, 09.30'."""
    tanggal = parse_tanggal(value)
    if tanggal is None:
        return "-"
    teks = f"{tanggal.day} {NAMA_BULAN[tanggal.month - 1]} {tanggal.year}"
    if dengan_jam:
        teks += f", {tanggal.hour:02d}.{tanggal.minute:02d}"
    return teks


def hari_sejak(value, acuan: Optional[datetime] = None) -> Optional[int]:
    tanggal = parse_tanggal(value)
    if tanggal is None:
        return None
    return ((acuan or sekarang()) - tanggal).days


def status_kunjungan(last_checkup, acuan: Optional[datetime] = None) -> Tuple[str, str]:
    """Label & warna status kunjungan berdasarkan jarak hari dari pemeriksaan terakhir."""
    selisih = hari_sejak(last_checkup, acuan)
    if selisih is None:
        return "Belum Periksa", "gray"
    if selisih <= BATAS_HARI_BARU_PERIKSA:
        return "Baru Periksa", "green"
    if selisih <= BATAS_HARI_AKTIF:
        return "Perlu Kontrol", "orange"
    return "Perlu Periksa", "red"


def kategori_usia(usia) -> Tuple[str, str]:
    """Label & warna kategori usia lansia."""
    if usia < 60:
        return "Pra-Lansia", "blue"
    if usia < 70:
        return "Lansia Muda", "green"
    if usia < 80:
        return "Lansia Madya", "orange"
    return "Lansia Tua", "red"


def hitung_ringkasan_profil(profiles: Iterable[Dict[str, Any]], acuan: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Menghitung statistik dashboard dari daftar ringkasan profil.

    Returns:
        dict: total_lansia, total_pemeriksaan, lansia_aktif (periksa <= 30 hari),
        perlu_periksa (belum pernah / > 30 hari), pemeriksaan_bulan_ini
        (pemeriksaan terakhir jatuh di bulan berjalan), rata_rata_usia (dibulatkan).
    """
    acuan = acuan or sekarang()
    awal_bulan = acuan + relativedelta(day=1, hour=0, minute=0, second=0, microsecond=0)
    profiles = list(profiles)

    ringkasan = {
        "total_lansia": len(profiles),
        "total_pemeriksaan": 0,
        "lansia_aktif": 0,
        "perlu_periksa": 0,
        "pemeriksaan_bulan_ini": 0,
        "rata_rata_usia": 0,
    }
    total_usia = 0
    for profile in profiles:
        ringkasan["total_pemeriksaan"] += int(profile.get("total_checkups") or 0)
        total_usia += int(profile.get("usia") or 0)

        terakhir = parse_tanggal(profile.get("last_checkup"))
        selisih = hari_sejak(terakhir, acuan)
        if selisih is not None and selisih <= BATAS_HARI_AKTIF:
            ringkasan["lansia_aktif"] += 1
        else:
            ringkasan["perlu_periksa"] += 1
        if terakhir is not None and awal_bulan <= terakhir < awal_bulan + relativedelta(months=1):
            ringkasan["pemeriksaan_bulan_ini"] += 1

    if profiles:
        ringkasan["rata_rata_usia"] = round(total_usia / len(profiles))
    return ringkasan


def profil_ke_dataframe(profiles: List[Dict[str, Any]], acuan: Optional[datetime] = None) -> pd.DataFrame:
    kolom = ["id", "nama", "usia", "alamat", "riwayat_medis", "total_checkups", "last_checkup", "created_at"]
    df = pd.DataFrame(profiles, columns=kolom) if profiles else pd.DataFrame(columns=kolom)
    df["total_checkups"] = df["total_checkups"].fillna(0).astype(int)
    df["status_kunjungan"] = df["last_checkup"].apply(lambda tgl: status_kunjungan(tgl, acuan)[0])
    df["kategori_usia"] = df["usia"].apply(lambda usia: "-" if pd.isna(usia) else kategori_usia(usia)[0])
    return df


def cari_dan_urutkan_profil(df: pd.DataFrame, kata_kunci: str = "", urut_berdasarkan: str = "created_at",
                            urutan: str = "desc") -> pd.DataFrame:
    """
    Menyaring profil berdasarkan nama/alamat (tidak peka huruf besar) lalu mengurutkannya.
    Kolom tanggal dibandingkan sebagai waktu; tanggal kosong dianggap paling lama.
    """
    if urut_berdasarkan not in KOLOM_URUT:
        raise ValueError(f"Kolom urutan tidak dikenal: {urut_berdasarkan}")

    hasil = df
    kata_kunci = (kata_kunci or "").strip().lower()
    if kata_kunci:
        cocok_nama = df["nama"].fillna("").str.lower().str.contains(kata_kunci, regex=False)
        cocok_alamat = df["alamat"].fillna("").str.lower().str.contains(kata_kunci, regex=False)
        hasil = df[cocok_nama | cocok_alamat]

    if urut_berdasarkan in KOLOM_TANGGAL:
        kunci = hasil[urut_berdasarkan].apply(lambda tgl: parse_tanggal(tgl) or datetime(1970, 1, 1))
    else:
        kunci = hasil[urut_berdasarkan]
    urutan_index = kunci.sort_values(ascending=(urutan == "asc"), kind="stable").index
    return hasil.loc[urutan_index].reset_index(drop=True)


def siapkan_riwayat_pemeriksaan(checkups: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Membuat DataFrame riwayat pemeriksaan (terbaru di atas) lengkap dengan
    kolom status tekanan darah dan gula darah hasil klasifikasi.
    """
    kolom = ["id", "tanggal", "tekanan_darah", "gula_darah", "catatan"]
    if not checkups:
        return pd.DataFrame(columns=kolom + ["status_tekanan_darah", "status_gula_darah", "tanggal_teks"])

    df = pd.DataFrame(checkups).reindex(columns=kolom)
    df["tanggal"] = df["tanggal"].apply(parse_tanggal)
    df = df.sort_values(by="tanggal", ascending=False, na_position="last").reset_index(drop=True)
    df["gula_darah"] = pd.to_numeric(df["gula_darah"], errors="coerce")
    df["status_tekanan_darah"] = df["tekanan_darah"].apply(lambda bp: get_blood_pressure_status(bp).status)
    df["status_gula_darah"] = df["gula_darah"].apply(lambda gd: get_blood_sugar_status(gd).status)
    df["tanggal_teks"] = df["tanggal"].apply(format_tanggal)
    df["catatan"] = df["catatan"].fillna("").replace("", "-")
    return df


def pisahkan_tekanan_darah(df_riwayat: pd.DataFrame) -> pd.DataFrame:
    """Menambahkan kolom 'sistolik' dan 'diastolik' (NaN jika tidak valid) untuk grafik tren."""
    df = df_riwayat.copy()
    pasangan = df["tekanan_darah"].apply(parse_blood_pressure)
    df["sistolik"] = pasangan.apply(lambda p: p[0] if p else float("nan"))
    df["diastolik"] = pasangan.apply(lambda p: p[1] if p else float("nan"))
    return df


# ==============================================================================
# VALIDASI FORMULIR
# ==============================================================================

USIA_MIN, USIA_MAX = 50, 120
GULA_DARAH_FORM_MIN, GULA_DARAH_FORM_MAX = 50, 500


def validasi_pemeriksaan(tekanan_darah: str, gula_darah) -> List[str]:
    """Daftar pesan kesalahan untuk isian pemeriksaan. List kosong berarti valid."""
    kesalahan = []
    hasil_bp = validate_blood_pressure_format(tekanan_darah)
    if not hasil_bp.is_valid:
        kesalahan.append(hasil_bp.message)
    if gula_darah is None:
        kesalahan.append("Gula darah harus diisi")
    elif not GULA_DARAH_FORM_MIN <= gula_darah <= GULA_DARAH_FORM_MAX:
        kesalahan.append(f"Gula darah harus antara {GULA_DARAH_FORM_MIN}-{GULA_DARAH_FORM_MAX} mg/dL")
    return kesalahan


def validasi_pendaftaran(nama: str, usia, alamat: str, tekanan_darah: str, gula_darah) -> List[str]:
    kesalahan = []
    if not (nama or "").strip():
        kesalahan.append("Nama lengkap wajib diisi")
    if usia is None or not USIA_MIN <= usia <= USIA_MAX:
        kesalahan.append(f"Usia harus antara {USIA_MIN}-{USIA_MAX} tahun")
    if not (alamat or "").strip():
        kesalahan.append("Alamat wajib diisi")
    return kesalahan + validasi_pemeriksaan(tekanan_darah, gula_darah)


def buat_payload_pendaftaran(nama: str, usia, alamat: str, riwayat_medis: str,
                             tekanan_darah: str, gula_darah, catatan: str) -> Dict[str, Any]:
    return {
        "nama": nama.strip(),
        "usia": int(usia),
        "alamat": alamat.strip(),
        "riwayat_medis": (riwayat_medis or "").strip(),
        "tekanan_darah": tekanan_darah.strip(),
        "gula_darah": gula_darah,
        "catatan": (catatan or "").strip(),
    }
