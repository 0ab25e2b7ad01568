# health_utils.py

import math
import numbers
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# ==============================================================================
# TIPE DATA HASIL KLASIFIKASI & VALIDASI
# ==============================================================================

@dataclass(frozen=True)
class HealthStatus:
    """Hasil kategorisasi satu nilai pemeriksaan (tekanan darah / gula darah)."""
    status: str
    color: str
    description: str


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str


@dataclass(frozen=True)
class RiskLevel:
    level: str
    label: str
    color: str


# --- BATAS NILAI ---
SISTOLIK_MIN, SISTOLIK_MAX = 50, 300
DIASTOLIK_MIN, DIASTOLIK_MAX = 30, 200
GULA_DARAH_MIN, GULA_DARAH_MAX = 0, 1000

BP_PATTERN = re.compile(r"^[0-9]{2,3}/[0-9]{2,3}$")

# --- LABEL KATEGORI ---
STATUS_NORMAL = "Normal"
STATUS_NORMAL_TINGGI = "Normal Tinggi"
STATUS_HIPERTENSI_1 = "Hipertensi Tingkat 1"
STATUS_HIPERTENSI_2 = "Hipertensi Tingkat 2"
STATUS_PERLU_EVALUASI = "Perlu Evaluasi"
STATUS_TIDAK_VALID = "Tidak Valid"
STATUS_PRADIABETES = "Pradiabetes"
STATUS_DIABETES = "Diabetes"

# Tabel kategori tekanan darah untuk lansia. Warna memakai nama warna markdown Streamlit.
BLOOD_PRESSURE_STATUSES: Dict[str, HealthStatus] = {
    STATUS_NORMAL: HealthStatus(
        STATUS_NORMAL, "green",
        "Tekanan darah dalam batas normal untuk lansia"),
    STATUS_NORMAL_TINGGI: HealthStatus(
        STATUS_NORMAL_TINGGI, "orange",
        "Tekanan darah sedikit tinggi, perlu pemantauan rutin"),
    STATUS_HIPERTENSI_1: HealthStatus(
        STATUS_HIPERTENSI_1, "red",
        "Hipertensi ringan, perlu konsultasi dokter dan perubahan gaya hidup"),
    STATUS_HIPERTENSI_2: HealthStatus(
        STATUS_HIPERTENSI_2, "red",
        "Hipertensi berat, segera konsultasi dokter untuk penanganan medis"),
    STATUS_PERLU_EVALUASI: HealthStatus(
        STATUS_PERLU_EVALUASI, "gray",
        "Nilai tekanan darah perlu evaluasi lebih lanjut"),
    STATUS_TIDAK_VALID: HealthStatus(
        STATUS_TIDAK_VALID, "gray",
        "Format atau nilai tekanan darah tidak valid (gunakan format: 120/80)"),
}

BLOOD_SUGAR_STATUSES: Dict[str, HealthStatus] = {
    STATUS_NORMAL: HealthStatus(STATUS_NORMAL, "green", "Kadar gula darah normal"),
    STATUS_PRADIABETES: HealthStatus(
        STATUS_PRADIABETES, "orange", "Kadar gula darah tinggi, berisiko diabetes"),
    STATUS_DIABETES: HealthStatus(
        STATUS_DIABETES, "red", "Kadar gula darah tinggi, indikasi diabetes"),
    STATUS_TIDAK_VALID: HealthStatus(STATUS_TIDAK_VALID, "gray", "Nilai gula darah tidak valid"),
}


# ==============================================================================
# VALIDASI FORMAT TEKANAN DARAH
# ==============================================================================

def validate_blood_pressure_format(bp) -> ValidationResult:
    """
    Memeriksa apakah isian tekanan darah berformat 'sistolik/diastolik' dan masuk akal.

    Aturan dicek berurutan, pesan diambil dari aturan pertama yang gagal:
    kosong, bentuk (2-3 digit/2-3 digit), rentang sistolik, rentang diastolik,
    lalu sistolik harus lebih tinggi dari diastolik.
    """
    if not isinstance(bp, str) or bp.strip() == "":
        return ValidationResult(False, "Tekanan darah harus diisi")

    bp = bp.strip()
    if not BP_PATTERN.match(bp):
        return ValidationResult(False, "Format harus: sistolik/diastolik (contoh: 120/80)")

    sistolik, diastolik = (int(angka) for angka in bp.split("/"))

    if sistolik < SISTOLIK_MIN or sistolik > SISTOLIK_MAX:
        return ValidationResult(
            False, f"Tekanan sistolik harus antara {SISTOLIK_MIN}-{SISTOLIK_MAX} mmHg")

    if diastolik < DIASTOLIK_MIN or diastolik > DIASTOLIK_MAX:
        return ValidationResult(
            False, f"Tekanan diastolik harus antara {DIASTOLIK_MIN}-{DIASTOLIK_MAX} mmHg")

    if sistolik <= diastolik:
        return ValidationResult(False, "Tekanan sistolik harus lebih tinggi dari diastolik")

    return ValidationResult(True, "Format tekanan darah valid")


def parse_blood_pressure(bp) -> Optional[Tuple[int, int]]:
    """Mengembalikan pasangan (sistolik, diastolik) jika valid, selain itu None."""
    if not validate_blood_pressure_format(bp).is_valid:
        return None
    sistolik, diastolik = bp.strip().split("/")
    return int(sistolik), int(diastolik)


# ==============================================================================
# KATEGORISASI
# ==============================================================================

def get_blood_pressure_status(bp) -> HealthStatus:
    """
    Kategorisasi tekanan darah untuk lansia.

    Input yang tidak lolos validasi (kosong, setengah diketik, data lama yang rusak)
    menghasilkan status 'Tidak Valid', tidak pernah exception.
    Urutan aturan di bawah adalah prioritas; rentangnya saling tumpang tindih.
    """
    parsed = parse_blood_pressure(bp)
    if parsed is None:
        return BLOOD_PRESSURE_STATUSES[STATUS_TIDAK_VALID]

    sistolik, diastolik = parsed

    if sistolik < 130 and diastolik < 80:
        kategori = STATUS_NORMAL
    elif 130 <= sistolik <= 139 or 80 <= diastolik <= 89:
        kategori = STATUS_NORMAL_TINGGI
    elif 140 <= sistolik <= 159 or 90 <= diastolik <= 99:
        kategori = STATUS_HIPERTENSI_1
    elif sistolik >= 160 or diastolik >= 100:
        kategori = STATUS_HIPERTENSI_2
    else:
        kategori = STATUS_PERLU_EVALUASI

    return BLOOD_PRESSURE_STATUSES[kategori]


def get_blood_sugar_status(sugar) -> HealthStatus:
    """Kategorisasi gula darah (mg/dL). Nilai bukan angka atau di luar 0-1000 -> 'Tidak Valid'."""
    if isinstance(sugar, bool) or not isinstance(sugar, numbers.Real):
        return BLOOD_SUGAR_STATUSES[STATUS_TIDAK_VALID]

    nilai = float(sugar)
    if not math.isfinite(nilai) or nilai < GULA_DARAH_MIN or nilai > GULA_DARAH_MAX:
        return BLOOD_SUGAR_STATUSES[STATUS_TIDAK_VALID]

    if nilai < 100:
        return BLOOD_SUGAR_STATUSES[STATUS_NORMAL]
    if nilai < 126:
        return BLOOD_SUGAR_STATUSES[STATUS_PRADIABETES]
    return BLOOD_SUGAR_STATUSES[STATUS_DIABETES]


# ==============================================================================
# ANALISIS RISIKO & REKOMENDASI
# ==============================================================================

RISK_LEVELS: Dict[str, RiskLevel] = {
    "very_high": RiskLevel("very_high", "Sangat Tinggi", "red"),
    "high": RiskLevel("high", "Tinggi", "red"),
    "moderate": RiskLevel("moderate", "Sedang", "orange"),
    "low": RiskLevel("low", "Rendah", "green"),
}

REKOMENDASI_TEKANAN_DARAH: Dict[str, List[str]] = {
    STATUS_NORMAL_TINGGI: [
        "Kurangi konsumsi garam dan makanan berlemak",
        "Lakukan olahraga ringan secara teratur",
        "Pantau tekanan darah secara berkala",
    ],
    STATUS_HIPERTENSI_1: [
        "Konsultasi dengan dokter untuk evaluasi lebih lanjut",
        "Kurangi konsumsi garam dan makanan berlemak",
        "Lakukan olahraga ringan secara teratur",
        "Pantau tekanan darah secara rutin",
    ],
    STATUS_HIPERTENSI_2: [
        "SEGERA konsultasi dengan dokter",
        "Pantau tekanan darah setiap hari",
        "Ikuti anjuran pengobatan dari dokter",
        "Hindari aktivitas berat tanpa pengawasan medis",
    ],
}

REKOMENDASI_GULA_DARAH: Dict[str, List[str]] = {
    STATUS_PRADIABETES: [
        "Kurangi konsumsi gula dan karbohidrat sederhana",
        "Tingkatkan aktivitas fisik",
        "Pantau berat badan",
        "Periksa gula darah secara berkala",
    ],
    STATUS_DIABETES: [
        "Konsultasi dengan dokter untuk penanganan diabetes",
        "Kontrol diet sesuai anjuran dokter",
        "Pantau gula darah secara rutin",
        "Minum obat sesuai resep dokter",
    ],
}

REKOMENDASI_UMUM = [
    "Pertahankan pola hidup sehat",
    "Lakukan pemeriksaan rutin",
    "Konsumsi makanan bergizi seimbang",
    "Olahraga ringan secara teratur",
]


def get_risk_level(bp_status: HealthStatus, sugar_status: HealthStatus) -> RiskLevel:
    """Menentukan tingkat risiko gabungan dari status tekanan darah dan gula darah."""
    if bp_status.status == STATUS_HIPERTENSI_2 or sugar_status.status == STATUS_DIABETES:
        return RISK_LEVELS["very_high"]
    if bp_status.status == STATUS_HIPERTENSI_1:
        return RISK_LEVELS["high"]
    if bp_status.status == STATUS_NORMAL_TINGGI or sugar_status.status == STATUS_PRADIABETES:
        return RISK_LEVELS["moderate"]
    return RISK_LEVELS["low"]


def get_recommendations(bp_status: HealthStatus, sugar_status: HealthStatus) -> List[str]:
    rekomendasi = list(REKOMENDASI_TEKANAN_DARAH.get(bp_status.status, []))
    rekomendasi += REKOMENDASI_GULA_DARAH.get(sugar_status.status, [])
    return rekomendasi or list(REKOMENDASI_UMUM)


def needs_medical_attention(risk: RiskLevel) -> bool:
    return risk.level in ("high", "very_high")
