# qr_utils.py
import logging
import re
from io import BytesIO
from typing import Optional

import cv2
import numpy as np
import qrcode
from PIL import Image

logger = logging.getLogger(__name__)

PROFIL_PAGE_PATH = "Profil_Lansia"

# Pola yang dikenali dari hasil scan: URL halaman profil Streamlit (?id=12),
# URL lama bergaya /profile/12, atau ID angka saja.
_POLA_ID = [
    re.compile(r"[?&]id=([0-9]+)"),
    re.compile(r"/profile/([0-9]+)"),
    re.compile(r"^([0-9]+)$"),
]


def adalah_id_profil(teks) -> bool:
    """ID profil hanya berisi angka 0-9."""
    return bool(_POLA_ID[-1].fullmatch(str(teks or "")))


def buat_url_profil(app_base_url: str, profile_id) -> str:
    return f"{app_base_url.rstrip('/')}/{PROFIL_PAGE_PATH}?id={profile_id}"


def buat_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """Membuat gambar QR code (PNG) dari teks, siap untuk st.image / st.download_button."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def ambil_id_profil(teks: Optional[str]) -> Optional[str]:
    """Mengambil ID profil dari teks hasil scan. None jika teks tidak dikenali."""
    teks = (teks or "").strip()
    if not teks:
        return None
    for pola in _POLA_ID:
        cocok = pola.search(teks)
        if cocok:
            return cocok.group(1)
    return None


def baca_qr_dari_gambar(gambar_bytes: bytes) -> Optional[str]:
    """
    Membaca isi QR code dari gambar kamera (bytes JPEG/PNG).
    Mengembalikan None jika tidak ada QR code yang terbaca.
    """
    try:
        gambar = Image.open(BytesIO(gambar_bytes)).convert("RGB")
    except (OSError, ValueError) as e:
        logger.warning("Gambar dari kamera tidak dapat dibuka: %s", e)
        return None

    array_bgr = cv2.cvtColor(np.array(gambar), cv2.COLOR_RGB2BGR)
    teks, _, _ = cv2.QRCodeDetector().detectAndDecode(array_bgr)
    return teks or None
