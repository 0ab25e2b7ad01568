# pages/5_Scan_QR.py

import streamlit as st

from qr_utils import adalah_id_profil, ambil_id_profil, baca_qr_dari_gambar

st.set_page_config(page_title="Scan QR", page_icon="📷", layout="centered")


def buka_profil(profile_id):
    st.session_state["profil_id"] = profile_id
    st.switch_page("pages/4_Profil_Lansia.py")


def page_scan():
    st.header("📷 Scan QR Code Lansia")
    st.write("Arahkan kamera ke QR code pada kartu lansia, lalu ambil gambar.")

    foto = st.camera_input("Kamera")
    if foto is not None:
        teks = baca_qr_dari_gambar(foto.getvalue())
        if teks is None:
            st.warning("QR code tidak terbaca. Pastikan QR code terlihat jelas dan tidak buram, lalu coba lagi.")
        else:
            profile_id = ambil_id_profil(teks)
            if profile_id is None:
                st.error("QR code tidak valid. Pastikan Anda memindai QR code profil lansia.")
            else:
                st.success(f"QR code terbaca. Membuka profil #{profile_id}...")
                buka_profil(profile_id)

    st.divider()
    with st.form("manual_form"):
        st.write("Kamera tidak tersedia? Masukkan ID profil secara manual.")
        id_manual = st.text_input("ID Profil Lansia", placeholder="Contoh: 12")
        if st.form_submit_button("Buka Profil"):
            id_manual = (id_manual or "").strip()
            if adalah_id_profil(id_manual):
                buka_profil(id_manual)
            elif id_manual:
                st.error("ID profil harus berupa angka.")


# --- JALANKAN HALAMAN ---
page_scan()
