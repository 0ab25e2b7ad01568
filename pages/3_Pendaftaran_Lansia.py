# pages/3_Pendaftaran_Lansia.py

import streamlit as st

from api_client import ApiError
from data_utils import (
    GULA_DARAH_FORM_MAX,
    GULA_DARAH_FORM_MIN,
    USIA_MAX,
    USIA_MIN,
    buat_payload_pendaftaran,
    validasi_pendaftaran,
)
from health_utils import validate_blood_pressure_format
from page_utils import get_api_client

st.set_page_config(page_title="Pendaftaran Lansia", page_icon="📝", layout="wide")

client = get_api_client()


# --- FUNGSI HALAMAN UTAMA ---
def page_pendaftaran():
    st.header("📝 Pendaftaran Lansia Baru")
    st.write("Isi data diri lansia dan hasil pemeriksaan pertamanya.")

    # Tidak memakai st.form agar pesan validasi tekanan darah muncul setiap kali isian berubah
    st.subheader("Data Pribadi")
    col1, col2 = st.columns(2)
    with col1:
        nama = st.text_input("Nama Lengkap *", placeholder="Masukkan nama lengkap")
    with col2:
        usia = st.number_input("Usia (tahun) *", min_value=USIA_MIN, max_value=USIA_MAX, value=None,
                               step=1, placeholder="Masukkan usia")
    alamat = st.text_area("Alamat *", placeholder="Masukkan alamat lengkap")
    riwayat_medis = st.text_area("Riwayat Medis", placeholder="Masukkan riwayat penyakit atau kondisi medis (opsional)")

    st.subheader("Pemeriksaan Pertama")
    col3, col4 = st.columns(2)
    with col3:
        tekanan_darah = st.text_input("Tekanan Darah (mmHg) *", placeholder="Contoh: 120/80")
        if tekanan_darah:
            hasil_bp = validate_blood_pressure_format(tekanan_darah)
            if hasil_bp.is_valid:
                st.caption(f":green[✓ {hasil_bp.message}]")
            else:
                st.caption(f":red[{hasil_bp.message}]")
    with col4:
        gula_darah = st.number_input("Gula Darah (mg/dL) *", min_value=GULA_DARAH_FORM_MIN,
                                     max_value=GULA_DARAH_FORM_MAX, value=None, step=1,
                                     placeholder="Masukkan kadar gula darah")
    catatan = st.text_area("Catatan", placeholder="Catatan tambahan dari pemeriksaan (opsional)")

    kesalahan = validasi_pendaftaran(nama, usia, alamat, tekanan_darah, gula_darah)
    bp_valid = validate_blood_pressure_format(tekanan_darah).is_valid

    if st.button("Simpan Data Lansia", type="primary", disabled=not bp_valid):
        if kesalahan:
            for pesan in kesalahan:
                st.warning(pesan)
            return

        payload = buat_payload_pendaftaran(nama, usia, alamat, riwayat_medis, tekanan_darah, gula_darah, catatan)
        try:
            with st.spinner("Menyimpan data..."):
                profile_id = client.create_profile(payload)
        except ApiError as e:
            st.error(f"Gagal menyimpan data: {e.message}")
            return

        st.success(f"Lansia '{payload['nama']}' berhasil didaftarkan.")
        st.session_state["profil_id"] = str(profile_id)
        st.switch_page("pages/4_Profil_Lansia.py")


# --- JALANKAN HALAMAN ---
page_pendaftaran()
