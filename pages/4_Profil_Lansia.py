# pages/4_Profil_Lansia.py

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from api_client import ApiError
from data_utils import (
    GULA_DARAH_FORM_MAX,
    GULA_DARAH_FORM_MIN,
    format_tanggal,
    pisahkan_tekanan_darah,
    siapkan_riwayat_pemeriksaan,
    validasi_pemeriksaan,
)
from health_utils import (
    get_blood_pressure_status,
    get_blood_sugar_status,
    get_recommendations,
    get_risk_level,
    needs_medical_attention,
    validate_blood_pressure_format,
)
from laporan_utils import generate_pdf_riwayat
from page_utils import badge, get_api_client, get_auth_session, get_settings
from qr_utils import adalah_id_profil, buat_qr_png, buat_url_profil

st.set_page_config(page_title="Profil Lansia", page_icon="🩺", layout="wide")

client = get_api_client()


def ambil_profil_id():
    """ID profil dari URL (?id=..., dipakai QR code) atau dari halaman sebelumnya."""
    profile_id = st.query_params.get("id") or st.session_state.get("profil_id")
    if adalah_id_profil(profile_id):
        st.query_params["id"] = str(profile_id)
        return str(profile_id)
    return None


# --- KOMPONEN TAMPILAN ---

def tampilkan_data_pribadi(profile):
    st.subheader("Data Pribadi")
    st.markdown(f"**Nama Lengkap**  \n{profile.get('nama', '-')}")
    st.markdown(f"**Usia**  \n{profile.get('usia', '-')} tahun")
    st.markdown(f"**Alamat**  \n{profile.get('alamat') or '-'}")
    st.markdown(f"**Riwayat Medis**  \n{profile.get('riwayat_medis') or 'Tidak ada riwayat khusus'}")
    st.markdown(f"**Terdaftar**  \n{format_tanggal(profile.get('created_at'))}")


def tampilkan_qr(profile_id):
    st.subheader("QR Code")
    st.caption("Untuk pemeriksaan selanjutnya")
    url_profil = buat_url_profil(get_settings().app_base_url, profile_id)
    qr_png = buat_qr_png(url_profil)
    st.image(qr_png, width=220)
    st.code(url_profil, language=None)
    st.download_button(
        label="⬇️ Unduh QR Code",
        data=qr_png,
        file_name=f"qr-code-lansia-{profile_id}.png",
        mime="image/png",
    )


def tampilkan_analisis(tekanan_darah, gula_darah):
    """Analisis kesehatan dari pemeriksaan terakhir: tingkat risiko dan rekomendasi."""
    bp_status = get_blood_pressure_status(tekanan_darah)
    sugar_status = get_blood_sugar_status(gula_darah)
    risiko = get_risk_level(bp_status, sugar_status)

    st.subheader("Analisis Kesehatan")
    st.markdown(f"Tingkat risiko: :{risiko.color}[**Risiko {risiko.label}**]")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**Tekanan Darah** {badge(bp_status)}")
        st.caption(bp_status.description)
    with col2:
        st.markdown(f"**Gula Darah** {badge(sugar_status)}")
        st.caption(sugar_status.description)

    st.markdown("**Rekomendasi**")
    for rekomendasi in get_recommendations(bp_status, sugar_status):
        st.markdown(f"- {rekomendasi}")

    if needs_medical_attention(risiko):
        st.error(
            "**Perhatian Medis Diperlukan**  \n"
            "Hasil pemeriksaan menunjukkan kondisi yang memerlukan perhatian medis. "
            "Segera konsultasi dengan dokter atau tenaga kesehatan."
        )


def tampilkan_pemeriksaan_terakhir(terakhir):
    st.subheader("Pemeriksaan Terakhir")
    st.caption(terakhir["tanggal_teks"])
    col1, col2 = st.columns(2)
    with col1:
        with st.container(border=True):
            st.markdown(f"Tekanan Darah {badge(get_blood_pressure_status(terakhir['tekanan_darah']))}")
            st.markdown(f"### {terakhir['tekanan_darah']}")
            st.caption("mmHg")
    with col2:
        with st.container(border=True):
            st.markdown(f"Gula Darah {badge(get_blood_sugar_status(terakhir['gula_darah']))}")
            gula_darah = terakhir["gula_darah"]
            st.markdown("### -" if pd.isna(gula_darah) else f"### {gula_darah:g}")
            st.caption("mg/dL")
    if terakhir["catatan"] != "-":
        st.markdown(f"**Catatan:** {terakhir['catatan']}")


def form_tambah_pemeriksaan(profile_id):
    """Form tambah pemeriksaan; tekanan darah divalidasi setiap kali isian berubah."""
    with st.expander("➕ Tambah Pemeriksaan Baru"):
        st.caption("Catat hasil pemeriksaan kesehatan terbaru")
        tekanan_darah = st.text_input("Tekanan Darah (mmHg)", placeholder="Contoh: 120/80", key="cek_tekanan_darah")
        if tekanan_darah:
            hasil_bp = validate_blood_pressure_format(tekanan_darah)
            st.caption(f":{'green' if hasil_bp.is_valid else 'red'}[{hasil_bp.message}]")
        gula_darah = st.number_input("Gula Darah (mg/dL)", min_value=GULA_DARAH_FORM_MIN,
                                     max_value=GULA_DARAH_FORM_MAX, value=None, step=1,
                                     placeholder="Masukkan kadar gula darah", key="cek_gula_darah")
        catatan = st.text_area("Catatan", placeholder="Catatan tambahan dari pemeriksaan (opsional)",
                               key="cek_catatan")

        bp_valid = validate_blood_pressure_format(tekanan_darah).is_valid
        if st.button("Simpan Pemeriksaan", type="primary", disabled=not bp_valid):
            kesalahan = validasi_pemeriksaan(tekanan_darah, gula_darah)
            if kesalahan:
                for pesan in kesalahan:
                    st.warning(pesan)
                return
            try:
                client.add_checkup(profile_id, tekanan_darah.strip(), gula_darah, (catatan or "").strip())
            except ApiError as e:
                st.error(f"Gagal menambah pemeriksaan: {e.message}")
                return
            for key in ("cek_tekanan_darah", "cek_gula_darah", "cek_catatan"):
                st.session_state.pop(key, None)
            st.success("Pemeriksaan berhasil ditambahkan!")
            st.rerun()


def plot_tren_pemeriksaan(df_riwayat):
    st.subheader("📈 Grafik Tren Kesehatan")
    df = pisahkan_tekanan_darah(df_riwayat).dropna(subset=["tanggal"]).sort_values(by="tanggal")
    if len(df) < 2:
        st.info("Grafik tren tampil setelah ada minimal dua pemeriksaan.")
        return

    col1, col2 = st.columns(2)
    with col1:
        fig, ax = plt.subplots(figsize=(6, 4))
        ax.plot(df["tanggal"], df["sistolik"], marker="o", label="Sistolik")
        ax.plot(df["tanggal"], df["diastolik"], marker="o", label="Diastolik")
        ax.axhline(130, color="orange", linestyle="--", linewidth=0.8)
        ax.axhline(80, color="orange", linestyle="--", linewidth=0.8)
        ax.set_title("Tren Tekanan Darah"); ax.set_ylabel("mmHg"); ax.legend(); ax.grid(True, linestyle=":")
        plt.setp(ax.get_xticklabels(), rotation=45)
        fig.tight_layout()
        st.pyplot(fig)
        plt.close(fig)
    with col2:
        fig, ax = plt.subplots(figsize=(6, 4))
        ax.plot(df["tanggal"], df["gula_darah"], marker="o", color="g")
        ax.axhline(100, color="orange", linestyle="--", linewidth=0.8)
        ax.axhline(126, color="red", linestyle="--", linewidth=0.8)
        ax.set_title("Tren Gula Darah"); ax.set_ylabel("mg/dL"); ax.grid(True, linestyle=":")
        plt.setp(ax.get_xticklabels(), rotation=45)
        fig.tight_layout()
        st.pyplot(fig)
        plt.close(fig)


# --- FUNGSI HALAMAN UTAMA ---
def page_profil():
    profile_id = ambil_profil_id()
    if profile_id is None:
        st.warning("Profil belum dipilih. Scan QR code atau pilih lansia dari daftar.")
        st.page_link("pages/5_Scan_QR.py", label="📷 Scan QR")
        st.page_link("pages/2_Daftar_Lansia.py", label="👵 Daftar Lansia")
        return

    try:
        data = client.get_profile(profile_id)
    except ApiError as e:
        st.error(f"Gagal mengambil profil: {e.message}")
        return
    if data is None:
        st.error(f"Profil lansia dengan ID {profile_id} tidak ditemukan.")
        st.page_link("pages/5_Scan_QR.py", label="📷 Scan Lagi")
        return

    profile = data["profile"]
    df_riwayat = siapkan_riwayat_pemeriksaan(data["checkups"])

    st.header(f"🩺 Profil {profile.get('nama', '')}")

    col_profil, col_qr = st.columns([2, 1])
    with col_profil:
        with st.container(border=True):
            tampilkan_data_pribadi(profile)
    with col_qr:
        with st.container(border=True):
            tampilkan_qr(profile_id)

    if not df_riwayat.empty:
        terakhir = df_riwayat.iloc[0]
        with st.container(border=True):
            tampilkan_pemeriksaan_terakhir(terakhir)
        with st.container(border=True):
            tampilkan_analisis(terakhir["tekanan_darah"], terakhir["gula_darah"])

    form_tambah_pemeriksaan(profile_id)

    st.divider()
    st.subheader("Riwayat Pemeriksaan")
    st.caption(f"Total {len(df_riwayat)} pemeriksaan")
    if df_riwayat.empty:
        st.info("Lansia ini belum memiliki riwayat pemeriksaan.")
        return

    df_tampil = df_riwayat[["tanggal_teks", "tekanan_darah", "status_tekanan_darah",
                            "gula_darah", "status_gula_darah", "catatan"]].rename(columns={
        "tanggal_teks": "Tanggal",
        "tekanan_darah": "Tekanan Darah",
        "status_tekanan_darah": "Status Tekanan Darah",
        "gula_darah": "Gula Darah (mg/dL)",
        "status_gula_darah": "Status Gula Darah",
        "catatan": "Catatan",
    })
    df_tampil.index += 1
    st.dataframe(df_tampil, use_container_width=True)

    plot_tren_pemeriksaan(df_riwayat)

    user = get_auth_session().user
    pdf_buffer = generate_pdf_riwayat(profile, df_riwayat, user.posyandu_name if user else "")
    st.download_button(
        label="📄 Unduh Riwayat (PDF)",
        data=pdf_buffer,
        file_name=f"Riwayat_Pemeriksaan_{profile_id}.pdf",
        mime="application/pdf",
    )


# --- JALANKAN HALAMAN ---
page_profil()
