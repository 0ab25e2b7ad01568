# pages/1_Dashboard_Admin.py

import plotly.express as px
import streamlit as st

from api_client import ApiError, AuthExpiredError
from data_utils import format_tanggal, hitung_ringkasan_profil, profil_ke_dataframe
from page_utils import get_api_client, require_admin, sidebar_user

# --- KONEKSI & KEAMANAN ---
st.set_page_config(page_title="Dashboard Admin", page_icon="📈", layout="wide")

session = require_admin()
sidebar_user(session)
client = get_api_client()

WARNA_STATUS = {
    "Baru Periksa": "#2E8B57",
    "Perlu Kontrol": "#F0AD4E",
    "Perlu Periksa": "#D9534F",
    "Belum Periksa": "#A9A9A9",
}


def page_dashboard():
    st.markdown(
        """
        <div style="background-color:#0A2342; padding:16px; border-radius:10px;">
            <h2 style="color:white; margin:0;">📈 Dashboard Admin Posyandu</h2>
        </div>
        """,
        unsafe_allow_html=True
    )
    user = session.user
    if user and user.posyandu_name:
        st.caption(user.posyandu_name)

    try:
        profiles = client.list_profiles()
    except AuthExpiredError:
        st.error("Sesi login berakhir. Silakan login kembali.")
        st.stop()
    except ApiError as e:
        st.error(f"Gagal mengambil data dashboard: {e.message}")
        return

    ringkasan = hitung_ringkasan_profil(profiles)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Lansia", ringkasan["total_lansia"])
    col2.metric("Total Pemeriksaan", ringkasan["total_pemeriksaan"])
    col3.metric("Lansia Aktif (30 hari)", ringkasan["lansia_aktif"])
    col4.metric("Pemeriksaan Bulan Ini", ringkasan["pemeriksaan_bulan_ini"])

    if not profiles:
        st.info("Belum ada data lansia yang terdaftar.")
        st.page_link("pages/3_Pendaftaran_Lansia.py", label="➕ Daftarkan lansia pertama")
        return

    df_profil = profil_ke_dataframe(profiles)

    kolom_kiri, kolom_kanan = st.columns([3, 2])
    with kolom_kiri:
        st.subheader("Lansia Terdaftar")
        df_tampil = df_profil.copy()
        df_tampil["last_checkup"] = df_tampil["last_checkup"].apply(format_tanggal)
        df_tampil = df_tampil[["nama", "usia", "total_checkups", "last_checkup", "status_kunjungan"]].rename(columns={
            "nama": "Nama",
            "usia": "Usia",
            "total_checkups": "Jumlah Pemeriksaan",
            "last_checkup": "Pemeriksaan Terakhir",
            "status_kunjungan": "Status",
        })
        df_tampil.index += 1  # Indeks mulai dari 1
        st.dataframe(df_tampil, use_container_width=True, height=380)

    with kolom_kanan:
        st.subheader("Status Kunjungan")
        df_status = df_profil["status_kunjungan"].value_counts().rename_axis("status").reset_index(name="jumlah")
        fig = px.pie(
            df_status,
            names="status",
            values="jumlah",
            color="status",
            color_discrete_map=WARNA_STATUS,
            hole=0.4,
        )
        fig.update_layout(margin=dict(t=20, l=10, r=10, b=10))
        st.plotly_chart(fig, use_container_width=True)

    st.divider()
    pilihan = st.selectbox(
        "Buka profil lansia:",
        options=df_profil["id"].tolist(),
        format_func=lambda pid: df_profil.loc[df_profil["id"] == pid, "nama"].iloc[0],
        index=None,
        placeholder="Pilih lansia...",
    )
    if pilihan is not None:
        st.session_state["profil_id"] = str(pilihan)
        st.switch_page("pages/4_Profil_Lansia.py")


# --- JALANKAN HALAMAN ---
page_dashboard()
