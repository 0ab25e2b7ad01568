# pages/2_Daftar_Lansia.py

import streamlit as st

from api_client import ApiError
from data_utils import cari_dan_urutkan_profil, format_tanggal, hitung_ringkasan_profil, profil_ke_dataframe
from page_utils import get_api_client

st.set_page_config(page_title="Daftar Lansia", page_icon="👵", layout="wide")

client = get_api_client()

PILIHAN_URUT = {
    "Tanggal Daftar": "created_at",
    "Pemeriksaan Terakhir": "last_checkup",
    "Nama": "nama",
    "Usia": "usia",
}


def page_daftar_lansia():
    st.header("👵 Daftar Lansia Terdaftar")

    try:
        profiles = client.list_profiles()
    except ApiError as e:
        st.error(f"Gagal mengambil daftar lansia: {e.message}")
        return

    ringkasan = hitung_ringkasan_profil(profiles)
    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Total Lansia", ringkasan["total_lansia"])
    col2.metric("Periksa ≤ 30 Hari", ringkasan["lansia_aktif"])
    col3.metric("Perlu Periksa", ringkasan["perlu_periksa"])
    col4.metric("Rata-rata Usia", f"{ringkasan['rata_rata_usia']} thn")
    col5.metric("Total Pemeriksaan", ringkasan["total_pemeriksaan"])

    if not profiles:
        st.info("Belum ada data lansia.")
        st.page_link("pages/3_Pendaftaran_Lansia.py", label="➕ Daftarkan lansia pertama")
        return

    st.divider()
    col_cari, col_urut, col_arah = st.columns([3, 2, 1])
    with col_cari:
        kata_kunci = st.text_input("Cari nama atau alamat", placeholder="Ketik nama atau alamat...")
    with col_urut:
        urut_label = st.selectbox("Urutkan berdasarkan", list(PILIHAN_URUT))
    with col_arah:
        urutan = st.radio("Urutan", ["desc", "asc"], format_func=lambda u: "Menurun" if u == "desc" else "Menaik")

    df_profil = profil_ke_dataframe(profiles)
    df_hasil = cari_dan_urutkan_profil(df_profil, kata_kunci, PILIHAN_URUT[urut_label], urutan)

    if df_hasil.empty:
        st.warning(f'Tidak ada lansia yang sesuai dengan pencarian "{kata_kunci}"')
        return

    df_tampil = df_hasil.copy()
    df_tampil["last_checkup"] = df_tampil["last_checkup"].apply(format_tanggal)
    df_tampil["created_at"] = df_tampil["created_at"].apply(lambda tgl: format_tanggal(tgl, dengan_jam=False))
    df_tampil["total_checkups"] = df_tampil["total_checkups"].astype(str) + " kali"
    df_tampil = df_tampil[["nama", "usia", "kategori_usia", "alamat", "total_checkups", "last_checkup", "status_kunjungan", "created_at"]]
    df_tampil = df_tampil.rename(columns={
        "nama": "Nama",
        "usia": "Usia",
        "kategori_usia": "Kategori",
        "alamat": "Alamat",
        "total_checkups": "Pemeriksaan",
        "last_checkup": "Terakhir Periksa",
        "status_kunjungan": "Status",
        "created_at": "Terdaftar",
    })
    df_tampil.index += 1
    st.dataframe(df_tampil, use_container_width=True)

    keterangan = f"Menampilkan {len(df_hasil)} dari {len(df_profil)} lansia"
    if kata_kunci:
        keterangan += f' untuk pencarian "{kata_kunci}"'
    st.caption(keterangan)

    pilihan = st.selectbox(
        "Lihat detail profil:",
        options=df_hasil["id"].tolist(),
        format_func=lambda pid: df_hasil.loc[df_hasil["id"] == pid, "nama"].iloc[0],
        index=None,
        placeholder="Pilih lansia...",
    )
    if pilihan is not None:
        st.session_state["profil_id"] = str(pilihan)
        st.switch_page("pages/4_Profil_Lansia.py")


# --- JALANKAN HALAMAN ---
page_daftar_lansia()
