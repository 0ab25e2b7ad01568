# posyandu_lansia_app.py

import streamlit as st

from api_client import ApiError
from page_utils import get_api_client, get_auth_session, sidebar_user

# ==============================================================================
# OTENTIKASI
# ==============================================================================

def login_page():
    """Menampilkan form login (username/password atau PIN) dan menangani proses otentikasi."""
    st.header("🔑 Login Admin Posyandu")

    mode = st.radio("Metode login", ["Username & Password", "PIN"], horizontal=True)

    with st.form("login_form"):
        if mode == "PIN":
            pin = st.text_input("PIN", type="password", max_chars=6, placeholder="••••",
                                help="Masukkan PIN 4-6 digit untuk login cepat")
        else:
            username = st.text_input("Username", placeholder="Masukkan username")
            password = st.text_input("Password", type="password", placeholder="Masukkan password")
        remember_me = st.checkbox("Ingat saya")
        submitted = st.form_submit_button("Login")

    if not submitted:
        return

    client = get_api_client()
    try:
        if mode == "PIN":
            if not pin:
                st.warning("Mohon masukkan PIN.")
                return
            client.login_with_pin(pin, remember_me)
        else:
            if not username or not password:
                st.warning("Mohon masukkan username dan password.")
                return
            client.login_with_credentials(username, password, remember_me)
    except ApiError as e:
        st.error(e.message)
        return

    st.switch_page("pages/1_Dashboard_Admin.py")


def home_page():
    """Halaman beranda: menu utama untuk kader posyandu."""
    st.title("Selamat Datang di Aplikasi Kesehatan Lansia")
    st.markdown("Pencatatan pemeriksaan tekanan darah dan gula darah lansia di posyandu.")

    col1, col2, col3 = st.columns(3)
    with col1:
        with st.container(border=True):
            st.subheader("📷 Scan QR")
            st.write("Buka profil lansia dengan memindai kartu QR.")
            st.page_link("pages/5_Scan_QR.py", label="Mulai Scan")
    with col2:
        with st.container(border=True):
            st.subheader("📝 Daftar Baru")
            st.write("Daftarkan lansia baru beserta pemeriksaan pertamanya.")
            st.page_link("pages/3_Pendaftaran_Lansia.py", label="Isi Formulir")
    with col3:
        with st.container(border=True):
            st.subheader("👵 Data Lansia")
            st.write("Lihat seluruh lansia yang terdaftar.")
            st.page_link("pages/2_Daftar_Lansia.py", label="Lihat Daftar")


# ==============================================================================
# ALUR UTAMA APLIKASI
# ==============================================================================

st.set_page_config(page_title="Posyandu Lansia", page_icon="🏥", layout="wide")

session = get_auth_session()

home_page()
st.divider()

if not session.is_authenticated():
    login_page()
else:
    sidebar_user(session)
    st.info("Anda sudah login. Buka Dashboard Admin dari menu di sebelah kiri.")
    st.sidebar.divider()
    if st.sidebar.button("🔒 Logout"):
        get_api_client().logout()
        st.rerun()
    if st.sidebar.button("Logout dari semua perangkat"):
        get_api_client().logout_all()
        st.rerun()
