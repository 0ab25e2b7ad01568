# page_utils.py
# Bagian yang dipakai bersama oleh semua halaman Streamlit: pengaturan, sesi login, klien API.

import streamlit as st

from api_client import PosyanduApiClient
from auth_utils import AuthSession, StreamlitStorage
from config import Settings, configure_logging, load_settings
from health_utils import HealthStatus


@st.cache_resource
def get_settings() -> Settings:
    try:
        secrets = dict(st.secrets)
    except Exception:
        # Belum ada .streamlit/secrets.toml, pakai nilai bawaan
        secrets = {}
    settings = load_settings(secrets)
    configure_logging(settings.log_level)
    return settings


def get_auth_session() -> AuthSession:
    return AuthSession(StreamlitStorage(st.session_state))


def get_api_client() -> PosyanduApiClient:
    settings = get_settings()
    return PosyanduApiClient(
        settings.api_base_url,
        auth_session=get_auth_session(),
        timeout=settings.request_timeout,
        device_info=settings.device_info,
    )


def require_admin() -> AuthSession:
    """Blokir halaman jika pengguna belum login sebagai admin."""
    session = get_auth_session()
    if not session.is_authenticated():
        st.error("🔒 Anda harus login untuk mengakses halaman ini.")
        st.page_link("posyandu_lansia_app.py", label="Ke halaman login", icon="🔑")
        st.stop()
    if not session.is_admin():
        st.error("⛔ Halaman ini hanya untuk admin posyandu.")
        st.stop()
    return session


def badge(status: HealthStatus) -> str:
    """Teks markdown berwarna untuk status kesehatan, misalnya ':green[Normal]'."""
    return f":{status.color}[**{status.status}**]"


def sidebar_user(session: AuthSession) -> None:
    user = session.user
    if user is None:
        return
    st.sidebar.success(f"Login sebagai: {user.username}")
    if user.posyandu_name:
        st.sidebar.caption(user.posyandu_name)
