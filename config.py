# config.py

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_APP_BASE_URL = "http://localhost:8501"


@dataclass(frozen=True)
class Settings:
    """Pengaturan aplikasi yang dibaca dari Streamlit Secrets."""
    api_base_url: str = DEFAULT_API_BASE_URL
    app_base_url: str = DEFAULT_APP_BASE_URL
    request_timeout: float = 10.0
    device_info: str = "Posyandu Lansia Streamlit"
    log_level: str = "INFO"


def load_settings(secrets: Optional[Mapping[str, Any]] = None) -> Settings:
    """
    Membuat Settings dari mapping secrets (misalnya st.secrets).

    Kunci yang tidak ada memakai nilai bawaan. REQUEST_TIMEOUT yang bukan angka
    positif menghasilkan ValueError.
    """
    secrets = secrets or {}
    defaults = Settings()

    timeout_raw = secrets.get("REQUEST_TIMEOUT", defaults.request_timeout)
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError):
        raise ValueError(f"REQUEST_TIMEOUT harus berupa angka, bukan {timeout_raw!r}")
    if timeout <= 0:
        raise ValueError("REQUEST_TIMEOUT harus lebih besar dari 0")

    return Settings(
        api_base_url=str(secrets.get("API_BASE_URL", defaults.api_base_url)).rstrip("/"),
        app_base_url=str(secrets.get("APP_BASE_URL", defaults.app_base_url)).rstrip("/"),
        request_timeout=timeout,
        device_info=str(secrets.get("DEVICE_INFO", defaults.device_info)),
        log_level=str(secrets.get("LOG_LEVEL", defaults.log_level)).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
