# api_client.py

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from auth_utils import AuthSession

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r"^[0-9]{4,6}$")

PESAN_SERVER_MATI = "Tidak dapat terhubung ke server. Pastikan server backend berjalan."
PESAN_LOGIN_GAGAL = "Terjadi kesalahan saat login. Silakan coba lagi."
PESAN_SESI_BERAKHIR = "Sesi berakhir, silakan login kembali."


class ApiError(Exception):
    """Kegagalan saat berbicara dengan backend (jaringan atau respons bukan 2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthExpiredError(ApiError):
    pass


class PosyanduApiClient:
    """
    Klien REST untuk backend posyandu (profil lansia, pemeriksaan, otentikasi).

    Token dari AuthSession otomatis dikirim sebagai header Bearer. Respons 401
    membersihkan sesi lalu menaikkan AuthExpiredError.
    """

    def __init__(self, base_url: str, auth_session: Optional[AuthSession] = None,
                 timeout: float = 10.0, device_info: str = "", http=None):
        self.base_url = base_url.rstrip("/")
        self.auth_session = auth_session
        self.timeout = timeout
        self.device_info = device_info
        self.http = http or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        token = self.auth_session.access_token if self.auth_session else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.exceptions.ConnectionError as e:
            logger.error("Backend tidak dapat dihubungi (%s %s): %s", method, url, e)
            raise ApiError(PESAN_SERVER_MATI) from e
        except requests.exceptions.Timeout as e:
            logger.error("Permintaan ke backend melewati batas waktu (%s %s)", method, url)
            raise ApiError("Server tidak merespons. Silakan coba lagi.") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {"data": payload}

        if response.status_code == 401:
            if self.auth_session is not None:
                self.auth_session.clear()
            raise AuthExpiredError(payload.get("error") or PESAN_SESI_BERAKHIR, 401)

        if not response.ok:
            pesan = payload.get("error") or payload.get("message") or f"Permintaan gagal (HTTP {response.status_code})"
            logger.warning("Backend menolak %s %s: %s", method, path, pesan)
            raise ApiError(pesan, response.status_code)

        return payload

    # --- OTENTIKASI ---

    def _login(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        body = dict(body, deviceInfo=self.device_info)
        try:
            payload = self._request("POST", path, json=body)
        except AuthExpiredError as e:
            # 401 tanpa pesan dari backend saat login berarti kredensial ditolak
            if e.message == PESAN_SESI_BERAKHIR:
                raise ApiError(PESAN_LOGIN_GAGAL, e.status_code) from e
            raise
        if not payload.get("success"):
            raise ApiError(payload.get("message") or PESAN_LOGIN_GAGAL)

        data = payload["data"]
        if self.auth_session is not None:
            self.auth_session.set_auth_data(data["tokens"], data["user"])
        logger.info("Login berhasil sebagai %s", data["user"].get("username"))
        return payload

    def login_with_credentials(self, username: str, password: str, remember_me: bool = False) -> Dict[str, Any]:
        return self._login("/auth/login", {
            "username": username, "password": password, "rememberMe": remember_me,
        })

    def login_with_pin(self, pin: str, remember_me: bool = False) -> Dict[str, Any]:
        if not PIN_PATTERN.match(pin or ""):
            raise ApiError("PIN harus terdiri dari 4-6 digit angka")
        return self._login("/auth/login-pin", {"pin": pin, "rememberMe": remember_me})

    def _logout(self, path: str) -> None:
        try:
            self._request("POST", path)
        except ApiError as e:
            logger.warning("Logout di server gagal: %s", e.message)
        finally:
            if self.auth_session is not None:
                self.auth_session.clear()

    def logout(self) -> None:
        self._logout("/auth/logout")

    def logout_all(self) -> None:
        """Keluar dari semua perangkat."""
        self._logout("/auth/logout-all")

    def get_current_user(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["data"]["user"]

    def verify_token(self) -> bool:
        try:
            self._request("GET", "/auth/verify")
            return True
        except ApiError:
            return False

    # --- PROFIL & PEMERIKSAAN ---

    def list_profiles(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/profiles").get("profiles") or []

    def get_profile(self, profile_id) -> Optional[Dict[str, Any]]:
        """Mengembalikan {'profile': ..., 'checkups': [...]} atau None jika profil tidak ada."""
        try:
            payload = self._request("GET", f"/profiles/{profile_id}")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        payload.setdefault("checkups", [])
        return payload

    def create_profile(self, data: Dict[str, Any]) -> int:
        payload = self._request("POST", "/profiles", json=data)
        if not payload.get("id"):
            raise ApiError(payload.get("error") or "Gagal menyimpan data: respons tanpa ID")
        return payload["id"]

    def add_checkup(self, profile_id, tekanan_darah: str, gula_darah, catatan: str = "") -> Dict[str, Any]:
        return self._request("POST", "/checkups", json={
            "profile_id": profile_id,
            "tekanan_darah": tekanan_darah,
            "gula_darah": gula_darah,
            "catatan": catatan,
        })
