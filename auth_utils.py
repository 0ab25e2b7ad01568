# auth_utils.py

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"


@dataclass(frozen=True)
class User:
    id: int
    username: str
    role: str
    posyandu_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data.get("id"),
            username=data.get("username", ""),
            role=data.get("role", ""),
            posyandu_name=data.get("posyandu_name", ""),
        )


# ==============================================================================
# PENYIMPANAN TOKEN
# ==============================================================================

class TokenStorage(ABC):
    """Tempat penyimpanan token & data user. Diinjeksikan ke AuthSession."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryStorage(TokenStorage):
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def clear(self):
        self._data.clear()


class StreamlitStorage(TokenStorage):
    """Menyimpan token di st.session_state (atau mapping lain) dengan awalan kunci."""

    def __init__(self, state: MutableMapping, prefix: str = "auth_"):
        self._state = state
        self._prefix = prefix

    def get(self, key):
        return self._state.get(self._prefix + key)

    def set(self, key, value):
        self._state[self._prefix + key] = value

    def clear(self):
        for key in [k for k in list(self._state.keys()) if str(k).startswith(self._prefix)]:
            del self._state[key]


# ==============================================================================
# SESI LOGIN
# ==============================================================================

class AuthSession:
    """Identitas pengguna yang sedang login, dibaca dari TokenStorage."""

    def __init__(self, storage: TokenStorage):
        self.storage = storage

    @property
    def access_token(self) -> Optional[str]:
        return self.storage.get(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.storage.get(REFRESH_TOKEN_KEY)

    @property
    def user(self) -> Optional[User]:
        user_str = self.storage.get(USER_KEY)
        if not user_str:
            return None
        try:
            return User.from_dict(json.loads(user_str))
        except (ValueError, TypeError, AttributeError):
            logger.warning("Data user di penyimpanan rusak, sesi dibersihkan")
            self.clear()
            return None

    def set_auth_data(self, tokens: Dict[str, Any], user: Dict[str, Any]) -> None:
        self.storage.set(ACCESS_TOKEN_KEY, tokens["accessToken"])
        self.storage.set(REFRESH_TOKEN_KEY, tokens.get("refreshToken", ""))
        self.storage.set(USER_KEY, json.dumps(asdict(User.from_dict(user))))

    def clear(self) -> None:
        self.storage.clear()

    def is_authenticated(self) -> bool:
        return bool(self.access_token) and self.user is not None

    def is_admin(self) -> bool:
        user = self.user
        return user is not None and user.role == "admin"
