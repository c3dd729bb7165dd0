from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD, PASSWORD_SALT_LENGTH


class PasswordHasher:
    """Salted one-way hashing with a fixed method and cost."""

    def __init__(self, method: str = DEFAULT_PASSWORD_HASH_METHOD, salt_length: int = PASSWORD_SALT_LENGTH):
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._method, salt_length=self._salt_length)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
