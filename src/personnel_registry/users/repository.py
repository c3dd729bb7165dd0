from __future__ import annotations

from typing import Optional, Protocol

from .model import PersonnelRecord, ProfileFields, UpdateResult


class PersonnelRepository(Protocol):
    """Repository interface for PersonnelRecord.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_service_number(self, service_number: str) -> Optional[PersonnelRecord]:
        raise NotImplementedError

    def create(self, *, service_number: str, password_hash: str) -> None:
        """Insert a new record; raise DuplicateUserError on a uniqueness violation."""
        raise NotImplementedError

    def update_profile(self, *, service_number: str, profile: ProfileFields) -> UpdateResult:
        raise NotImplementedError

    def set_photo_path(self, *, service_number: str, photo_path: str) -> UpdateResult:
        raise NotImplementedError
