from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_MAX_PHOTO_BYTES, DEFAULT_PASSWORD_HASH_METHOD
from .database.connection import DBConfig, DatabaseConnection
from .photos.service import PhotoService
from .photos.storage import PhotoStorage
from .users.mysql_user_repository import MySQLPersonnelRepository
from .users.passwords import PasswordHasher
from .users.repository import PersonnelRepository
from .users.service import AuthService, ProfileService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    personnel_repo: PersonnelRepository
    photo_storage: PhotoStorage
    hasher: PasswordHasher

    auth_service: AuthService
    profile_service: ProfileService
    photo_service: PhotoService


def wire_container(
    *,
    personnel_repo: PersonnelRepository,
    upload_folder: str | Path,
    max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over an existing repository (MySQL or a test fake)."""
    hasher = PasswordHasher(method=password_hash_method)
    photo_storage = PhotoStorage(upload_folder, max_bytes=max_photo_bytes)

    return Container(
        conn=conn,
        personnel_repo=personnel_repo,
        photo_storage=photo_storage,
        hasher=hasher,
        auth_service=AuthService(personnel_repo, hasher),
        profile_service=ProfileService(personnel_repo),
        photo_service=PhotoService(personnel_repo, photo_storage),
    )


def build_container(
    *,
    db_config: dict,
    upload_folder: str | Path,
    max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
    password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
) -> Container:
    """Connect to MySQL once and wire everything over it.

    Raises StoreUnavailableError when the store cannot be reached.
    """
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    conn.ping()

    return wire_container(
        personnel_repo=MySQLPersonnelRepository(conn),
        upload_folder=upload_folder,
        max_photo_bytes=max_photo_bytes,
        password_hash_method=password_hash_method,
        conn=conn,
    )
