from __future__ import annotations

from typing import Any, Dict, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateUserError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PersonnelRecord, ProfileFields, UpdateResult
from .repository import PersonnelRepository

_PROFILE_COLUMNS = ProfileFields.column_names()

_SELECT_COLUMNS = ", ".join(
    ["service_number", "password_hash", "profile_complete", *_PROFILE_COLUMNS, "photo_path"]
)


def _row_to_record(row: Dict[str, Any]) -> PersonnelRecord:
    return PersonnelRecord(
        service_number=row["service_number"],
        password_hash=row["password_hash"],
        profile_complete=bool(row.get("profile_complete")),
        profile=ProfileFields.from_row(row),
        photo_path=row.get("photo_path"),
    )


class MySQLPersonnelRepository(PersonnelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_service_number(self, service_number: str) -> Optional[PersonnelRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SELECT_COLUMNS} FROM personnel WHERE service_number=%s",
                (service_number,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _row_to_record(row)

    def create(self, *, service_number: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO personnel(service_number, password_hash, profile_complete)
                    VALUES(%s, %s, 0)
                    """,
                    (service_number, password_hash),
                )
            except IntegrityError as e:
                if e.errno == errorcode.ER_DUP_ENTRY:
                    raise DuplicateUserError(
                        "Personnel with this Service Number already exists"
                    ) from e
                raise

    def update_profile(self, *, service_number: str, profile: ProfileFields) -> UpdateResult:
        assignments = ", ".join(f"{col}=%s" for col in _PROFILE_COLUMNS)
        values = [getattr(profile, col) for col in _PROFILE_COLUMNS]
        return self._update_one(
            service_number,
            f"UPDATE personnel SET {assignments}, profile_complete=1 WHERE service_number=%s",
            (*values, service_number),
        )

    def set_photo_path(self, *, service_number: str, photo_path: str) -> UpdateResult:
        return self._update_one(
            service_number,
            "UPDATE personnel SET photo_path=%s WHERE service_number=%s",
            (photo_path, service_number),
        )

    def _update_one(self, service_number: str, sql: str, params: tuple) -> UpdateResult:
        # Lock the row first so "matched" and "modified" come from the same transaction.
        # rowcount on UPDATE counts changed rows only (no CLIENT_FOUND_ROWS flag).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT service_number FROM personnel WHERE service_number=%s FOR UPDATE",
                (service_number,),
            )
            if not fetchone(cur):
                return UpdateResult(matched=0, modified=0)
            cur.execute(sql, params)
            return UpdateResult(matched=1, modified=max(int(cur.rowcount), 0))
