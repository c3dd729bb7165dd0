from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import UnexpectedStoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits on success, rolls back on any exception. Driver errors that escape
    the block are wrapped in UnexpectedStoreError; callers that need a specific
    driver error (e.g. duplicate key) catch it inside the block.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise UnexpectedStoreError(str(e)) from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise UnexpectedStoreError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None
