from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "personnel_db")),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """DB connection factory, built once at startup and handed to repositories.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        # Without FOUND_ROWS, UPDATE rowcount reports changed rows, not matched rows.
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            client_flags=[-ClientFlag.FOUND_ROWS],
        )

    def ping(self) -> None:
        """Open and close one connection; raise StoreUnavailableError on failure."""
        try:
            conn = self.connect()
        except mysql.connector.Error as e:
            logger.error("cannot reach store %s: %s", self._config.describe(), e)
            raise StoreUnavailableError(f"Store unavailable: {e}") from e
        try:
            conn.ping(reconnect=False)
        except mysql.connector.Error as e:
            raise StoreUnavailableError(f"Store unavailable: {e}") from e
        finally:
            conn.close()
        logger.info("connected to store %s", self._config.describe())
