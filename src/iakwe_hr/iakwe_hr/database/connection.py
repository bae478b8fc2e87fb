from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "iakwe_hr")),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        """Arguments for ``mysql.connector.connect``; server-only when ``with_database`` is False."""
        kwargs = asdict(self)
        kwargs["connection_timeout"] = kwargs.pop("connect_timeout")
        if not with_database:
            kwargs.pop("database")
        return kwargs


class DatabaseConnection:
    """Shared MySQL connection factory.

    Connections are short-lived: one per store operation, closed by
    ``db_cursor``.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        # A different target replaces the shared factory.
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        return mysql.connector.connect(use_pure=True, **self._config.connect_kwargs(with_database=with_database))
