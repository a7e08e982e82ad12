from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "campus_portal"
    pool_size: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", cls.host)),
            port=int(db_config.get("port", cls.port)),
            user=str(db_config.get("user", cls.user)),
            password=str(db_config.get("password", cls.password)),
            database=str(db_config.get("database", cls.database)),
            pool_size=int(db_config.get("pool_size", cls.pool_size) or 0),
        )

    @property
    def label(self) -> str:
        """user@host:port/database, for log lines (never includes the password)."""

        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {"host": self.host, "port": self.port, "user": self.user, "password": self.password}
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Connection factory shared by every MySQL repository.

    Connections are short-lived: one per `db_cursor` block. When `pool_size`
    is set they come from a mysql-connector pool, created on first use, and
    `close()` hands them back to it.
    """

    _instances: dict[DBConfig, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = cls(config)
        return cls._instances[config]

    @classmethod
    def from_settings(cls, db_config: dict) -> "DatabaseConnection":
        return cls.get_instance(DBConfig.from_dict(db_config))

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=f"campus_portal_{self._config.database}"[:64],
                pool_size=self._config.pool_size,
                **self._config.connect_kwargs(),
            )
        return self._pool

    def connect(self, *, with_database: bool = True):
        # The server-level connection (no default schema) is only used to create the database.
        if with_database and self._config.pool_size > 0:
            return self._get_pool().get_connection()
        return mysql.connector.connect(**self._config.connect_kwargs(with_database=with_database))
