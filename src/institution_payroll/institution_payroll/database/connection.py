from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector

DEFAULT_DATABASE = "institution_payroll"


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = DEFAULT_DATABASE

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(values.get("host") or defaults.host),
            port=int(values.get("port") or defaults.port),
            user=str(values.get("user") or defaults.user),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or defaults.database),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs: dict = {"host": self.host, "port": self.port, "user": self.user, "password": self.password}
        if with_database:
            kwargs["database"] = self.database
        return kwargs

    def describe(self) -> str:
        """user@host:port/database, safe to log."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Hands out one short-lived mysql.connector connection per unit of work.

    The process keeps a single instance; asking again with a different
    config replaces it.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        return mysql.connector.connect(**self.config.connect_kwargs(with_database=with_database))
