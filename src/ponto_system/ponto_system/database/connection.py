from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def database(self) -> str:
        return self._config.database

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as e:
            logger.error(
                "DB: cannot connect to %s:%s/%s (%s)",
                self._config.host,
                self._config.port,
                self._config.database,
                e,
            )
            raise ExternalServiceError("Banco de dados indisponível, tente novamente") from e
