from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import errors, pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


class DatabaseConnection:
    """Pooled DB connection factory.

    Note: The pool is created on first use, so building the app does not
    require a reachable server. Closing a pooled connection returns it to the pool.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            logger.info(
                "Opening MySQL pool %s@%s:%s/%s (size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
            self._pool = pooling.MySQLConnectionPool(
                pool_name="attendance_portal",
                pool_size=int(self._config.pool_size),
                **self._connect_args(),
            )
        return self._pool

    def _connect_args(self) -> dict:
        return dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def connect(self):
        """A pooled connection, or a short-lived one while every pooled slot is busy."""

        try:
            return self._get_pool().get_connection()
        except errors.PoolError:
            logger.warning("MySQL pool exhausted (size=%s); opening an extra connection", self._config.pool_size)
            return mysql.connector.connect(**self._connect_args())
