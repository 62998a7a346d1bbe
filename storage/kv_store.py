"""Key-value byte stores backing the checklist.

This module provides a small get/put interface over a durable store
plus an in-memory store for tests.
"""

import os
import sqlite3
from typing import Dict, Optional

from common.logging_setup import get_logger

logger = get_logger(__name__)

DB_FILENAME = "checklist.db"

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key BLOB PRIMARY KEY,
    value BLOB NOT NULL
);
"""


class StorageError(Exception):
    """Raised when the underlying store fails to open, read, or write."""
    pass


class KeyNotFoundError(StorageError):
    """Raised by ``get`` when a key has never been written."""
    pass


class KVStore:
    """Base interface for key-value byte stores."""
    
    def get(self, key: bytes) -> bytes:
        raise NotImplementedError
    
    def put(self, key: bytes, value: bytes) -> None:
        raise NotImplementedError
    
    def close(self) -> None:
        pass
    
    def __enter__(self) -> "KVStore":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SqliteKVStore(KVStore):
    """
    Durable store kept in a single SQLite table under ``dir_path``.
    
    The database runs in exclusive locking mode, so the first process
    to touch it owns it until ``close``.
    """
    
    def __init__(self, dir_path: str):
        """
        Open (and create if needed) the store.
        
        Args:
            dir_path: Directory holding the database file
            
        Raises:
            StorageError: If the directory or database cannot be opened
        """
        self.dir_path = dir_path
        self.db_file = os.path.join(dir_path, DB_FILENAME)
        self._conn: Optional[sqlite3.Connection] = None
        try:
            os.makedirs(dir_path, exist_ok=True)
            self._conn = sqlite3.connect(self.db_file)
            self._conn.execute("PRAGMA locking_mode=EXCLUSIVE")
            self._conn.executescript(_SCHEMA_SQL)
            self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            raise StorageError(f"Cannot open store at {self.db_file}: {e}") from e
        logger.info("Opened store at %s", self.db_file)
    
    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError(f"Store at {self.db_file} is closed")
        return self._conn
    
    def get(self, key: bytes) -> bytes:
        try:
            row = self._connection().execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Read of {key!r} failed: {e}") from e
        if row is None:
            raise KeyNotFoundError(f"Key {key!r} not found")
        return bytes(row[0])
    
    def put(self, key: bytes, value: bytes) -> None:
        conn = self._connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Write of {key!r} failed: {e}") from e
        logger.debug("Wrote %d bytes to %r", len(value), key)
    
    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Closing store at {self.db_file} failed: {e}") from e
        finally:
            self._conn = None
        logger.info("Closed store at %s", self.db_file)


class MemoryKVStore(KVStore):
    """
    In-memory store for tests.
    
    Set ``fail_get`` / ``fail_put`` to make the next calls raise
    StorageError.
    """
    
    def __init__(self, data: Optional[Dict[bytes, bytes]] = None):
        self.data: Dict[bytes, bytes] = dict(data or {})
        self.puts = 0
        self.closed = False
        self.fail_get = False
        self.fail_put = False
    
    def get(self, key: bytes) -> bytes:
        if self.fail_get:
            raise StorageError("simulated read failure")
        try:
            return self.data[key]
        except KeyError:
            raise KeyNotFoundError(f"Key {key!r} not found") from None
    
    def put(self, key: bytes, value: bytes) -> None:
        if self.fail_put:
            raise StorageError("simulated write failure")
        self.data[key] = bytes(value)
        self.puts += 1
    
    def close(self) -> None:
        self.closed = True
