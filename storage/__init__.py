"""Storage module for the terminal checklist."""

from storage.kv_store import KVStore, SqliteKVStore, MemoryKVStore, StorageError, KeyNotFoundError
from storage.codec import encode_state, decode_state, StateDecodeError
from storage.adapter import PersistenceAdapter, STATE_KEY

__all__ = [
    "KVStore",
    "SqliteKVStore",
    "MemoryKVStore",
    "StorageError",
    "KeyNotFoundError",
    "encode_state",
    "decode_state",
    "StateDecodeError",
    "PersistenceAdapter",
    "STATE_KEY",
]
