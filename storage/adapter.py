"""Persistence adapter between the controller and a key-value store."""

from __future__ import annotations

from typing import Optional

from checklist.state import AppState
from common.logging_setup import get_logger
from storage.codec import decode_state, encode_state
from storage.kv_store import KeyNotFoundError, KVStore

logger = get_logger(__name__)

STATE_KEY = b"model"


class PersistenceAdapter:
    """Loads and saves AppState under a single fixed key.

    Every error other than a missing key propagates: StorageError for the
    store, StateDecodeError for unreadable bytes.
    """

    def __init__(self, store: KVStore, key: bytes = STATE_KEY) -> None:
        self.store = store
        self.key = key
        self._last_written: bytes | None = None

    def load(self) -> Optional[AppState]:
        """Return the stored state, or None if nothing was ever saved."""
        try:
            data = self.store.get(self.key)
        except KeyNotFoundError:
            logger.info("No stored state under %r", self.key)
            return None
        state = decode_state(data)
        self._last_written = bytes(data)
        logger.info("Restored %d items from store", len(state.items))
        return state

    def save(self, state: AppState) -> bool:
        """Write ``state`` through to the store.

        Returns False when the encoded bytes match the last write and the
        put was skipped.
        """
        data = encode_state(state)
        if data == self._last_written:
            return False
        self.store.put(self.key, data)
        self._last_written = data
        logger.debug("Saved state (%d bytes)", len(data))
        return True
