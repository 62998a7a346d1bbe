"""Unit tests for PersistenceAdapter."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from checklist.state import AppState, View
from storage.adapter import PersistenceAdapter, STATE_KEY
from storage.codec import StateDecodeError, encode_state
from storage.kv_store import MemoryKVStore, StorageError


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
def adapter(store):
    return PersistenceAdapter(store)


def test_state_key_is_model() -> None:
    assert STATE_KEY == b"model"


def test_load_missing_returns_none(adapter) -> None:
    """A never-written key is NotFound, not an error."""
    assert adapter.load() is None


def test_load_restores_state(store, adapter) -> None:
    store.put(STATE_KEY, encode_state(AppState(items=["a", "b"], cursor=1, selected={0})))

    state = adapter.load()

    assert state is not None
    assert state.items == ["a", "b"]
    assert state.cursor == 1
    assert state.selected == {0}
    assert state.view == View.LIST


def test_load_read_failure_propagates(store, adapter) -> None:
    store.fail_get = True
    with pytest.raises(StorageError):
        adapter.load()


def test_load_corrupt_bytes_propagates(store, adapter) -> None:
    store.put(STATE_KEY, b"{garbage")
    with pytest.raises(StateDecodeError):
        adapter.load()


def test_save_writes_under_fixed_key(store, adapter) -> None:
    state = AppState(items=["x"], cursor=0)

    assert adapter.save(state) is True

    assert store.data[STATE_KEY] == encode_state(state)


def test_save_skips_identical_payload(store, adapter) -> None:
    state = AppState(items=["x"], cursor=0)
    adapter.save(state)

    assert adapter.save(state) is False
    assert store.puts == 1

    state.selected.add(0)
    assert adapter.save(state) is True
    assert store.puts == 2


def test_save_after_load_skips_unchanged(store, adapter) -> None:
    data = encode_state(AppState(items=["x"], cursor=0))
    store.data[STATE_KEY] = data

    state = adapter.load()

    assert adapter.save(state) is False
    assert store.puts == 0


def test_save_failure_propagates(store, adapter) -> None:
    store.fail_put = True
    with pytest.raises(StorageError):
        adapter.save(AppState(items=["x"], cursor=0))


def test_failed_save_is_retried_on_next_call(store, adapter) -> None:
    state = AppState(items=["x"], cursor=0)
    store.fail_put = True
    with pytest.raises(StorageError):
        adapter.save(state)

    store.fail_put = False
    assert adapter.save(state) is True
