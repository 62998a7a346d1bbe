"""Encode and decode functions for persisted checklist state.

The encoding is UTF-8 JSON with stable field names so the stored value
stays human-inspectable:

    {"items": [...], "cursor": 0, "selected": [0, 2], "view": "list"}

The Add-view text buffer is never part of the encoding.
"""

import json
from typing import Any, Dict

from checklist.state import AppState, View


class StateDecodeError(Exception):
    """Raised when persisted bytes cannot be turned back into an AppState."""
    pass


def encode_state(state: AppState) -> bytes:
    """
    Encode an AppState into bytes for storage.
    
    Args:
        state: State to encode
        
    Returns:
        UTF-8 JSON bytes
    """
    payload: Dict[str, Any] = {
        "items": list(state.items),
        "cursor": state.cursor,
        "selected": sorted(state.selected),
        "view": View(state.view).value,
    }
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_state(data: bytes) -> AppState:
    """
    Decode stored bytes into an AppState.
    
    Args:
        data: Bytes previously produced by encode_state
        
    Returns:
        Decoded AppState
        
    Raises:
        StateDecodeError: If the bytes are not valid JSON, a field is
            missing or mistyped, or the state breaks its invariants
    """
    try:
        payload = json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StateDecodeError(f"Stored state is not valid JSON: {e}") from e
    
    if not isinstance(payload, dict):
        raise StateDecodeError(f"Stored state must be an object, got {type(payload).__name__}")
    
    missing = [name for name in ("items", "cursor", "selected", "view") if name not in payload]
    if missing:
        raise StateDecodeError(f"Stored state is missing fields: {', '.join(missing)}")
    
    items = payload["items"]
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise StateDecodeError("Field 'items' must be a list of strings")
    
    cursor = payload["cursor"]
    if not _is_int(cursor):
        raise StateDecodeError("Field 'cursor' must be an integer")
    
    selected = payload["selected"]
    if not isinstance(selected, list) or not all(_is_int(index) for index in selected):
        raise StateDecodeError("Field 'selected' must be a list of integers")
    
    try:
        view = View(payload["view"])
    except ValueError:
        raise StateDecodeError(f"Unknown view {payload['view']!r}") from None
    
    state = AppState(items=items, cursor=cursor, selected=set(selected), view=view)
    try:
        state.check_invariants()
    except ValueError as e:
        raise StateDecodeError(f"Stored state is inconsistent: {e}") from e
    return state


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
