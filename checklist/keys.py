"""Raw terminal key reading for the checklist."""

from __future__ import annotations

import codecs
import os
import queue
import sys
import threading
import time

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[3~": "delete",
}


class KeyReaderError(Exception):
    """Raised on the main thread when the key reader thread has failed."""
    pass


class KeyReader:
    """Reads named key events from stdin on a background thread."""

    def __init__(self) -> None:
        self._queue: queue.Queue[str] = queue.Queue()
        self._stop_event = threading.Event()
        self._error: Exception | None = None
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="checklist-key-reader",
        )

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1.0)

    def get_key(self, timeout: float | None = None) -> str | None:
        """Return the next key, or None if none arrived in time.

        Raises:
            KeyReaderError: If the reader thread has died and every key it
                read has been consumed
        """
        try:
            if timeout is None:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            if self._error is not None:
                raise KeyReaderError(f"Key reader stopped: {self._error}") from self._error
            return None

    def _run(self) -> None:
        try:
            if os.name == "nt":
                self._run_windows()
            else:
                self._run_posix()
        except Exception as e:
            self._error = e

    def _run_windows(self) -> None:
        import msvcrt

        while not self._stop_event.is_set():
            if not msvcrt.kbhit():
                time.sleep(0.05)
                continue
            key = _read_key_windows()
            if key:
                self._queue.put(key)

    def _run_posix(self) -> None:
        import select
        import termios
        import tty

        fd = sys.stdin.fileno()
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        old_settings = termios.tcgetattr(fd)
        tty.setraw(fd)
        try:
            while not self._stop_event.is_set():
                readable, _, _ = select.select([fd], [], [], 0.1)
                if not readable:
                    continue
                chunk = decoder.decode(os.read(fd, 1024))
                for key in parse_keys(chunk):
                    self._queue.put(key)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def parse_keys(chunk: str) -> list[str]:
    """Split one read from a raw-mode terminal into named keys.

    A lone ESC arrives in a chunk of its own, while arrow, editing and
    function keys arrive as a complete CSI (``ESC [``) or SS3 (``ESC O``)
    sequence. Sequences without a name in ESCAPE_SEQUENCES are dropped.
    """
    keys: list[str] = []
    index = 0
    while index < len(chunk):
        if chunk[index] == "\x1b":
            end = _escape_sequence_end(chunk, index)
            if end is None:
                keys.append("esc")
                index += 1
                continue
            name = ESCAPE_SEQUENCES.get(chunk[index:end])
            if name:
                keys.append(name)
            index = end
            continue
        keys.append(_name_control_char(chunk[index]))
        index += 1
    return keys


def _escape_sequence_end(chunk: str, start: int) -> int | None:
    """Return the index just past the CSI/SS3 sequence at ``start``, or None for a bare ESC."""
    introducer = chunk[start + 1:start + 2]
    if introducer == "O":
        return start + 3 if start + 2 < len(chunk) else None
    if introducer != "[":
        return None
    index = start + 2
    # Parameter bytes 0x30-0x3F, then intermediate bytes 0x20-0x2F.
    while index < len(chunk) and "\x30" <= chunk[index] <= "\x3f":
        index += 1
    while index < len(chunk) and "\x20" <= chunk[index] <= "\x2f":
        index += 1
    if index < len(chunk) and "\x40" <= chunk[index] <= "\x7e":
        return index + 1
    # Truncated sequence: swallow what arrived rather than type it as text.
    return index


def _read_key_windows() -> str | None:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        ch2 = msvcrt.getwch()
        mapping = {
            "H": "up",
            "P": "down",
            "K": "left",
            "M": "right",
            "G": "home",
            "O": "end",
            "S": "delete",
        }
        return mapping.get(ch2)
    return _name_control_char(ch)


def _name_control_char(ch: str) -> str:
    if ch == "\x03":
        return "ctrl+c"
    if ch in ("\r", "\n"):
        return "enter"
    if ch in ("\x7f", "\x08"):
        return "backspace"
    if ch == "\x1b":
        return "esc"
    if ch == "\t":
        return "tab"
    return ch
