"""Terminal checklist entrypoint."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.live import Live

from common.config import ChecklistConfig
from common.logging_setup import get_logger, setup_logging
from checklist.controller import Controller
from checklist.keys import KeyReader
from checklist.render import render_ui
from storage.adapter import PersistenceAdapter
from storage.codec import StateDecodeError
from storage.kv_store import SqliteKVStore, StorageError

logger = get_logger(__name__)

POLL_INTERVAL_S = 0.1


def parse_args(argv: Optional[Sequence[str]] = None) -> ChecklistConfig:
    defaults = ChecklistConfig()
    parser = argparse.ArgumentParser(description="Terminal checklist")
    parser.add_argument(
        "--db-path",
        default=os.getenv("CHECKLIST_DB_PATH", defaults.db_path),
        help="Directory holding the checklist store",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CHECKLIST_LOG_LEVEL", defaults.log_level),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("CHECKLIST_LOG_FILE") or None,
        help="Write logs to this file instead of stderr",
    )
    args = parser.parse_args(argv)
    return ChecklistConfig(
        db_path=args.db_path,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def run(
    config: ChecklistConfig,
    key_reader=None,
    console: Console | None = None,
    screen: bool = True,
) -> int:
    """Run the checklist until a quit key arrives.

    StorageError and StateDecodeError propagate to the caller.
    """
    console = console or Console()
    key_reader = key_reader or KeyReader()

    with SqliteKVStore(config.db_path) as store:
        controller = Controller(PersistenceAdapter(store), config)
        try:
            console.show_cursor(False)
            key_reader.start()
            frame = render_ui(controller.state, controller.text_input)
            with Live(frame, console=console, screen=screen, auto_refresh=False) as live:
                while True:
                    key = key_reader.get_key(timeout=POLL_INTERVAL_S)
                    if key is None:
                        continue
                    logger.debug("Key %r in %s view", key, controller.state.view.value)
                    if not controller.handle_key(key):
                        logger.info("Quit requested")
                        break
                    live.update(render_ui(controller.state, controller.text_input), refresh=True)
        finally:
            key_reader.stop()
            console.show_cursor(True)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    config = parse_args(argv)
    setup_logging(config.log_level, config.log_file)

    try:
        return run(config)
    except StateDecodeError as e:
        logger.error("Stored checklist in %s is unreadable: %s", config.db_path, e)
        print(f"Error: stored checklist is corrupt: {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error("Storage failure: %s", e)
        print(f"Error: storage failure: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.exception("Event loop failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
