#!/usr/bin/env python3
"""
Braze Relay - Command-line runner

Forwards one identify or track event, read as JSON from a file or
stdin, using settings from the environment (or a .env file).

Exit codes:
- 0: event forwarded
- 1: validation, terminal or invalid-payload failure (do not retry)
- 75: retryable failure (requeue the event with backoff)
"""

import argparse
import json
import sys

from braze_relay.config import Settings
from braze_relay.core.errors import InvalidPayloadError, RelayError
from braze_relay.core.logging_utils import get_logger, set_level
from braze_relay.layers.orchestration import handle_event

EXIT_FAILURE = 1
EXIT_TEMPFAIL = 75


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forward an event to Braze")
    parser.add_argument(
        "event_file",
        help="Path to a JSON event, or - to read from stdin"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (DEBUG, INFO, ...)"
    )
    return parser.parse_args(argv)


def load_event(path: str) -> dict:
    """Read the raw event JSON; unreadable input is an invalid payload."""
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        raise InvalidPayloadError(f"Unable to read event from {path}: {exc}") from exc


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = Settings.from_env()
    set_level(args.log_level or settings.log_level)
    logger = get_logger("main")

    try:
        raw_event = load_event(args.event_file)
        result = handle_event(raw_event, settings)
    except RelayError as exc:
        logger.error("Event rejected (%s): %s", exc.kind.value, exc.message)
        print(json.dumps({"error": exc.to_dict()}))
        return EXIT_TEMPFAIL if exc.retryable else EXIT_FAILURE

    print(json.dumps({"result": result}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
