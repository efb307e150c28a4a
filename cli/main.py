"""CLI entry point."""

import sys
import os

from common.logging_config import setup_logging
from cli.commands import get_config
from cli.repl import repl_loop


def _pop_option(argv: list[str], flag: str) -> str | None:
    """Remove "<flag> <value>" from argv and return the value."""
    if flag not in argv:
        return None
    index = argv.index(flag)
    if index + 1 >= len(argv):
        raise SystemExit(f"{flag} requires a value")
    value = argv[index + 1]
    del argv[index:index + 2]
    return value


def main() -> None:
    """
    Entry point for CLI.

    Options:
        --debug        Log at DEBUG level
        --host HOST    Hub address for this session (not saved)
        --port PORT    Hub port for this session (not saved)
    """
    debug = '--debug' in sys.argv
    if debug:
        sys.argv.remove('--debug')
    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)

    host = _pop_option(sys.argv, '--host')
    port = _pop_option(sys.argv, '--port')
    if host or port:
        config = get_config()
        if host:
            config.data['hub_host'] = host
        if port:
            if not port.isdigit():
                raise SystemExit(f"Invalid port: {port}")
            config.data['hub_port'] = int(port)
        logger.info(f"Using hub at {config.get_base_url()}")

    logger.info("CLI starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
