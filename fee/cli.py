"""Command-line front door for fee.

Sets up logging, loads the config, and starts browsing the current
working directory. Fatal errors are reported after the terminal has been
restored.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .app import run_browser
from .config import load_config
from .errors import FeeError

LOG_FILE_ENV_VAR = "FEE_LOG_FILE"
LOG_LEVEL_ENV_VAR = "FEE_LOG_LEVEL"

logger = logging.getLogger("fee")


def configure_logging() -> None:
    """Log to ``$FEE_LOG_FILE`` when set; the terminal belongs to the UI."""
    if logger.handlers:
        return
    log_file = os.environ.get(LOG_FILE_ENV_VAR, "").strip()
    if not log_file:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "DEBUG").strip().upper()
    logger.setLevel(getattr(logging, level_name, logging.DEBUG))


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and browse the current directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(
        prog="fee",
        description="Browse the current directory and open files in an external editor.",
        epilog="Keys: Up/Down move, Enter/Right open, Esc/Left go to parent, Ctrl-C quit.",
    )
    parser.parse_args()

    configure_logging()
    try:
        config = load_config()
        path = default_path if default_path is not None else Path.cwd()
        run_browser(path, config)
    except FeeError as exc:
        logger.error("fatal: %s", exc)
        raise SystemExit(f"fee: {exc}") from exc
    except KeyboardInterrupt:
        raise SystemExit(130) from None


if __name__ == "__main__":
    main()
