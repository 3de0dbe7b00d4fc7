"""Process-wide logging setup for the CLI entry point."""

from __future__ import annotations

import logging
import sys


def configure_logging(level: str) -> None:
    # force=True: each CLI invocation rebinds to the current stderr.
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # SQLAlchemy logs every statement at INFO; keep it behind echo_sql.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
