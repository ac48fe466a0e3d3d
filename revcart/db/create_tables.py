"""Create (or recreate with --reset) the users/OTP/activity schema."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from revcart.core.log import configure_logging
from .session import Base, get_engine
from . import models  # noqa: F401  # registers tables on Base.metadata

logger = logging.getLogger("revcart.db")


def create_all(reset: bool = False) -> list[str]:
    engine = get_engine()
    if reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return sorted(Base.metadata.tables)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args(argv)
    configure_logging()
    try:
        tables = create_all(reset=args.reset)
    except SQLAlchemyError as exc:
        logger.error("Failed to create tables: %s", exc)
        return 1
    logger.info("Tables ready: %s", ", ".join(tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
