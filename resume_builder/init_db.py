from __future__ import annotations

from .db import engine
from .logger import context_logger
from .models import Base

log = context_logger("db")


def ensure_schema() -> None:
    # Plain create_all; the schema is a single table with no migrations yet.
    Base.metadata.create_all(bind=engine)
    log.debug(f"Schema ensured on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    ensure_schema()
