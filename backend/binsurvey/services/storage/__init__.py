# backend/binsurvey/services/storage/__init__.py
import logging

from .base import Storage
from .memory import MemStorage
from .sql import SqlStorage

logger = logging.getLogger(__name__)

__all__ = ["Storage", "MemStorage", "SqlStorage", "build_storage"]


def build_storage(backend: str, engine=None) -> Storage:
    """Pick the entry store once at startup: ``memory`` or ``sql``."""
    if backend == "memory":
        logger.info("Using in-memory entry storage")
        return MemStorage()
    if backend == "sql":
        from binsurvey.db import init_db, make_engine, make_session_factory

        engine = engine if engine is not None else make_engine()
        init_db(engine)
        logger.info(f"Using SQL entry storage ({engine.url.render_as_string(hide_password=True)})")
        return SqlStorage(make_session_factory(engine))
    raise ValueError(f"unknown storage backend: {backend!r}")
