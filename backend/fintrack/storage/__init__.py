from __future__ import annotations

import logging

from flask import Flask, current_app

from .base import Storage

logger = logging.getLogger(__name__)

EXTENSION_KEY = "fintrack.storage"


def build_storage(app: Flask) -> Storage:
    backend = app.config.get("STORAGE_BACKEND", "memory")

    if backend == "memory":
        from .memory import MemoryStorage

        return MemoryStorage()

    if backend == "sql":
        from fintrack.models import db
        from .sql import SqlStorage

        db.init_app(app)
        with app.app_context():
            db.create_all()
        return SqlStorage()

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected 'memory' or 'sql')")


def init_storage(app: Flask, storage: Storage | None = None) -> Storage:
    """Attach a store to the app; handlers reach it through get_storage()."""
    if storage is None:
        storage = build_storage(app)
    app.extensions[EXTENSION_KEY] = storage
    logger.info("Using %s", type(storage).__name__)
    return storage


def get_storage() -> Storage:
    return current_app.extensions[EXTENSION_KEY]
