"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from horizons.core.config import AppSettings
from horizons.persistence.memory_backend import MemorySessionStore
from horizons.persistence.redis_backend import RedisSessionStore
from horizons.persistence.sheets_backend import GoogleSheetsStore


def create_session_store(settings: AppSettings | None = None):
    """Session store selected by ``settings.session.backend``."""
    if settings is None:
        settings = AppSettings()
    if settings.session.backend == "memory":
        return MemorySessionStore()
    return RedisSessionStore(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (master_store, source_store, session_store).
    """
    if settings is None:
        settings = AppSettings()

    master = GoogleSheetsStore(
        spreadsheet_id=settings.master.spreadsheet_id,
        credentials_file=settings.google.credentials_file,
        scopes=settings.google.scopes,
    )

    source = GoogleSheetsStore(
        spreadsheet_id=settings.source.spreadsheet_id,
        credentials_file=settings.google.credentials_file,
        scopes=settings.google.scopes,
    )

    return master, source, create_session_store(settings)
