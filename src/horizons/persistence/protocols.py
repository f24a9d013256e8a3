"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from horizons.core.protocols import ISessionStore, ITabularStore

__all__ = ["ISessionStore", "ITabularStore"]
