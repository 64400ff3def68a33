from __future__ import annotations

from enum import Enum


class StorageBackend(str, Enum):
    """Storage implementations selectable through STORAGE_BACKEND."""

    MEMORY = "memory"
    MYSQL = "mysql"
