from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppSettings:
    """Singleton settings record; its presence means an admin PIN is configured."""

    id: str
    pin_hash: str
