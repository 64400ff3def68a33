from __future__ import annotations

from typing import Optional, Protocol

from .model import AppSettings


class SettingsRepository(Protocol):
    def get_app_settings(self) -> Optional[AppSettings]:
        raise NotImplementedError

    def create_app_settings(self, pin_hash: str) -> AppSettings:
        """Persist the singleton; raises ConflictError if one already exists."""

        raise NotImplementedError

    def update_app_settings(self, pin_hash: str) -> Optional[AppSettings]:
        raise NotImplementedError

    def validate_pin(self, candidate_pin: str) -> bool:
        """Hash-verify against the stored PIN; False when no PIN is configured."""

        raise NotImplementedError
