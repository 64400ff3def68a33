from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_length_between
from ..core.constants import PIN_MAX_LENGTH, PIN_MIN_LENGTH
from ..core.exceptions import ConflictError, TooManyAttemptsError, UnauthorizedError
from ..storage.repository import Storage
from .pin_hashing import hash_pin
from .throttle import PinAttemptLimiter

logger = logging.getLogger(__name__)


def _require_pin(pin: Any) -> str:
    return require_length_between(pin, "PIN", PIN_MIN_LENGTH, PIN_MAX_LENGTH)


class PinService:
    """Use case: one-time admin PIN setup, PIN validation and full data reset.

    States: no PIN configured -> PIN configured. Only a reset goes back.
    """

    def __init__(self, storage: Storage, *, limiter: Optional[PinAttemptLimiter] = None):
        self._storage = storage
        self._limiter = limiter or PinAttemptLimiter()

    def has_pin(self) -> bool:
        return self._storage.get_app_settings() is not None

    def setup_pin(self, pin: Any) -> None:
        pin = _require_pin(pin)
        if self.has_pin():
            raise ConflictError("PIN already set up")

        self._storage.create_app_settings(hash_pin(pin))
        logger.info("Admin PIN configured")

    def validate_pin(self, pin: Any, *, client_key: str = "-") -> None:
        """Raise unless ``pin`` matches the stored PIN."""
        pin = _require_pin(pin)
        if self._limiter.is_locked(client_key):
            logger.warning("PIN attempt from %s rejected: locked out", client_key)
            raise TooManyAttemptsError()

        if not self._storage.validate_pin(pin):
            failures = self._limiter.record_failure(client_key)
            logger.warning("Invalid PIN attempt from %s (failures=%d)", client_key, failures)
            raise UnauthorizedError("Invalid PIN")

        self._limiter.record_success(client_key)
        logger.info("Admin PIN validated for %s", client_key)

    def reset_all_data(self) -> None:
        self._storage.reset_all_data()
        self._limiter.clear()
        logger.warning("All teachers, time entries and settings were reset")
