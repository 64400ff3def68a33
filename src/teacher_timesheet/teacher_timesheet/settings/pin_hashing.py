from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_pin(pin: str) -> str:
    return generate_password_hash(pin)


def verify_pin(pin_hash: str, candidate_pin: str) -> bool:
    try:
        return check_password_hash(pin_hash, candidate_pin)
    except (TypeError, ValueError):
        # e.g. placeholder or corrupted hash values
        return False
