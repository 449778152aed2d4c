from __future__ import annotations

import logging
from typing import Any

import bcrypt

from ..config import DEFAULT_APP_CONFIG
from ..gifts.models import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

_users: dict[str, dict[str, Any]] = {}


class UsernameTakenError(Exception):
    pass


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_admin() -> None:
    """Pre-seed the store owner account on import."""
    _users[DEFAULT_APP_CONFIG.admin_username] = {
        "password_hash": _hash_password(DEFAULT_APP_CONFIG.admin_password),
        "role": "admin",
    }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return None
    record = _users.get(username.strip())
    if record and _verify_password(password, record["password_hash"]):
        return {"username": username.strip(), "role": record["role"]}
    return None


def register(username: str, password: str) -> dict[str, Any]:
    """Create a shopper account. Raises ``UsernameTakenError`` on clashes."""
    name = username.strip()
    if name in _users:
        raise UsernameTakenError(name)
    _users[name] = {"password_hash": _hash_password(password), "role": "user"}
    logger.info("Registered user %s", name)
    return {"username": name, "role": "user"}


def reset_users() -> None:
    _users.clear()
    _seed_admin()


_seed_admin()
