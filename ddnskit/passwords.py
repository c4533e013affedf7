"""Password hashing with bcrypt and login token generation."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import secrets
import time

import bcrypt

DEFAULT_COST = 10
_MAX_PASSWORD_BYTES = 72
_MIN_HASH_SIZE = 59
_MIN_COST = 4
_MAX_COST = 31
_COST = re.compile(r"[+-]?\d+")


def hash_password(password: str) -> str:
    """Return the bcrypt hash of ``password``."""
    encoded = password.encode()
    if len(encoded) > _MAX_PASSWORD_BYTES:
        raise ValueError("password length exceeds 72 bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=DEFAULT_COST)).decode()


def password_ok(hashed_password: str, password: str) -> bool:
    """Return True if ``password`` matches ``hashed_password``."""
    try:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())
    except ValueError:
        return False


def _bcrypt_cost(hashed: bytes) -> int:
    if len(hashed) < _MIN_HASH_SIZE:
        raise ValueError("hash too short")
    if hashed[0] != ord("$"):
        raise ValueError("invalid hash prefix")
    if hashed[1] > ord("2"):
        raise ValueError("unsupported hash version")
    start = 3 if hashed[2] == ord("$") else 4
    text = hashed[start : start + 2].decode("ascii", errors="replace")
    if not _COST.fullmatch(text):
        raise ValueError("invalid hash cost")
    cost = int(text)
    if not _MIN_COST <= cost <= _MAX_COST:
        raise ValueError("hash cost out of range")
    return cost


def is_hashed_password(password: str) -> bool:
    """Return True if the string looks like a bcrypt hash."""
    try:
        _bcrypt_cost(password.encode())
    except ValueError:
        return False
    return True


def generate_token(username: str) -> str:
    """Return a random base64 token bound to ``username`` and the current time."""
    nonce = str(secrets.randbits(64)).encode()
    message = f"{username}{int(time.time())}".encode()
    digest = hmac.new(nonce, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()