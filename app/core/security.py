# File: app/core/security.py
"""
Password hashing and session token helpers.

Passwords are hashed with bcrypt after a SHA-256 pre-hash, which sidesteps
bcrypt's 72-byte input limit. Session identifiers are random URL-safe tokens;
only their SHA-256 digest is ever stored.
"""
import base64
import hashlib
import secrets

import bcrypt


def _prehash_password(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(_prehash_password(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_prehash_password(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


# Built at import so the first unknown-username login costs no extra hash
_DUMMY_HASH = get_password_hash(secrets.token_urlsafe(16))


def burn_password_check(password: str) -> None:
    """
    Run a bcrypt check that can never succeed.

    Called when no account matched so unknown usernames take as long to
    reject as wrong passwords.
    """
    verify_password(password, _DUMMY_HASH)


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


def hash_session_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
