"""Security Primitives — password hashing and signed bearer tokens.

Invariants:
    - Passwords stored as "<salt hex>$<pbkdf2 hex>", 16-byte random salt per password
    - Tokens are header.payload.signature (base64url, HS256 over settings.secret_key)
    - Every token carries `sub` (user id as str) and `exp` (unix seconds)
    - decode_access_token returns None for ANY malformed/forged/expired token (never raises)
    - All comparisons are constant-time (hmac.compare_digest)

Design Decisions:
    - stdlib hmac/hashlib: the hashing primitive is an external collaborator to the
      marketplace rules, so it stays a thin, dependency-free wrapper
    - Token only proves identity; role is re-read from the users table on every request
      (api/dependencies.py) so a stale token cannot carry an outdated role
"""

import base64
import hashlib
import hmac
import json
import os
import time

from lawconnect.config import get_settings


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(subject: str, expires_in_seconds: int | None = None) -> str:
    """Sign a token for `subject` (a user id)."""
    settings = get_settings()
    lifetime = expires_in_seconds or settings.access_token_expire_minutes * 60
    payload = {"sub": subject, "exp": int(time.time()) + lifetime}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> dict | None:
    """Verify signature and expiry. Returns the payload, or None when invalid."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        expected = _sign(signing_input, get_settings().secret_key)
        if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict) or "sub" not in data:
        return None
    if int(data.get("exp", 0)) < int(time.time()):
        return None
    return data


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    iterations = get_settings().password_hash_iterations
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    iterations = get_settings().password_hash_iterations
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(dk, stored)
