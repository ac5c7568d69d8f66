"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``); the secret and
lifetime come from the ``Settings`` object passed in by the caller.
Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a per‑password salt.

``get_current_user`` is the FastAPI dependency guarding every route
except registration, login and account verification.  A missing,
malformed or expired token, or a token whose subject no longer exists,
is rejected with 401 before any service runs.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings

PASSWORD_ITERATIONS = 100_000

ACCESS_PURPOSE = "access"
VERIFY_PURPOSE = "verify"


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_token(data: Dict[str, Any], settings: Settings, expires_in: int) -> str:
    """Create a signed JWT with the given claims and lifetime in seconds.

    The token is a string of the form ``header.payload.signature``,
    where each part is base64url encoded.
    """
    to_encode = dict(data)
    to_encode["exp"] = int(time.time()) + expires_in
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def create_access_token(user_id: str, settings: Settings) -> str:
    """Issue the bearer token returned by login."""
    return create_token(
        {"sub": user_id, "purpose": ACCESS_PURPOSE},
        settings,
        settings.access_token_expire_minutes * 60,
    )


def create_verification_token(user_id: str, nonce: str, settings: Settings) -> str:
    """Issue the token embedded in account verification links.

    ``nonce`` is also stored on the user document; clearing it there
    makes the token single use.
    """
    return create_token(
        {"sub": user_id, "purpose": VERIFY_PURPOSE, "nonce": nonce},
        settings,
        settings.verification_token_expire_minutes * 60,
    )


def decode_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload dictionary if the signature is valid and the
    token is not expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict) or data.get("exp") is None:
        return None
    if int(data["exp"]) < int(time.time()):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    The result holds the hex salt and hex digest separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PASSWORD_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PASSWORD_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that resolves the bearer token to a stored user document."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    settings: Settings = request.app.state.settings
    payload = decode_token(credentials.credentials, settings)
    if not payload or payload.get("purpose") != ACCESS_PURPOSE:
        raise _unauthorized("Invalid or expired token")
    user = request.app.state.store.get("users", payload.get("sub"))
    if not user:
        raise _unauthorized("User no longer exists")
    return user
