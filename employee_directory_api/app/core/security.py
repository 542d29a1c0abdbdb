"""
Security helpers for password hashing and JWT authentication.

Tokens are JSON Web Tokens signed with HMAC-SHA256 and base64url
encoded.  They embed arbitrary claims plus an issue time (``iat``) and
an expiration timestamp (``exp``).  The signing secret is passed in by
the caller; nothing in this module reads process configuration.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random 16 byte salt.
The iteration count is the cost factor and is stored inside the hash
string, so verification always uses the cost the hash was created with.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

HASH_SCHEME = "pbkdf2_sha256"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    claims: Dict[str, Any],
    secret: str,
    expires_delta: int = 3600,
    algorithm: str = "HS256",
) -> str:
    """Create a signed JWT token with the given claims.

    The claims are extended with ``iat`` (now) and ``exp`` (``iat`` plus
    ``expires_delta`` seconds).  Only HS256 is supported.

    Parameters
    ----------
    claims : dict
        Claims to embed in the token (e.g. ``{"sub": "42"}``).
    secret : str
        Signing secret.
    expires_delta : int
        Lifetime of the token in seconds.
    algorithm : str
        Signature algorithm name written to the header.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    if algorithm != "HS256":
        raise ValueError(f"Unsupported token algorithm: {algorithm}")
    to_encode = dict(claims)
    issued_at = int(time.time())
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + int(expires_delta)
    header = {"alg": algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the claims when the signature matches and ``exp`` lies in
    the future, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        return None
    # Constant-time comparison
    if not hmac.compare_digest(_sign(signing_input, secret), actual_sig):
        return None
    if not isinstance(data, dict) or data.get("exp") is None:
        return None
    if int(data["exp"]) < int(time.time()):
        return None
    return data


def hash_password(password: str, iterations: int = 100_000) -> str:
    """Hash a password using salted PBKDF2-HMAC-SHA256.

    Returns ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_SCHEME}${iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a string from ``hash_password``.

    Malformed hashes never match.
    """
    try:
        scheme, iterations, salt_hex, hash_hex = hashed_password.split("$", 3)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        logger.warning("Stored password hash has an unexpected format")
        return False
    if scheme != HASH_SCHEME:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that returns the claims of a valid bearer token.

    Raises HTTP 401 when the header is missing or the token is invalid
    or expired.  The secret comes from the settings the application
    was created with.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    settings = request.app.state.settings
    payload = decode_access_token(credentials.credentials, settings.secret_key)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Dict[str, Any]]:
    """Guard for employee routes.

    Only enforces a valid token when ``employee_auth_required`` is set;
    otherwise the route stays open and ``None`` is returned.
    """
    if not request.app.state.settings.employee_auth_required:
        return None
    return get_current_user(request, credentials)
