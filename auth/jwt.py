"""
JWT-style token creation and verification.

Tokens use the compact ``header.payload.signature`` form with base64url
segments and an HMAC-SHA256 signature (HS256), so tokens minted by earlier
deployments of this service stay readable.  The signing key is passed in by
the caller; see ``config.signing_key``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import re
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from auth.errors import TokenInvalid, TokenMissing
from auth.models import TokenClaims

logger = logging.getLogger(__name__)

TOKEN_EXPIRY_SECONDS = 86400 * 7
_HEADER = {"alg": "HS256", "typ": "JWT"}
_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]*")


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    if not _SEGMENT_RE.fullmatch(data):
        raise ValueError("segment is not base64url")
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()


def _dumps(obj: Dict[str, Any]) -> bytes:
    return json.dumps(obj, separators=(",", ":")).encode()


def create_token(
    claims: TokenClaims,
    secret: str,
    expiry_seconds: int = TOKEN_EXPIRY_SECONDS,
    now: Optional[float] = None,
) -> str:
    """Create a signed token carrying ``claims`` and an expiry."""
    issued_at = int(time.time() if now is None else now)
    payload = claims.to_payload()
    payload["iat"] = issued_at
    payload["exp"] = issued_at + expiry_seconds

    signing_input = _b64url_encode(_dumps(_HEADER)) + "." + _b64url_encode(_dumps(payload))
    sig = _b64url_encode(_sign(signing_input.encode("ascii"), secret))
    return signing_input + "." + sig


def verify_token(token: str, secret: str, now: Optional[float] = None) -> TokenClaims:
    """
    Verify signature and expiry, returning the embedded claims.

    Every failure raises ``TokenInvalid`` with the same client message;
    the cause is only logged.
    """
    current = time.time() if now is None else now
    try:
        parts = token.split(".")
        if len(parts) != 3:
            raise ValueError("bad format")
        header_b64, payload_b64, sig_b64 = parts

        header = json.loads(_b64url_decode(header_b64))
        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise ValueError("unsupported algorithm")

        expected_sig = _b64url_encode(
            _sign(f"{header_b64}.{payload_b64}".encode("ascii"), secret)
        )
        # Canonical form only, so padding-bit variants of a signature fail.
        if not hmac.compare_digest(sig_b64.encode("ascii"), expected_sig.encode("ascii")):
            raise ValueError("bad signature")

        payload = json.loads(_b64url_decode(payload_b64))
        if not isinstance(payload, dict):
            raise ValueError("payload is not an object")
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or current >= exp:
            raise ValueError("token expired")
        return TokenClaims.model_validate(payload)
    except (ValueError, TypeError, UnicodeError, PydanticValidationError) as exc:
        logger.debug("Token rejected: %s", exc)
        raise TokenInvalid() from exc


def extract_bearer(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise TokenMissing()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise TokenMissing()
    return token
