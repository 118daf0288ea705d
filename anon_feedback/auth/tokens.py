"""Session token decoding.

The identity provider issues two token shapes:

- Session cookies are encrypted JWTs (5-segment compact JWE, ``dir`` key
  management with ``A256GCM`` content encryption). The content key is
  derived from the shared secret with HKDF-SHA256, so only holders of
  the secret can read the claims.
- Bearer tokens handed to API callers are signed JWTs (3-segment JWS,
  HS256 by default) verified with the same secret.

Every failure is raised as ``TokenDecodeError`` so that callers have a
single failure type to translate into "no session".
"""

import json
import time
from typing import Any

import jwt
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from jwcrypto import jwe, jwk
from jwcrypto.common import JWException, base64url_encode

from anon_feedback.auth.config import AuthConfig

ENCRYPTION_KEY_INFO = b"NextAuth.js Generated Encryption Key"
ENCRYPTION_KEY_LENGTH = 32
ENCRYPTED_TOKEN_ALGORITHMS = ["dir", "A256GCM"]


class TokenDecodeError(Exception):
    """Raised when a session token cannot be verified or parsed."""


def derive_encryption_key(secret: str) -> jwk.JWK:
    """Derive the symmetric key that encrypts session cookies."""
    key = HKDF(
        algorithm=hashes.SHA256(),
        length=ENCRYPTION_KEY_LENGTH,
        salt=b"",
        info=ENCRYPTION_KEY_INFO,
    ).derive(secret.encode("utf-8"))
    return jwk.JWK(kty="oct", k=base64url_encode(key))


def is_encrypted_token(token: str) -> bool:
    return token.count(".") == 4


def _decrypt_claims(token: str, config: AuthConfig) -> dict[str, Any]:
    envelope = jwe.JWE(algs=ENCRYPTED_TOKEN_ALGORITHMS)
    try:
        envelope.deserialize(token, key=derive_encryption_key(config.secret))
        claims = json.loads(envelope.payload)
    except (JWException, ValueError) as e:
        raise TokenDecodeError(f"Invalid session token: {e}") from e

    if not isinstance(claims, dict):
        raise TokenDecodeError("Session token payload is not an object")

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        raise TokenDecodeError("Invalid session token: missing exp claim")
    if exp + config.leeway_seconds < time.time():
        raise TokenDecodeError("Session token expired")

    return claims


def _verify_claims(token: str, config: AuthConfig) -> dict[str, Any]:
    try:
        claims = jwt.decode(
            token,
            config.secret,
            algorithms=config.algorithms,
            leeway=config.leeway_seconds,
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenDecodeError("Session token expired") from e
    except jwt.PyJWTError as e:
        raise TokenDecodeError(f"Invalid session token: {e}") from e

    if not isinstance(claims, dict):
        raise TokenDecodeError("Session token payload is not an object")

    return claims


def decode_session_token(token: str, config: AuthConfig) -> dict[str, Any]:
    """Decrypt or verify a session token and return its claims.

    Args:
        token: Raw token string from the session cookie or bearer header.
        config: Auth configuration providing the secret and algorithms.

    Returns:
        Decoded claims dict.

    Raises:
        TokenDecodeError: If no secret is configured, the token cannot be
            decrypted or verified, it expired, or the payload is malformed.
    """
    if not config.secret:
        raise TokenDecodeError("No session secret configured")

    if is_encrypted_token(token):
        return _decrypt_claims(token, config)
    return _verify_claims(token, config)
