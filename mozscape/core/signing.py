"""Request signing for the url-metrics endpoint.

Every outbound call carries ``AccessID``, ``Expires`` and ``Signature`` query
parameters.  The signature is an HMAC-SHA1 of ``"{access_id}\\n{expires}"``
keyed by the secret key, base64-encoded and then URL-encoded.  The service
refuses it once its clock passes ``expires``, so callers mint a fresh pair
for each request via :func:`expires_at` and :func:`sign`.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from urllib.parse import quote_plus


def expires_at(now: float, ttl: int) -> int:
    """Return the Unix timestamp *ttl* seconds after *now*."""
    return int(now) + ttl


def sign(access_id: str, secret_key: str, expires: int) -> str:
    """Return the URL-encoded signature for *access_id* valid until *expires*."""
    string_to_sign = f"{access_id}\n{expires}"
    digest = hmac.new(
        secret_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return quote_plus(base64.b64encode(digest).decode("ascii"))
