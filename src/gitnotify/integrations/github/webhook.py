from __future__ import annotations

import hashlib
import hmac
from typing import Mapping
from urllib.parse import parse_qs

from gitnotify.core.github_events import SIGNATURE_256_HEADER, SIGNATURE_HEADER

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_DIGESTS = {
    "sha256": hashlib.sha256,
    "sha1": hashlib.sha1,
}


class SignatureVerificationError(Exception):
    pass


def _signature_header(headers: Mapping[str, str]) -> str | None:
    # sha256 is preferred; sha1 is the legacy header GitHub still sends
    return headers.get(SIGNATURE_256_HEADER) or headers.get(SIGNATURE_HEADER)


def verify_signature(payload: bytes, headers: Mapping[str, str], secret: str) -> None:
    """
    GitHub signature 검증 (HMAC over the raw body, keyed by the webhook secret).
    실패 시 SignatureVerificationError.
    """
    signature = _signature_header(headers)
    if not signature:
        raise SignatureVerificationError("missing signature")

    algorithm, sep, received = signature.partition("=")
    if not sep or not received:
        raise SignatureVerificationError("malformed signature header")

    digest = _DIGESTS.get(algorithm.lower())
    if digest is None:
        raise SignatureVerificationError(f"unsupported signature algorithm: {algorithm}")

    expected = hmac.new(secret.encode("utf-8"), payload, digest).hexdigest()
    # bytes: compare_digest refuses non-ASCII str, and header values are latin-1
    received_bytes = received.strip().lower().encode("utf-8", errors="replace")
    if not hmac.compare_digest(expected.encode("ascii"), received_bytes):
        raise SignatureVerificationError("payload signature check failed")


def extract_payload(body: bytes, content_type: str | None) -> bytes:
    """Return the JSON document carried by a delivery.

    Form-encoded deliveries wrap it in a ``payload`` field; anything else is
    the JSON body itself. The signature always covers the raw body.
    """
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != FORM_CONTENT_TYPE:
        return body

    form = parse_qs(body.decode("utf-8", errors="replace"))
    values = form.get("payload") or [""]
    return values[0].encode("utf-8")
