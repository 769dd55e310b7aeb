"""Compact serialization (``h.p.s``) and base64url codec for jwscore."""

import base64
import binascii
import re
from dataclasses import dataclass

from .types import ErrorCode, JoseError

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """Base64url encode bytes (no padding)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(s: str) -> bytes:
    """Strictly decode unpadded base64url (RFC 4648 section 5).

    Raises:
        JoseError: if the input has padding, characters outside the
            URL-safe alphabet, an impossible length, or non-zero
            trailing bits.
    """
    if not _B64URL_RE.fullmatch(s) or len(s) % 4 == 1:
        raise JoseError(ErrorCode.INVALID_BASE64, "Malformed base64url segment")
    try:
        out = base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))
    except (binascii.Error, ValueError) as e:
        raise JoseError(ErrorCode.INVALID_BASE64, f"Malformed base64url segment: {e}") from e
    # Non-zero trailing bits in the last character would alias another encoding.
    if base64url_encode(out) != s:
        raise JoseError(ErrorCode.INVALID_BASE64, "Non-canonical base64url segment")
    return out


@dataclass(frozen=True)
class CompactComponents:
    """The three still-encoded segments of a compact JWS.

    The segments are kept exactly as they appeared in the source string;
    they are what gets fed to a verifier.
    """

    header: str
    payload: str
    signature: str

    @classmethod
    def decode(cls, s: str) -> "CompactComponents":
        parts = s.split(".")
        if len(parts) != 3:
            raise JoseError(
                ErrorCode.COMPACT_WRONG_FORMAT,
                f"Compact JWS must have 3 parts, got {len(parts)}",
            )
        return cls(parts[0], parts[1], parts[2])

    def encode(self) -> str:
        return f"{self.header}.{self.payload}.{self.signature}"

    def header_b64_decoded(self) -> bytes:
        return base64url_decode(self.header)

    def payload_b64_decoded(self) -> bytes:
        return base64url_decode(self.payload)

    def signature_b64_decoded(self) -> bytes:
        return base64url_decode(self.signature)
