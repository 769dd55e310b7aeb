"""JOSE header model for jwscore."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .types import ErrorCode, JoseError, SigningAlgorithm

FIXED_FIELDS = ("alg", "typ", "b64")


def parse_alg(value: Any) -> SigningAlgorithm:
    """Map a header ``alg`` value onto the closed algorithm set.

    Raises:
        JoseError: UNKNOWN_ALG if the value is not a registered identifier.
    """
    if isinstance(value, str):
        try:
            return SigningAlgorithm(value)
        except ValueError:
            pass
    raise JoseError(ErrorCode.UNKNOWN_ALG, f"Unknown signing algorithm: {value!r}")


@dataclass
class Header:
    """A protected or unprotected JWS header.

    ``extra`` holds every member other than ``alg``, ``typ`` and ``b64``;
    it is merged into the same JSON object on serialization, so unknown
    members round-trip unchanged.
    """

    alg: Optional[SigningAlgorithm] = None
    typ: Optional[str] = None
    b64: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        shadowed = [k for k in self.extra if k in FIXED_FIELDS]
        if shadowed:
            raise JoseError(ErrorCode.SERIALIZING_HEADER, f"Extra header members shadow fixed fields: {shadowed}")

        out: Dict[str, Any] = {}
        if self.alg is not None:
            out["alg"] = self.alg.value
        if self.typ is not None:
            out["typ"] = self.typ
        # RFC 7797: b64 is only written when it changes the default
        if not self.b64:
            out["b64"] = False
        out.update(self.extra)
        return out

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise JoseError(ErrorCode.SERIALIZING_HEADER, f"Header is not JSON serializable: {e}") from e

    @classmethod
    def from_dict(cls, data: Any) -> "Header":
        """Build a header from a decoded JSON object.

        Raises:
            JoseError: PROTECTED_HEADER_PARSE_ERROR for a malformed header,
                UNKNOWN_ALG for an unregistered ``alg``.
        """
        if not isinstance(data, dict):
            raise JoseError(ErrorCode.PROTECTED_HEADER_PARSE_ERROR, "Header must be a JSON object")

        extra = {k: v for k, v in data.items() if k not in FIXED_FIELDS}

        alg = None
        if data.get("alg") is not None:
            alg = parse_alg(data["alg"])

        typ = data.get("typ")
        if typ is not None and not isinstance(typ, str):
            raise JoseError(ErrorCode.PROTECTED_HEADER_PARSE_ERROR, "Header 'typ' must be a string")

        b64 = data.get("b64", True)
        if not isinstance(b64, bool):
            raise JoseError(ErrorCode.PROTECTED_HEADER_PARSE_ERROR, "Header 'b64' must be a boolean")

        return cls(alg=alg, typ=typ, b64=b64, extra=extra)

    @classmethod
    def from_json(cls, raw: bytes) -> "Header":
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise JoseError(ErrorCode.PROTECTED_HEADER_PARSE_ERROR, f"Header is not valid JSON: {e}") from e
        return cls.from_dict(data)
