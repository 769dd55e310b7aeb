"""JWT layer on top of compact JWS for jwscore."""

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from .claims import ClaimSet
from .header import Header
from .jws import decode_verify_compact, encode_compact
from .types import ErrorCode, JoseError, SigningAlgorithm, VerifierConfig

logger = logging.getLogger(__name__)

JWT_TYP = "JWT"

NUM_ELEMENTS_FOR_JWS = 3
NUM_ELEMENTS_FOR_JWE = 5


def _jwe_unsupported() -> JoseError:
    return JoseError(ErrorCode.JWE_UNSUPPORTED, "JWE tokens are not supported")


class JweHeader:
    """Placeholder for the five-segment encrypted form, which is not supported."""

    @property
    def typ(self) -> Optional[str]:
        raise _jwe_unsupported()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JweHeader)


@dataclass
class Jwt:
    header: Union[Header, JweHeader]
    claims: ClaimSet

    @classmethod
    def build_jws(
        cls,
        alg: SigningAlgorithm,
        claims: ClaimSet,
        extra: Optional[Dict[str, Any]] = None,
    ) -> "Jwt":
        """A JWS-backed token with ``typ: JWT`` and the given ``alg``."""
        header = Header(alg=alg, typ=JWT_TYP, extra=dict(extra or {}))
        return cls(header=header, claims=claims)

    @classmethod
    def decode_verify(
        cls,
        token: str,
        key: Optional[dict],
        config: Optional[VerifierConfig] = None,
        date_type: Optional[Callable[[Any], Any]] = None,
    ) -> "Jwt":
        """Verify a compact JWT and parse its claim set.

        Raises:
            JoseError: everything ``decode_verify_compact`` raises, plus
                INVALID_COMPACT_FORMAT, JWE_UNSUPPORTED, WRONG_TYP and
                DESERIALIZING_CLAIMS.
        """
        if config is None:
            config = VerifierConfig()

        num_elements = token.count(".") + 1
        if num_elements == NUM_ELEMENTS_FOR_JWE:
            raise _jwe_unsupported()
        if num_elements != NUM_ELEMENTS_FOR_JWS:
            raise JoseError(ErrorCode.INVALID_COMPACT_FORMAT, f"Token has {num_elements} segments, expected 3")

        payload, header = decode_verify_compact(token, key, config)

        if config.require_typ is not None and header.typ != config.require_typ:
            logger.debug("Rejected token with typ %r", header.typ)
            raise JoseError(ErrorCode.WRONG_TYP, f"Token type {header.typ!r} rejected, must be '{config.require_typ}'")

        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise JoseError(ErrorCode.DESERIALIZING_CLAIMS, f"Claim set is not valid JSON: {e}") from e

        return cls(header=header, claims=ClaimSet.from_dict(data, date_type=date_type))

    def encode(self, key: Optional[dict]) -> str:
        if isinstance(self.header, JweHeader):
            raise _jwe_unsupported()

        try:
            payload = json.dumps(self.claims.to_dict(), separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise JoseError(ErrorCode.SERIALIZING_PAYLOAD, f"Claims are not JSON serializable: {e}") from e

        return encode_compact(self.header, payload.encode("utf-8"), key)

    def time_valid(self, now: Any) -> bool:
        return self.claims.time_valid(now)


def encode_jwt(
    claims: ClaimSet,
    alg: SigningAlgorithm,
    key: Optional[dict],
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """Encode ``claims`` as a signed compact JWT."""
    return Jwt.build_jws(alg, claims, extra).encode(key)


def verify_jwt(
    token: str,
    key: Optional[dict],
    now: Optional[Any] = None,
    config: Optional[VerifierConfig] = None,
) -> Jwt:
    """Verify a JWT's signature, ``typ`` and exp/nbf/iat.

    ``now`` defaults to the current time in whole seconds.

    Raises:
        JoseError: CLAIMS_TIME_INVALID if the claims are not valid at ``now``.
    """
    jwt = Jwt.decode_verify(token, key, config)

    if now is None:
        now = math.floor(time.time())
    if not jwt.time_valid(now):
        logger.debug("Rejected token outside its validity window at %s", now)
        raise JoseError(ErrorCode.CLAIMS_TIME_INVALID, "Token is not valid at the current time")

    return jwt
