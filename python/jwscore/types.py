"""jwscore type constants, enums, config and error classes."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


class SigningAlgorithm(str, Enum):
    """JWS signing algorithm identifiers (RFC 7518 section 3.1)."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    EDDSA = "EdDSA"
    NONE = "none"


class KeyType(str, Enum):
    EC = "EC"
    OCT = "oct"


class ErrorCode(str, Enum):
    # Format
    COMPACT_WRONG_FORMAT = "COMPACT_WRONG_FORMAT"
    INVALID_COMPACT_FORMAT = "INVALID_COMPACT_FORMAT"
    INVALID_BASE64 = "INVALID_BASE64"
    PROTECTED_HEADER_PARSE_ERROR = "PROTECTED_HEADER_PARSE_ERROR"
    DESERIALIZING_CLAIMS = "DESERIALIZING_CLAIMS"
    SERIALIZING_HEADER = "SERIALIZING_HEADER"
    SERIALIZING_PAYLOAD = "SERIALIZING_PAYLOAD"
    # Algorithm / key
    MISSING_ALG = "MISSING_ALG"
    UNKNOWN_ALG = "UNKNOWN_ALG"
    UNIMPLEMENTED_ALG = "UNIMPLEMENTED_ALG"
    ALGORITHM_REJECTED = "ALGORITHM_REJECTED"
    WRONG_KEY_TYPE_FOR_ALG = "WRONG_KEY_TYPE_FOR_ALG"
    KEY_TYPE_DOES_NOT_MATCH_ALG = "KEY_TYPE_DOES_NOT_MATCH_ALG"
    MISSING_SIGNING_KEY = "MISSING_SIGNING_KEY"
    INVALID_KEY = "INVALID_KEY"
    # Verification
    SIGNATURE_CHECK_FAILED = "SIGNATURE_CHECK_FAILED"
    # Policy
    WRONG_TYP = "WRONG_TYP"
    UNENCODED_PAYLOAD_UNSUPPORTED = "UNENCODED_PAYLOAD_UNSUPPORTED"
    JWE_UNSUPPORTED = "JWE_UNSUPPORTED"
    CLAIMS_TIME_INVALID = "CLAIMS_TIME_INVALID"
    # Misuse
    ALREADY_FINISHED = "ALREADY_FINISHED"


class JoseError(Exception):
    """jwscore error with an error code.

    ``alg`` is set when the failure concerns a specific algorithm, e.g.
    ``UNIMPLEMENTED_ALG`` or ``ALGORITHM_REJECTED``.
    """

    def __init__(self, code: ErrorCode, message: str, alg: Optional[SigningAlgorithm] = None):
        super().__init__(message)
        self.code = code
        self.alg = alg


def signature_check_failed() -> JoseError:
    """The one error every cryptographic rejection maps to."""
    return JoseError(ErrorCode.SIGNATURE_CHECK_FAILED, "Signature check failed")


@dataclass
class VerifierConfig:
    """Caller policy applied when decoding tokens.

    ``allowed_algs`` pins the algorithms a verifier will accept; leave it
    as ``None`` only when every implemented algorithm (``none`` included)
    is acceptable.
    """

    allowed_algs: Optional[FrozenSet[SigningAlgorithm]] = None
    require_typ: Optional[str] = "JWT"

    def check_alg(self, alg: SigningAlgorithm) -> None:
        if self.allowed_algs is not None and alg not in self.allowed_algs:
            raise JoseError(ErrorCode.ALGORITHM_REJECTED, f"Algorithm '{alg.value}' rejected by verifier config", alg=alg)
