"""jwscore: compact JWS signing and verification with a thin JWT layer."""

from .claims import (
    ClaimSet,
    TimeValidity,
)
from .compact import (
    CompactComponents,
    base64url_decode,
    base64url_encode,
)
from .crypto import (
    Signer,
    Verifier,
    VerifierChain,
)
from .header import Header
from .jwk import (
    jwk_from_ec_key,
    jwk_from_secret,
)
from .jws import (
    decode_verify_compact,
    encode_compact,
)
from .jwt import (
    JweHeader,
    Jwt,
    encode_jwt,
    verify_jwt,
)
from .registry import (
    signer_for,
    verifier_for,
)
from .signature import (
    EncodedSignature,
    Signature,
)
from .types import (
    ErrorCode,
    JoseError,
    KeyType,
    SigningAlgorithm,
    VerifierConfig,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "SigningAlgorithm",
    "KeyType",
    "ErrorCode",
    "JoseError",
    "VerifierConfig",
    # Compact
    "CompactComponents",
    "base64url_encode",
    "base64url_decode",
    # Header
    "Header",
    # JWK
    "jwk_from_ec_key",
    "jwk_from_secret",
    # Crypto
    "Signer",
    "Verifier",
    "VerifierChain",
    "signer_for",
    "verifier_for",
    # Signature
    "Signature",
    "EncodedSignature",
    # JWS
    "encode_compact",
    "decode_verify_compact",
    # Claims
    "ClaimSet",
    "TimeValidity",
    # JWT
    "Jwt",
    "JweHeader",
    "encode_jwt",
    "verify_jwt",
]
