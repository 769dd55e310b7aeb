"""Compact JWS encode and decode/verify for jwscore."""

import logging
from typing import Optional, Tuple

from .compact import CompactComponents, base64url_encode
from .header import Header
from .signature import EncodedSignature, Signature
from .types import ErrorCode, JoseError, VerifierConfig

logger = logging.getLogger(__name__)


def _require_b64(header: Header) -> None:
    if not header.b64:
        raise JoseError(
            ErrorCode.UNENCODED_PAYLOAD_UNSUPPORTED,
            "Unencoded payloads (RFC 7797, b64=false) are not supported",
        )


def encode_compact(header: Header, payload: bytes, key: Optional[dict]) -> str:
    """Sign ``payload`` under ``header`` and return ``h.p.s``.

    The algorithm is ``header.alg``; ``key`` must suit it (``none`` takes
    no key).
    """
    _require_b64(header)
    payload_b64 = base64url_encode(payload)

    signature = EncodedSignature.sign(header, None, payload_b64, key)

    return CompactComponents(
        header=signature.protected,
        payload=payload_b64,
        signature=signature.signature,
    ).encode()


def decode_verify_compact(
    compact: str,
    key: Optional[dict],
    config: Optional[VerifierConfig] = None,
) -> Tuple[bytes, Header]:
    """Verify a compact JWS and return ``(payload, protected_header)``.

    The algorithm is taken from the token's protected header, and the
    signature is checked over the header and payload segments exactly as
    they appear in ``compact``.

    Raises:
        JoseError: on any format, algorithm, key, policy or signature
            failure. Nothing is returned unless the signature verifies.
    """
    if config is None:
        config = VerifierConfig()

    components = CompactComponents.decode(compact)

    protected = Header.from_json(components.header_b64_decoded())
    _require_b64(protected)

    payload = components.payload_b64_decoded()
    signature = Signature(protected=protected, signature=components.signature_b64_decoded())

    alg = signature.alg()
    try:
        config.check_alg(alg)
    except JoseError:
        logger.debug("Rejected token: algorithm %s not allowed", alg.value)
        raise

    try:
        signature.verify(components.header.encode("ascii"), components.payload.encode("ascii"), key)
    except JoseError as e:
        logger.debug("Rejected token with alg %s: %s", alg.value, e.code.value)
        raise

    return payload, protected
