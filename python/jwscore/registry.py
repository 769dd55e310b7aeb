"""Algorithm registry: maps a declared ``alg`` plus a key to one backend."""

import logging
from typing import Optional

from .crypto import Signer, Verifier
from .ecdsa import ECDSA_PARAMS, EcdsaSigningKey, EcdsaVerifyingKey
from .mac import HMAC_DIGESTS, HmacKey
from .types import ErrorCode, JoseError, SigningAlgorithm
from .unsecured import NoneKey

logger = logging.getLogger(__name__)


def _require_alg(alg: Optional[SigningAlgorithm]) -> SigningAlgorithm:
    if alg is None:
        raise JoseError(ErrorCode.MISSING_ALG, "Header has no 'alg'; an implicit algorithm is not allowed")
    return alg


def _unimplemented(alg: SigningAlgorithm) -> JoseError:
    return JoseError(ErrorCode.UNIMPLEMENTED_ALG, f"Algorithm '{alg.value}' is not implemented", alg=alg)


def signer_for(alg: Optional[SigningAlgorithm], jwk: Optional[dict]) -> Signer:
    """Build a fresh single-use signer for ``alg`` keyed with ``jwk``.

    Raises:
        JoseError: MISSING_ALG, UNIMPLEMENTED_ALG or a key mismatch code.
    """
    alg = _require_alg(alg)
    logger.debug("Selecting signer for %s", alg.value)

    if alg in ECDSA_PARAMS:
        return EcdsaSigningKey(ECDSA_PARAMS[alg], jwk or {}).signer()
    if alg in HMAC_DIGESTS:
        return HmacKey(alg, HMAC_DIGESTS[alg], jwk or {}).signer()
    if alg is SigningAlgorithm.NONE:
        return NoneKey().signer()
    raise _unimplemented(alg)


def verifier_for(alg: Optional[SigningAlgorithm], jwk: Optional[dict], signature: bytes) -> Verifier:
    """Build a fresh single-use verifier checking ``signature`` under ``alg``.

    ``alg`` must come from the token's protected header.
    """
    alg = _require_alg(alg)
    logger.debug("Selecting verifier for %s", alg.value)

    if alg in ECDSA_PARAMS:
        return EcdsaVerifyingKey(ECDSA_PARAMS[alg], jwk or {}).verifier(signature)
    if alg in HMAC_DIGESTS:
        return HmacKey(alg, HMAC_DIGESTS[alg], jwk or {}).verifier(signature)
    if alg is SigningAlgorithm.NONE:
        return NoneKey().verifier(signature)
    raise _unimplemented(alg)
