"""HMAC JWS backend (HS256, HS384, HS512) for jwscore."""

import hmac
from typing import Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

from .crypto import Signer, Verifier
from .jwk import key_type, oct_secret
from .types import ErrorCode, JoseError, KeyType, SigningAlgorithm, signature_check_failed

HMAC_DIGESTS = {
    SigningAlgorithm.HS256: hashes.SHA256,
    SigningAlgorithm.HS384: hashes.SHA384,
    SigningAlgorithm.HS512: hashes.SHA512,
}


class HmacKey:
    """A symmetric key usable both for signing and verifying."""

    def __init__(self, alg: SigningAlgorithm, digest: Type[hashes.HashAlgorithm], jwk: dict):
        if key_type(jwk) is not KeyType.OCT:
            raise JoseError(ErrorCode.KEY_TYPE_DOES_NOT_MATCH_ALG, f"{alg.value} requires a symmetric (oct) key")
        self.alg = alg
        self.digest = digest
        self.k = oct_secret(jwk)

    def _mac(self) -> HMAC:
        return HMAC(self.k, self.digest())

    def signer(self) -> "HmacSigner":
        return HmacSigner(self._mac())

    def verifier(self, signature: bytes) -> "HmacVerifier":
        # Wrong-length tags are rejected before any MAC work or comparison.
        if len(signature) != self.digest.digest_size:
            raise signature_check_failed()
        return HmacVerifier(self._mac(), signature)


class HmacSigner(Signer):
    def __init__(self, mac: HMAC):
        self.mac = mac

    def _update(self, data: bytes) -> None:
        self.mac.update(data)

    def _finish(self) -> bytes:
        return self.mac.finalize()


class HmacVerifier(Verifier):
    def __init__(self, mac: HMAC, signature: bytes):
        self.mac = mac
        self.signature = bytes(signature)

    def _update(self, data: bytes) -> None:
        self.mac.update(data)

    def _finish(self) -> None:
        computed = self.mac.finalize()
        if not hmac.compare_digest(computed, self.signature):
            raise signature_check_failed()
