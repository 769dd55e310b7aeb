"""ECDSA JWS backend (ES256, ES384) for jwscore.

Each algorithm pairs one curve with one digest whose output size equals
the curve's field size. Pairings that break this rule (ES512: SHA-512
over P-521) refuse to construct.
"""

from dataclasses import dataclass
from typing import Type

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from .crypto import Signer, Verifier
from .jwk import EC_CURVES, ec_private_key, ec_public_key, field_size, key_type
from .types import ErrorCode, JoseError, KeyType, SigningAlgorithm, signature_check_failed


@dataclass(frozen=True)
class EcdsaParams:
    alg: SigningAlgorithm
    crv: str
    digest: Type[hashes.HashAlgorithm]

    @property
    def curve(self) -> ec.EllipticCurve:
        return EC_CURVES[self.crv]()

    @property
    def size(self) -> int:
        return field_size(self.curve)

    def check(self) -> None:
        """Enforce digest size == field size for this pairing."""
        if self.digest.digest_size != self.size:
            raise JoseError(
                ErrorCode.UNIMPLEMENTED_ALG,
                f"{self.alg.value}: {self.digest.name} output ({self.digest.digest_size} bytes) does not match "
                f"{self.crv} field size ({self.size} bytes)",
                alg=self.alg,
            )

    def check_key(self, jwk: dict) -> None:
        if key_type(jwk) is not KeyType.EC or jwk.get("crv") != self.crv:
            raise JoseError(
                ErrorCode.WRONG_KEY_TYPE_FOR_ALG,
                f"{self.alg.value} requires an EC key on {self.crv}",
            )


ECDSA_PARAMS = {
    SigningAlgorithm.ES256: EcdsaParams(SigningAlgorithm.ES256, "P-256", hashes.SHA256),
    SigningAlgorithm.ES384: EcdsaParams(SigningAlgorithm.ES384, "P-384", hashes.SHA384),
    SigningAlgorithm.ES512: EcdsaParams(SigningAlgorithm.ES512, "P-521", hashes.SHA512),
}


class EcdsaSigningKey:
    def __init__(self, params: EcdsaParams, jwk: dict):
        params.check()
        params.check_key(jwk)
        self.params = params
        self.key = ec_private_key(jwk)

    def signer(self) -> "EcdsaSigner":
        return EcdsaSigner(self.params, self.key)


class EcdsaSigner(Signer):
    def __init__(self, params: EcdsaParams, key: ec.EllipticCurvePrivateKey):
        self.params = params
        self.key = key
        self.digest = hashes.Hash(params.digest())

    def _update(self, data: bytes) -> None:
        self.digest.update(data)

    def _finish(self) -> bytes:
        der = self.key.sign(self.digest.finalize(), ec.ECDSA(Prehashed(self.params.digest())))
        r, s = decode_dss_signature(der)
        size = self.params.size
        return r.to_bytes(size, byteorder="big") + s.to_bytes(size, byteorder="big")


class EcdsaVerifyingKey:
    def __init__(self, params: EcdsaParams, jwk: dict):
        params.check()
        params.check_key(jwk)
        self.params = params
        self.key = ec_public_key(jwk)

    def verifier(self, signature: bytes) -> "EcdsaVerifier":
        return EcdsaVerifier(self.params, self.key, signature)


class EcdsaVerifier(Verifier):
    def __init__(self, params: EcdsaParams, key: ec.EllipticCurvePublicKey, signature: bytes):
        self.params = params
        self.key = key
        self.signature = bytes(signature)
        self.digest = hashes.Hash(params.digest())

    def _update(self, data: bytes) -> None:
        self.digest.update(data)

    def _finish(self) -> None:
        digest = self.digest.finalize()
        size = self.params.size
        if len(self.signature) != 2 * size:
            raise signature_check_failed()

        r = int.from_bytes(self.signature[:size], byteorder="big")
        s = int.from_bytes(self.signature[size:], byteorder="big")
        try:
            self.key.verify(encode_dss_signature(r, s), digest, ec.ECDSA(Prehashed(self.params.digest())))
        except InvalidSignature:
            raise signature_check_failed() from None
