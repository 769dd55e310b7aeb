"""Signature records: a parsed signature and its encoded form."""

from dataclasses import dataclass
from typing import Optional

from .compact import base64url_encode
from .header import Header
from .registry import signer_for, verifier_for
from .types import ErrorCode, JoseError, SigningAlgorithm


@dataclass
class Signature:
    """A decoded signature with the headers it belongs to.

    Only ``protected`` is covered by the signature in compact form;
    ``unprotected`` is carried for JSON serializations.
    """

    protected: Header
    signature: bytes
    unprotected: Optional[Header] = None

    def alg(self) -> SigningAlgorithm:
        if self.protected.alg is None:
            raise JoseError(ErrorCode.MISSING_ALG, "Protected header has no 'alg'")
        return self.protected.alg

    def verify(self, raw_protected: bytes, raw_payload: bytes, key: Optional[dict]) -> None:
        """Verify against the encoded header/payload spans from the token.

        Raises:
            JoseError: SIGNATURE_CHECK_FAILED on rejection, or an
                algorithm/key error if no verifier can be built.
        """
        verifier_for(self.alg(), key, self.signature).verify(raw_protected, raw_payload)


@dataclass
class EncodedSignature:
    protected: str
    signature: str
    unprotected: Optional[str] = None

    @classmethod
    def sign(
        cls,
        protected: Header,
        unprotected: Optional[Header],
        payload_b64: str,
        key: Optional[dict],
    ) -> "EncodedSignature":
        """Serialize ``protected`` and sign it together with ``payload_b64``."""
        if protected.alg is None:
            raise JoseError(ErrorCode.MISSING_ALG, "Protected header has no 'alg'")

        signer = signer_for(protected.alg, key)
        header_b64 = base64url_encode(protected.to_json().encode("utf-8"))
        sig_bytes = signer.sign(header_b64, payload_b64)

        unprotected_b64 = None
        if unprotected is not None:
            unprotected_b64 = base64url_encode(unprotected.to_json().encode("utf-8"))

        return cls(
            protected=header_b64,
            signature=base64url_encode(sig_bytes),
            unprotected=unprotected_b64,
        )
