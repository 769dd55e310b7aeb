"""Unsecured JWS backend (``alg: none``) for jwscore."""

from .crypto import Signer, Verifier
from .types import signature_check_failed


class NoneKey:
    """Needs no key material; always constructible."""

    def signer(self) -> "NoneSigner":
        return NoneSigner()

    def verifier(self, signature: bytes) -> "NoneVerifier":
        return NoneVerifier(was_empty=len(signature) == 0)


class NoneSigner(Signer):
    def _update(self, data: bytes) -> None:
        pass

    def _finish(self) -> bytes:
        return b""


class NoneVerifier(Verifier):
    def __init__(self, was_empty: bool):
        self.was_empty = was_empty

    def _update(self, data: bytes) -> None:
        pass

    def _finish(self) -> None:
        if not self.was_empty:
            raise signature_check_failed()
