"""Streaming signer/verifier protocol shared by every jwscore backend.

A signer or verifier is fed bytes with ``update`` any number of times and
is consumed by exactly one ``finish``. Instances are single-use: touching
one after ``finish`` raises ALREADY_FINISHED.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .types import ErrorCode, JoseError, signature_check_failed


class _SingleUse(ABC):
    _finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise JoseError(ErrorCode.ALREADY_FINISHED, f"{type(self).__name__} has already been finished")

    def _consume(self) -> None:
        self._check_open()
        self._finished = True

    def update(self, data: bytes) -> None:
        """Feed the next chunk of the signing input."""
        self._check_open()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, not {type(data).__name__}")
        self._update(bytes(data))

    @abstractmethod
    def _update(self, data: bytes) -> None:
        ...


class Signer(_SingleUse):
    """Signature creation state."""

    def finish(self) -> bytes:
        """Finish processing input and return the raw signature."""
        self._consume()
        return self._finish()

    @abstractmethod
    def _finish(self) -> bytes:
        ...

    def sign(self, header_b64: str, payload_b64: str) -> bytes:
        """Sign the JWS signing input ``header_b64 || '.' || payload_b64``."""
        self.update(header_b64.encode("ascii"))
        self.update(b".")
        self.update(payload_b64.encode("ascii"))
        return self.finish()


class Verifier(_SingleUse):
    """Signature verification state.

    ``finish`` returns None on success and raises SIGNATURE_CHECK_FAILED
    otherwise.
    """

    def finish(self) -> None:
        self._consume()
        self._finish()

    @abstractmethod
    def _finish(self) -> None:
        ...

    def verify(self, raw_protected: bytes, raw_payload: bytes) -> None:
        """Verify over the still-encoded header and payload segments.

        Both arguments must be the exact bytes taken from the token,
        never a re-encoding of parsed values.
        """
        self.update(raw_protected)
        self.update(b".")
        self.update(raw_payload)
        self.finish()


class VerifierChain(Verifier):
    """Accepts if any candidate verifier accepts.

    Candidates are finished in input order; the first success wins. When
    all fail, the last candidate's error is raised.
    """

    def __init__(self, verifiers: List[Verifier]):
        self.verifiers = list(verifiers)

    def _update(self, data: bytes) -> None:
        for v in self.verifiers:
            v.update(data)

    def _finish(self) -> None:
        last: Optional[JoseError] = None
        for v in self.verifiers:
            try:
                v.finish()
                return
            except JoseError as e:
                last = e
        raise last if last is not None else signature_check_failed()
