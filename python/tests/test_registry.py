"""Tests for algorithm dispatch."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from jwscore.ecdsa import EcdsaSigner, EcdsaVerifier
from jwscore.jwk import jwk_from_ec_key, jwk_from_secret
from jwscore.mac import HmacSigner, HmacVerifier
from jwscore.registry import signer_for, verifier_for
from jwscore.types import ErrorCode, JoseError, SigningAlgorithm
from jwscore.unsecured import NoneSigner, NoneVerifier

EC_JWK = jwk_from_ec_key(ec.generate_private_key(ec.SECP256R1()))
OCT_JWK = jwk_from_secret(b"k" * 32)


class TestSignerFor:
    def test_selects_backend(self):
        assert isinstance(signer_for(SigningAlgorithm.ES256, EC_JWK), EcdsaSigner)
        assert isinstance(signer_for(SigningAlgorithm.HS512, OCT_JWK), HmacSigner)
        assert isinstance(signer_for(SigningAlgorithm.NONE, None), NoneSigner)

    def test_fresh_instance_per_call(self):
        assert signer_for(SigningAlgorithm.HS256, OCT_JWK) is not signer_for(SigningAlgorithm.HS256, OCT_JWK)

    def test_missing_alg(self):
        with pytest.raises(JoseError) as exc:
            signer_for(None, OCT_JWK)
        assert exc.value.code == ErrorCode.MISSING_ALG

    def test_unimplemented_alg_carries_alg(self):
        for alg in [SigningAlgorithm.RS256, SigningAlgorithm.PS384, SigningAlgorithm.EDDSA, SigningAlgorithm.ES512]:
            with pytest.raises(JoseError) as exc:
                signer_for(alg, EC_JWK)
            assert exc.value.code == ErrorCode.UNIMPLEMENTED_ALG
            assert exc.value.alg == alg

    def test_key_mismatch(self):
        with pytest.raises(JoseError) as exc:
            signer_for(SigningAlgorithm.ES256, OCT_JWK)
        assert exc.value.code == ErrorCode.WRONG_KEY_TYPE_FOR_ALG

        with pytest.raises(JoseError) as exc:
            signer_for(SigningAlgorithm.HS256, EC_JWK)
        assert exc.value.code == ErrorCode.KEY_TYPE_DOES_NOT_MATCH_ALG

    def test_missing_key(self):
        with pytest.raises(JoseError) as exc:
            signer_for(SigningAlgorithm.HS256, None)
        assert exc.value.code == ErrorCode.KEY_TYPE_DOES_NOT_MATCH_ALG


class TestVerifierFor:
    def test_selects_backend(self):
        assert isinstance(verifier_for(SigningAlgorithm.ES256, EC_JWK, b"\x00" * 64), EcdsaVerifier)
        assert isinstance(verifier_for(SigningAlgorithm.HS256, OCT_JWK, b"\x00" * 32), HmacVerifier)
        assert isinstance(verifier_for(SigningAlgorithm.NONE, None, b""), NoneVerifier)

    def test_public_only_key_verifies(self):
        public_jwk = {k: v for k, v in EC_JWK.items() if k != "d"}
        sig = signer_for(SigningAlgorithm.ES256, EC_JWK).sign("h", "p")
        verifier_for(SigningAlgorithm.ES256, public_jwk, sig).verify(b"h", b"p")

    def test_unimplemented_alg(self):
        with pytest.raises(JoseError) as exc:
            verifier_for(SigningAlgorithm.RS512, EC_JWK, b"")
        assert exc.value.code == ErrorCode.UNIMPLEMENTED_ALG
        assert exc.value.alg == SigningAlgorithm.RS512
