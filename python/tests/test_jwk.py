"""Tests for key document reading."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from jwscore.jwk import (
    ec_private_key,
    ec_public_key,
    jwk_from_ec_key,
    jwk_from_secret,
    key_type,
    oct_secret,
)
from jwscore.types import ErrorCode, JoseError, KeyType

RFC_EC_KEY = {
    "kty": "EC",
    "crv": "P-256",
    "x": "f83OJ3D2xF1Bg8vub9tLe1gHMzV76e8Tus9uPHvRVEU",
    "y": "x_FEzRu9m36HLN_tue659LNpXW6pCyStikYjKIWI5a0",
    "d": "jpsQnnGQmL-YBIffH1136cspYG6-0iY7X1fCE9-E9LI",
}


class TestEcKeys:
    def test_rfc_key_private_matches_public(self):
        priv = ec_private_key(RFC_EC_KEY)
        pub = ec_public_key(RFC_EC_KEY)
        assert priv.public_key().public_numbers() == pub.public_numbers()

    def test_roundtrip_through_document(self):
        for curve in [ec.SECP256R1(), ec.SECP384R1(), ec.SECP521R1()]:
            priv = ec.generate_private_key(curve)
            jwk = jwk_from_ec_key(priv)
            assert jwk["kty"] == "EC"
            assert ec_private_key(jwk).private_numbers() == priv.private_numbers()

            public_jwk = jwk_from_ec_key(priv.public_key())
            assert "d" not in public_jwk
            assert ec_public_key(public_jwk).public_numbers() == priv.public_key().public_numbers()

    def test_missing_d(self):
        jwk = {k: v for k, v in RFC_EC_KEY.items() if k != "d"}
        with pytest.raises(JoseError) as exc:
            ec_private_key(jwk)
        assert exc.value.code == ErrorCode.MISSING_SIGNING_KEY

    def test_d_must_match_public_point(self):
        other = jwk_from_ec_key(ec.generate_private_key(ec.SECP256R1()))
        jwk = dict(RFC_EC_KEY, d=other["d"])
        with pytest.raises(JoseError) as exc:
            ec_private_key(jwk)
        assert exc.value.code == ErrorCode.INVALID_KEY

    def test_wrong_coordinate_length(self):
        jwk = dict(RFC_EC_KEY, x="AAAA")
        with pytest.raises(JoseError, match="32 bytes"):
            ec_public_key(jwk)

    def test_point_not_on_curve(self):
        zero = "A" * 43
        with pytest.raises(JoseError) as exc:
            ec_public_key({"kty": "EC", "crv": "P-256", "x": zero, "y": zero})
        assert exc.value.code == ErrorCode.INVALID_KEY

    def test_unsupported_curve(self):
        with pytest.raises(JoseError, match="unsupported curve"):
            ec_public_key(dict(RFC_EC_KEY, crv="secp256k1"))


class TestOctKeys:
    def test_secret_roundtrip(self):
        jwk = jwk_from_secret(b"\x00\x01secret")
        assert jwk["kty"] == "oct"
        assert oct_secret(jwk) == b"\x00\x01secret"

    def test_missing_k(self):
        with pytest.raises(JoseError) as exc:
            oct_secret({"kty": "oct"})
        assert exc.value.code == ErrorCode.INVALID_KEY


class TestKeyType:
    def test_known_and_unknown(self):
        assert key_type(RFC_EC_KEY) is KeyType.EC
        assert key_type({"kty": "oct", "k": ""}) is KeyType.OCT
        assert key_type({"kty": "RSA"}) is None
        assert key_type({}) is None
