"""Key document (JWK) reading for jwscore.

Keys are plain dicts shaped like RFC 7517 documents. Only the members the
selected algorithm needs are read: ``crv``/``x``/``y``/``d`` for EC keys
and ``k`` for symmetric keys.
"""

from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
    EllipticCurvePublicNumbers,
)

from .compact import base64url_decode, base64url_encode
from .types import ErrorCode, JoseError, KeyType

EC_CURVES = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}

_CURVE_NAMES = {cls.name: crv for crv, cls in EC_CURVES.items()}


def field_size(curve: ec.EllipticCurve) -> int:
    """Byte length of a field element (one coordinate) on ``curve``."""
    return (curve.key_size + 7) // 8


def key_type(jwk: dict) -> Optional[KeyType]:
    """Return the key's ``kty`` or None when it is absent or unsupported."""
    try:
        return KeyType(jwk.get("kty"))
    except ValueError:
        return None


def _member(jwk: dict, name: str) -> bytes:
    value = jwk.get(name)
    if not isinstance(value, str):
        raise JoseError(ErrorCode.INVALID_KEY, f"Invalid JWK: '{name}' must be a base64url string")
    try:
        return base64url_decode(value)
    except JoseError as e:
        raise JoseError(ErrorCode.INVALID_KEY, f"Invalid JWK: '{name}' is not base64url") from e


def _curve(jwk: dict) -> ec.EllipticCurve:
    try:
        return EC_CURVES[jwk.get("crv")]()
    except (KeyError, TypeError):
        raise JoseError(ErrorCode.INVALID_KEY, f"Invalid JWK: unsupported curve {jwk.get('crv')!r}") from None


def ec_public_key(jwk: dict) -> EllipticCurvePublicKey:
    """Build a public key from an EC document's uncompressed point coordinates."""
    curve = _curve(jwk)
    x_bytes = _member(jwk, "x")
    y_bytes = _member(jwk, "y")

    size = field_size(curve)
    if len(x_bytes) != size or len(y_bytes) != size:
        raise JoseError(ErrorCode.INVALID_KEY, f"Invalid JWK: x and y must be {size} bytes each")

    x_int = int.from_bytes(x_bytes, byteorder="big")
    y_int = int.from_bytes(y_bytes, byteorder="big")
    try:
        return EllipticCurvePublicNumbers(x_int, y_int, curve).public_key()
    except ValueError as e:
        raise JoseError(ErrorCode.INVALID_KEY, "Invalid JWK: point is not on the curve") from e


def ec_private_key(jwk: dict) -> EllipticCurvePrivateKey:
    """Build a signing key from the raw scalar ``d``.

    Raises:
        JoseError: MISSING_SIGNING_KEY when ``d`` is absent.
    """
    curve = _curve(jwk)
    if "d" not in jwk:
        raise JoseError(ErrorCode.MISSING_SIGNING_KEY, "EC key has no private scalar 'd'")

    d_bytes = _member(jwk, "d")
    if len(d_bytes) != field_size(curve):
        raise JoseError(ErrorCode.INVALID_KEY, f"Invalid JWK: d must be {field_size(curve)} bytes")

    try:
        private_key = ec.derive_private_key(int.from_bytes(d_bytes, byteorder="big"), curve)
    except ValueError as e:
        raise JoseError(ErrorCode.INVALID_KEY, "Invalid JWK: private scalar out of range") from e

    if "x" in jwk or "y" in jwk:
        if ec_public_key(jwk).public_numbers() != private_key.public_key().public_numbers():
            raise JoseError(ErrorCode.INVALID_KEY, "Invalid JWK: d does not match x/y")
    return private_key


def oct_secret(jwk: dict) -> bytes:
    """Raw secret bytes of a symmetric key document."""
    return _member(jwk, "k")


def jwk_from_ec_key(key: Union[EllipticCurvePrivateKey, EllipticCurvePublicKey]) -> dict:
    """Convert a cryptography EC key into a key document.

    Private keys produce a document carrying ``d``.
    """
    if isinstance(key, EllipticCurvePrivateKey):
        public_key = key.public_key()
    else:
        public_key = key

    crv = _CURVE_NAMES.get(public_key.curve.name)
    if crv is None:
        raise JoseError(ErrorCode.INVALID_KEY, f"Unsupported curve: {public_key.curve.name}")

    size = field_size(public_key.curve)
    numbers = public_key.public_numbers()
    jwk = {
        "kty": KeyType.EC.value,
        "crv": crv,
        "x": base64url_encode(numbers.x.to_bytes(size, byteorder="big")),
        "y": base64url_encode(numbers.y.to_bytes(size, byteorder="big")),
    }
    if isinstance(key, EllipticCurvePrivateKey):
        d = key.private_numbers().private_value
        jwk["d"] = base64url_encode(d.to_bytes(size, byteorder="big"))
    return jwk


def jwk_from_secret(secret: bytes) -> dict:
    """Wrap raw secret bytes as a symmetric key document."""
    return {"kty": KeyType.OCT.value, "k": base64url_encode(secret)}
