"""JWT claim set and time-validity policy for jwscore."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .types import ErrorCode, JoseError

REGISTERED_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")
_STRING_CLAIMS = ("iss", "sub", "aud", "jti")
_DATE_CLAIMS = ("exp", "nbf", "iat")


class TimeValidity(ABC):
    """exp/nbf/iat evaluation over any ordered date representation.

    A missing field never fails its condition. All boundaries are
    inclusive: ``now == exp``, ``now == nbf`` and ``now == iat`` are valid.
    """

    @property
    @abstractmethod
    def exp(self) -> Optional[Any]:
        ...

    @property
    @abstractmethod
    def nbf(self) -> Optional[Any]:
        ...

    @property
    @abstractmethod
    def iat(self) -> Optional[Any]:
        ...

    def time_valid(self, now: Any) -> bool:
        if self.exp is not None and now > self.exp:
            return False
        if self.nbf is not None and now < self.nbf:
            return False
        if self.iat is not None and self.iat > now:
            return False
        return True


@dataclass
class ClaimSet(TimeValidity):
    """Registered JWT claims plus caller-defined ``other_claims``.

    Dates default to integer seconds since the epoch; any representation
    that compares with the ``now`` passed to ``time_valid`` works.
    """

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[str] = None
    exp: Optional[Any] = None
    nbf: Optional[Any] = None
    iat: Optional[Any] = None
    jti: Optional[str] = None
    other_claims: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        shadowed = [k for k in self.other_claims if k in REGISTERED_CLAIMS]
        if shadowed:
            raise JoseError(ErrorCode.SERIALIZING_PAYLOAD, f"Other claims shadow registered claims: {shadowed}")

        out = {name: getattr(self, name) for name in REGISTERED_CLAIMS if getattr(self, name) is not None}
        out.update(self.other_claims)
        return out

    @classmethod
    def from_dict(cls, data: Any, date_type: Optional[Callable[[Any], Any]] = None) -> "ClaimSet":
        """Build a claim set from a decoded JSON object.

        Without ``date_type``, exp/nbf/iat must be non-negative integer
        seconds. ``date_type`` converts them instead, e.g. ``float`` for
        fractional seconds.
        """
        if not isinstance(data, dict):
            raise JoseError(ErrorCode.DESERIALIZING_CLAIMS, "Claim set must be a JSON object")

        values: Dict[str, Any] = {}
        for name in _STRING_CLAIMS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise JoseError(ErrorCode.DESERIALIZING_CLAIMS, f"Claim '{name}' must be a string")
            values[name] = value

        for name in _DATE_CLAIMS:
            value = data.get(name)
            if value is not None:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise JoseError(ErrorCode.DESERIALIZING_CLAIMS, f"Claim '{name}' must be a NumericDate")
                if date_type is not None:
                    value = date_type(value)
                elif not isinstance(value, int) or value < 0:
                    raise JoseError(
                        ErrorCode.DESERIALIZING_CLAIMS,
                        f"Claim '{name}' must be whole non-negative seconds; pass date_type for other forms",
                    )
            values[name] = value

        other = {k: v for k, v in data.items() if k not in REGISTERED_CLAIMS}
        return cls(other_claims=other, **values)
