from __future__ import annotations
import base64
import re
from dataclasses import dataclass

from .errors import InvalidFieldElement

STARK_PRIME = 2**251 + 17 * 2**192 + 1
FELT_BYTES = 32

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{1,64}")
_DEC_DIGITS = re.compile(r"[0-9]{1,100}")


def B64(b: bytes) -> str:
    """Base64-encode bytes to ASCII string."""
    return base64.b64encode(b).decode("ascii")


def B64D(s: str) -> bytes:
    """Decode base64 ASCII string to bytes with strict validation."""
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except Exception as e:
        raise ValueError("invalid base64") from e


@dataclass(frozen=True)
class Felt:
    """Element of the Stark prime field.

    Values are kept canonical: construction rejects anything outside
    ``[0, STARK_PRIME)`` instead of reducing it.
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidFieldElement(f"felt value must be int, got {type(self.value).__name__}")
        if not 0 <= self.value < STARK_PRIME:
            raise InvalidFieldElement("felt value out of range")

    @classmethod
    def from_bytes_be(cls, data: bytes) -> "Felt":
        if len(data) != FELT_BYTES:
            raise InvalidFieldElement(f"expected {FELT_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    def to_bytes_be(self) -> bytes:
        return self.value.to_bytes(FELT_BYTES, "big")

    @classmethod
    def from_hex(cls, s: str) -> "Felt":
        digits = s[2:] if s[:2].lower() == "0x" else s
        if not _HEX_DIGITS.fullmatch(digits):
            raise InvalidFieldElement(f"invalid felt hex: {s!r}")
        return cls(int(digits, 16))

    def to_hex(self) -> str:
        return "0x" + self.to_bytes_be().hex()

    @classmethod
    def parse(cls, text: str) -> "Felt":
        """Parse decimal or 0x-prefixed hex text."""
        t = text.strip()
        if t[:2].lower() == "0x":
            return cls.from_hex(t)
        if not _DEC_DIGITS.fullmatch(t):
            raise InvalidFieldElement(f"invalid felt literal: {text!r}")
        return cls(int(t))

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Felt({self.to_hex()})"
