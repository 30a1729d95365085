from __future__ import annotations

import enum
import logging

import numpy as np

logger = logging.getLogger(__name__)

VALUE_BITS = 64
U64_MAX = (1 << VALUE_BITS) - 1
HEX_DIGIT_LIMIT = 16

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


class InputBase(enum.Enum):
    HEX = 16
    DEC = 10

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_label(cls, label: str) -> InputBase:
        try:
            return cls[label.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unsupported base: {label!r}") from exc


def _clean_hex_input(text: str) -> str:
    cleaned = text.strip()
    if cleaned[:2] in {"0x", "0X"}:
        cleaned = cleaned[2:]
    return "".join(ch for ch in cleaned if ch in _HEX_DIGITS)


def _clean_dec_input(text: str) -> str:
    return "".join(ch for ch in text.strip() if ch in _DEC_DIGITS)


def parse_hex(text: str) -> int | None:
    digits = _clean_hex_input(text)
    if not digits:
        return None
    if len(digits) > HEX_DIGIT_LIMIT:
        logger.debug("Hex input %r truncated to its last %d digits", text, HEX_DIGIT_LIMIT)
        digits = digits[-HEX_DIGIT_LIMIT:]
    try:
        return int(digits, 16)
    except ValueError:
        return None


def parse_dec(text: str) -> int | None:
    if not text.strip():
        return None
    digits = _clean_dec_input(text)
    if not digits:
        return None
    value = int(digits, 10)
    if value > U64_MAX:
        logger.debug("Decimal input %r does not fit in %d bits", text, VALUE_BITS)
        return None
    return value


def parse_value(text: str, base: InputBase) -> int | None:
    if base is InputBase.HEX:
        return parse_hex(text)
    return parse_dec(text)


def _check_range(value: int) -> None:
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"Value out of 64-bit unsigned range: {value}")


def format_value(value: int, base: InputBase) -> str:
    _check_range(value)
    if base is InputBase.HEX:
        return format(value, "X")
    return format(value, "d")


def toggle_bit(value: int, bit_index: int) -> int:
    _check_range(value)
    if not 0 <= bit_index < VALUE_BITS:
        raise ValueError(f"Bit index out of range: {bit_index}")
    return value ^ (1 << bit_index)


def value_bits(value: int) -> np.ndarray:
    """Bits of ``value`` as 64 uint8 entries, most significant first."""
    _check_range(value)
    raw = np.array([value], dtype=">u8")
    return np.unpackbits(raw.view(np.uint8))

