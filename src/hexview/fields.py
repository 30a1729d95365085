from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .values import U64_MAX, VALUE_BITS

logger = logging.getLogger(__name__)

# Fields always cover the low 32 bits of the value, bits 32..63 stay grid-only.
FIELD_BIT_BUDGET = 32
DEFAULT_FIELD_CONFIG = "4:20:8"

_WIDTH_SEPARATORS = re.compile(r"[:, ]")
_WIDTH_TOKEN = re.compile(r"\+?[0-9]+")
# Widths are read as unsigned 32-bit numbers; larger tokens are unparseable.
_WIDTH_TOKEN_MAX = (1 << 32) - 1
# Information separators are not trimmed as whitespace, so they spoil a token.
_UNTRIMMED_CONTROLS = frozenset("\x1c\x1d\x1e\x1f")


@dataclass(frozen=True)
class FieldSlice:
    width: int
    high_bit: int
    low_bit: int
    value: int

    @property
    def range_text(self) -> str:
        if self.width == 1:
            return f"[{self.high_bit}]"
        return f"[{self.high_bit}:{self.low_bit}]"

    @property
    def hex_text(self) -> str:
        return f"0x{self.value:X}"

    @property
    def dec_text(self) -> str:
        return str(self.value)

    @property
    def bin_text(self) -> str:
        return format(self.value, f"0{self.width}b")


def field_mask(width: int) -> int:
    if width >= VALUE_BITS:
        return U64_MAX
    return (1 << width) - 1


def _parse_width_token(token: str) -> int | None:
    if not _UNTRIMMED_CONTROLS.isdisjoint(token):
        return None
    token = token.strip()
    if _WIDTH_TOKEN.fullmatch(token) is None:
        return None
    width = int(token)
    if width > _WIDTH_TOKEN_MAX:
        return None
    return width


def parse_field_widths(config_text: str) -> list[int]:
    widths: list[int] = []
    for token in _WIDTH_SEPARATORS.split(config_text):
        width = _parse_width_token(token)
        if width is not None:
            widths.append(width)
    return widths


def accept_field_widths(
    widths: list[int], budget: int = FIELD_BIT_BUDGET
) -> tuple[list[int], int]:
    accepted: list[int] = []
    used_bits = 0
    for width in widths:
        if width == 0:
            continue
        if used_bits + width > budget:
            logger.debug(
                "Field widths %r exceed the %d bit budget; dropped from width %d on",
                widths,
                budget,
                width,
            )
            break
        accepted.append(width)
        used_bits += width
    return accepted, used_bits


def layout_fields(
    config_text: str, value: int, budget: int = FIELD_BIT_BUDGET
) -> list[FieldSlice]:
    widths, total_bits = accept_field_widths(parse_field_widths(config_text), budget)

    slices: list[FieldSlice] = []
    high = total_bits - 1 if total_bits > 0 else 0
    for width in widths:
        low = high - width + 1 if high >= width else 0
        slices.append(
            FieldSlice(
                width=width,
                high_bit=high,
                low_bit=low,
                value=(value >> low) & field_mask(width),
            )
        )
        if high < width:
            break
        high -= width
    return slices
