from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .fields import DEFAULT_FIELD_CONFIG, FieldSlice, layout_fields
from .values import InputBase, format_value, parse_value, toggle_bit, value_bits

logger = logging.getLogger(__name__)


@dataclass
class ViewerState:
    """Everything the viewer window shows, owned by the window and mutated only
    through these methods from Tk event handlers."""

    value: int = 0
    input_text: str = ""
    base: InputBase = InputBase.HEX
    field_config: str = DEFAULT_FIELD_CONFIG
    show_fields: bool = False
    always_on_top: bool = False

    def canonical_text(self) -> str:
        return format_value(self.value, self.base)

    def apply_input(self, text: str) -> bool:
        self.input_text = text
        parsed = parse_value(text, self.base)
        if parsed is None:
            logger.debug("Ignoring unparseable %s input %r", self.base.label, text)
            return False
        self.value = parsed
        self.input_text = self.canonical_text()
        return True

    def set_base(self, base: InputBase) -> None:
        if base is self.base:
            return
        self.base = base
        self.input_text = self.canonical_text()

    def toggle_bit(self, bit_index: int) -> None:
        self.value = toggle_bit(self.value, bit_index)
        self.input_text = self.canonical_text()
        logger.debug("Toggled bit %d, value is now 0x%X", bit_index, self.value)

    def set_field_config(self, text: str) -> None:
        self.field_config = text

    def field_slices(self) -> list[FieldSlice]:
        return layout_fields(self.field_config, self.value)

    def bit_grid(self) -> np.ndarray:
        return value_bits(self.value)

    def toggle_fields_view(self) -> bool:
        self.show_fields = not self.show_fields
        return self.show_fields

    def toggle_always_on_top(self) -> bool:
        self.always_on_top = not self.always_on_top
        return self.always_on_top
