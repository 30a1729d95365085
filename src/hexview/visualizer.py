from __future__ import annotations

import tkinter as tk
from typing import Callable

import numpy as np

from .fields import FieldSlice
from .values import VALUE_BITS

UI_FONT = ("DejaVu Sans", 11)
UI_FONT_BOLD = ("DejaVu Sans", 11, "bold")
BIT_FONT = ("DejaVu Sans Mono", 12, "bold")
BIT_INDEX_FONT = ("DejaVu Sans Mono", 9)
FIELD_RANGE_FONT = ("DejaVu Sans Mono", 11, "bold")
FIELD_VALUE_FONT_FAMILY = "DejaVu Sans Mono"
TOOLTIP_FONT = ("DejaVu Sans Mono", 11)

BITS_PER_ROW = 32
SET_BIT_BG = "#007aff"
SET_BIT_FG = "#ffffff"
CLEAR_BIT_BG = "#f7fbff"
CLEAR_BIT_FG = "#1f2d3d"
FIELD_COLORS = (
    "#c8c8ff",
    "#c8ffc8",
    "#ffc8c8",
    "#ffffc8",
    "#c8ffff",
    "#ffc8ff",
)
FIELD_BOX_HEIGHT = 72
FIELD_NARROW_WIDTH = 40
FIELD_DECIMAL_MIN_WIDTH = 30


class HoverExplain:
    def __init__(
        self,
        widget: tk.Widget,
        text_provider: str | Callable[[tk.Event], str],
    ) -> None:
        self.widget = widget
        self.text_provider = text_provider
        self._tooltip: tk.Toplevel | None = None
        self._label: tk.Label | None = None

        widget.bind("<Enter>", self._on_motion, add=True)
        widget.bind("<Leave>", self._on_leave, add=True)
        widget.bind("<Motion>", self._on_motion, add=True)

    def _resolve_text(self, event: tk.Event) -> str:
        if callable(self.text_provider):
            return self.text_provider(event)
        return self.text_provider

    def _show(self, text: str) -> None:
        self._tooltip = tk.Toplevel(self.widget)
        self._tooltip.overrideredirect(True)
        self._tooltip.attributes("-topmost", True)
        self._label = tk.Label(
            self._tooltip,
            text=text,
            bg="#fffdeb",
            fg="#1f2d3d",
            justify="left",
            padx=8,
            pady=6,
            relief="solid",
            bd=1,
            font=TOOLTIP_FONT,
        )
        self._label.pack()

    def _on_leave(self, _event: tk.Event) -> None:
        if self._tooltip is not None:
            self._tooltip.destroy()
            self._tooltip = None
            self._label = None

    def _on_motion(self, event: tk.Event) -> None:
        text = self._resolve_text(event)
        if not text:
            self._on_leave(event)
            return
        if self._tooltip is None:
            self._show(text)
        elif self._label is not None and self._label.cget("text") != text:
            self._label.configure(text=text)
        if self._tooltip is not None:
            self._tooltip.geometry(f"+{event.x_root + 16}+{event.y_root + 16}")


class BitGrid(tk.Frame):
    def __init__(self, parent: tk.Widget, on_toggle: Callable[[int], None]) -> None:
        super().__init__(parent, bg="#ffffff")
        self._on_toggle = on_toggle
        self._render_cache: bytes | None = None
        self._buttons: list[tk.Button] = []

        for row in range(VALUE_BITS // BITS_PER_ROW):
            row_frame = tk.Frame(self, bg="#ffffff")
            row_frame.pack(anchor="w", pady=(0, 10) if row == 0 else 0)
            for col in range(BITS_PER_ROW):
                bit_pos = self._bit_position(row * BITS_PER_ROW + col)
                cell = tk.Frame(row_frame, bg="#ffffff")
                cell.pack(side="left", padx=(6 if col and col % 4 == 0 else 1, 1))
                button = tk.Button(
                    cell,
                    text="0",
                    width=1,
                    font=BIT_FONT,
                    relief="solid",
                    bd=1,
                    highlightthickness=0,
                    takefocus=False,
                    cursor="hand2",
                    command=lambda pos=bit_pos: self._on_toggle(pos),
                )
                button.pack()
                tk.Label(
                    cell,
                    text=str(bit_pos),
                    bg="#ffffff",
                    fg="#6c7a89",
                    font=BIT_INDEX_FONT,
                ).pack()
                self._buttons.append(button)

    @staticmethod
    def _bit_position(index: int) -> int:
        return VALUE_BITS - 1 - index

    @staticmethod
    def _cell_colors(bit: int) -> tuple[str, str]:
        if bit:
            return SET_BIT_BG, SET_BIT_FG
        return CLEAR_BIT_BG, CLEAR_BIT_FG

    def render(self, bits: np.ndarray) -> None:
        render_key = bits.tobytes()
        if self._render_cache == render_key:
            return
        self._render_cache = render_key

        for button, bit in zip(self._buttons, bits.tolist()):
            bg, fg = self._cell_colors(bit)
            button.configure(
                text=str(bit), bg=bg, fg=fg, activebackground=bg, activeforeground=fg
            )


class FieldStrip(tk.Frame):
    def __init__(
        self,
        parent: tk.Widget,
        config_var: tk.StringVar,
    ) -> None:
        super().__init__(parent, bg="#ffffff")
        self._slices: list[FieldSlice] = []
        self._render_cache: tuple[tuple[FieldSlice, ...], int] | None = None

        config_row = tk.Frame(self, bg="#ffffff")
        config_row.pack(fill="x")
        tk.Label(
            config_row,
            text="Config:",
            bg="#ffffff",
            fg="#22313f",
            font=UI_FONT_BOLD,
        ).pack(side="left")
        self.config_entry = tk.Entry(
            config_row,
            textvariable=config_var,
            font=UI_FONT,
            relief="solid",
            bd=1,
            highlightthickness=1,
            highlightbackground="#b8b8b8",
        )
        self.config_entry.pack(side="left", fill="x", expand=True, padx=(8, 0))

        self.canvas = tk.Canvas(
            self,
            bg="#ffffff",
            height=FIELD_BOX_HEIGHT,
            bd=0,
            highlightthickness=0,
        )
        self.canvas.pack(fill="x", expand=True, pady=(4, 0))
        self.canvas.bind("<Configure>", lambda _e: self._redraw())
        HoverExplain(self.canvas, self._hover_text)

    @staticmethod
    def _box_width(total_width: float, field_count: int) -> float:
        return total_width / max(field_count, 1)

    @staticmethod
    def _font_size(box_width: float) -> int:
        return 12 if box_width < FIELD_NARROW_WIDTH else 16

    @staticmethod
    def _shows_decimal(box_width: float) -> bool:
        return box_width >= FIELD_DECIMAL_MIN_WIDTH

    @staticmethod
    def _field_color(index: int) -> str:
        return FIELD_COLORS[index % len(FIELD_COLORS)]

    @staticmethod
    def _field_index_at(x: float, box_width: float, field_count: int) -> int | None:
        if field_count == 0 or box_width <= 0 or x < 0:
            return None
        index = int(x // box_width)
        if index >= field_count:
            return None
        return index

    def _hover_text(self, event: tk.Event) -> str:
        box_width = self._box_width(self.canvas.winfo_width(), len(self._slices))
        index = self._field_index_at(event.x, box_width, len(self._slices))
        if index is None:
            return ""
        field = self._slices[index]
        return f"{field.range_text} {field.bin_text}"

    def render(self, slices: list[FieldSlice]) -> None:
        self._slices = slices
        self._redraw()

    def _redraw(self) -> None:
        total_width = self.canvas.winfo_width()
        render_key = (tuple(self._slices), total_width)
        if self._render_cache == render_key:
            return
        self._render_cache = render_key

        self.canvas.delete("all")
        box_width = self._box_width(total_width, len(self._slices))
        font_size = self._font_size(box_width)
        show_decimal = self._shows_decimal(box_width)

        for idx, field in enumerate(self._slices):
            x0 = idx * box_width
            x1 = x0 + box_width
            x_mid = (x0 + x1) / 2
            self.canvas.create_rectangle(
                x0,
                0,
                x1,
                FIELD_BOX_HEIGHT - 1,
                fill=self._field_color(idx),
                outline="#ffffff",
                width=1,
            )
            self.canvas.create_text(
                x_mid, 14, text=field.range_text, font=FIELD_RANGE_FONT, fill="#000000"
            )
            self.canvas.create_text(
                x_mid,
                36,
                text=field.hex_text,
                font=(FIELD_VALUE_FONT_FAMILY, font_size),
                fill="#000000",
            )
            if show_decimal:
                self.canvas.create_text(
                    x_mid,
                    58,
                    text=field.dec_text,
                    font=(FIELD_VALUE_FONT_FAMILY, font_size - 2),
                    fill="#000000",
                )
