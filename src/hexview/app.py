from __future__ import annotations

import argparse
import logging
import os
import signal
import tkinter as tk
from tkinter import ttk
from typing import Sequence

from .fields import DEFAULT_FIELD_CONFIG
from .state import ViewerState
from .values import InputBase, parse_value
from .visualizer import SET_BIT_BG, UI_FONT, UI_FONT_BOLD, BitGrid, FieldStrip

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "HEXVIEW_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
WINDOW_TITLE = "Hex Viewer"
WINDOW_GEOMETRY = "1180x200"
ENTRY_FONT = ("DejaVu Sans Mono", 16, "bold")
PIN_FONT = ("DejaVu Sans", 14)
PIN_TEXT = "\U0001f4cc"


def view_toggle_text(show_fields: bool) -> str:
    return "Bits" if show_fields else "Fields"


def build_initial_state(args: argparse.Namespace) -> ViewerState:
    base = InputBase.from_label(args.base)
    state = ViewerState(
        base=base,
        field_config=args.fields,
        show_fields=args.fields_view,
        always_on_top=args.pin,
    )
    if args.value is not None:
        value = parse_value(args.value, base)
        if value is None:
            logger.warning("Ignoring unparseable initial value %r", args.value)
        else:
            state.value = value
    state.input_text = state.canonical_text()
    return state


class HexViewerApp(tk.Tk):
    def __init__(self, viewer: ViewerState | None = None) -> None:
        super().__init__()
        self.viewer = viewer if viewer is not None else ViewerState()
        self.title(WINDOW_TITLE)
        self.geometry(WINDOW_GEOMETRY)
        self.minsize(900, 180)
        self.configure(bg="#ffffff")

        self._programmatic = False
        self.base_var = tk.StringVar(value=self.viewer.base.label)
        self.input_var = tk.StringVar(value=self.viewer.input_text)
        self.config_var = tk.StringVar(value=self.viewer.field_config)

        self._build_ui()
        self._wire_events()
        self._install_signal_handlers()
        self._apply_window_level()
        self._show_active_view()
        self._render_views()
        self.after(10, self._focus_value_entry)

    def _build_ui(self) -> None:
        root = tk.Frame(self, bg="#ffffff")
        root.pack(fill="both", expand=True, padx=10, pady=8)

        header = tk.Frame(root, bg="#ffffff")
        header.pack(fill="x")

        style = ttk.Style(self)
        style.configure("Hexview.TCombobox", font=UI_FONT_BOLD)
        self.base_combo = ttk.Combobox(
            header,
            textvariable=self.base_var,
            values=[base.label for base in InputBase],
            width=5,
            state="readonly",
            style="Hexview.TCombobox",
        )
        self.base_combo.pack(side="left")

        self.entry = tk.Entry(
            header,
            textvariable=self.input_var,
            font=ENTRY_FONT,
            width=24,
            bd=1,
            relief="solid",
            highlightthickness=1,
            highlightbackground="#b8b8b8",
            insertwidth=2,
        )
        self.entry.pack(side="left", padx=(8, 0))

        copy_button = tk.Button(
            header,
            text="Copy",
            command=self._copy_value,
            font=UI_FONT_BOLD,
            padx=10,
            bd=1,
            relief="solid",
            highlightthickness=0,
            cursor="hand2",
            takefocus=False,
        )
        copy_button.pack(side="left", padx=(8, 0))

        self.pin_button = tk.Button(
            header,
            text=PIN_TEXT,
            command=self._toggle_pin,
            font=PIN_FONT,
            width=2,
            bd=1,
            relief="solid",
            highlightthickness=0,
            takefocus=False,
        )
        self.pin_button.pack(side="right")
        self._pin_default_bg = self.pin_button.cget("bg")

        self.view_button = tk.Button(
            header,
            text=view_toggle_text(self.viewer.show_fields),
            command=self._toggle_view,
            font=UI_FONT_BOLD,
            padx=10,
            bd=1,
            relief="solid",
            highlightthickness=0,
            takefocus=False,
        )
        self.view_button.pack(side="right", padx=(0, 8))

        self.body = tk.Frame(root, bg="#ffffff")
        self.body.pack(fill="both", expand=True, pady=(6, 0))
        self.bit_grid = BitGrid(self.body, on_toggle=self._on_bit_toggle)
        self.field_strip = FieldStrip(self.body, self.config_var)

    def _wire_events(self) -> None:
        self.input_var.trace_add("write", self._on_input_change)
        self.config_var.trace_add("write", self._on_config_change)
        self.base_combo.bind("<<ComboboxSelected>>", self._on_base_selected)
        self.bind_all("<Escape>", self._on_escape_quit, add=True)

    def _install_signal_handlers(self) -> None:
        def _on_sigint(_signum: int, _frame: object) -> None:
            self.after(0, self._quit_app)

        signal.signal(signal.SIGINT, _on_sigint)

    def _set_input_text(self, text: str) -> None:
        if self.input_var.get() == text:
            return
        self._programmatic = True
        try:
            self.input_var.set(text)
        finally:
            self._programmatic = False
        self.entry.icursor(tk.END)

    def _on_input_change(self, *_args) -> None:
        if self._programmatic:
            return
        if self.viewer.apply_input(self.input_var.get()):
            self._set_input_text(self.viewer.input_text)
            self._render_views()

    def _on_config_change(self, *_args) -> None:
        self.viewer.set_field_config(self.config_var.get())
        self.field_strip.render(self.viewer.field_slices())

    def _on_base_selected(self, _event: tk.Event) -> None:
        self.viewer.set_base(InputBase.from_label(self.base_var.get()))
        self._set_input_text(self.viewer.input_text)

    def _on_bit_toggle(self, bit_index: int) -> None:
        self.viewer.toggle_bit(bit_index)
        self._set_input_text(self.viewer.input_text)
        self._render_views()

    def _toggle_view(self) -> None:
        show_fields = self.viewer.toggle_fields_view()
        self.view_button.configure(text=view_toggle_text(show_fields))
        self._show_active_view()

    def _toggle_pin(self) -> None:
        pinned = self.viewer.toggle_always_on_top()
        logger.info("Always-on-top %s", "enabled" if pinned else "disabled")
        self._apply_window_level()

    def _apply_window_level(self) -> None:
        pinned = self.viewer.always_on_top
        self.attributes("-topmost", pinned)
        bg = SET_BIT_BG if pinned else self._pin_default_bg
        self.pin_button.configure(bg=bg, activebackground=bg)

    def _show_active_view(self) -> None:
        if self.viewer.show_fields:
            self.bit_grid.pack_forget()
            self.field_strip.pack(fill="both", expand=True)
        else:
            self.field_strip.pack_forget()
            self.bit_grid.pack(anchor="w")

    def _render_views(self) -> None:
        self.bit_grid.render(self.viewer.bit_grid())
        self.field_strip.render(self.viewer.field_slices())

    def _copy_value(self) -> None:
        self.clipboard_clear()
        self.clipboard_append(self.viewer.canonical_text())

    def _focus_value_entry(self) -> None:
        self.entry.focus_set()
        self.entry.selection_range(0, tk.END)
        self.entry.icursor(tk.END)

    def _on_escape_quit(self, _event: tk.Event) -> str:
        self._quit_app()
        return "break"

    def _quit_app(self) -> None:
        self.quit()
        self.destroy()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show a 64-bit value as hex/decimal text, a bit grid and bit fields."
    )
    parser.add_argument(
        "--value",
        default=None,
        help="Initial value, read in the initial base",
    )
    parser.add_argument(
        "--base",
        choices=("hex", "dec"),
        default="hex",
        help="Initial input base (default: %(default)s)",
    )
    parser.add_argument(
        "--fields",
        default=DEFAULT_FIELD_CONFIG,
        help="Bit-field widths separated by ':', ',' or spaces (default: %(default)s)",
    )
    parser.add_argument(
        "--fields-view",
        action="store_true",
        help="Start in the bit-field view instead of the bit grid",
    )
    parser.add_argument(
        "--pin",
        action="store_true",
        help="Start with the window kept above other windows",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        type=str.upper,
        choices=LOG_LEVELS,
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    args = parser.parse_args(argv)
    # argparse does not check choices against the environment default.
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid ${LOG_LEVEL_ENV} value: {args.log_level!r}")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = build_initial_state(args)
    logger.info("Starting viewer with value 0x%X", state.value)
    app = HexViewerApp(state)
    app.mainloop()


if __name__ == "__main__":
    main()
