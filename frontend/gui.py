#!/usr/bin/env python3
"""
Calculator GUI

Dark-themed Tkinter front end for the calculator engine.

- Right-aligned display that mirrors engine.display_text.
- Equal-sized keypad tiles; every tile maps to exactly one engine action.
- The armed binary operator (engine.current_operator) is highlighted.
- Keyboard: digits, ".", + - * /, Enter or "=", BackSpace, Escape, "%".

The GUI only renders engine state: all input logic lives in backend.engine.
"""

import logging
import tkinter as tk
from typing import Callable, Dict

try:
    from backend.engine import CalculatorEngine, Operation
except Exception:
    raise ImportError("Could not import CalculatorEngine. Ensure backend.engine exists and provides CalculatorEngine.")

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 320
WINDOW_HEIGHT = 460

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # button tile background
OP_BG = "#3a3d42"       # operator tile background
FG = "#E6EEF3"          # foreground text (light)
ACCENT = "#cfeeff"      # highlighted operator tile
ACCENT_FG = "#0f1113"

TITLE_FONT = ("Segoe UI", 13, "bold")
DISPLAY_FONT = ("Consolas", 24)
TILE_FONT = ("Segoe UI", 14)

# Keypad layout: label -> row, empty strings are spacers
TILES = [
    ["C", "⌫", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "−"],
    ["1", "2", "3", "+"],
    ["x²", "0", ".", "="],
    ["√", "", "", ""],
]

# Tiles that call handle_operator, and the operation they send
OPERATOR_TILES: Dict[str, Operation] = {
    "+": Operation.ADD,
    "−": Operation.SUBTRACT,
    "×": Operation.MULTIPLY,
    "÷": Operation.DIVIDE,
    "√": Operation.SQRT,
    "x²": Operation.SQUARE,
    "%": Operation.PERCENT,
    "=": Operation.CALCULATE,
}

# Keyboard characters that map onto operator tiles
KEY_OPERATORS: Dict[str, Operation] = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "%": Operation.PERCENT,
    "=": Operation.CALCULATE,
}


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, engine: CalculatorEngine = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(280, 400)
        self.configure(bg=BG)

        # Backend engine instance; the GUI only listens to its signals
        self.engine = engine if engine is not None else CalculatorEngine()
        self.engine.display_text_changed.connect(self._on_display_changed)
        self.engine.current_operator_changed.connect(self._on_operator_changed)

        # binary operation -> tile, used to highlight the armed operator
        self.operator_buttons: Dict[Operation, tk.Button] = {}

        self._build_header()
        self._build_display()
        self._build_keypad()

        # Sync widgets with the engine's initial state
        self._on_display_changed()
        self._on_operator_changed()

        self.bind("<Key>", self._on_key, add="+")
        self.bind("<Return>", lambda e: self.engine.handle_operator(Operation.CALCULATE))
        self.bind("<KP_Enter>", lambda e: self.engine.handle_operator(Operation.CALCULATE))
        self.bind("<BackSpace>", self._on_backspace_key, add="+")
        self.bind("<Escape>", lambda e: self.engine.clear())
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # -------------------------
    # Header / display
    # -------------------------
    def _build_header(self):
        header = tk.Frame(self, bg=PANEL_BG, height=40)
        header.pack(fill="x", side="top")
        tk.Label(header, text="Calculator", bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=10, pady=6)

    def _build_display(self):
        disp = tk.Frame(self, bg=PANEL_BG)
        disp.pack(fill="x", padx=8, pady=(8, 0))
        self.display_var = tk.StringVar()
        tk.Label(disp, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                 anchor="e", font=DISPLAY_FONT).pack(fill="x", padx=6, pady=(10, 10))

    # -------------------------
    # Keypad
    # -------------------------
    def _build_keypad(self):
        """Keypad grid of tiles (rows x columns). Buttons are uniform-sized by grid weight."""
        tile_container = tk.Frame(self, bg=PANEL_BG)
        tile_container.pack(fill="both", expand=True, padx=8, pady=8)
        for r, row in enumerate(TILES):
            for c, label in enumerate(row):
                if not label:
                    spacer = tk.Frame(tile_container, bg=PANEL_BG)
                    spacer.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                else:
                    bg = OP_BG if label in OPERATOR_TILES else BTN_BG
                    btn = tk.Button(tile_container, text=label, bg=bg, fg=FG, relief="flat",
                                    font=TILE_FONT, command=self._map_button(label))
                    btn.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                    op = OPERATOR_TILES.get(label)
                    if op is not None and op.is_binary:
                        self.operator_buttons[op] = btn
                tile_container.grid_columnconfigure(c, weight=1)
            tile_container.grid_rowconfigure(r, weight=1)

    def _map_button(self, label: str) -> Callable[[], None]:
        """Map a keypad label to the engine action it triggers."""
        if label == "C":
            return self.engine.clear
        if label == "⌫":
            return self.engine.delete_digit
        if label == ".":
            return self.engine.handle_dot
        if label in OPERATOR_TILES:
            return lambda op=OPERATOR_TILES[label]: self.engine.handle_operator(op)
        # digits
        return lambda d=label: self.engine.handle_digit(d)

    # -------------------------
    # Keyboard
    # -------------------------
    def _on_key(self, event):
        ch = event.char
        if ch and ch in "0123456789":
            self.engine.handle_digit(ch)
        elif ch in (".", ","):
            self.engine.handle_dot()
        elif ch in KEY_OPERATORS:
            self.engine.handle_operator(KEY_OPERATORS[ch])

    def _on_backspace_key(self, event):
        self.engine.delete_digit()
        return "break"

    # -------------------------
    # Engine signal handlers
    # -------------------------
    def _on_display_changed(self):
        self.display_var.set(self.engine.display_text)

    def _on_operator_changed(self):
        active = self.engine.current_operator
        for op, btn in self.operator_buttons.items():
            if op.value == active:
                btn.config(bg=ACCENT, fg=ACCENT_FG)
            else:
                btn.config(bg=OP_BG, fg=FG)

    def _on_close(self):
        logger.debug("closing calculator window")
        self.engine.display_text_changed.disconnect(self._on_display_changed)
        self.engine.current_operator_changed.disconnect(self._on_operator_changed)
        self.destroy()


# -------------------------
# Run the application
# -------------------------
def main():
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
