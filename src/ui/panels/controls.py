from typing import Callable
import tkinter as tk
from tkinter import ttk


class ControlPanel(ttk.Frame):
    """Panel with export, chart and reset buttons."""

    def __init__(self, parent: tk.Widget,
                 on_export: Callable, on_chart: Callable, on_reset: Callable):
        super().__init__(parent, padding=10)

        self.export_btn = ttk.Button(self, text="Export CSV",
                                     command=on_export)
        self.export_btn.pack(fill="x", pady=2)

        self.chart_btn = ttk.Button(self, text="Show Chart", command=on_chart)
        self.chart_btn.pack(fill="x", pady=2)

        self.reset_btn = ttk.Button(self, text="Reset", command=on_reset)
        self.reset_btn.pack(fill="x", pady=2)

    def set_valid(self, valid: bool):
        state = "normal" if valid else "disabled"
        self.export_btn.config(state=state)
        self.chart_btn.config(state=state)
