from .panels import ControlPanel, ParameterPanel, ResultsPanel, StatusBar

from src.core.calculator import evaluate, overhead_ratio
from src.core.summary import build_boxes, describe_config, \
    save_breakdown_to_csv
from src.core.types import CalculationResult, PacketConfig

from visualize import plot_packet_layout

import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

logger = logging.getLogger(__name__)


class App(tk.Tk):
    """Main application window."""

    def __init__(self):
        super().__init__()

        self.title("IPsec Overhead Calculator")
        self.geometry("900x650")
        self.minsize(700, 500)

        self.packet_config: PacketConfig | None = None
        self.result: CalculationResult | None = None

        self._build_ui()
        self._recalculate()

    def _build_ui(self):
        main_frame = ttk.Frame(self, padding=10)
        main_frame.pack(fill="both", expand=True)

        top_frame = ttk.Frame(main_frame)
        top_frame.pack(fill="x", pady=(0, 10))

        self.params = ParameterPanel(top_frame, on_change=self._recalculate)
        self.params.pack(side="left", fill="y")

        self.controls = ControlPanel(
            top_frame,
            on_export=self._on_export,
            on_chart=self._on_chart,
            on_reset=self._on_reset
        )
        self.controls.pack(side="right", anchor="n")

        self.results = ResultsPanel(main_frame)
        self.results.pack(fill="both", expand=True)

        self.status = StatusBar(main_frame)
        self.status.pack(fill="x", pady=(10, 0))

    def _recalculate(self):
        try:
            self.packet_config = self.params.get_config()
        except ValueError:
            self._show_error("Please enter a valid packet size")
            return

        self.result = evaluate(self.packet_config)

        if self.result['error']:
            self._show_error(self.result['error'])
            return

        ip_version = self.packet_config['transport']['ip_version']
        self.results.show_boxes(build_boxes(self.result['segments'],
                                            ip_version))
        self.controls.set_valid(True)

        payload_share = 1.0 - overhead_ratio(self.result)
        self.status.set_status(
            f"Total {self.result['total_size']} bytes, "
            f"overhead {self.result['overhead']} bytes",
            payload_share
        )

    def _show_error(self, message: str):
        self.result = None
        self.results.clear()
        self.controls.set_valid(False)
        self.status.set_error(message)

    def _on_export(self):
        """Export the current breakdown to a CSV file."""
        if not self.result:
            messagebox.showwarning("No Data", "No valid packet to export.")
            return

        filename = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
            initialfile="ipsec_packet.csv"
        )

        if not filename:
            return

        try:
            save_breakdown_to_csv(self.result, filename)
            messagebox.showinfo("Success", f"Packet exported to {filename}")
        except OSError as e:
            logger.exception("Export to %s failed", filename)
            messagebox.showerror("Error", f"Failed to export: {e}")

    def _on_chart(self):
        if not self.result:
            messagebox.showwarning("No Data", "No valid packet to chart.")
            return
        plot_packet_layout(self.results.boxes,
                           title=describe_config(self.packet_config))

    def _on_reset(self):
        self.params.reset()
        self._recalculate()
