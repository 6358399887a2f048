from src.core.types import PacketBox
from src.core.summary import summary_rows, box_widths, TOTAL_LABEL

import config

import tkinter as tk
from tkinter import ttk


class ResultsPanel(ttk.LabelFrame):
    """Panel displaying the packet layout chart and summary table."""

    def __init__(self, parent: tk.Widget):
        super().__init__(parent, text="Packet Details", padding=10)

        self.canvas = tk.Canvas(self, height=config.CHART_HEIGHT,
                                width=config.CHART_WIDTH,
                                background="white", highlightthickness=0)
        self.canvas.pack(side="top", fill="x", pady=(0, 10))
        self.canvas.bind("<Configure>", lambda _: self._draw_chart())

        self.tree = ttk.Treeview(self, columns=("size",),
                                 show="tree headings", height=12)
        self.tree.heading("#0", text="Payload")
        self.tree.heading("size", text="Size")
        self.tree.column("#0", width=360)
        self.tree.column("size", width=80, anchor="e")

        scrollbar = ttk.Scrollbar(self, orient="vertical",
                                  command=self.tree.yview)
        self.tree.configure(yscrollcommand=scrollbar.set)

        self.tree.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

        self.boxes: list[PacketBox] = []

    def show_boxes(self, boxes: list[PacketBox]):
        self.clear()
        self.boxes = boxes

        for label, size, details in summary_rows(boxes):
            item = self.tree.insert("", "end", text=label, values=(size,),
                                    open=True)
            for line in details:
                self.tree.insert(item, "end", text=line, values=("",))
            if label == TOTAL_LABEL:
                self.tree.item(item, tags=("total",))

        self.tree.tag_configure("total", font=("TkDefaultFont", 9, "bold"))
        self._draw_chart()

    def clear(self):
        for item in self.tree.get_children():
            self.tree.delete(item)
        self.canvas.delete("all")
        self.boxes = []

    def _draw_chart(self):
        """Draw boxes with widths proportional to their byte size."""
        self.canvas.delete("all")
        if not self.boxes:
            return

        width = self.canvas.winfo_width()
        if width <= 1:
            width = config.CHART_WIDTH
        height = config.CHART_HEIGHT - 10

        x = 1
        for box, box_width in zip(self.boxes,
                                  box_widths(self.boxes, width * 0.97)):
            self.canvas.create_rectangle(x, 2, x + box_width, 2 + height,
                                         fill=box.color, outline="black")
            if box_width > 0:
                self.canvas.create_text(x + box_width / 2, 2 + height / 2,
                                        text=box.label, width=box_width - 4,
                                        font=("TkDefaultFont", 8))
            x += box_width
