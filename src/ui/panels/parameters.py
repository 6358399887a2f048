from src.core.types import PacketConfig, AhIntegrity, EspEncryption, \
    EspIntegrity, TunnelMode, IPVersion

import config

from typing import Callable
import tkinter as tk
from tkinter import ttk


class ParameterPanel(ttk.LabelFrame):
    """Panel for configuring the IPsec transform and encapsulation."""

    def __init__(self, parent: tk.Widget, on_change: Callable):
        super().__init__(parent, text="Parameters", padding=10)

        self.size_var = tk.StringVar()
        self.ah_var = tk.StringVar()
        self.encryption_var = tk.StringVar()
        self.integrity_var = tk.StringVar()
        self.mode_var = tk.StringVar()
        self.ip_var = tk.StringVar()
        self.nat_var = tk.BooleanVar()
        self.gre_var = tk.BooleanVar()
        self.gre_key_var = tk.BooleanVar()

        self._resetting = False
        self.reset()

        row = 0
        ttk.Label(self, text="Inner Packet Size:").grid(
            row=row, column=0, sticky="w", pady=2
        )
        ttk.Entry(self, textvariable=self.size_var, width=12).grid(
            row=row, column=1, sticky="w", pady=2
        )

        combos = [
            ("Authentication Header (AH):", self.ah_var, AhIntegrity),
            ("ESP - Encryption:", self.encryption_var, EspEncryption),
            ("ESP - Integrity:", self.integrity_var, EspIntegrity),
            ("IPsec Transform Mode:", self.mode_var, TunnelMode),
        ]
        for text, var, options in combos:
            row += 1
            ttk.Label(self, text=text).grid(
                row=row, column=0, sticky="w", pady=2
            )
            ttk.Combobox(
                self, textvariable=var,
                values=[o.value for o in options], width=22, state="readonly"
            ).grid(row=row, column=1, sticky="w", pady=2)

        ttk.Label(self, text="IP Version:").grid(
            row=0, column=2, sticky="w", padx=(20, 0), pady=2
        )
        ttk.Combobox(
            self, textvariable=self.ip_var,
            values=[v.value for v in IPVersion], width=8, state="readonly"
        ).grid(row=0, column=3, sticky="w", pady=2)

        ttk.Checkbutton(self, text="NAT Traversal (NAT-T)",
                        variable=self.nat_var).grid(
            row=1, column=2, columnspan=2, sticky="w", padx=(20, 0), pady=2
        )
        ttk.Checkbutton(self, text="Generic Routed Encapsulation (GRE)",
                        variable=self.gre_var).grid(
            row=2, column=2, columnspan=2, sticky="w", padx=(20, 0), pady=2
        )
        self.gre_key_check = ttk.Checkbutton(self, text="GRE Tunnel Key",
                                             variable=self.gre_key_var)
        self.gre_key_check.grid(
            row=3, column=2, columnspan=2, sticky="w", padx=(40, 0), pady=2
        )
        self._sync_gre_key()

        def changed(*_):
            if not self._resetting:
                on_change()

        for var in (self.size_var, self.ah_var, self.encryption_var,
                    self.integrity_var, self.mode_var, self.ip_var,
                    self.nat_var, self.gre_key_var):
            var.trace_add("write", changed)
        self.gre_var.trace_add("write",
                               lambda *_: (self._sync_gre_key(), changed()))

    def _sync_gre_key(self):
        state = "normal" if self.gre_var.get() else "disabled"
        self.gre_key_check.config(state=state)

    def reset(self):
        """Restore the form defaults without firing on_change per field."""
        self._resetting = True
        try:
            self.size_var.set(str(config.DEFAULT_PACKET_SIZE))
            self.ah_var.set(config.DEFAULT_AH.value)
            self.encryption_var.set(config.DEFAULT_ESP_ENCRYPTION.value)
            self.integrity_var.set(config.DEFAULT_ESP_INTEGRITY.value)
            self.mode_var.set(config.DEFAULT_TUNNEL_MODE.value)
            self.ip_var.set(config.DEFAULT_IP_VERSION.value)
            self.nat_var.set(config.DEFAULT_NAT_TRAVERSAL)
            self.gre_var.set(config.DEFAULT_GRE)
            self.gre_key_var.set(config.DEFAULT_GRE_KEY)
        finally:
            self._resetting = False

    def get_config(self) -> PacketConfig:
        """Read the form. Raises ValueError if the packet size is not an
        integer."""
        gre = self.gre_var.get()
        return config.build_config(
            packet_size=int(self.size_var.get()),
            ah_integrity=AhIntegrity(self.ah_var.get()),
            esp_encryption=EspEncryption(self.encryption_var.get()),
            esp_integrity=EspIntegrity(self.integrity_var.get()),
            tunnel_mode=TunnelMode(self.mode_var.get()),
            ip_version=IPVersion(self.ip_var.get()),
            nat_traversal=self.nat_var.get(),
            gre=gre,
            gre_key=gre and self.gre_key_var.get()
        )
