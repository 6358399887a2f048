"""
Pytest configuration and shared fixtures for the calculator tests.
"""

import logging

import matplotlib
import pytest

import config
from src.core.types import AhIntegrity, EspEncryption, EspIntegrity, \
    TunnelMode, IPVersion

matplotlib.use("Agg")

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def make_config():
    """Build a configuration, overriding the form defaults by keyword."""
    def _make(**overrides):
        return config.build_config(**overrides)
    return _make


@pytest.fixture
def default_config():
    """The 100-byte tunnel mode AES / SHA-HMAC IPv4 configuration."""
    return config.build_config(
        packet_size=100,
        ah_integrity=AhIntegrity.NONE,
        esp_encryption=EspEncryption.AES,
        esp_integrity=EspIntegrity.SHA_HMAC,
        tunnel_mode=TunnelMode.TUNNEL,
        ip_version=IPVersion.IPV4
    )
