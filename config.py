"""
Configuration module for the IPsec overhead calculator.
Contains form defaults and parameter sweep settings.
"""

import itertools

from src.core.types import PacketConfig, TransformConfig, TransportConfig, \
    TunnelConfig, AhIntegrity, EspEncryption, EspIntegrity, TunnelMode, \
    IPVersion

# Form defaults
DEFAULT_PACKET_SIZE = 100  # bytes, original IP packet including its header
DEFAULT_AH = AhIntegrity.NONE
DEFAULT_ESP_ENCRYPTION = EspEncryption.AES
DEFAULT_ESP_INTEGRITY = EspIntegrity.SHA_HMAC
DEFAULT_TUNNEL_MODE = TunnelMode.TUNNEL
DEFAULT_IP_VERSION = IPVersion.IPV4
DEFAULT_NAT_TRAVERSAL = False
DEFAULT_GRE = False
DEFAULT_GRE_KEY = False

# Parameter sweep
SWEEP_PACKET_SIZES = [64, 128, 256, 512, 1024, 1400]
OUTPUT_DIR = 'results'

# Chart layout
CHART_WIDTH = 760  # pixels
CHART_HEIGHT = 90  # pixels


def build_config(packet_size=DEFAULT_PACKET_SIZE,
                 ah_integrity=DEFAULT_AH,
                 esp_encryption=DEFAULT_ESP_ENCRYPTION,
                 esp_integrity=DEFAULT_ESP_INTEGRITY,
                 tunnel_mode=DEFAULT_TUNNEL_MODE,
                 ip_version=DEFAULT_IP_VERSION,
                 nat_traversal=DEFAULT_NAT_TRAVERSAL,
                 gre=DEFAULT_GRE,
                 gre_key=DEFAULT_GRE_KEY) -> PacketConfig:
    """Assemble a packet configuration from flat form values."""
    return PacketConfig(
        packet_size=packet_size,
        transform=TransformConfig(
            ah_integrity=ah_integrity,
            esp_encryption=esp_encryption,
            esp_integrity=esp_integrity,
            tunnel_mode=tunnel_mode
        ),
        transport=TransportConfig(
            ip_version=ip_version,
            nat_traversal=nat_traversal
        ),
        tunnel=TunnelConfig(gre=gre, gre_key=gre_key)
    )


def get_default_config():
    """Configuration shown when the form is first opened."""
    return build_config()


def get_all_transforms():
    """Generate all combinations of AH, ESP encryption and ESP integrity."""
    transforms = []
    for ah, encryption, integrity in itertools.product(
            AhIntegrity, EspEncryption, EspIntegrity):
        transforms.append({
            'ah_integrity': ah,
            'esp_encryption': encryption,
            'esp_integrity': integrity
        })
    return transforms
