"""Type definitions for the IPsec overhead calculator."""
from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict


class AhIntegrity(Enum):
    """Authentication Header integrity algorithms."""
    NONE = "None"
    MD5_HMAC = "AH-MD5-HMAC"
    SHA_HMAC = "AH-SHA-HMAC"


class EspEncryption(Enum):
    """ESP encryption transforms."""
    NONE = "None"
    DES = "ESP-DES/3DES"
    AES = "ESP-AES-128/192/256"
    GCM = "ESP-GCM-128/192/256"
    NULL = "ESP-NULL"


class EspIntegrity(Enum):
    """ESP integrity transforms."""
    NONE = "None"
    MD5_HMAC = "ESP-MD5-HMAC"
    SHA_HMAC = "ESP-SHA-HMAC"
    SHA_256 = "ESP-SHA-256"
    SHA_384 = "ESP-SHA-384"
    SHA_512 = "ESP-SHA-512"
    GMAC = "ESP-GMAC-128/192/256"


class TunnelMode(Enum):
    TUNNEL = "Tunnel"
    TRANSPORT = "Transport"


class IPVersion(Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"


class TransformConfig(TypedDict):
    """IPsec transform set."""

    ah_integrity: AhIntegrity
    esp_encryption: EspEncryption
    esp_integrity: EspIntegrity
    tunnel_mode: TunnelMode


class TransportConfig(TypedDict):
    """Outer transport settings."""

    ip_version: IPVersion
    nat_traversal: bool


class TunnelConfig(TypedDict):
    """GRE tunnel settings."""

    gre: bool
    gre_key: bool


class PacketConfig(TypedDict):
    """Full calculator input, built once per evaluation."""

    packet_size: int
    transform: TransformConfig
    transport: TransportConfig
    tunnel: TunnelConfig


@dataclass(frozen=True)
class PacketSegment:
    """A single field of the encapsulated packet."""

    label: str
    byte_size: int
    group: str | None = None


@dataclass
class PacketBox:
    """Segments merged under one label for the chart and summary table."""

    label: str
    size: int
    color: str = 'white'
    details: list[PacketSegment] = field(default_factory=list)


class CalculationResult(TypedDict):
    """Result of a single calculator evaluation."""

    error: str
    segments: list[PacketSegment]
    packet_size: int
    total_size: int
    overhead: int
