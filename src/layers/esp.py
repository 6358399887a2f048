"""Encapsulating Security Payload (ESP) header, IV, padding and trailer."""
from .ip import inner_data

from src.core.constants import ESP_HEADER_FIELDS, ESP_TRAILER_FIELDS, \
    ESP_AEAD_ICV_SIZE, ESP_HEADER_GROUP, ESP_TRAILER_GROUP
from src.core.types import PacketConfig, PacketSegment, EspEncryption, \
    EspIntegrity

import math


def pad_size(packet_length: int, block_size: int) -> int:
    """Bytes of ESP padding needed to align the payload plus the two
    trailer bytes (pad length, next header) to the cipher block size."""
    aligned = math.ceil((packet_length + 2) / block_size) * block_size
    return aligned - (packet_length + 2)


def cipher_layout(encryption: EspEncryption) -> tuple[int, int] | None:
    """Return (IV size, block size) for an encryption transform.

    None means no payload is carried for this transform.
    """
    match encryption:
        case EspEncryption.DES:
            return 8, 8
        case EspEncryption.AES:
            return 16, 16
        case EspEncryption.GCM:
            return 8, 4
        case EspEncryption.NULL:
            return 0, 4
        case EspEncryption.NONE:
            return None


def hmac_icv_size(integrity: EspIntegrity) -> int:
    """Truncated ICV length appended for HMAC integrity transforms."""
    match integrity:
        case EspIntegrity.MD5_HMAC | EspIntegrity.SHA_HMAC:
            return 12
        case EspIntegrity.SHA_256:
            return 16
        case EspIntegrity.SHA_384:
            return 24
        case EspIntegrity.SHA_512:
            return 32
        case _:
            return 0


def uses_esp(config: PacketConfig) -> bool:
    transform = config['transform']
    return (transform['esp_encryption'] != EspEncryption.NONE or
            transform['esp_integrity'] == EspIntegrity.GMAC)


def _protected_payload(config: PacketConfig, packet_length: int,
                       iv_size: int, block_size: int) -> list[PacketSegment]:
    segments = []
    if iv_size:
        segments.append(PacketSegment("ESP IV", iv_size))
    segments.extend(inner_data(config))
    segments.append(PacketSegment("ESP Pad",
                                  pad_size(packet_length, block_size),
                                  ESP_TRAILER_GROUP))
    return segments


def esp_segments(config: PacketConfig,
                 packet_length: int) -> list[PacketSegment]:
    """Build the ESP header, protected payload and trailer.

    Args:
        config: Packet configuration
        packet_length: Padding base accumulated from the outer headers
            and GRE encapsulation

    Returns:
        Ordered list of segments, empty when ESP is not in use
    """
    if not uses_esp(config):
        return []

    encryption = config['transform']['esp_encryption']
    integrity = config['transform']['esp_integrity']

    segments = [PacketSegment(text, size, ESP_HEADER_GROUP)
                for text, size in ESP_HEADER_FIELDS]

    layout = cipher_layout(encryption)
    if layout is not None:
        segments.extend(_protected_payload(config, packet_length, *layout))

    if integrity == EspIntegrity.GMAC:
        segments.extend(_protected_payload(config, packet_length, 8, 4))

    segments.extend(PacketSegment(text, size, ESP_TRAILER_GROUP)
                    for text, size in ESP_TRAILER_FIELDS)

    if encryption == EspEncryption.GCM or integrity == EspIntegrity.GMAC:
        segments.append(PacketSegment("ESP ICV", ESP_AEAD_ICV_SIZE,
                                      ESP_TRAILER_GROUP))

    icv = hmac_icv_size(integrity)
    if icv:
        segments.append(PacketSegment("ESP ICV", icv, ESP_TRAILER_GROUP))

    return segments
