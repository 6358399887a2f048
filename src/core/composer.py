"""Packet composer - lays out the encapsulated IPsec packet."""
from .types import PacketConfig, PacketSegment, EspEncryption, EspIntegrity

from src.layers import ah, esp, ip

import logging

logger = logging.getLogger(__name__)


def compose_packet(config: PacketConfig) -> list[PacketSegment]:
    """Compose the on-wire layout for a configuration.

    Segments are returned outermost first. The result is produced for any
    configuration; callers gate display on validate_config().

    ESP padding is computed from the length accumulated by the outer header
    and GRE steps only. NAT-T, AH and the inner headers are not part of
    that base.
    """
    transform = config['transform']

    segments, packet_length = ip.outer_headers(config)
    segments += ip.nat_traversal(config)
    packet_length = ip.gre_length(config, packet_length)

    segments += ah.auth_header(config)
    if (ah.uses_ah(config)
            and transform['esp_encryption'] == EspEncryption.NONE
            and transform['esp_integrity'] == EspIntegrity.NONE):
        # AH alone wraps the inner packet directly
        segments += ip.inner_data(config)

    segments += esp.esp_segments(config, packet_length)

    logger.debug("Composed %d segments (padding base %d bytes)",
                 len(segments), packet_length)
    return segments


def total_size(segments: list[PacketSegment]) -> int:
    return sum(segment.byte_size for segment in segments)
