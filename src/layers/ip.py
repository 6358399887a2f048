"""IP layer - outer/original headers, NAT-T encapsulation and GRE."""
from src.core.constants import IPV4_HEADER_SIZE, IPV6_HEADER_SIZE, \
    NAT_T_HEADER_SIZE, GRE_HEADER_SIZE, GRE_KEY_SIZE
from src.core.types import PacketConfig, PacketSegment, IPVersion, TunnelMode


def header_size(ip_version: IPVersion) -> int:
    match ip_version:
        case IPVersion.IPV4:
            return IPV4_HEADER_SIZE
        case IPVersion.IPV6:
            return IPV6_HEADER_SIZE
    raise ValueError(f"Unknown IP version: {ip_version!r}")


def _is_tunnel(config: PacketConfig) -> bool:
    return config['transform']['tunnel_mode'] == TunnelMode.TUNNEL


def outer_headers(config: PacketConfig) -> tuple[list[PacketSegment], int]:
    """Select the outermost IP header.

    Returns:
        Tuple of (segments to emit, initial packet length used as the
        ESP padding base)
    """
    version = config['transport']['ip_version']
    hdr = header_size(version)
    gre = config['tunnel']['gre']

    if _is_tunnel(config):
        packet_length = config['packet_size']
        if gre:
            # Tunnel over GRE carries two new IP headers
            packet_length += hdr
        label = f"New {version.value} Header for IPsec"
    elif gre:
        packet_length = config['packet_size']
        label = f"New {version.value} Header for IPsec"
    else:
        packet_length = config['packet_size'] - hdr
        label = f"Original {version.value} Header"

    return [PacketSegment(label, hdr)], packet_length


def nat_traversal(config: PacketConfig) -> list[PacketSegment]:
    if not config['transport']['nat_traversal']:
        return []
    return [PacketSegment("UDP Header (NAT-T)", NAT_T_HEADER_SIZE)]


def gre_length(config: PacketConfig, packet_length: int) -> int:
    """Account for the GRE header in the padding base.

    The GRE segment itself is emitted later by inner_data().
    """
    if config['tunnel']['gre']:
        packet_length += GRE_HEADER_SIZE
        if config['tunnel']['gre_key']:
            packet_length += GRE_KEY_SIZE
    return packet_length


def inner_data(config: PacketConfig) -> list[PacketSegment]:
    """Segments protected by AH or ESP: GRE encapsulation, then the
    original packet."""
    version = config['transport']['ip_version']
    hdr = header_size(version)
    gre = config['tunnel']['gre']
    segments = []

    if gre:
        if _is_tunnel(config):
            segments.append(
                PacketSegment(f"New {version.value} Header for GRE", hdr))
        if config['tunnel']['gre_key']:
            segments.append(PacketSegment(
                "GRE Header + Tunnel Key", GRE_HEADER_SIZE + GRE_KEY_SIZE))
        else:
            segments.append(PacketSegment("GRE Header", GRE_HEADER_SIZE))

    if gre or _is_tunnel(config):
        segments.append(PacketSegment(f"Original {version.value} Header", hdr))

    segments.append(PacketSegment(f"Original {version.value} Payload",
                                  config['packet_size'] - hdr))
    return segments
