"""Authentication Header (AH)."""
from src.core.constants import AH_FIELDS, AH_DIGEST_SIZE, AH_GROUP
from src.core.types import PacketConfig, PacketSegment, AhIntegrity


def uses_ah(config: PacketConfig) -> bool:
    return config['transform']['ah_integrity'] != AhIntegrity.NONE


def digest_size(integrity: AhIntegrity) -> int:
    match integrity:
        case AhIntegrity.MD5_HMAC | AhIntegrity.SHA_HMAC:
            return AH_DIGEST_SIZE
        case _:
            return 0


def auth_header(config: PacketConfig) -> list[PacketSegment]:
    """AH fixed fields followed by the integrity digest."""
    if not uses_ah(config):
        return []

    segments = [PacketSegment(text, size, AH_GROUP)
                for text, size in AH_FIELDS]

    size = digest_size(config['transform']['ah_integrity'])
    if size:
        segments.append(PacketSegment("AH Digest", size))
    return segments
