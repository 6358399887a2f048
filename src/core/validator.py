"""IPsec transform policy checks."""
from .types import PacketConfig, AhIntegrity, EspEncryption, EspIntegrity
from .constants import MIN_PAYLOAD_SIZE, MAX_PACKET_SIZE

from src.layers.ip import header_size

import logging

logger = logging.getLogger(__name__)


def packet_size_bounds(config: PacketConfig) -> tuple[int, int]:
    """Smallest and largest accepted inner packet size."""
    minimum = header_size(config['transport']['ip_version']) + MIN_PAYLOAD_SIZE
    return minimum, MAX_PACKET_SIZE


def _check(config: PacketConfig) -> str:
    minimum, maximum = packet_size_bounds(config)
    if not minimum <= config['packet_size'] <= maximum:
        return ("Please enter a valid packet size between "
                f"{minimum} and {maximum}")

    encryption = config['transform']['esp_encryption']
    integrity = config['transform']['esp_integrity']
    ah = config['transform']['ah_integrity']

    if (encryption == EspEncryption.NONE and
            integrity == EspIntegrity.NONE and
            ah == AhIntegrity.NONE):
        return "Packet must use an encryption/authentication algorithm."

    if (integrity not in (EspIntegrity.NONE, EspIntegrity.GMAC) and
            encryption == EspEncryption.NONE):
        return ("ESP integrity check can only be selected with an ESP "
                "encryption algorithm")

    if encryption == EspEncryption.GCM and integrity != EspIntegrity.NONE:
        return ("ESP-GCM provides both data confidentiality and integrity "
                "protection. Do not select a separate authentication "
                "algorithm.")

    if encryption != EspEncryption.NONE and integrity == EspIntegrity.GMAC:
        return ("ESP-GMAC is an authentication-only algorithm and can not be "
                "selected with an encryption algorithm.")

    if ah != AhIntegrity.NONE and integrity == EspIntegrity.GMAC:
        return "AH algorithms can not be selected with ESP-GMAC."

    return ""


def validate_config(config: PacketConfig) -> str:
    """Check a configuration against IPsec transform rules.

    Returns the first violated rule as a user-facing message, or an empty
    string when the configuration is valid.
    """
    error = _check(config)
    if error:
        logger.debug("Rejected configuration: %s", error)
    return error


def is_valid(config: PacketConfig) -> bool:
    return not validate_config(config)
