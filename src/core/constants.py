"""Fixed protocol parameters for IPsec packet accounting."""

IPV4_HEADER_SIZE = 20
IPV6_HEADER_SIZE = 40

MIN_PAYLOAD_SIZE = 8
MAX_PACKET_SIZE = 64000

NAT_T_HEADER_SIZE = 8
GRE_HEADER_SIZE = 4
GRE_KEY_SIZE = 4

AH_FIELDS = [
    ('Next Header', 1),
    ('Payload', 1),
    ('Reserved', 2),
    ('SPI', 4),
    ('Sequence', 4),
]
AH_DIGEST_SIZE = 12

ESP_HEADER_FIELDS = [
    ('SPI', 4),
    ('Sequence', 4),
]
ESP_TRAILER_FIELDS = [
    ('Pad Length', 1),
    ('Next Header', 1),
]
ESP_AEAD_ICV_SIZE = 16

# Segment groups merged into a single box when displayed
AH_GROUP = 'AH Header'
ESP_HEADER_GROUP = 'ESP Header'
ESP_TRAILER_GROUP = 'ESP Trailer'
