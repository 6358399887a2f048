"""
Unit tests for the packet composer and its protocol layers.
"""

import itertools

import pytest

from src.core.composer import compose_packet, total_size
from src.core.types import PacketSegment, AhIntegrity, EspEncryption, \
    EspIntegrity, TunnelMode, IPVersion
from src.core.validator import is_valid
from src.layers.esp import pad_size


def layout(segments):
    return [(s.label, s.byte_size) for s in segments]


class TestPadSize:

    @pytest.mark.parametrize("length,block,expected", [
        (100, 16, 10),
        (100, 8, 2),
        (100, 4, 2),
        (80, 16, 14),
        (124, 16, 2),
        (128, 16, 14),
        (14, 16, 0),
        (2, 4, 0),
    ])
    def test_pad_size(self, length, block, expected):
        assert pad_size(length, block) == expected


class TestReferenceLayout:
    """100-byte tunnel mode, AES / SHA-HMAC over IPv4."""

    def test_segment_order(self, default_config):
        segments = compose_packet(default_config)
        assert segments == [
            PacketSegment("New IPv4 Header for IPsec", 20),
            PacketSegment("SPI", 4, "ESP Header"),
            PacketSegment("Sequence", 4, "ESP Header"),
            PacketSegment("ESP IV", 16),
            PacketSegment("Original IPv4 Header", 20),
            PacketSegment("Original IPv4 Payload", 80),
            PacketSegment("ESP Pad", 10, "ESP Trailer"),
            PacketSegment("Pad Length", 1, "ESP Trailer"),
            PacketSegment("Next Header", 1, "ESP Trailer"),
            PacketSegment("ESP ICV", 12, "ESP Trailer"),
        ]

    def test_total(self, default_config):
        assert total_size(compose_packet(default_config)) == \
            20 + 4 + 4 + 16 + 20 + 80 + 10 + 1 + 1 + 12

    def test_idempotent(self, default_config):
        assert compose_packet(default_config) == \
            compose_packet(default_config)


@pytest.mark.parametrize("overrides,expected_total", [
    ({}, 168),
    ({'tunnel_mode': TunnelMode.TRANSPORT}, 152),
    ({'esp_encryption': EspEncryption.DES,
      'esp_integrity': EspIntegrity.MD5_HMAC}, 152),
    ({'esp_encryption': EspEncryption.GCM,
      'esp_integrity': EspIntegrity.NONE}, 156),
    ({'esp_encryption': EspEncryption.NULL,
      'esp_integrity': EspIntegrity.SHA_256}, 148),
    ({'esp_encryption': EspEncryption.NONE,
      'esp_integrity': EspIntegrity.GMAC}, 156),
    ({'ah_integrity': AhIntegrity.SHA_HMAC,
      'esp_encryption': EspEncryption.NONE,
      'esp_integrity': EspIntegrity.NONE}, 144),
    ({'ah_integrity': AhIntegrity.MD5_HMAC}, 192),
    ({'nat_traversal': True}, 176),
    ({'gre': True}, 184),
    ({'gre': True, 'gre_key': True}, 200),
    ({'gre': True, 'tunnel_mode': TunnelMode.TRANSPORT}, 168),
    ({'ip_version': IPVersion.IPV6}, 188),
    ({'esp_integrity': EspIntegrity.SHA_384}, 180),
    ({'esp_integrity': EspIntegrity.SHA_512}, 188),
])
def test_totals(make_config, overrides, expected_total):
    cfg = make_config(packet_size=100, **overrides)
    assert total_size(compose_packet(cfg)) == expected_total


class TestTransportMode:

    def test_original_header_outermost(self, make_config):
        cfg = make_config(tunnel_mode=TunnelMode.TRANSPORT)
        assert layout(compose_packet(cfg)) == [
            ("Original IPv4 Header", 20),
            ("SPI", 4),
            ("Sequence", 4),
            ("ESP IV", 16),
            ("Original IPv4 Payload", 80),
            ("ESP Pad", 14),
            ("Pad Length", 1),
            ("Next Header", 1),
            ("ESP ICV", 12),
        ]

    def test_gre_adds_new_header(self, make_config):
        cfg = make_config(tunnel_mode=TunnelMode.TRANSPORT, gre=True)
        assert layout(compose_packet(cfg)) == [
            ("New IPv4 Header for IPsec", 20),
            ("SPI", 4),
            ("Sequence", 4),
            ("ESP IV", 16),
            ("GRE Header", 4),
            ("Original IPv4 Header", 20),
            ("Original IPv4 Payload", 80),
            ("ESP Pad", 6),
            ("Pad Length", 1),
            ("Next Header", 1),
            ("ESP ICV", 12),
        ]


class TestGre:

    def test_tunnel_with_gre(self, make_config):
        cfg = make_config(gre=True)
        assert layout(compose_packet(cfg)) == [
            ("New IPv4 Header for IPsec", 20),
            ("SPI", 4),
            ("Sequence", 4),
            ("ESP IV", 16),
            ("New IPv4 Header for GRE", 20),
            ("GRE Header", 4),
            ("Original IPv4 Header", 20),
            ("Original IPv4 Payload", 80),
            ("ESP Pad", 2),
            ("Pad Length", 1),
            ("Next Header", 1),
            ("ESP ICV", 12),
        ]

    @pytest.mark.parametrize("mode", list(TunnelMode))
    def test_key_changes_only_gre_header_and_padding(self, make_config,
                                                     mode):
        plain = compose_packet(make_config(gre=True, tunnel_mode=mode))
        keyed = compose_packet(make_config(gre=True, gre_key=True,
                                           tunnel_mode=mode))
        assert len(plain) == len(keyed)

        differing = [(a, b) for a, b in zip(plain, keyed) if a != b]
        gre = [(a, b) for a, b in differing if a.label == "GRE Header"]
        assert gre == [(PacketSegment("GRE Header", 4),
                        PacketSegment("GRE Header + Tunnel Key", 8))]

        pads = [(a, b) for a, b in differing if a.label == "ESP Pad"]
        assert len(differing) == len(gre) + len(pads)
        for a, b in pads:
            length = 100 + (20 if mode == TunnelMode.TUNNEL else 0) + 4
            assert a.byte_size == pad_size(length, 16)
            assert b.byte_size == pad_size(length + 4, 16)


class TestAuthHeader:

    def test_ah_only_wraps_inner_packet(self, make_config):
        cfg = make_config(ah_integrity=AhIntegrity.SHA_HMAC,
                          esp_encryption=EspEncryption.NONE,
                          esp_integrity=EspIntegrity.NONE)
        segments = compose_packet(cfg)
        assert segments == [
            PacketSegment("New IPv4 Header for IPsec", 20),
            PacketSegment("Next Header", 1, "AH Header"),
            PacketSegment("Payload", 1, "AH Header"),
            PacketSegment("Reserved", 2, "AH Header"),
            PacketSegment("SPI", 4, "AH Header"),
            PacketSegment("Sequence", 4, "AH Header"),
            PacketSegment("AH Digest", 12),
            PacketSegment("Original IPv4 Header", 20),
            PacketSegment("Original IPv4 Payload", 80),
        ]

    def test_ah_precedes_esp(self, make_config):
        cfg = make_config(ah_integrity=AhIntegrity.MD5_HMAC)
        labels = [s.label for s in compose_packet(cfg)]
        assert labels.index("AH Digest") < labels.index("ESP IV")
        assert labels.count("Original IPv4 Payload") == 1


class TestEsp:

    def test_gmac_only(self, make_config):
        cfg = make_config(esp_encryption=EspEncryption.NONE,
                          esp_integrity=EspIntegrity.GMAC)
        assert layout(compose_packet(cfg)) == [
            ("New IPv4 Header for IPsec", 20),
            ("SPI", 4),
            ("Sequence", 4),
            ("ESP IV", 8),
            ("Original IPv4 Header", 20),
            ("Original IPv4 Payload", 80),
            ("ESP Pad", 2),
            ("Pad Length", 1),
            ("Next Header", 1),
            ("ESP ICV", 16),
        ]

    def test_null_cipher_has_no_iv(self, make_config):
        cfg = make_config(esp_encryption=EspEncryption.NULL)
        labels = [s.label for s in compose_packet(cfg)]
        assert "ESP IV" not in labels

    def test_gcm_icv(self, make_config):
        cfg = make_config(esp_encryption=EspEncryption.GCM,
                          esp_integrity=EspIntegrity.NONE)
        icvs = [s for s in compose_packet(cfg) if s.label == "ESP ICV"]
        assert icvs == [PacketSegment("ESP ICV", 16, "ESP Trailer")]

    def test_nat_traversal_after_outer_header(self, make_config):
        segments = compose_packet(make_config(nat_traversal=True))
        assert segments[1] == PacketSegment("UDP Header (NAT-T)", 8)
        # NAT-T is not part of the padding base
        pad = next(s for s in segments if s.label == "ESP Pad")
        assert pad.byte_size == 10

    def test_ipv6_headers(self, make_config):
        segments = compose_packet(make_config(ip_version=IPVersion.IPV6))
        assert layout(segments)[:1] == [("New IPv6 Header for IPsec", 40)]
        assert ("Original IPv6 Header", 40) in layout(segments)
        assert ("Original IPv6 Payload", 60) in layout(segments)

    def test_invalid_configuration_still_composed(self, make_config):
        cfg = make_config(esp_encryption=EspEncryption.NONE,
                          esp_integrity=EspIntegrity.SHA_HMAC)
        assert not is_valid(cfg)
        assert layout(compose_packet(cfg)) == [
            ("New IPv4 Header for IPsec", 20)
        ]

    def test_ah_with_orphan_esp_integrity_has_no_inner_data(self,
                                                            make_config):
        cfg = make_config(ah_integrity=AhIntegrity.SHA_HMAC,
                          esp_encryption=EspEncryption.NONE,
                          esp_integrity=EspIntegrity.SHA_HMAC)
        assert not is_valid(cfg)
        segments = compose_packet(cfg)
        labels = [s.label for s in segments]
        assert "Original IPv4 Header" not in labels
        assert "Original IPv4 Payload" not in labels
        assert labels[-1] == "AH Digest"
        assert total_size(segments) == 20 + 12 + 12


def test_valid_configurations_are_well_formed(make_config):
    """Non-negative sizes and exactly one inner payload for every valid
    configuration."""
    checked = 0
    for (ah, encryption, integrity, mode, version, nat, gre, key,
         size) in itertools.product(
            AhIntegrity, EspEncryption, EspIntegrity, TunnelMode, IPVersion,
            (False, True), (False, True), (False, True), (48, 100, 1500)):
        cfg = make_config(packet_size=size, ah_integrity=ah,
                          esp_encryption=encryption, esp_integrity=integrity,
                          tunnel_mode=mode, ip_version=version,
                          nat_traversal=nat, gre=gre, gre_key=key)
        if not is_valid(cfg):
            continue
        checked += 1

        segments = compose_packet(cfg)
        assert all(s.byte_size >= 0 for s in segments)
        payloads = [s for s in segments
                    if s.label == f"Original {version.value} Payload"]
        assert len(payloads) == 1
        assert total_size(segments) >= size

    assert checked > 0
