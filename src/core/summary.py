"""Grouping of packet segments into chart boxes and summary rows."""
from .types import CalculationResult, PacketConfig, PacketSegment, \
    PacketBox, IPVersion

import csv

BOX_COLORS = {
    'UDP Header (NAT-T)': 'plum',
    'AH Header': 'lightskyblue',
    'AH Digest': 'lightblue',
    'ESP Header': 'lightgreen',
    'ESP IV': 'palegreen',
    'GRE Header': 'palevioletred',
    'GRE Header + Tunnel Key': 'palevioletred',
    'ESP Trailer': 'lightgreen',
}
DEFAULT_COLOR = 'white'
TOTAL_LABEL = 'Total IPsec Packet Size'


def color_map(ip_version: IPVersion) -> dict[str, str]:
    """Legend colors, including the IP-version specific header labels."""
    colors = dict(BOX_COLORS)
    version = ip_version.value
    colors[f'New {version} Header for IPsec'] = 'navajowhite'
    colors[f'New {version} Header for GRE'] = 'lightpink'
    colors[f'Original {version} Header'] = 'khaki'
    colors[f'Original {version} Payload'] = 'palegoldenrod'
    return colors


def build_boxes(segments: list[PacketSegment],
                ip_version: IPVersion) -> list[PacketBox]:
    """Merge grouped segments into one box per group.

    Boxes keep the order in which their first segment appears. Ungrouped
    segments always get a box of their own.
    """
    colors = color_map(ip_version)
    boxes: list[PacketBox] = []
    groups: dict[str, PacketBox] = {}

    for segment in segments:
        if segment.group is None:
            boxes.append(PacketBox(
                label=segment.label,
                size=segment.byte_size,
                color=colors.get(segment.label, DEFAULT_COLOR)
            ))
            continue

        box = groups.get(segment.group)
        if box is None:
            box = PacketBox(
                label=segment.group,
                size=0,
                color=colors.get(segment.group, DEFAULT_COLOR)
            )
            groups[segment.group] = box
            boxes.append(box)

        box.size += segment.byte_size
        box.details.append(segment)

    return boxes


def summary_rows(boxes: list[PacketBox]) -> list[tuple[str, int, list[str]]]:
    """Table rows of (label, size, detail lines), closed by the total."""
    rows = []
    for box in boxes:
        details = [f"{d.label} - {d.byte_size}" for d in box.details]
        rows.append((box.label, box.size, details))

    rows.append((TOTAL_LABEL, sum(box.size for box in boxes), []))
    return rows


def box_widths(boxes: list[PacketBox], width: float) -> list[int]:
    """Pixel width of each box when the whole packet spans width pixels."""
    total = sum(box.size for box in boxes)
    if total <= 0:
        return [0 for _ in boxes]
    return [max(int(width * box.size / total) - 1, 0) for box in boxes]


def describe_config(config: PacketConfig) -> str:
    """Short one-line title for a configuration."""
    transform = config['transform']
    parts = [
        transform['tunnel_mode'].value,
        config['transport']['ip_version'].value,
        f"{config['packet_size']} bytes"
    ]
    for option in (transform['ah_integrity'], transform['esp_encryption'],
                   transform['esp_integrity']):
        if option.value != 'None':
            parts.append(option.value)
    if config['transport']['nat_traversal']:
        parts.append('NAT-T')
    if config['tunnel']['gre']:
        parts.append('GRE+Key' if config['tunnel']['gre_key'] else 'GRE')
    return ', '.join(parts)


def save_breakdown_to_csv(result: CalculationResult, filename: str):
    """Save the segment list of a single calculation."""
    with open(filename, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Segment', 'Group', 'Bytes'])
        for segment in result['segments']:
            writer.writerow([segment.label, segment.group or '',
                             segment.byte_size])
        writer.writerow([TOTAL_LABEL, '', result['total_size']])
