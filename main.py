"""
Command-line runner for the IPsec overhead calculator.
"""

import csv
import logging
import os
import sys
from datetime import datetime
import argparse

from src.core.calculator import evaluate, overhead_ratio
from src.core.summary import build_boxes, summary_rows, describe_config, \
    save_breakdown_to_csv
from src.core.types import AhIntegrity, EspEncryption, EspIntegrity, \
    TunnelMode, IPVersion
import config

logger = logging.getLogger(__name__)

SWEEP_COLUMNS = [
    'packet_size', 'ah_integrity', 'esp_encryption', 'esp_integrity',
    'tunnel_mode', 'ip_version', 'nat_traversal', 'gre', 'gre_key',
    'total_size', 'overhead', 'overhead_ratio'
]


def calculate_sweep(packet_sizes=None, tunnel_mode=config.DEFAULT_TUNNEL_MODE,
                    ip_version=config.DEFAULT_IP_VERSION,
                    nat_traversal=False, gre=False, gre_key=False):
    """
    Evaluate every transform combination for each packet size.

    Invalid combinations are skipped.

    Returns:
        list: List of result dictionaries
    """
    if packet_sizes is None:
        packet_sizes = config.SWEEP_PACKET_SIZES

    results = []
    for packet_size in packet_sizes:
        for transform in config.get_all_transforms():
            cfg = config.build_config(
                packet_size=packet_size,
                tunnel_mode=tunnel_mode,
                ip_version=ip_version,
                nat_traversal=nat_traversal,
                gre=gre,
                gre_key=gre_key,
                **transform
            )
            result = evaluate(cfg)
            if result['error']:
                continue

            results.append({
                'packet_size': packet_size,
                'ah_integrity': transform['ah_integrity'].value,
                'esp_encryption': transform['esp_encryption'].value,
                'esp_integrity': transform['esp_integrity'].value,
                'tunnel_mode': tunnel_mode.value,
                'ip_version': ip_version.value,
                'nat_traversal': nat_traversal,
                'gre': gre,
                'gre_key': gre_key,
                'total_size': result['total_size'],
                'overhead': result['overhead'],
                'overhead_ratio': overhead_ratio(result)
            })

    logger.debug("Sweep produced %d valid configurations", len(results))
    return results


def run_parameter_sweep(packet_sizes=None, output_dir=config.OUTPUT_DIR,
                        **settings):
    """
    Run the calculator for all transform combinations and save a CSV.

    Args:
        packet_sizes: Packet sizes to evaluate (default: from config)
        output_dir: Directory to save results
        settings: Tunnel/transport settings passed to calculate_sweep

    Returns:
        tuple: (list of result dictionaries, CSV filename)
    """
    if packet_sizes is None:
        packet_sizes = config.SWEEP_PACKET_SIZES

    os.makedirs(output_dir, exist_ok=True)

    total_transforms = len(config.get_all_transforms())
    print("Running IPsec overhead sweep")
    print(f"Packet sizes: {', '.join(str(s) for s in packet_sizes)}")
    print(f"Transform combinations: {total_transforms}")
    print("-" * 60)

    results = calculate_sweep(packet_sizes, **settings)

    for packet_size in packet_sizes:
        sized = [r for r in results if r['packet_size'] == packet_size]
        if not sized:
            print(f"L={packet_size:5d} bytes ... no valid transforms")
            continue
        smallest = min(sized, key=lambda r: r['overhead'])
        largest = max(sized, key=lambda r: r['overhead'])
        print(f"L={packet_size:5d} bytes ... {len(sized):3d} valid, "
              f"overhead {smallest['overhead']}-{largest['overhead']} bytes")

    print("-" * 60)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    csv_filename = os.path.join(output_dir, f'sweep_{timestamp}.csv')
    save_results_to_csv(results, csv_filename)

    return results, csv_filename


def save_results_to_csv(results, filename):
    """
    Save sweep results to CSV file.

    Args:
        results: List of result dictionaries
        filename: Output CSV filename
    """
    if not results:
        print("No results to save")
        return

    with open(filename, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=SWEEP_COLUMNS,
                                extrasaction='ignore')
        writer.writeheader()
        writer.writerows(results)

    print(f"Saved {len(results)} results to {filename}")


def print_breakdown(result, ip_version):
    """Print the grouped packet summary table."""
    boxes = build_boxes(result['segments'], ip_version)
    print(f"{'Payload':<40} {'Size':>6}")
    print("-" * 47)
    for label, size, details in summary_rows(boxes):
        print(f"{label:<40} {size:>6}")
        for line in details:
            print(f"    {line}")
    print("-" * 47)
    print(f"Overhead: {result['overhead']} bytes "
          f"({overhead_ratio(result) * 100:.1f}%)")
    return boxes


def _choices(enum_cls):
    return [member.value for member in enum_cls]


def build_parser():
    parser = argparse.ArgumentParser(description='IPsec Overhead Calculator')
    parser.add_argument('--packet-size', type=int,
                        default=config.DEFAULT_PACKET_SIZE,
                        help=f'Inner packet size in bytes '
                             f'(default: {config.DEFAULT_PACKET_SIZE})')
    parser.add_argument('--ah', choices=_choices(AhIntegrity),
                        default=config.DEFAULT_AH.value,
                        help='Authentication Header integrity')
    parser.add_argument('--esp-encryption', choices=_choices(EspEncryption),
                        default=config.DEFAULT_ESP_ENCRYPTION.value,
                        help='ESP encryption transform')
    parser.add_argument('--esp-integrity', choices=_choices(EspIntegrity),
                        default=config.DEFAULT_ESP_INTEGRITY.value,
                        help='ESP integrity transform')
    parser.add_argument('--mode', choices=_choices(TunnelMode),
                        default=config.DEFAULT_TUNNEL_MODE.value,
                        help='IPsec transform mode')
    parser.add_argument('--ip-version', choices=_choices(IPVersion),
                        default=config.DEFAULT_IP_VERSION.value)
    parser.add_argument('--nat-t', action='store_true',
                        help='Enable NAT traversal (UDP encapsulation)')
    parser.add_argument('--gre', action='store_true',
                        help='Enable GRE encapsulation')
    parser.add_argument('--gre-key', action='store_true',
                        help='Add a GRE tunnel key (requires --gre)')
    parser.add_argument('--sweep', action='store_true',
                        help='Evaluate all transform combinations')
    parser.add_argument('--chart', action='store_true',
                        help='Show the packet layout chart')
    parser.add_argument('--chart-file', help='Save the chart instead of '
                                             'showing it')
    parser.add_argument('--gui', action='store_true',
                        help='Launch the graphical calculator')
    parser.add_argument('--output-dir', default=config.OUTPUT_DIR,
                        help='Output directory for CSV results')
    parser.add_argument('--save', action='store_true',
                        help='Save the packet breakdown as CSV')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.gui:
        from src.ui.app import App
        App().mainloop()
        return 0

    ip_version = IPVersion(args.ip_version)
    tunnel_mode = TunnelMode(args.mode)

    if args.sweep:
        run_parameter_sweep(
            output_dir=args.output_dir,
            tunnel_mode=tunnel_mode,
            ip_version=ip_version,
            nat_traversal=args.nat_t,
            gre=args.gre,
            gre_key=args.gre and args.gre_key
        )
        return 0

    cfg = config.build_config(
        packet_size=args.packet_size,
        ah_integrity=AhIntegrity(args.ah),
        esp_encryption=EspEncryption(args.esp_encryption),
        esp_integrity=EspIntegrity(args.esp_integrity),
        tunnel_mode=tunnel_mode,
        ip_version=ip_version,
        nat_traversal=args.nat_t,
        gre=args.gre,
        gre_key=args.gre and args.gre_key
    )
    result = evaluate(cfg)

    if result['error']:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1

    boxes = print_breakdown(result, ip_version)

    if args.save:
        os.makedirs(args.output_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        csv_filename = os.path.join(args.output_dir,
                                    f'packet_{timestamp}.csv')
        save_breakdown_to_csv(result, csv_filename)
        print(f"Breakdown saved to: {csv_filename}")

    if args.chart or args.chart_file:
        from visualize import plot_packet_layout
        plot_packet_layout(boxes, title=describe_config(cfg),
                           output_file=args.chart_file)

    return 0


if __name__ == '__main__':
    sys.exit(main())
