"""
Visualization module for IPsec packet layouts and overhead sweeps.
"""

import csv
import os
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.patches import Rectangle


def load_results_from_csv(filename):
    """
    Load sweep results from CSV file.

    Args:
        filename: CSV file path

    Returns:
        list: List of result dictionaries
    """
    results = []
    with open(filename, 'r') as f:
        reader = csv.DictReader(f)
        for row in reader:
            # Convert numeric fields
            for key in row:
                try:
                    if '.' in row[key] or 'e' in row[key].lower():
                        row[key] = float(row[key])
                    else:
                        row[key] = int(row[key])
                except (ValueError, AttributeError):
                    pass
            results.append(row)
    return results


def plot_packet_layout(boxes, title=None, output_file=None):
    """
    Draw the packet as a row of boxes proportional to their byte size.

    Args:
        boxes: List of PacketBox, outermost first
        title: Plot title
        output_file: Path to save figure (if None, display only)
    """
    total = sum(box.size for box in boxes)

    fig, ax = plt.subplots(figsize=(14, 3))

    position = 0
    for box in boxes:
        ax.add_patch(Rectangle((position, 0), box.size, 1,
                               facecolor=box.color, edgecolor='black'))
        if box.size:
            ax.text(position + box.size / 2, 0.5, f"{box.label}\n{box.size}",
                    ha='center', va='center', fontsize=7, wrap=True)
        position += box.size

    ax.set_xlim(0, max(total, 1))
    ax.set_ylim(0, 1)
    ax.set_yticks([])
    ax.set_xlabel('Bytes', fontsize=12)
    ax.set_title(title or f'IPsec Packet Layout ({total} bytes)', fontsize=14)

    fig.tight_layout()

    if output_file:
        fig.savefig(output_file, dpi=150, bbox_inches='tight')
        print(f"Saved packet layout to {output_file}")
    else:
        plt.show()

    plt.close(fig)


def create_overhead_heatmap(results, packet_size, ah_integrity='None',
                            metric='overhead', title=None, output_file=None):
    """
    Create a heatmap of overhead per ESP encryption and integrity.

    Args:
        results: List of result dictionaries
        packet_size: Packet size to plot
        ah_integrity: AH transform to plot
        metric: Metric to plot (default: 'overhead')
        title: Plot title
        output_file: Path to save figure (if None, display only)
    """
    selected = [r for r in results
                if r['packet_size'] == packet_size and
                r['ah_integrity'] == ah_integrity]
    if not selected:
        print(f"No results for packet size {packet_size}")
        return

    # Keep first-seen order so rows follow the option lists
    encryptions = list(dict.fromkeys(r['esp_encryption'] for r in selected))
    integrities = list(dict.fromkeys(r['esp_integrity'] for r in selected))

    # Invalid combinations are absent from the sweep and stay blank
    matrix = np.full((len(encryptions), len(integrities)), np.nan)

    for r in selected:
        e_idx = encryptions.index(r['esp_encryption'])
        i_idx = integrities.index(r['esp_integrity'])
        matrix[e_idx, i_idx] = r[metric]

    plt.figure(figsize=(12, 6))

    sns.heatmap(
        matrix,
        annot=True,
        fmt='.0f' if metric == 'overhead' else '.2f',
        cmap='YlOrRd',
        xticklabels=integrities,
        yticklabels=encryptions,
        mask=np.isnan(matrix),
        cbar_kws={'label': metric}
    )

    plt.xlabel('ESP Integrity', fontsize=12)
    plt.ylabel('ESP Encryption', fontsize=12)

    if title:
        plt.title(title, fontsize=14)
    else:
        plt.title(f'{metric} at {packet_size} bytes (AH: {ah_integrity})',
                  fontsize=14)

    plt.tight_layout()

    if output_file:
        plt.savefig(output_file, dpi=300, bbox_inches='tight')
        print(f"Saved heatmap to {output_file}")
    else:
        plt.show()

    plt.close()


def plot_overhead_vs_packet_size(results, ah_integrity='None',
                                 output_file=None):
    """
    Plot relative overhead against packet size for each ESP transform pair.

    Args:
        results: List of result dictionaries
        ah_integrity: AH transform to plot
        output_file: Path to save figure
    """
    selected = [r for r in results if r['ah_integrity'] == ah_integrity]
    pairs = list(dict.fromkeys(
        (r['esp_encryption'], r['esp_integrity']) for r in selected))

    plt.figure(figsize=(12, 6))

    for encryption, integrity in pairs:
        p_results = [r for r in selected
                     if r['esp_encryption'] == encryption and
                     r['esp_integrity'] == integrity]
        p_results.sort(key=lambda x: x['packet_size'])

        sizes = [r['packet_size'] for r in p_results]
        ratio = [r['overhead_ratio'] * 100 for r in p_results]

        plt.plot(sizes, ratio, marker='o', label=f'{encryption} / {integrity}')

    plt.xlabel('Packet Size (bytes)', fontsize=12)
    plt.ylabel('Overhead (%)', fontsize=12)
    plt.title('IPsec Overhead vs Packet Size', fontsize=14)
    plt.legend(fontsize=7, ncol=2)
    plt.grid(True, alpha=0.3)
    plt.xscale('log', base=2)

    plt.tight_layout()

    if output_file:
        plt.savefig(output_file, dpi=300, bbox_inches='tight')
        print(f"Saved overhead plot to {output_file}")
    else:
        plt.show()

    plt.close()


def generate_all_plots(csv_file, output_dir=None):
    """
    Generate all visualization plots from a sweep CSV file.

    Args:
        csv_file: Path to CSV results file
        output_dir: Directory to save plots (if None, use same dir as CSV)
    """
    results = load_results_from_csv(csv_file)

    if not results:
        print("No results found in CSV")
        return

    if output_dir is None:
        output_dir = os.path.dirname(csv_file)

    os.makedirs(output_dir, exist_ok=True)

    base_name = os.path.splitext(os.path.basename(csv_file))[0]

    print(f"Generating plots from {csv_file}...")

    for packet_size in sorted(set(r['packet_size'] for r in results)):
        create_overhead_heatmap(
            results,
            packet_size,
            title=f'Overhead (bytes) - {packet_size} byte packets',
            output_file=os.path.join(
                output_dir, f'{base_name}_overhead_{packet_size}.png')
        )

    plot_overhead_vs_packet_size(
        results,
        output_file=os.path.join(output_dir,
                                 f'{base_name}_overhead_vs_size.png')
    )

    print(f"All plots saved to {output_dir}")


if __name__ == '__main__':
    import sys

    if len(sys.argv) < 2:
        print("Usage: python visualize.py <csv_file> [output_dir]")
        sys.exit(1)

    csv_file = sys.argv[1]
    output_dir = sys.argv[2] if len(sys.argv) > 2 else None

    generate_all_plots(csv_file, output_dir)
