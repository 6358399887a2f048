"""Single evaluation of a packet configuration."""
from .types import PacketConfig, CalculationResult
from .validator import validate_config
from .composer import compose_packet, total_size


def evaluate(config: PacketConfig) -> CalculationResult:
    """Validate and compose a configuration.

    Segments are always included. When error is non-empty they must not be
    presented as a valid layout.
    """
    error = validate_config(config)
    segments = compose_packet(config)
    total = total_size(segments)

    return CalculationResult(
        error=error,
        segments=segments,
        packet_size=config['packet_size'],
        total_size=total,
        overhead=total - config['packet_size']
    )


def overhead_ratio(result: CalculationResult) -> float:
    """Fraction of the encapsulated packet that is not the original packet."""
    if result['total_size'] <= 0:
        return 0.0
    return result['overhead'] / result['total_size']
