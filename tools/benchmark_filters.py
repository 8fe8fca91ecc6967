"""Measure the per-update cost of each orientation filter.

Drives each filter for a fixed number of update calls over a telemetry
series (a telemetry file, or a simulated trace when none is given) and
prints nanoseconds per update.

Usage:
    python tools/benchmark_filters.py
    python tools/benchmark_filters.py data/sim/ahrs_telemetry/telemetry.csv -n 100000
"""

import argparse
import logging

from imu_ahrs.config import PRESETS, FilterConfig, create_filter
from imu_ahrs.eval import benchmark_filter
from imu_ahrs.io import load_telemetry_csv
from imu_ahrs.sim import generate_telemetry_trace


def main():
    """Main entry point with CLI."""
    parser = argparse.ArgumentParser(
        description="Benchmark orientation filter update cost",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('telemetry', type=str, nargs='?', default=None,
                        help='Telemetry file (default: 10 s simulated trace)')
    parser.add_argument('-n', '--n-updates', type=int, default=10000,
                        help='Update calls per filter (default: 10000)')
    parser.add_argument('--presets', type=str, nargs='+',
                        default=['mahony_default', 'madgwick_default'],
                        choices=list(PRESETS.keys()),
                        help='Filter presets to time (default: mahony_default madgwick_default)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.n_updates < 1:
        parser.error("--n-updates must be positive")

    if args.telemetry:
        series = load_telemetry_csv(args.telemetry)
        source = args.telemetry
    else:
        series, _ = generate_telemetry_trace(duration=10.0)
        source = "simulated (10 s @ 100 Hz)"

    print(f"\nBenchmark: {args.n_updates} updates per filter, data: {source}")
    print(f"{'-'*70}")
    for preset in args.presets:
        config = FilterConfig.from_preset(preset)
        for use_mag in (False, True):
            label = f"{preset}-{'9d' if use_mag else '6d'}"
            result = benchmark_filter(
                lambda: create_filter(config),
                series,
                n_updates=args.n_updates,
                use_magnetometer=use_mag,
                name=label,
            )
            print(result)
    print()


if __name__ == "__main__":
    main()
