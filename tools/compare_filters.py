"""Run the Mahony and Madgwick filters side-by-side on a telemetry file.

Loads a semicolon-delimited telemetry table, fuses it with two filter
configurations and reports how far apart the resulting orientations are
(mean ||q_a - q_b||). If a truth.npz from the dataset generator sits next
to the telemetry file, angle errors against ground truth are reported too.

Usage:
    python tools/compare_filters.py data/sim/ahrs_telemetry/telemetry.csv

    python tools/compare_filters.py telemetry.csv \
        --config-a mahony_proportional --config-b my_madgwick.json \
        --plots figs/ --six-axis
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

import numpy as np

from imu_ahrs.config import PRESETS, FilterConfig, create_filter, load_filter_config
from imu_ahrs.coords import quats_to_euler
from imu_ahrs.eval import (
    compute_angle_errors,
    compute_error_stats,
    compute_quat_differences,
    plot_euler_angles,
    plot_quat_difference,
    plot_quaternion_components,
    save_figure,
)
from imu_ahrs.filters import FilterRun, run_filter
from imu_ahrs.io import load_telemetry_csv

logger = logging.getLogger(__name__)

AGREEMENT_BOUND = 0.2


def resolve_config(spec: str, sample_freq: Optional[float]) -> FilterConfig:
    """Interpret a --config argument as a preset name or a JSON file."""
    if spec in PRESETS:
        return FilterConfig.from_preset(spec, sample_freq=sample_freq)
    config = load_filter_config(spec)
    if sample_freq is not None:
        config = FilterConfig.from_dict({**config.to_dict(), "sample_freq": sample_freq})
    return config


def load_truth(telemetry_path: Path) -> Optional[np.ndarray]:
    truth_path = telemetry_path.parent / "truth.npz"
    if not truth_path.exists():
        return None
    return np.load(truth_path)["quats"]


def print_comparison_summary(
    runs: Dict[str, FilterRun],
    distances: np.ndarray,
    truth: Optional[np.ndarray],
) -> None:
    """Print a summary table of filter disagreement and truth errors."""
    print(f"\n{'='*70}")
    print("FILTER COMPARISON SUMMARY")
    print(f"{'='*70}")

    stats = compute_error_stats(distances)
    print("\n||q_a - q_b||:")
    for key in ("mean", "median", "p95", "max"):
        print(f"  {key:<8}: {stats[key]:.4f}")
    verdict = "PASS" if stats["mean"] <= AGREEMENT_BOUND else "FAIL"
    print(f"  Agreement (mean <= {AGREEMENT_BOUND}): {verdict}")

    print("\nFinal attitude [roll, pitch, yaw] (deg):")
    for name, run in runs.items():
        skipped = f"  ({run.n_skipped} epochs skipped)" if run.n_skipped else ""
        euler = np.rad2deg(quats_to_euler(run.quaternions[-1:]))[0]
        print(f"  {name:<24}: [{euler[0]:7.2f}, {euler[1]:7.2f}, {euler[2]:7.2f}]{skipped}")

    if truth is not None:
        print("\nAngle error vs truth (deg):")
        print(f"  {'Filter':<24} {'Mean':>8} {'RMSE':>8} {'Max':>8}")
        print(f"  {'-'*50}")
        for name, run in runs.items():
            err = compute_error_stats(np.rad2deg(compute_angle_errors(run.quaternions, truth)))
            print(f"  {name:<24} {err['mean']:8.3f} {err['rmse']:8.3f} {err['max']:8.3f}")

    print(f"\n{'='*70}\n")


def main():
    """Main entry point with CLI."""
    parser = argparse.ArgumentParser(
        description="Compare two orientation filter configurations on a telemetry file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Presets: {', '.join(PRESETS)}

Examples:
  # Reference gains for both filters
  python %(prog)s data/sim/ahrs_telemetry/telemetry.csv

  # 6-axis comparison with plots
  python %(prog)s telemetry.csv --six-axis --plots figs/
        """,
    )

    parser.add_argument('telemetry', type=str, help='Path to semicolon-delimited telemetry file')
    parser.add_argument('--config-a', type=str, default='mahony_default',
                        help='Preset name or JSON config for the first filter (default: mahony_default)')
    parser.add_argument('--config-b', type=str, default='madgwick_default',
                        help='Preset name or JSON config for the second filter (default: madgwick_default)')
    parser.add_argument('--sample-freq', type=float, default=None,
                        help='Override sample frequency in Hz (default: from config)')
    parser.add_argument('--six-axis', action='store_true',
                        help='Ignore the magnetometer (update_6d)')
    parser.add_argument('--skip-invalid', action='store_true',
                        help='Skip epochs with non-finite values or a zero magnetometer')
    parser.add_argument('--plots', type=str, default=None,
                        help='Directory to save comparison plots (default: no plots)')
    parser.add_argument('--format', type=str, choices=['svg', 'png', 'pdf'], default='svg',
                        help='Plot format (default: svg)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    telemetry_path = Path(args.telemetry)
    series = load_telemetry_csv(telemetry_path)
    if len(series) == 0:
        parser.error(f"No telemetry records in {telemetry_path}")
    print(f"\nLoaded {len(series)} records from {telemetry_path}")

    configs = {
        f"A: {args.config_a}": resolve_config(args.config_a, args.sample_freq),
        f"B: {args.config_b}": resolve_config(args.config_b, args.sample_freq),
    }

    runs = {}
    for name, config in configs.items():
        print(f"  Running {name} ({config.algorithm} @ {config.sample_freq:g} Hz)")
        runs[name] = run_filter(
            create_filter(config),
            series,
            use_magnetometer=not args.six_axis,
            skip_invalid=args.skip_invalid,
        )

    run_a, run_b = runs.values()
    distances = compute_quat_differences(run_a.quaternions, run_b.quaternions)

    truth = load_truth(telemetry_path)
    if truth is not None and truth.shape != run_a.quaternions.shape:
        logger.warning("Ignoring truth.npz with shape %s", truth.shape)
        truth = None

    print_comparison_summary(runs, distances, truth)

    if args.plots:
        quats = {name: run.quaternions for name, run in runs.items()}
        if truth is not None:
            quats["Truth"] = truth
        figures = {
            "quaternions": plot_quaternion_components(series.t, quats),
            "euler": plot_euler_angles(series.t, quats),
            "difference": plot_quat_difference(series.t, distances, bound=AGREEMENT_BOUND),
        }
        for name, fig in figures.items():
            for path in save_figure(fig, args.plots, f"compare_{name}", formats=(args.format,)):
                print(f"  Saved: {path}")


if __name__ == "__main__":
    main()
