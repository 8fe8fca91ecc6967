"""Generate a simulated 9-axis telemetry dataset for orientation filters.

Creates a tumbling rigid-body trace for exercising the AHRS filters:
    - Smooth sinusoidal body rates on all three axes
    - Gyroscope, accelerometer and magnetometer readings (100 Hz default)
    - Configurable noise and gyro bias levels
    - Ground truth: orientation quaternion per sample

Saves to: data/sim/ahrs_telemetry/
    - telemetry.csv : Semicolon-delimited sensor table (load_telemetry_csv)
    - truth.npz     : Ground truth (t, quats)
    - config.json   : Dataset configuration

Usage:
    python scripts/generate_ahrs_telemetry_dataset.py
    python scripts/generate_ahrs_telemetry_dataset.py --preset noisy_mems
    python scripts/generate_ahrs_telemetry_dataset.py --duration 120 --rate 200
"""

import argparse
import json
from pathlib import Path
from typing import Sequence

import numpy as np

from imu_ahrs.io import save_telemetry_csv
from imu_ahrs.sim import EARTH_MAG_FIELD, GRAVITY, generate_telemetry_trace


# ============================================================================
# PRESET CONFIGURATIONS
# ============================================================================

PRESETS = {
    'clean': {
        'description': 'Noise-free sensors (filters should track truth closely)',
        'gyro_noise_std': 0.0,
        'accel_noise_std': 0.0,
        'mag_noise_std': 0.0,
        'gyro_bias': [0.0, 0.0, 0.0],
    },
    'consumer': {
        'description': 'Consumer-grade IMU + magnetometer (moderate noise)',
        'gyro_noise_std': 0.005,
        'accel_noise_std': 0.05,
        'mag_noise_std': 0.3,
        'gyro_bias': [0.0, 0.0, 0.0],
    },
    'noisy_mems': {
        'description': 'Low-cost MEMS (high noise)',
        'gyro_noise_std': 0.02,
        'accel_noise_std': 0.3,
        'mag_noise_std': 1.5,
        'gyro_bias': [0.0, 0.0, 0.0],
    },
    'biased_gyro': {
        'description': 'Consumer IMU with constant gyro bias (tests integral feedback)',
        'gyro_noise_std': 0.005,
        'accel_noise_std': 0.05,
        'mag_noise_std': 0.3,
        'gyro_bias': [0.02, -0.01, 0.015],
    },
}


# ============================================================================
# DATASET GENERATION
# ============================================================================

def generate_ahrs_telemetry_dataset(
    output_dir: str = "data/sim/ahrs_telemetry",
    seed: int = 42,
    duration: float = 60.0,
    rate: float = 100.0,
    gyro_noise_std: float = 0.005,
    accel_noise_std: float = 0.05,
    mag_noise_std: float = 0.3,
    gyro_bias: Sequence[float] = (0.0, 0.0, 0.0),
) -> Path:
    """Generate and save a telemetry dataset.

    Args:
        output_dir: Output directory path.
        seed: Random seed for reproducibility.
        duration: Dataset duration (seconds).
        rate: Sample rate (Hz).
        gyro_noise_std: Gyroscope noise std (rad/s).
        accel_noise_std: Accelerometer noise std (m/s²).
        mag_noise_std: Magnetometer noise std (µT).
        gyro_bias: Constant gyro bias per axis (rad/s).

    Returns:
        Output directory path.
    """
    print(f"\n{'='*70}")
    print("Generating AHRS Telemetry Dataset")
    print(f"{'='*70}")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    # 1. Simulate sensors
    print("\n1. Simulating tumbling body...")
    print(f"   Duration: {duration} s")
    print(f"   Sample rate: {rate:.0f} Hz")
    print(f"   Gyro noise: {gyro_noise_std} rad/s, bias: {list(gyro_bias)} rad/s")
    print(f"   Accel noise: {accel_noise_std} m/s²")
    print(f"   Mag noise: {mag_noise_std} µT")

    series, truth = generate_telemetry_trace(
        duration=duration,
        sample_rate_hz=rate,
        gyro_noise_std=gyro_noise_std,
        accel_noise_std=accel_noise_std,
        mag_noise_std=mag_noise_std,
        gyro_bias=gyro_bias,
        seed=seed,
    )
    print(f"   Generated {len(series)} samples")

    # 2. Save sensor table and truth
    print("\n2. Saving data...")
    save_telemetry_csv(series, output_path / "telemetry.csv")
    print("   Saved: telemetry.csv")
    np.savez(output_path / "truth.npz", t=series.t, quats=truth)
    print("   Saved: truth.npz")

    # 3. Save configuration
    config = {
        "dataset_info": {
            "description": "Simulated 9-axis telemetry for AHRS filters",
            "seed": seed,
            "duration_sec": duration,
            "num_samples": len(series),
        },
        "sensors": {
            "rate_hz": rate,
            "gyro_noise_std_rad_s": gyro_noise_std,
            "gyro_bias_rad_s": list(gyro_bias),
            "accel_noise_std_m_s2": accel_noise_std,
            "mag_noise_std_uT": mag_noise_std,
        },
        "earth": {
            "gravity_m_s2": GRAVITY,
            "mag_field_uT": list(EARTH_MAG_FIELD),
            "frame": "x magnetic north, z up",
        },
        "quaternion_convention": "scalar-first [w, x, y, z], body to Earth",
    }
    with open(output_path / "config.json", "w") as f:
        json.dump(config, f, indent=2)
    print("   Saved: config.json")

    print(f"\n{'='*70}")
    print("Dataset generation complete!")
    print(f"{'='*70}")
    print(f"Output directory: {output_path.absolute()}\n")
    return output_path


# ============================================================================
# COMMAND-LINE INTERFACE
# ============================================================================

def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Generate simulated 9-axis telemetry for AHRS filters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default consumer-grade dataset
  python %(prog)s

  # Preset with constant gyro bias
  python %(prog)s --preset biased_gyro --output data/sim/ahrs_biased

  # Longer, faster trace
  python %(prog)s --duration 120 --rate 200
        """,
    )

    parser.add_argument(
        '--preset',
        type=str,
        choices=list(PRESETS.keys()),
        help='Use a preset configuration (overrides individual parameters)',
    )
    parser.add_argument(
        '--output',
        type=str,
        default='data/sim/ahrs_telemetry',
        help='Output directory (default: data/sim/ahrs_telemetry)',
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=42,
        help='Random seed (default: 42)',
    )
    parser.add_argument('--duration', type=float, default=60.0, help='Duration in seconds (default: 60)')
    parser.add_argument('--rate', type=float, default=100.0, help='Sample rate in Hz (default: 100)')

    sensor_group = parser.add_argument_group('Sensor Parameters')
    sensor_group.add_argument('--gyro-noise', type=float, default=0.005, dest='gyro_noise_std',
                              help='Gyro noise std in rad/s (default: 0.005)')
    sensor_group.add_argument('--accel-noise', type=float, default=0.05, dest='accel_noise_std',
                              help='Accel noise std in m/s² (default: 0.05)')
    sensor_group.add_argument('--mag-noise', type=float, default=0.3, dest='mag_noise_std',
                              help='Magnetometer noise std in µT (default: 0.3)')
    sensor_group.add_argument('--gyro-bias', type=float, nargs=3, default=[0.0, 0.0, 0.0],
                              metavar=('BX', 'BY', 'BZ'), dest='gyro_bias',
                              help='Constant gyro bias in rad/s (default: 0 0 0)')

    args = parser.parse_args()

    if args.preset:
        preset_config = PRESETS[args.preset]
        print(f"\nUsing preset: '{args.preset}'")
        print(f"Description: {preset_config['description']}\n")
        for key, value in preset_config.items():
            if key != 'description' and hasattr(args, key):
                setattr(args, key, value)

    if args.duration <= 0:
        parser.error("Duration must be positive")
    if args.rate <= 0:
        parser.error("Sample rate must be positive")
    if min(args.gyro_noise_std, args.accel_noise_std, args.mag_noise_std) < 0:
        parser.error("Noise parameters must be non-negative")

    generate_ahrs_telemetry_dataset(
        output_dir=args.output,
        seed=args.seed,
        duration=args.duration,
        rate=args.rate,
        gyro_noise_std=args.gyro_noise_std,
        accel_noise_std=args.accel_noise_std,
        mag_noise_std=args.mag_noise_std,
        gyro_bias=args.gyro_bias,
    )


if __name__ == "__main__":
    main()
