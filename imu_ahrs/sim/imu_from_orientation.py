"""
Generate synthetic gyroscope, accelerometer and magnetometer readings from
a ground-truth orientation trajectory.

Forward model (q rotates body vectors into the Earth frame, Earth z up):
    - Gyro:  ω_b, the body angular rate that drives the trajectory
    - Accel: f_b = C(q)^T @ [0, 0, +g]   (specific force of a body at rest,
             the upward reaction to gravity)
    - Mag:   m_b = C(q)^T @ b_E          (b_E: Earth field, x = magnetic
             north, negative z in the northern hemisphere)

The truth trajectory is propagated with the exact rotation increment
    q_k = q_{k-1} ⊗ exp(0.5 * ω_k * Δt)
so the truth does not share the first-order integration error of the
filters under test.

Noise is white Gaussian per axis, drawn from a seeded NumPy Generator so
traces are reproducible.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from imu_ahrs.coords.rotations import (
    quat_from_rotation_vector,
    quat_multiply,
    quat_to_rotation_matrix,
)
from imu_ahrs.sensors.types import TelemetrySeries

GRAVITY = 9.81  # m/s²

# Earth magnetic field in the Earth frame, µT (about 63° inclination)
EARTH_MAG_FIELD = (22.0, 0.0, -43.0)


def generate_angular_rate_profile(
    t: np.ndarray,
    amplitudes: Sequence[float] = (0.6, 0.4, 0.8),
    frequencies: Sequence[float] = (0.11, 0.07, 0.05),
    phases: Sequence[float] = (0.0, 1.0, 2.0),
) -> np.ndarray:
    """
    Smooth body angular rate: one sinusoid per axis.

    Args:
        t: Timestamps in seconds, shape (N,).
        amplitudes: Peak rate per axis, rad/s.
        frequencies: Oscillation frequency per axis, Hz.
        phases: Phase offset per axis, rad.

    Returns:
        omega_b: Angular rate in body frame, shape (N, 3). Units: rad/s.
    """
    t = np.asarray(t, dtype=np.float64)
    omega = np.empty((t.shape[0], 3))
    for axis in range(3):
        omega[:, axis] = amplitudes[axis] * np.sin(
            2.0 * np.pi * frequencies[axis] * t + phases[axis]
        )
    return omega


def integrate_orientation(
    omega_b: np.ndarray,
    dt: float,
    q_init: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Propagate a truth orientation with exact rotation increments.

    Args:
        omega_b: Body angular rate per sample, shape (N, 3). Units: rad/s.
        dt: Sample period in seconds.
        q_init: Orientation before the first sample. Default: identity.

    Returns:
        quats: Orientation after each sample, shape (N, 4), scalar-first.

    Raises:
        ValueError: If dt is not positive or omega_b is not (N, 3).
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    omega_b = np.asarray(omega_b, dtype=np.float64)
    if omega_b.ndim != 2 or omega_b.shape[1] != 3:
        raise ValueError(f"omega_b must have shape (N, 3), got {omega_b.shape}")

    q = np.array([1.0, 0.0, 0.0, 0.0]) if q_init is None else np.asarray(q_init, dtype=np.float64)
    quats = np.empty((omega_b.shape[0], 4))
    for k, omega in enumerate(omega_b):
        q = quat_multiply(q, quat_from_rotation_vector(omega * dt))
        q = q / np.linalg.norm(q)
        quats[k] = q
    return quats


def generate_imu_from_orientation(
    quats: np.ndarray,
    g: float = GRAVITY,
    mag_field: Sequence[float] = EARTH_MAG_FIELD,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Ideal accelerometer and magnetometer readings for each orientation.

    Args:
        quats: Body-to-Earth quaternions, shape (N, 4).
        g: Gravity magnitude, m/s².
        mag_field: Earth magnetic field in the Earth frame.

    Returns:
        Tuple (accel_body, mag_body), each shape (N, 3).

    Example:
        >>> accel, mag = generate_imu_from_orientation(np.array([[1.0, 0, 0, 0]]))
        >>> accel[0]
        array([0.  , 0.  , 9.81])
    """
    quats = np.asarray(quats, dtype=np.float64)
    up = np.array([0.0, 0.0, g])
    field = np.asarray(mag_field, dtype=np.float64)

    accel = np.empty((quats.shape[0], 3))
    mag = np.empty((quats.shape[0], 3))
    for k, q in enumerate(quats):
        R_t = quat_to_rotation_matrix(q).T
        accel[k] = R_t @ up
        mag[k] = R_t @ field
    return accel, mag


def generate_telemetry_trace(
    duration: float = 60.0,
    sample_rate_hz: float = 100.0,
    gyro_noise_std: float = 0.005,
    accel_noise_std: float = 0.05,
    mag_noise_std: float = 0.3,
    gyro_bias: Sequence[float] = (0.0, 0.0, 0.0),
    seed: int = 42,
    amplitudes: Sequence[float] = (0.6, 0.4, 0.8),
    frequencies: Sequence[float] = (0.11, 0.07, 0.05),
) -> Tuple[TelemetrySeries, np.ndarray]:
    """
    Build a realistic noisy 9-axis trace together with its truth.

    Args:
        duration: Trace length in seconds.
        sample_rate_hz: Sample rate in Hz.
        gyro_noise_std: Gyro white noise, rad/s.
        accel_noise_std: Accel white noise, m/s².
        mag_noise_std: Magnetometer white noise, µT.
        gyro_bias: Constant gyro bias added to every reading, rad/s.
        seed: Random seed for reproducibility.
        amplitudes: Angular rate amplitude per axis, rad/s.
        frequencies: Angular rate frequency per axis, Hz.

    Returns:
        Tuple (series, truth_quats):
            series: TelemetrySeries with t starting at 1/sample_rate_hz
            truth_quats: True orientation per sample, shape (N, 4)
    """
    if sample_rate_hz <= 0:
        raise ValueError(f"sample_rate_hz must be positive, got {sample_rate_hz}")

    dt = 1.0 / sample_rate_hz
    n_samples = int(round(duration * sample_rate_hz))
    t = (np.arange(n_samples) + 1) * dt

    omega_b = generate_angular_rate_profile(t, amplitudes, frequencies)
    truth = integrate_orientation(omega_b, dt)
    accel, mag = generate_imu_from_orientation(truth)

    rng = np.random.default_rng(seed)
    gyro = omega_b + np.asarray(gyro_bias) + rng.normal(0.0, gyro_noise_std, (n_samples, 3))
    accel = accel + rng.normal(0.0, accel_noise_std, (n_samples, 3))
    mag = mag + rng.normal(0.0, mag_noise_std, (n_samples, 3))

    series = TelemetrySeries(
        t=t,
        accel=accel,
        gyro=gyro,
        mag=mag,
        meta={"source": "simulated", "sample_rate_hz": sample_rate_hz, "seed": seed},
    )
    return series, truth
