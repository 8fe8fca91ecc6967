"""
Pre-validation helpers for filter inputs.

The filters never validate their inputs: a non-finite reading or a zero
magnetometer vector (PI filter) corrupts the orientation for every later
epoch. These helpers let callers reject such epochs before they reach a
filter.
"""

import math
from typing import Iterable, Optional


def is_finite_vector(values: Iterable[float]) -> bool:
    """Return True if every component is a finite float."""
    return all(math.isfinite(v) for v in values)


def is_zero_vector(values: Iterable[float]) -> bool:
    """Return True if every component is exactly zero."""
    return all(v == 0.0 for v in values)


def is_finite_sample(
    gyro: Iterable[float],
    accel: Iterable[float],
    mag: Optional[Iterable[float]] = None,
) -> bool:
    """
    Check one epoch for nan/inf in any axis.

    Args:
        gyro: (gx, gy, gz).
        accel: (ax, ay, az).
        mag: Optional (mx, my, mz).

    Returns:
        True if all provided components are finite.
    """
    if not (is_finite_vector(gyro) and is_finite_vector(accel)):
        return False
    return mag is None or is_finite_vector(mag)


def is_valid_9d_sample(
    gyro: Iterable[float],
    accel: Iterable[float],
    mag: Iterable[float],
) -> bool:
    """
    Finite check plus the magnetometer zero-vector check.

    A zero magnetometer together with a valid accelerometer drives the PI
    filter's 9-axis update to nan, so such epochs are rejected here.
    """
    mag = tuple(mag)
    return is_finite_sample(gyro, accel, mag) and not is_zero_vector(mag)
