"""
Complementary orientation filters (AHRS).

Two interchangeable filters estimate a unit quaternion from gyroscope,
accelerometer and (optionally) magnetometer readings:
    - MahonyFilter: proportional-integral feedback on vector errors
    - MadgwickFilter: one normalized gradient-descent step per sample

Both satisfy the OrientationFilter protocol:
    update_6d(gx, gy, gz, ax, ay, az) -> q
    update_9d(gx, gy, gz, ax, ay, az, mx, my, mz) -> q
with q a (4,) array in scalar-first [w, x, y, z] order.

Example:
    >>> from imu_ahrs.filters import MadgwickFilter, MahonyFilter
    >>> filters = [MahonyFilter.with_defaults(100.0), MadgwickFilter(0.1, 100.0)]
    >>> for filt in filters:
    ...     q = filt.update_6d(0.0, 0.0, 0.01, 0.0, 0.0, 9.81)
"""

from imu_ahrs.filters.base import OrientationFilter
from imu_ahrs.filters.madgwick import MADGWICK_DEFAULT_BETA, MadgwickFilter
from imu_ahrs.filters.mahony import (
    MAHONY_DEFAULT_KI,
    MAHONY_DEFAULT_KP,
    MahonyFilter,
)
from imu_ahrs.filters.runner import FilterRun, run_filter
from imu_ahrs.filters.sanitize import (
    is_finite_sample,
    is_finite_vector,
    is_valid_9d_sample,
    is_zero_vector,
)
from imu_ahrs.filters.types import IDENTITY_QUATERNION, OrientationState

__all__ = [
    # Contract and state
    "OrientationFilter",
    "OrientationState",
    "IDENTITY_QUATERNION",
    # Filters
    "MahonyFilter",
    "MAHONY_DEFAULT_KP",
    "MAHONY_DEFAULT_KI",
    "MadgwickFilter",
    "MADGWICK_DEFAULT_BETA",
    # Batch driver
    "FilterRun",
    "run_filter",
    # Input checks
    "is_finite_vector",
    "is_zero_vector",
    "is_finite_sample",
    "is_valid_9d_sample",
]
