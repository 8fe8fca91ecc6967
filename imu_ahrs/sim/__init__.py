"""
Synthetic sensor data generation.

Produces gyroscope, accelerometer and magnetometer readings from a known
orientation trajectory, for acceptance tests, benchmarks and demos.
"""

from imu_ahrs.sim.imu_from_orientation import (
    EARTH_MAG_FIELD,
    GRAVITY,
    generate_angular_rate_profile,
    generate_imu_from_orientation,
    generate_telemetry_trace,
    integrate_orientation,
)

__all__ = [
    "EARTH_MAG_FIELD",
    "GRAVITY",
    "generate_angular_rate_profile",
    "integrate_orientation",
    "generate_imu_from_orientation",
    "generate_telemetry_trace",
]
