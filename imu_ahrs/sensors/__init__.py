"""
Sensor sample and time-series containers.

Primary data structures:
    ImuSample: One gyroscope/accelerometer(/magnetometer) epoch
    TelemetryRecord: One parsed telemetry row
    TelemetrySeries: Column arrays for a whole recording

Example:
    >>> from imu_ahrs.sensors import ImuSample
    >>> from imu_ahrs.filters import MahonyFilter
    >>> filt = MahonyFilter.with_defaults(sample_freq=100.0)
    >>> sample = ImuSample(gyro=(0.0, 0.0, 0.0), accel=(0.0, 0.0, 9.81))
    >>> q = filt.update_6d(*sample.as_6d_args())
"""

from imu_ahrs.sensors.types import (
    ImuSample,
    TelemetryRecord,
    TelemetrySeries,
)

__all__ = [
    "ImuSample",
    "TelemetryRecord",
    "TelemetrySeries",
]
