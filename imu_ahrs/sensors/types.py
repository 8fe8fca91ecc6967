"""
Data structures for inertial and magnetic sensor streams.

This module defines the sample and time-series containers consumed by the
orientation filters and produced by the telemetry loader and simulator:
    - ImuSample: one epoch of gyroscope, accelerometer and magnetometer
    - TelemetryRecord: one parsed row of a telemetry table
    - TelemetrySeries: column-oriented arrays for a whole recording

Time Base Convention:
    All timestamps are float seconds, stored as np.ndarray.

Units:
    - gyro: rad/s
    - accel: any consistent unit (m/s^2 in recorded data); the filters only
      use its direction
    - mag: any consistent unit (uT, gauss or normalized); direction only
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class ImuSample:
    """
    One sensor epoch.

    Attributes:
        gyro: Angular rate (gx, gy, gz) in rad/s.
        accel: Accelerometer reading (ax, ay, az).
        mag: Optional magnetometer reading (mx, my, mz). None for 6-axis
             sensors.

    Example:
        >>> sample = ImuSample(gyro=(0.0, 0.0, 0.1), accel=(0.0, 0.0, 9.81))
        >>> sample.has_mag
        False
    """

    gyro: Vector3
    accel: Vector3
    mag: Optional[Vector3] = None

    @property
    def has_mag(self) -> bool:
        return self.mag is not None

    def as_6d_args(self) -> Tuple[float, ...]:
        """Positional arguments for OrientationFilter.update_6d."""
        return (*self.gyro, *self.accel)

    def as_9d_args(self) -> Tuple[float, ...]:
        """Positional arguments for OrientationFilter.update_9d."""
        if self.mag is None:
            raise ValueError("ImuSample has no magnetometer reading")
        return (*self.gyro, *self.accel, *self.mag)


@dataclass(frozen=True)
class TelemetryRecord:
    """
    One row of a telemetry table.

    Attributes:
        time: Timestamp in seconds.
        accel: (ax, ay, az).
        gyro: (gx, gy, gz) in rad/s.
        mag: (mx, my, mz).
    """

    time: float
    accel: Vector3
    gyro: Vector3
    mag: Vector3

    def to_sample(self) -> ImuSample:
        return ImuSample(gyro=self.gyro, accel=self.accel, mag=self.mag)


@dataclass(frozen=True)
class TelemetrySeries:
    """
    Time-series of gyroscope, accelerometer and magnetometer readings.

    Attributes:
        t: Timestamps in seconds, shape (N,).
        accel: Accelerometer readings, shape (N, 3).
        gyro: Gyroscope readings, shape (N, 3). Units: rad/s.
        mag: Magnetometer readings, shape (N, 3).
        meta: Optional metadata dict. May include:
              - 'source': str, file path or generator name
              - 'sample_rate_hz': float, nominal sampling rate

    Notes:
        - frozen=True; the arrays themselves are not copied, so callers
          should not mutate them after construction.
        - Indexing returns a TelemetryRecord; iteration yields records in
          time order.

    Example:
        >>> t = np.arange(3) * 0.01
        >>> series = TelemetrySeries(
        ...     t=t,
        ...     accel=np.tile([0.0, 0.0, 9.81], (3, 1)),
        ...     gyro=np.zeros((3, 3)),
        ...     mag=np.tile([0.3, 0.0, -0.9], (3, 1)),
        ... )
        >>> len(series)
        3
        >>> series[0].accel
        (0.0, 0.0, 9.81)
    """

    t: np.ndarray
    accel: np.ndarray
    gyro: np.ndarray
    mag: np.ndarray
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate shape consistency of the telemetry arrays."""
        if self.t.ndim != 1:
            raise ValueError(
                f"TelemetrySeries.t must be 1D array, got shape {self.t.shape}"
            )

        n_samples = self.t.shape[0]

        for name in ("accel", "gyro", "mag"):
            arr = getattr(self, name)
            if arr.shape != (n_samples, 3):
                raise ValueError(
                    f"TelemetrySeries.{name} must have shape ({n_samples}, 3), "
                    f"got {arr.shape}"
                )

    def __len__(self) -> int:
        return int(self.t.shape[0])

    def __getitem__(self, index: int) -> TelemetryRecord:
        if not isinstance(index, (int, np.integer)):
            raise TypeError(
                f"TelemetrySeries indices must be integers, got {type(index).__name__}"
            )
        return TelemetryRecord(
            time=float(self.t[index]),
            accel=_vec3(self.accel[index]),
            gyro=_vec3(self.gyro[index]),
            mag=_vec3(self.mag[index]),
        )

    def __iter__(self) -> Iterator[TelemetryRecord]:
        for i in range(len(self)):
            yield self[i]

    @property
    def sample_rate_hz(self) -> float:
        """
        Sample rate estimated from the median timestamp spacing.

        Falls back to meta['sample_rate_hz'] when fewer than two samples
        exist or the timestamps do not advance.
        """
        if len(self) >= 2:
            dt = float(np.median(np.diff(self.t)))
            if dt > 0:
                return 1.0 / dt
        if "sample_rate_hz" in self.meta:
            return float(self.meta["sample_rate_hz"])
        raise ValueError("Cannot infer sample rate from telemetry timestamps")

    @property
    def duration(self) -> float:
        if len(self) == 0:
            return 0.0
        return float(self.t[-1] - self.t[0])


def _vec3(row: np.ndarray) -> Vector3:
    return (float(row[0]), float(row[1]), float(row[2]))
