"""
Timing harness for per-update filter cost.

Mirrors a micro-benchmark loop: sensor rows are unpacked up front, then a
single filter instance is driven for n_updates epochs, cycling through the
series, and only the update calls are timed.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Tuple

from imu_ahrs.filters.base import OrientationFilter
from imu_ahrs.sensors.types import TelemetrySeries


@dataclass(frozen=True)
class BenchmarkResult:
    """Timing summary for one filter."""

    name: str
    n_updates: int
    elapsed_s: float

    @property
    def updates_per_sec(self) -> float:
        return self.n_updates / self.elapsed_s if self.elapsed_s > 0 else float("inf")

    @property
    def ns_per_update(self) -> float:
        return 1e9 * self.elapsed_s / self.n_updates

    def __str__(self) -> str:
        return (
            f"{self.name:<24} {self.n_updates:>9d} updates  "
            f"{self.ns_per_update:>10.0f} ns/update  "
            f"{self.updates_per_sec:>12.0f} updates/s"
        )


def _unpack_rows(series: TelemetrySeries, use_magnetometer: bool) -> List[Tuple[float, ...]]:
    if use_magnetometer:
        table = [series.gyro, series.accel, series.mag]
    else:
        table = [series.gyro, series.accel]
    rows = []
    for i in range(len(series)):
        rows.append(tuple(float(v) for block in table for v in block[i]))
    return rows


def benchmark_filter(
    factory: Callable[[], OrientationFilter],
    series: TelemetrySeries,
    n_updates: int = 10000,
    use_magnetometer: bool = True,
    name: str = "",
) -> BenchmarkResult:
    """
    Time n_updates filter updates over a telemetry series.

    Args:
        factory: Zero-argument callable building a fresh filter.
        series: Input data, cycled if shorter than n_updates.
        n_updates: Number of update calls to time.
        use_magnetometer: Time update_9d if True, update_6d otherwise.
        name: Label for the result; defaults to the filter class name.

    Returns:
        BenchmarkResult with total elapsed wall time.

    Raises:
        ValueError: If n_updates < 1 or the series is empty.
    """
    if n_updates < 1:
        raise ValueError(f"n_updates must be positive, got {n_updates}")
    if len(series) == 0:
        raise ValueError("Cannot benchmark on an empty series")

    rows = _unpack_rows(series, use_magnetometer)
    n_rows = len(rows)
    filt = factory()
    update = filt.update_9d if use_magnetometer else filt.update_6d

    start = time.perf_counter()
    for i in range(n_updates):
        update(*rows[i % n_rows])
    elapsed = time.perf_counter() - start

    return BenchmarkResult(
        name=name or type(filt).__name__,
        n_updates=n_updates,
        elapsed_s=elapsed,
    )
