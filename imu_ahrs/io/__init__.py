"""
Telemetry file I/O.

Functions:
    load_telemetry_csv: Parse a semicolon-delimited telemetry table
    save_telemetry_csv: Write a TelemetrySeries in the same format
"""

from imu_ahrs.io.telemetry import (
    TELEMETRY_COLUMNS,
    load_telemetry_csv,
    save_telemetry_csv,
)

__all__ = [
    "TELEMETRY_COLUMNS",
    "load_telemetry_csv",
    "save_telemetry_csv",
]
