"""Load and save semicolon-delimited telemetry tables.

File layout:
    time;ax;ay;az;gx;gy;gz;mx;my;mz
    0.08;-0.071594;0.21157;9.7958;0.002314;-0.00634;0.001322;-0.33533;0.19856;-0.88708
    ...

The header row names the columns. Columns are located by name, so files
with a different column order or extra columns load as well. Blank lines
are ignored. Each data row becomes one TelemetryRecord of the returned
TelemetrySeries.
"""

import logging
import warnings
from pathlib import Path
from typing import Dict, List, Sequence, Union

import numpy as np

from imu_ahrs.sensors.types import TelemetrySeries

logger = logging.getLogger(__name__)

DELIMITER = ";"
TELEMETRY_COLUMNS = ("time", "ax", "ay", "az", "gx", "gy", "gz", "mx", "my", "mz")


def load_telemetry_csv(path: Union[str, Path]) -> TelemetrySeries:
    """
    Load a telemetry table from disk.

    Args:
        path: Path to a semicolon-delimited file with a header row.

    Returns:
        TelemetrySeries with one entry per non-blank data row.
        meta['source'] holds the file path.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing, a row has the wrong
                    number of fields, or a field is not numeric.

    Examples:
        >>> series = load_telemetry_csv('tests/data/telemetry_sample.csv')
        >>> len(series)
        12
        >>> series[0].time
        0.08
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Telemetry file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    if not lines or not lines[0].strip():
        raise ValueError(f"Telemetry file {path} has no header row")

    column_index = _parse_header(lines[0], path)
    data_lines = [line for line in lines[1:] if line.strip()]

    if not data_lines:
        warnings.warn(f"Telemetry file {path} contains no data rows", UserWarning)
        table = np.empty((0, len(column_index)), dtype=np.float64)
    else:
        table = _parse_rows(data_lines, len(column_index), path)

    series = _series_from_table(table, column_index, source=str(path))
    logger.info("Loaded %d telemetry records from %s", len(series), path)
    return series


def save_telemetry_csv(series: TelemetrySeries, path: Union[str, Path]) -> Path:
    """
    Write a telemetry series as a semicolon-delimited table.

    Values are written with repr() so load_telemetry_csv reads back the
    exact same floats.

    Args:
        series: Telemetry to save.
        path: Destination file. Parent directories are created.

    Returns:
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    table = np.column_stack([series.t, series.accel, series.gyro, series.mag])
    with open(path, "w", encoding="utf-8") as f:
        f.write(DELIMITER.join(TELEMETRY_COLUMNS) + "\n")
        for row in table:
            f.write(DELIMITER.join(repr(float(v)) for v in row) + "\n")

    logger.debug("Wrote %d telemetry records to %s", len(series), path)
    return path


def _parse_header(header: str, path: Path) -> Dict[str, int]:
    """Map each column name to its position, checking required columns."""
    names = [name.strip() for name in header.split(DELIMITER)]
    missing = [col for col in TELEMETRY_COLUMNS if col not in names]
    if missing:
        raise ValueError(
            f"Telemetry file {path} is missing columns {missing}; "
            f"header was {names}"
        )
    return {name: i for i, name in enumerate(names)}


def _parse_rows(lines: Sequence[str], n_columns: int, path: Path) -> np.ndarray:
    try:
        table = np.loadtxt(lines, delimiter=DELIMITER, dtype=np.float64, ndmin=2)
    except ValueError as exc:
        raise ValueError(f"Malformed telemetry row in {path}: {exc}") from exc

    if table.shape[1] != n_columns:
        raise ValueError(
            f"Telemetry file {path} rows have {table.shape[1]} fields, "
            f"header declares {n_columns}"
        )
    return table


def _series_from_table(
    table: np.ndarray, column_index: Dict[str, int], source: str
) -> TelemetrySeries:
    def cols(names: List[str]) -> np.ndarray:
        return table[:, [column_index[name] for name in names]].copy()

    return TelemetrySeries(
        t=table[:, column_index["time"]].copy(),
        accel=cols(["ax", "ay", "az"]),
        gyro=cols(["gx", "gy", "gz"]),
        mag=cols(["mx", "my", "mz"]),
        meta={"source": source},
    )
