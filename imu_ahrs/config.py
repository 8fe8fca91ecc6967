"""Filter configuration: named presets, JSON persistence and construction.

A FilterConfig names the algorithm and carries every parameter needed to
build it, so tools and scripts can share one configuration file:

    {
        "algorithm": "madgwick",
        "sample_freq": 100.0,
        "beta": 0.1
    }

PI gains (kp, ki) are ignored by the gradient-descent filter and beta is
ignored by the PI filter; both are kept so a config round-trips unchanged.
"""

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from imu_ahrs.filters.base import OrientationFilter
from imu_ahrs.filters.madgwick import MADGWICK_DEFAULT_BETA, MadgwickFilter
from imu_ahrs.filters.mahony import (
    MAHONY_DEFAULT_KI,
    MAHONY_DEFAULT_KP,
    MahonyFilter,
)

logger = logging.getLogger(__name__)

ALGORITHMS = ("mahony", "madgwick")


# ============================================================================
# PRESET CONFIGURATIONS
# ============================================================================

PRESETS = {
    "mahony_default": {
        "description": "PI filter with reference gains (Kp=0.2, Ki=0.1)",
        "algorithm": "mahony",
        "sample_freq": 100.0,
        "kp": MAHONY_DEFAULT_KP,
        "ki": MAHONY_DEFAULT_KI,
    },
    "mahony_proportional": {
        "description": "PI filter without integral action (no bias estimation)",
        "algorithm": "mahony",
        "sample_freq": 100.0,
        "kp": 0.5,
        "ki": 0.0,
    },
    "madgwick_default": {
        "description": "Gradient-descent filter with reference gain (beta=0.1)",
        "algorithm": "madgwick",
        "sample_freq": 100.0,
        "beta": MADGWICK_DEFAULT_BETA,
    },
    "madgwick_fast": {
        "description": "Gradient-descent filter, faster convergence, noisier output",
        "algorithm": "madgwick",
        "sample_freq": 100.0,
        "beta": 0.5,
    },
}


@dataclass(frozen=True)
class FilterConfig:
    """
    Parameters for one orientation filter.

    Attributes:
        algorithm: "mahony" or "madgwick".
        sample_freq: Sensor sample frequency in Hz. Must be positive.
        kp: PI proportional gain (mahony only).
        ki: PI integral gain (mahony only). Zero disables integral action.
        beta: Gradient step gain (madgwick only).

    Example:
        >>> cfg = FilterConfig.from_preset("madgwick_default", sample_freq=200.0)
        >>> cfg.beta, cfg.sample_freq
        (0.1, 200.0)
    """

    algorithm: str = "mahony"
    sample_freq: float = 100.0
    kp: float = MAHONY_DEFAULT_KP
    ki: float = MAHONY_DEFAULT_KI
    beta: float = MADGWICK_DEFAULT_BETA

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ValueError(
                f"Unknown algorithm '{self.algorithm}', expected one of {ALGORITHMS}"
            )
        if not (np.isfinite(self.sample_freq) and self.sample_freq > 0):
            raise ValueError(
                f"sample_freq must be positive and finite, got {self.sample_freq}"
            )
        for name in ("kp", "ki", "beta"):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        if self.kp < 0 or self.ki < 0:
            raise ValueError(
                f"PI gains must be non-negative, got kp={self.kp}, ki={self.ki}"
            )
        if self.beta < 0:
            raise ValueError(f"beta must be non-negative, got {self.beta}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterConfig":
        """
        Build a config from a plain dict.

        Unknown keys (such as a preset's 'description') are ignored.
        """
        known = {"algorithm", "sample_freq", "kp", "ki", "beta"}
        kwargs = {key: value for key, value in data.items() if key in known}
        if "sample_freq" in kwargs:
            kwargs["sample_freq"] = float(kwargs["sample_freq"])
        return cls(**kwargs)

    @classmethod
    def from_preset(
        cls, name: str, sample_freq: Optional[float] = None
    ) -> "FilterConfig":
        """
        Build a config from a named preset.

        Args:
            name: Key in PRESETS.
            sample_freq: Overrides the preset's sample frequency if given.

        Raises:
            KeyError: If the preset does not exist.
        """
        if name not in PRESETS:
            raise KeyError(
                f"Unknown preset '{name}', available: {sorted(PRESETS)}"
            )
        config = cls.from_dict(PRESETS[name])
        if sample_freq is not None:
            config = replace(config, sample_freq=float(sample_freq))
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_filter(config: FilterConfig) -> OrientationFilter:
    """
    Build a fresh filter at the identity orientation.

    Example:
        >>> filt = create_filter(FilterConfig(algorithm="madgwick"))
        >>> type(filt).__name__
        'MadgwickFilter'
    """
    if config.algorithm == "mahony":
        return MahonyFilter(config.kp, config.ki, config.sample_freq)
    return MadgwickFilter(config.beta, config.sample_freq)


def save_filter_config(config: FilterConfig, path: Union[str, Path]) -> Path:
    """Write a config as indented JSON and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.debug("Saved %s filter config to %s", config.algorithm, path)
    return path


def load_filter_config(path: Union[str, Path]) -> FilterConfig:
    """
    Read a config written by save_filter_config (or by hand).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is invalid or a value is out of range.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Filter config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid filter config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Filter config {path} must be a JSON object")
    return FilterConfig.from_dict(data)
