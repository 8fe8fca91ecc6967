"""
Capability contract shared by all orientation filters.

Both filters expose exactly two update operations and are interchangeable
by calling code. The contract is structural: any object with these two
methods is an OrientationFilter, there is no common base class.
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class OrientationFilter(Protocol):
    """Interface for a 6-axis / 9-axis orientation filter."""

    def update_6d(
        self,
        gx: float,
        gy: float,
        gz: float,
        ax: float,
        ay: float,
        az: float,
    ) -> np.ndarray:
        """
        Fuse one gyroscope + accelerometer epoch.

        Args:
            gx, gy, gz: Angular rate in body frame. Units: rad/s.
            ax, ay, az: Accelerometer reading. Any consistent unit,
                        only the direction is used.

        Returns:
            Updated orientation, shape (4,), scalar-first [w, x, y, z].
        """
        ...

    def update_9d(
        self,
        gx: float,
        gy: float,
        gz: float,
        ax: float,
        ay: float,
        az: float,
        mx: float,
        my: float,
        mz: float,
    ) -> np.ndarray:
        """
        Fuse one gyroscope + accelerometer + magnetometer epoch.

        Args:
            gx, gy, gz: Angular rate in body frame. Units: rad/s.
            ax, ay, az: Accelerometer reading, direction only.
            mx, my, mz: Magnetometer reading, direction only.

        Returns:
            Updated orientation, shape (4,), scalar-first [w, x, y, z].
        """
        ...
