"""
Orientation state shared by the complementary filters.

Quaternion Convention:
    - Scalar-first: q = [q0, q1, q2, q3] where q0 is scalar, [q1,q2,q3] is vector
    - Unit quaternion: ||q|| = 1
    - q rotates body-frame vectors into the Earth frame: v_E = C(q) @ v_B
    - Identity quaternion: [1, 0, 0, 0] (body aligned with Earth frame)

Earth frame: z points up, so a stationary accelerometer reads +g along the
body axis that is aligned with Earth z. The horizontal magnetic field
component is referenced to Earth x.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

IDENTITY_QUATERNION = (1.0, 0.0, 0.0, 0.0)


def _identity() -> np.ndarray:
    return np.array(IDENTITY_QUATERNION, dtype=np.float64)


@dataclass
class OrientationState:
    """
    Unit quaternion plus the sample frequency it is integrated at.

    Owned by exactly one filter instance and mutated in place on every
    update. The sample frequency is fixed when the owning filter is built.

    Attributes:
        sample_freq: Sensor sample frequency in Hz. Integration step is
                     1 / sample_freq. Not validated here; use
                     imu_ahrs.config.FilterConfig for checked construction.
        q: Orientation quaternion, shape (4,), scalar-first [w, x, y, z].

    Notes:
        - This is a MUTABLE dataclass (frozen=False) for in-place updates.
        - Readers should use copy() so later updates do not alias results.

    Example:
        >>> state = OrientationState(sample_freq=100.0)
        >>> state.copy()
        array([1., 0., 0., 0.])
    """

    sample_freq: float
    q: np.ndarray = field(default_factory=_identity)

    def __post_init__(self) -> None:
        self.q = np.asarray(self.q, dtype=np.float64)
        if self.q.shape != (4,):
            raise ValueError(
                f"OrientationState.q must have shape (4,), got {self.q.shape}"
            )

    def set(self, q0: float, q1: float, q2: float, q3: float) -> None:
        """Overwrite the quaternion components in place."""
        self.q[0] = q0
        self.q[1] = q1
        self.q[2] = q2
        self.q[3] = q3

    def copy(self) -> np.ndarray:
        """Return a copy of the quaternion as a (4,) float64 array."""
        return self.q.copy()

    def reset(self, q: Optional[np.ndarray] = None) -> None:
        """Restore the identity orientation, or set q (normalized) if given."""
        if q is None:
            self.q[:] = IDENTITY_QUATERNION
            return
        q = np.asarray(q, dtype=np.float64)
        if q.shape != (4,):
            raise ValueError(f"Initial quaternion must have shape (4,), got {q.shape}")
        norm = np.linalg.norm(q)
        if not (np.isfinite(norm) and norm > 0.0):
            raise ValueError(f"Initial quaternion must be finite and non-zero, got {q}")
        self.q[:] = q / norm

    @property
    def norm(self) -> float:
        return float(np.sqrt(np.dot(self.q, self.q)))
