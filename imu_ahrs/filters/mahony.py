"""
Proportional-integral complementary orientation filter (Mahony).

The filter integrates gyroscope rates into the orientation quaternion and
steers the integration with a PI controller driven by the error between
measured and predicted reference directions:

    - Gravity: the accelerometer direction versus the "up" axis predicted
      by the current quaternion.
    - Magnetic field (9-axis only): the magnetometer direction versus the
      Earth field reconstructed in the body frame.

The error is the cross product of measured and estimated directions. The
proportional term 2Kp * e is added to the gyro rate every epoch; the
integral term accumulates 2Ki * e * dt and is added as well, so a constant
gyro bias is absorbed over time.

Per-epoch algorithm:
    1. Skip correction entirely if the accelerometer reads (0, 0, 0).
    2. Normalize accel (and mag) with the reciprocal square root.
    3. Predict half gravity direction v/2 (and field direction w/2).
    4. e/2 = a x v/2 (+ m x w/2).
    5. Integral feedback if Ki > 0, otherwise clear the accumulator.
       Proportional feedback always.
    6. q <- q + 0.5 * dt * q (x) (0, g).
    7. Normalize q.

No input is validated. A zero magnetometer reading on the 9-axis path is
not guarded and propagates nan into the state.

References:
    Mahony, Hamel, Pflimlin, "Nonlinear Complementary Filters on the
    Special Orthogonal Group", IEEE TAC 53(5), 2008.
"""

from typing import Optional, Tuple

import numpy as np

from imu_ahrs.filters.types import OrientationState
from imu_ahrs.utils.numeric import inv_sqrt

MAHONY_DEFAULT_KP = 0.2
MAHONY_DEFAULT_KI = 0.1


class MahonyFilter:
    """
    Mahony PI complementary filter.

    Gains are stored doubled (two_kp = 2 * kp, two_ki = 2 * ki) because the
    error terms are computed as half vectors.

    Attributes:
        two_kp: Proportional gain times two (read-only).
        two_ki: Integral gain times two (read-only). A value <= 0 disables
                integral action and keeps the accumulator at zero.

    Example:
        >>> filt = MahonyFilter.with_defaults(sample_freq=100.0)
        >>> q = filt.update_6d(0.0, 0.0, 0.0, 0.0, 0.0, 9.81)
        >>> q
        array([1., 0., 0., 0.])
    """

    def __init__(self, kp: float, ki: float, sample_freq: float):
        """
        Initialize the filter at the identity orientation.

        Args:
            kp: Proportional gain.
            ki: Integral gain. Zero disables integral feedback.
            sample_freq: Sensor sample frequency in Hz.
        """
        self._two_kp = 2.0 * kp
        self._two_ki = 2.0 * ki
        self._state = OrientationState(sample_freq=sample_freq)
        self._integral_fb = [0.0, 0.0, 0.0]

    @classmethod
    def with_defaults(cls, sample_freq: float) -> "MahonyFilter":
        """Create a filter with kp = 0.2 and ki = 0.1."""
        return cls(MAHONY_DEFAULT_KP, MAHONY_DEFAULT_KI, sample_freq)

    @property
    def two_kp(self) -> float:
        return self._two_kp

    @property
    def two_ki(self) -> float:
        return self._two_ki

    @property
    def sample_freq(self) -> float:
        return self._state.sample_freq

    @property
    def quaternion(self) -> np.ndarray:
        """Current orientation (copy), scalar-first [w, x, y, z]."""
        return self._state.copy()

    @property
    def integral_feedback(self) -> np.ndarray:
        """Current integral error accumulator (copy), shape (3,)."""
        return np.array(self._integral_fb, dtype=np.float64)

    def reset(self, q: Optional[np.ndarray] = None) -> None:
        """
        Clear the accumulator and return to the identity orientation, or to
        q (normalized) if given.
        """
        self._state.reset(q)
        self._integral_fb = [0.0, 0.0, 0.0]

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

        The accelerometer zero check gates the whole correction branch,
        magnetic correction included.

        Args:
            gx, gy, gz: Angular rate in body frame. Units: rad/s.
            ax, ay, az: Accelerometer reading, direction only.
            mx, my, mz: Magnetometer reading, direction only. Must not be
                        the zero vector when the accelerometer is valid.

        Returns:
            Updated orientation, shape (4,), scalar-first [w, x, y, z].
        """
        q0, q1, q2, q3 = self._state.q

        # Compute feedback only if accelerometer measurement valid
        if not (ax == 0.0 and ay == 0.0 and az == 0.0):
            recip_norm = inv_sqrt(ax * ax + ay * ay + az * az)
            ax *= recip_norm
            ay *= recip_norm
            az *= recip_norm

            recip_norm = inv_sqrt(mx * mx + my * my + mz * mz)
            mx *= recip_norm
            my *= recip_norm
            mz *= recip_norm

            q0q0 = q0 * q0
            q0q1 = q0 * q1
            q0q2 = q0 * q2
            q0q3 = q0 * q3
            q1q1 = q1 * q1
            q1q2 = q1 * q2
            q1q3 = q1 * q3
            q2q2 = q2 * q2
            q2q3 = q2 * q3
            q3q3 = q3 * q3

            # Reference direction of Earth's magnetic field
            hx = 2.0 * (mx * (0.5 - q2q2 - q3q3) + my * (q1q2 - q0q3) + mz * (q1q3 + q0q2))
            hy = 2.0 * (mx * (q1q2 + q0q3) + my * (0.5 - q1q1 - q3q3) + mz * (q2q3 - q0q1))
            bx = np.sqrt(hx * hx + hy * hy)
            bz = 2.0 * (mx * (q1q3 - q0q2) + my * (q2q3 + q0q1) + mz * (0.5 - q1q1 - q2q2))

            # Estimated direction of gravity and magnetic field
            halfvx = q1q3 - q0q2
            halfvy = q0q1 + q2q3
            halfvz = q0q0 - 0.5 + q3q3
            halfwx = bx * (0.5 - q2q2 - q3q3) + bz * (q1q3 - q0q2)
            halfwy = bx * (q1q2 - q0q3) + bz * (q0q1 + q2q3)
            halfwz = bx * (q0q2 + q1q3) + bz * (0.5 - q1q1 - q2q2)

            halfex = (ay * halfvz - az * halfvy) + (my * halfwz - mz * halfwy)
            halfey = (az * halfvx - ax * halfvz) + (mz * halfwx - mx * halfwz)
            halfez = (ax * halfvy - ay * halfvx) + (mx * halfwy - my * halfwx)

            gx, gy, gz = self._apply_feedback(gx, gy, gz, halfex, halfey, halfez)

        return self._integrate(q0, q1, q2, q3, gx, gy, gz)

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
            ax, ay, az: Accelerometer reading, direction only. A zero vector
                        skips correction and integrates the raw rates.

        Returns:
            Updated orientation, shape (4,), scalar-first [w, x, y, z].
        """
        q0, q1, q2, q3 = self._state.q

        if not (ax == 0.0 and ay == 0.0 and az == 0.0):
            recip_norm = inv_sqrt(ax * ax + ay * ay + az * az)
            ax *= recip_norm
            ay *= recip_norm
            az *= recip_norm

            # Estimated direction of gravity
            halfvx = q1 * q3 - q0 * q2
            halfvy = q0 * q1 + q2 * q3
            halfvz = q0 * q0 - 0.5 + q3 * q3

            halfex = ay * halfvz - az * halfvy
            halfey = az * halfvx - ax * halfvz
            halfez = ax * halfvy - ay * halfvx

            gx, gy, gz = self._apply_feedback(gx, gy, gz, halfex, halfey, halfez)

        return self._integrate(q0, q1, q2, q3, gx, gy, gz)

    def _apply_feedback(
        self,
        gx: float,
        gy: float,
        gz: float,
        halfex: float,
        halfey: float,
        halfez: float,
    ) -> Tuple[float, float, float]:
        """Add integral (if enabled) and proportional feedback to the rates."""
        if self._two_ki > 0.0:
            dt = 1.0 / np.float64(self._state.sample_freq)
            fb = self._integral_fb
            fb[0] += self._two_ki * halfex * dt
            fb[1] += self._two_ki * halfey * dt
            fb[2] += self._two_ki * halfez * dt
            gx += fb[0]
            gy += fb[1]
            gz += fb[2]
        else:
            # prevent integral windup
            self._integral_fb = [0.0, 0.0, 0.0]

        gx += self._two_kp * halfex
        gy += self._two_kp * halfey
        gz += self._two_kp * halfez
        return gx, gy, gz

    def _integrate(
        self,
        q0: float,
        q1: float,
        q2: float,
        q3: float,
        gx: float,
        gy: float,
        gz: float,
    ) -> np.ndarray:
        """First-order quaternion integration followed by normalization."""
        half_dt = 0.5 * (1.0 / np.float64(self._state.sample_freq))
        gx *= half_dt
        gy *= half_dt
        gz *= half_dt
        qa = q0
        qb = q1
        qc = q2
        q0 += -qb * gx - qc * gy - q3 * gz
        q1 += qa * gx + qc * gz - q3 * gy
        q2 += qa * gy - qb * gz + q3 * gx
        q3 += qa * gz + qb * gy - qc * gx

        recip_norm = inv_sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)
        self._state.set(
            q0 * recip_norm, q1 * recip_norm, q2 * recip_norm, q3 * recip_norm
        )
        return self._state.copy()
