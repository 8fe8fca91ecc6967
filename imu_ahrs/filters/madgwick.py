"""
Gradient-descent complementary orientation filter (Madgwick).

The quaternion rate from the gyroscope, q_dot = 0.5 * q (x) (0, g), is
corrected by one normalized gradient-descent step on the objective

    f(q, a) = C(q)^T * g_E - a_hat                       (6-axis)
    f(q, a, m) = [C(q)^T * g_E - a_hat;
                  C(q)^T * b_E - m_hat]                   (9-axis)

where g_E = [0, 0, 1] is the Earth "up" direction and b_E = [bx, 0, bz]
is the Earth magnetic field reconstructed from the current estimate. The
gradient J^T f is evaluated in closed form, normalized to unit length and
scaled by beta:

    q_dot <- q_dot - beta * (J^T f) / ||J^T f||
    q     <- q + q_dot / sample_freq
    q     <- q / ||q||

One step per sample is enough at the high sample rates these filters run
at, since the orientation changes little between epochs.

Correction is skipped (pure gyro integration) when the accelerometer, or
on the 9-axis path the magnetometer, reads exactly zero, and when the
gradient norm is below GRADIENT_NORM_FLOOR (measurement already matches
the estimate up to rounding).

References:
    Madgwick, Harrison, Vaidyanathan, "Estimation of IMU and MARG
    orientation using a gradient descent algorithm", IEEE ICORR, 2011.
"""

from typing import Optional

import numpy as np

from imu_ahrs.filters.types import OrientationState
from imu_ahrs.utils.numeric import inv_sqrt

MADGWICK_DEFAULT_BETA = 0.1

# Gradient norms below this are rounding noise of a measurement that
# already matches the estimate
GRADIENT_NORM_FLOOR = 1e-12


class MadgwickFilter:
    """
    Madgwick gradient-descent complementary filter.

    Attributes:
        beta: Gradient step gain. Roughly the gyroscope measurement error
              (rad/s) the filter is expected to cancel.

    Example:
        >>> filt = MadgwickFilter(beta=0.1, sample_freq=100.0)
        >>> filt.update_9d(0.0, 0.0, 0.0, 0.0, 0.0, 9.81, 0.4, 0.0, -0.9)
        array([1., 0., 0., 0.])
    """

    def __init__(self, beta: float, sample_freq: float):
        self._beta = beta
        self._state = OrientationState(sample_freq=sample_freq)

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def sample_freq(self) -> float:
        return self._state.sample_freq

    @property
    def quaternion(self) -> np.ndarray:
        """Current orientation (copy), scalar-first [w, x, y, z]."""
        return self._state.copy()

    def reset(self, q: Optional[np.ndarray] = None) -> None:
        """Return to the identity orientation, or to q (normalized) if given."""
        self._state.reset(q)

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
        q0, q1, q2, q3 = self._state.q

        # Rate of change of quaternion from gyroscope
        qdot0 = 0.5 * (-q1 * gx - q2 * gy - q3 * gz)
        qdot1 = 0.5 * (q0 * gx + q2 * gz - q3 * gy)
        qdot2 = 0.5 * (q0 * gy - q1 * gz + q3 * gx)
        qdot3 = 0.5 * (q0 * gz + q1 * gy - q2 * gx)

        accel_valid = not (ax == 0.0 and ay == 0.0 and az == 0.0)
        mag_valid = not (mx == 0.0 and my == 0.0 and mz == 0.0)
        if accel_valid and mag_valid:
            recip_norm = inv_sqrt(ax * ax + ay * ay + az * az)
            ax *= recip_norm
            ay *= recip_norm
            az *= recip_norm

            recip_norm = inv_sqrt(mx * mx + my * my + mz * mz)
            mx *= recip_norm
            my *= recip_norm
            mz *= recip_norm

            _2q0 = 2.0 * q0
            _2q1 = 2.0 * q1
            _2q2 = 2.0 * q2
            _2q3 = 2.0 * q3
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
            _2bx = 2.0 * np.sqrt(hx * hx + hy * hy)
            _2bz = 4.0 * (mx * (q1q3 - q0q2) + my * (q2q3 + q0q1) + mz * (0.5 - q1q1 - q2q2))
            _4bx = 2.0 * _2bx
            _4bz = 2.0 * _2bz

            # Objective function: gravity rows then magnetic field rows
            fa0 = 2.0 * (q1q3 - q0q2) - ax
            fa1 = 2.0 * (q0q1 + q2q3) - ay
            fa2 = 2.0 * (0.5 - q1q1 - q2q2) - az
            fm0 = _2bx * (0.5 - q2q2 - q3q3) + _2bz * (q1q3 - q0q2) - mx
            fm1 = _2bx * (q1q2 - q0q3) + _2bz * (q0q1 + q2q3) - my
            fm2 = _2bx * (q0q2 + q1q3) + _2bz * (0.5 - q1q1 - q2q2) - mz

            # Gradient J^T f
            s0 = (
                -_2q2 * fa0
                + _2q1 * fa1
                - _2bz * q2 * fm0
                + (-_2bx * q3 + _2bz * q1) * fm1
                + _2bx * q2 * fm2
            )
            s1 = (
                _2q3 * fa0
                + _2q0 * fa1
                - 4.0 * q1 * fa2
                + _2bz * q3 * fm0
                + (_2bx * q2 + _2bz * q0) * fm1
                + (_2bx * q3 - _4bz * q1) * fm2
            )
            s2 = (
                -_2q0 * fa0
                + _2q3 * fa1
                - 4.0 * q2 * fa2
                + (-_4bx * q2 - _2bz * q0) * fm0
                + (_2bx * q1 + _2bz * q3) * fm1
                + (_2bx * q0 - _4bz * q2) * fm2
            )
            s3 = (
                _2q1 * fa0
                + _2q2 * fa1
                + (-_4bx * q3 + _2bz * q1) * fm0
                + (-_2bx * q0 + _2bz * q2) * fm1
                + _2bx * q1 * fm2
            )

            qdot0, qdot1, qdot2, qdot3 = self._apply_step(
                qdot0, qdot1, qdot2, qdot3, s0, s1, s2, s3
            )

        return self._integrate(q0, q1, q2, q3, qdot0, qdot1, qdot2, qdot3)

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

        qdot0 = 0.5 * (-q1 * gx - q2 * gy - q3 * gz)
        qdot1 = 0.5 * (q0 * gx + q2 * gz - q3 * gy)
        qdot2 = 0.5 * (q0 * gy - q1 * gz + q3 * gx)
        qdot3 = 0.5 * (q0 * gz + q1 * gy - q2 * gx)

        if not (ax == 0.0 and ay == 0.0 and az == 0.0):
            recip_norm = inv_sqrt(ax * ax + ay * ay + az * az)
            ax *= recip_norm
            ay *= recip_norm
            az *= recip_norm

            _2q0 = 2.0 * q0
            _2q1 = 2.0 * q1
            _2q2 = 2.0 * q2
            _2q3 = 2.0 * q3
            _4q0 = 4.0 * q0
            _4q1 = 4.0 * q1
            _4q2 = 4.0 * q2
            _8q1 = 8.0 * q1
            _8q2 = 8.0 * q2
            q0q0 = q0 * q0
            q1q1 = q1 * q1
            q2q2 = q2 * q2
            q3q3 = q3 * q3

            # Gradient J^T f, simplified using ||q|| = 1
            s0 = _4q0 * q2q2 + _2q2 * ax + _4q0 * q1q1 - _2q1 * ay
            s1 = (
                _4q1 * q3q3 - _2q3 * ax + 4.0 * q0q0 * q1 - _2q0 * ay
                - _4q1 + _8q1 * q1q1 + _8q1 * q2q2 + _4q1 * az
            )
            s2 = (
                4.0 * q0q0 * q2 + _2q0 * ax + _4q2 * q3q3 - _2q3 * ay
                - _4q2 + _8q2 * q1q1 + _8q2 * q2q2 + _4q2 * az
            )
            s3 = 4.0 * q1q1 * q3 - _2q1 * ax + 4.0 * q2q2 * q3 - _2q2 * ay

            qdot0, qdot1, qdot2, qdot3 = self._apply_step(
                qdot0, qdot1, qdot2, qdot3, s0, s1, s2, s3
            )

        return self._integrate(q0, q1, q2, q3, qdot0, qdot1, qdot2, qdot3)

    def _apply_step(self, qdot0, qdot1, qdot2, qdot3, s0, s1, s2, s3):
        """Subtract the normalized gradient scaled by beta from q_dot."""
        norm_sq = s0 * s0 + s1 * s1 + s2 * s2 + s3 * s3
        if norm_sq < GRADIENT_NORM_FLOOR * GRADIENT_NORM_FLOOR:
            return qdot0, qdot1, qdot2, qdot3

        recip_norm = inv_sqrt(norm_sq)
        beta = self._beta
        return (
            qdot0 - beta * s0 * recip_norm,
            qdot1 - beta * s1 * recip_norm,
            qdot2 - beta * s2 * recip_norm,
            qdot3 - beta * s3 * recip_norm,
        )

    def _integrate(self, q0, q1, q2, q3, qdot0, qdot1, qdot2, qdot3) -> np.ndarray:
        dt = 1.0 / np.float64(self._state.sample_freq)
        q0 += qdot0 * dt
        q1 += qdot1 * dt
        q2 += qdot2 * dt
        q3 += qdot3 * dt

        recip_norm = inv_sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)
        self._state.set(
            q0 * recip_norm, q1 * recip_norm, q2 * recip_norm, q3 * recip_norm
        )
        return self._state.copy()
