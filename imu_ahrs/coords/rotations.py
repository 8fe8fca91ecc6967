"""Quaternion algebra and rotation conversions.

This module provides the quaternion helpers used around the filters:
building test orientations, rotating reference vectors into the body
frame, and turning filter output into Euler angles for reporting.

Conventions:
- Quaternions: [qw, qx, qy, qz] where qw is the scalar part
- Hamilton product, q rotates body vectors into the Earth frame:
  v_earth = R(q) @ v_body
- Euler angles: [roll, pitch, yaw] in radians (ZYX/3-2-1 convention)
  - Roll: rotation about x-axis (φ)
  - Pitch: rotation about y-axis (θ)
  - Yaw: rotation about z-axis (ψ)
- Rotation matrices: 3x3 numpy arrays
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray


def _as_quat(q: ArrayLike) -> NDArray[np.float64]:
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Expected 4-element quaternion, got shape {q.shape}")
    return q


def quat_multiply(p: ArrayLike, q: ArrayLike) -> NDArray[np.float64]:
    """Hamilton product p ⊗ q.

    Args:
        p: Left quaternion [pw, px, py, pz].
        q: Right quaternion [qw, qx, qy, qz].

    Returns:
        Product quaternion, shape (4,).

    Example:
        >>> i = np.array([0.0, 1.0, 0.0, 0.0])
        >>> quat_multiply(i, i)  # i * i = -1
        array([-1.,  0.,  0.,  0.])
    """
    w1, x1, y1, z1 = _as_quat(p)
    w2, x2, y2, z2 = _as_quat(q)

    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=np.float64,
    )


def quat_conjugate(q: ArrayLike) -> NDArray[np.float64]:
    """Conjugate [qw, -qx, -qy, -qz]; the inverse rotation for unit q."""
    qw, qx, qy, qz = _as_quat(q)
    return np.array([qw, -qx, -qy, -qz], dtype=np.float64)


def quat_normalize(q: ArrayLike) -> NDArray[np.float64]:
    """Scale a quaternion to unit norm.

    Raises:
        ValueError: If q has zero norm.
    """
    q = _as_quat(q)
    norm = np.linalg.norm(q)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero quaternion")
    return q / norm


def quat_from_rotation_vector(rotvec: ArrayLike) -> NDArray[np.float64]:
    """Convert a rotation vector (axis * angle, radians) to a unit quaternion.

    Used to apply an exact rotation increment ω·Δt:
        q_{k+1} = q_k ⊗ quat_from_rotation_vector(ω_b * Δt)

    Args:
        rotvec: Rotation vector, shape (3,).

    Returns:
        Unit quaternion [qw, qx, qy, qz]. Identity for a zero vector.
    """
    rotvec = np.asarray(rotvec, dtype=np.float64)
    if rotvec.shape != (3,):
        raise ValueError(f"Expected 3-element rotation vector, got shape {rotvec.shape}")

    angle = np.linalg.norm(rotvec)
    if angle < 1e-12:
        # Small-angle limit: sin(θ/2)/θ -> 1/2
        q = np.array([1.0, 0.5 * rotvec[0], 0.5 * rotvec[1], 0.5 * rotvec[2]])
        return q / np.linalg.norm(q)

    half = 0.5 * angle
    axis = rotvec / angle
    return np.concatenate([[np.cos(half)], np.sin(half) * axis])


def quat_rotate(q: ArrayLike, v: ArrayLike) -> NDArray[np.float64]:
    """Rotate a body-frame vector into the Earth frame: R(q) @ v."""
    return quat_to_rotation_matrix(q) @ np.asarray(v, dtype=np.float64)


def quat_rotate_inverse(q: ArrayLike, v: ArrayLike) -> NDArray[np.float64]:
    """Rotate an Earth-frame vector into the body frame: R(q)^T @ v.

    This is how the filters predict the gravity and magnetic field
    directions a sensor should measure at orientation q.

    Example:
        >>> q = euler_to_quat(np.pi / 2, 0.0, 0.0)  # 90° roll
        >>> np.allclose(quat_rotate_inverse(q, [0.0, 0.0, 1.0]), [0.0, 1.0, 0.0])
        True
    """
    return quat_to_rotation_matrix(q).T @ np.asarray(v, dtype=np.float64)


def euler_to_quat(
    roll: float,
    pitch: float,
    yaw: float,
) -> NDArray[np.float64]:
    """
    Build the body-to-Earth quaternion for aerospace (yaw, pitch, roll) angles.

    The rotation is applied as yaw about Earth z, then pitch about the new
    y axis, then roll about the body x axis, i.e.
    q = q_z(yaw) (x) q_y(pitch) (x) q_x(roll).

    Example:
        >>> q = euler_to_quat(0.0, 0.0, np.pi / 2)
        >>> np.round(quat_rotate(q, [1.0, 0.0, 0.0]), 12) + 0.0
        array([0., 1., 0.])
    """
    half = 0.5 * np.array([roll, pitch, yaw], dtype=np.float64)
    c_r, c_p, c_y = np.cos(half)
    s_r, s_p, s_y = np.sin(half)

    return np.array(
        [
            c_y * c_p * c_r + s_y * s_p * s_r,
            c_y * c_p * s_r - s_y * s_p * c_r,
            c_y * s_p * c_r + s_y * c_p * s_r,
            s_y * c_p * c_r - c_y * s_p * s_r,
        ],
        dtype=np.float64,
    )


def quat_to_euler(q: ArrayLike) -> NDArray[np.float64]:
    """
    Recover [roll, pitch, yaw] (radians) from a body-to-Earth quaternion.

    Angles are read off the rotation matrix elements: roll from R[2,1] and
    R[2,2], pitch from -R[2,0], yaw from R[1,0] and R[0,0]. At pitch = ±90°
    only yaw - roll (or yaw + roll) is observable; -R[2,0] is clipped to
    [-1, 1] so rounding cannot push arcsin out of range.

    Raises:
        ValueError: If q does not have 4 elements.
    """
    w, x, y, z = _as_quat(q)

    r20 = 2.0 * (x * z - w * y)
    r21 = 2.0 * (y * z + w * x)
    r22 = 1.0 - 2.0 * (x * x + y * y)
    r10 = 2.0 * (x * y + w * z)
    r00 = 1.0 - 2.0 * (y * y + z * z)

    return np.array(
        [
            np.arctan2(r21, r22),
            np.arcsin(np.clip(-r20, -1.0, 1.0)),
            np.arctan2(r10, r00),
        ],
        dtype=np.float64,
    )


def quats_to_euler(quats: ArrayLike) -> NDArray[np.float64]:
    """Vectorized quat_to_euler for an (N, 4) array; returns (N, 3)."""
    quats = np.asarray(quats, dtype=np.float64)
    if quats.ndim != 2 or quats.shape[1] != 4:
        raise ValueError(f"Expected (N, 4) quaternion array, got shape {quats.shape}")
    return np.array([quat_to_euler(q) for q in quats]).reshape(-1, 3)


def quat_to_rotation_matrix(q: ArrayLike) -> NDArray[np.float64]:
    """Convert quaternion to rotation matrix.

    Args:
        q: Unit quaternion as numpy array [qw, qx, qy, qz].

    Returns:
        3x3 rotation matrix R such that v_earth = R @ v_body.

    Raises:
        ValueError: If q is not a 4-element array.
    """
    qw, qx, qy, qz = _as_quat(q)

    R = np.array(
        [
            [
                1.0 - 2.0 * (qy * qy + qz * qz),
                2.0 * (qx * qy - qw * qz),
                2.0 * (qx * qz + qw * qy),
            ],
            [
                2.0 * (qx * qy + qw * qz),
                1.0 - 2.0 * (qx * qx + qz * qz),
                2.0 * (qy * qz - qw * qx),
            ],
            [
                2.0 * (qx * qz - qw * qy),
                2.0 * (qy * qz + qw * qx),
                1.0 - 2.0 * (qx * qx + qy * qy),
            ],
        ],
        dtype=np.float64,
    )

    return R


def rotation_matrix_to_quat(R: ArrayLike) -> NDArray[np.float64]:
    """Convert a rotation matrix to a unit quaternion (Shepperd's method).

    The branch is picked from the largest of trace(R) and the diagonal
    elements so the square root argument stays away from zero. The result
    is returned with qw >= 0.

    Args:
        R: 3x3 rotation matrix with v_earth = R @ v_body.

    Returns:
        Unit quaternion [qw, qx, qy, qz].

    Raises:
        ValueError: If R is not 3x3.

    Example:
        >>> rotation_matrix_to_quat(np.eye(3))
        array([1., 0., 0., 0.])
    """
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    trace = np.trace(R)
    if trace > 0:
        s = 2.0 * np.sqrt(1.0 + trace)
        q = [0.25 * s, (R[2, 1] - R[1, 2]) / s, (R[0, 2] - R[2, 0]) / s, (R[1, 0] - R[0, 1]) / s]
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = [(R[2, 1] - R[1, 2]) / s, 0.25 * s, (R[0, 1] + R[1, 0]) / s, (R[0, 2] + R[2, 0]) / s]
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = [(R[0, 2] - R[2, 0]) / s, (R[0, 1] + R[1, 0]) / s, 0.25 * s, (R[1, 2] + R[2, 1]) / s]
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = [(R[1, 0] - R[0, 1]) / s, (R[0, 2] + R[2, 0]) / s, (R[1, 2] + R[2, 1]) / s, 0.25 * s]

    q = quat_normalize(q)
    return -q if q[0] < 0 else q
