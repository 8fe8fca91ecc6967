"""Quaternion algebra and rotation representations.

Conventions: scalar-first quaternions [qw, qx, qy, qz], body-to-Earth
rotation, ZYX Euler angles [roll, pitch, yaw] in radians.
"""

from imu_ahrs.coords.rotations import (
    euler_to_quat,
    quat_conjugate,
    quat_from_rotation_vector,
    quat_multiply,
    quat_normalize,
    quat_rotate,
    quat_rotate_inverse,
    quat_to_euler,
    quat_to_rotation_matrix,
    quats_to_euler,
    rotation_matrix_to_quat,
)

__all__ = [
    # Algebra
    "quat_multiply",
    "quat_conjugate",
    "quat_normalize",
    "quat_from_rotation_vector",
    # Vector rotation
    "quat_rotate",
    "quat_rotate_inverse",
    # Conversions
    "euler_to_quat",
    "quat_to_euler",
    "quats_to_euler",
    "quat_to_rotation_matrix",
    "rotation_matrix_to_quat",
]
