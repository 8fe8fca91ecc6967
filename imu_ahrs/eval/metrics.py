"""
Error metrics for orientation estimates.

This module provides scalar distances between quaternions and summary
statistics over whole runs, used to compare filters against each other
and against ground truth.

Two distances are provided:
    - quat_distance: ||q1 - q2||, the Euclidean magnitude of the
      component-wise difference. Cheap and sign-sensitive (q and -q are
      the same rotation but 2 apart). Used to compare filters that start
      from the same state and therefore share a sign branch.
    - quat_angle_error: rotation angle of q1^-1 ⊗ q2 in radians,
      sign-invariant. Use it against ground truth.
"""

from typing import Dict

import numpy as np


def quat_distance(q1: np.ndarray, q2: np.ndarray) -> float:
    """
    Magnitude of the difference between two quaternions.

    Args:
        q1: Quaternion, shape (4,).
        q2: Quaternion, shape (4,).

    Returns:
        ||q1 - q2||.

    Raises:
        ValueError: If either input is not a 4-element array.

    Example:
        >>> quat_distance(np.array([1.0, 0, 0, 0]), np.array([0.0, 1, 0, 0]))
        1.4142135623730951
    """
    q1 = np.asarray(q1, dtype=np.float64)
    q2 = np.asarray(q2, dtype=np.float64)
    if q1.shape != (4,) or q2.shape != (4,):
        raise ValueError(
            f"Expected 4-element quaternions, got {q1.shape} and {q2.shape}"
        )
    return float(np.linalg.norm(q1 - q2))


def quat_angle_error(q1: np.ndarray, q2: np.ndarray) -> float:
    """
    Angle in radians of the rotation taking q1 to q2.

    Sign-invariant: quat_angle_error(q, -q) == 0.

    Args:
        q1: Unit quaternion, shape (4,).
        q2: Unit quaternion, shape (4,).

    Returns:
        Angle in [0, π].
    """
    q1 = np.asarray(q1, dtype=np.float64)
    q2 = np.asarray(q2, dtype=np.float64)
    if q1.shape != (4,) or q2.shape != (4,):
        raise ValueError(
            f"Expected 4-element quaternions, got {q1.shape} and {q2.shape}"
        )
    dot = abs(float(np.dot(q1, q2)))
    return float(2.0 * np.arccos(min(dot, 1.0)))


def compute_quat_differences(quats_a: np.ndarray, quats_b: np.ndarray) -> np.ndarray:
    """
    Per-sample quaternion distance between two runs.

    Args:
        quats_a: Quaternions, shape (N, 4).
        quats_b: Quaternions, shape (N, 4).

    Returns:
        distances: ||a_i - b_i|| for each sample, shape (N,).

    Raises:
        ValueError: If inputs have incompatible shapes.
    """
    quats_a = np.asarray(quats_a, dtype=np.float64)
    quats_b = np.asarray(quats_b, dtype=np.float64)

    if quats_a.shape != quats_b.shape:
        raise ValueError(
            f"Shape mismatch: {quats_a.shape} vs {quats_b.shape}"
        )
    if quats_a.ndim != 2 or quats_a.shape[1] != 4:
        raise ValueError(f"Expected (N, 4) arrays, got {quats_a.shape}")

    return np.linalg.norm(quats_a - quats_b, axis=1)


def compute_angle_errors(quats_a: np.ndarray, quats_b: np.ndarray) -> np.ndarray:
    """Per-sample sign-invariant rotation angle between two runs, shape (N,)."""
    quats_a = np.asarray(quats_a, dtype=np.float64)
    quats_b = np.asarray(quats_b, dtype=np.float64)

    if quats_a.shape != quats_b.shape:
        raise ValueError(
            f"Shape mismatch: {quats_a.shape} vs {quats_b.shape}"
        )

    dots = np.abs(np.sum(quats_a * quats_b, axis=1))
    return 2.0 * np.arccos(np.clip(dots, 0.0, 1.0))


def mean_quat_distance(quats_a: np.ndarray, quats_b: np.ndarray) -> float:
    """
    Mean per-sample quaternion distance.

    This is the acceptance metric for filter agreement: the sum of
    ||a_i - b_i|| over all samples divided by the number of samples.
    """
    distances = compute_quat_differences(quats_a, quats_b)
    if distances.size == 0:
        raise ValueError("Cannot average over zero samples")
    return float(np.mean(distances))


def compute_error_stats(errors: np.ndarray) -> Dict[str, float]:
    """
    Compute error statistics.

    Args:
        errors: Scalar errors, shape (N,).

    Returns:
        stats: Dictionary with keys:
               - 'mean': Mean error
               - 'median': Median error
               - 'std': Standard deviation
               - 'rmse': Root mean square error
               - 'p95': 95th percentile
               - 'max': Maximum error
    """
    errors = np.abs(np.asarray(errors, dtype=np.float64))
    if errors.size == 0:
        raise ValueError("Cannot compute statistics over zero samples")

    stats = {
        "mean": float(np.mean(errors)),
        "median": float(np.median(errors)),
        "std": float(np.std(errors)),
        "rmse": float(np.sqrt(np.mean(errors**2))),
        "p95": float(np.percentile(errors, 95)),
        "max": float(np.max(errors)),
    }

    return stats
