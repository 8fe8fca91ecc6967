"""
Scalar numeric helpers shared by the orientation filters.

Both filters normalize vectors and quaternions by multiplying with a
reciprocal square root. The value is computed exactly (real square root
followed by a division) rather than with the bit-level approximation that
is often paired with these algorithms; filter convergence and the test
tolerances depend on the exact value.
"""

import numpy as np


def inv_sqrt(x: float) -> np.float64:
    """
    Compute the reciprocal square root 1/sqrt(x).

    Evaluated in IEEE float64 arithmetic so degenerate inputs never raise:
    x = 0 returns +inf and a negative x returns nan. Callers that can feed a
    zero vector must check for it before normalizing.

    Args:
        x: Squared norm of a vector or quaternion.

    Returns:
        1/sqrt(x) as a NumPy float64 scalar.

    Example:
        >>> float(inv_sqrt(4.0))
        0.5
        >>> float(inv_sqrt(0.0))
        inf
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.float64(1.0) / np.sqrt(np.float64(x))
