"""Unit tests for the reciprocal square root used by the filters."""

import unittest

import numpy as np

from imu_ahrs.utils import inv_sqrt


class TestInvSqrt(unittest.TestCase):
    """Test cases for inv_sqrt."""

    def test_exact_squares(self) -> None:
        """Test perfect squares give exact reciprocals."""
        self.assertEqual(inv_sqrt(4.0), 0.5)
        self.assertEqual(inv_sqrt(1.0), 1.0)
        self.assertEqual(inv_sqrt(0.25), 2.0)

    def test_matches_numpy(self) -> None:
        """Test agreement with 1/sqrt(x) across magnitudes."""
        for x in [1e-12, 3.0, 96.2361, 1e8]:
            self.assertAlmostEqual(inv_sqrt(x), 1.0 / np.sqrt(x), delta=1e-15 / np.sqrt(x))

    def test_returns_float64(self) -> None:
        """Test the result type is np.float64 even for int input."""
        self.assertIsInstance(inv_sqrt(9), np.float64)

    def test_zero_gives_inf(self) -> None:
        """Test zero input yields +inf without raising or warning."""
        with np.errstate(all="raise"):
            result = inv_sqrt(0.0)
        self.assertTrue(np.isposinf(result))

    def test_negative_gives_nan(self) -> None:
        """Test negative input yields nan without raising."""
        with np.errstate(all="raise"):
            result = inv_sqrt(-1.0)
        self.assertTrue(np.isnan(result))


if __name__ == "__main__":
    unittest.main()
