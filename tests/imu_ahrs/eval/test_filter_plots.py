"""Smoke tests for orientation plots (non-interactive backend)."""

import tempfile

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from imu_ahrs.coords import euler_to_quat  # noqa: E402
from imu_ahrs.eval import (  # noqa: E402
    plot_euler_angles,
    plot_quat_difference,
    plot_quaternion_components,
    save_figure,
)


def _quats(n: int, scale: float) -> np.ndarray:
    return np.array([euler_to_quat(scale * k, 0.0, -scale * k) for k in range(n)])


class TestPlots:
    """Test cases for the plotting helpers."""

    def setup_method(self):
        self.t = np.arange(50) * 0.01
        self.runs = {"mahony": _quats(50, 0.01), "madgwick": _quats(50, 0.011)}

    def teardown_method(self):
        plt.close("all")

    def test_quaternion_components(self):
        fig = plot_quaternion_components(self.t, self.runs)

        assert len(fig.axes) == 4
        assert len(fig.axes[0].get_lines()) == 2

    def test_euler_angles(self):
        fig = plot_euler_angles(self.t, self.runs)

        assert len(fig.axes) == 3

    def test_quat_difference_with_bound(self):
        distances = np.linalg.norm(self.runs["mahony"] - self.runs["madgwick"], axis=1)
        fig = plot_quat_difference(self.t, distances, bound=0.2)

        # distance, running mean, bound
        assert len(fig.axes[0].get_lines()) == 3

    def test_save_figure(self):
        fig = plot_quat_difference(self.t, np.zeros(50))
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = save_figure(fig, tmpdir, "diff", formats=("png",))

            assert len(paths) == 1
            assert paths[0].exists()
            assert paths[0].name == "diff.png"
