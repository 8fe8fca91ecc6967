"""
Evaluation, timing and visualization module.

Modules:
    metrics: Quaternion distances and error statistics
    timing: Per-update cost of a filter
    plots: Quaternion, Euler angle and disagreement plots
"""

from .metrics import (
    compute_angle_errors,
    compute_error_stats,
    compute_quat_differences,
    mean_quat_distance,
    quat_angle_error,
    quat_distance,
)
from .plots import (
    plot_euler_angles,
    plot_quat_difference,
    plot_quaternion_components,
    save_figure,
)
from .timing import BenchmarkResult, benchmark_filter

__all__ = [
    # Metrics
    "quat_distance",
    "quat_angle_error",
    "compute_quat_differences",
    "compute_angle_errors",
    "mean_quat_distance",
    "compute_error_stats",
    # Timing
    "BenchmarkResult",
    "benchmark_filter",
    # Plots
    "plot_quaternion_components",
    "plot_euler_angles",
    "plot_quat_difference",
    "save_figure",
]
