"""
Visualization utilities for orientation filter output.

All functions return matplotlib Figure objects for flexible display/saving.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np

from imu_ahrs.coords.rotations import quats_to_euler

COLORS = ["blue", "red", "green", "orange", "purple"]


def plot_quaternion_components(
    t: np.ndarray,
    quats_dict: Dict[str, np.ndarray],
    title: str = "Quaternion Components",
) -> plt.Figure:
    """
    Plot w, x, y, z components over time, one subplot per component.

    Args:
        t: Timestamps in seconds, shape (N,)
        quats_dict: Dictionary of quaternion arrays {name: (N, 4)}
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, axes_arr = plt.subplots(4, 1, figsize=(12, 10), sharex=True)

    for i, label in enumerate(["w", "x", "y", "z"]):
        ax = axes_arr[i]
        for j, (name, quats) in enumerate(quats_dict.items()):
            ax.plot(t, quats[:, i], label=name, color=COLORS[j % len(COLORS)], linewidth=1.2)
        ax.set_ylabel(f"q_{label}", fontsize=11)
        ax.grid(True, alpha=0.3)

    axes_arr[0].legend(fontsize=9)
    axes_arr[-1].set_xlabel("Time (s)", fontsize=11)
    fig.suptitle(title, fontsize=14, fontweight="bold")
    plt.tight_layout()
    return fig


def plot_euler_angles(
    t: np.ndarray,
    quats_dict: Dict[str, np.ndarray],
    title: str = "Attitude (ZYX Euler)",
) -> plt.Figure:
    """
    Plot roll, pitch and yaw in degrees for each run.

    Args:
        t: Timestamps in seconds, shape (N,)
        quats_dict: Dictionary of quaternion arrays {name: (N, 4)}
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, axes_arr = plt.subplots(3, 1, figsize=(12, 9), sharex=True)
    labels = ["Roll", "Pitch", "Yaw"]

    for j, (name, quats) in enumerate(quats_dict.items()):
        euler_deg = np.rad2deg(quats_to_euler(quats))
        for i, ax in enumerate(axes_arr):
            ax.plot(t, euler_deg[:, i], label=name, color=COLORS[j % len(COLORS)], linewidth=1.2)

    for ax, label in zip(axes_arr, labels):
        ax.set_ylabel(f"{label} (deg)", fontsize=11)
        ax.grid(True, alpha=0.3)

    axes_arr[0].legend(fontsize=9)
    axes_arr[-1].set_xlabel("Time (s)", fontsize=11)
    fig.suptitle(title, fontsize=14, fontweight="bold")
    plt.tight_layout()
    return fig


def plot_quat_difference(
    t: np.ndarray,
    distances: np.ndarray,
    bound: Optional[float] = None,
    title: str = "Filter Disagreement",
) -> plt.Figure:
    """
    Plot per-sample quaternion distance with its running mean.

    Args:
        t: Timestamps in seconds, shape (N,)
        distances: Per-sample distances, shape (N,)
        bound: Optional acceptance bound drawn as a horizontal line
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(12, 5))

    running_mean = np.cumsum(distances) / np.arange(1, len(distances) + 1)
    ax.plot(t, distances, color="blue", linewidth=1.0, alpha=0.6, label="||q_a - q_b||")
    ax.plot(t, running_mean, color="red", linewidth=2.0, label="Running mean")
    if bound is not None:
        ax.axhline(y=bound, color="k", linestyle="--", linewidth=1.0, label=f"Bound {bound:g}")

    ax.set_xlabel("Time (s)", fontsize=12)
    ax.set_ylabel("Quaternion distance", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def save_figure(
    fig: plt.Figure,
    out_dir: Union[str, Path],
    name: str,
    formats: Tuple[str, ...] = ("svg", "png"),
) -> List[Path]:
    """
    Save figure in multiple formats.

    Args:
        fig: Matplotlib figure to save
        out_dir: Output directory
        name: Base filename (without extension)
        formats: Tuple of format extensions

    Returns:
        paths: List of saved file paths
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for fmt in formats:
        filepath = out_dir / f"{name}.{fmt}"
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        paths.append(filepath)

    return paths
