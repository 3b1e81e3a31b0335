"""
Centralized plotting utilities for SIRAS.
All visualization logic lives here to keep the filter core headless.
"""

import os

import matplotlib.pyplot as plt

from config import PLOT_PARAMS


def _finish(fig, save_path):
    if save_path:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(save_path)
        plt.close(fig)
    else:
        plt.show()


def plot_filter_comparison(result, save_path=None):
    """
    Raw signal, low-pass output and high-pass output stacked on a shared
    time axis.
    """
    fig, axes = plt.subplots(3, 1, figsize=PLOT_PARAMS["figsize"], sharex=True)
    colors = PLOT_PARAMS["colors"]
    family = result["family"].capitalize()

    series = [
        ("raw", "Without filter"),
        ("low_pass", f"{family} low-pass (zero-phase)"),
        ("high_pass", f"{family} high-pass (zero-phase)"),
    ]
    for ax, (key, title) in zip(axes, series):
        ax.plot(
            result["t"],
            result[key],
            color=colors[key],
            linewidth=PLOT_PARAMS["linewidth"],
        )
        ax.set_title(title)
        ax.set_ylabel("amplitude")
        ax.set_ylim(*PLOT_PARAMS["ylim"])
        ax.grid(True, alpha=PLOT_PARAMS["grid_alpha"])

    axes[-1].set_xlabel("time (s)")
    plt.tight_layout()
    _finish(fig, save_path)


def plot_magnitude_response(freqs, mags, title, save_path=None):
    fig, ax = plt.subplots(figsize=PLOT_PARAMS["figsize"])
    colors = PLOT_PARAMS["colors"]

    for name, mag in mags.items():
        ax.semilogx(freqs, mag, label=name, color=colors.get(name), linewidth=PLOT_PARAMS["linewidth"])

    ax.axhline(-3.0, color="black", linestyle="--", alpha=0.5, label="-3 dB")
    ax.set_title(title)
    ax.set_xlabel("frequency (Hz)")
    ax.set_ylabel("magnitude (dB)")
    ax.grid(True, which="both", alpha=PLOT_PARAMS["grid_alpha"])
    ax.legend(fontsize=8)
    plt.tight_layout()
    _finish(fig, save_path)
