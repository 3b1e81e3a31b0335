"""
Pure simulation runners for SIRAS.
All functions here are headless and return raw numerical results.
"""

import numpy as np

from config import DEMO_PARAMS
from siras.filter_design import FilterType, bessel, butterworth


def make_time_base(sample_rate, duration):
    """Sample times 0, 1/fs, 2/fs, ... covering `duration` seconds."""
    n_samples = int(round(sample_rate * duration))
    return np.arange(n_samples) / float(sample_rate)


def make_test_signal(t, freqs, amplitudes=None):
    """Sum of sinusoids sin(2 pi f t), unit amplitude unless given."""
    t = np.asarray(t, dtype=float)
    if amplitudes is None:
        amplitudes = [1.0] * len(freqs)
    signal = np.zeros_like(t)
    for f, a in zip(freqs, amplitudes):
        signal += a * np.sin(2.0 * np.pi * f * t)
    return signal


def design_demo_filters(family, params=DEMO_PARAMS):
    """
    Builds the low-pass / high-pass pair for a filter family from the demo
    parameters.
    """
    dt = 1.0 / params["sample_rate"]
    order = params["order"]

    if family == "butterworth":
        cfg = params["butterworth"]
        low = butterworth(order, cfg["cutoff_low_pass"], dt, cfg["alpha"], FilterType.LOWPASS)
        high = butterworth(order, cfg["cutoff_high_pass"], dt, cfg["alpha"], FilterType.HIGHPASS)
    elif family == "bessel":
        cfg = params["bessel"]
        low = bessel(order, cfg["cutoff_low_pass"], dt, FilterType.LOWPASS)
        high = bessel(order, cfg["cutoff_high_pass"], dt, FilterType.HIGHPASS)
    else:
        raise ValueError(f"Unknown filter family: {family}")

    return {"low_pass": low, "high_pass": high}


def run_filter_demo(family, params=DEMO_PARAMS):
    """
    Filters the multi-tone test signal with the family's low-pass and
    high-pass designs using zero-phase filtering.

    Returns:
        dict: time base, raw signal, filtered signals and the filters used.
    """
    t = make_time_base(params["sample_rate"], params["duration"])
    raw = make_test_signal(t, params["tone_freqs"])
    filters = design_demo_filters(family, params)

    padlen = params["padlen"]
    return {
        "family": family,
        "t": t,
        "raw": raw,
        "low_pass": filters["low_pass"].filtfilt(raw, t, padlen=padlen),
        "high_pass": filters["high_pass"].filtfilt(raw, t, padlen=padlen),
        "filters": filters,
    }


def run_frequency_sweep(filters, f_min, f_max, n_points=500):
    """
    Magnitude (dB) of each filter over a log-spaced frequency grid (Hz).
    """
    freqs = np.logspace(np.log10(f_min), np.log10(f_max), n_points)
    mags = {
        name: 20.0 * np.log10(np.maximum(np.abs(flt.frequency_response(freqs)), 1e-300))
        for name, flt in filters.items()
    }
    return freqs, mags
