"""
Central Configuration Module for SIRAS.

This module holds the default design settings used by the filter design core,
the parameters of the demo application, and the plotting and logging
preferences.
"""

FILTER_DESIGN_PARAMS = {
    "alpha": 0.5,
    "prototype": "butterworth",
    "imag_tol": 1e-8,
    "dt_mismatch_rtol": 1e-6,
    "gain_rtol": 1e-4,
}

DEMO_PARAMS = {
    "sample_rate": 32000,
    "duration": 1.0,
    "tone_freqs": [10.0, 100.0],
    "order": 4,
    "butterworth": {
        "alpha": 0.5,
        "cutoff_low_pass": 20.0,
        "cutoff_high_pass": 20.0,
    },
    "bessel": {
        "cutoff_low_pass": 15.0,
        "cutoff_high_pass": 50.0,
    },
    "padlen": 0,
}

PLOT_PARAMS = {
    "figsize": (12, 6),
    "grid_alpha": 0.3,
    "ylim": (-2.0, 2.0),
    "linewidth": 1.5,
    "output_dir": "plots",
    "colors": {
        "raw": "#7f7f7f",
        "low_pass": "#1f77b4",
        "high_pass": "#d62728",
    },
}

LOGGING_PARAMS = {
    "level": "INFO",
    "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S",
}

"""
--------------------------------------------------------------------------------
1. FILTER_DESIGN_PARAMS (Design Core)
--------------------------------------------------------------------------------
    - alpha: Default interpolation factor of the generalized bilinear transform.
      0.0 = forward Euler, 0.5 = Tustin (trapezoidal), 1.0 = backward Euler.
    - prototype: Default analog prototype used by `design` ("butterworth" or "bessel").
    - imag_tol: Relative tolerance on the imaginary residue when expanding a
      polynomial from conjugate-pair roots.
    - dt_mismatch_rtol: Relative tolerance used by `filtfilt` when comparing the
      time base spacing with the filter's sample interval.
    - gain_rtol: Largest relative passband-gain error accepted between a designed
      filter's coefficients and its state-space model before the design is
      rejected as ill-conditioned.

--------------------------------------------------------------------------------
2. DEMO_PARAMS (Demo Application)
--------------------------------------------------------------------------------
    - sample_rate: Sampling frequency of the synthetic signal (Hz).
    - duration: Length of the synthetic signal (s).
    - tone_freqs: Frequencies of the summed unit sinusoids (Hz).
    - order: Filter order used for every demo design.
    - butterworth / bessel: Cutoff frequencies (Hz) for the low-pass and
      high-pass designs of each family.
    - padlen: Odd-reflection padding passed to `filtfilt` (0 disables it).

--------------------------------------------------------------------------------
3. PLOT_PARAMS (Visualization)
--------------------------------------------------------------------------------
    - figsize, grid_alpha, ylim, linewidth: Matplotlib styling.
    - output_dir: Directory where the demo saves its figures.
    - colors: Line colors for the raw and filtered signals.

--------------------------------------------------------------------------------
4. LOGGING_PARAMS
--------------------------------------------------------------------------------
    - level: Root log level used by the demo application.
    - format, datefmt: Formatter settings for the console handler.
"""
