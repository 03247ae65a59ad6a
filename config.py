"""
signal-lines - Configuration

Tunable constants for the command line driver and the export layer, with
rationale. Operators take every parameter explicitly (see
signal_lines/params.py); cli.py and signal_lines/export.py read this module.
"""

from typing import Tuple

# =============================================================================
# COMPARISON PARAMETERS
# =============================================================================

# Tolerance for the endpoint compatibility check of two signal lines
# Why: 1e-9 is far below any sampling step used in practice (1 µs at 1 MHz)
#      while still absorbing rounding in i / fs time axes
INACCURACY: float = 1e-9

# Tolerance used by the amplitude detector to decide a signal is centred
# Why: same scale as INACCURACY; a generated zero-offset sine has
#      |min| == |max| up to rounding, anything else is shifted
DC_REMOVAL_INACCURACY: float = 1e-9

# =============================================================================
# DEMO: AMPLITUDE DETECTION
# =============================================================================

# Sine used by the amplitude demo
# Why: 60 Hz mains-like tone sampled at 1 kHz gives 60 whole periods in 1 s,
#      for which sqrt(2) * RMS recovers the amplitude almost exactly
AMPLITUDE_DEMO_SAMPLING_FREQ_HZ: float = 1000.0
AMPLITUDE_DEMO_FREQ_HZ: float = 60.0
AMPLITUDE_DEMO_AMPLITUDE: float = 3.0
AMPLITUDE_DEMO_DURATION_SEC: float = 1.0

# =============================================================================
# DEMO: FREQUENCY ANALYSIS OF A NOISY SINE
# =============================================================================

# Noisy sine swept by the spectrum demo
# Why: 524 Hz at 10 kHz sampling keeps the tone well below Nyquist;
#      noise amplitude 1.0 against signal amplitude 3.0 is visibly noisy
#      while the correlation peak still stands out
SPECTRUM_DEMO_SAMPLING_FREQ_HZ: float = 10000.0
SPECTRUM_DEMO_FREQ_HZ: float = 524.0
SPECTRUM_DEMO_AMPLITUDE: float = 3.0
SPECTRUM_DEMO_NOISE_AMPLITUDE: float = 1.0
SPECTRUM_DEMO_DURATION_SEC: float = 1.0

# Sweep range and step (Hz)
# Why: 0-1000 Hz brackets the tone; 1 Hz steps resolve whole-period
#      frequencies of a 1 s signal (4000 steps at 0.25 Hz are slow in a demo)
SPECTRUM_DEMO_FROM_HZ: float = 0.0
SPECTRUM_DEMO_TO_HZ: float = 1000.0
SPECTRUM_DEMO_STEP_HZ: float = 1.0

# =============================================================================
# DEMO: SUMMATION AND DIFFERENTIATION
# =============================================================================

# Two sines summed by the summation demo
# Why: same duration and sampling frequency give compatible lines of
#      ceil(3 * 200) + 1 = 601 points
SUM_DEMO_SAMPLING_FREQ_HZ: float = 200.0
SUM_DEMO_DURATION_SEC: float = 3.0
SUM_DEMO_FREQ1_HZ: float = 4.5
SUM_DEMO_AMPLITUDE1: float = 3.5
SUM_DEMO_FREQ2_HZ: float = 2.0
SUM_DEMO_AMPLITUDE2: float = 2.5

# =============================================================================
# OUTPUT PARAMETERS
# =============================================================================

# JSON schema version of the demo summaries
SCHEMA_VERSION: str = "1.0.0"

# printf-style format of each flat-file field
# Why: 10 significant digits round-trip sample times and values well beyond
#      plotting precision and keep files readable
FLAT_FILE_FLOAT_FORMAT: str = '%.10g'

# Plot resolution (dots per inch)
# Why: 150 DPI is good balance of quality and file size for screen viewing
PLOT_DPI: int = 150

# Plot figure size (width, height in inches)
# Why: wide aspect suits time series; 12x6 at 150 DPI = 1800x900 pixels
PLOT_FIGSIZE: Tuple[float, float] = (12, 6)

# Line width of plotted series
PLOT_LINE_WIDTH: float = 1.2

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def validate_config() -> bool:
    """
    Validate configuration parameters for consistency.

    Returns:
        True if config is valid

    Raises:
        ValueError: If configuration is invalid
    """
    if INACCURACY < 0 or DC_REMOVAL_INACCURACY < 0:
        raise ValueError("Inaccuracies must be non-negative")

    for name in ('AMPLITUDE_DEMO_SAMPLING_FREQ_HZ', 'AMPLITUDE_DEMO_DURATION_SEC',
                 'SPECTRUM_DEMO_SAMPLING_FREQ_HZ', 'SPECTRUM_DEMO_DURATION_SEC',
                 'SUM_DEMO_SAMPLING_FREQ_HZ', 'SUM_DEMO_DURATION_SEC'):
        if globals()[name] <= 0:
            raise ValueError(f"{name} must be positive")

    if SPECTRUM_DEMO_FROM_HZ >= SPECTRUM_DEMO_TO_HZ:
        raise ValueError("SPECTRUM_DEMO_FROM_HZ must be below SPECTRUM_DEMO_TO_HZ")
    if SPECTRUM_DEMO_STEP_HZ <= 0:
        raise ValueError("SPECTRUM_DEMO_STEP_HZ must be positive")
    if SPECTRUM_DEMO_NOISE_AMPLITUDE < 0:
        raise ValueError("SPECTRUM_DEMO_NOISE_AMPLITUDE must be non-negative")

    if PLOT_DPI <= 0:
        raise ValueError("PLOT_DPI must be positive")

    return True


# Validate on import
validate_config()
