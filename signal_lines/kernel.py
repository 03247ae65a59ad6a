"""
Kernel Module - Numeric Core of the Signal Operators

Pure functions over numpy arrays. Operators in generators.py, arithmetic.py,
calculus.py and analysis.py validate their inputs and then delegate the
arithmetic here.

DESIGN CONSTRAINTS:
- No I/O, no plotting
- No SignalLine objects: inputs and outputs are float64 arrays
- No validation: callers guarantee the contract of each function
- Deterministic: same input -> same output

SAMPLING CONVENTION:
- Sample i sits at x[i] = i / sampling_frequency
- Points count for (duration, fs): n = ceil(duration * fs) + 1, so the last
  sample lands on x = duration when duration * fs is integral
"""

import math
from typing import Tuple

import numpy as np
from scipy.integrate import trapezoid

from signal_lines.params import TWO_PI, WaveForm


MACHINE_EPSILON: float = float(np.finfo(np.float64).eps)


# =============================================================================
# TIME AXIS
# =============================================================================

def compute_points_count(duration: float, sampling_frequency: float) -> int:
    """
    Number of samples covering [0, duration] at sampling_frequency.

    CONTRACT:
    - Input: duration > 0, sampling_frequency > 0
    - Output: ceil(duration * sampling_frequency) + 1
    """
    return int(math.ceil(duration * sampling_frequency)) + 1


def compute_time_axis(points_count: int, sampling_frequency: float) -> np.ndarray:
    """Sample times i / sampling_frequency for i in [0, points_count)."""
    return np.arange(points_count, dtype=np.float64) / sampling_frequency


# =============================================================================
# WAVEFORM SYNTHESIS
# =============================================================================

def compute_phase_argument(
    points_count: int,
    sampling_frequency: float,
    oscillation_frequency: float,
    init_phase: float
) -> np.ndarray:
    """Phase argument 2*pi*f*i/fs + phase for every sample index i."""
    indices = np.arange(points_count, dtype=np.float64)
    return TWO_PI * oscillation_frequency / sampling_frequency * indices + init_phase


def evaluate_waveform(
    phase: np.ndarray,
    waveform: WaveForm,
    amplitude: float,
    offset_y: float,
    clamp_value: float = 0.0
) -> np.ndarray:
    """
    Evaluate a trigonometric waveform over a phase argument.

    CONTRACT:
    - SINE/COSINE: amplitude * f(phase) + offset_y
    - TANGENT: clip(amplitude * tan(phase), -clamp, clamp) + offset_y
    - COTANGENT: where |tan(phase)| < machine epsilon the value is
      copysign(clamp, tan(phase)), elsewhere amplitude / tan(phase); then
      clipped to [-clamp, clamp] and shifted by offset_y
    - clamp_value is only read for TANGENT/COTANGENT and must be >= 0

    Parameters:
        phase: Phase argument per sample (radians)
        waveform: WaveForm member
        amplitude: Scale of the wave
        offset_y: Vertical offset applied last
        clamp_value: Magnitude bound for tangent/cotangent

    Returns:
        Sample values, same shape as phase
    """
    if waveform is WaveForm.SINE:
        return amplitude * np.sin(phase) + offset_y

    if waveform is WaveForm.COSINE:
        return amplitude * np.cos(phase) + offset_y

    tangent = np.tan(phase)

    if waveform is WaveForm.TANGENT:
        values = amplitude * tangent
    else:
        # Cotangent: asymptotes where the tangent crosses zero
        near_asymptote = np.abs(tangent) < MACHINE_EPSILON
        safe_tangent = np.where(near_asymptote, 1.0, tangent)
        values = np.where(
            near_asymptote,
            np.copysign(clamp_value, tangent),
            amplitude / safe_tangent
        )

    return np.clip(values, -clamp_value, clamp_value) + offset_y


# =============================================================================
# INTEGRATION
# =============================================================================

def integrate_trapezoidal(x: np.ndarray, y: np.ndarray) -> float:
    """
    Composite trapezoidal rule: sum of (y[i-1] + y[i]) / 2 * (x[i] - x[i-1]).

    CONTRACT:
    - len(x) == len(y) >= 2
    """
    return float(trapezoid(y, x))


def integrate_simpson(x: np.ndarray, y: np.ndarray) -> float:
    """
    Composite Simpson's rule over consecutive point triples.

    For i = 1, 3, 5, ..., n-2:
        (x[i+1] - x[i-1]) / 6 * (y[i-1] + 4*y[i] + y[i+1])

    CONTRACT:
    - len(x) == len(y), odd, >= 3
    """
    centre = np.arange(1, len(y) - 1, 2)
    widths = x[centre + 1] - x[centre - 1]
    weighted = y[centre - 1] + 4.0 * y[centre] + y[centre + 1]
    return float(np.sum(widths / 6.0 * weighted))


def integrate_boole(x: np.ndarray, y: np.ndarray) -> float:
    """
    Composite Boole's rule over consecutive groups of five points.

    For i = 0, 4, 8, ..., n-5:
        (x[i+4] - x[i]) / 90 * (7*y[i] + 32*y[i+1] + 12*y[i+2] + 32*y[i+3] + 7*y[i+4])

    CONTRACT:
    - len(x) == len(y) == 4k + 1, k >= 1
    """
    start = np.arange(0, len(y) - 4, 4)
    widths = x[start + 4] - x[start]
    weighted = (
        7.0 * y[start] +
        32.0 * y[start + 1] +
        12.0 * y[start + 2] +
        32.0 * y[start + 3] +
        7.0 * y[start + 4]
    )
    return float(np.sum(widths / 90.0 * weighted))


# =============================================================================
# DIFFERENTIATION
# =============================================================================

def differentiate_central(
    x: np.ndarray,
    y: np.ndarray,
    normalize_factor: float = 1.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Central differences at interior points.

    CONTRACT:
    - Input: len(x) == len(y) >= 3
    - Output: (x[1:-1], (y[i+1] - y[i-1]) / (x[i+1] - x[i-1]) / normalize_factor),
      two points shorter than the input

    Returns:
        Tuple of (x_out, dy_dx)
    """
    dy_dx = (y[2:] - y[:-2]) / (x[2:] - x[:-2]) / normalize_factor
    return x[1:-1].copy(), dy_dx


def differentiate_central_and_edges(
    x: np.ndarray,
    y: np.ndarray,
    normalize_factor: float = 1.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Central differences inside, forward/backward differences at the edges.

    CONTRACT:
    - Input: len(x) == len(y) >= 2
    - Output: same length as the input; x copied from the input
    - dy[0] = (y[1] - y[0]) / (x[1] - x[0])
    - dy[-1] = (y[-1] - y[-2]) / (x[-1] - x[-2])
    - every value divided by normalize_factor

    Returns:
        Tuple of (x_out, dy_dx)
    """
    dy_dx = np.empty_like(y, dtype=np.float64)
    if len(y) > 2:
        dy_dx[1:-1] = (y[2:] - y[:-2]) / (x[2:] - x[:-2])
    dy_dx[0] = (y[1] - y[0]) / (x[1] - x[0])
    dy_dx[-1] = (y[-1] - y[-2]) / (x[-1] - x[-2])
    return x.copy(), dy_dx / normalize_factor


# =============================================================================
# DC COMPONENT
# =============================================================================

def compute_dc_shift(max_value: float, min_value: float, inaccuracy: float) -> float:
    """
    Vertical shift that centres a signal around zero.

    CONTRACT:
    - Returns 0.0 when |min| lies within inaccuracy of |max| (already centred)
    - Otherwise returns -(max + min) / 2
    """
    lower_bound = abs(max_value) - inaccuracy
    upper_bound = abs(max_value) + inaccuracy
    if lower_bound <= abs(min_value) <= upper_bound:
        return 0.0
    return -(max_value + min_value) / 2.0
