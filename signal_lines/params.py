"""
Parameters Module - Operator Configuration Records

Every operator is configured by one dataclass record. Records are frozen:
to change a parameter build a new record with ``dataclasses.replace``.
Input signal lines are borrowed references; the caller keeps them alive
and unmodified until ``execute()`` returns.

USAGE:
    from signal_lines.params import GeneratorParams, WaveForm

    params = GeneratorParams(sampling_frequency=1000.0, oscillation_frequency=60.0,
                             amplitude=3.0, waveform=WaveForm.SINE)
    gen = Generator.from_params(params)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, TypeVar, Union, TYPE_CHECKING

from signal_lines.errors import invalid_parameter, unsupported_method

if TYPE_CHECKING:
    from signal_lines.signal_line import SignalLine


TWO_PI: float = 2.0 * math.pi


# =============================================================================
# METHOD / KIND ENUMERATIONS
# =============================================================================

class Preference(Enum):
    """
    How SignalLine.from_params picks the number of points.

    AUTO: duration and sampling frequency when both are present, otherwise
          the explicit points count.
    PREFER_POINTS_COUNT: always use the explicit points count.
    PREFER_DURATION_AND_SAMPLING_FREQ: always derive the count from
          duration and sampling frequency.
    """
    AUTO = 'auto'
    PREFER_POINTS_COUNT = 'prefer_points_count'
    PREFER_DURATION_AND_SAMPLING_FREQ = 'prefer_duration_and_sampling_freq'


class WaveForm(Enum):
    """Waveform produced by the Generator."""
    SINE = 'sine'
    COSINE = 'cosine'
    TANGENT = 'tangent'
    COTANGENT = 'cotangent'


class NoiseType(Enum):
    """Noise produced by the NoiseGenerator (uniform white noise only)."""
    WHITE = 'white'


class IntegrationMethod(Enum):
    """
    Numerical integration rules.

    TRAPEZOIDAL: at least 2 points.
    SIMPSON: odd number of points (at least 3).
    BOOLE: 4k + 1 points (at least 5).
    """
    TRAPEZOIDAL = 'trapezoidal'
    SIMPSON = 'simpson'
    BOOLE = 'boole'


class DifferentiationMethod(Enum):
    """
    Differencing schemes.

    CENTRAL_ONLY: central differences only, output is 2 points shorter.
    CENTRAL_AND_EDGES: central differences inside, one-sided differences at
                       the first and last point, output keeps its length.
    """
    CENTRAL_ONLY = 'central_only'
    CENTRAL_AND_EDGES = 'central_and_edges'


E = TypeVar('E', bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Union[E, str], what: str) -> E:
    """
    Resolve an enum member from a member or its string value.

    Raises:
        SignalProcessingError(UNSUPPORTED_METHOD): value is not a member of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    supported = ', '.join(member.value for member in enum_cls)
    raise unsupported_method(f"Unsupported {what}: {value!r} (supported: {supported})")


# =============================================================================
# DEFAULT PARAMETERS
# =============================================================================

# Signal line
DEFAULT_SAMPLING_FREQ_HZ: float = 100.0
DEFAULT_DURATION_SEC: float = 1.0
DEFAULT_FREQ_HZ: float = 1.0
DEFAULT_INIT_PHASE: float = 0.0
DEFAULT_OFFSET_Y: float = 0.0
DEFAULT_AMPLITUDE: float = 1.0
DEFAULT_NORMALIZE_FACTOR: float = 1.0
DEFAULT_INACCURACY: float = 1e-9
DEFAULT_X_LABEL: str = "X Axis"
DEFAULT_Y_LABEL: str = "Y Axis"
DEFAULT_GRAPH_LABEL: str = "Graph"

# Generator
DEFAULT_GEN_X_LABEL: str = "Time"
DEFAULT_GEN_Y_LABEL: str = "Amplitude"
DEFAULT_GEN_GRAPH_LABEL: str = "Signal"
DEFAULT_NORMALIZE_FACTOR_SIN: float = TWO_PI
DEFAULT_WAVEFORM: WaveForm = WaveForm.SINE
DEFAULT_CLAMP_VALUE: float = 10.0

# Noise
DEFAULT_NOISE_AMPLITUDE: float = 1.0
DEFAULT_NOISE_TYPE: NoiseType = NoiseType.WHITE
DEFAULT_NOISE_GRAPH_LABEL: str = "Noisy Signal"

# Arithmetic
DEFAULT_SUMMATION_GRAPH_LABEL: str = "Summation"
DEFAULT_MULTIPLICATION_GRAPH_LABEL: str = "Multiplication"

# Calculus
DEFAULT_INTEGRATION_METHOD: IntegrationMethod = IntegrationMethod.TRAPEZOIDAL
DEFAULT_DIFF_METHOD: DifferentiationMethod = DifferentiationMethod.CENTRAL_AND_EDGES
DEFAULT_DIFF_PERFORM_NORMALIZATION: bool = True
DEFAULT_DIFF_GRAPH_LABEL: str = "Differentiation"

# Analysis
DEFAULT_CORRELATION_NORMALIZATION: bool = True
DEFAULT_ANALYZER_NORMALIZATION: bool = False
DEFAULT_USE_ABSOLUTE_VALUE: bool = False
DEFAULT_ANALYZER_X_LABEL: str = "Frequency (Hz)"
DEFAULT_ANALYZER_Y_LABEL: str = "Correlation"
DEFAULT_ANALYZER_GRAPH_LABEL: str = "Frequency Analysis"


# =============================================================================
# SIGNAL LINE
# =============================================================================

@dataclass
class SignalLineParams:
    """
    Descriptive record of a signal line.

    Time-domain fields are None when the line was built from a bare points
    count. ``max_value``/``min_value`` are cache cells filled by
    SignalLine.find_max/find_min and only refreshed on a forced update.

    Attributes:
        points_count: Number of points
        sampling_frequency: Sampling frequency in Hz
        duration: Duration in seconds
        oscillation_frequency: Oscillation frequency in Hz
        init_phase: Initial phase in radians
        offset_y: Vertical offset
        amplitude: Peak value
        normalize_factor: Divisor applied by the Differentiator (2*pi for
            lines generated from an angular argument)
        max_value: Cached maximum y (None = not computed)
        min_value: Cached minimum y (None = not computed)
        x_label, y_label, graph_label: Labels for plotting
    """
    points_count: int = 0
    sampling_frequency: Optional[float] = None
    duration: Optional[float] = None
    oscillation_frequency: Optional[float] = None
    init_phase: Optional[float] = None
    offset_y: Optional[float] = None
    amplitude: Optional[float] = None
    normalize_factor: Optional[float] = DEFAULT_NORMALIZE_FACTOR
    max_value: Optional[float] = None
    min_value: Optional[float] = None
    x_label: str = DEFAULT_X_LABEL
    y_label: str = DEFAULT_Y_LABEL
    graph_label: str = DEFAULT_GRAPH_LABEL


# =============================================================================
# OPERATOR RECORDS
# =============================================================================

@dataclass(frozen=True)
class GeneratorParams:
    """
    Waveform synthesis parameters.

    Attributes:
        sampling_frequency: Samples per second (default 100 Hz)
        duration: Signal length in seconds (default 1 s)
        oscillation_frequency: Wave frequency in Hz (default 1 Hz)
        init_phase: Phase at t=0 in radians (default 0)
        offset_y: Added after amplitude scaling and clamping (default 0)
        amplitude: Scale applied to the wave (default 1)
        waveform: WaveForm member or its string value (default sine)
        clamp_value: Magnitude bound for tangent/cotangent (default 10)
    """
    sampling_frequency: float = DEFAULT_SAMPLING_FREQ_HZ
    duration: float = DEFAULT_DURATION_SEC
    oscillation_frequency: float = DEFAULT_FREQ_HZ
    init_phase: float = DEFAULT_INIT_PHASE
    offset_y: float = DEFAULT_OFFSET_Y
    amplitude: float = DEFAULT_AMPLITUDE
    waveform: Union[WaveForm, str] = DEFAULT_WAVEFORM
    clamp_value: Optional[float] = DEFAULT_CLAMP_VALUE
    x_label: str = DEFAULT_GEN_X_LABEL
    y_label: str = DEFAULT_GEN_Y_LABEL
    graph_label: str = DEFAULT_GEN_GRAPH_LABEL


@dataclass(frozen=True)
class NoiseGeneratorParams:
    """
    Noise injection parameters.

    Attributes:
        signal_line: Source line (borrowed)
        noise_amplitude: Half-width of the uniform distribution (default 1)
        noise_type: NoiseType member or its string value (default white)
        seed: Seed for numpy's default_rng (None = fresh entropy)
    """
    signal_line: Optional['SignalLine'] = None
    noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE
    noise_type: Union[NoiseType, str] = DEFAULT_NOISE_TYPE
    seed: Optional[int] = None
    x_label: str = DEFAULT_X_LABEL
    y_label: str = DEFAULT_Y_LABEL
    graph_label: str = DEFAULT_NOISE_GRAPH_LABEL


@dataclass(frozen=True)
class ArithmeticParams:
    """
    Parameters shared by the Summator and the Multiplier.

    Attributes:
        signal_line1, signal_line2: Operands (borrowed)
        inaccuracy: Tolerance of the compatibility check (default 1e-9)
        graph_label: Output label (None = the operator's own default)
    """
    signal_line1: Optional['SignalLine'] = None
    signal_line2: Optional['SignalLine'] = None
    inaccuracy: float = DEFAULT_INACCURACY
    x_label: str = DEFAULT_X_LABEL
    y_label: str = DEFAULT_Y_LABEL
    graph_label: Optional[str] = None


@dataclass(frozen=True)
class IntegratorParams:
    signal_line: Optional['SignalLine'] = None
    method: Union[IntegrationMethod, str] = DEFAULT_INTEGRATION_METHOD


@dataclass(frozen=True)
class DifferentiatorParams:
    """
    Attributes:
        signal_line: Line to differentiate (borrowed)
        perform_normalization: Divide by the line's normalize_factor (default True)
        method: DifferentiationMethod member or string (default central_and_edges)
    """
    signal_line: Optional['SignalLine'] = None
    perform_normalization: bool = DEFAULT_DIFF_PERFORM_NORMALIZATION
    method: Union[DifferentiationMethod, str] = DEFAULT_DIFF_METHOD
    x_label: str = DEFAULT_X_LABEL
    y_label: str = DEFAULT_Y_LABEL
    graph_label: str = DEFAULT_DIFF_GRAPH_LABEL


@dataclass(frozen=True)
class RMSParams:
    signal_line: Optional['SignalLine'] = None
    inaccuracy: float = DEFAULT_INACCURACY
    method: Union[IntegrationMethod, str] = DEFAULT_INTEGRATION_METHOD


@dataclass(frozen=True)
class CorrelatorParams:
    """
    Attributes:
        signal_line1, signal_line2: Lines to correlate (borrowed)
        perform_normalization: Divide by the product of both RMS values (default True)
        inaccuracy: Tolerance of the compatibility check (default 1e-9)
    """
    signal_line1: Optional['SignalLine'] = None
    signal_line2: Optional['SignalLine'] = None
    perform_normalization: bool = DEFAULT_CORRELATION_NORMALIZATION
    inaccuracy: float = DEFAULT_INACCURACY


@dataclass(frozen=True)
class AmplitudeDetectorParams:
    """
    Attributes:
        signal_line: Line to measure (borrowed)
        inaccuracy: Tolerance used to decide the line is already centred (default 1e-9)
    """
    signal_line: Optional['SignalLine'] = None
    inaccuracy: float = DEFAULT_INACCURACY


@dataclass(frozen=True)
class FrequencyAnalyzerParams:
    """
    Frequency sweep parameters.

    Attributes:
        signal_line: Line to analyze (borrowed)
        from_frequency: First swept frequency in Hz (inclusive)
        to_frequency: Upper bound in Hz (exclusive)
        step_frequency: Sweep step in Hz (positive)
        use_absolute_value: Store |correlation| (default False)
        perform_normalization: Normalize each correlation by RMS (default False)
        inaccuracy: Tolerance of DC removal and of the compatibility check
            against each reference wave (default 1e-9)
    """
    signal_line: Optional['SignalLine'] = None
    from_frequency: float = 0.0
    to_frequency: float = 0.0
    step_frequency: float = 0.0
    use_absolute_value: bool = DEFAULT_USE_ABSOLUTE_VALUE
    perform_normalization: bool = DEFAULT_ANALYZER_NORMALIZATION
    inaccuracy: float = DEFAULT_INACCURACY
    x_label: str = DEFAULT_ANALYZER_X_LABEL
    y_label: str = DEFAULT_ANALYZER_Y_LABEL
    graph_label: str = DEFAULT_ANALYZER_GRAPH_LABEL


# =============================================================================
# VALIDATION
# =============================================================================

def validate_time_domain(sampling_frequency: float, duration: float) -> None:
    """
    Raises:
        SignalProcessingError(INVALID_PARAMETER): duration or sampling frequency not positive
    """
    if duration is None or duration <= 0:
        raise invalid_parameter(f"Duration should be positive, got {duration}")
    if sampling_frequency is None or sampling_frequency <= 0:
        raise invalid_parameter(f"Sampling frequency should be positive, got {sampling_frequency}")


def validate_inaccuracy(inaccuracy: Optional[float]) -> float:
    """Return the inaccuracy (default when None); negative values are rejected."""
    if inaccuracy is None:
        return DEFAULT_INACCURACY
    if inaccuracy < 0:
        raise invalid_parameter(f"Inaccuracy should be non-negative, got {inaccuracy}")
    return inaccuracy


def validate_generator_params(params: GeneratorParams) -> None:
    """
    Raises:
        SignalProcessingError(INVALID_PARAMETER): tangent/cotangent without a
            non-negative clamp value
    """
    waveform = params.waveform
    if isinstance(waveform, str):
        waveform = coerce_enum(WaveForm, waveform, 'waveform')
    if waveform in (WaveForm.TANGENT, WaveForm.COTANGENT):
        if params.clamp_value is None:
            raise invalid_parameter(f"Clamp value is required for {waveform.value} wave")
        if params.clamp_value < 0:
            raise invalid_parameter(f"Clamp value should be non-negative, got {params.clamp_value}")


def validate_frequency_analyzer_params(params: FrequencyAnalyzerParams) -> None:
    """
    Raises:
        SignalProcessingError(INVALID_PARAMETER): empty frequency range,
            non-positive step or negative inaccuracy
    """
    validate_inaccuracy(params.inaccuracy)
    if params.from_frequency >= params.to_frequency:
        raise invalid_parameter(
            f"Invalid frequency range: from {params.from_frequency} >= to {params.to_frequency}"
        )
    if params.step_frequency <= 0:
        raise invalid_parameter(f"Frequency step should be positive, got {params.step_frequency}")
