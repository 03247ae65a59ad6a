"""
Analysis Module - Composite Operators

Operators that answer a question about a signal by composing the basic ones:

    RMS               = sqrt( Integrator(Multiplier(s, s)) / duration )
    Correlator        = Integrator(Multiplier(s1, s2)) / duration [/ RMS(s1) * RMS(s2)]
    AmplitudeDetector = sqrt(2) * RMS(s with DC removed)
    FrequencyAnalyzer = Correlator(s with DC removed, sine(f)) for f in [from, to)

Intermediate lines (products, centred copies, reference waves) belong to the
composite operator and are dropped once its result is computed.
"""

import logging
import math
from typing import Optional, Union

import numpy as np

from signal_lines.arithmetic import Multiplier
from signal_lines.base import Operator
from signal_lines.calculus import Integrator
from signal_lines.errors import invalid_parameter, null_reference
from signal_lines.generators import Generator
from signal_lines.params import (
    DEFAULT_ANALYZER_GRAPH_LABEL,
    DEFAULT_ANALYZER_NORMALIZATION,
    DEFAULT_ANALYZER_X_LABEL,
    DEFAULT_ANALYZER_Y_LABEL,
    DEFAULT_CORRELATION_NORMALIZATION,
    DEFAULT_INACCURACY,
    DEFAULT_INTEGRATION_METHOD,
    DEFAULT_USE_ABSOLUTE_VALUE,
    AmplitudeDetectorParams,
    CorrelatorParams,
    FrequencyAnalyzerParams,
    IntegrationMethod,
    RMSParams,
    WaveForm,
    validate_frequency_analyzer_params,
)
from signal_lines.signal_line import SignalLine

LOGGER = logging.getLogger(__name__)


def _require_duration(signal_line: Optional[SignalLine]) -> float:
    if signal_line is None:
        raise null_reference("Invalid signal line (None)")
    duration = signal_line.get_params().duration
    if duration is None:
        raise invalid_parameter("Signal line does not have duration information")
    return duration


def _mean_product(
    signal_line1: SignalLine,
    signal_line2: SignalLine,
    duration: float,
    inaccuracy: float,
    method: Union[IntegrationMethod, str] = DEFAULT_INTEGRATION_METHOD
) -> float:
    """Time average of s1 * s2 over duration."""
    product = Multiplier(signal_line1, signal_line2, inaccuracy)
    product.execute()
    integral = Integrator(product.get_signal_line(), method)
    integral.execute()
    return integral.get_integral() / duration


class RMS(Operator):
    """Root mean square: sqrt(integral(y^2 dx) / duration)."""

    name = "RMS"

    def __init__(
        self,
        signal_line: Optional[SignalLine],
        inaccuracy: float = DEFAULT_INACCURACY,
        method: Union[IntegrationMethod, str] = DEFAULT_INTEGRATION_METHOD
    ) -> None:
        super().__init__(RMSParams(signal_line=signal_line, inaccuracy=inaccuracy, method=method))

    def get_rms_value(self) -> float:
        return self._get_result()

    def _compute(self) -> float:
        params: RMSParams = self._params
        duration = _require_duration(params.signal_line)
        mean_power = _mean_product(
            params.signal_line, params.signal_line, duration, params.inaccuracy, params.method
        )
        return math.sqrt(mean_power)


class Correlator(Operator):
    """
    Zero-lag correlation of two lines.

    raw = integral(y1 * y2 dx) / duration1
    With perform_normalization the raw value is divided by RMS(s1) * RMS(s2),
    so a line correlated with itself gives 1.0. The value carries no phase
    information.
    """

    name = "Correlator"

    def __init__(
        self,
        signal_line1: Optional[SignalLine],
        signal_line2: Optional[SignalLine],
        perform_normalization: bool = DEFAULT_CORRELATION_NORMALIZATION,
        inaccuracy: float = DEFAULT_INACCURACY
    ) -> None:
        super().__init__(CorrelatorParams(
            signal_line1=signal_line1,
            signal_line2=signal_line2,
            perform_normalization=perform_normalization,
            inaccuracy=inaccuracy,
        ))

    def get_correlation_value(self) -> float:
        return self._get_result()

    def _compute(self) -> float:
        params: CorrelatorParams = self._params
        if params.signal_line1 is None or params.signal_line2 is None:
            raise null_reference("Invalid signal lines (None)")
        duration = _require_duration(params.signal_line1)
        _require_duration(params.signal_line2)

        raw_correlation = _mean_product(
            params.signal_line1, params.signal_line2, duration, params.inaccuracy
        )
        if not params.perform_normalization:
            return raw_correlation

        rms1 = RMS(params.signal_line1, params.inaccuracy)
        rms1.execute()
        rms2 = RMS(params.signal_line2, params.inaccuracy)
        rms2.execute()
        denominator = rms1.get_rms_value() * rms2.get_rms_value()
        if denominator == 0.0:
            raise invalid_parameter("Cannot normalize correlation: a signal line has zero RMS")
        return raw_correlation / denominator


class AmplitudeDetector(Operator):
    """
    Amplitude estimate of a periodic line: sqrt(2) * RMS after DC removal.

    The line is centred around zero when |min| is not within inaccuracy of
    |max|. Exact for sinusoids sampled over whole periods.
    """

    name = "Amplitude detector"

    def __init__(self, signal_line: Optional[SignalLine], inaccuracy: float = DEFAULT_INACCURACY) -> None:
        super().__init__(AmplitudeDetectorParams(signal_line=signal_line, inaccuracy=inaccuracy))

    def get_amplitude(self) -> float:
        return self._get_result()

    def _compute(self) -> float:
        params: AmplitudeDetectorParams = self._params
        _require_duration(params.signal_line)

        centred = SignalLine.copy_of(params.signal_line)
        centred.remove_dc_component(params.inaccuracy)

        rms = RMS(centred, params.inaccuracy)
        rms.execute()
        return math.sqrt(2.0) * rms.get_rms_value()


class FrequencyAnalyzer(Operator):
    """
    Brute-force correlation sweep over frequency.

    For i in [0, ceil((to - from) / step)):
        f = from + i * step
        value = Correlator(DC-removed input, unit sine at f)
    The output line holds (f, value), or (f, |value|) with use_absolute_value.
    This is O(points * steps) and measures correlation strength, not a true
    magnitude spectrum; phase shifts reduce the measured value.
    """

    name = "Frequency analyzer"

    def __init__(
        self,
        signal_line: Optional[SignalLine],
        from_frequency: float,
        to_frequency: float,
        step_frequency: float,
        use_absolute_value: bool = DEFAULT_USE_ABSOLUTE_VALUE,
        perform_normalization: bool = DEFAULT_ANALYZER_NORMALIZATION,
        inaccuracy: float = DEFAULT_INACCURACY,
        x_label: str = DEFAULT_ANALYZER_X_LABEL,
        y_label: str = DEFAULT_ANALYZER_Y_LABEL,
        graph_label: str = DEFAULT_ANALYZER_GRAPH_LABEL
    ) -> None:
        """
        Raises:
            SignalProcessingError(INVALID_PARAMETER): from_frequency >= to_frequency,
                step_frequency <= 0 or negative inaccuracy
        """
        super().__init__(FrequencyAnalyzerParams(
            signal_line=signal_line,
            from_frequency=from_frequency,
            to_frequency=to_frequency,
            step_frequency=step_frequency,
            use_absolute_value=use_absolute_value,
            perform_normalization=perform_normalization,
            inaccuracy=inaccuracy,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        ))

    def _validate_params(self, params: FrequencyAnalyzerParams) -> None:
        validate_frequency_analyzer_params(params)

    def get_signal_line(self) -> SignalLine:
        return self._get_result()

    def _compute(self) -> SignalLine:
        params: FrequencyAnalyzerParams = self._params
        duration = _require_duration(params.signal_line)
        sampling_frequency = params.signal_line.get_params().sampling_frequency
        if sampling_frequency is None:
            raise invalid_parameter("Signal line does not have sampling frequency information")

        steps = int(math.ceil((params.to_frequency - params.from_frequency) / params.step_frequency))
        frequencies = params.from_frequency + np.arange(steps, dtype=np.float64) * params.step_frequency
        values = np.empty(steps, dtype=np.float64)

        centred = SignalLine.copy_of(params.signal_line)
        centred.remove_dc_component(params.inaccuracy)

        for i, frequency in enumerate(frequencies):
            reference = Generator(
                sampling_frequency=sampling_frequency,
                duration=duration,
                oscillation_frequency=float(frequency),
                init_phase=0.0,
                offset_y=0.0,
                amplitude=1.0,
                waveform=WaveForm.SINE,
            )
            reference.execute()

            correlator = Correlator(
                centred, reference.get_signal_line(), params.perform_normalization, params.inaccuracy
            )
            correlator.execute()
            values[i] = correlator.get_correlation_value()

        if params.use_absolute_value:
            values = np.abs(values)

        spectrum = SignalLine.from_points_count(steps, params.x_label, params.y_label, params.graph_label)
        spectrum._assign(frequencies, values)

        LOGGER.debug("Swept %d frequencies in [%.6g, %.6g) Hz",
                     steps, params.from_frequency, params.to_frequency)
        return spectrum
