"""
Generators Module

Generator synthesizes a trigonometric wave into a new signal line.
NoiseGenerator produces a noisy copy of an existing line.
"""

import logging
from dataclasses import replace
from typing import Optional, Union

import numpy as np

from signal_lines import kernel
from signal_lines.base import Operator
from signal_lines.errors import invalid_parameter, null_reference
from signal_lines.params import (
    DEFAULT_AMPLITUDE,
    DEFAULT_CLAMP_VALUE,
    DEFAULT_DURATION_SEC,
    DEFAULT_FREQ_HZ,
    DEFAULT_GEN_GRAPH_LABEL,
    DEFAULT_GEN_X_LABEL,
    DEFAULT_GEN_Y_LABEL,
    DEFAULT_INIT_PHASE,
    DEFAULT_NOISE_AMPLITUDE,
    DEFAULT_NOISE_GRAPH_LABEL,
    DEFAULT_NOISE_TYPE,
    DEFAULT_NORMALIZE_FACTOR_SIN,
    DEFAULT_OFFSET_Y,
    DEFAULT_SAMPLING_FREQ_HZ,
    DEFAULT_WAVEFORM,
    DEFAULT_X_LABEL,
    DEFAULT_Y_LABEL,
    GeneratorParams,
    NoiseGeneratorParams,
    NoiseType,
    Preference,
    WaveForm,
    coerce_enum,
    validate_generator_params,
)
from signal_lines.signal_line import SignalLine

LOGGER = logging.getLogger(__name__)


class Generator(Operator):
    """
    Waveform generator.

    Sample i of the output is

        x = i / fs
        y = f(2*pi * freq * i / fs + phase) * amplitude + offset_y

    where f is sin, cos, tan or cot. Tangent and cotangent values are clamped
    to [-clamp_value, clamp_value] before the offset is added. The produced
    line carries normalize_factor = 2*pi so that derivatives taken by the
    Differentiator are expressed per unit of the phase argument's cycle.
    """

    name = "Generator"

    def __init__(
        self,
        sampling_frequency: float = DEFAULT_SAMPLING_FREQ_HZ,
        duration: float = DEFAULT_DURATION_SEC,
        oscillation_frequency: float = DEFAULT_FREQ_HZ,
        init_phase: float = DEFAULT_INIT_PHASE,
        offset_y: float = DEFAULT_OFFSET_Y,
        amplitude: float = DEFAULT_AMPLITUDE,
        waveform: Union[WaveForm, str] = DEFAULT_WAVEFORM,
        clamp_value: Optional[float] = DEFAULT_CLAMP_VALUE,
        x_label: str = DEFAULT_GEN_X_LABEL,
        y_label: str = DEFAULT_GEN_Y_LABEL,
        graph_label: str = DEFAULT_GEN_GRAPH_LABEL
    ) -> None:
        """
        Raises:
            SignalProcessingError(INVALID_PARAMETER): tangent/cotangent
                requested without a non-negative clamp value
            SignalProcessingError(UNSUPPORTED_METHOD): unknown waveform string
        """
        super().__init__(GeneratorParams(
            sampling_frequency=sampling_frequency,
            duration=duration,
            oscillation_frequency=oscillation_frequency,
            init_phase=init_phase,
            offset_y=offset_y,
            amplitude=amplitude,
            waveform=waveform,
            clamp_value=clamp_value,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        ))

    def _validate_params(self, params: GeneratorParams) -> None:
        validate_generator_params(params)

    def get_signal_line(self) -> SignalLine:
        return self._get_result()

    def _compute(self) -> SignalLine:
        params: GeneratorParams = self._params
        waveform = coerce_enum(WaveForm, params.waveform, 'waveform')

        line = SignalLine(
            sampling_frequency=params.sampling_frequency,
            duration=params.duration,
            oscillation_frequency=params.oscillation_frequency,
            init_phase=params.init_phase,
            offset_y=params.offset_y,
            amplitude=params.amplitude,
            normalize_factor=DEFAULT_NORMALIZE_FACTOR_SIN,
            x_label=params.x_label,
            y_label=params.y_label,
            graph_label=params.graph_label,
        )

        points_count = line.points_count
        phase = kernel.compute_phase_argument(
            points_count,
            params.sampling_frequency,
            params.oscillation_frequency,
            params.init_phase
        )
        clamp_value = params.clamp_value if params.clamp_value is not None else 0.0
        y = kernel.evaluate_waveform(phase, waveform, params.amplitude, params.offset_y, clamp_value)
        line._assign(kernel.compute_time_axis(points_count, params.sampling_frequency), y)

        LOGGER.debug("Generated %s wave: %d points, %.6g Hz",
                     waveform.value, points_count, params.oscillation_frequency)
        return line


class NoiseGenerator(Operator):
    """
    Adds white noise to a copy of a signal line.

    Each output sample is the source sample plus an independent draw from
    the uniform distribution on [-noise_amplitude, noise_amplitude]. The
    output keeps the source's x coordinates and parameter record.
    """

    name = "Noise generator"

    def __init__(
        self,
        signal_line: Optional[SignalLine],
        noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE,
        noise_type: Union[NoiseType, str] = DEFAULT_NOISE_TYPE,
        seed: Optional[int] = None,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: str = DEFAULT_NOISE_GRAPH_LABEL
    ) -> None:
        super().__init__(NoiseGeneratorParams(
            signal_line=signal_line,
            noise_amplitude=noise_amplitude,
            noise_type=noise_type,
            seed=seed,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        ))

    def get_signal_line(self) -> SignalLine:
        return self._get_result()

    def _compute(self) -> SignalLine:
        params: NoiseGeneratorParams = self._params
        source = params.signal_line
        if source is None:
            raise null_reference("Invalid signal line (None)")
        noise_type = coerce_enum(NoiseType, params.noise_type, 'noise type')
        if params.noise_amplitude < 0:
            raise invalid_parameter(f"Noise amplitude should be non-negative, got {params.noise_amplitude}")

        line = SignalLine.from_params(
            replace(
                source.get_params(),
                x_label=params.x_label,
                y_label=params.y_label,
                graph_label=params.graph_label,
            ),
            Preference.PREFER_POINTS_COUNT
        )

        # NoiseType.WHITE is the only member
        rng = np.random.default_rng(params.seed)
        noise = rng.uniform(-params.noise_amplitude, params.noise_amplitude, size=source.points_count)

        line._assign(source.x, source.y + noise)

        LOGGER.debug("Added %s noise (amplitude %.6g) to %d points",
                     noise_type.value, params.noise_amplitude, source.points_count)
        return line
