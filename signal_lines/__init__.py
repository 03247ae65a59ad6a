"""
signal-lines - Source Modules

This package contains a small toolkit for discrete, uniformly sampled signals:
- signal_line: SignalLine data model (points, parameters, cached extrema)
- generators: waveform synthesis and white-noise injection
- arithmetic: pointwise summation and multiplication
- calculus: numerical integration and differentiation
- analysis: RMS, correlation, amplitude detection, frequency sweep
- kernel: numpy kernels shared by the operators
- export: flat files, plots and JSON summaries
"""

from signal_lines.analysis import RMS, AmplitudeDetector, Correlator, FrequencyAnalyzer
from signal_lines.arithmetic import Multiplier, Summator
from signal_lines.calculus import Differentiator, Integrator
from signal_lines.errors import ErrorKind, SignalProcessingError
from signal_lines.generators import Generator, NoiseGenerator
from signal_lines.params import (
    DifferentiationMethod,
    IntegrationMethod,
    NoiseType,
    Preference,
    WaveForm,
)
from signal_lines.signal_line import Point, SignalLine

__version__ = "2.1.0"

__all__ = [
    'AmplitudeDetector',
    'Correlator',
    'DifferentiationMethod',
    'Differentiator',
    'ErrorKind',
    'FrequencyAnalyzer',
    'Generator',
    'IntegrationMethod',
    'Integrator',
    'Multiplier',
    'NoiseGenerator',
    'NoiseType',
    'Point',
    'Preference',
    'RMS',
    'SignalLine',
    'SignalProcessingError',
    'Summator',
    'WaveForm',
]
