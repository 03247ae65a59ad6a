"""
Arithmetic Test Suite

Tests for pointwise summation and multiplication of compatible lines.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from signal_lines.arithmetic import Multiplier, Summator
from signal_lines.errors import ErrorKind, SignalProcessingError
from signal_lines.generators import Generator
from signal_lines.params import ArithmeticParams
from signal_lines.signal_line import SignalLine


def generate(sampling_frequency, duration, frequency, amplitude) -> SignalLine:
    gen = Generator(sampling_frequency=sampling_frequency, duration=duration,
                    oscillation_frequency=frequency, amplitude=amplitude)
    gen.execute()
    return gen.get_signal_line()


# =============================================================================
# SUMMATION
# =============================================================================

class TestSummator:
    """Test elementwise summation."""

    def test_sum_of_two_sines(self):
        """Two 3 s sines at 200 Hz sum point by point."""
        line1 = generate(200.0, 3.0, 4.5, 3.5)
        line2 = generate(200.0, 3.0, 2.0, 2.5)

        summator = Summator(line1, line2)
        summator.execute()
        result = summator.get_signal_line()

        assert result.points_count == 601
        np.testing.assert_array_equal(result.x, line1.x)
        np.testing.assert_allclose(result.y, line1.y + line2.y)

    def test_result_is_count_built(self):
        line = generate(100.0, 1.0, 1.0, 1.0)
        summator = Summator(line, line)
        summator.execute()
        params = summator.get_signal_line().get_params()
        assert params.duration is None
        assert params.sampling_frequency is None
        assert params.graph_label == "Summation"

    def test_labels(self):
        line = generate(100.0, 1.0, 1.0, 1.0)
        summator = Summator(line, line, x_label="Time", y_label="Sum", graph_label="Total")
        summator.execute()
        params = summator.get_signal_line().get_params()
        assert (params.x_label, params.y_label, params.graph_label) == ("Time", "Sum", "Total")

    def test_additive_inverse(self):
        line = generate(100.0, 1.0, 3.0, 2.0)
        negated = SignalLine.from_arrays(line.x, -line.y)
        summator = Summator(line, negated)
        summator.execute()
        np.testing.assert_array_equal(summator.get_signal_line().y, np.zeros(101))

    def test_sum_then_subtract_recovers_first_operand(self):
        """Adding -B to Summator(A, B) gives back A."""
        line_a = generate(100.0, 1.0, 3.0, 2.0)
        line_b = generate(100.0, 1.0, 7.0, 1.5)

        summator = Summator(line_a, line_b)
        summator.execute()
        negated_b = SignalLine.from_arrays(line_b.x, -line_b.y)
        restore = Summator(summator.get_signal_line(), negated_b)
        restore.execute()

        result = restore.get_signal_line()
        np.testing.assert_array_equal(result.x, line_a.x)
        np.testing.assert_allclose(result.y, line_a.y, atol=1e-12)

    def test_from_params_uses_default_label(self):
        line = generate(100.0, 1.0, 1.0, 1.0)
        summator = Summator.from_params(ArithmeticParams(signal_line1=line, signal_line2=line))
        summator.execute()
        assert summator.get_signal_line().get_params().graph_label == "Summation"

    def test_inputs_untouched(self):
        line1 = generate(100.0, 1.0, 3.0, 2.0)
        line2 = generate(100.0, 1.0, 5.0, 1.0)
        before = line1.y.copy()
        Summator(line1, line2).execute()
        np.testing.assert_array_equal(line1.y, before)


# =============================================================================
# MULTIPLICATION
# =============================================================================

class TestMultiplier:
    """Test elementwise multiplication."""

    def test_square(self):
        line = generate(100.0, 1.0, 2.0, 3.0)
        multiplier = Multiplier(line, line)
        multiplier.execute()
        result = multiplier.get_signal_line()
        np.testing.assert_allclose(result.y, line.y ** 2)
        assert result.get_params().graph_label == "Multiplication"

    def test_from_params_uses_default_label(self):
        line = generate(100.0, 1.0, 1.0, 1.0)
        multiplier = Multiplier.from_params(ArithmeticParams(signal_line1=line, signal_line2=line))
        multiplier.execute()
        assert multiplier.get_signal_line().get_params().graph_label == "Multiplication"

    def test_by_constant_line(self):
        line = SignalLine.from_arrays([0.0, 1.0, 2.0], [1.0, -2.0, 3.0])
        twos = SignalLine.from_arrays([0.0, 1.0, 2.0], [2.0, 2.0, 2.0])
        multiplier = Multiplier(line, twos)
        multiplier.execute()
        np.testing.assert_array_equal(multiplier.get_signal_line().y, [2.0, -4.0, 6.0])


# =============================================================================
# ERRORS
# =============================================================================

class TestArithmeticErrors:
    """Test error reporting shared by both operators."""

    def test_incompatible_counts(self):
        summator = Summator(generate(100.0, 1.0, 1.0, 1.0), generate(200.0, 1.0, 1.0, 1.0))
        with pytest.raises(SignalProcessingError) as exc_info:
            summator.execute()
        assert exc_info.value.kind is ErrorKind.INCOMPATIBLE_SIGNALS
        assert not summator.is_executed()

    def test_incompatible_range(self):
        line1 = SignalLine.from_arrays([0.0, 1.0], [1.0, 1.0])
        line2 = SignalLine.from_arrays([0.0, 2.0], [1.0, 1.0])
        multiplier = Multiplier(line1, line2)
        with pytest.raises(SignalProcessingError) as exc_info:
            multiplier.execute()
        assert exc_info.value.kind is ErrorKind.INCOMPATIBLE_SIGNALS

    def test_inaccuracy_loosens_check(self):
        line1 = SignalLine.from_arrays([0.0, 1.0], [1.0, 1.0])
        line2 = SignalLine.from_arrays([0.0, 1.05], [1.0, 1.0])
        multiplier = Multiplier(line1, line2, inaccuracy=0.1)
        multiplier.execute()
        np.testing.assert_array_equal(multiplier.get_signal_line().x, [0.0, 1.0])

    def test_none_operand(self):
        summator = Summator(generate(100.0, 1.0, 1.0, 1.0), None)
        with pytest.raises(SignalProcessingError) as exc_info:
            summator.execute()
        assert exc_info.value.kind is ErrorKind.NULL_REFERENCE

    def test_negative_inaccuracy(self):
        line = generate(100.0, 1.0, 1.0, 1.0)
        summator = Summator(line, line, inaccuracy=-1e-3)
        with pytest.raises(SignalProcessingError) as exc_info:
            summator.execute()
        assert exc_info.value.kind is ErrorKind.INVALID_PARAMETER

    def test_failed_execute_discards_previous_result(self):
        line1 = generate(100.0, 1.0, 1.0, 1.0)
        line2 = generate(100.0, 1.0, 2.0, 1.0)
        summator = Summator(line1, line2)
        summator.execute()
        assert summator.is_executed()

        line2.set_point(100, 99.0, 0.0)
        with pytest.raises(SignalProcessingError):
            summator.execute()
        assert not summator.is_executed()
        with pytest.raises(SignalProcessingError) as exc_info:
            summator.get_signal_line()
        assert exc_info.value.kind is ErrorKind.NOT_EXECUTED
