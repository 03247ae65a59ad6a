"""
Kernel Module Test Suite

Tests for the numpy kernels shared by the operators.
Verifies:
- Kernel isolation (no I/O, config or plotting dependencies)
- Sampling convention
- Integration and differencing contracts
- DC shift decision
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from signal_lines import kernel
from signal_lines.params import WaveForm


KERNEL_SOURCE = Path(__file__).parent.parent / 'signal_lines' / 'kernel.py'


# =============================================================================
# ISOLATION TESTS
# =============================================================================

class TestKernelIsolation:
    """Test that kernel module has no forbidden dependencies."""

    def test_no_io_imports(self):
        """Verify kernel has no file I/O dependencies."""
        source = KERNEL_SOURCE.read_text()
        for forbidden in ('import json', 'import os', 'from pathlib import', 'import pathlib'):
            assert forbidden not in source, f"Kernel should not import: {forbidden}"

    def test_no_config_imports(self):
        source = KERNEL_SOURCE.read_text()
        assert 'import config' not in source, "Kernel should not import config module"

    def test_no_matplotlib(self):
        source = KERNEL_SOURCE.read_text()
        assert 'matplotlib' not in source, "Kernel should not import matplotlib"


# =============================================================================
# SAMPLING
# =============================================================================

class TestSampling:
    """Test points count and time axis."""

    def test_points_count(self):
        assert kernel.compute_points_count(3.0, 200.0) == 601
        assert kernel.compute_points_count(1.0, 1000.0) == 1001
        assert kernel.compute_points_count(0.25, 10.0) == 4

    def test_time_axis(self):
        np.testing.assert_allclose(kernel.compute_time_axis(5, 4.0), [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_phase_argument(self):
        phase = kernel.compute_phase_argument(3, 4.0, 1.0, 0.5)
        np.testing.assert_allclose(phase, [0.5, 0.5 + np.pi / 2, 0.5 + np.pi])

    def test_deterministic_waveform(self):
        phase = kernel.compute_phase_argument(100, 100.0, 3.0, 0.0)
        first = kernel.evaluate_waveform(phase, WaveForm.COTANGENT, 1.0, 0.0, 10.0)
        second = kernel.evaluate_waveform(phase, WaveForm.COTANGENT, 1.0, 0.0, 10.0)
        np.testing.assert_array_equal(first, second)


# =============================================================================
# INTEGRATION AND DIFFERENCING
# =============================================================================

class TestIntegration:
    """Test integration rule contracts."""

    def test_trapezoidal_uneven_spacing(self):
        x = np.array([0.0, 1.0, 3.0])
        y = np.array([1.0, 1.0, 3.0])
        assert kernel.integrate_trapezoidal(x, y) == pytest.approx(1.0 + 4.0)

    def test_simpson_cubic_exact(self):
        x = np.linspace(0.0, 2.0, 7)
        assert kernel.integrate_simpson(x, x ** 3) == pytest.approx(4.0)

    def test_boole_single_panel(self):
        x = np.linspace(0.0, 4.0, 5)
        assert kernel.integrate_boole(x, np.ones(5)) == pytest.approx(4.0)


class TestDifferencing:
    """Test differencing contracts."""

    def test_central_shapes(self):
        x = np.arange(6.0)
        x_out, dy = kernel.differentiate_central(x, x ** 2)
        np.testing.assert_array_equal(x_out, x[1:-1])
        np.testing.assert_allclose(dy, 2.0 * x[1:-1])

    def test_edges(self):
        x = np.arange(4.0)
        x_out, dy = kernel.differentiate_central_and_edges(x, x ** 2, normalize_factor=2.0)
        np.testing.assert_array_equal(x_out, x)
        np.testing.assert_allclose(dy, [0.5, 1.0, 2.0, 2.5])


# =============================================================================
# DC SHIFT
# =============================================================================

class TestDCShift:
    """Test DC shift decision."""

    def test_centred_signal(self):
        assert kernel.compute_dc_shift(2.0, -2.0, 1e-9) == 0.0

    def test_offset_signal(self):
        assert kernel.compute_dc_shift(5.0, 1.0, 1e-9) == pytest.approx(-3.0)

    def test_within_inaccuracy(self):
        assert kernel.compute_dc_shift(2.0, -1.95, 0.1) == 0.0
