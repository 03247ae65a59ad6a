"""
CLI Test Suite

Tests for the single-signal processing path of the command line driver.
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import cli


def make_params(**overrides):
    params = {
        'name': 'test_signal',
        'waveform': 'sine',
        'frequency': 50.0,
        'amplitude': 3.0,
        'sampling_frequency': 1000.0,
        'duration': 1.0,
        'init_phase': 0.0,
        'offset_y': 0.0,
        'clamp_value': 10.0,
        'noise_amplitude': 0.0,
        'seed': None,
        'integration_method': 'trapezoidal',
        'differentiation_method': 'central_and_edges',
        'sweep': None,
        'use_absolute_value': False,
        'generate_plots': False,
    }
    params.update(overrides)
    return params


class TestProcessSignal:
    """Test process_signal outputs."""

    def test_outputs_created(self, tmp_path):
        assert cli.process_signal(tmp_path, make_params())
        assert (tmp_path / "test_signal.txt").is_file()
        assert (tmp_path / "test_signal_derivative.txt").is_file()
        assert (tmp_path / "test_signal_summary.json").is_file()

    def test_summary_values(self, tmp_path):
        cli.process_signal(tmp_path, make_params(sweep=(45.0, 55.0, 1.0)))
        with open(tmp_path / "test_signal_summary.json") as f:
            summary = json.load(f)
        assert summary['amplitude'] == pytest.approx(3.0, rel=1e-6)
        assert summary['peak_frequency_hz'] == pytest.approx(50.0)
        assert (tmp_path / "test_signal_spectrum.txt").is_file()

    def test_negative_noise_reported(self, tmp_path, capsys):
        assert not cli.process_signal(tmp_path, make_params(noise_amplitude=-1.0))
        assert "ERROR" in capsys.readouterr().err

    def test_failure_returns_false(self, tmp_path, capsys):
        assert not cli.process_signal(tmp_path, make_params(duration=-1.0))
        assert "ERROR" in capsys.readouterr().err


class TestParseSweep:
    """Test sweep argument handling."""

    def test_no_sweep(self):
        assert cli.parse_sweep(None, None, 1.0) is None

    def test_full_sweep(self):
        assert cli.parse_sweep(0.0, 100.0, 2.0) == (0.0, 100.0, 2.0)

    def test_partial_sweep(self):
        with pytest.raises(ValueError):
            cli.parse_sweep(0.0, None, 1.0)
