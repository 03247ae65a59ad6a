"""
Export Test Suite

Tests for flat files, plots and JSON summaries.
"""

import json

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from signal_lines import export
from signal_lines.generators import Generator
from signal_lines.signal_line import SignalLine


def generate_sine(graph_label="Signal") -> SignalLine:
    gen = Generator(sampling_frequency=100.0, duration=1.0, oscillation_frequency=1.0,
                    amplitude=1.5, graph_label=graph_label)
    gen.execute()
    return gen.get_signal_line()


# =============================================================================
# FLAT FILES
# =============================================================================

class TestFlatFiles:
    """Test tab-separated point files."""

    def test_file_format(self, tmp_path):
        line = SignalLine.from_arrays([0.0, 0.5, 1.0], [1.0, 2.0, 3.0])
        path = export.write_signal_line(line, tmp_path / "line.txt")
        assert path.read_text().splitlines() == ["0\t1", "0.5\t2", "1\t3"]

    def test_creates_parent_directories(self, tmp_path):
        line = SignalLine.from_arrays([0.0], [1.0])
        path = export.write_signal_line(line, tmp_path / "nested" / "dir" / "line.txt")
        assert path.is_file()

    def test_read_back(self, tmp_path):
        line = generate_sine()
        path = export.write_signal_line(line, tmp_path / "sine.txt")
        loaded = export.read_signal_line(path, graph_label="Loaded")

        assert loaded.points_count == line.points_count
        np.testing.assert_allclose(loaded.x, line.x, atol=1e-9)
        np.testing.assert_allclose(loaded.y, line.y, atol=1e-9)
        assert loaded.get_params().duration is None
        assert loaded.get_params().graph_label == "Loaded"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            export.read_signal_line(tmp_path / "missing.txt")

    def test_read_wrong_columns(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("0\t1\t2\n1\t2\t3\n")
        with pytest.raises(ValueError):
            export.read_signal_line(path)


# =============================================================================
# PLOTS
# =============================================================================

class TestPlots:
    """Test matplotlib rendering."""

    def test_plot_signal_files(self, tmp_path):
        path1 = export.write_signal_line(generate_sine(), tmp_path / "a.txt")
        path2 = export.write_signal_line(generate_sine(), tmp_path / "b.txt")
        plot = export.plot_signal_files([path1, path2], tmp_path / "plot.png", title="Two lines")
        assert plot.is_file()
        assert plot.stat().st_size > 0

    def test_label_count_mismatch(self, tmp_path):
        path = export.write_signal_line(generate_sine(), tmp_path / "a.txt")
        with pytest.raises(ValueError):
            export.plot_signal_files([path], tmp_path / "plot.png", graph_labels=["a", "b"])

    def test_export_signal_lines(self, tmp_path):
        lines = {'first': generate_sine("First"), 'second': generate_sine("Second")}
        created = export.export_signal_lines(lines, tmp_path, plot_name="both")

        assert created == [tmp_path / "first.txt", tmp_path / "second.txt", tmp_path / "both.png"]
        for path in created:
            assert path.is_file()

    def test_export_without_plots(self, tmp_path):
        created = export.export_signal_lines({'only': generate_sine()}, tmp_path, generate_plots=False)
        assert created == [tmp_path / "only.txt"]
        assert not (tmp_path / "only.png").exists()


# =============================================================================
# JSON
# =============================================================================

class TestJson:
    """Test summaries."""

    def test_describe_signal_line(self):
        description = export.describe_signal_line(generate_sine())
        assert description['points_count'] == 101
        assert description['x_range'] == [0.0, 1.0]
        assert description['max_value'] == pytest.approx(1.5)
        assert description['min_value'] == pytest.approx(-1.5)
        assert description['graph_label'] == "Signal"

    def test_save_json(self, tmp_path):
        data = {'rms': np.float64(1.25), 'counts': np.arange(3), 'ok': np.bool_(True)}
        path = export.save_json(data, tmp_path / "summary.json")
        with open(path) as f:
            loaded = json.load(f)
        assert loaded['schema_version'] == config.SCHEMA_VERSION
        assert loaded['rms'] == 1.25
        assert loaded['counts'] == [0, 1, 2]
        assert loaded['ok'] is True
