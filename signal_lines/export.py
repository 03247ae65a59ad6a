"""
Export Module

Flat-file output, plots and JSON summaries for signal lines.

Flat-file format: one line per point in index order, two tab-separated
fields "x<TAB>y", no header. Plots are rendered with matplotlib from one or
more flat files.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

import config
from signal_lines.params import DEFAULT_GRAPH_LABEL, DEFAULT_X_LABEL, DEFAULT_Y_LABEL
from signal_lines.signal_line import SignalLine

PathLike = Union[str, Path]


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        return super().default(obj)


# =============================================================================
# FLAT FILES
# =============================================================================

def write_signal_line(signal_line: SignalLine, output_path: PathLike) -> Path:
    """
    Write a signal line as tab-separated "x<TAB>y" rows.

    Parameters:
        signal_line: Line to write
        output_path: Destination file (parent directories are created)

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = np.column_stack((signal_line.x, signal_line.y))
    np.savetxt(output_path, rows, fmt=config.FLAT_FILE_FLOAT_FORMAT, delimiter='\t')
    return output_path


def read_signal_line(
    input_path: PathLike,
    x_label: str = DEFAULT_X_LABEL,
    y_label: str = DEFAULT_Y_LABEL,
    graph_label: str = DEFAULT_GRAPH_LABEL
) -> SignalLine:
    """
    Load a flat file written by write_signal_line.

    The result is a count-built line: no duration or sampling frequency.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no rows or not exactly two columns
    """
    input_path = Path(input_path)
    if not input_path.is_file():
        raise FileNotFoundError(f"Can't find file: {input_path}")

    rows = np.loadtxt(input_path, delimiter='\t', ndmin=2)
    if rows.shape[0] == 0 or rows.shape[1] != 2:
        raise ValueError(f"Expected non-empty two-column data in {input_path}, got shape {rows.shape}")

    return SignalLine.from_arrays(rows[:, 0], rows[:, 1], x_label, y_label, graph_label)


# =============================================================================
# PLOTS
# =============================================================================

def plot_signal_files(
    file_paths: Sequence[PathLike],
    output_path: PathLike,
    graph_labels: Optional[Sequence[str]] = None,
    x_label: str = DEFAULT_X_LABEL,
    y_label: str = DEFAULT_Y_LABEL,
    title: Optional[str] = None
) -> Path:
    """
    Plot one or more flat files as line series on shared axes.

    Parameters:
        file_paths: Flat files to plot (x in column 1, y in column 2)
        output_path: Image file to save
        graph_labels: Legend entry per file (defaults to file stems)
        x_label: X axis label
        y_label: Y axis label
        title: Figure title (None = no title)

    Returns:
        Path of the saved image

    Raises:
        FileNotFoundError: If any input file doesn't exist
        ValueError: If graph_labels doesn't match file_paths in length
    """
    file_paths = [Path(p) for p in file_paths]
    if graph_labels is None:
        graph_labels = [p.stem for p in file_paths]
    if len(graph_labels) != len(file_paths):
        raise ValueError(
            f"Got {len(graph_labels)} graph labels for {len(file_paths)} files"
        )

    lines = [read_signal_line(path) for path in file_paths]

    fig, ax = plt.subplots(figsize=config.PLOT_FIGSIZE)
    for line, label in zip(lines, graph_labels):
        ax.plot(line.x, line.y, label=label, linewidth=config.PLOT_LINE_WIDTH)

    ax.set_xlabel(x_label, fontsize=10)
    ax.set_ylabel(y_label, fontsize=10)
    if title:
        ax.set_title(title, fontsize=12, fontweight='bold')
    ax.legend(loc='upper right', fontsize=9)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=config.PLOT_DPI, bbox_inches='tight')
    plt.close(fig)
    return output_path


def export_signal_lines(
    signal_lines: Dict[str, SignalLine],
    output_dir: PathLike,
    plot_name: Optional[str] = None,
    generate_plots: bool = True
) -> List[Path]:
    """
    Write each line to "<name>.txt" and optionally plot them together.

    The plot takes its axis labels from the first line and its legend from
    each line's graph_label.

    Parameters:
        signal_lines: Mapping of file stem -> line
        output_dir: Output directory
        plot_name: Stem of the plot image (defaults to the first file stem)
        generate_plots: Whether to render the plot

    Returns:
        List of created files
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    created_files = []
    for name, line in signal_lines.items():
        created_files.append(write_signal_line(line, output_dir / f"{name}.txt"))

    if generate_plots and signal_lines:
        first = next(iter(signal_lines.values())).get_params()
        plot_stem = plot_name or next(iter(signal_lines))
        plot_path = plot_signal_files(
            created_files,
            output_dir / f"{plot_stem}.png",
            graph_labels=[line.get_params().graph_label for line in signal_lines.values()],
            x_label=first.x_label,
            y_label=first.y_label,
        )
        created_files.append(plot_path)

    return created_files


# =============================================================================
# JSON
# =============================================================================

def describe_signal_line(signal_line: SignalLine) -> Dict:
    """
    Summary dict of a line: its parameter record plus x range and extrema.

    Extrema are read through find_max/find_min, so they fill the line's
    cache if it was empty.
    """
    description = asdict(signal_line.get_params())
    description['x_range'] = [float(signal_line.x[0]), float(signal_line.x[-1])]
    description['max_value'] = signal_line.find_max()
    description['min_value'] = signal_line.find_min()
    return description


def save_json(data: Dict, output_path: PathLike) -> Path:
    """
    Save data as JSON with pretty printing.

    Parameters:
        data: Dictionary to save
        output_path: Path to output file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        json.dump({'schema_version': config.SCHEMA_VERSION, **data}, f, indent=2, cls=NumpyEncoder)
    return output_path
