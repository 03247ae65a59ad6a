"""
Arithmetic Module

Pointwise combination of two compatible signal lines. Compatibility is the
approximate check of SignalLine.equals: same points count, first and last x
within the configured inaccuracy. The result is a count-built line whose x
coordinates come from the first operand.
"""

import logging
from typing import Optional

import numpy as np

from signal_lines.base import Operator
from signal_lines.errors import incompatible_signals, null_reference
from signal_lines.params import (
    DEFAULT_INACCURACY,
    DEFAULT_MULTIPLICATION_GRAPH_LABEL,
    DEFAULT_SUMMATION_GRAPH_LABEL,
    DEFAULT_X_LABEL,
    DEFAULT_Y_LABEL,
    ArithmeticParams,
)
from signal_lines.signal_line import SignalLine

LOGGER = logging.getLogger(__name__)


class _PointwiseOperator(Operator):
    """Shared validation and output construction for Summator and Multiplier."""

    default_graph_label: str = "Graph"

    def __init__(
        self,
        signal_line1: Optional[SignalLine],
        signal_line2: Optional[SignalLine],
        inaccuracy: float = DEFAULT_INACCURACY,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: Optional[str] = None
    ) -> None:
        super().__init__(ArithmeticParams(
            signal_line1=signal_line1,
            signal_line2=signal_line2,
            inaccuracy=inaccuracy,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        ))

    def get_signal_line(self) -> SignalLine:
        return self._get_result()

    def _combine(self, y1: np.ndarray, y2: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _compute(self) -> SignalLine:
        params: ArithmeticParams = self._params
        line1, line2 = params.signal_line1, params.signal_line2
        if line1 is None or line2 is None:
            raise null_reference("Invalid signal lines (None)")
        if not line1.equals(line2, params.inaccuracy):
            raise incompatible_signals(
                f"Signal lines aren't compatible: {line1.points_count} vs "
                f"{line2.points_count} points (inaccuracy {params.inaccuracy})"
            )

        graph_label = params.graph_label if params.graph_label is not None else self.default_graph_label
        line = SignalLine.from_points_count(
            line1.points_count, params.x_label, params.y_label, graph_label
        )
        line._assign(line1.x, self._combine(line1.y, line2.y))

        LOGGER.debug("%s combined %d points", self.name, line1.points_count)
        return line


class Summator(_PointwiseOperator):
    """Elementwise sum y1 + y2 of two compatible lines."""

    name = "Summator"
    default_graph_label = DEFAULT_SUMMATION_GRAPH_LABEL

    def _combine(self, y1: np.ndarray, y2: np.ndarray) -> np.ndarray:
        return y1 + y2


class Multiplier(_PointwiseOperator):
    """Elementwise product y1 * y2 of two compatible lines."""

    name = "Multiplier"
    default_graph_label = DEFAULT_MULTIPLICATION_GRAPH_LABEL

    def _combine(self, y1: np.ndarray, y2: np.ndarray) -> np.ndarray:
        return y1 * y2
