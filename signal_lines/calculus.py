"""
Calculus Module

Integrator: definite integral of a signal line over its x range
(trapezoidal, Simpson or Boole rule).
Differentiator: pointwise derivative dy/dx by finite differences.
"""

import logging
from dataclasses import replace
from typing import Optional, Union

from signal_lines import kernel
from signal_lines.base import Operator
from signal_lines.errors import insufficient_points, null_reference
from signal_lines.params import (
    DEFAULT_DIFF_GRAPH_LABEL,
    DEFAULT_DIFF_METHOD,
    DEFAULT_DIFF_PERFORM_NORMALIZATION,
    DEFAULT_INTEGRATION_METHOD,
    DEFAULT_X_LABEL,
    DEFAULT_Y_LABEL,
    DifferentiationMethod,
    DifferentiatorParams,
    IntegrationMethod,
    IntegratorParams,
    Preference,
    coerce_enum,
)
from signal_lines.signal_line import SignalLine

LOGGER = logging.getLogger(__name__)


class Integrator(Operator):
    """
    Numerical integration of a signal line.

    Point count requirements:
        TRAPEZOIDAL: >= 2
        SIMPSON: odd (>= 3)
        BOOLE: 4k + 1 (>= 5)
    """

    name = "Integrator"

    def __init__(
        self,
        signal_line: Optional[SignalLine],
        method: Union[IntegrationMethod, str] = DEFAULT_INTEGRATION_METHOD
    ) -> None:
        super().__init__(IntegratorParams(signal_line=signal_line, method=method))

    def get_integral(self) -> float:
        return self._get_result()

    def _compute(self) -> float:
        params: IntegratorParams = self._params
        line = params.signal_line
        if line is None:
            raise null_reference("Invalid signal line (None)")
        method = coerce_enum(IntegrationMethod, params.method, 'integration method')

        points_count = line.points_count
        if points_count < 2:
            raise insufficient_points(
                f"Insufficient number of points: at least 2 points are required, got {points_count}"
            )

        if method is IntegrationMethod.TRAPEZOIDAL:
            integral = kernel.integrate_trapezoidal(line.x, line.y)
        elif method is IntegrationMethod.SIMPSON:
            if points_count % 2 == 0:
                raise insufficient_points(
                    f"Simpson's rule requires an odd number of points, got {points_count}"
                )
            integral = kernel.integrate_simpson(line.x, line.y)
        else:
            if points_count % 4 != 1:
                raise insufficient_points(
                    f"Boole's rule requires number of points to be 4k + 1, got {points_count}"
                )
            integral = kernel.integrate_boole(line.x, line.y)

        LOGGER.debug("Integrated %d points (%s): %.6g", points_count, method.value, integral)
        return integral


class Differentiator(Operator):
    """
    Finite-difference derivative of a signal line.

    CENTRAL_ONLY drops the first and last point; CENTRAL_AND_EDGES keeps
    them using one-sided differences. With perform_normalization the
    derivative is divided by the input's normalize_factor, which turns the
    derivative of a generated wave back into a per-cycle rate.

    The output keeps the input's parameter record with the new points count
    and labels. Each output point keeps the x coordinate of the input point
    it was evaluated at.
    """

    name = "Differentiator"

    def __init__(
        self,
        signal_line: Optional[SignalLine],
        perform_normalization: bool = DEFAULT_DIFF_PERFORM_NORMALIZATION,
        method: Union[DifferentiationMethod, str] = DEFAULT_DIFF_METHOD,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: str = DEFAULT_DIFF_GRAPH_LABEL
    ) -> None:
        super().__init__(DifferentiatorParams(
            signal_line=signal_line,
            perform_normalization=perform_normalization,
            method=method,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        ))

    def get_signal_line(self) -> SignalLine:
        return self._get_result()

    def _compute(self) -> SignalLine:
        params: DifferentiatorParams = self._params
        line = params.signal_line
        if line is None:
            raise null_reference("Invalid signal line (None)")
        method = coerce_enum(DifferentiationMethod, params.method, 'differentiation method')

        points_count = line.points_count
        central_only = method is DifferentiationMethod.CENTRAL_ONLY
        required = 3 if central_only else 2
        if points_count < required:
            raise insufficient_points(
                f"Insufficient number of points: {method.value} requires at least "
                f"{required}, got {points_count}"
            )

        source_params = line.get_params()
        normalize_factor = 1.0
        if params.perform_normalization and source_params.normalize_factor is not None:
            normalize_factor = source_params.normalize_factor

        if central_only:
            x_out, dy_dx = kernel.differentiate_central(line.x, line.y, normalize_factor)
        else:
            x_out, dy_dx = kernel.differentiate_central_and_edges(line.x, line.y, normalize_factor)

        result = SignalLine.from_params(
            replace(
                source_params,
                points_count=len(x_out),
                x_label=params.x_label,
                y_label=params.y_label,
                graph_label=params.graph_label,
            ),
            Preference.PREFER_POINTS_COUNT
        )
        result._assign(x_out, dy_dx)

        LOGGER.debug("Differentiated %d -> %d points (%s, factor %.6g)",
                     points_count, len(x_out), method.value, normalize_factor)
        return result
