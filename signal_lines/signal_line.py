"""
Signal Line Module

A signal line is a fixed-length sequence of (x, y) points plus a descriptive
parameter record (SignalLineParams). x is time for generated signals and
frequency for spectra produced by the FrequencyAnalyzer.

The shape of a line is fixed at construction. Only point values and the two
cached extrema change afterwards, through set_point, find_max/find_min and
remove_dc_component.

CACHING:
- find_max/find_min store their result in params.max_value/min_value
- Later calls return the cached value unless force_update=True
- set_point does NOT invalidate the cache; refreshing it after mutation is
  the caller's job
"""

import logging
from dataclasses import replace
from typing import Callable, Iterator, NamedTuple, Optional, Union

import numpy as np

from signal_lines import kernel
from signal_lines.errors import invalid_parameter, null_reference
from signal_lines.params import (
    DEFAULT_AMPLITUDE,
    DEFAULT_DURATION_SEC,
    DEFAULT_FREQ_HZ,
    DEFAULT_GRAPH_LABEL,
    DEFAULT_INACCURACY,
    DEFAULT_INIT_PHASE,
    DEFAULT_NORMALIZE_FACTOR,
    DEFAULT_OFFSET_Y,
    DEFAULT_SAMPLING_FREQ_HZ,
    DEFAULT_X_LABEL,
    DEFAULT_Y_LABEL,
    Preference,
    SignalLineParams,
    coerce_enum,
    validate_inaccuracy,
    validate_time_domain,
)

LOGGER = logging.getLogger(__name__)


class Point(NamedTuple):
    """A single sample: x is time (or frequency), y is the value."""
    x: float
    y: float


class SignalLine:
    """
    Discrete signal formed by a series of points.

    Constructors:
        SignalLine(sampling_frequency, duration, ...)  time-domain line
        SignalLine.from_points_count(n)                 zero scaffold, no time info
        SignalLine.from_params(params, preference)      from a parameter record
        SignalLine.copy_of(line, offset_x, offset_y)    shifted copy
        SignalLine.from_arrays(x, y)                    wrap sample arrays

    All constructors initialize points to (0.0, 0.0) except copy_of and
    from_arrays; none of them synthesize a waveform (see Generator).
    """

    def __init__(
        self,
        sampling_frequency: float = DEFAULT_SAMPLING_FREQ_HZ,
        duration: float = DEFAULT_DURATION_SEC,
        oscillation_frequency: Optional[float] = DEFAULT_FREQ_HZ,
        init_phase: Optional[float] = DEFAULT_INIT_PHASE,
        offset_y: Optional[float] = DEFAULT_OFFSET_Y,
        amplitude: Optional[float] = DEFAULT_AMPLITUDE,
        normalize_factor: Optional[float] = DEFAULT_NORMALIZE_FACTOR,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: str = DEFAULT_GRAPH_LABEL
    ) -> None:
        """
        Build a zero-valued line covering [0, duration] at sampling_frequency.

        Raises:
            SignalProcessingError(INVALID_PARAMETER): duration or sampling
                frequency not positive
        """
        validate_time_domain(sampling_frequency, duration)
        points_count = kernel.compute_points_count(duration, sampling_frequency)
        self._params = SignalLineParams(
            points_count=points_count,
            sampling_frequency=sampling_frequency,
            duration=duration,
            oscillation_frequency=oscillation_frequency,
            init_phase=init_phase,
            offset_y=offset_y,
            amplitude=amplitude,
            normalize_factor=normalize_factor,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        )
        self._x = np.zeros(points_count, dtype=np.float64)
        self._y = np.zeros(points_count, dtype=np.float64)

    # -------------------------------------------------------------------------
    # Alternate constructors
    # -------------------------------------------------------------------------

    @classmethod
    def _from_storage(cls, params: SignalLineParams, x: np.ndarray, y: np.ndarray) -> 'SignalLine':
        line = cls.__new__(cls)
        line._params = params
        line._x = x
        line._y = y
        return line

    @classmethod
    def from_points_count(
        cls,
        points_count: int,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: str = DEFAULT_GRAPH_LABEL
    ) -> 'SignalLine':
        """
        Zero-valued scaffold of points_count points with no time-domain parameters.

        Raises:
            SignalProcessingError(INVALID_PARAMETER): points_count < 1
        """
        points_count = int(points_count)
        if points_count < 1:
            raise invalid_parameter(f"Points count should be positive, got {points_count}")
        params = SignalLineParams(
            points_count=points_count,
            x_label=x_label,
            y_label=y_label,
            graph_label=graph_label,
        )
        return cls._from_storage(
            params,
            np.zeros(points_count, dtype=np.float64),
            np.zeros(points_count, dtype=np.float64),
        )

    @classmethod
    def from_params(
        cls,
        params: SignalLineParams,
        preference: Union[Preference, str] = Preference.AUTO
    ) -> 'SignalLine':
        """
        Zero-valued line shaped by a parameter record.

        The points count comes from duration/sampling frequency or from
        params.points_count depending on preference. Labels, normalize factor
        and descriptive fields are carried over; the extrema caches start empty.

        Raises:
            SignalProcessingError(INVALID_PARAMETER): the fields required by
                the preference are missing or invalid
            SignalProcessingError(UNSUPPORTED_METHOD): unknown preference
        """
        preference = coerce_enum(Preference, preference, 'preference')
        has_time_domain = params.duration is not None and params.sampling_frequency is not None

        if preference is Preference.PREFER_DURATION_AND_SAMPLING_FREQ or (
            preference is Preference.AUTO and has_time_domain
        ):
            validate_time_domain(params.sampling_frequency, params.duration)
            points_count = kernel.compute_points_count(params.duration, params.sampling_frequency)
        else:
            points_count = int(params.points_count)
            if points_count < 1:
                raise invalid_parameter(
                    "Neither duration with sampling frequency nor a positive points count is set"
                )

        new_params = replace(params, points_count=points_count, max_value=None, min_value=None)
        return cls._from_storage(
            new_params,
            np.zeros(points_count, dtype=np.float64),
            np.zeros(points_count, dtype=np.float64),
        )

    @classmethod
    def copy_of(
        cls,
        signal_line: Optional['SignalLine'],
        offset_x: float = 0.0,
        offset_y: float = 0.0
    ) -> 'SignalLine':
        """
        Copy a line, shifting every point by (offset_x, offset_y).

        The parameter record is copied; the extrema caches start empty.

        Raises:
            SignalProcessingError(NULL_REFERENCE): signal_line is None
        """
        if signal_line is None:
            raise null_reference("Signal line to copy is not specified")
        params = replace(signal_line._params, max_value=None, min_value=None)
        return cls._from_storage(params, signal_line._x + offset_x, signal_line._y + offset_y)

    @classmethod
    def from_arrays(
        cls,
        x: np.ndarray,
        y: np.ndarray,
        x_label: str = DEFAULT_X_LABEL,
        y_label: str = DEFAULT_Y_LABEL,
        graph_label: str = DEFAULT_GRAPH_LABEL
    ) -> 'SignalLine':
        """
        Wrap existing sample arrays (copied) as a count-built line.

        Raises:
            SignalProcessingError(INVALID_PARAMETER): arrays empty, not 1-D or
                of different lengths
        """
        x = np.array(x, dtype=np.float64)
        y = np.array(y, dtype=np.float64)
        if x.ndim != 1 or y.ndim != 1 or len(x) != len(y):
            raise invalid_parameter(f"x and y must be 1-D arrays of equal length, got {x.shape} and {y.shape}")
        line = cls.from_points_count(len(x), x_label, y_label, graph_label)
        line._x[:] = x
        line._y[:] = y
        return line

    # -------------------------------------------------------------------------
    # Point access
    # -------------------------------------------------------------------------

    def set_point(self, index: int, x: float, y: float) -> None:
        """Replace the point at index. Raises IndexError when out of range."""
        self._check_index(index)
        self._x[index] = x
        self._y[index] = y

    def get_point(self, index: int) -> Point:
        """Point at index. Raises IndexError when out of range."""
        self._check_index(index)
        return Point(float(self._x[index]), float(self._y[index]))

    def get_params(self) -> SignalLineParams:
        return self._params

    @property
    def points_count(self) -> int:
        return self._params.points_count

    @property
    def x(self) -> np.ndarray:
        """Read-only view of the x coordinates."""
        view = self._x.view()
        view.flags.writeable = False
        return view

    @property
    def y(self) -> np.ndarray:
        """Read-only view of the y coordinates."""
        view = self._y.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._params.points_count

    def __iter__(self) -> Iterator[Point]:
        for x, y in zip(self._x, self._y):
            yield Point(float(x), float(y))

    def __repr__(self) -> str:
        return (f"SignalLine(points_count={self._params.points_count}, "
                f"duration={self._params.duration}, "
                f"sampling_frequency={self._params.sampling_frequency}, "
                f"graph_label={self._params.graph_label!r})")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._params.points_count:
            raise IndexError(
                f"Point index {index} out of range [0, {self._params.points_count})"
            )

    def _assign(self, x: np.ndarray, y: np.ndarray) -> None:
        # Bulk write used by operators producing this line
        self._x[:] = x
        self._y[:] = y

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def equals(self, signal_line: Optional['SignalLine'], inaccuracy: Optional[float] = DEFAULT_INACCURACY) -> bool:
        """
        Approximate compatibility check.

        Two lines are compatible when their points counts match and their
        first and last x coordinates agree within inaccuracy. Interior points
        are not compared.

        Raises:
            SignalProcessingError(NULL_REFERENCE): signal_line is None
            SignalProcessingError(INVALID_PARAMETER): negative inaccuracy
        """
        if signal_line is None:
            raise null_reference("Signal line to compare is not specified")
        inaccuracy = validate_inaccuracy(inaccuracy)

        if self.points_count != signal_line.points_count:
            return False
        last = self.points_count - 1
        return (
            self.are_close_x(self.get_point(0), signal_line.get_point(0), inaccuracy) and
            self.are_close_x(self.get_point(last), signal_line.get_point(last), inaccuracy)
        )

    @staticmethod
    def are_close_x(point1: Point, point2: Point, inaccuracy: Optional[float] = DEFAULT_INACCURACY) -> bool:
        inaccuracy = validate_inaccuracy(inaccuracy)
        return abs(point1.x - point2.x) <= inaccuracy

    @staticmethod
    def are_close_y(point1: Point, point2: Point, inaccuracy: Optional[float] = DEFAULT_INACCURACY) -> bool:
        inaccuracy = validate_inaccuracy(inaccuracy)
        return abs(point1.y - point2.y) <= inaccuracy

    @staticmethod
    def are_close(point1: Point, point2: Point, inaccuracy: Optional[float] = DEFAULT_INACCURACY) -> bool:
        return (SignalLine.are_close_x(point1, point2, inaccuracy) and
                SignalLine.are_close_y(point1, point2, inaccuracy))

    # -------------------------------------------------------------------------
    # Extrema
    # -------------------------------------------------------------------------

    def find_max(self, force_update: bool = False) -> float:
        """Maximum y, cached in params.max_value."""
        if self._params.max_value is None or force_update:
            self._params.max_value = self._find_by(np.max)
        return self._params.max_value

    def find_min(self, force_update: bool = False) -> float:
        """Minimum y, cached in params.min_value."""
        if self._params.min_value is None or force_update:
            self._params.min_value = self._find_by(np.min)
        return self._params.min_value

    def _find_by(self, reducer: Callable[[np.ndarray], float]) -> float:
        return float(reducer(self._y))

    # -------------------------------------------------------------------------
    # DC component
    # -------------------------------------------------------------------------

    def remove_dc_component(self, inaccuracy: Optional[float] = DEFAULT_INACCURACY) -> float:
        """
        Centre the line around zero in place.

        Uses the (possibly cached) extrema: when |min| is not within
        inaccuracy of |max|, every y is shifted by -(max + min) / 2 and the
        extrema caches are recomputed.

        Returns:
            The applied shift (0.0 when the line was already centred)
        """
        inaccuracy = validate_inaccuracy(inaccuracy)
        shift = kernel.compute_dc_shift(self.find_max(), self.find_min(), inaccuracy)
        if shift != 0.0:
            self._y += shift
            self.find_max(force_update=True)
            self.find_min(force_update=True)
            LOGGER.debug("Removed DC component %.6g from %r", -shift, self._params.graph_label)
        return shift
