"""
Operator base class.

Every operator follows the same two-phase lifecycle:

    op = Summator(line1, line2)   # Constructed: parameters stored, nothing computed
    op.execute()                  # Executed: result available
    op.get_signal_line()

A failed execute() raises and leaves the operator un-executed; any result of
an earlier successful run is discarded first. Result accessors raise
NOT_EXECUTED until execute() succeeds.
"""

from typing import Any

from signal_lines.errors import not_executed


class Operator:
    """
    Shared state machine for generators, processors and analyzers.

    Subclasses implement _compute() and may override _validate_params(),
    which runs at construction time.
    """

    name: str = "Operator"

    def __init__(self, params: Any) -> None:
        self._validate_params(params)
        self._params = params
        self._result: Any = None
        self._is_executed: bool = False

    @classmethod
    def from_params(cls, params: Any) -> 'Operator':
        """Build the operator from its parameter record."""
        operator = cls.__new__(cls)
        Operator.__init__(operator, params)
        return operator

    def get_params(self) -> Any:
        return self._params

    def is_executed(self) -> bool:
        return self._is_executed

    def execute(self) -> None:
        self._is_executed = False
        self._result = None
        result = self._compute()
        self._result = result
        self._is_executed = True

    def _validate_params(self, params: Any) -> None:
        pass

    def _compute(self) -> Any:
        raise NotImplementedError

    def _get_result(self) -> Any:
        if not self._is_executed:
            raise not_executed(self.name)
        return self._result
