"""
Errors Module

Single error type for every failure raised by signal lines and operators.
The failure category is carried by ``kind`` instead of a class hierarchy,
so callers branch on one attribute:

    try:
        integrator.execute()
    except SignalProcessingError as e:
        if e.kind is ErrorKind.INSUFFICIENT_POINTS:
            ...
"""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories surfaced to the caller."""
    INVALID_PARAMETER = 'invalid_parameter'
    NULL_REFERENCE = 'null_reference'
    INCOMPATIBLE_SIGNALS = 'incompatible_signals'
    INSUFFICIENT_POINTS = 'insufficient_points'
    UNSUPPORTED_METHOD = 'unsupported_method'
    NOT_EXECUTED = 'not_executed'


class SignalProcessingError(Exception):
    """
    Raised for any signal processing failure.

    Attributes:
        kind: ErrorKind describing the failure
        message: Human-readable description
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(f"[{kind.value}] {message}")
        self.kind = kind
        self.message = message


def invalid_parameter(message: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.INVALID_PARAMETER, message)


def null_reference(message: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.NULL_REFERENCE, message)


def incompatible_signals(message: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.INCOMPATIBLE_SIGNALS, message)


def insufficient_points(message: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.INSUFFICIENT_POINTS, message)


def unsupported_method(message: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.UNSUPPORTED_METHOD, message)


def not_executed(operator_name: str) -> SignalProcessingError:
    return SignalProcessingError(ErrorKind.NOT_EXECUTED, f"{operator_name} not executed")
