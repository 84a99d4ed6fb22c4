"""Exception taxonomy shared by every hydrostats routine."""

from __future__ import annotations


class HydroStatsError(Exception):
    """Base class for errors raised by the statistics engine."""


class DataError(HydroStatsError, ValueError):
    """Input data has the wrong shape, length or content.

    Raised for empty series, mismatched paired lengths, non-finite values,
    ragged or non-square matrices, and results that are undefined for the
    given data (for example zero variance).
    """


class DomainError(HydroStatsError, ValueError):
    """A parameter lies outside its valid range."""


class NumericalError(HydroStatsError, ArithmeticError):
    """An iterative method failed to converge or a pivot vanished."""


class OperationCancelled(HydroStatsError):
    """A long-running loop observed a cancellation request."""


def raise_if_cancelled(cancel, where: str) -> None:
    """Raise :class:`OperationCancelled` when ``cancel`` has been set.

    ``cancel`` is any object exposing ``is_set()``, such as
    :class:`threading.Event`. ``None`` disables the check.
    """
    if cancel is not None and cancel.is_set():
        raise OperationCancelled(f"{where} cancelled by caller.")
