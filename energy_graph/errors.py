from __future__ import annotations


class EnergyGraphError(Exception):
    """Base class for errors raised while building or rendering a graph."""


class DegenerateRangeError(EnergyGraphError, ValueError):
    """An axis transform was requested over a zero-width value range."""


class MissingFieldError(EnergyGraphError, KeyError):
    """A composite was asked to plot a column the sample does not carry."""

    def __init__(self, column: str, message: str | None = None) -> None:
        super().__init__(message or f"sample has no column `{column}`")
        self.column = column

    def __str__(self) -> str:
        return str(self.args[0])


class UndefinedTangentError(EnergyGraphError, ArithmeticError):
    """Neighbouring points of a cubic segment share an x coordinate."""


class SampleDataError(EnergyGraphError, ValueError):
    """Raw samples could not be coerced into a numeric series."""
