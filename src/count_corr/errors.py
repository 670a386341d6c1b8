from __future__ import annotations

"""
Errors raised while validating a table for a correlation report.

Both kinds end the call immediately; nothing is coerced and no partial result is returned.
"""


class CountCorrError(ValueError):
    """Base class for input problems detected before a fit is attempted."""


class MissingColumn(CountCorrError):
    def __init__(self, column: str, available: list[str] | None = None) -> None:
        self.column = column
        self.available = list(available or [])
        msg = f"column {column!r} not found in table"
        if self.available:
            msg += f" (available: {', '.join(map(str, self.available))})"
        super().__init__(msg)


class InvalidDomain(CountCorrError):
    """
    A value (or the column as a whole) cannot go through `log(value + 1)` + OLS.

    `column` names the offending column when there is one; `value` carries the first
    offending observation when the problem is a single value.
    """

    def __init__(self, message: str, *, column: str | None = None, value: object = None) -> None:
        self.column = column
        self.value = value
        super().__init__(message)
