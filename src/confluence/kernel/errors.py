"""Error types for combinator contract violations."""

from __future__ import annotations


class CombinatorError(Exception):
    """Base class for errors raised by confluence."""


class ContractViolation(CombinatorError):
    """A pollable was used in a way its contract forbids.

    These are programming errors, never recoverable outcomes. The label of
    the offending object is preserved for debugging.
    """

    def __init__(self, message: str, label: str | None = None) -> None:
        self.label = label
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({super().__str__()!r}, label={self.label!r})"


class PolledAfterCompletionError(ContractViolation):
    """A combinator or stream was driven after yielding its final value."""


class PolledAfterTakenError(ContractViolation):
    """A completion cell was driven after its value was taken."""
