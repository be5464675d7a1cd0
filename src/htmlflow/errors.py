"""Error types raised by the conversion engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from htmlflow.model.diagnostic import Diagnostic


class ConversionError(Exception):
    """Base class for every failure surfaced by the engine."""


class EmptyInputError(ConversionError):
    """Raised when the markup text is empty or whitespace-only."""

    def __init__(self, message: str = "Markup input is empty") -> None:
        super().__init__(message)


class SelectorParseError(ConversionError):
    """Raised when selector text cannot be parsed by the selector grammar."""

    def __init__(
        self, message: str, selector: str = "", column: int | None = None
    ):
        self.selector = selector
        self.column = column
        super().__init__(message)


class ValidationError(ConversionError):
    """Raised when a finished document violates a structural invariant."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Document failed validation with {len(messages)} error(s): "
            + "; ".join(messages)
        )
