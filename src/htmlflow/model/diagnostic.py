"""Diagnostic model: structured findings about a clipboard document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding about a document.

    Attributes:
        rule: Identifier for the validation rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        node_id: The node involved, if applicable.
        style_id: The style involved, if applicable.
    """

    rule: str
    severity: Severity
    message: str
    node_id: str | None = None
    style_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.node_id:
            location = f" [node={self.node_id}]"
        elif self.style_id:
            location = f" [style={self.style_id}]"
        return f"{self.severity.value}{location}: {self.message}"
