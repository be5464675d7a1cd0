"""Document validator: runs all validation rules and reports diagnostics."""

from __future__ import annotations

from typing import Any, Callable

from htmlflow.errors import ValidationError
from htmlflow.model.diagnostic import Diagnostic
from htmlflow.validation.rules import ALL_RULES

RuleFunc = Callable[[Any], list[Diagnostic]]


def validate(
    document: Any, extra_rules: list[RuleFunc] | None = None
) -> list[Diagnostic]:
    """Run all validation rules against the JSON form of *document*.

    Returns the full list of diagnostics (errors, warnings, info).
    """
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(document))
    return diagnostics


def validate_or_raise(
    document: Any, extra_rules: list[RuleFunc] | None = None
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    diagnostics = validate(document, extra_rules=extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
