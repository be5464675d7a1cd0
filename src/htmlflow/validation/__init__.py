from htmlflow.errors import ValidationError
from htmlflow.validation.rules import ALL_RULES
from htmlflow.validation.validator import validate, validate_or_raise

__all__ = ["ALL_RULES", "ValidationError", "validate", "validate_or_raise"]
