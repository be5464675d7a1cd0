"""Htmlflow: convert HTML and CSS into a design-tool clipboard document."""

__version__ = "0.1.0"

from htmlflow.config import ConverterConfig  # noqa: E402
from htmlflow.engine.converter import Converter, convert  # noqa: E402
from htmlflow.errors import (  # noqa: E402
    ConversionError,
    EmptyInputError,
    SelectorParseError,
    ValidationError,
)
from htmlflow.model.document import ClipboardDocument  # noqa: E402

__all__ = [
    "__version__",
    "convert",
    "Converter",
    "ConverterConfig",
    "ClipboardDocument",
    "ConversionError",
    "EmptyInputError",
    "SelectorParseError",
    "ValidationError",
]
