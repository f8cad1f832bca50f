"""Exceptions raised by the conversion pipeline."""


class ConversionError(Exception):
    """Base exception for conversion failures."""


class DescriptorError(ConversionError):
    """Raised when a descriptor file cannot be parsed as XML."""


class RecipeWriteError(ConversionError):
    """Raised when a rendered recipe cannot be written to disk."""
