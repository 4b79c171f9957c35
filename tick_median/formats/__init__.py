"""Output file formats."""

from .writer import EmissionWriter, OUTPUT_HEADER, DEFAULT_OUTPUT_NAME

__all__ = [
    'EmissionWriter',
    'OUTPUT_HEADER',
    'DEFAULT_OUTPUT_NAME',
]
