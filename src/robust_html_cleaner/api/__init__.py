"""Consumer-facing integrations for cleaned tag trees."""

from .adapters import ConversionResult, LxmlAdapter, LxmlExportError, to_lxml

__all__ = [
    "ConversionResult",
    "LxmlAdapter",
    "LxmlExportError",
    "to_lxml",
]
