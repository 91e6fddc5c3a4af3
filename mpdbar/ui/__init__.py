"""
mpdbar UI - Text rendering and bar output.
"""
from .fields import derive_fields, format_duration
from .output import BarWriter
from .template import FormatTemplate, TemplateError
from .widget import ButtonWidget

__all__ = [
    'derive_fields',
    'format_duration',
    'BarWriter',
    'FormatTemplate',
    'TemplateError',
    'ButtonWidget',
]
