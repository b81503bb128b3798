"""Description handling: validation, sanitizing, parsing and normalization."""

from .models import AttributeSet, VoiceDescription, validate_description
from .parser import DescriptionParser, parse_description
from .sanitizer import SanitizeResult, sanitize

__all__ = [
    "AttributeSet",
    "DescriptionParser",
    "SanitizeResult",
    "VoiceDescription",
    "parse_description",
    "sanitize",
    "validate_description",
]
