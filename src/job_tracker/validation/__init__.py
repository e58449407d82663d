"""
Response decoding for LLM outputs.

Components:
- extract_json / ResponseParser: JSON object extraction and decoding
- normalize_status: free-text status label to JobStatus
- exceptions: ValidationError, JSONParseError, SchemaValidationError
"""

from .exceptions import (
    JSONParseError,
    SchemaValidationError,
    ValidationError,
)
from .response_parser import ResponseParser, extract_json
from .status_normalizer import STATUS_KEYWORDS, normalize_status

__all__ = [
    "ValidationError",
    "JSONParseError",
    "SchemaValidationError",
    "ResponseParser",
    "extract_json",
    "STATUS_KEYWORDS",
    "normalize_status",
]
