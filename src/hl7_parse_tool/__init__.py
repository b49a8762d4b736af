# src/hl7_parse_tool/__init__.py
"""
hl7_parse_tool: schema-free parsing of HL7 v2 pipe-delimited messages.

This package provides:
- A Message parser that discovers separators from the MSH header and groups
  lines into Segments by type.
- 1-based field and component access by position or registered field name.
- Best-effort display formatting for HL7 dates, times and person names.
- A bridge to hl7apy message trees.
"""

from __future__ import annotations

from .exceptions import (
    EmptyInputError,
    FieldLookupError,
    HL7ParseToolError,
    InvalidIndexError,
    InvalidSegmentError,
    MalformedHeaderError,
    ParseError,
    UnknownFieldNameError,
)
from .field import Field
from .message import Message, MessageClass
from .segment import Segment
from .separators import Separators, extract_separators

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "EmptyInputError",
    "Field",
    "FieldLookupError",
    "HL7ParseToolError",
    "InvalidIndexError",
    "InvalidSegmentError",
    "MalformedHeaderError",
    "Message",
    "MessageClass",
    "ParseError",
    "Segment",
    "Separators",
    "UnknownFieldNameError",
    "extract_separators",
]
