# src/hl7_parse_tool/exceptions.py
"""
Custom exceptions for hl7_parse_tool.

All exceptions inherit from HL7ParseToolError so that callers can catch
tool-specific errors without grabbing unrelated built-in exceptions.

Two families exist:
- ParseError and its subclasses abort Message construction entirely.
- FieldLookupError and its subclasses are local to one accessor call and
  leave an already-built Message usable.
"""


class HL7ParseToolError(Exception):
    """Base class for all hl7_parse_tool exceptions."""

    pass


class ParseError(HL7ParseToolError):
    """Raised when HL7 text cannot be parsed into a Message."""

    pass


class EmptyInputError(ParseError):
    """Raised when the raw message text is empty."""

    pass


class MalformedHeaderError(ParseError):
    """Raised when the MSH header is missing, misplaced, or too short."""

    pass


class InvalidSegmentError(ParseError):
    """Raised when a physical line does not look like an HL7 segment."""

    pass


class FieldLookupError(HL7ParseToolError):
    """Base class for errors raised by a single field or component lookup."""

    pass


class InvalidIndexError(FieldLookupError):
    """Raised when a field, component or line index below 1 is requested."""

    pass


class UnknownFieldNameError(FieldLookupError):
    """Raised when a symbolic field name is not registered for a segment type."""

    pass
