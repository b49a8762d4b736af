"""
Tests for hl7_parse_tool.exceptions.
"""

import pytest

import hl7_parse_tool
from hl7_parse_tool.exceptions import (
    EmptyInputError,
    FieldLookupError,
    HL7ParseToolError,
    InvalidIndexError,
    InvalidSegmentError,
    MalformedHeaderError,
    ParseError,
    UnknownFieldNameError,
)


@pytest.mark.parametrize(
    "exc", [EmptyInputError, MalformedHeaderError, InvalidSegmentError]
)
def test_structural_errors_are_parse_errors(exc):
    assert issubclass(exc, ParseError)
    assert issubclass(exc, HL7ParseToolError)


@pytest.mark.parametrize("exc", [InvalidIndexError, UnknownFieldNameError])
def test_lookup_errors_are_not_parse_errors(exc):
    assert issubclass(exc, FieldLookupError)
    assert issubclass(exc, HL7ParseToolError)
    assert not issubclass(exc, ParseError)


def test_package_exports():
    assert hl7_parse_tool.__version__ == "0.1.0"
    for name in hl7_parse_tool.__all__:
        assert hasattr(hl7_parse_tool, name)
