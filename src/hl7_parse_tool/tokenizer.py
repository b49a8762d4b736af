# src/hl7_parse_tool/tokenizer.py
"""
Segment-boundary tokenization for HL7 v2 messages.

Provides:
- find_terminator: detect the segment terminator used by a message
- split_lines: split raw text into physical segment lines
- segment_pattern: regex matching a segment type prefix for a field separator
- tokenize: raw text -> ordered (segment type, line body) pairs
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Tuple

import logging
import re

from .exceptions import InvalidSegmentError
from .separators import Separators


# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger(__name__)

# HL7 proper uses CR; files exported by most tools use LF or CRLF instead.
TERMINATORS = ("\r\n", "\r", "\n")
DEFAULT_TERMINATOR = "\r"

_BOUNDARY = re.compile(r"\r\n|\r|\n")

# One (type, body) pair per physical line.
Token = Tuple[str, str]


# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------


def find_terminator(text: str) -> str:
    """
    Return the segment terminator used by text.

    Parameters
    ----------
    text : str
        Raw message text.

    Returns
    -------
    str
        The first line break found (``"\\r\\n"``, ``"\\r"`` or ``"\\n"``), or
        ``"\\r"`` for a single-segment message without one.
    """
    m = _BOUNDARY.search(text)
    return m.group(0) if m else DEFAULT_TERMINATOR


def split_lines(text: str) -> List[str]:
    """
    Split raw text into physical segment lines.

    A single trailing terminator ends the last segment and does not produce an
    extra line. Any other empty line is kept so that the tokenizer rejects it.
    """
    lines = _BOUNDARY.split(text)
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


@lru_cache(maxsize=None)
def segment_pattern(field_separator: str) -> re.Pattern:
    """
    Compile the segment prefix pattern for a field separator.

    Two uppercase letters followed by an uppercase letter or ``1``, immediately
    followed by the field separator (``MSH|``, ``OBX|``, ``PV1|``).
    """
    return re.compile(r"([A-Z]{2}[A-Z1])" + re.escape(field_separator))


# ------------------------------------------------------------------------------
# tokenizer
# ------------------------------------------------------------------------------


def tokenize(text: str, separators: Separators) -> List[Token]:
    """
    Split raw message text into (segment type, line body) pairs.

    Parameters
    ----------
    text : str
        Raw message text, one segment per line.
    separators : Separators
        Delimiters declared by this message's header.

    Returns
    -------
    List[Token]
        Pairs in physical line order. The body is everything after the field
        separator that follows the segment type.

    Raises
    ------
    InvalidSegmentError
        If any line does not start with a segment type and field separator.
        Unrecognized lines are never skipped.
    """
    pattern = segment_pattern(separators.field)
    tokens: List[Token] = []
    for lineno, line in enumerate(split_lines(text), start=1):
        m = pattern.match(line)
        if m is None:
            raise InvalidSegmentError(
                f"Line {lineno} is not an HL7 segment: {line[:20]!r}"
            )
        tokens.append((m.group(1), line[m.end() :]))

    LOG.debug("Tokenized %d segment lines", len(tokens))
    return tokens
