# src/hl7_parse_tool/separators.py
"""
Separator discovery for HL7 v2 messages.

The delimiters used by a message are not fixed: the header segment declares
them in the five characters that immediately follow the literal "MSH" tag,
e.g. ``MSH|^~\\&|...``.

Provides:
- Separators: the immutable delimiter set owned by one message
- extract_separators: read the delimiter set from raw message text
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import logging

from .exceptions import MalformedHeaderError


# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger(__name__)

HEADER_TAG = "MSH"

# Order in which the delimiters follow the header tag.
SEPARATOR_NAMES: Tuple[str, ...] = (
    "field",
    "component",
    "repetition",
    "escape",
    "subcomponent",
)

_LINE_BREAKS = ("\r", "\n")


@dataclass(frozen=True)
class Separators:
    """
    Immutable set of delimiters in effect for one message.

    Attributes
    ----------
    field : str
        Separates fields within a segment line (usually ``|``).
    component : str
        Separates components within a field (usually ``^``).
    repetition : str
        Separates repetitions of a field (usually ``~``).
    escape : str
        Escape character (usually ``\\``).
    subcomponent : str
        Separates subcomponents within a component (usually ``&``).
    """

    field: str = "|"
    component: str = "^"
    repetition: str = "~"
    escape: str = "\\"
    subcomponent: str = "&"

    def as_tuple(self) -> Tuple[str, str, str, str, str]:
        """Return the delimiters in header declaration order."""
        return (
            self.field,
            self.component,
            self.repetition,
            self.escape,
            self.subcomponent,
        )

    @property
    def encoding_characters(self) -> str:
        """The four sub-delimiters as declared in the header, e.g. ``^~\\&``."""
        return "".join(self.as_tuple()[1:])


def extract_separators(text: str) -> Separators:
    """
    Read the delimiter set declared by the message header.

    Parameters
    ----------
    text : str
        Full raw message text. Must start with the ``MSH`` tag.

    Returns
    -------
    Separators
        The five delimiters in effect for this message.

    Raises
    ------
    TypeError
        If text is not a string.
    MalformedHeaderError
        If the header tag is absent or not at the start of the text, if fewer
        than five characters follow it on the first line, or if the declared
        characters are not distinct.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    if not text.startswith(HEADER_TAG):
        where = text.find(HEADER_TAG)
        if where < 0:
            raise MalformedHeaderError(f"Header tag {HEADER_TAG!r} not found")
        raise MalformedHeaderError(
            f"Header tag {HEADER_TAG!r} must start the message, found at offset {where}"
        )

    start = len(HEADER_TAG)
    declared = text[start : start + len(SEPARATOR_NAMES)]
    # Separators must all sit on the header line itself.
    for brk in _LINE_BREAKS:
        if brk in declared:
            declared = declared[: declared.index(brk)]

    if len(declared) < len(SEPARATOR_NAMES):
        raise MalformedHeaderError(
            f"Header declares {len(declared)} separator characters, "
            f"expected {len(SEPARATOR_NAMES)}: {declared!r}"
        )
    if len(set(declared)) != len(declared):
        raise MalformedHeaderError(
            f"Header separator characters must be distinct: {declared!r}"
        )

    seps = Separators(**dict(zip(SEPARATOR_NAMES, declared)))
    LOG.debug("Resolved separators %r", declared)
    return seps
