# src/hl7_parse_tool/message.py
"""
HL7 v2 message parsing.

A Message is built from one complete message string in a single pass:
separators are read from the header, the text is tokenized into segment
lines, and lines are grouped into one Segment per type in first-encountered
order. Construction either succeeds completely or raises; a partially built
Message is never returned.

Provides:
- MessageClass: coarse message classification (lab / radiology / generic)
- Message: the parsed message and its accessors
"""

from __future__ import annotations

from enum import Enum
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

import logging
import re

from .config import AppConfig
from .exceptions import EmptyInputError, InvalidSegmentError
from .field import Field
from .segment import FieldSelector, Segment
from .separators import HEADER_TAG, Separators, extract_separators
from .tokenizer import find_terminator, tokenize


# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger(__name__)


class MessageClass(str, Enum):
    """Coarse message category derived from the sending application."""

    LAB = "lab"
    RADIOLOGY = "radiology"
    GENERIC = "generic"


# Renders a field for Message.detail(); second argument is the date delimiter.
Renderer = Callable[[Field, str], str]


def _text(f: Field, delim: str) -> str:
    return f.value


def _first_component(f: Field, delim: str) -> str:
    return f.component(1) or ""


def _service_name(f: Field, delim: str) -> str:
    # CE/CWE: identifier^text^coding system; prefer the text.
    return f.component(2) or f.component(1) or ""


def _date(f: Field, delim: str) -> str:
    return f.as_date(delim)


def _datetime(f: Field, delim: str) -> str:
    return f.as_datetime(delim)


def _name(f: Field, delim: str) -> str:
    return f.as_name()


# detail key -> (segment type, field, renderer)
DETAIL_SOURCES: Mapping[str, Tuple[str, FieldSelector, Renderer]] = {
    "id": ("MSH", "message_control_id", _text),
    "date": ("MSH", "date_time", _datetime),
    "pt_name": ("PID", "patient_name", _name),
    "pt_id": ("PID", "mrn", _first_component),
    "pt_acct": ("PID", "account_number", _first_component),
    "dob": ("PID", "dob", _date),
    "proc_name": ("OBR", "universal_service_id", _service_name),
    "proc_date": ("OBR", "observation_date_time", _datetime),
    "visit": ("PV1", "admit_date_time", _datetime),
}

_DESCRIPTOR_RE = re.compile(r"^([A-Za-z]{2}[A-Za-z1])[.\-]?(\w*)$")


def _normalize_type(segment_type: str) -> str:
    if not isinstance(segment_type, str):
        raise TypeError(
            f"segment_type must be str, got {type(segment_type).__name__}"
        )
    return segment_type.upper()


def _classify(header: Segment) -> MessageClass:
    # Narrow heuristic: only a "LAB"/"RAD" suffix on the namespace component
    # of the sending application is recognized; everything else is generic.
    fld = header.field("sending_application")
    app = (fld.component(1) or "") if fld is not None else ""
    if app.endswith("LAB"):
        return MessageClass.LAB
    if app.endswith("RAD"):
        return MessageClass.RADIOLOGY
    return MessageClass.GENERIC


class Message:
    """
    One parsed HL7 v2 message.

    Parameters
    ----------
    text : str
        One complete message, beginning with the MSH header line. Segments
        are separated by CR, LF or CRLF, used consistently.
    config : AppConfig, optional
        Rendering options for detail(). Defaults to AppConfig().

    Raises
    ------
    TypeError
        If text is not a string.
    EmptyInputError
        If text is empty.
    MalformedHeaderError
        If the header is missing, misplaced, or declares too few separators.
    InvalidSegmentError
        If any line is not a segment, or the message holds more than one MSH.
    """

    def __init__(self, text: str, config: Optional[AppConfig] = None) -> None:
        if not isinstance(text, str):
            raise TypeError(f"text must be str, got {type(text).__name__}")
        if text == "":
            raise EmptyInputError("text must be a non-empty HL7 v2 string")

        separators = extract_separators(text)
        terminator = find_terminator(text)
        tokens = tokenize(text, separators)

        order: List[str] = []
        bodies: Dict[str, List[str]] = {}
        for seg_type, body in tokens:
            if seg_type not in bodies:
                order.append(seg_type)
                bodies[seg_type] = []
            elif seg_type == HEADER_TAG:
                raise InvalidSegmentError(
                    "Message contains more than one MSH segment; "
                    "split batches into single messages first"
                )
            bodies[seg_type].append(body)

        segments = {
            t: Segment(t, bodies[t], separators, terminator) for t in order
        }
        LOG.debug("Built %d segment type(s): %s", len(order), " ".join(order))

        classification = _classify(segments[HEADER_TAG])
        LOG.debug("Classified message as %s", classification.value)

        # Nothing is assigned until every step has succeeded.
        self._text = text
        self._separators = separators
        self._terminator = terminator
        self._order: Tuple[str, ...] = tuple(order)
        self._segments: Dict[str, Segment] = segments
        self._class = classification
        self._config = config or AppConfig()

    @classmethod
    def from_text(cls, text: str, config: Optional[AppConfig] = None) -> "Message":
        """Parse one complete message string."""
        return cls(text, config)

    # -- text ---------------------------------------------------------------

    def to_text(self) -> str:
        """Return the exact text the message was parsed from."""
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Message(id={self.id()!r}, segments={list(self._order)!r})"

    @property
    def separators(self) -> Separators:
        return self._separators

    @property
    def terminator(self) -> str:
        return self._terminator

    # -- segments -----------------------------------------------------------

    @property
    def segment_types(self) -> Tuple[str, ...]:
        """Distinct segment types in first-encountered order."""
        return self._order

    def header(self) -> Segment:
        """Return the MSH segment."""
        return self._segments[HEADER_TAG]

    def segment_of_type(self, segment_type: str) -> Optional[Segment]:
        """Return the Segment of the given type, or None if absent."""
        return self._segments.get(_normalize_type(segment_type))

    def segments(self) -> Iterator[Segment]:
        """Yield each Segment in first-encountered order."""
        for seg_type in self._order:
            yield self._segments[seg_type]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, segment_type: object) -> bool:
        return isinstance(segment_type, str) and segment_type.upper() in self._segments

    def lines_of_type(self, segment_type: str) -> List[str]:
        """Return the line bodies of a segment type, or [] if absent."""
        seg = self.segment_of_type(segment_type)
        return seg.lines_of_type(segment_type) if seg is not None else []

    def _neighbor(self, segment_type: str, step: int) -> Optional[str]:
        seg_type = _normalize_type(segment_type)
        if seg_type not in self._segments:
            LOG.debug("Segment %s not in message %s", seg_type, self.id())
            return None
        i = self._order.index(seg_type) + step
        if 0 <= i < len(self._order):
            return self._order[i]
        return None

    def segment_before(self, segment_type: str) -> Optional[str]:
        """
        Return the type first encountered just before segment_type.

        Order is by distinct type, not physical line, so interleaved types
        keep their first-seen position. None at the start of the message or
        if segment_type is absent.
        """
        return self._neighbor(segment_type, -1)

    def segment_after(self, segment_type: str) -> Optional[str]:
        """Return the type first encountered just after segment_type, or None."""
        return self._neighbor(segment_type, 1)

    def verify_segment_order(self, first: str, later: str) -> bool:
        """
        True if first was encountered before later.

        Raises
        ------
        KeyError
            If either segment type is not in the message.
        """
        a, b = _normalize_type(first), _normalize_type(later)
        for seg_type in (a, b):
            if seg_type not in self._segments:
                raise KeyError(f"Segment {seg_type} not in message")
        return self._order.index(a) < self._order.index(b)

    def all_fields(
        self, descriptor: str, which: Optional[FieldSelector] = None
    ) -> List[Optional[str]]:
        """
        Return a field's text for every line of a segment type.

        Parameters
        ----------
        descriptor : str
            Segment code, optionally followed by a position or field name:
            "pid5", "obx.1", "pid.patient_name", or just "obx".
        which : int or str, optional
            Position or name, when not embedded in descriptor.

        Returns
        -------
        List[Optional[str]]
            One entry per line, or [] if the segment type is absent.

        Raises
        ------
        ValueError
            If the descriptor cannot be read, or no field is selected.
        """
        m = _DESCRIPTOR_RE.match(descriptor) if isinstance(descriptor, str) else None
        if m is None:
            raise ValueError(f"Invalid field descriptor {descriptor!r}")
        seg_type, embedded = m.group(1).upper(), m.group(2)

        if embedded:
            if which is not None:
                raise ValueError(
                    f"Field given twice: {descriptor!r} and {which!r}"
                )
            which = int(embedded) if embedded.isdigit() else embedded
        if which is None:
            raise ValueError(f"No field selected in {descriptor!r}")

        seg = self._segments.get(seg_type)
        return seg.all_fields(which) if seg is not None else []

    # -- derived values -----------------------------------------------------

    def id(self) -> str:
        """Return the message control ID from the header."""
        return self.header().value("message_control_id")

    def classify(self) -> MessageClass:
        """
        Return the message classification.

        A sending application ending in "LAB" is a lab message, ending in
        "RAD" a radiology message; anything else is generic. This is a plain
        suffix match, not a code-table lookup.
        """
        return self._class

    def detail(self, *keys: str) -> Dict[str, str]:
        """
        Summarize key facts about the message.

        Parameters
        ----------
        *keys : str
            Detail keys (case-insensitive). Defaults to the configured set:
            id, type, date, pt_name, pt_acct, dob, proc_name, proc_date, visit.
            "pt_id" is also available.

        Returns
        -------
        Dict[str, str]
            Key -> rendered value. Keys whose source segment or field is
            missing map to "". Unknown keys map to "" as well.
        """
        wanted = keys or self._config.detail_keys
        return {key.lower(): self._detail_for(key.lower()) for key in wanted}

    def _detail_for(self, key: str) -> str:
        if key == "type":
            return self._class.value

        source = DETAIL_SOURCES.get(key)
        if source is None:
            LOG.debug("Unknown detail key %r", key)
            return ""

        seg_type, which, render = source
        seg = self._segments.get(seg_type)
        if seg is None:
            LOG.debug("No %s segment for detail %r in message %s", seg_type, key, self.id())
            return ""
        fld = seg.field(which)
        if fld is None:
            return ""
        return render(fld, self._config.date_delimiter)
