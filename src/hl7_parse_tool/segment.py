# src/hl7_parse_tool/segment.py
"""
Segment: every line of one segment type within a message.

A message may carry several physical lines of the same type (20+ OBX lines is
common). They are grouped into one Segment, in order of appearance, and field
lookups can target one line or span all of them.
"""

from __future__ import annotations

from functools import cached_property
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import logging

from .exceptions import InvalidIndexError, UnknownFieldNameError
from .field import Field, check_index, decompose
from .segment_fields import field_index_for
from .separators import Separators
from .tokenizer import DEFAULT_TERMINATOR


# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger(__name__)

# A field is selected by 1-based position or by registered name.
FieldSelector = Union[int, str]


class Segment:
    """
    All lines of one segment type.

    Parameters
    ----------
    segment_type : str
        Three-character segment code, e.g. "OBX".
    lines : Sequence[str]
        Line bodies (text after ``TYPE|``) in order of appearance.
    separators : Separators, optional
        Delimiters of the owning message. Defaults to the standard set.
    terminator : str, default "\\r"
        Segment terminator of the owning message, used by to_text().

    Raises
    ------
    ValueError
        If no lines are given.
    """

    def __init__(
        self,
        segment_type: str,
        lines: Sequence[str],
        separators: Optional[Separators] = None,
        terminator: str = DEFAULT_TERMINATOR,
    ) -> None:
        if not lines:
            raise ValueError(f"Segment {segment_type!r} requires at least one line")
        self._type = segment_type
        self._lines: Tuple[str, ...] = tuple(lines)
        self._separators = separators or Separators()
        self._terminator = terminator
        self._names = field_index_for(segment_type)

    # -- identity -----------------------------------------------------------

    @property
    def type(self) -> str:
        return self._type

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    @property
    def separators(self) -> Separators:
        return self._separators

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Segment({self._type!r}, lines={len(self._lines)})"

    def lines_of_type(self, segment_type: str) -> List[str]:
        """Return every line body if this segment has the given type, else []."""
        if segment_type.upper() != self._type:
            return []
        return list(self._lines)

    def field_names(self) -> Mapping[str, int]:
        """Read-only name -> position table for this segment's type."""
        return self._names

    def to_text(self) -> str:
        """Rebuild the segment lines, each prefixed with the type and separator."""
        prefix = f"{self._type}{self._separators.field}"
        return self._terminator.join(prefix + body for body in self._lines)

    def __str__(self) -> str:
        return self.to_text()

    # -- field access -------------------------------------------------------

    @cached_property
    def _rows(self) -> List[List[Field]]:
        # Decomposed on first field access only.
        rows = [decompose(body, self._separators, self._type) for body in self._lines]
        LOG.debug("Decomposed %d %s line(s) into fields", len(rows), self._type)
        return rows

    def rows(self) -> Iterator[List[Field]]:
        """Yield the Field list of each line, in order."""
        for row in self._rows:
            yield list(row)

    def resolve(self, which: FieldSelector) -> int:
        """
        Turn a field selector into a 1-based position.

        Parameters
        ----------
        which : int or str
            Position, or a field name registered for this segment type
            (case-insensitive).

        Raises
        ------
        InvalidIndexError
            If a position below 1 is given.
        UnknownFieldNameError
            If the name is not registered for this segment type.
        TypeError
            If which is neither int nor str.
        """
        if isinstance(which, str):
            pos = self._names.get(which.lower())
            if pos is None:
                raise UnknownFieldNameError(
                    f"Segment {self._type} has no field named {which!r}"
                )
            return pos
        return check_index(which, "field index")

    def _row(self, line: int) -> List[Field]:
        check_index(line, "line")
        if line > len(self._lines):
            raise InvalidIndexError(
                f"Segment {self._type} has {len(self._lines)} line(s), got line {line}"
            )
        return self._rows[line - 1]

    def field(self, which: FieldSelector, line: int = 1) -> Optional[Field]:
        """
        Return one field from one line.

        Parameters
        ----------
        which : int or str
            1-based position or registered field name.
        line : int, default 1
            1-based line within this segment.

        Returns
        -------
        Field or None
            None when the line has fewer fields than requested (optional
            trailing fields are often omitted).
        """
        pos = self.resolve(which)
        row = self._row(line)
        if pos > len(row):
            return None
        return row[pos - 1]

    def value(self, which: FieldSelector, line: int = 1) -> str:
        """Like field(), but return the raw text, or "" when absent."""
        fld = self.field(which, line)
        return fld.value if fld is not None else ""

    def all_fields(self, which: FieldSelector) -> List[Optional[str]]:
        """
        Return the field's text for every line of the segment.

        The result always has one entry per line, also for single-line
        segments. Lines too short to have the field contribute None.
        """
        pos = self.resolve(which)
        return [row[pos - 1].value if pos <= len(row) else None for row in self._rows]
