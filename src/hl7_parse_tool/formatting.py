# src/hl7_parse_tool/formatting.py
"""
Display formatting for HL7 field values.

All functions are best-effort and never raise: text that does not have the
expected shape is returned unchanged.

Provides:
- is_hl7_date / format_date: YYYYMMDD -> M/D/YYYY (not zero-padded)
- is_hl7_time / format_time: HHMM[SS] -> HH:MM[:SS] (zero-padded)
- is_hl7_datetime / format_datetime: YYYYMMDDHHMM[SS] -> "M/D/YYYY HH:MM[:SS]"
- format_name: XPN-style name -> "Prefix Given Middle Surname Suffix, Degree"
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

import re


# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

# Plausible years are relative to today.
YEARS_BACK = 200
YEARS_AHEAD = 50

_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})", re.ASCII)
_TIME_RE = re.compile(r"^(\d{2})(\d{2})(\d{2})?", re.ASCII)
_DATETIME_RE = re.compile(r"^(\d{8})(\d+)", re.ASCII)

# Positional order of the pieces in an HL7 name field (after any ID).
NAME_PIECES = ("surname", "given", "middle", "suffix", "prefix", "degree")


# ------------------------------------------------------------------------------
# dates
# ------------------------------------------------------------------------------


def _date_parts(text: object) -> Optional[Tuple[int, int, int]]:
    """Return (year, month, day) if text starts with a plausible date."""
    if not isinstance(text, str):
        return None
    m = _DATE_RE.match(text)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    this_year = date.today().year
    if not this_year - YEARS_BACK <= year <= this_year + YEARS_AHEAD:
        return None
    if not 1 <= month <= 12:
        return None
    # No day-in-month check: 20140231 passes.
    if not 1 <= day <= 31:
        return None
    return year, month, day


def is_hl7_date(text: str) -> bool:
    """True if text begins with a YYYYMMDD date within the plausible year range."""
    return _date_parts(text) is not None


def format_date(text: str, delimiter: str = "/") -> str:
    """
    Render an HL7 date as month/day/year.

    Examples
    --------
    >>> format_date("20131104")
    '11/4/2013'
    >>> format_date("not-a-date")
    'not-a-date'
    """
    parts = _date_parts(text)
    if parts is None:
        return text
    year, month, day = parts
    return delimiter.join(str(n) for n in (month, day, year))


# ------------------------------------------------------------------------------
# times
# ------------------------------------------------------------------------------


def _time_parts(text: object) -> Optional[List[str]]:
    if not isinstance(text, str):
        return None
    m = _TIME_RE.match(text)
    if m is None:
        return None
    hour, minute, second = m.groups()
    if not 0 <= int(hour) <= 23 or not 0 <= int(minute) <= 59:
        return None
    if second is None:
        return [hour, minute]
    if not 0 <= int(second) <= 59:
        return None
    return [hour, minute, second]


def is_hl7_time(text: str) -> bool:
    """True if text begins with HHMM or HHMMSS on the 24-hour clock."""
    return _time_parts(text) is not None


def format_time(text: str) -> str:
    """
    Render an HL7 time as HH:MM or HH:MM:SS, keeping leading zeros.

    Examples
    --------
    >>> format_time("110645")
    '11:06:45'
    >>> format_time("2342")
    '23:42'
    """
    parts = _time_parts(text)
    if parts is None:
        return text
    return ":".join(parts)


# ------------------------------------------------------------------------------
# date + time
# ------------------------------------------------------------------------------


def _datetime_halves(text: object) -> Optional[Tuple[str, str]]:
    if not isinstance(text, str):
        return None
    m = _DATETIME_RE.match(text)
    if m is None:
        return None
    day_part, time_part = m.groups()
    if not is_hl7_date(day_part) or not is_hl7_time(time_part):
        return None
    return day_part, time_part


def is_hl7_datetime(text: str) -> bool:
    """True if text is an 8-digit date immediately followed by a valid time."""
    return _datetime_halves(text) is not None


def format_datetime(text: str, delimiter: str = "/") -> str:
    """
    Render an HL7 timestamp as "M/D/YYYY HH:MM[:SS]".

    A bare date without a time part is not a datetime and is returned as-is.
    """
    halves = _datetime_halves(text)
    if halves is None:
        return text
    day_part, time_part = halves
    return f"{format_date(day_part, delimiter)} {format_time(time_part)}"


# ------------------------------------------------------------------------------
# names
# ------------------------------------------------------------------------------


def format_name(text: str, separator: str = "^") -> str:
    """
    Render an HL7 person name for display.

    The field is split on the component separator. A purely numeric first
    piece is an identifier (XCN-style) and is dropped. The remaining pieces
    are, in order: surname, given, middle, suffix, prefix, degree. Between 2
    and 6 pieces are required; anything else is returned unchanged.

    Examples
    --------
    >>> format_name("Smith^John^J^III^Mr^Ph.D")
    'Mr John J Smith III, Ph.D'
    >>> format_name("123456^Doe^Jane^Marie^^Dr^")
    'Dr Jane Marie Doe'
    """
    if not isinstance(text, str) or not separator:
        return text

    pieces = text.split(separator)
    while pieces and pieces[-1] == "":
        pieces.pop()
    if pieces and pieces[0].isascii() and pieces[0].isdigit():
        pieces = pieces[1:]
    if not 2 <= len(pieces) <= len(NAME_PIECES):
        return text

    pieces += [""] * (len(NAME_PIECES) - len(pieces))
    name = dict(zip(NAME_PIECES, pieces))

    words = [
        name["prefix"],
        name["given"],
        name["middle"],
        name["surname"],
        name["suffix"],
    ]
    out = " ".join(w for w in words if w)
    if name["degree"]:
        out = f"{out}, {name['degree']}" if out else name["degree"]
    return out
