# src/hl7_parse_tool/field.py
"""
Field decomposition for HL7 v2 segment lines.

Provides:
- Field: one field slot, split once into components (1-based access)
- decompose: split a line body into an ordered list of Field objects
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from . import formatting
from .exceptions import InvalidIndexError
from .separators import HEADER_TAG, Separators


def check_index(index: int, what: str = "index") -> int:
    """
    Validate a 1-based HL7 index.

    Raises
    ------
    TypeError
        If index is not an int (bool is rejected too).
    InvalidIndexError
        If index is below 1.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"{what} must be int, got {type(index).__name__}")
    if index < 1:
        raise InvalidIndexError(f"{what} must be >= 1 (HL7 counts from 1), got {index}")
    return index


class Field:
    """
    A single field of a segment line.

    The raw text is split on the component separator exactly once. Finer
    splitting (repetitions, subcomponents) happens only when asked for.

    Parameters
    ----------
    value : str
        Raw text of the field.
    separators : Separators, optional
        Delimiters of the owning message. Defaults to the standard set.
    literal : bool, default False
        If True, the value is not split at all. Used for the header's
        encoding-characters field, which contains the separators themselves.
    """

    __slots__ = ("_value", "_separators", "_components")

    def __init__(
        self,
        value: str,
        separators: Optional[Separators] = None,
        *,
        literal: bool = False,
    ) -> None:
        if not isinstance(value, str):
            raise TypeError(f"value must be str, got {type(value).__name__}")
        self._value = value
        self._separators = separators or Separators()
        if literal:
            self._components: Tuple[str, ...] = (value,)
        else:
            self._components = tuple(value.split(self._separators.component))

    # -- basic access -------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @property
    def components(self) -> Tuple[str, ...]:
        return self._components

    @property
    def separators(self) -> Separators:
        return self._separators

    @property
    def is_empty(self) -> bool:
        return self._value == ""

    def component(self, index: int) -> Optional[str]:
        """
        Return the component at a 1-based index.

        Returns None when the index is past the last component.

        Raises
        ------
        InvalidIndexError
            If index is below 1.
        """
        check_index(index, "component index")
        if index > len(self._components):
            return None
        return self._components[index - 1]

    def __getitem__(self, index: int) -> Optional[str]:
        return self.component(index)

    def __len__(self) -> int:
        return len(self._components)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Field({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Field):
            return self._value == other._value and self._separators == other._separators
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._value, self._separators))

    # -- opt-in finer splitting ---------------------------------------------

    def repetitions(self) -> List["Field"]:
        """Split the field on the repetition separator, one Field per repeat."""
        return [
            Field(rep, self._separators)
            for rep in self._value.split(self._separators.repetition)
        ]

    def subcomponents(self, index: int) -> List[str]:
        """
        Split the component at a 1-based index on the subcomponent separator.

        Returns an empty list when the component does not exist.
        """
        comp = self.component(index)
        if comp is None:
            return []
        return comp.split(self._separators.subcomponent)

    # -- rendering ----------------------------------------------------------

    def as_date(self, delimiter: str = "/") -> str:
        return formatting.format_date(self._value, delimiter)

    def as_time(self) -> str:
        return formatting.format_time(self._value)

    def as_datetime(self, delimiter: str = "/") -> str:
        return formatting.format_datetime(self._value, delimiter)

    def as_name(self) -> str:
        return formatting.format_name(self._value, self._separators.component)


def decompose(
    body: str, separators: Separators, segment_type: Optional[str] = None
) -> List[Field]:
    """
    Split a line body into fields.

    Parameters
    ----------
    body : str
        Line text after the ``TYPE|`` prefix.
    separators : Separators
        Delimiters of the owning message.
    segment_type : str, optional
        Type of the line. For the header, the first field holds the encoding
        characters and is kept whole.

    Returns
    -------
    List[Field]
        One Field per slot. Empty slots are preserved, so ``"a||b"`` yields
        three fields.
    """
    raw_fields = body.split(separators.field)
    fields = [Field(raw, separators) for raw in raw_fields]
    if segment_type == HEADER_TAG and raw_fields:
        fields[0] = Field(raw_fields[0], separators, literal=True)
    return fields
