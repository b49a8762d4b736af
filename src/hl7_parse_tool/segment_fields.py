# src/hl7_parse_tool/segment_fields.py
"""
Registry of symbolic field names per segment type.

Provides:
- validate_fields(segment_type, fields) to check a table without registering it,
- register_fields(segment_type, fields) to bind a name -> position table,
- register_all(tables) to bind several tables, all or nothing,
- field_index_for(segment_type) to look a table up,
- available_segment_types() to list registered types.

Positions are 1-based within the line body (the text after ``TYPE|``). For
every segment except MSH this is the standard HL7 field number. For MSH it is
one less, since the field separator itself (MSH-1) is consumed by the prefix:
body position 1 holds the encoding characters (MSH-2).

Tables are read-only once registered and are shared by every Segment of that
type. Unknown segment types get an empty table and support positional access
only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping

import re

# Map segment type (e.g., "PID") to a read-only name -> position table.
_REGISTRY: Dict[str, Mapping[str, int]] = {}

_EMPTY: Mapping[str, int] = MappingProxyType({})

_TYPE_RE = re.compile(r"^[A-Z]{2}[A-Z1]$")
_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")


def validate_fields(segment_type: str, fields: Mapping[str, int]) -> Dict[str, int]:
    """
    Check a field-name table without registering it.

    Parameters
    ----------
    segment_type : str
        Three-character segment code, e.g. "PID" or "ZPI".
    fields : Mapping[str, int]
        Lower-case snake_case field name -> 1-based body position.

    Returns
    -------
    Dict[str, int]
        A plain copy of the table.

    Raises
    ------
    ValueError
        If the segment type is malformed, or a name or position is invalid.
    TypeError
        If fields is not a mapping.
    """
    if not isinstance(segment_type, str) or not _TYPE_RE.match(segment_type):
        raise ValueError(f"Invalid segment type {segment_type!r}")
    if not isinstance(fields, Mapping):
        raise TypeError(f"fields must be a mapping, got {type(fields).__name__}")

    table: Dict[str, int] = {}
    for name, pos in fields.items():
        if not isinstance(name, str) or not _NAME_RE.match(name):
            raise ValueError(f"Invalid field name {name!r} for {segment_type}")
        if isinstance(pos, bool) or not isinstance(pos, int) or pos < 1:
            raise ValueError(
                f"Field {segment_type}.{name} must map to a position >= 1, got {pos!r}"
            )
        table[name] = pos
    return table


def _check_conflict(segment_type: str, table: Dict[str, int]) -> bool:
    # True if an identical table is already registered.
    existing = _REGISTRY.get(segment_type)
    if existing is None:
        return False
    if dict(existing) == table:
        return True
    raise ValueError(f"Field names already registered for segment {segment_type!r}")


def register_fields(segment_type: str, fields: Mapping[str, int]) -> Mapping[str, int]:
    """
    Register the field-name table for a segment type.

    Parameters
    ----------
    segment_type : str
        Three-character segment code, e.g. "PID" or "ZPI".
    fields : Mapping[str, int]
        Lower-case snake_case field name -> 1-based body position.

    Returns
    -------
    Mapping[str, int]
        The registered read-only table.

    Raises
    ------
    ValueError
        If the table is invalid (see validate_fields), or a different table
        is already registered for the type.
    TypeError
        If fields is not a mapping.
    """
    table = validate_fields(segment_type, fields)
    if _check_conflict(segment_type, table):
        return _REGISTRY[segment_type]

    frozen: Mapping[str, int] = MappingProxyType(table)
    _REGISTRY[segment_type] = frozen
    return frozen


def register_all(tables: Mapping[str, Mapping[str, int]]) -> None:
    """
    Register several field-name tables, all or nothing.

    Every table is validated and checked for conflicts before any of them is
    registered, so a failure leaves the registry unchanged.

    Raises
    ------
    ValueError, TypeError
        As register_fields, for the first offending table.
    """
    pending: Dict[str, Dict[str, int]] = {}
    for seg_type, fields in tables.items():
        table = validate_fields(seg_type, fields)
        if not _check_conflict(seg_type, table):
            pending[seg_type] = table

    for seg_type, table in pending.items():
        _REGISTRY[seg_type] = MappingProxyType(table)


def field_index_for(segment_type: str) -> Mapping[str, int]:
    """
    Return the name -> position table for a segment type.

    Returns an empty read-only mapping for unregistered types.
    """
    return _REGISTRY.get(segment_type, _EMPTY)


def available_segment_types() -> List[str]:
    """
    List all segment types with registered field names.

    Returns
    -------
    List[str]
        Sorted segment codes (e.g., ["MSH", "OBX", "PID"]).
    """
    return sorted(_REGISTRY.keys())


# ------------------------------------------------------------------------------
# built-in tables
# ------------------------------------------------------------------------------

_BUILTIN: Dict[str, Dict[str, int]] = {
    "MSH": {
        "encoding_characters": 1,
        "sending_application": 2,
        "sending_facility": 3,
        "receiving_application": 4,
        "receiving_facility": 5,
        "date_time": 6,
        "security": 7,
        "message_type": 8,
        "message_control_id": 9,
        "processing_id": 10,
        "version_id": 11,
    },
    "EVN": {
        "event_type_code": 1,
        "recorded_date_time": 2,
        "date_time_planned_event": 3,
        "event_reason_code": 4,
        "operator_id": 5,
        "event_occurred": 6,
    },
    "PID": {
        "set_id": 1,
        "patient_id": 2,
        "mrn": 3,
        "alternate_patient_id": 4,
        "patient_name": 5,
        "mothers_maiden_name": 6,
        "dob": 7,
        "sex": 8,
        "patient_alias": 9,
        "race": 10,
        "address": 11,
        "county_code": 12,
        "home_phone": 13,
        "business_phone": 14,
        "primary_language": 15,
        "marital_status": 16,
        "religion": 17,
        "account_number": 18,
        "ssn": 19,
    },
    "NK1": {
        "set_id": 1,
        "name": 2,
        "relationship": 3,
        "address": 4,
        "phone": 5,
    },
    "PV1": {
        "set_id": 1,
        "patient_class": 2,
        "assigned_location": 3,
        "admission_type": 4,
        "preadmit_number": 5,
        "prior_location": 6,
        "attending_doctor": 7,
        "referring_doctor": 8,
        "consulting_doctor": 9,
        "hospital_service": 10,
        "admitting_doctor": 17,
        "patient_type": 18,
        "visit_number": 19,
        "discharge_disposition": 36,
        "admit_date_time": 44,
        "discharge_date_time": 45,
    },
    "ORC": {
        "order_control": 1,
        "placer_order_number": 2,
        "filler_order_number": 3,
        "order_status": 5,
        "date_time_of_transaction": 9,
        "ordering_provider": 12,
    },
    "OBR": {
        "set_id": 1,
        "placer_order_number": 2,
        "filler_order_number": 3,
        "universal_service_id": 4,
        "priority": 5,
        "requested_date_time": 6,
        "observation_date_time": 7,
        "observation_end_date_time": 8,
        "ordering_provider": 16,
        "result_status": 25,
    },
    "OBX": {
        "set_id": 1,
        "value_type": 2,
        "observation_identifier": 3,
        "observation_sub_id": 4,
        "observation_value": 5,
        "units": 6,
        "reference_range": 7,
        "abnormal_flags": 8,
        "result_status": 11,
        "observation_date_time": 14,
    },
    "NTE": {
        "set_id": 1,
        "source_of_comment": 2,
        "comment": 3,
    },
    "AL1": {
        "set_id": 1,
        "allergen_type": 2,
        "allergen": 3,
        "severity": 4,
        "reaction": 5,
    },
    "DG1": {
        "set_id": 1,
        "coding_method": 2,
        "diagnosis_code": 3,
        "description": 4,
        "diagnosis_date_time": 5,
        "diagnosis_type": 6,
    },
    "IN1": {
        "set_id": 1,
        "plan_id": 2,
        "company_id": 3,
        "company_name": 4,
    },
}

for _type, _fields in _BUILTIN.items():
    register_fields(_type, _fields)
