# src/hl7_parse_tool/interop.py
"""
Bridge between hl7_parse_tool Messages and hl7apy message trees.

hl7_parse_tool deliberately stays schema-free. Callers who need the full HL7
v2 object model (datatypes, groups, validation) can hand a parsed Message to
hl7apy, and messages built with hl7apy can be read back.

Provides:
- to_hl7apy: Message -> hl7apy Message (strict or tolerant validation)
- from_hl7apy: hl7apy Message -> Message
"""

from __future__ import annotations

from typing import Optional

from hl7apy.consts import VALIDATION_LEVEL
from hl7apy.core import Message as HL7apyMessage
from hl7apy.exceptions import HL7apyException
from hl7apy.parser import parse_message

from .config import AppConfig
from .exceptions import ParseError
from .message import Message
from .tokenizer import split_lines

# hl7apy expects CR between segments.
_HL7APY_TERMINATOR = "\r"


def to_hl7apy(message: Message, *, strict: bool = False) -> HL7apyMessage:
    """
    Parse a Message with hl7apy.

    Parameters
    ----------
    message : Message
        Parsed hl7_parse_tool message.
    strict : bool, default False
        If True, uses hl7apy STRICT validation. If False, uses TOLERANT
        validation.

    Returns
    -------
    hl7apy.core.Message
        The equivalent hl7apy message tree.

    Raises
    ------
    TypeError
        If message is not a Message.
    ParseError
        If hl7apy rejects the message.
    """
    if not isinstance(message, Message):
        raise TypeError(f"message must be Message, got {type(message).__name__}")

    er7 = _HL7APY_TERMINATOR.join(split_lines(message.to_text()))

    # Use hl7apy enum constants (do not pass bare ints)
    vlevel = VALIDATION_LEVEL.STRICT if strict else VALIDATION_LEVEL.TOLERANT
    try:
        return parse_message(er7, find_groups=False, validation_level=vlevel)
    except HL7apyException as e:
        raise ParseError(f"hl7apy could not parse message {message.id()!r}: {e}") from e


def from_hl7apy(msg: HL7apyMessage, config: Optional[AppConfig] = None) -> Message:
    """
    Build a Message from an hl7apy message tree.

    Parameters
    ----------
    msg : hl7apy.core.Message
        Message built or parsed by hl7apy.
    config : AppConfig, optional
        Passed through to Message.

    Returns
    -------
    Message
        Parsed from the hl7apy ER7 rendering, one segment per CR-terminated
        line.

    Raises
    ------
    TypeError
        If msg is not an hl7apy.core.Message.
    """
    if not isinstance(msg, HL7apyMessage):
        raise TypeError(f"msg must be hl7apy.core.Message, got {type(msg).__name__}")

    text = _HL7APY_TERMINATOR.join(seg.to_er7() for seg in msg.children)
    return Message.from_text(text, config)
