# tests/conftest.py
# Shared sample messages for the test suite.
import pytest

from hl7_parse_tool.message import Message


LAB_HEADER = "MSH|^~\\&|HLAB|RMH|||20140128041144||ORU^R01|201401280411444405|T|2.4"
LAB_PID = (
    "PID|1||12345^^^HOSP^MR||Smith^John^J^III^Mr^Ph.D||19840926|M"
    + "|" * 10
    + "ACCT001^^^HOSP"
)
# Admit date/time lands in PV1-44.
LAB_PV1 = "PV1|1|O" + "|" * 42 + "20140127083000"
LAB_OBR = "OBR|1|ORD1|FIL1|CBC^Complete Blood Count^L|||20140128030000"
LAB_OBX = [
    "OBX|1|NM|WBC^White Blood Cells||7.5|10*3/uL",
    "OBX|2|NM|HGB^Hemoglobin||13.2|g/dL|12-16|N",
]


def _join(lines, terminator="\r"):
    return terminator.join(lines)


@pytest.fixture
def lab_text():
    """ORU^R01 from a lab system: MSH, PID, PV1, OBR and two OBX lines."""
    return _join([LAB_HEADER, LAB_PID, LAB_PV1, LAB_OBR] + LAB_OBX)


@pytest.fixture
def lab_message(lab_text):
    return Message.from_text(lab_text)


@pytest.fixture
def adt_text():
    """Minimal ADT^A01 with no OBR/PV1 admit date, LF-terminated."""
    return _join(
        [
            "MSH|^~\\&|SEND|SENDER|RECV|RECEIVER|202001011200||ADT^A01|MSG00001|P|2.5",
            "EVN|A01|202001011200",
            "PID|1||12345^^^HOSP^MR||Doe^John",
            "PV1|1|I",
        ],
        "\n",
    )


@pytest.fixture
def adt_message(adt_text):
    return Message.from_text(adt_text)
