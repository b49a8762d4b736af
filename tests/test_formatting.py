"""
Tests for hl7_parse_tool.formatting.
"""

from datetime import date

import pytest

from hl7_parse_tool.formatting import (
    format_date,
    format_datetime,
    format_name,
    format_time,
    is_hl7_date,
    is_hl7_datetime,
    is_hl7_time,
)

THIS_YEAR = date.today().year


# ------------------------------------------------------------------------------
# dates
# ------------------------------------------------------------------------------


def test_format_date_is_not_zero_padded():
    assert format_date("20131104") == "11/4/2013"
    assert format_date("19840926") == "9/26/1984"


def test_format_date_custom_delimiter():
    assert format_date("20131104", "-") == "11-4-2013"


def test_format_date_ignores_trailing_time():
    assert format_date("20131104110645") == "11/4/2013"


@pytest.mark.parametrize(
    "text",
    ["not-a-date", "", "2013110", "20131304", "20131100", "20131132", "2013-11-04"],
)
def test_format_date_returns_invalid_input_unchanged(text):
    assert is_hl7_date(text) is False
    assert format_date(text) == text


def test_format_date_rejects_non_ascii_digits():
    # Arabic-Indic digits are \d in a unicode regex but not HL7 digits.
    text = "\u0662\u0660\u0661\u0663\u0661\u0661\u0660\u0664"
    assert is_hl7_date(text) is False
    assert format_date(text) == text


def test_is_hl7_date_does_not_check_day_in_month():
    assert is_hl7_date("20140231") is True


def test_is_hl7_date_year_window():
    assert is_hl7_date(f"{THIS_YEAR - 200}0101") is True
    assert is_hl7_date(f"{THIS_YEAR - 201}0101") is False
    assert is_hl7_date(f"{THIS_YEAR + 50}0101") is True
    assert is_hl7_date(f"{THIS_YEAR + 51}0101") is False


def test_date_functions_tolerate_non_strings():
    assert is_hl7_date(None) is False
    assert format_date(None) is None


# ------------------------------------------------------------------------------
# times
# ------------------------------------------------------------------------------


def test_format_time_keeps_leading_zeros():
    assert format_time("110645") == "11:06:45"
    assert format_time("2342") == "23:42"
    assert format_time("040506") == "04:05:06"


def test_format_time_ignores_fractional_seconds_and_zone():
    assert format_time("110645.1234-0500") == "11:06:45"


@pytest.mark.parametrize("text", ["2400", "2360", "235960", "9", "ab12", ""])
def test_format_time_returns_invalid_input_unchanged(text):
    assert is_hl7_time(text) is False
    assert format_time(text) == text


def test_is_hl7_time_boundaries():
    assert is_hl7_time("0000")
    assert is_hl7_time("235959")


def test_is_hl7_time_rejects_non_ascii_digits():
    assert is_hl7_time("\u0661\u0662\u0663\u0660") is False
    assert is_hl7_datetime("20131104\u0661\u0662\u0663\u0660") is False


# ------------------------------------------------------------------------------
# date + time
# ------------------------------------------------------------------------------


def test_format_datetime_combines_both_halves():
    assert format_datetime("20140128041144") == "1/28/2014 04:11:44"
    assert format_datetime("201401280411") == "1/28/2014 04:11"


def test_format_datetime_custom_delimiter():
    assert format_datetime("201401280411", "-") == "1-28-2014 04:11"


@pytest.mark.parametrize(
    "text",
    [
        "20140128",  # no time half
        "20141328041144",  # bad month
        "20140128991144",  # bad hour
        "2014012",
        "later",
    ],
)
def test_format_datetime_returns_invalid_input_unchanged(text):
    assert is_hl7_datetime(text) is False
    assert format_datetime(text) == text


# ------------------------------------------------------------------------------
# names
# ------------------------------------------------------------------------------


def test_format_name_all_pieces():
    assert format_name("Smith^John^J^III^Mr^Ph.D") == "Mr John J Smith III, Ph.D"


def test_format_name_strips_numeric_identifier():
    assert format_name("123456^Doe^Jane^Marie^^Dr^") == "Dr Jane Marie Doe"


def test_format_name_surname_and_given_only():
    assert format_name("Doe^John") == "John Doe"


def test_format_name_absent_pieces_leave_no_stray_spaces():
    assert format_name("Watson^David^^Jr.^") == "David Watson Jr."
    assert format_name("Watson^^D") == "D Watson"
    assert format_name("Watson^David^^^^MD") == "David Watson, MD"


def test_format_name_custom_separator():
    assert format_name("Doe$Jane$M", "$") == "Jane M Doe"


def test_format_name_identifier_must_be_purely_numeric():
    # "A123" is not an ID, so seven pieces remain: invalid.
    text = "A123^Watson^David^D^IV^Dr.^MD"
    assert format_name(text) == text


def test_format_name_identifier_must_be_ascii_digits():
    # Superscript two is a unicode digit, so it is kept as the surname.
    assert format_name("\u00b2^Doe^John") == "Doe John \u00b2"


@pytest.mark.parametrize(
    "text",
    [
        "Doe",  # one piece
        "12345^Doe",  # one piece after ID
        "Doe^John^Q^Jr^Dr^MD^extra",  # seven pieces
        "",
    ],
)
def test_format_name_returns_invalid_input_unchanged(text):
    assert format_name(text) == text


def test_format_name_tolerates_non_strings():
    assert format_name(None) is None
