from hexview.fields import (
    FIELD_BIT_BUDGET,
    FieldSlice,
    accept_field_widths,
    field_mask,
    layout_fields,
    parse_field_widths,
)
from hexview.values import U64_MAX


def test_parse_field_widths_splits_on_all_separators() -> None:
    assert parse_field_widths("4:20,8 1") == [4, 20, 8, 1]


def test_parse_field_widths_drops_bad_tokens() -> None:
    assert parse_field_widths("4::x:-3:2.5: 8") == [4, 8]
    assert parse_field_widths("") == []
    assert parse_field_widths("+3") == [3]
    assert parse_field_widths("99999999999:4") == [4]


def test_accept_field_widths_stops_at_budget() -> None:
    assert accept_field_widths([16, 8, 16, 8]) == ([16, 8], 24)
    assert accept_field_widths([32, 1]) == ([32], 32)
    assert accept_field_widths([]) == ([], 0)


def test_default_layout_decomposes_low_32_bits() -> None:
    slices = layout_fields("4:20:8", 0x1_2345_6789)
    assert [s.width for s in slices] == [4, 20, 8]
    assert [s.high_bit for s in slices] == [31, 27, 7]
    assert [s.low_bit for s in slices] == [28, 8, 0]
    assert [s.value for s in slices] == [0x2, 0x34567, 0x89]


def test_oversized_field_rejected_and_rest_discarded() -> None:
    slices = layout_fields("40:10", U64_MAX)
    assert slices == []

    slices = layout_fields("10:40:4", U64_MAX)
    assert [s.width for s in slices] == [10]
    assert slices[0].high_bit == 9
    assert slices[0].low_bit == 0
    assert slices[0].value == 0x3FF


def test_zero_widths_are_skipped() -> None:
    value = 0xDEADBEEF
    assert layout_fields("0:5:0:3", value) == layout_fields("5:3", value)


def test_empty_config_yields_no_fields() -> None:
    assert layout_fields("", 0xFF) == []
    assert layout_fields("a,b,c", 0xFF) == []


def test_fields_never_exceed_budget() -> None:
    slices = layout_fields("8 8 8 8 8", U64_MAX)
    assert sum(s.width for s in slices) == FIELD_BIT_BUDGET
    assert slices[-1].low_bit == 0


def test_field_labels() -> None:
    slices = layout_fields("1:3", 0b1010)
    assert slices[0].range_text == "[3]"
    assert slices[1].range_text == "[2:0]"
    assert slices[0].hex_text == "0x1"
    assert slices[1].dec_text == "2"
    assert slices[1].bin_text == "010"


def test_field_slice_formats_hex_uppercase() -> None:
    field = FieldSlice(width=8, high_bit=7, low_bit=0, value=0xAB)
    assert field.hex_text == "0xAB"


def test_field_mask() -> None:
    assert field_mask(1) == 1
    assert field_mask(20) == 0xFFFFF
    assert field_mask(64) == U64_MAX


def test_information_separators_spoil_a_width_token() -> None:
    assert parse_field_widths("\x1c5:4") == [4]
    assert parse_field_widths("4:5\x1f") == [4]
    assert parse_field_widths("\t6\n:4") == [6, 4]
