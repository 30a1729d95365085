from hexview.visualizer import FIELD_COLORS, SET_BIT_BG, BitGrid, FieldStrip


def test_bit_grid_positions_run_msb_first() -> None:
    assert BitGrid._bit_position(0) == 63
    assert BitGrid._bit_position(31) == 32
    assert BitGrid._bit_position(63) == 0


def test_bit_grid_highlights_set_bits() -> None:
    assert BitGrid._cell_colors(1)[0] == SET_BIT_BG
    assert BitGrid._cell_colors(0)[0] != SET_BIT_BG


def test_field_box_width_handles_zero_fields() -> None:
    assert FieldStrip._box_width(600, 0) == 600
    assert FieldStrip._box_width(600, 3) == 200


def test_field_font_and_decimal_thresholds() -> None:
    assert FieldStrip._font_size(39.5) == 12
    assert FieldStrip._font_size(40) == 16
    assert FieldStrip._shows_decimal(29.9) is False
    assert FieldStrip._shows_decimal(30) is True


def test_field_colors_cycle() -> None:
    assert FieldStrip._field_color(0) == FIELD_COLORS[0]
    assert FieldStrip._field_color(len(FIELD_COLORS)) == FIELD_COLORS[0]


def test_field_index_at() -> None:
    assert FieldStrip._field_index_at(0, 100, 3) == 0
    assert FieldStrip._field_index_at(250, 100, 3) == 2
    assert FieldStrip._field_index_at(300, 100, 3) is None
    assert FieldStrip._field_index_at(10, 100, 0) is None
