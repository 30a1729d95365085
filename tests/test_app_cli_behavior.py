import pytest

from hexview.app import build_initial_state, parse_args, view_toggle_text
from hexview.fields import DEFAULT_FIELD_CONFIG
from hexview.values import InputBase


def test_defaults() -> None:
    args = parse_args([])
    state = build_initial_state(args)
    assert state.base is InputBase.HEX
    assert state.value == 0
    assert state.input_text == "0"
    assert state.field_config == DEFAULT_FIELD_CONFIG
    assert state.show_fields is False
    assert state.always_on_top is False


def test_initial_value_in_decimal() -> None:
    args = parse_args(["--base", "dec", "--value", "1,024", "--fields-view", "--pin"])
    state = build_initial_state(args)
    assert state.base is InputBase.DEC
    assert state.value == 1024
    assert state.input_text == "1024"
    assert state.show_fields is True
    assert state.always_on_top is True


def test_unparseable_initial_value_falls_back_to_zero() -> None:
    state = build_initial_state(parse_args(["--value", "xyz"]))
    assert state.value == 0
    assert state.input_text == "0"


def test_log_level_is_case_insensitive() -> None:
    assert parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_view_toggle_text_names_the_other_view() -> None:
    assert view_toggle_text(False) == "Fields"
    assert view_toggle_text(True) == "Bits"


def test_log_level_default_comes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEXVIEW_LOG_LEVEL", "info")
    assert parse_args([]).log_level == "INFO"


def test_unknown_log_level_in_environment_is_a_usage_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("HEXVIEW_LOG_LEVEL", "verbose")
    with pytest.raises(SystemExit) as excinfo:
        parse_args([])
    assert excinfo.value.code == 2


def test_explicit_log_level_overrides_bad_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("HEXVIEW_LOG_LEVEL", "verbose")
    assert parse_args(["--log-level", "error"]).log_level == "ERROR"
