import pytest

from highlighter.core.colors import (ColorError, adjust_color, border_shade,
                                     is_valid_color, normalize_color, parse_color)
from highlighter.core.settings import DEFAULT_TERM_COLOR


def test_default_color_border_shade():
    assert adjust_color("#e8f5e9", -20) == "#d4e1d5"
    assert border_shade(DEFAULT_TERM_COLOR) == "#d4e1d5"


def test_adjust_clamps_each_channel():
    assert adjust_color("#000000", -20) == "#000000"
    assert adjust_color("#ffffff", 20) == "#ffffff"
    assert adjust_color("#0a80f5", -20) == "#006ce1"
    assert adjust_color("#0a80f5", 20) == "#1e94ff"


def test_output_is_lowercase_and_zero_padded():
    assert adjust_color("#ABCDEF", 0) == "#abcdef"
    assert adjust_color("#151515", -16) == "#050505"


def test_parse_accepts_missing_hash():
    assert parse_color("ff8000") == (255, 128, 0)


@pytest.mark.parametrize("bad", ["", "#fff", "#gggggg", "#1234567", "red", None, 123])
def test_malformed_colors_are_rejected(bad):
    assert not is_valid_color(bad)
    with pytest.raises(ColorError):
        adjust_color(bad, -20)


def test_normalize_falls_back_to_default():
    assert normalize_color("#FF0000") == "#ff0000"
    assert normalize_color("nope") == DEFAULT_TERM_COLOR
    assert normalize_color(None, default="#123456") == "#123456"


def test_large_delta_clamps_to_white():
    assert adjust_color("#ffffff", 50) == "#ffffff"
    assert adjust_color("#f0f0f0", 50) == "#ffffff"
