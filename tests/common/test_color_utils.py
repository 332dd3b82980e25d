from __future__ import annotations

import pytest

from util.color import color_from_name, normalize_color, parse_hex_color_str, scale_rgb


def _approx_tuple(t):
    return tuple(round(v, 6) for v in t)


def test_parse_hex_color_valid_variants() -> None:
    expect = (round(0x11 / 255.0, 6), round(0x22 / 255.0, 6), round(0x33 / 255.0, 6), 1.0)
    assert _approx_tuple(parse_hex_color_str("#112233")) == expect
    assert _approx_tuple(parse_hex_color_str("112233")) == expect
    assert _approx_tuple(parse_hex_color_str("0x112233CC"))[3] == round(0xCC / 255.0, 6)


def test_parse_hex_color_invalid() -> None:
    with pytest.raises(ValueError):
        parse_hex_color_str("#123")
    with pytest.raises(ValueError):
        parse_hex_color_str("not-a-color")


def test_named_colors_are_case_insensitive() -> None:
    assert color_from_name("White") == (1.0, 1.0, 1.0, 1.0)
    assert normalize_color("BROWN") == pytest.approx((165 / 255, 42 / 255, 42 / 255, 1.0))
    assert color_from_name("chartreuse-ish") is None


def test_normalize_color_from_tuple_01() -> None:
    assert _approx_tuple(normalize_color((0.1, 0.2, 0.3))) == (0.1, 0.2, 0.3, 1.0)


def test_normalize_color_from_tuple_255() -> None:
    rgba = normalize_color((255, 128, 0, 64))
    assert _approx_tuple(rgba) == (1.0, round(128 / 255.0, 6), 0.0, round(64 / 255.0, 6))


def test_normalize_color_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        normalize_color((1.0, 2.0))
    with pytest.raises(ValueError):
        normalize_color(42)
    with pytest.raises(ValueError):
        normalize_color("nope")


def test_scale_rgb_clamps_and_keeps_alpha() -> None:
    assert scale_rgb((0.5, 0.2, 1.0, 0.7), 2.0) == pytest.approx((1.0, 0.4, 1.0, 0.7))
    assert scale_rgb((0.5, 0.5, 0.5, 1.0), 0.0) == (0.0, 0.0, 0.0, 1.0)
