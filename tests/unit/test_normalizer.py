from __future__ import annotations

import pytest

from src.mapping.normalizer import clean_value, create_full_name, is_blank, to_text


@pytest.mark.parametrize("value,expected", [
    ("  Max   Mustermann ", "Max Mustermann"),
    ("a\t\tb\nc", "a b c"),
    ("", ""),
    (None, ""),
    (float("nan"), ""),
    (10115, "10115"),
    (10115.0, "10115"),
    (12.5, "12.5"),
    (0, "0"),
])
def test_clean_value(value, expected):
    assert clean_value(value) == expected


def test_is_blank():
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank(float("nan"))
    assert not is_blank(0)
    assert not is_blank("x")


def test_to_text_keeps_inner_whitespace():
    assert to_text(" a  b ") == " a  b "


@pytest.mark.parametrize("first,last,expected", [
    ("Max", "Mustermann", "Max Mustermann"),
    ("  Max ", " Mustermann  ", "Max Mustermann"),
    ("", "Mustermann", "Mustermann"),
    ("Max", None, "Max"),
    (None, None, ""),
])
def test_create_full_name(first, last, expected):
    assert create_full_name(first, last) == expected
