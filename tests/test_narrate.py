"""Tests for the step narration."""

import pytest

import narrate
from float_utils import double2bits


def test_describe_fixed_tags():
    assert narrate.describe("add") == "The mantissas are added together."
    assert "carry" in narrate.describe("round:carry")
    assert "first number is larger" in narrate.describe("sub(A>B)")
    assert "second number is larger" in narrate.describe("sub(B>A)")


def test_describe_normalize():
    assert narrate.describe("normalize:left(3)") == "The result is shifted left by 3 bits to normalize it."
    assert narrate.describe("normalize:right(1)") == "The result is shifted right by 1 bit to normalize it."


@pytest.mark.parametrize("tag", ["", "normR(1)", "normalize:up(1)", "round", "align "])
def test_describe_unknown_tag(tag):
    with pytest.raises(ValueError):
        narrate.describe(tag)


def test_concise_why_empty():
    assert narrate.concise_why([]) == "Steps:\n- The numbers are aligned, operated on, normalized, and rounded.\n"


def test_concise_why_wraps_lines():
    text = narrate.concise_why(["align", "add", "normalize:right(1)", "round:keep"])
    lines = text.splitlines()
    assert lines[0] == "Steps:"
    assert lines[1].startswith("- The exponents are aligned")
    assert all(line.startswith("- ") for line in lines[1:])
    assert all(len(line) <= 72 for line in lines)
    assert "No rounding adjustment was needed." in text


def test_concise_why_caps_lines():
    text = narrate.concise_why(["sub(B>A)"] * 20, max_lines=3)
    assert len(text.splitlines()) == 1 + 3


def test_notes_for_classic_examples():
    assert len(narrate.notes("add", double2bits(0.1), double2bits(0.2))) == 2
    assert "1e16" in narrate.notes("Add", double2bits(1e16), double2bits(1.0))[0]
    assert narrate.notes("sub", double2bits(1e16), double2bits(1e16))
    assert narrate.notes("mul", double2bits(0.1), double2bits(0.2)) == []


def test_notes_match_within_tolerance():
    assert len(narrate.notes("add", double2bits(0.1 + 1e-13), double2bits(0.2))) == 2
    assert narrate.notes("add", double2bits(0.1 + 1e-9), double2bits(0.2)) == []
    assert narrate.notes("add", double2bits(1e16 + 2), double2bits(1.0)) == []
    assert narrate.notes("add", double2bits(float("nan")), double2bits(0.2)) == []
