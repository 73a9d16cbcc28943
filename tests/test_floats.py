"""Tests for the binary64 number type."""

import math

import numpy as np
import pytest

from floats import binary64


def test_construct_from_float_and_bits():
    assert binary64(0.1).bits == 0x3FB999999999999A
    assert binary64(bits=0x4000000000000000) == 2.0
    assert binary64(binary64(3.0)).bits == binary64(3.0).bits
    assert binary64(np.float32(0.5)).bits == 0x3FE0000000000000


def test_construct_rejects_out_of_range_bits():
    with pytest.raises(ValueError):
        binary64(bits=1 << 64)


def test_classic_precision_error():
    s = binary64(0.1) + binary64(0.2)
    assert s != binary64(0.3)
    assert float(s) == 0.30000000000000004
    assert s.steps[:2] == ["align", "add"]


def test_absorption():
    assert binary64(1e16) + 1 == binary64(1e16)


def test_reflected_operators():
    assert 1 + binary64(2.0) == 3.0
    assert 10 - binary64(4.0) == 6.0
    assert 3 * binary64(2.5) == 7.5
    assert 1 / binary64(4.0) == 0.25


def test_division_matches_host():
    assert float(binary64(1.0) / 3) == 1.0 / 3.0
    assert float(binary64(2.0) / 0.0) == math.inf
    assert (binary64(0.0) / 0.0).isnan()


def test_negation_and_abs():
    x = -binary64(2.0)
    assert x.bits == 0xC000000000000000
    assert abs(x) == 2.0
    assert (-binary64(0.0)).bits == 0x8000000000000000


def test_comparisons():
    assert binary64(-1.0) < binary64(0.5)
    assert binary64(-2.0) < -1.0
    assert binary64(3.0) >= 3.0
    assert binary64(0.0) == binary64(-0.0)
    assert binary64(1.0) > binary64(bits=1)
    assert binary64(-1e-300) > -1e300


def test_nan_is_unordered():
    nan = binary64(float("nan"))
    assert nan != nan
    assert not nan == nan
    assert not nan < 1.0
    assert not nan >= 1.0


def test_unsupported_operand_type():
    with pytest.raises(TypeError):
        binary64(1.0) + "1"
    assert binary64(1.0) != "1.0"


def test_display_helpers():
    x = binary64(1.0)
    assert x.bin == "0 01111111111 " + "0" * 52
    assert x.hex == "0x3FF0000000000000"
    assert str(x) == "1.0"
    assert repr(x) == "binary64(1.0)"


def test_hash_agrees_for_signed_zero():
    assert hash(binary64(0.0)) == hash(binary64(-0.0))
    assert len({binary64(1.0), binary64(1.0), binary64(2.0)}) == 2


@pytest.mark.parametrize("x", [1.0, -2.5, 0.1, 1e300, 5e-324, math.inf, -0.0])
def test_hash_matches_float(x):
    assert hash(binary64(x)) == hash(x)


def test_float_and_binary64_keys_mix():
    d = {1.0: "one", 0.0: "zero"}
    assert d[binary64(1.0)] == "one"
    assert d[binary64(-0.0)] == "zero"
    assert binary64(0.5) in {0.5}


def test_nan_hash_is_stable():
    x = binary64(bits=0x7FF8000000000000)
    assert hash(x) == hash(x)


def test_huge_int_rounds_to_infinity():
    assert binary64(10**400).bits == 0x7FF0000000000000
    assert binary64(-10**400).bits == 0xFFF0000000000000
    assert (binary64(1.0) + 10**400).isinf()
    assert (10**400 * binary64(-1.0)).bits == 0xFFF0000000000000


def test_range_limits():
    assert binary64.max.bits == 0x7FEFFFFFFFFFFFFF
    assert binary64.tiny.bits == 0x0010000000000000
    assert binary64.smallest_subnormal.bits == 0x0000000000000001
    assert (binary64.max * 2).isinf()
    assert (binary64.tiny - binary64.smallest_subnormal).bits == 0x000FFFFFFFFFFFFF
    assert (binary64.smallest_subnormal / 2).iszero()
