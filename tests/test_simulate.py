"""Tests for the command line front end."""

import json

import pytest

import simulate
from float_utils import spaced64

ONE_BIN = "0 01111111111 " + "0" * 52
TWO_BIN = "0 10000000000 " + "0" * 52


def test_decimal_operands(capsys):
    assert simulate.main(["2.5", "add", "3.75"]) == 0
    out = capsys.readouterr().out
    assert "A  (dec): 2.5\n" in out
    assert "Op: ADD\n" in out
    assert "Result (dec): 6.25\n" in out
    assert "Steps:\n- The exponents are aligned" in out


def test_negative_decimal_operand(capsys):
    assert simulate.main(["-2.5", "*", "2"]) == 0
    assert "Result (dec): -5.0\n" in capsys.readouterr().out


def test_bit_operands(capsys):
    assert simulate.main(["-b", ONE_BIN, "add", ONE_BIN]) == 0
    out = capsys.readouterr().out
    assert "Result (bin): " + TWO_BIN + "\n" in out


def test_json_output(capsys):
    assert simulate.main(["--json", "1", "div", "0"]) == 0
    [r] = json.loads(capsys.readouterr().out)
    assert r["op"] == "DIV"
    assert r["result_class"] == "Inf"
    assert r["steps"] == []


def test_invalid_number(capsys):
    assert simulate.main(["abc", "add", "1"]) == 2
    assert capsys.readouterr().err == "Error: Invalid number format\n"


def test_malformed_bit_pattern(capsys):
    assert simulate.main(["-b", "0101", "add", ONE_BIN]) == 2
    assert capsys.readouterr().err == "Error: 64-bit binary string required.\n"


def test_unknown_operator():
    with pytest.raises(SystemExit):
        simulate.main(["1", "pow", "2"])


def test_missing_operands():
    with pytest.raises(SystemExit):
        simulate.main(["1"])


def test_example_precision(capsys):
    assert simulate.main(["--example", "precision"]) == 0
    out = capsys.readouterr().out
    assert "Result (dec): 0.30000000000000004\n" in out
    assert "Note: 0.1 + 0.2 does not exactly equal 0.3" in out


def test_example_significance_chain(capsys):
    assert simulate.main(["--example", "significance", "--json"]) == 0
    first, second = json.loads(capsys.readouterr().out)
    assert first["result_bin"] == spaced64(0x4341C37937E08000)
    assert second["op"] == "SUB"
    assert second["result_dec"] == "0.0"
    assert second["notes"]


def test_run_returns_err_for_second_operand():
    res = simulate.run("1", "add", "nope")
    assert not res
    assert res.text == "nope"


@pytest.mark.parametrize(
    "a, op, b, result",
    [
        ("-1e5", "add", "1", "-99999.0"),
        ("-2.5e-3", "mul", "2", "-0.005"),
        ("-inf", "add", "1", "-inf"),
        ("3", "-", "-1E2", "103.0"),
    ],
)
def test_negative_scientific_literals(capsys, a, op, b, result):
    assert simulate.main([a, op, b]) == 0
    assert "Result (dec): " + result + "\n" in capsys.readouterr().out


def test_negative_literal_with_flags(capsys):
    assert simulate.main(["-1e5", "sub", "-1e5", "--json"]) == 0
    [r] = json.loads(capsys.readouterr().out)
    assert r["a_dec"] == "-100000.0"
    assert r["result_dec"] == "0.0"


def test_operands_last():
    assert simulate.operands_last(["-j", "-1e5", "+", "2"]) == ["-j", "--", "-1e5", "+", "2"]
    assert simulate.operands_last(["-e", "precision"]) == ["-e", "precision"]
    assert simulate.operands_last(["1", "-", "-x"]) == ["-x", "--", "1", "-"]
