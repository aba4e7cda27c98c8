"""Tests for the balance codec: exact strings, derived floats, exact sums."""

import sys

import pytest

from stakesync.domain.balance import (
    DENOMINATION,
    balance_from_bytes,
    parse_balance,
    parse_balance_or_zero,
    sum_balances,
)
from stakesync.exceptions import InvalidBalanceFormat


class TestParseBalance:
    def test_one_token(self):
        balance = parse_balance("1000000000000000000")
        assert balance.exact == "1000000000000000000"
        assert balance.approx == 1.0

    def test_zero(self):
        balance = parse_balance("0")
        assert balance.exact == "0"
        assert balance.approx == 0.0

    def test_leading_zeros_are_canonicalized(self):
        assert parse_balance("000250").exact == "250"

    def test_beyond_float_precision_keeps_exact(self):
        raw = "123456789012345678901234567890123"
        balance = parse_balance(raw)
        assert balance.exact == raw
        assert balance.approx == pytest.approx(int(raw) / DENOMINATION)

    @pytest.mark.parametrize("raw", ["", "abc", "-5", "1.5", " 12", "1e18"])
    def test_invalid_raises(self, raw):
        with pytest.raises(InvalidBalanceFormat):
            parse_balance(raw)

    def test_invalid_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_balance("nope")

    def test_beyond_float_range_saturates(self):
        raw = "1" + "0" * 330
        balance = parse_balance(raw)
        assert balance.exact == raw
        assert balance.approx == sys.float_info.max

    def test_beyond_digit_limit_raises(self):
        with pytest.raises(InvalidBalanceFormat, match="too large"):
            parse_balance("9" * 5000)


class TestParseBalanceOrZero:
    def test_garbage_is_zero(self):
        assert parse_balance_or_zero("garbage").exact == "0"

    def test_none_is_zero(self):
        assert parse_balance_or_zero(None).value == 0

    def test_valid_passes_through(self):
        assert parse_balance_or_zero("42").exact == "42"

    def test_beyond_digit_limit_is_zero(self):
        assert parse_balance_or_zero("9" * 5000).exact == "0"


class TestBalanceFromBytes:
    def test_big_endian(self):
        assert balance_from_bytes(b"\x01\x00").exact == "256"

    def test_empty_is_zero(self):
        assert balance_from_bytes(b"").exact == "0"

    def test_wide_value_saturates_approx(self):
        balance = balance_from_bytes(b"\xff" * 200)
        assert balance.value == 2 ** 1600 - 1
        assert balance.approx == sys.float_info.max

    def test_beyond_digit_limit_raises(self):
        with pytest.raises(InvalidBalanceFormat):
            balance_from_bytes(b"\xff" * 2000)


class TestSumBalances:
    def test_exact_sum(self):
        a = "99999999999999999999999"
        b = "1"
        assert sum_balances(a, b).exact == "100000000000000000000000"

    def test_approx_derived_from_sum(self):
        a = "100000000000000001"
        b = "200000000000000002"
        result = sum_balances(a, b)
        assert result.exact == str(int(a) + int(b))
        assert result.approx == parse_balance(result.exact).approx

    def test_approx_not_sum_of_floats(self):
        # 0.1 + 0.2 style drift shows up when adding the float forms
        a = str(DENOMINATION // 10)
        b = str(DENOMINATION // 5)
        float_sum = parse_balance(a).approx + parse_balance(b).approx
        result = sum_balances(a, b)
        assert result.approx == 0.3
        assert float_sum != 0.3

    def test_invalid_operand_raises(self):
        with pytest.raises(InvalidBalanceFormat):
            sum_balances("10", "x")
