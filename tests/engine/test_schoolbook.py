"""Tests for exactnum/engine/schoolbook.py: digit-string primitives."""

import pytest

from exactnum.engine import MAX_POWER, SchoolbookEngine
from exactnum.engine.schoolbook import MAX_DIGITS_ADD_DIV, MAX_DIGITS_MUL
from exactnum.errors import InvalidArgumentError


@pytest.fixture(params=["fast", "digits"])
def engine(request):
    """Default thresholds, and thresholds of zero so every operand takes the digit path."""
    if request.param == "fast":
        return SchoolbookEngine()
    return SchoolbookEngine(max_digits_add_div=0, max_digits_mul=0)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_default_thresholds(self):
        e = SchoolbookEngine()
        assert e.max_digits_add_div == MAX_DIGITS_ADD_DIV
        assert e.max_digits_mul == MAX_DIGITS_MUL

    def test_negative_threshold_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SchoolbookEngine(max_digits_add_div=-1)
        with pytest.raises(InvalidArgumentError):
            SchoolbookEngine(max_digits_mul=-1)

    def test_name_and_repr(self):
        assert SchoolbookEngine.name == "schoolbook"
        assert repr(SchoolbookEngine()) == "SchoolbookEngine()"


# ---------------------------------------------------------------------------
# Sign helpers and comparison
# ---------------------------------------------------------------------------

class TestSignHelpers:
    def test_neg(self, engine):
        assert engine.neg("0") == "0"
        assert engine.neg("5") == "-5"
        assert engine.neg("-5") == "5"

    def test_abs(self, engine):
        assert engine.abs("0") == "0"
        assert engine.abs("-123") == "123"
        assert engine.abs("123") == "123"


class TestCmp:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("0", "0", 0),
            ("1", "0", 1),
            ("0", "1", -1),
            ("-1", "0", -1),
            ("-1", "1", -1),
            ("1", "-1", 1),
            ("-2", "-1", -1),
            ("-1", "-2", 1),
            ("99", "100", -1),
            ("-99", "-100", 1),
            ("123456789012345678901234567890", "123456789012345678901234567891", -1),
            ("-123456789012345678901234567890", "-123456789012345678901234567890", 0),
        ],
    )
    def test_cmp(self, engine, a, b, expected):
        assert engine.cmp(a, b) == expected


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

class TestAdd:
    def test_zero_operands(self, engine):
        assert engine.add("0", "-7") == "-7"
        assert engine.add("7", "0") == "7"

    def test_carry_across_every_digit(self, engine):
        assert engine.add("9" * 30, "1") == "1" + "0" * 30

    def test_opposite_signs(self, engine):
        assert engine.add("-" + "1" + "0" * 21, "1") == "-" + "9" * 21
        assert engine.add("1", "-" + "1" + "0" * 21) == "-" + "9" * 21
        assert engine.add("1" + "0" * 21, "-1") == "9" * 21

    def test_equal_magnitudes_cancel(self, engine):
        big = "98765432109876543210987654321"
        assert engine.add(big, "-" + big) == "0"
        assert engine.add("-" + big, big) == "0"

    def test_both_negative(self, engine):
        assert engine.add("-999999999999999999999", "-1") == "-1000000000000000000000"

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("123", "999"),
            ("-123", "999"),
            ("123", "-999"),
            ("-123", "-999"),
            ("23487837847837428335322387091", "3090493042335354546876562392000"),
            ("-234878378478328335322387091", "309049304233535154687656232000"),
        ],
    )
    def test_matches_int(self, engine, a, b):
        assert engine.add(a, b) == str(int(a) + int(b))


class TestSub:
    def test_self_minus_self(self, engine):
        assert engine.sub("123456789123456789123456789", "123456789123456789123456789") == "0"

    def test_borrow_across_every_digit(self, engine):
        assert engine.sub("1" + "0" * 25, "1") == "9" * 25

    def test_sign_flip(self, engine):
        assert engine.sub("1", "1" + "0" * 25) == "-" + "9" * 25

    def test_subtracting_negative(self, engine):
        assert engine.sub("5", "-5") == "10"
        assert engine.sub("-5", "5") == "-10"


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

class TestMul:
    def test_shortcuts(self, engine):
        big = "123456789123456789123456789"
        assert engine.mul("0", big) == "0"
        assert engine.mul(big, "0") == "0"
        assert engine.mul("1", big) == big
        assert engine.mul(big, "1") == big
        assert engine.mul("-1", big) == "-" + big
        assert engine.mul(big, "-1") == "-" + big

    def test_known_product(self, engine):
        assert engine.mul("123456789", "987654321") == "121932631112635269"

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("123456789", "-987654321"),
            ("-123456789", "-987654321"),
            ("99999999999999999999", "99999999999999999999"),
            ("489798742123504", "324893948394"),
            ("-387590928349859", "23609901123"),
            ("100000000000000000000", "30"),
        ],
    )
    def test_matches_int(self, engine, a, b):
        assert engine.mul(a, b) == str(int(a) * int(b))


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

class TestDivQR:
    @pytest.mark.parametrize(
        ("a", "b", "q", "r"),
        [
            ("1", "123", "0", "1"),
            ("1", "-123", "0", "1"),
            ("-1", "123", "0", "-1"),
            ("-1", "-123", "0", "-1"),
            ("123", "2", "61", "1"),
            ("123", "-2", "-61", "1"),
            ("-123", "2", "-61", "-1"),
            ("-123", "-2", "61", "-1"),
            ("123", "-123", "-1", "0"),
            ("-124", "-123", "1", "-1"),
            ("1999999999999999999999999", "2000000000000000000000000", "0", "1999999999999999999999999"),
            ("1000000000000000000000000000000", "3", "333333333333333333333333333333", "1"),
            ("1000000000000000000000000000000", "13", "76923076923076923076923076923", "1"),
            ("123456789123456789123456789", "987654321987654321", "124999998", "850308642973765431"),
            ("123456789123456789123456789", "-87654321987654321", "-1408450676", "65623397056685793"),
            ("-123456789123456789123456789", "7654321987654321", "-16129030020", "-1834176331740369"),
            ("-123456789123456789123456789", "-654321987654321", "188678955396", "-205094497790673"),
        ],
    )
    def test_truncating_division(self, engine, a, b, q, r):
        assert engine.div_qr(a, b) == (q, r)
        assert engine.div_q(a, b) == q
        assert engine.div_r(a, b) == r

    def test_shortcuts(self, engine):
        big = "-123456789123456789123456789"
        assert engine.div_qr("0", big) == ("0", "0")
        assert engine.div_qr(big, big) == ("1", "0")
        assert engine.div_qr(big, "1") == (big, "0")
        assert engine.div_qr(big, "-1") == (big[1:], "0")

    def test_divisor_larger_than_dividend(self, engine):
        assert engine.div_qr("12345678901234567890", "123456789012345678901") == ("0", "12345678901234567890")


# ---------------------------------------------------------------------------
# Power and gcd
# ---------------------------------------------------------------------------

class TestPow:
    def test_small(self, engine):
        assert engine.pow("-3", 0) == "1"
        assert engine.pow("-3", 1) == "-3"
        assert engine.pow("-3", 3) == "-27"
        assert engine.pow("0", 5) == "0"

    def test_two_to_256(self, engine):
        assert engine.pow("2", 256) == (
            "115792089237316195423570985008687907853269984665640564039457584007913129639936"
        )

    def test_negative_base_odd_exponent(self, engine):
        assert engine.pow("-2", 255) == (
            "-57896044618658097711785492504343953926634992332820282019728792003956564819968"
        )

    def test_max_power_of_one(self, engine):
        assert engine.pow("1", MAX_POWER) == "1"
        assert engine.pow("-1", MAX_POWER) == "1"


class TestGcd:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("0", "0", "0"),
            ("123456789123456789123456789123456789", "0", "123456789123456789123456789123456789"),
            ("0", "-42", "42"),
            ("123456789123456789123456789123456789", "1", "1"),
            ("123456789123456789123456789123456789", "9", "9"),
            ("123456789123456789123456789123456789", "101", "101"),
            ("123456789123456789123456789123456789", "988", "247"),
            ("123456789123456789123456789123456789", "10010", "1001"),
            ("123456789123456789123456789123456789", "100035", "2223"),
            ("-12", "18", "6"),
            ("-12", "-18", "6"),
        ],
    )
    def test_gcd(self, engine, a, b, expected):
        assert engine.gcd(a, b) == expected
        assert engine.gcd(b, a) == expected
