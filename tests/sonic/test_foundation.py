"""
Foundation module tests: field.py, srs.py, util.py
"""
import pytest
from zkp.sonic.field import (
    FR, CURVE_ORDER, G1, G2, Z1, Z2,
    to_fr, ec_mul, ec_add, ec_neg, ec_eq, is_infinity, ec_affine,
    multiexp, pairing_product_is_one,
)
from zkp.sonic.srs import SRS
from zkp.sonic.util import (
    evaluate_at_consecutive_powers,
    evaluate_laurent,
    mul_add_polynomials,
    multiply_polynomials,
    kate_division,
    polynomial_commitment,
    polynomial_commitment_opening,
)


# =====================================================================
# FR / 타원곡선 연산
# =====================================================================

class TestFR:
    def test_modular_reduction(self):
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_division_inverse(self):
        a = FR(3)
        assert a * (FR(1) / a) == FR(1)

    def test_to_fr(self):
        assert to_fr(5) == FR(5)
        value = FR(9)
        assert to_fr(value) is value


class TestCurveOps:
    def test_mul_accepts_fr(self):
        assert ec_eq(ec_mul(G1, FR(5)), ec_mul(G1, 5))

    def test_mul_reduces_scalar(self):
        assert ec_eq(ec_mul(G1, CURVE_ORDER + 2), ec_mul(G1, 2))

    def test_add_neg_is_identity(self):
        p = ec_mul(G1, 11)
        assert is_infinity(ec_add(p, ec_neg(p)))

    def test_affine_of_infinity(self):
        assert ec_affine(Z1) is None

    def test_affine_is_normalized(self):
        x, y = ec_affine(ec_mul(G1, 2))
        assert ec_eq(ec_mul(G1, 2), (x, y, type(x).one()))


class TestMultiexp:
    def test_empty_is_identity(self):
        assert is_infinity(multiexp([], []))

    def test_linear_combination(self):
        result = multiexp([G1, ec_mul(G1, 2)], [FR(3), FR(4)])
        assert ec_eq(result, ec_mul(G1, 11))

    def test_zero_scalars_skipped(self):
        result = multiexp([G1, G1], [FR(0), FR(7)])
        assert ec_eq(result, ec_mul(G1, 7))

    def test_g2_identity(self):
        result = multiexp([G2], [FR(0)], zero=Z2)
        assert is_infinity(result)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            multiexp([G1], [FR(1), FR(2)])


class TestPairingProduct:
    def test_balanced_product(self):
        # e(3·g, h) · e(-g, 3·h) = 1
        pairs = [(ec_mul(G1, 3), G2), (ec_neg(G1), ec_mul(G2, 3))]
        assert pairing_product_is_one(pairs)

    def test_unbalanced_product(self):
        pairs = [(ec_mul(G1, 3), G2), (ec_neg(G1), ec_mul(G2, 4))]
        assert not pairing_product_is_one(pairs)

    def test_infinity_pairs_ignored(self):
        assert pairing_product_is_one([(Z1, G2), (G1, Z2)])


# =====================================================================
# SRS
# =====================================================================

class TestSRS:
    def test_layout(self):
        x, alpha = FR(5), FR(7)
        srs = SRS.new(3, x, alpha)
        assert srs.d == 3
        assert len(srs.g_positive_x) == 4
        assert len(srs.h_negative_x) == 4
        assert len(srs.g_positive_x_alpha) == 3
        assert len(srs.g_negative_x_alpha) == 3
        assert len(srs.h_positive_x_alpha) == 4
        assert ec_eq(srs.g_positive_x[0], G1)
        assert ec_eq(srs.g_positive_x[2], ec_mul(G1, x * x))
        assert ec_eq(srs.g_negative_x[1], ec_mul(G1, FR(1) / x))
        # α 거듭제곱은 x^{±1}부터 시작한다
        assert ec_eq(srs.g_positive_x_alpha[0], ec_mul(G1, alpha * x))
        assert ec_eq(srs.h_positive_x_alpha[0], ec_mul(G2, alpha))

    def test_generate_is_deterministic(self):
        a = SRS.generate(2, b"seed")
        b = SRS.generate(2, b"seed")
        c = SRS.generate(2, b"other seed")
        assert ec_eq(a.g_positive_x[1], b.g_positive_x[1])
        assert not ec_eq(a.g_positive_x[1], c.g_positive_x[1])

    def test_rejects_zero_degree(self):
        with pytest.raises(ValueError):
            SRS.new(0, FR(5), FR(7))

    def test_rejects_zero_secret(self):
        with pytest.raises(ValueError):
            SRS.new(2, FR(0), FR(7))


# =====================================================================
# 다항식 유틸리티
# =====================================================================

class TestPolynomialHelpers:
    def test_consecutive_powers(self):
        # 2·x^1 + 3·x^2 at x = 5, first power x^1
        assert evaluate_at_consecutive_powers([FR(2), FR(3)], FR(5), FR(5)) == FR(85)

    def test_laurent_negative_powers(self):
        # x^{-1} + 4 + x at x = 2
        value = evaluate_laurent([FR(1), FR(4), FR(1)], -1, FR(2))
        assert value == FR(1) / FR(2) + FR(6)

    def test_mul_add(self):
        a = [FR(1), FR(1), FR(1)]
        mul_add_polynomials(a, [FR(2), FR(3)], FR(10))
        assert a == [FR(21), FR(31), FR(1)]

    def test_mul_add_target_too_short(self):
        with pytest.raises(ValueError):
            mul_add_polynomials([FR(1)], [FR(1), FR(2)], FR(1))

    def test_multiply(self):
        # (1 + x)(1 - x) = 1 - x^2
        assert multiply_polynomials([FR(1), FR(1)], [FR(1), FR(-1)]) == [FR(1), FR(0), FR(-1)]

    def test_kate_division(self):
        # (x^2 - 9) / (x - 3) = x + 3
        assert kate_division([FR(-9), FR(0), FR(1)], FR(3)) == [FR(3), FR(1)]

    def test_kate_division_drops_remainder(self):
        # (x^2 + 1 - 10) / (x - 3)
        assert kate_division([FR(1), FR(0), FR(1)], FR(3)) == [FR(3), FR(1)]


class TestCommitments:
    def test_full_degree_commitment(self, small_srs):
        # f(X) = 2X^{-1} + 3X^2
        x, alpha = FR(5), FR(7)
        comm = polynomial_commitment(4, small_srs, [FR(2), FR(0), FR(0), FR(3)], -1)
        f_x = FR(2) / x + FR(3) * x * x
        assert ec_eq(comm, ec_mul(G1, alpha * f_x))

    def test_max_degree_commitment_is_shifted(self, small_srs):
        # max_degree = 2: g^{α·x^{2}·f(x)}, f(X) = X
        x, alpha = FR(5), FR(7)
        comm = polynomial_commitment(2, small_srs, [FR(1)], 1)
        assert ec_eq(comm, ec_mul(G1, alpha * x ** 3))

    def test_constant_term_rejected(self, small_srs):
        with pytest.raises(ValueError):
            polynomial_commitment(4, small_srs, [FR(1)], 0)

    def test_degree_beyond_srs_rejected(self, small_srs):
        with pytest.raises(ValueError):
            polynomial_commitment(4, small_srs, [FR(1)], 5)

    def test_opening_quotient(self, small_srs):
        # f(X) = X^{-1} + X^2, W = g^{(f(x) - f(z))/(x - z)}
        x, z = FR(5), FR(3)
        coeffs = [FR(1), FR(0), FR(0), FR(1)]
        value = evaluate_laurent(coeffs, -1, z)
        opening = polynomial_commitment_opening(coeffs, -1, value, z, small_srs)
        f_x = FR(1) / x + x * x
        assert ec_eq(opening, ec_mul(G1, (f_x - value) / (x - z)))
