"""
Sonic 검증기 테스트용 예제 회로
===============================

  CubeCircuit:    x^3 + x + 5 = out   (out 공개, x 비공개)
  ProductCircuit: p * q = out         (out 공개), 빈 게이트로 채움
"""

from zkp.sonic.field import FR
from zkp.sonic.cs import Circuit, Coeff, LinearCombination
from zkp.sonic.errors import SynthesisError


# ── 예제 증인 ──
CUBE_X = 3
CUBE_OUT = 35           # 3^3 + 3 + 5
CUBE_X_OTHER = 4
CUBE_OUT_OTHER = 73     # 4^3 + 4 + 5

PRODUCT_P = 6
PRODUCT_Q = 7
PRODUCT_OUT = 42


def _known(value):
    if value is None:
        raise SynthesisError.assignment_missing()
    return value if isinstance(value, FR) else FR(value)


class CubeCircuit(Circuit):
    """x^3 + x + 5 = out.

    | gate | a   | b   | c    |
    |------|-----|-----|------|
    | 1    | 1   | out | out  |  (ONE, 공개 입력)
    | 2    | x   | x   | x^2  |
    | 3    | x^2 | x   | x^3  |

    n = 3, q = 6, k_map = [1, 2]
    """

    def __init__(self, x=None, out=None):
        self.x = x
        if out is None and x is not None:
            out = FR(x) ** 3 + FR(x) + FR(5)
        self.out = out

    def synthesize(self, cs):
        out = cs.alloc_input(lambda: _known(self.out))

        def square():
            x = _known(self.x)
            return x, x, x * x

        def cube():
            x = _known(self.x)
            return x * x, x, x * x * x

        a2, b2, c2 = cs.multiply(square)
        a3, b3, c3 = cs.multiply(cube)

        cs.enforce_zero(LinearCombination.zero() + a2 - b2)
        cs.enforce_zero(LinearCombination.zero() + a3 - c2)
        cs.enforce_zero(LinearCombination.zero() + b3 - a2)
        cs.enforce_zero(
            LinearCombination.zero() + c3 + a2 + (Coeff.from_value(5), cs.ONE) - out
        )


class ProductCircuit(Circuit):
    """p * q = out. 쓰지 않는 곱셈 게이트(0 * 0 = 0)를 `padding`개 덧붙인다.

    padding=2 이면 n = 4, q = 3, 공개 입력 1개.
    """

    def __init__(self, p=None, q=None, padding=2):
        self.p = p
        self.q = q
        self.padding = padding

    def synthesize(self, cs):
        def product():
            p = _known(self.p)
            q = _known(self.q)
            return p * q

        out = cs.alloc_input(product)

        def factors():
            p = _known(self.p)
            q = _known(self.q)
            return p, q, p * q

        _, _, pq = cs.multiply(factors)
        cs.enforce_zero(LinearCombination.zero() + pq - out)

        for _ in range(self.padding):
            cs.multiply(lambda: (FR(0), FR(0), FR(0)))


class BrokenCircuit(Circuit):
    """매 합성마다 합성 오류를 보고한다."""

    def synthesize(self, cs):
        raise SynthesisError(SynthesisError.MALFORMED, "wire 7 is not connected")


class FlakyCircuit(Circuit):
    """정확히 `good_passes`번만 합성에 성공하고 그 뒤로는 실패한다."""

    def __init__(self, inner, good_passes=1):
        self.inner = inner
        self.good_passes = good_passes

    def synthesize(self, cs):
        if self.good_passes <= 0:
            raise SynthesisError(SynthesisError.UNSATISFIABLE)
        self.good_passes -= 1
        self.inner.synthesize(cs)


class GrowingCircuit(Circuit):
    """합성할 때마다 선형 제약을 하나씩 더 추가한다."""

    def __init__(self, inner):
        self.inner = inner
        self.passes = 0

    def synthesize(self, cs):
        self.inner.synthesize(cs)
        for _ in range(self.passes):
            cs.enforce_zero(LinearCombination.zero())
        self.passes += 1
