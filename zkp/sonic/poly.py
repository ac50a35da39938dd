"""
Sonic 선형결합 다항식 s(X, Y) 평가기
=====================================

회로의 선형 제약을 두 변수 로랑(Laurent) 다항식으로 인코딩한 것이 s(X, Y)이다.

    s(X, Y) = Σᵢ uᵢ(Y)·X^{-i} + vᵢ(Y)·X^{i} + wᵢ(Y)·X^{i+n}

    uᵢ(Y) = Σ_q Y^{q+n}·u_{i,q}
    vᵢ(Y) = Σ_q Y^{q+n}·v_{i,q}
    wᵢ(Y) = -Y^{i} - Y^{-i} + Σ_q Y^{q+n}·w_{i,q}

  u, v, w는 각각 A, B, C 배선에 붙은 선형 제약 계수이다.

**두 평가기**:
  - SxEval(y, n): Y = y를 고정하고 X에 대한 다항식을 만든다.
  - SyEval(x, n, q): X = x를 고정하고 Y에 대한 다항식을 만든다.
  둘 다 Backend로서 회로를 다시 합성하며 계수를 누적한다.
  비용이 회로 크기에 비례하므로, 검증기는 외부 조언(SxyAdvice)이 없을 때만
  이 경로를 쓴다.

사용 예시:
    >>> ev = SxEval(y, n)
    >>> synthesize(ev, circuit)
    >>> szy = ev.finalize(z)    # s(z, y)
"""

from zkp.sonic.field import FR
from zkp.sonic.cs import Backend
from zkp.sonic.errors import InternalConsistencyError


class SxEval(Backend):
    """Y = y 로 고정한 s(X, y).

    속성:
        u: X^{-i}의 계수 (i = 1..n)
        v: X^{i}의 계수 (i = 1..n)
        w: X^{i+n}의 계수 (i = 1..n)
        q: 합성 중 본 선형 제약 수
    """

    def __init__(self, y, n):
        if y == FR(0):
            raise ValueError("SxEval: y는 0이 될 수 없습니다")
        y_inv = FR(1) / y

        self.y = y
        self.n = n
        self.q = 0
        self.yqn = y ** n

        self.u = [FR(0)] * n
        self.v = [FR(0)] * n

        # wᵢ(y)의 고정 부분: -y^i - y^{-i}
        self.w = []
        pos = FR(1)
        neg = FR(1)
        for _ in range(n):
            pos = pos * y
            neg = neg * y_inv
            self.w.append(-(pos + neg))

    def new_linear_constraint(self):
        self.q += 1
        self.yqn = self.yqn * self.y
        return self.yqn

    def insert_coefficient(self, var, coeff, y):
        if not 1 <= var.index <= self.n:
            raise InternalConsistencyError(
                f"SxEval: 게이트 {var.index}가 전처리된 게이트 수 {self.n}를 벗어났습니다"
            )
        acc = {"A": self.u, "B": self.v, "C": self.w}[var.kind]
        acc[var.index - 1] = acc[var.index - 1] + coeff.multiply(y)

    def poly(self):
        """(음의 계수 X^{-1..-n}, 양의 계수 X^{1..2n}) 을 반환한다."""
        return list(self.u), self.v + self.w

    def finalize(self, x):
        """s(x, y)를 계산한다."""
        if x == FR(0):
            raise ValueError("SxEval: x는 0이 될 수 없습니다")
        x_inv = FR(1) / x

        acc = FR(0)
        tmp = x_inv
        for u in self.u:
            acc = acc + u * tmp
            tmp = tmp * x_inv

        tmp = x
        for v in self.v:
            acc = acc + v * tmp
            tmp = tmp * x
        for w in self.w:
            acc = acc + w * tmp
            tmp = tmp * x

        return acc


class SyEval(Backend):
    """X = x 로 고정한 s(x, Y).

    Y의 차수 범위: Y^{-n} .. Y^{n+q}
    """

    def __init__(self, x, n, q):
        if x == FR(0):
            raise ValueError("SyEval: x는 0이 될 수 없습니다")
        x_inv = FR(1) / x

        self.max_n = n
        self.max_q = q
        self.current_q = 0

        # x^{-1..-n}, x^{1..n}, x^{n+1..2n}
        self.a = []
        self.b = []
        self.c = []
        tmp = FR(1)
        for _ in range(n):
            tmp = tmp * x_inv
            self.a.append(tmp)
        tmp = FR(1)
        for _ in range(n):
            tmp = tmp * x
            self.b.append(tmp)
        for _ in range(n):
            tmp = tmp * x
            self.c.append(tmp)

        # wᵢ의 -Y^i, -Y^{-i} 항은 X^{i+n}에 붙어 있다
        self.positive_coeffs = [-c for c in self.c] + [FR(0)] * q
        self.negative_coeffs = [-c for c in self.c]

    def new_linear_constraint(self):
        self.current_q += 1
        if self.current_q > self.max_q:
            raise InternalConsistencyError(
                f"SyEval: 제약 {self.current_q}가 전처리된 제약 수 {self.max_q}를 벗어났습니다"
            )
        return self.current_q

    def insert_coefficient(self, var, coeff, q):
        if not 1 <= var.index <= self.max_n:
            raise InternalConsistencyError(
                f"SyEval: 게이트 {var.index}가 전처리된 게이트 수 {self.max_n}를 벗어났습니다"
            )
        base = {"A": self.a, "B": self.b, "C": self.c}[var.kind][var.index - 1]
        i = self.max_n + q - 1
        self.positive_coeffs[i] = self.positive_coeffs[i] + coeff.multiply(base)

    def poly(self):
        """(음의 계수 Y^{-1..-n}, 양의 계수 Y^{1..n+q}) 를 반환한다."""
        return list(self.negative_coeffs), list(self.positive_coeffs)

    def finalize(self, y):
        """s(x, y)를 계산한다."""
        if y == FR(0):
            raise ValueError("SyEval: y는 0이 될 수 없습니다")
        y_inv = FR(1) / y

        acc = FR(0)
        tmp = y
        for coeff in self.positive_coeffs:
            acc = acc + coeff * tmp
            tmp = tmp * y
        tmp = y_inv
        for coeff in self.negative_coeffs:
            acc = acc + coeff * tmp
            tmp = tmp * y_inv
        return acc
