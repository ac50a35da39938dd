"""
Sonic 제약 시스템 (Constraint System)
======================================

회로를 곱셈 게이트와 선형 제약으로 표현한다.

**곱셈 게이트**:
  i번째 게이트(1부터 시작)는 세 배선 A(i), B(i), C(i)를 가지며
  항상 a_i · b_i = c_i 를 만족한다.

**선형 제약**:
  q번째 선형 제약은 Σᵢ (a_i·u_{i,q} + b_i·v_{i,q} + c_i·w_{i,q}) = k_q 이다.
  공개 입력 제약에서만 k_q ≠ 0 이며, 그 인덱스 q가 k-power로 보고된다.

**합성(synthesis)과 Backend**:
  회로는 ConstraintSystem 인터페이스만 보고 synthesize(cs)를 수행한다.
  synthesize() 드라이버는 이를 Backend 이벤트로 변환한다.
    - new_multiplication_gate: 새 게이트
    - new_linear_constraint:   새 제약 (Backend가 정한 인덱스를 반환)
    - insert_coefficient:      제약에 (변수, 계수) 항 추가
    - new_k_power:             공개 입력 제약의 인덱스
    - get_var / set_var:       배선 값 (값이 필요한 Backend만 사용)

  값 계산은 인자 없는 콜백으로 전달되며, 값이 필요 없는 Backend
  (전처리, 평가기)는 콜백을 호출하지 않는다.

**상수 배선 ONE**:
  드라이버는 회로보다 먼저 공개 입력 1을 할당한다. 따라서 ONE = A(1)이고
  k_map[0]은 항상 상수 배선에 해당한다.

사용 예시:
    >>> class Square(Circuit):
    ...     def synthesize(self, cs):
    ...         a, b, c = cs.multiply(lambda: (FR(3), FR(3), FR(9)))
    ...         cs.enforce_zero(LinearCombination.zero() + a - b)
"""

from collections import namedtuple

from zkp.sonic.field import FR
from zkp.sonic.errors import SynthesisError, InternalConsistencyError


# ─────────────────────────────────────────────────────────────────────
# 변수와 계수
# ─────────────────────────────────────────────────────────────────────

class Variable(namedtuple("Variable", ["kind", "index"])):
    """곱셈 게이트의 배선. kind는 "A", "B", "C" 중 하나."""

    __slots__ = ()

    @classmethod
    def A(cls, index):
        return cls("A", index)

    @classmethod
    def B(cls, index):
        return cls("B", index)

    @classmethod
    def C(cls, index):
        return cls("C", index)


class Coeff:
    """선형 제약 계수: Zero, One, NegativeOne, Full(value).

    0, 1, -1을 구분해 두면 평가기가 곱셈 없이 더하거나 뺄 수 있다.
    """

    ZERO = "zero"
    ONE = "one"
    NEGATIVE_ONE = "negative-one"
    FULL = "full"

    __slots__ = ("kind", "value")

    def __init__(self, kind, value=None):
        self.kind = kind
        self.value = value

    @classmethod
    def from_value(cls, value):
        """FR 값을 가장 간단한 계수 형태로 정규화한다."""
        value = value if isinstance(value, FR) else FR(value)
        if value == FR(0):
            return cls(cls.ZERO)
        if value == FR(1):
            return cls(cls.ONE)
        if value == FR(-1):
            return cls(cls.NEGATIVE_ONE)
        return cls(cls.FULL, value)

    def multiply(self, with_value):
        """계수 × with_value 를 반환한다."""
        if self.kind == self.ZERO:
            return FR(0)
        if self.kind == self.ONE:
            return with_value
        if self.kind == self.NEGATIVE_ONE:
            return -with_value
        return with_value * self.value

    def negate(self):
        if self.kind == self.ONE:
            return Coeff(self.NEGATIVE_ONE)
        if self.kind == self.NEGATIVE_ONE:
            return Coeff(self.ONE)
        if self.kind == self.FULL:
            return Coeff(self.FULL, -self.value)
        return self

    def __eq__(self, other):
        if not isinstance(other, Coeff):
            return NotImplemented
        return self.multiply(FR(1)) == other.multiply(FR(1))

    def __repr__(self):
        if self.kind == self.FULL:
            return f"Coeff.Full({int(self.value)})"
        return f"Coeff.{self.kind}"


Coeff.Zero = Coeff(Coeff.ZERO)
Coeff.One = Coeff(Coeff.ONE)
Coeff.NegativeOne = Coeff(Coeff.NEGATIVE_ONE)


class LinearCombination:
    """(Variable, Coeff) 항의 순서 있는 목록.

    예시:
        >>> lc = LinearCombination.zero() + a - b + (Coeff.from_value(5), cs.ONE)
    """

    def __init__(self, terms=None):
        self.terms = list(terms) if terms else []

    @classmethod
    def zero(cls):
        return cls()

    def __add__(self, other):
        if isinstance(other, Variable):
            return LinearCombination(self.terms + [(other, Coeff.One)])
        coeff, var = other
        if not isinstance(coeff, Coeff):
            coeff = Coeff.from_value(coeff)
        return LinearCombination(self.terms + [(var, coeff)])

    def __sub__(self, other):
        if isinstance(other, Variable):
            return LinearCombination(self.terms + [(other, Coeff.NegativeOne)])
        coeff, var = other
        if not isinstance(coeff, Coeff):
            coeff = Coeff.from_value(coeff)
        return LinearCombination(self.terms + [(var, coeff.negate())])

    def __iter__(self):
        return iter(self.terms)

    def __len__(self):
        return len(self.terms)


# ─────────────────────────────────────────────────────────────────────
# 회로 / 제약 시스템 / Backend 인터페이스
# ─────────────────────────────────────────────────────────────────────

class Circuit:
    """회로 인터페이스. synthesize(cs)만 구현하면 된다.

    같은 회로 인스턴스를 두 번 합성하면 같은 이벤트 열이 나와야 한다.
    """

    def synthesize(self, cs):
        raise NotImplementedError


class ConstraintSystem:
    """회로가 합성 중에 사용하는 인터페이스."""

    ONE = Variable.A(1)

    def alloc(self, value):
        raise NotImplementedError

    def alloc_input(self, value):
        raise NotImplementedError

    def enforce_zero(self, lc):
        raise NotImplementedError

    def multiply(self, values):
        raise NotImplementedError

    def get_value(self, var):
        raise NotImplementedError


class Backend:
    """합성 이벤트를 받는 쪽. 단계(전처리, 평가, 증명)마다 구현이 다르다.

    기본 구현은 모든 이벤트를 무시하며 값 콜백을 호출하지 않는다.
    """

    def get_var(self, variable):
        return None

    def set_var(self, variable, value):
        pass

    def new_multiplication_gate(self):
        pass

    def new_linear_constraint(self):
        raise NotImplementedError

    def insert_coefficient(self, var, coeff, index):
        pass

    def new_k_power(self, index):
        pass


# ─────────────────────────────────────────────────────────────────────
# 기본 합성 드라이버
# ─────────────────────────────────────────────────────────────────────

class Synthesizer(ConstraintSystem):
    """ConstraintSystem 호출을 Backend 이벤트로 옮기는 기본 드라이버.

    alloc은 게이트를 절반씩 채운다: 첫 alloc은 새 게이트의 A를, 다음 alloc은
    같은 게이트의 B를 할당하고 C = A·B 가 된다.
    """

    def __init__(self, backend):
        self.backend = backend
        self.current_variable = None
        self.n = 0
        self.q = 0

    def alloc(self, value):
        if self.current_variable is not None:
            index = self.current_variable
            var_a = Variable.A(index)
            var_b = Variable.B(index)
            var_c = Variable.C(index)

            product = []
            value_a = self.backend.get_var(var_a)

            def value_b():
                b = value()
                if value_a is None:
                    raise SynthesisError.assignment_missing(
                        f"A({index})의 값이 없어 곱을 계산할 수 없습니다"
                    )
                product.append(value_a * b)
                return b

            def value_c():
                if not product:
                    raise SynthesisError.assignment_missing(
                        f"C({index})의 값이 없습니다"
                    )
                return product[0]

            self.backend.set_var(var_b, value_b)
            self.backend.set_var(var_c, value_c)

            self.current_variable = None
            return var_b

        self.n += 1
        index = self.n
        self.backend.new_multiplication_gate()

        var_a = Variable.A(index)
        self.backend.set_var(var_a, value)
        self.current_variable = index
        return var_a

    def alloc_input(self, value):
        input_var = self.alloc(value)

        self.enforce_zero(LinearCombination.zero() + input_var)
        self.backend.new_k_power(self.q)

        return input_var

    def enforce_zero(self, lc):
        self.q += 1
        index = self.backend.new_linear_constraint()

        for var, coeff in lc:
            self.backend.insert_coefficient(var, coeff, index)

    def multiply(self, values):
        self.n += 1
        index = self.n
        self.backend.new_multiplication_gate()

        a = Variable.A(index)
        b = Variable.B(index)
        c = Variable.C(index)

        assigned = []

        def value_a():
            assigned.extend(values())
            return assigned[0]

        def value_b():
            if not assigned:
                raise SynthesisError.assignment_missing(f"B({index})의 값이 없습니다")
            return assigned[1]

        def value_c():
            if not assigned:
                raise SynthesisError.assignment_missing(f"C({index})의 값이 없습니다")
            return assigned[2]

        self.backend.set_var(a, value_a)
        self.backend.set_var(b, value_b)
        self.backend.set_var(c, value_c)

        # 대기 중인 반쪽 게이트는 버린다. 이후 alloc은 새 게이트를 연다.
        # 반쪽 게이트를 유지하는 드라이버와는 multiply 뒤에 alloc을 섞는
        # 회로에서 n, k_map이 달라진다.
        self.current_variable = None
        return a, b, c

    def get_value(self, var):
        value = self.backend.get_var(var)
        if value is None:
            raise SynthesisError.assignment_missing(f"{var}의 값이 없습니다")
        return value


def synthesize(backend, circuit):
    """상수 배선 ONE을 할당한 뒤 회로를 backend 위에서 합성한다.

    Returns:
        Synthesizer: 합성이 끝난 드라이버 (n, q 카운터 확인용)

    Raises:
        SynthesisError: 회로가 합성 오류를 보고한 경우
    """
    driver = Synthesizer(backend)

    one = driver.alloc_input(lambda: FR(1))
    if one != ConstraintSystem.ONE:
        raise InternalConsistencyError(f"상수 배선이 A(1)이 아닙니다: {one}")

    circuit.synthesize(driver)
    return driver
