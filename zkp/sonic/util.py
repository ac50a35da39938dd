"""
Sonic 다항식 커밋먼트 유틸리티
================================

로랑(Laurent) 다항식은 (계수 리스트, 최저 차수 lowest) 쌍으로 표현한다.

    f(x) = Σᵢ coeffs[i] · x^{lowest + i}

**커밋먼트**:
  최대 차수 max로 제한된 커밋먼트는 g^{α·x^{d-max}·f(x)} 이다.
  max = d 이면 "전체 차수" 커밋먼트 g^{α·f(x)} 가 된다.
  SRS에 g^{α} 가 없으므로 x^{d-max}·f(x)의 상수항은 반드시 0이어야 한다.

**열기 증명**:
  f(z) = v 일 때 W = g^{(f(x) - v)/(x - z)}.
  Batch는 α(W·(x - z) + v) = α·f(x) 를 페어링으로 확인한다.
"""

from zkp.sonic.field import FR, multiexp


def evaluate_at_consecutive_powers(coeffs, first_power, base):
    """Σᵢ coeffs[i] · first_power · base^i 를 계산한다."""
    acc = FR(0)
    current = first_power
    for coeff in coeffs:
        acc = acc + coeff * current
        current = current * base
    return acc


def evaluate_laurent(coeffs, lowest, point):
    """로랑 다항식 f(point)를 계산한다."""
    if lowest >= 0:
        first_power = point ** lowest
    else:
        first_power = (FR(1) / point) ** (-lowest)
    return evaluate_at_consecutive_powers(coeffs, first_power, point)


def mul_add_polynomials(a, b, c):
    """a[i] += b[i]·c (제자리 연산)."""
    if len(a) < len(b):
        raise ValueError("mul_add_polynomials: 대상 리스트가 더 짧습니다")
    for i, coeff in enumerate(b):
        a[i] = a[i] + coeff * c


def multiply_polynomials(a, b):
    """두 계수 리스트의 곱 (단순 합성곱)."""
    if not a or not b:
        return []
    result = [FR(0)] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if x == FR(0):
            continue
        for j, y in enumerate(b):
            result[i + j] = result[i + j] + x * y
    return result


def kate_division(coeffs, point):
    """(P(x) - P(point)) / (x - point) 의 계수를 반환한다.

    합성 나눗셈(synthetic division). 나머지는 버린다.
    coeffs는 낮은 차수부터 나열한다. 결과 길이는 len(coeffs) - 1.
    """
    quotient = [FR(0)] * (len(coeffs) - 1)
    tmp = FR(0)
    for i in range(len(coeffs) - 1, 0, -1):
        lead = coeffs[i] + tmp
        quotient[i - 1] = lead
        tmp = lead * point
    return quotient


def polynomial_commitment(max_degree, srs, coeffs, lowest):
    """g^{α·x^{d-max_degree}·f(x)} 를 계산한다.

    Args:
        max_degree: f의 차수 상한 (전체 차수 커밋먼트는 srs.d)
        srs: SRS
        coeffs, lowest: 로랑 다항식 f

    Raises:
        ValueError: SRS 범위를 벗어나거나 이동된 상수항이 0이 아닐 때
    """
    shift = srs.d - max_degree
    bases = []
    scalars = []
    for i, coeff in enumerate(coeffs):
        if coeff == FR(0):
            continue
        power = lowest + i + shift
        if power == 0:
            raise ValueError("커밋할 다항식의 (이동된) 상수항이 0이 아닙니다")
        if abs(power) > srs.d:
            raise ValueError(f"차수 {power}가 SRS 최대 차수 {srs.d}를 초과합니다")
        if power > 0:
            bases.append(srs.g_positive_x_alpha[power - 1])
        else:
            bases.append(srs.g_negative_x_alpha[-power - 1])
        scalars.append(coeff)
    return multiexp(bases, scalars)


def polynomial_commitment_opening(coeffs, lowest, value, point, srs):
    """f(point) = value 에 대한 열기 증명 g^{(f(x) - value)/(x - point)}.

    Args:
        coeffs, lowest: 로랑 다항식 f
        value: 주장하는 평가값
        point: 평가 점 (0이 아닌 FR)
        srs: SRS

    Returns:
        G1 점: 열기 증명 W
    """
    # x^0 항이 들어가도록 범위를 넓힌다
    start = min(lowest, 0)
    end = max(lowest + len(coeffs) - 1, 0)
    shifted = [FR(0)] * (end - start + 1)
    for i, coeff in enumerate(coeffs):
        shifted[lowest + i - start] = coeff
    shifted[-start] = shifted[-start] - value

    quotient = kate_division(shifted, point)

    bases = []
    scalars = []
    for i, coeff in enumerate(quotient):
        power = start + i
        if abs(power) > srs.d:
            raise ValueError(f"차수 {power}가 SRS 최대 차수 {srs.d}를 초과합니다")
        if power >= 0:
            bases.append(srs.g_positive_x[power])
        else:
            bases.append(srs.g_negative_x[-power])
        scalars.append(coeff)
    return multiexp(bases, scalars)
