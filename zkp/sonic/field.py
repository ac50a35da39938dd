"""
Sonic 기반 모듈: 스칼라 필드 및 페어링 그룹 연산
==================================================

Sonic 검증기 전체에서 사용하는 대수적 도구를 정의한다.
검증기는 이 연산들을 "조합"만 할 뿐, 직접 구현하지 않는다.

**유한체 FR**:
  bn128 곡선의 스칼라 필드. 챌린지, 평가값, 선형결합 계수가 모두 FR 원소이다.

**그룹 G1 / G2**:
  py_ecc의 optimized_bn128 (사영 좌표) 표현을 사용한다.
  - 커밋먼트, 열기 증명: G1 점
  - SRS의 h 계열 원소: G2 점
  - 항등원은 Z1 / Z2 (z 좌표가 0인 점)

**페어링 곱 검사**:
  Batch.check_all은 여러 페어링을 곱한 뒤 한 번만 최종 지수승을 수행한다.
  pairing_product_is_one이 이 연산을 제공한다.

사용 예시:
    >>> from zkp.sonic.field import FR, G1, ec_mul, ec_eq
    >>> P = ec_mul(G1, FR(5))
    >>> ec_eq(P, ec_mul(G1, 5))  # True
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import optimized_bn128 as bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    예시:
        >>> FR(3) * FR(7)   # FR(21)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order


def to_fr(value):
    """정수 또는 FR 값을 FR로 변환한다."""
    return value if isinstance(value, FR) else FR(value)


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# 항등원 (무한원점). 사영 좌표에서 z = 0
Z1 = bn128.Z1
Z2 = bn128.Z2


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_eq(p1, p2):
    """두 점이 같은지 비교한다.

    사영 좌표는 같은 점을 여러 방식으로 표현하므로 튜플 비교(==) 대신
    이 함수를 사용해야 한다.
    """
    return bn128.eq(p1, p2)


def is_infinity(point):
    """point가 항등원(무한원점)인지 확인한다."""
    return bn128.is_inf(point)


def ec_affine(point):
    """사영 좌표 점을 아핀 좌표 (x, y)로 정규화한다.

    무한원점은 None을 반환한다.
    """
    if bn128.is_inf(point):
        return None
    return bn128.normalize(point)


def multiexp(points, scalars, zero=Z1):
    """다중 스칼라 곱셈: Σᵢ scalarsᵢ · pointsᵢ.

    계수가 0인 항은 건너뛴다. points가 비어 있으면 항등원을 반환한다.

    Args:
        points: 같은 그룹(G1 또는 G2)의 점 리스트
        scalars: FR 원소 리스트 (points와 길이가 같아야 한다)
        zero: 결과 그룹의 항등원 (G2 점을 결합할 때는 Z2)

    Returns:
        선형결합 결과 점
    """
    points = list(points)
    scalars = list(scalars)
    if len(points) != len(scalars):
        raise ValueError(
            f"multiexp 길이 불일치: 점 {len(points)}개, 스칼라 {len(scalars)}개"
        )

    result = zero
    for point, scalar in zip(points, scalars):
        if int(scalar) % CURVE_ORDER == 0:
            continue
        result = ec_add(result, ec_mul(point, scalar))
    return result


# ─────────────────────────────────────────────────────────────────────
# 페어링
# ─────────────────────────────────────────────────────────────────────

def pairing_product_is_one(pairs):
    """Πᵢ e(g1ᵢ, g2ᵢ) == 1 인지 검사한다.

    각 쌍에 대해 Miller loop만 수행하여 곱한 뒤, 최종 지수승은 한 번만 한다.
    여러 개의 독립적인 페어링 검사를 하나로 합칠 때 쓰인다.

    Args:
        pairs: (G1 점, G2 점) 튜플의 리스트

    Returns:
        bool: 곱이 GT의 항등원이면 True
    """
    acc = bn128.FQ12.one()
    for g1_point, g2_point in pairs:
        if bn128.is_inf(g1_point) or bn128.is_inf(g2_point):
            continue
        acc = acc * bn128.pairing(g2_point, g1_point, final_exponentiate=False)
    return bn128.final_exponentiate(acc) == bn128.FQ12.one()
