"""
Sonic Structured Reference String (SRS)
=========================================

Sonic 커밋먼트가 사용하는 범용(universal) 공개 파라미터.

**구성**:
  비밀 값 x, α로부터 다음 원소들을 만든다 (g: G1 생성자, h: G2 생성자).

    g_negative_x[i]       = g^{x^-i}        (i = 0..d)
    g_positive_x[i]       = g^{x^i}         (i = 0..d)
    h_negative_x[i]       = h^{x^-i}        (i = 0..d)
    h_positive_x[i]       = h^{x^i}         (i = 0..d)
    g_negative_x_alpha[i] = g^{α·x^-(i+1)}  (i = 0..d-1)
    g_positive_x_alpha[i] = g^{α·x^(i+1)}   (i = 0..d-1)
    h_negative_x_alpha[i] = h^{α·x^-i}      (i = 0..d)
    h_positive_x_alpha[i] = h^{α·x^i}       (i = 0..d)

  G1의 α 계열에는 g^{α} (x^0 항)가 없다. 커밋된 다항식의 상수항이 0임을
  강제하는 것이 Sonic 건전성의 핵심이다.

**검증기에서의 사용**:
  Batch는 h^{α}, h^{αx}, h^{-1}, h^{-x^(n-d)} 와 g만 사용한다.

**보안**:
  여기의 생성자(new, generate)는 비밀 값을 직접 받거나 시드에서 결정론적으로
  도출한다. 테스트 및 예제 전용이며, 실제 파라미터는 별도 의식(ceremony)에서
  만들어져야 한다.

사용 예시:
    >>> srs = SRS.generate(d=16, seed=42)
    >>> len(srs.g_positive_x)  # 17
"""

import hashlib

from zkp.sonic.field import FR, G1, G2, CURVE_ORDER, ec_mul


class SRS:
    """Sonic SRS: 양/음의 x 거듭제곱과 α 이동(shifted) 거듭제곱.

    속성:
        d: 지원하는 최대 차수
        g_negative_x, g_positive_x: G1의 x^{∓i}
        h_negative_x, h_positive_x: G2의 x^{∓i}
        g_negative_x_alpha, g_positive_x_alpha: G1의 α·x^{∓(i+1)}
        h_negative_x_alpha, h_positive_x_alpha: G2의 α·x^{∓i}
    """

    def __init__(
        self,
        d,
        g_negative_x,
        g_positive_x,
        h_negative_x,
        h_positive_x,
        g_negative_x_alpha,
        g_positive_x_alpha,
        h_negative_x_alpha,
        h_positive_x_alpha,
    ):
        self.d = d
        self.g_negative_x = g_negative_x
        self.g_positive_x = g_positive_x
        self.h_negative_x = h_negative_x
        self.h_positive_x = h_positive_x
        self.g_negative_x_alpha = g_negative_x_alpha
        self.g_positive_x_alpha = g_positive_x_alpha
        self.h_negative_x_alpha = h_negative_x_alpha
        self.h_positive_x_alpha = h_positive_x_alpha

    @classmethod
    def new(cls, d, x, alpha):
        """알려진 비밀 값 x, α로부터 SRS를 만든다.

        Args:
            d: 최대 차수 (d ≥ 1)
            x: 비밀 평가 점 (0이 아닌 FR)
            alpha: 비밀 이동 값 (FR)

        Returns:
            SRS
        """
        if d < 1:
            raise ValueError(f"SRS 차수는 1 이상이어야 합니다: {d}")
        x = x if isinstance(x, FR) else FR(x)
        alpha = alpha if isinstance(alpha, FR) else FR(alpha)
        if x == FR(0):
            raise ValueError("x는 0이 될 수 없습니다")

        x_inv = FR(1) / x

        positive = [FR(1)]
        negative = [FR(1)]
        for _ in range(d):
            positive.append(positive[-1] * x)
            negative.append(negative[-1] * x_inv)

        return cls(
            d=d,
            g_negative_x=[ec_mul(G1, p) for p in negative],
            g_positive_x=[ec_mul(G1, p) for p in positive],
            h_negative_x=[ec_mul(G2, p) for p in negative],
            h_positive_x=[ec_mul(G2, p) for p in positive],
            g_negative_x_alpha=[ec_mul(G1, alpha * p) for p in negative[1:]],
            g_positive_x_alpha=[ec_mul(G1, alpha * p) for p in positive[1:]],
            h_negative_x_alpha=[ec_mul(G2, alpha * p) for p in negative],
            h_positive_x_alpha=[ec_mul(G2, alpha * p) for p in positive],
        )

    @classmethod
    def generate(cls, d, seed):
        """시드에서 x, α를 결정론적으로 도출하여 SRS를 만든다 (테스트용).

        예시:
            >>> srs1 = SRS.generate(d=8, seed=7)
            >>> srs2 = SRS.generate(d=8, seed=7)
            >>> # srs1과 srs2는 같은 원소를 가진다
        """
        x = _derive_secret(seed, b"x")
        alpha = _derive_secret(seed, b"alpha")
        return cls.new(d, x, alpha)


def _derive_secret(seed, label):
    # 0이 아닌 FR 원소
    h = hashlib.sha256(str(seed).encode() + b"/" + label).digest()
    return FR(int.from_bytes(h, "big") % (CURVE_ORDER - 1) + 1)
