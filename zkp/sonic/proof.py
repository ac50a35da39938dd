"""
Sonic 증명 데이터 컨테이너
===========================

검증기가 받는 값들은 이미 역직렬화된 상태라고 가정한다.

**Proof**:
  트랜스크립트에서 도출한 점 (z, y)에서의 항등식
      t(z, y) = (r(z, y) + s(z, y))·r(z, 1) - k(y)
  에 대한 증명.

**SxyAdvice**:
  s(X, y)에 대한 커밋먼트와 z에서의 값. 검증기가 s(z, y)를 직접
  계산(회로 재합성)하지 않아도 되게 해 준다.

**Aggregate**:
  여러 증명이 공유하는 커밋먼트 c = g^{α·s(z, x)}와 그 열기 증명들.
"""


class Proof:
    """Sonic 증명.

    속성:
        r: r(X, 1)에 대한 차수 n 제한 커밋먼트 (G1)
        t: t(X, y)에 대한 커밋먼트 (G1)
        rz: r(z, 1) (FR)
        rzy: r(z, y) (FR)
        z_opening: t와 r을 z에서 함께 여는 증명 (G1)
        zy_opening: r을 z·y에서 여는 증명 (G1)
    """

    def __init__(self, r, t, rz, rzy, z_opening, zy_opening):
        self.r = r
        self.t = t
        self.rz = rz
        self.rzy = rzy
        self.z_opening = z_opening
        self.zy_opening = zy_opening

    def __repr__(self):
        return f"Proof(rz={int(self.rz)}, rzy={int(self.rzy)})"


class SxyAdvice:
    """외부에서 제공한 s(z, y) 값과 그 근거.

    속성:
        s: s(X, y)에 대한 전체 차수 커밋먼트 (G1)
        szy: s(z, y) (FR)
        opening: s를 z에서 여는 증명 (G1)
    """

    def __init__(self, s, szy, opening):
        self.s = s
        self.szy = szy
        self.opening = opening


class Aggregate:
    """여러 증명이 공유하는 커밋먼트 c와 열기 증명들.

    속성:
        c: s(z, Y)에 대한 커밋먼트 (G1)
        s_opening: 각 증명의 s를 무작위 결합하여 z에서 여는 증명 (G1)
        c_openings: 증명마다 (y_i에서 c를 여는 증명, c(y_i)) 튜플의 리스트
        opening: c를 w에서 여는 증명 (G1)
    """

    def __init__(self, c, s_opening, c_openings, opening):
        self.c = c
        self.s_opening = s_opening
        self.c_openings = list(c_openings)
        self.opening = opening
