"""
Sonic 일괄(batch) 페어링 검사
==============================

여러 다항식 평가 주장(claim)을 무작위 선형결합으로 모아 한 번의 페어링
곱으로 검사한다.

**주장(claim)**:
  같은 계수 r을 공유하는 세 호출이 하나의 주장이다.
    add_opening(W, r, z)             열기 증명 W, 평가 점 z
    add_opening_value(v, r)          주장하는 값 v
    add_commitment(C, r)             전체 차수 커밋먼트 C = g^{α·f(x)}
      또는 add_commitment_max_n(C, r) 차수 n 제한 커밋먼트 C = g^{α·x^{d-n}·f(x)}

  r은 주장마다 트랜스크립트에서 새로 뽑아야 한다. 그래야 개별 등식이 깨진
  상태에서 합친 등식만 맞출 확률이 무시할 만큼 작아진다 (Schwartz-Zippel).

**최종 검사**:
    e(Σ r·W, h^{αx}) · e(Σ(-z·r)·W + value·g, h^{α})
      · e(Σ r·C, h^{-1}) · e(Σ r·C', h^{-x^{n-d}}) == 1

  각 주장에 대해 지수는 r·[α(x - z)·w + α·v - α·f(x)] 이며,
  W가 올바른 열기 증명이면 0이 된다.

  결과는 참/거짓뿐이다. 어떤 주장이 틀렸는지는 알 수 없다.
"""

import logging

from zkp.sonic.field import FR, ec_neg, multiexp, pairing_product_is_one
from zkp.sonic.errors import VerifierFinalizedError


logger = logging.getLogger(__name__)


class Batch:
    """지연된 페어링 검사 주장들의 누적기.

    속성:
        alpha_x: (W, r), h^{αx}와 짝지어질 항
        alpha: (W, -z·r), h^{α}와 짝지어질 항
        neg_h: (C, r), 전체 차수 커밋먼트
        neg_x_n_minus_d: (C, r), 차수 n 제한 커밋먼트
        value: Σ r·v
    """

    def __init__(self, srs, n):
        if srs.d < n:
            raise ValueError(f"SRS 차수 {srs.d}가 게이트 수 {n}보다 작습니다")

        self.alpha_x = []
        self.alpha_x_precomp = srs.h_positive_x_alpha[1]

        self.alpha = []
        self.alpha_precomp = srs.h_positive_x_alpha[0]

        self.neg_h = []
        self.neg_h_precomp = ec_neg(srs.h_negative_x[0])

        self.neg_x_n_minus_d = []
        self.neg_x_n_minus_d_precomp = ec_neg(srs.h_negative_x[srs.d - n])

        self.value = FR(0)
        self.g = srs.g_positive_x[0]

        self.finalized = False

    def _ensure_open(self):
        if self.finalized:
            raise VerifierFinalizedError("이미 check_all로 확정된 배치입니다")

    def add_commitment(self, comm, random):
        self._ensure_open()
        self.neg_h.append((comm, random))

    def add_commitment_max_n(self, comm, random):
        self._ensure_open()
        self.neg_x_n_minus_d.append((comm, random))

    def add_opening(self, opening, random, point):
        self._ensure_open()
        self.alpha_x.append((opening, random))
        self.alpha.append((opening, -(point * random)))

    def add_opening_value(self, eval_value, random):
        self._ensure_open()
        self.value = self.value + eval_value * random

    def __len__(self):
        """누적된 열기 증명(주장) 수."""
        return len(self.alpha_x)

    def check_all(self):
        """모든 주장을 하나의 페어링 곱으로 검사한다. 한 번만 호출할 수 있다.

        Returns:
            bool: 모든 주장이 동시에 성립하면 True
        """
        self._ensure_open()
        self.finalized = True

        self.alpha.append((self.g, self.value))

        def combine(terms):
            return multiexp([p for p, _ in terms], [s for _, s in terms])

        pairs = [
            (combine(self.alpha_x), self.alpha_x_precomp),
            (combine(self.alpha), self.alpha_precomp),
            (combine(self.neg_h), self.neg_h_precomp),
            (combine(self.neg_x_n_minus_d), self.neg_x_n_minus_d_precomp),
        ]

        logger.debug(
            "batch check: %d openings, %d commitments, %d bounded commitments",
            len(self.alpha_x), len(self.neg_h), len(self.neg_x_n_minus_d),
        )

        return pairing_product_is_one(pairs)
