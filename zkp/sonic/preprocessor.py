"""
Sonic 전처리기 (Preprocessor)
===============================

회로를 한 번 "빈" 상태로 합성하여 검증에 필요한 구조 정보를 얻는다.

**전처리 출력물**:
  - k_map: 공개 입력 제약의 인덱스 q (발견 순서). k_map[0]은 상수 배선 ONE.
  - n: 곱셈 게이트 수
  - q: 선형 제약 수

  k_map의 순서는 Prover가 k(Y)를 만들 때 쓰는 순서와 같아야 한다.
  공개 입력 i의 기여는 y^{k_map[i] + n} · input_i 이다.

  배선 값은 계산하지 않으므로 회로의 값 콜백은 호출되지 않는다.

사용 예시:
    >>> pp = preprocess(circuit)
    >>> pp.k_map, pp.n, pp.q
"""

import logging

from zkp.sonic.cs import Backend, synthesize


logger = logging.getLogger(__name__)


class PreprocessedData:
    """전처리된 회로 구조.

    속성:
        k_map: 공개 입력 제약 인덱스 리스트
        n: 곱셈 게이트 수
        q: 선형 제약 수
    """

    def __init__(self, k_map, n, q):
        self.k_map = k_map
        self.n = n
        self.q = q

    def __eq__(self, other):
        if not isinstance(other, PreprocessedData):
            return NotImplemented
        return (self.k_map, self.n, self.q) == (other.k_map, other.n, other.q)

    def __repr__(self):
        return f"PreprocessedData(k_map={self.k_map}, n={self.n}, q={self.q})"


class Preprocess(Backend):
    """구조 이벤트만 세는 Backend."""

    def __init__(self):
        self.k_map = []
        self.n = 0
        self.q = 0

    def new_k_power(self, index):
        self.k_map.append(index)

    def new_multiplication_gate(self):
        self.n += 1

    def new_linear_constraint(self):
        self.q += 1
        return self.q


def preprocess(circuit):
    """회로를 전처리한다.

    Returns:
        PreprocessedData

    Raises:
        SynthesisError: 회로가 합성 중 오류를 보고한 경우
    """
    backend = Preprocess()
    synthesize(backend, circuit)

    logger.debug(
        "preprocessed circuit: n=%d, q=%d, k_map=%s",
        backend.n, backend.q, backend.k_map,
    )
    return PreprocessedData(backend.k_map, backend.n, backend.q)
