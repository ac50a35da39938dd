"""
Sonic 검증기 예외 정의
======================

  SonicError
  ├── SynthesisError           회로 합성 실패 (생성자에서 호출자에게 전파)
  ├── InternalConsistencyError 전처리 이후 재합성 결과가 달라진 경우
  └── VerifierFinalizedError   check_all 이후의 사용

검증 결과 자체(증명이 틀림, 형식이 잘못됨, 페어링 불일치)는 예외가 아니라
check_all의 False로만 표현된다.
"""


class SonicError(Exception):
    """zkp.sonic의 모든 예외의 기반 클래스."""


class SynthesisError(SonicError):
    """회로 합성 중 발생한 오류.

    속성:
        kind: 오류 종류 문자열 (아래 상수 중 하나)
    """

    ASSIGNMENT_MISSING = "assignment-missing"
    DIVISION_BY_ZERO = "division-by-zero"
    UNSATISFIABLE = "unsatisfiable"
    POLYNOMIAL_DEGREE_TOO_LARGE = "polynomial-degree-too-large"
    MALFORMED = "malformed"

    def __init__(self, kind, message=None):
        self.kind = kind
        super().__init__(message or kind)

    @classmethod
    def assignment_missing(cls, message=None):
        return cls(cls.ASSIGNMENT_MISSING, message)


class InternalConsistencyError(SonicError):
    """같은 회로의 합성 결과가 전처리 때와 달라졌을 때 발생한다."""


class VerifierFinalizedError(SonicError, RuntimeError):
    """check_all로 확정된 검증기/배치를 다시 사용하려 할 때 발생한다."""
