"""
Sonic Fiat-Shamir Transcript
==============================

증명 메시지를 흡수(absorb)하여 결정론적인 챌린지를 만든다.

**동작**:
  - 상태(state)는 바이트열을 계속 이어붙이기만 하는 흡수기이다.
  - commit_point / commit_scalar: 레이블과 함께 직렬화된 값을 추가
  - get_challenge_scalar: 상태를 SHA-256으로 해싱. 결과가 스칼라 필드 위수
    이상이면 (해시를 상태에 추가한 뒤) 다시 해싱한다 (rejection sampling).
    사용된 해시는 항상 상태에 추가되므로 다음 챌린지는 달라진다.
  - fork: 현재까지의 기록을 공유하지만 이후로는 독립적인 사본을 만든다.

**Sonic 검증기의 사용 규칙**:
  add_proof / add_proof_with_advice / add_aggregate는 각각 빈 트랜스크립트로
  시작한다. 같은 접두사(prefix)에 여러 챌린지를 묶을 때만 fork를 사용한다.

사용 예시:
    >>> t = Transcript()
    >>> t.commit_point(proof.r)
    >>> y = t.get_challenge_scalar()
"""

import hashlib

from zkp.sonic.field import FR, CURVE_ORDER, ec_affine


POINT_LABEL = b"point"
SCALAR_LABEL = b"scalar"
CHALLENGE_LABEL = b"challenge"


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    같은 순서로 같은 값을 흡수한 두 트랜스크립트는 같은 챌린지 열을 만든다.
    """

    def __init__(self, personalization=b""):
        self.state = bytearray()
        self.commit_bytes(b"personalization", personalization)

    def commit_bytes(self, label, data):
        """레이블과 길이 접두사를 붙여 바이트열을 흡수한다."""
        data = bytes(data)
        self.state.extend(label)
        self.state.extend(len(data).to_bytes(4, "big"))
        self.state.extend(data)

    def commit_point(self, point):
        """G1 점을 아핀 좌표 64바이트로 흡수한다 (무한원점은 0으로 채움)."""
        affine = ec_affine(point)
        if affine is None:
            data = b"\x00" * 64
        else:
            x, y = affine
            data = int(x).to_bytes(32, "big") + int(y).to_bytes(32, "big")
        self.commit_bytes(POINT_LABEL, data)

    def commit_scalar(self, scalar):
        """FR 원소를 32바이트 빅엔디안으로 흡수한다."""
        val = int(scalar) % CURVE_ORDER
        self.commit_bytes(SCALAR_LABEL, val.to_bytes(32, "big"))

    def get_challenge_scalar(self):
        """다음 챌린지 스칼라를 도출한다.

        Returns:
            FR: 균등 분포의 스칼라 (편향 없이 rejection sampling)
        """
        while True:
            self.state.extend(CHALLENGE_LABEL)
            h = hashlib.sha256(bytes(self.state)).digest()
            self.state.extend(h)
            value = int.from_bytes(h, "big")
            if value < CURVE_ORDER:
                return FR(value)

    def fork(self):
        """현재 상태의 독립적인 사본을 반환한다."""
        other = Transcript.__new__(Transcript)
        other.state = bytearray(self.state)
        return other
