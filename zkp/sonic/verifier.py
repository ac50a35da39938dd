"""
Sonic MultiVerifier
=====================

여러 Sonic 증명의 검사를 하나의 지연된 페어링 검사로 합친다.

**사용 흐름**:
  1. MultiVerifier(circuit, srs): 전처리로 k_map, n, q를 얻고 Batch를 만든다.
  2. add_proof / add_proof_with_advice / add_aggregate 를 원하는 만큼 호출한다.
     각 호출은 빈 트랜스크립트에서 시작하여 챌린지를 만들고 Batch에 주장을 쌓는다.
  3. check_all()을 정확히 한 번 호출하여 참/거짓을 얻는다.

**단일 증명의 항등식**:
    t(z, y) = (r(z, y) + s(z, y))·r(z, 1) - k(y)
    k(y) = Σᵢ y^{k_map[i] + n} · inputᵢ   (input₀ = 1)

  검증기는 rz, rzy, s(z, y), k(y)로 t(z, y)를 계산한 뒤, r과 t의 커밋먼트가
  각각 그 값으로 열리는지를 Batch에 주장으로 넣는다.

**알려진 건전성 주의점**:
  add_aggregate의 일부 계수(random)는 주 트랜스크립트를 계속 흡수하는 대신
  fork한 사본에서 뽑는다. 그래서 여러 주장이 같은 계수를 공유한다.
  기존 증명과의 호환을 위해 그대로 유지하며, 보안 검토 시 고려해야 한다.

사용 예시:
    >>> verifier = MultiVerifier(circuit, srs)
    >>> verifier.add_proof(proof, [FR(35)])
    >>> verifier.check_all()  # True
"""

import logging

from zkp.sonic.field import FR
from zkp.sonic.transcript import Transcript
from zkp.sonic.cs import synthesize
from zkp.sonic.poly import SxEval
from zkp.sonic.batch import Batch
from zkp.sonic.preprocessor import preprocess
from zkp.sonic.errors import (
    SynthesisError,
    InternalConsistencyError,
    VerifierFinalizedError,
)


logger = logging.getLogger(__name__)


class MultiVerifier:
    """Sonic 증명 일괄 검증기.

    속성:
        circuit: 검증 대상 회로
        batch: 주장 누적기
        k_map, n, q: 전처리 결과 (생성 후 고정)
    """

    def __init__(self, circuit, srs):
        pp = preprocess(circuit)

        self.circuit = circuit
        self.batch = Batch(srs, pp.n)
        self.k_map = pp.k_map
        self.n = pp.n
        self.q = pp.q
        self.finalized = False

    def get_k_map(self):
        return list(self.k_map)

    def get_n(self):
        return self.n

    def _ensure_open(self):
        if self.finalized:
            raise VerifierFinalizedError("check_all 이후에는 증명을 추가할 수 없습니다")

    def _evaluate_s(self, fixed_y, x):
        """재합성으로 s(x, fixed_y)를 계산한다 (비용이 큰 대체 경로)."""
        tmp = SxEval(fixed_y, self.n)
        try:
            synthesize(tmp, self.circuit)
        except SynthesisError as exc:
            raise InternalConsistencyError(
                "전처리 때 성공한 회로가 재합성에 실패했습니다"
            ) from exc
        if tmp.q != self.q:
            raise InternalConsistencyError(
                f"재합성한 제약 수 {tmp.q}가 전처리 결과 {self.q}와 다릅니다"
            )
        return tmp.finalize(x)

    def add_aggregate(self, proofs, aggregate):
        """공유 커밋먼트 c를 가진 증명 묶음의 s 일관성을 검사한다.

        Args:
            proofs: (Proof, SxyAdvice) 튜플의 리스트
            aggregate: Aggregate
        """
        self._ensure_open()
        if len(aggregate.c_openings) != len(proofs):
            raise ValueError(
                f"c_openings 수 {len(aggregate.c_openings)}가 "
                f"증명 수 {len(proofs)}와 다릅니다"
            )

        transcript = Transcript()
        y_values = []
        for proof, sxyadvice in proofs:
            proof_transcript = Transcript()
            proof_transcript.commit_point(proof.r)
            y_values.append(proof_transcript.get_challenge_scalar())

            transcript.commit_point(sxyadvice.s)

        z = transcript.get_challenge_scalar()

        transcript.commit_point(aggregate.c)

        w = transcript.get_challenge_scalar()

        szw = self._evaluate_s(w, z)

        # fork에서 뽑은 계수는 주 트랜스크립트를 진행시키지 않는다
        random = transcript.fork().get_challenge_scalar()
        self.batch.add_opening(aggregate.opening, random, w)
        self.batch.add_commitment(aggregate.c, random)
        self.batch.add_opening_value(szw, random)

        for (opening, value), y in zip(aggregate.c_openings, y_values):
            random = transcript.fork().get_challenge_scalar()
            self.batch.add_opening(opening, random, y)
            self.batch.add_commitment(aggregate.c, random)
            self.batch.add_opening_value(value, random)

        random = transcript.fork().get_challenge_scalar()

        expected_value = FR(0)
        for (_, advice), c_opening in zip(proofs, aggregate.c_openings):
            r = transcript.get_challenge_scalar()

            # 나중에 z에서 열 값의 기댓값
            expected_value = expected_value + c_opening[1] * r

            self.batch.add_commitment(advice.s, r * random)

        self.batch.add_opening_value(expected_value, random)
        self.batch.add_opening(aggregate.s_opening, random, z)

        logger.debug("added aggregate of %d proofs (%d claims)", len(proofs), len(self.batch))

    def add_proof_with_advice(self, proof, inputs, advice):
        """외부 조언 advice.szy를 s(z, y)로 사용하고, advice 자체도 z에서 연다."""
        self._ensure_open()
        z = self._add_proof(proof, inputs, advice.szy)

        # advice.s를 advice.opening으로 z에서 연다
        transcript = Transcript()
        transcript.commit_point(advice.opening)
        transcript.commit_point(advice.s)
        transcript.commit_scalar(advice.szy)
        random = transcript.get_challenge_scalar()

        self.batch.add_opening(advice.opening, random, z)
        self.batch.add_commitment(advice.s, random)
        self.batch.add_opening_value(advice.szy, random)

    def add_proof(self, proof, inputs, szy=None):
        """증명 하나의 주장들을 Batch에 추가한다.

        Args:
            proof: Proof
            inputs: 공개 입력 FR 리스트 (상수 배선 제외)
            szy: s(z, y)를 이미 알고 있다면 그 값. None이면 회로를 재합성한다.

        실패는 check_all의 결과로만 드러난다.
        """
        self._ensure_open()
        self._add_proof(proof, inputs, szy)

    def _add_proof(self, proof, inputs, szy):
        if len(inputs) != len(self.k_map) - 1:
            raise ValueError(
                f"공개 입력 {len(inputs)}개가 주어졌지만 회로는 "
                f"{len(self.k_map) - 1}개를 기대합니다"
            )

        transcript = Transcript()

        transcript.commit_point(proof.r)
        y = transcript.get_challenge_scalar()

        transcript.commit_point(proof.t)
        z = transcript.get_challenge_scalar()

        transcript.commit_scalar(proof.rz)
        transcript.commit_scalar(proof.rzy)
        r1 = transcript.get_challenge_scalar()

        transcript.commit_point(proof.z_opening)
        transcript.commit_point(proof.zy_opening)

        # k(y)
        ky = FR(0)
        for exp, value in zip(self.k_map, [FR(1)] + list(inputs)):
            ky = ky + y ** (exp + self.n) * value

        # 재합성이 실패하면 Batch에 아무 주장도 남기지 않는다
        if szy is None:
            szy = self._evaluate_s(y, z)

        # t(z, y)
        tzy = (proof.rzy + szy) * proof.rz - ky

        # r을 zy에서 zy_opening으로 연다. 값은 rzy
        random = transcript.get_challenge_scalar()
        zy = z * y
        self.batch.add_opening(proof.zy_opening, random, zy)
        self.batch.add_commitment_max_n(proof.r, random)
        self.batch.add_opening_value(proof.rzy, random)

        # t와 r을 z에서 함께 연다. r1로 두 커밋먼트를 선형 독립으로 유지한다
        random = transcript.get_challenge_scalar()

        self.batch.add_opening(proof.z_opening, random, z)
        self.batch.add_opening_value(tzy, random)
        self.batch.add_commitment(proof.t, random)

        random = random * r1

        self.batch.add_opening_value(proof.rz, random)
        self.batch.add_commitment_max_n(proof.r, random)

        logger.debug("added proof (%d claims)", len(self.batch))
        return z

    def check_all(self):
        """누적된 모든 주장을 검사한다. 이후 검증기는 사용할 수 없다.

        Returns:
            bool
        """
        self._ensure_open()
        self.finalized = True
        result = self.batch.check_all()
        logger.debug("check_all: %s", "accepted" if result else "rejected")
        return result


def verify_proofs(circuit, srs, proofs, inputs):
    """증명 리스트를 하나의 배치로 검증한다.

    Args:
        proofs: Proof 리스트
        inputs: 증명마다 공개 입력 리스트

    Returns:
        bool
    """
    if len(proofs) != len(inputs):
        raise ValueError("증명 수와 공개 입력 목록 수가 다릅니다")

    verifier = MultiVerifier(circuit, srs)
    for proof, proof_inputs in zip(proofs, inputs):
        verifier.add_proof(proof, proof_inputs)
    return verifier.check_all()


def verify_aggregate(circuit, srs, proofs, aggregate, inputs):
    """Aggregate와 조언이 붙은 증명들을 하나의 배치로 검증한다.

    Args:
        proofs: (Proof, SxyAdvice) 튜플의 리스트
        aggregate: Aggregate
        inputs: 증명마다 공개 입력 리스트

    Returns:
        bool
    """
    if len(proofs) != len(inputs):
        raise ValueError("증명 수와 공개 입력 목록 수가 다릅니다")

    verifier = MultiVerifier(circuit, srs)
    verifier.add_aggregate(proofs, aggregate)
    for (proof, advice), proof_inputs in zip(proofs, inputs):
        verifier.add_proof_with_advice(proof, proof_inputs, advice)
    return verifier.check_all()
