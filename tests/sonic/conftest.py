import sys
import os
import pytest

# 프로젝트 루트와 테스트 헬퍼(circuits, honest_prover) 경로를 sys.path에 추가
tests_dir = os.path.abspath(os.path.dirname(__file__))
project_root = os.path.abspath(os.path.join(tests_dir, '..', '..'))
for path in (project_root, tests_dir):
    if path not in sys.path:
        sys.path.insert(0, path)

from zkp.sonic.field import FR
from zkp.sonic.srs import SRS

from circuits import (
    CubeCircuit, ProductCircuit,
    CUBE_X, CUBE_OUT, CUBE_X_OTHER, CUBE_OUT_OTHER, PRODUCT_P, PRODUCT_Q,
)
from honest_prover import create_proof, create_advice, create_aggregate


# ── 테스트 상수 ──
SRS_DEGREE = 16
SRS_SEED = b"sonic-multiverifier-tests"


@pytest.fixture(scope="session")
def srs():
    """d = 16: 두 예제 회로(n = 3, 4)의 모든 커밋먼트를 담을 수 있는 SRS."""
    return SRS.generate(SRS_DEGREE, SRS_SEED)


@pytest.fixture(scope="session")
def small_srs():
    """비밀 값을 아는 d = 4 SRS (x = 5, α = 7). 커밋먼트 값을 직접 계산해 비교한다."""
    return SRS.new(4, FR(5), FR(7))


@pytest.fixture(scope="session")
def cube_circuit():
    """증인 없이 구조만 가진 x^3 + x + 5 = out 회로."""
    return CubeCircuit()


@pytest.fixture(scope="session")
def cube_proof(srs):
    return create_proof(CubeCircuit(CUBE_X), srs)


@pytest.fixture(scope="session")
def cube_proof_other(srs):
    return create_proof(CubeCircuit(CUBE_X_OTHER), srs)


@pytest.fixture(scope="session")
def cube_advice(srs, cube_circuit, cube_proof):
    return create_advice(cube_circuit, cube_proof, srs)


@pytest.fixture(scope="session")
def cube_advice_other(srs, cube_circuit, cube_proof_other):
    return create_advice(cube_circuit, cube_proof_other, srs)


@pytest.fixture(scope="session")
def cube_batch(cube_proof, cube_advice, cube_proof_other, cube_advice_other):
    """[(Proof, SxyAdvice)] 두 개와 각각의 공개 입력."""
    return {
        "proofs": [(cube_proof, cube_advice), (cube_proof_other, cube_advice_other)],
        "inputs": [[FR(CUBE_OUT)], [FR(CUBE_OUT_OTHER)]],
    }


@pytest.fixture(scope="session")
def cube_aggregate(srs, cube_circuit, cube_batch):
    return create_aggregate(cube_circuit, cube_batch["proofs"], srs)


@pytest.fixture(scope="session")
def product_circuit():
    return ProductCircuit()


@pytest.fixture(scope="session")
def product_proof(srs):
    return create_proof(ProductCircuit(PRODUCT_P, PRODUCT_Q), srs)
