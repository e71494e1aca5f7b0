"""
증명 오케스트레이터
====================

두 진입점 prove / verify가 위트니스 리더, 할당 빌더, 백엔드를 순서대로 부른다.

**prove**:
  1. 위트니스 파싱 → 2. 비공개 할당 → 3. 회로 복원, 차원 조회
  4. 생성자 유도 → 5. 공개 할당 → 6. 트랜스크립트 → 7. 증명 → 8. 직렬화

**verify**:
  1. 회로 복원, 증명 복원 → 2. 생성자 유도 → 3. 공개 할당
  4. 같은 레이블의 트랜스크립트 → 5. 검증 → bool

검증 거부는 False이고, 구조적인 문제만 오류로 올라온다. 백엔드가 던진
타입 없는 예외는 BackendInvocationError로 감싼다 (__cause__에 원래 예외).

config를 넘기지 않으면 ProverConfig.from_env()로 NIZK_TRANSCRIPT_LABEL,
NIZK_CHECK_MODULUS를 읽는다.
"""

import logging

from nizk.assignment import build_private, build_public, load_circuit
from nizk.backend import PlonkBackend
from nizk.config import ProverConfig
from nizk.errors import BackendInvocationError, ProofDeserializationError, ProofError
from nizk.witness import parse_witness

logger = logging.getLogger(__name__)


def _call(stage, fn, *args):
    try:
        return fn(*args)
    except ProofError:
        raise
    except Exception as exc:
        raise BackendInvocationError(f"{stage}: {exc}") from exc


def prove(circuit, witness, public_inputs, config=None, backend=None):
    """회로, 위트니스 파일, 공개 입력으로 증명 바이트열을 만든다.

    Args:
        circuit: 백엔드 형식의 회로 바이트열
        witness: wtns 형식의 위트니스 바이트열
        public_inputs: 32바이트 little-endian 원소를 이어 붙인 바이트열
        config: ProverConfig (None이면 NIZK_* 환경 변수에서 읽은 값)
        backend: Backend (None이면 PlonkBackend)

    Returns:
        bytes: 직렬화된 증명

    Raises:
        WitnessFormatError, CircuitDeserializationError,
        TruncatedPublicInput, BackendInvocationError
    """
    config = config or ProverConfig.from_env()
    backend = backend or PlonkBackend()

    values = parse_witness(witness, config.witness_format)
    logger.debug("위트니스 원소 %d개 파싱", len(values))
    variables = _call("비공개 할당", build_private, values, backend)

    instance = load_circuit(circuit, backend)
    num_cons, num_vars, num_inputs = _call("차원 조회", backend.dimensions, instance)
    logger.debug("회로 차원: cons=%d vars=%d inputs=%d", num_cons, num_vars, num_inputs)

    gens = _call("생성자 유도", backend.generators, num_cons, num_vars, num_inputs)
    inputs = _call("공개 할당", build_public, public_inputs, num_inputs, backend)
    transcript = _call("트랜스크립트", backend.transcript, config.transcript_label)

    proof = _call("증명 생성", backend.prove, instance, variables, inputs, gens, transcript)
    data = _call("증명 직렬화", backend.dump_proof, proof)
    logger.debug("증명 %d바이트 생성", len(data))
    return data


def verify(circuit, proof, public_inputs, config=None, backend=None):
    """증명을 검증한다. 위트니스는 쓰지 않는다.

    False는 정직하게 만든 증명을 변조했거나 다른 공개 입력, 다른 레이블로
    검증했을 때에만 보장된다. 생성자의 τ는 회로 차원에서 누구나 계산할 수
    있으므로 (nizk.plonk.gens.derive_tau), τ를 아는 사람은 거짓 명제에 대해서도
    통과하는 증명을 만들 수 있다. 이 설정의 True는 지식의 증거가 아니다.

    Args:
        circuit: 백엔드 형식의 회로 바이트열
        proof: 직렬화된 증명
        public_inputs: 32바이트 little-endian 원소를 이어 붙인 바이트열
        config: ProverConfig (None이면 NIZK_* 환경 변수에서 읽은 값)
        backend: Backend (None이면 PlonkBackend)

    Returns:
        bool: 검증 통과 여부

    Raises:
        CircuitDeserializationError, ProofDeserializationError,
        TruncatedPublicInput, BackendInvocationError
    """
    config = config or ProverConfig.from_env()
    backend = backend or PlonkBackend()

    instance = load_circuit(circuit, backend)
    try:
        loaded = backend.load_proof(bytes(proof))
    except ProofError:
        raise
    except Exception as exc:
        raise ProofDeserializationError(f"증명 복원 실패: {exc}") from exc

    num_cons, num_vars, num_inputs = _call("차원 조회", backend.dimensions, instance)
    logger.debug("회로 차원: cons=%d vars=%d inputs=%d", num_cons, num_vars, num_inputs)

    gens = _call("생성자 유도", backend.generators, num_cons, num_vars, num_inputs)
    inputs = _call("공개 할당", build_public, public_inputs, num_inputs, backend)
    transcript = _call("트랜스크립트", backend.transcript, config.transcript_label)

    verified = bool(_call("검증", backend.verify, loaded, instance, inputs, transcript, gens))
    if verified:
        logger.debug("증명 검증 통과")
    else:
        logger.info("증명 검증 거부")
    return verified
