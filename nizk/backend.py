"""
증명 백엔드 계약
=================

오케스트레이터는 증명 시스템을 직접 알지 못하고 Backend의 메서드만 부른다.
다른 증명 시스템을 붙이려면 Backend를 상속해 아래 메서드를 구현하면 된다.

  load_instance(raw)            회로 바이트열 → 인스턴스
  dimensions(instance)          (num_cons, num_vars, num_inputs)
  assignment(chunks)            32바이트 인코딩 목록 → 할당
  generators(c, v, i)           세 차원에서 공개 파라미터 유도
  transcript(label)             도메인 레이블로 초기화한 트랜스크립트
  prove(...) / verify(...)      증명 생성 / 검증
  load_proof(raw) / dump_proof  증명 직렬화

PlonkBackend는 nizk.plonk의 ValueError를 이 패키지의 오류 타입으로 옮긴다.
"""

from nizk.errors import (
    BackendInvocationError,
    CircuitDeserializationError,
    ProofDeserializationError,
)
from nizk.plonk.assignment import Assignment
from nizk.plonk.gens import Generators
from nizk.plonk.instance import Instance
from nizk.plonk.proof import Proof
from nizk.plonk.transcript import Transcript
from nizk.plonk import prover, verifier


class Backend:
    """증명 백엔드 인터페이스."""

    def load_instance(self, raw):
        raise NotImplementedError

    def dimensions(self, instance):
        raise NotImplementedError

    def assignment(self, chunks):
        raise NotImplementedError

    def generators(self, num_cons, num_vars, num_inputs):
        raise NotImplementedError

    def transcript(self, label):
        raise NotImplementedError

    def prove(self, instance, variables, inputs, gens, transcript):
        raise NotImplementedError

    def verify(self, proof, instance, inputs, transcript, gens):
        raise NotImplementedError

    def load_proof(self, raw):
        raise NotImplementedError

    def dump_proof(self, proof):
        raise NotImplementedError


class PlonkBackend(Backend):
    """nizk.plonk (BN254 PLONK + KZG) 어댑터."""

    def load_instance(self, raw):
        try:
            return Instance.from_bytes(raw)
        except ValueError as exc:
            raise CircuitDeserializationError(str(exc)) from exc

    def dimensions(self, instance):
        return instance.get_num_cons(), instance.get_num_vars(), instance.get_num_inputs()

    def assignment(self, chunks):
        try:
            return Assignment(chunks)
        except ValueError as exc:
            raise BackendInvocationError(f"할당 생성 실패: {exc}") from exc

    def generators(self, num_cons, num_vars, num_inputs):
        return Generators.new(num_cons, num_vars, num_inputs)

    def transcript(self, label):
        return Transcript(label)

    def prove(self, instance, variables, inputs, gens, transcript):
        try:
            return prover.prove(instance, variables, inputs, gens, transcript)
        except ValueError as exc:
            raise BackendInvocationError(f"증명 생성 실패: {exc}") from exc

    def verify(self, proof, instance, inputs, transcript, gens):
        try:
            return verifier.verify(proof, instance, inputs, transcript, gens)
        except ValueError as exc:
            raise BackendInvocationError(f"검증 실패: {exc}") from exc

    def load_proof(self, raw):
        try:
            return Proof.from_bytes(raw)
        except ValueError as exc:
            raise ProofDeserializationError(str(exc)) from exc

    def dump_proof(self, proof):
        return proof.to_bytes()
