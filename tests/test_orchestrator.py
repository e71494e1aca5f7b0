"""
증명 오케스트레이터 테스트
===========================

prove / verify 두 진입점을 바이트열 수준에서 테스트한다.

테스트 범위:
  - 일치: prove의 결과는 verify를 통과한다
  - 변조: 증명 바이트 하나를 바꾸거나 다른 공개 입력을 넣으면 False
  - 구조적 오류: 잘린 공개 입력, 깨진 회로, 길이가 틀린 증명
  - 백엔드 실패: 제약을 만족하지 않는 위트니스, 길이가 틀린 위트니스
  - 설정: 트랜스크립트 레이블이 다르면 False, config가 없으면 NIZK_* 환경 변수
"""

import logging

import pytest

from nizk import orchestrator
from nizk.backend import PlonkBackend
from nizk.config import ProverConfig
from nizk.errors import (
    BackendInvocationError,
    CircuitDeserializationError,
    FieldModulusMismatch,
    MalformedHeader,
    ProofDeserializationError,
    TruncatedPublicInput,
)
from nizk.plonk.field import CURVE_ORDER, FR, to_repr
from nizk.plonk.proof import POINT_BYTES, POINT_FIELDS, PROOF_BYTES, SCALAR_BYTES, SCALAR_FIELDS
from nizk.witness import encode_witness


def _flip(data, index):
    tampered = bytearray(data)
    tampered[index] ^= 0x01
    return bytes(tampered)


# ─────────────────────────────────────────────────────────────────────
# 일치
# ─────────────────────────────────────────────────────────────────────

class TestAgreement:
    def test_proof_size(self, x3_proof):
        assert isinstance(x3_proof, bytes)
        assert len(x3_proof) == PROOF_BYTES

    def test_prove_then_verify(self, x3_bytes, x3_proof):
        assert orchestrator.verify(
            x3_bytes["circuit"], x3_proof, x3_bytes["public_inputs"]
        ) is True

    def test_package_entry_points(self, x3_bytes, x3_proof):
        import nizk
        assert nizk.verify(x3_bytes["circuit"], x3_proof, x3_bytes["public_inputs"]) is True

    def test_extra_public_bytes_ignored(self, x3_bytes, x3_proof):
        public = x3_bytes["public_inputs"] + b"\x00" * 32
        assert orchestrator.verify(x3_bytes["circuit"], x3_proof, public) is True

    def test_custom_label_agreement(self, x3_bytes):
        config = ProverConfig(transcript_label=b"custom-label")
        proof = orchestrator.prove(
            x3_bytes["circuit"], x3_bytes["witness"], x3_bytes["public_inputs"], config=config
        )
        assert orchestrator.verify(
            x3_bytes["circuit"], proof, x3_bytes["public_inputs"], config=config
        ) is True
        assert orchestrator.verify(
            x3_bytes["circuit"], proof, x3_bytes["public_inputs"]
        ) is False


# ─────────────────────────────────────────────────────────────────────
# 변조
# ─────────────────────────────────────────────────────────────────────

class TestTampering:
    @pytest.mark.parametrize("index", [
        pytest.param(i * POINT_BYTES + 31, id=name)
        for i, name in enumerate(POINT_FIELDS)
    ] + [
        pytest.param(len(POINT_FIELDS) * POINT_BYTES + j * SCALAR_BYTES + 31, id=name)
        for j, name in enumerate(SCALAR_FIELDS)
    ])
    def test_flipped_byte_in_each_field(self, x3_bytes, x3_proof, index):
        tampered = _flip(x3_proof, index)
        assert orchestrator.verify(
            x3_bytes["circuit"], tampered, x3_bytes["public_inputs"]
        ) is False

    @pytest.mark.parametrize("index", [5, 3 * 64 + 40])
    def test_flipped_byte(self, x3_bytes, x3_proof, index):
        tampered = _flip(x3_proof, index)
        assert orchestrator.verify(
            x3_bytes["circuit"], tampered, x3_bytes["public_inputs"]
        ) is False

    def test_different_public_input(self, x3_bytes, x3_proof):
        public = to_repr(FR(36))
        assert orchestrator.verify(x3_bytes["circuit"], x3_proof, public) is False

    def test_all_zero_proof(self, x3_bytes):
        assert orchestrator.verify(
            x3_bytes["circuit"], b"\x00" * PROOF_BYTES, x3_bytes["public_inputs"]
        ) is False

    def test_out_of_range_scalar(self, x3_bytes, x3_proof):
        tampered = x3_proof[:-32] + b"\xff" * 32
        assert orchestrator.verify(
            x3_bytes["circuit"], tampered, x3_bytes["public_inputs"]
        ) is False


# ─────────────────────────────────────────────────────────────────────
# 구조적 오류
# ─────────────────────────────────────────────────────────────────────

class TestStructuralErrors:
    def test_truncated_public_input_on_verify(self, x3_bytes, x3_proof):
        with pytest.raises(TruncatedPublicInput):
            orchestrator.verify(x3_bytes["circuit"], x3_proof, b"\x01" * 31)

    def test_truncated_public_input_on_prove(self, x3_bytes):
        with pytest.raises(TruncatedPublicInput):
            orchestrator.prove(x3_bytes["circuit"], x3_bytes["witness"], b"")

    def test_garbage_circuit(self, x3_bytes, x3_proof):
        with pytest.raises(CircuitDeserializationError):
            orchestrator.verify(b"not a circuit", x3_proof, x3_bytes["public_inputs"])
        with pytest.raises(CircuitDeserializationError):
            orchestrator.prove(b"not a circuit", x3_bytes["witness"], x3_bytes["public_inputs"])

    @pytest.mark.parametrize("length", [0, PROOF_BYTES - 1, PROOF_BYTES + 1])
    def test_wrong_proof_length(self, x3_bytes, x3_proof, length):
        proof = (x3_proof * 2)[:length]
        with pytest.raises(ProofDeserializationError):
            orchestrator.verify(x3_bytes["circuit"], proof, x3_bytes["public_inputs"])

    def test_witness_errors_propagate(self, x3_bytes):
        with pytest.raises(MalformedHeader):
            orchestrator.prove(x3_bytes["circuit"], b"junk" + b"\x00" * 80, x3_bytes["public_inputs"])


# ─────────────────────────────────────────────────────────────────────
# 백엔드 실패
# ─────────────────────────────────────────────────────────────────────

class TestBackendFailures:
    def test_unsatisfied_witness(self, x3_bytes):
        witness = encode_witness([FR(3), FR(9), FR(27), FR(31)])
        with pytest.raises(BackendInvocationError) as exc_info:
            orchestrator.prove(x3_bytes["circuit"], witness, x3_bytes["public_inputs"])
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_wrong_public_input_on_prove(self, x3_bytes):
        with pytest.raises(BackendInvocationError):
            orchestrator.prove(x3_bytes["circuit"], x3_bytes["witness"], to_repr(FR(36)))

    def test_wrong_witness_length(self, x3_bytes):
        witness = encode_witness([FR(3), FR(9), FR(27)])
        with pytest.raises(BackendInvocationError):
            orchestrator.prove(x3_bytes["circuit"], witness, x3_bytes["public_inputs"])

    def test_untyped_exception_wrapped(self, x3_bytes):
        class Exploding(PlonkBackend):
            def generators(self, num_cons, num_vars, num_inputs):
                raise ZeroDivisionError("boom")

        with pytest.raises(BackendInvocationError) as exc_info:
            orchestrator.prove(
                x3_bytes["circuit"], x3_bytes["witness"], x3_bytes["public_inputs"],
                backend=Exploding(),
            )
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


# ─────────────────────────────────────────────────────────────────────
# 로깅
# ─────────────────────────────────────────────────────────────────────

class TestLogging:
    def test_rejection_logged(self, x3_bytes, x3_proof, caplog):
        with caplog.at_level(logging.INFO, logger="nizk.orchestrator"):
            orchestrator.verify(x3_bytes["circuit"], x3_proof, to_repr(FR(34)))
        assert any(r.name == "nizk.orchestrator" for r in caplog.records)


# ─────────────────────────────────────────────────────────────────────
# 환경 변수 설정
# ─────────────────────────────────────────────────────────────────────

class TestEnvironmentConfig:
    def test_env_label_used_when_no_config(self, x3_bytes, x3_proof, monkeypatch):
        monkeypatch.setenv("NIZK_TRANSCRIPT_LABEL", "other-label")
        assert orchestrator.verify(
            x3_bytes["circuit"], x3_proof, x3_bytes["public_inputs"]
        ) is False

    def test_explicit_config_overrides_env(self, x3_bytes, x3_proof, monkeypatch):
        monkeypatch.setenv("NIZK_TRANSCRIPT_LABEL", "other-label")
        assert orchestrator.verify(
            x3_bytes["circuit"], x3_proof, x3_bytes["public_inputs"], config=ProverConfig()
        ) is True

    def test_env_modulus_check(self, x3_bytes, monkeypatch):
        # 헤더 섹션의 모듈러스: magic(4) version(4) n_sections(4) type(4) size(8) field_size(4)
        witness = bytearray(x3_bytes["witness"])
        witness[28:60] = (CURVE_ORDER + 2).to_bytes(32, "little")
        monkeypatch.setenv("NIZK_CHECK_MODULUS", "1")
        with pytest.raises(FieldModulusMismatch):
            orchestrator.prove(x3_bytes["circuit"], bytes(witness), x3_bytes["public_inputs"])
