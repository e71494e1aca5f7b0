"""
할당 빌더
==========

원시 바이트 버퍼를 백엔드가 받는 세 객체로 바꾼다.

  build_private   위트니스 원소 → 정규 32바이트 인코딩 → 할당
  build_public    공개 입력 버퍼 → num_inputs개의 32바이트 조각 → 할당
  load_circuit    회로 바이트열 → 인스턴스
"""

from nizk.errors import CircuitDeserializationError, ProofError, TruncatedPublicInput
from nizk.plonk.field import FR_BYTES, to_repr


def build_private(witness, backend):
    """위트니스 원소를 순서대로 정규 인코딩하여 할당을 만든다."""
    return backend.assignment([to_repr(w) for w in witness])


def build_public(raw, num_inputs, backend, field_size=FR_BYTES):
    """공개 입력 버퍼를 num_inputs개 조각으로 나눠 할당을 만든다.

    num_inputs·field_size 이후의 바이트는 무시한다.

    Raises:
        TruncatedPublicInput: 버퍼가 num_inputs·field_size보다 짧을 때
    """
    needed = num_inputs * field_size
    if len(raw) < needed:
        raise TruncatedPublicInput(needed, len(raw))
    chunks = [bytes(raw[i * field_size:(i + 1) * field_size]) for i in range(num_inputs)]
    return backend.assignment(chunks)


def load_circuit(raw, backend):
    """회로 바이트열을 인스턴스로 복원한다.

    Raises:
        CircuitDeserializationError: 백엔드가 복원에 실패했을 때
    """
    try:
        return backend.load_instance(bytes(raw))
    except ProofError:
        raise
    except Exception as exc:
        raise CircuitDeserializationError(f"회로 복원 실패: {exc}") from exc
