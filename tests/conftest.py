import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from nizk import orchestrator
from nizk.plonk.field import FR, to_repr
from nizk.plonk.instance import Instance
from nizk.witness import encode_witness


def encode_inputs(values):
    """공개 입력 값들을 32바이트 LE 조각으로 이어 붙인다."""
    return b"".join(to_repr(FR(v) if isinstance(v, int) else v) for v in values)


@pytest.fixture(scope="session")
def x3_bytes():
    """x³ + x + 5 = 35 (x=3) 회로의 (circuit, witness, public_inputs) 바이트열."""
    instance, witness, public_inputs = Instance.x3_plus_x_plus_5()
    return {
        "circuit": instance.to_bytes(),
        "witness": encode_witness(witness),
        "public_inputs": encode_inputs(public_inputs),
    }


@pytest.fixture(scope="session")
def x3_proof(x3_bytes):
    """기본 설정으로 만든 x3 회로의 증명 바이트열 (세션당 한 번)."""
    return orchestrator.prove(
        x3_bytes["circuit"], x3_bytes["witness"], x3_bytes["public_inputs"]
    )
