"""
nizk: wtns 위트니스 로딩과 PLONK 증명 오케스트레이션
==================================================

    >>> import nizk
    >>> proof = nizk.prove(circuit, witness, public_inputs)
    >>> nizk.verify(circuit, proof, public_inputs)
    True
"""

from nizk.orchestrator import prove, verify
from nizk.config import ProverConfig, WitnessFormat
from nizk.errors import ProofError

__all__ = ["prove", "verify", "ProverConfig", "WitnessFormat", "ProofError"]
