"""
Proof codec tests: 800바이트 고정 폭 레이아웃
"""
import pytest

from nizk.plonk.field import FR, G1, CURVE_ORDER, FIELD_MODULUS, ec_mul
from nizk.plonk.proof import Proof, POINT_FIELDS, SCALAR_FIELDS, PROOF_BYTES


def _sample_proof():
    proof = Proof()
    for i, name in enumerate(POINT_FIELDS):
        setattr(proof, name, ec_mul(G1, i + 1))
    for i, name in enumerate(SCALAR_FIELDS):
        setattr(proof, name, FR(1000 + i))
    return proof


class TestLayout:
    def test_size(self):
        assert PROOF_BYTES == 9 * 64 + 7 * 32 == 800
        assert len(_sample_proof().to_bytes()) == PROOF_BYTES

    def test_first_point_big_endian(self):
        data = _sample_proof().to_bytes()
        assert int.from_bytes(data[:32], "big") == int(G1[0])
        assert int.from_bytes(data[32:64], "big") == int(G1[1])

    def test_last_scalar(self):
        data = _sample_proof().to_bytes()
        assert int.from_bytes(data[-32:], "big") == 1006

    def test_identity_point_is_zero(self):
        proof = _sample_proof()
        proof.t_hi_comm = None
        data = proof.to_bytes()
        offset = POINT_FIELDS.index("t_hi_comm") * 64
        assert data[offset:offset + 64] == b"\x00" * 64
        assert Proof.from_bytes(data).t_hi_comm is None


class TestDecode:
    def test_round_trip(self):
        proof = _sample_proof()
        restored = Proof.from_bytes(proof.to_bytes())
        assert restored.canonical
        assert restored.points() == proof.points()
        for name in SCALAR_FIELDS:
            assert getattr(restored, name) == getattr(proof, name)

    @pytest.mark.parametrize("length", [0, 799, 801])
    def test_wrong_length(self, length):
        with pytest.raises(ValueError):
            Proof.from_bytes(b"\x00" * length)

    def test_scalar_out_of_range(self):
        data = bytearray(_sample_proof().to_bytes())
        data[-32:] = CURVE_ORDER.to_bytes(32, "big")
        assert Proof.from_bytes(bytes(data)).canonical is False

    def test_coordinate_out_of_range(self):
        data = bytearray(_sample_proof().to_bytes())
        data[:32] = FIELD_MODULUS.to_bytes(32, "big")
        assert Proof.from_bytes(bytes(data)).canonical is False
