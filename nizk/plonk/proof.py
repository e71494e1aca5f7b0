"""
PLONK 증명 컨테이너와 고정 폭 직렬화
=====================================

바이트 레이아웃 (총 800바이트):
  - G1 점 9개 × 64바이트: x‖y (각 32바이트 big-endian), 무한원점은 0으로 채운 64바이트
      a, b, c, z, t_lo, t_mid, t_hi, W_ζ, W_ζω
  - 스칼라 7개 × 32바이트 big-endian
      ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω, r̄

역직렬화는 길이만 구조적으로 검사한다. 좌표나 스칼라의 범위, 곡선 위에
있는지 여부는 검증 단계에서 판단하므로, 변조된 바이트는 오류가 아니라
검증 실패(False)로 이어진다.
"""

from py_ecc.fields import bn128_FQ as FQ

from nizk.plonk.field import FR, CURVE_ORDER, FIELD_MODULUS

POINT_FIELDS = (
    "a_comm", "b_comm", "c_comm",
    "z_comm",
    "t_lo_comm", "t_mid_comm", "t_hi_comm",
    "W_zeta_comm", "W_zeta_omega_comm",
)

SCALAR_FIELDS = (
    "a_eval", "b_eval", "c_eval",
    "s_sigma1_eval", "s_sigma2_eval", "z_omega_eval",
    "r_eval",
)

POINT_BYTES = 64
SCALAR_BYTES = 32
PROOF_BYTES = len(POINT_FIELDS) * POINT_BYTES + len(SCALAR_FIELDS) * SCALAR_BYTES


class Proof:
    """PLONK 증명.

    Round 1: a_comm, b_comm, c_comm
    Round 2: z_comm
    Round 3: t_lo_comm, t_mid_comm, t_hi_comm
    Round 4: a_eval, b_eval, c_eval, s_sigma1_eval, s_sigma2_eval, z_omega_eval
    Round 5: r_eval, W_zeta_comm, W_zeta_omega_comm

    canonical은 역직렬화한 모든 좌표/스칼라가 각 필드 범위 안에 있었는지를 나타낸다.
    """

    def __init__(self):
        for name in POINT_FIELDS + SCALAR_FIELDS:
            setattr(self, name, None)
        self.canonical = True

    def to_bytes(self):
        out = bytearray()
        for name in POINT_FIELDS:
            point = getattr(self, name)
            if point is None:
                out.extend(b"\x00" * POINT_BYTES)
            else:
                out.extend(int(point[0]).to_bytes(32, "big"))
                out.extend(int(point[1]).to_bytes(32, "big"))
        for name in SCALAR_FIELDS:
            out.extend(int(getattr(self, name)).to_bytes(SCALAR_BYTES, "big"))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data):
        """바이트열에서 증명을 복원한다.

        Raises:
            ValueError: 길이가 PROOF_BYTES가 아닐 때
        """
        if len(data) != PROOF_BYTES:
            raise ValueError(f"증명 길이는 {PROOF_BYTES}바이트여야 합니다 (받은 길이 {len(data)})")

        proof = cls()
        offset = 0
        for name in POINT_FIELDS:
            chunk = data[offset:offset + POINT_BYTES]
            offset += POINT_BYTES
            if not any(chunk):
                continue
            x = int.from_bytes(chunk[:32], "big")
            y = int.from_bytes(chunk[32:], "big")
            if x >= FIELD_MODULUS or y >= FIELD_MODULUS:
                proof.canonical = False
            setattr(proof, name, (FQ(x), FQ(y)))
        for name in SCALAR_FIELDS:
            value = int.from_bytes(data[offset:offset + SCALAR_BYTES], "big")
            offset += SCALAR_BYTES
            if value >= CURVE_ORDER:
                proof.canonical = False
            setattr(proof, name, FR(value))
        return proof

    def points(self):
        return [getattr(self, name) for name in POINT_FIELDS]
