"""
Fiat-Shamir 트랜스크립트
=========================

대화식 PLONK를 비대화식(NIZK)으로 바꾸는 해시 누적기.

Prover와 Verifier가 같은 도메인 레이블로 시작하여 같은 순서로 데이터를
추가하면 같은 챌린지가 나온다. 레이블이 한 바이트라도 다르면 모든
챌린지가 달라지므로 검증은 실패한다.

사용 예시:
    >>> t = Transcript(b"nizk_plonk")
    >>> t.append_point(b"a_comm", commitment)
    >>> beta = t.challenge_scalar(b"beta")
"""

import hashlib

from nizk.plonk.field import FR, CURVE_ORDER


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    속성:
        state: 지금까지 누적된 해시 입력 바이트열
    """

    def __init__(self, label):
        if not isinstance(label, (bytes, bytearray)):
            raise TypeError("트랜스크립트 레이블은 바이트열이어야 합니다")
        self.state = bytearray()
        self.state.extend(label)

    def append_scalar(self, label, scalar):
        """FR 스칼라를 32바이트 big-endian으로 추가한다."""
        self.state.extend(label)
        self.state.extend((int(scalar) % CURVE_ORDER).to_bytes(32, "big"))

    def append_point(self, label, point):
        """G1 점 (x, y)를 추가한다. 무한원점은 64바이트의 0."""
        self.state.extend(label)
        if point is None:
            self.state.extend(b"\x00" * 64)
        else:
            x, y = point
            self.state.extend(int(x).to_bytes(32, "big"))
            self.state.extend(int(y).to_bytes(32, "big"))

    def challenge_scalar(self, label):
        """현재 상태를 해싱하여 챌린지를 만들고, 해시를 상태에 다시 넣는다."""
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(h)
        return FR(int.from_bytes(h, "big") % CURVE_ORDER)
