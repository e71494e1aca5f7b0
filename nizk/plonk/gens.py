"""
생성자 파라미터 (Generators)
=============================

KZG 커밋먼트용 공개 파라미터 [G1, τ·G1, ..., τ^d·G1], [G2, τ·G2].

**결정론적 유도**:
  파라미터는 저장하지 않는다. 회로의 세 차원
  (제약 수, 변수 수, 공개 입력 수)만으로 τ를 해시하여 매번 다시 만든다.
  Prover와 Verifier가 같은 차원에서 같은 파라미터를 얻어야 검증이 성립한다.

**보안 주의**:
  τ가 공개 값에서 유도되므로 이 설정은 건전성(soundness)을 보장하지 않는다.
  실제 배포에서는 MPC로 만든 powers-of-tau로 교체해야 한다.
"""

import hashlib
import struct

from nizk.plonk.field import FR, G1, G2, ec_mul, CURVE_ORDER
from nizk.plonk.polynomial import next_power_of_2

_TAU_DOMAIN = b"nizk.plonk.gens"


def domain_size(num_cons, num_inputs):
    """평가 도메인 크기 n: 공개 입력 행 + 제약 행을 담는 2의 거듭제곱."""
    return next_power_of_2(max(num_cons + num_inputs, 1))


def derive_tau(num_cons, num_vars, num_inputs):
    """세 차원을 해시하여 τ를 만든다.

    누구나 같은 값을 계산할 수 있다. 이 값을 아는 사람은 임의의 점에 대한
    열기 증명을 만들 수 있으므로 KZG 커밋먼트가 바인딩되지 않는다.
    """
    seed = _TAU_DOMAIN + struct.pack("<QQQ", num_cons, num_vars, num_inputs)
    return FR(int.from_bytes(hashlib.sha256(seed).digest(), "big") % CURVE_ORDER)


class Generators:
    """회로 차원에서 유도한 KZG 생성자.

    속성:
        g1_powers: [G1, τ·G1, ..., τ^d·G1]
        g2_powers: [G2, τ·G2]
        max_degree: 커밋 가능한 최대 차수 d
        n: 평가 도메인 크기
        dimensions: (num_cons, num_vars, num_inputs)
    """

    def __init__(self, g1_powers, g2_powers, max_degree, n, dimensions):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.max_degree = max_degree
        self.n = n
        self.dimensions = dimensions

    @classmethod
    def new(cls, num_cons, num_vars, num_inputs):
        """세 차원에서 생성자를 만든다.

        최대 차수는 n + 5: 블라인딩된 몫 다항식 t(x)의 상위 조각
        t_hi(x)가 도달하는 차수이다.
        """
        n = domain_size(num_cons, num_inputs)
        max_degree = n + 5

        tau = derive_tau(num_cons, num_vars, num_inputs)
        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = [G2, ec_mul(G2, tau)]
        return cls(g1_powers, g2_powers, max_degree, n, (num_cons, num_vars, num_inputs))
