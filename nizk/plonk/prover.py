"""
PLONK Prover
=============

  ┌─────────────────────────────────────────────────────┐
  │  Round 1: 배선 다항식 a(x), b(x), c(x) 커밋          │
  │  Round 2: β, γ → 순열 누적자 z(x) 커밋               │
  │  Round 3: α → 몫 다항식 t(x) = C(x)/Z_H(x) 3분할 커밋│
  │  Round 4: ζ → ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω 평가       │
  │  Round 5: r̄ 흡수, v → 열기 증명 [W_ζ], [W_ζω]        │
  └─────────────────────────────────────────────────────┘

챌린지는 모두 호출자가 넘긴 트랜스크립트에서 나온다. 트랜스크립트는
공개 입력을 먼저 흡수한 뒤 라운드를 진행한다 (Verifier도 같은 순서).

블라인딩 계수는 secrets로 뽑으므로 같은 입력에서도 증명 바이트열은
매번 달라진다.
"""

import secrets

from nizk.plonk.field import FR, CURVE_ORDER
from nizk.plonk.polynomial import (
    Polynomial, poly_div, public_input_polynomial, lagrange_basis_eval,
)
from nizk.plonk.kzg import commit, commit_opening
from nizk.plonk.preprocessor import K1, K2, preprocess, position_to_value
from nizk.plonk.proof import Proof


class ProverState:
    """라운드 간에 공유되는 Prover 상태."""

    def __init__(self, a_vals, b_vals, c_vals, public_inputs, preprocessed, gens, transcript):
        self.a_vals = a_vals
        self.b_vals = b_vals
        self.c_vals = c_vals
        self.public_inputs = public_inputs
        self.preprocessed = preprocessed
        self.gens = gens
        self.transcript = transcript

        self.n = preprocessed.n
        self.omega = preprocessed.omega
        self.domain = preprocessed.domain

        self.proof = Proof()


def absorb_public_inputs(transcript, public_inputs):
    """공개 입력을 트랜스크립트에 흡수한다 (Prover/Verifier 공통)."""
    for value in public_inputs:
        transcript.append_scalar(b"pi", value)


def wire_values(preprocessed, variables, inputs):
    """행별 배선 값 (a, b, c)를 변수 할당에서 읽는다. 패딩 행은 0."""
    values = list(variables) + list(inputs)
    a_vals, b_vals, c_vals = [], [], []
    for wires in preprocessed.wire_vars:
        if wires is None:
            a_vals.append(FR(0))
            b_vals.append(FR(0))
            c_vals.append(FR(0))
        else:
            a_vals.append(values[wires[0]])
            b_vals.append(values[wires[1]])
            c_vals.append(values[wires[2]])
    return a_vals, b_vals, c_vals


def prove(instance, variables, inputs, gens, transcript):
    """증명을 생성한다.

    Args:
        instance: Instance
        variables: 위트니스 Assignment (길이 num_vars)
        inputs: 공개 입력 Assignment (길이 num_inputs)
        gens: Generators (인스턴스 차원에서 유도)
        transcript: 도메인 레이블로 초기화된 Transcript

    Returns:
        Proof

    Raises:
        ValueError: 차원이 맞지 않거나 할당이 제약을 만족하지 않을 때
    """
    dims = (instance.get_num_cons(), instance.get_num_vars(), instance.get_num_inputs())
    if gens.dimensions != dims:
        raise ValueError(f"생성자 차원 {gens.dimensions}이(가) 인스턴스 차원 {dims}과 다릅니다")
    if len(variables) != instance.num_vars:
        raise ValueError(f"위트니스 길이 {len(variables)} != num_vars {instance.num_vars}")
    if len(inputs) != instance.num_inputs:
        raise ValueError(f"공개 입력 길이 {len(inputs)} != num_inputs {instance.num_inputs}")
    if not instance.is_sat(variables, inputs):
        raise ValueError("할당이 회로 제약을 만족하지 않습니다")

    pp = preprocess(instance, gens)
    a_vals, b_vals, c_vals = wire_values(pp, variables, inputs)
    state = ProverState(a_vals, b_vals, c_vals, list(inputs), pp, gens, transcript)

    absorb_public_inputs(transcript, state.public_inputs)
    _round1(state)
    _round2(state)
    _round3(state)
    _round4(state)
    _round5(state)
    return state.proof


def _blind(poly, n, count):
    """poly(x) + (r₀ + r₁x + ...)·Z_H(x). 도메인 위의 값은 변하지 않는다."""
    blind = Polynomial([FR(secrets.randbelow(CURVE_ORDER)) for _ in range(count)])
    return poly + blind * Polynomial.vanishing(n)


def _round1(state):
    n = state.n
    omega = state.omega

    state.pi_poly = public_input_polynomial(state.public_inputs, n, omega)

    state.a_poly = _blind(Polynomial.from_evaluations(state.a_vals, omega), n, 2)
    state.b_poly = _blind(Polynomial.from_evaluations(state.b_vals, omega), n, 2)
    state.c_poly = _blind(Polynomial.from_evaluations(state.c_vals, omega), n, 2)

    state.proof.a_comm = commit(state.a_poly, state.gens)
    state.proof.b_comm = commit(state.b_poly, state.gens)
    state.proof.c_comm = commit(state.c_poly, state.gens)

    state.transcript.append_point(b"a_comm", state.proof.a_comm)
    state.transcript.append_point(b"b_comm", state.proof.b_comm)
    state.transcript.append_point(b"c_comm", state.proof.c_comm)


def _round2(state):
    state.beta = state.transcript.challenge_scalar(b"beta")
    state.gamma = state.transcript.challenge_scalar(b"gamma")
    beta, gamma = state.beta, state.gamma

    n = state.n
    domain = state.domain
    sigma = state.preprocessed.sigma
    s1 = [position_to_value(sigma[i], n, domain) for i in range(n)]
    s2 = [position_to_value(sigma[n + i], n, domain) for i in range(n)]
    s3 = [position_to_value(sigma[2 * n + i], n, domain) for i in range(n)]

    # z(ω⁰) = 1, z(ωⁱ⁺¹) = z(ωⁱ) · 항등 순열 항 / σ 항
    z_evals = [FR(1)]
    for i in range(n - 1):
        a, b, c = state.a_vals[i], state.b_vals[i], state.c_vals[i]
        num = (
            (a + beta * domain[i] + gamma)
            * (b + beta * K1 * domain[i] + gamma)
            * (c + beta * K2 * domain[i] + gamma)
        )
        den = (
            (a + beta * s1[i] + gamma)
            * (b + beta * s2[i] + gamma)
            * (c + beta * s3[i] + gamma)
        )
        z_evals.append(z_evals[-1] * num / den)

    state.z_poly = _blind(Polynomial.from_evaluations(z_evals, state.omega), n, 3)
    state.proof.z_comm = commit(state.z_poly, state.gens)
    state.transcript.append_point(b"z_comm", state.proof.z_comm)


def _round3(state):
    state.alpha = state.transcript.challenge_scalar(b"alpha")

    n = state.n
    alpha, beta, gamma = state.alpha, state.beta, state.gamma
    pp = state.preprocessed
    a, b, c, z = state.a_poly, state.b_poly, state.c_poly, state.z_poly

    x_poly = Polynomial([FR(0), FR(1)])
    gamma_poly = Polynomial([gamma])
    z_omega = z.shift(state.omega)
    l1 = Polynomial.from_evaluations([FR(1)] + [FR(0)] * (n - 1), state.omega)

    gate = pp.q_l_poly * a + pp.q_r_poly * b + pp.q_o_poly * c + pp.q_m_poly * (a * b) + pp.q_c_poly + state.pi_poly

    perm_num = (
        (a + x_poly * beta + gamma_poly)
        * (b + x_poly * (beta * K1) + gamma_poly)
        * (c + x_poly * (beta * K2) + gamma_poly)
        * z
    )
    perm_den = (
        (a + pp.s_sigma1_poly * beta + gamma_poly)
        * (b + pp.s_sigma2_poly * beta + gamma_poly)
        * (c + pp.s_sigma3_poly * beta + gamma_poly)
        * z_omega
    )
    boundary = (z - Polynomial([FR(1)])) * l1

    constraint = gate + (perm_num - perm_den) * alpha + boundary * (alpha * alpha)

    t_poly, remainder = poly_div(constraint, Polynomial.vanishing(n))
    if not remainder.is_zero():
        raise ValueError("제약 다항식이 Z_H(x)로 나누어 떨어지지 않습니다")

    # t(x) = t_lo(x) + x^n · t_mid(x) + x^{2n} · t_hi(x)
    t_coeffs = list(t_poly.coeffs) + [FR(0)] * max(0, 3 * n - len(t_poly.coeffs))
    state.t_lo_poly = Polynomial(t_coeffs[:n])
    state.t_mid_poly = Polynomial(t_coeffs[n:2 * n])
    state.t_hi_poly = Polynomial(t_coeffs[2 * n:])

    state.proof.t_lo_comm = commit(state.t_lo_poly, state.gens)
    state.proof.t_mid_comm = commit(state.t_mid_poly, state.gens)
    state.proof.t_hi_comm = commit(state.t_hi_poly, state.gens)

    state.transcript.append_point(b"t_lo_comm", state.proof.t_lo_comm)
    state.transcript.append_point(b"t_mid_comm", state.proof.t_mid_comm)
    state.transcript.append_point(b"t_hi_comm", state.proof.t_hi_comm)


def _round4(state):
    state.zeta = state.transcript.challenge_scalar(b"zeta")
    zeta = state.zeta
    pp = state.preprocessed
    proof = state.proof

    proof.a_eval = state.a_poly.evaluate(zeta)
    proof.b_eval = state.b_poly.evaluate(zeta)
    proof.c_eval = state.c_poly.evaluate(zeta)
    proof.s_sigma1_eval = pp.s_sigma1_poly.evaluate(zeta)
    proof.s_sigma2_eval = pp.s_sigma2_poly.evaluate(zeta)
    proof.z_omega_eval = state.z_poly.evaluate(zeta * state.omega)

    state.transcript.append_scalar(b"a_eval", proof.a_eval)
    state.transcript.append_scalar(b"b_eval", proof.b_eval)
    state.transcript.append_scalar(b"c_eval", proof.c_eval)
    state.transcript.append_scalar(b"s_sigma1_eval", proof.s_sigma1_eval)
    state.transcript.append_scalar(b"s_sigma2_eval", proof.s_sigma2_eval)
    state.transcript.append_scalar(b"z_omega_eval", proof.z_omega_eval)


def _round5(state):
    n = state.n
    zeta, omega = state.zeta, state.omega
    alpha, beta, gamma = state.alpha, state.beta, state.gamma
    pp = state.preprocessed
    proof = state.proof
    a_eval, b_eval, c_eval = proof.a_eval, proof.b_eval, proof.c_eval

    pi_zeta = state.pi_poly.evaluate(zeta)
    l1_zeta = lagrange_basis_eval(0, n, omega, zeta)

    # 선형화: z(x), S_σ3(x), 셀렉터만 다항식으로 남기고 나머지는 ζ에서 평가한 스칼라
    perm_z_scalar = (
        alpha
        * (a_eval + beta * zeta + gamma)
        * (b_eval + beta * K1 * zeta + gamma)
        * (c_eval + beta * K2 * zeta + gamma)
    )
    ab_factor = (
        (a_eval + beta * proof.s_sigma1_eval + gamma)
        * (b_eval + beta * proof.s_sigma2_eval + gamma)
    )
    perm_s3_scalar = alpha * ab_factor * beta * proof.z_omega_eval
    r_const = (
        pi_zeta
        - alpha * ab_factor * proof.z_omega_eval * (c_eval + gamma)
        - alpha * alpha * l1_zeta
    )

    r_poly = (
        pp.q_m_poly * (a_eval * b_eval)
        + pp.q_l_poly * a_eval
        + pp.q_r_poly * b_eval
        + pp.q_o_poly * c_eval
        + pp.q_c_poly
        + state.z_poly * (perm_z_scalar + alpha * alpha * l1_zeta)
        - pp.s_sigma3_poly * perm_s3_scalar
        + Polynomial([r_const])
    )
    proof.r_eval = r_poly.evaluate(zeta)
    state.transcript.append_scalar(b"r_eval", proof.r_eval)
    v = state.transcript.challenge_scalar(b"v")

    zeta_n = zeta ** n
    t_combined = state.t_lo_poly + state.t_mid_poly * zeta_n + state.t_hi_poly * (zeta_n * zeta_n)

    # W_ζ: t, r, a, b, c, S_σ1, S_σ2를 v의 거듭제곱으로 묶어 한 번에 연다
    opened = [t_combined, r_poly, state.a_poly, state.b_poly, state.c_poly,
              pp.s_sigma1_poly, pp.s_sigma2_poly]
    numerator = Polynomial.zero()
    v_power = FR(1)
    for poly in opened:
        numerator = numerator + (poly - Polynomial([poly.evaluate(zeta)])) * v_power
        v_power = v_power * v

    proof.W_zeta_comm = commit_opening(numerator, zeta, state.gens)
    proof.W_zeta_omega_comm = commit_opening(
        state.z_poly - Polynomial([proof.z_omega_eval]), zeta * omega, state.gens
    )

    # Verifier는 두 열기 증명을 흡수한 뒤에 u를 뽑는다
    state.transcript.append_point(b"W_zeta_comm", proof.W_zeta_comm)
    state.transcript.append_point(b"W_zeta_omega_comm", proof.W_zeta_omega_comm)
