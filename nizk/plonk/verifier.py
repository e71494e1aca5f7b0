"""
PLONK Verifier
================

**검증 과정**:
  0. 증명 구조 검사: 범위를 벗어난 좌표/스칼라, 곡선 밖의 점 → False
  1. 트랜스크립트 재생 (replay): 공개 입력 흡수 후 β, γ, α, ζ, v, u 복원
  2. Z_H(ζ), L₁(ζ), PI(ζ) 계산
  3. 선형화 커밋먼트 [D]₁ 와 상수 r₀
  4. 결합 커밋먼트 [F]₁, 결합 평가값 E
  5. 페어링 검사 e(W_ζ + u·W_ζω, [τ]₂) = e(ζ·W_ζ + uζω·W_ζω + F + u·[z] - E, G₂)

**챌린지 순서**:
  v는 r̄까지 흡수한 뒤, u는 [W_ζ], [W_ζω]를 흡수한 뒤에 뽑는다.
  u가 두 열기 증명보다 먼저 정해지면 두 개의 열기 방정식을 하나로 묶는
  의미가 없어진다.

**공개 입력 바인딩**:
  PI(ζ) = Σᵢ -xᵢ·Lᵢ(ζ) 가 r₀에 들어가고, 공개 입력은 트랜스크립트에도
  흡수되므로 다른 공개 입력을 넣으면 챌린지와 페어링이 모두 달라진다.
"""

from nizk.plonk.field import G1, ec_mul, ec_add, ec_neg, ec_pairing, is_on_g1
from nizk.plonk.polynomial import (
    vanishing_poly_eval, lagrange_basis_eval, public_input_poly_eval,
)
from nizk.plonk.preprocessor import K1, K2, preprocess
from nizk.plonk.prover import absorb_public_inputs


class Challenges:
    """트랜스크립트 재생으로 복원한 챌린지: beta, gamma, alpha, zeta, v, u."""

    def __init__(self, beta, gamma, alpha, zeta, v, u):
        self.beta = beta
        self.gamma = gamma
        self.alpha = alpha
        self.zeta = zeta
        self.v = v
        self.u = u


def replay(proof, public_inputs, transcript):
    """Prover와 같은 순서로 증명 요소를 흡수하며 챌린지를 복원한다."""
    absorb_public_inputs(transcript, public_inputs)

    transcript.append_point(b"a_comm", proof.a_comm)
    transcript.append_point(b"b_comm", proof.b_comm)
    transcript.append_point(b"c_comm", proof.c_comm)

    beta = transcript.challenge_scalar(b"beta")
    gamma = transcript.challenge_scalar(b"gamma")

    transcript.append_point(b"z_comm", proof.z_comm)

    alpha = transcript.challenge_scalar(b"alpha")

    transcript.append_point(b"t_lo_comm", proof.t_lo_comm)
    transcript.append_point(b"t_mid_comm", proof.t_mid_comm)
    transcript.append_point(b"t_hi_comm", proof.t_hi_comm)

    zeta = transcript.challenge_scalar(b"zeta")

    transcript.append_scalar(b"a_eval", proof.a_eval)
    transcript.append_scalar(b"b_eval", proof.b_eval)
    transcript.append_scalar(b"c_eval", proof.c_eval)
    transcript.append_scalar(b"s_sigma1_eval", proof.s_sigma1_eval)
    transcript.append_scalar(b"s_sigma2_eval", proof.s_sigma2_eval)
    transcript.append_scalar(b"z_omega_eval", proof.z_omega_eval)
    transcript.append_scalar(b"r_eval", proof.r_eval)

    v = transcript.challenge_scalar(b"v")

    transcript.append_point(b"W_zeta_comm", proof.W_zeta_comm)
    transcript.append_point(b"W_zeta_omega_comm", proof.W_zeta_omega_comm)

    u = transcript.challenge_scalar(b"u")

    return Challenges(beta, gamma, alpha, zeta, v, u)


def pairing_inputs(proof, preprocessed, public_inputs, challenges):
    """페어링 양변에 들어갈 G1 점 ([A]₁, [B]₁)을 만든다.

    Returns:
        tuple: (A, B). Z_H(ζ) = 0 이면 None
    """
    pp = preprocessed
    n = pp.n
    omega = pp.omega
    beta, gamma, alpha = challenges.beta, challenges.gamma, challenges.alpha
    zeta, v, u = challenges.zeta, challenges.v, challenges.u

    a_eval = proof.a_eval
    b_eval = proof.b_eval
    c_eval = proof.c_eval
    s_sigma1_eval = proof.s_sigma1_eval
    s_sigma2_eval = proof.s_sigma2_eval
    z_omega_eval = proof.z_omega_eval

    # ── Step 2: 공개 값 ──
    zh_zeta = vanishing_poly_eval(n, zeta)
    if zh_zeta == 0:
        return None
    l1_zeta = lagrange_basis_eval(0, n, omega, zeta)
    pi_zeta = public_input_poly_eval(public_inputs, n, omega, zeta)

    # ── Step 3: [D]₁ 와 r₀ ──
    D = ec_mul(pp.q_m_comm, a_eval * b_eval)
    D = ec_add(D, ec_mul(pp.q_l_comm, a_eval))
    D = ec_add(D, ec_mul(pp.q_r_comm, b_eval))
    D = ec_add(D, ec_mul(pp.q_o_comm, c_eval))
    D = ec_add(D, pp.q_c_comm)

    perm_z_scalar = (
        alpha
        * (a_eval + beta * zeta + gamma)
        * (b_eval + beta * K1 * zeta + gamma)
        * (c_eval + beta * K2 * zeta + gamma)
    )
    D = ec_add(D, ec_mul(proof.z_comm, perm_z_scalar + alpha * alpha * l1_zeta))

    ab_factor = (
        (a_eval + beta * s_sigma1_eval + gamma)
        * (b_eval + beta * s_sigma2_eval + gamma)
    )
    perm_s3_scalar = alpha * ab_factor * beta * z_omega_eval
    D = ec_add(D, ec_neg(ec_mul(pp.s_sigma3_comm, perm_s3_scalar)))

    r_0 = (
        pi_zeta
        - alpha * ab_factor * z_omega_eval * (c_eval + gamma)
        - alpha * alpha * l1_zeta
    )

    # ── Step 4: [F]₁ 및 E ──
    zeta_n = zeta ** n
    t_comm = ec_add(
        proof.t_lo_comm,
        ec_add(ec_mul(proof.t_mid_comm, zeta_n), ec_mul(proof.t_hi_comm, zeta_n * zeta_n)),
    )

    F = t_comm
    F = ec_add(F, ec_mul(D, v))
    F = ec_add(F, ec_mul(G1, v * r_0))

    # r(ζ) = t(ζ)·Z_H(ζ)
    r_eval = proof.r_eval
    t_eval = r_eval / zh_zeta
    e_scalar = t_eval + v * r_eval

    v_pow = v
    for comm, value in (
        (proof.a_comm, a_eval),
        (proof.b_comm, b_eval),
        (proof.c_comm, c_eval),
        (pp.s_sigma1_comm, s_sigma1_eval),
        (pp.s_sigma2_comm, s_sigma2_eval),
    ):
        v_pow = v_pow * v
        F = ec_add(F, ec_mul(comm, v_pow))
        e_scalar = e_scalar + v_pow * value
    e_scalar = e_scalar + u * z_omega_eval

    E = ec_mul(G1, e_scalar)

    # ── Step 5: 페어링 양변 ──
    A = ec_add(proof.W_zeta_comm, ec_mul(proof.W_zeta_omega_comm, u))

    B = ec_mul(proof.W_zeta_comm, zeta)
    B = ec_add(B, ec_mul(proof.W_zeta_omega_comm, u * zeta * omega))
    B = ec_add(B, F)
    B = ec_add(B, ec_mul(proof.z_comm, u))
    B = ec_add(B, ec_neg(E))

    return A, B


def verify(proof, instance, inputs, transcript, gens):
    """PLONK 증명을 검증한다.

    Args:
        proof: Proof (Proof.from_bytes의 결과)
        instance: Instance
        inputs: 공개 입력 Assignment
        transcript: Prover와 같은 레이블로 초기화된 Transcript
        gens: Generators

    Returns:
        bool: 검증 성공 여부

    Raises:
        ValueError: 공개 입력 길이나 생성자 차원이 인스턴스와 맞지 않을 때
    """
    dims = (instance.get_num_cons(), instance.get_num_vars(), instance.get_num_inputs())
    if gens.dimensions != dims:
        raise ValueError(f"생성자 차원 {gens.dimensions}이(가) 인스턴스 차원 {dims}과 다릅니다")
    if len(inputs) != instance.num_inputs:
        raise ValueError(f"공개 입력 길이 {len(inputs)} != num_inputs {instance.num_inputs}")

    if not proof.canonical:
        return False
    if not all(is_on_g1(point) for point in proof.points()):
        return False

    pp = preprocess(instance, gens)
    public_inputs = list(inputs)

    challenges = replay(proof, public_inputs, transcript)
    sides = pairing_inputs(proof, pp, public_inputs, challenges)
    if sides is None:
        return False
    A, B = sides

    lhs = ec_pairing(gens.g2_powers[1], A)
    rhs = ec_pairing(gens.g2_powers[0], B)

    return lhs == rhs
