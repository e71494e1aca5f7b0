"""
회로 전처리 (Preprocessor)
===========================

인스턴스와 생성자로부터 Prover/Verifier가 공유하는 공개 데이터를 만든다.

**행 배치**:
  - 행 0..num_inputs-1: 공개 입력 게이트 (q_L = 1, a = 공개 입력 변수)
    PI(ωⁱ) = -xᵢ 와 함께 a - xᵢ = 0 을 강제한다.
  - 그 다음 행: 인스턴스의 게이트
  - 나머지 행: 모든 셀렉터가 0인 패딩 게이트 (배선은 어떤 변수에도 묶이지 않는다)

**순열 σ (copy constraint)**:
  3n개의 배선 위치 (a: 0..n-1, b: n..2n-1, c: 2n..3n-1) 중
  같은 변수를 가리키는 위치들을 하나의 순환(cycle)으로 묶는다.

**코셋 식별자**:
  a, b, c 배선 위치를 H, K1·H, K2·H 세 코셋으로 구분한다 (K1=2, K2=3).
"""

from nizk.plonk.field import FR, get_root_of_unity, get_roots_of_unity
from nizk.plonk.polynomial import Polynomial
from nizk.plonk.kzg import commit

K1 = FR(2)
K2 = FR(3)


class PreprocessedData:
    """전처리 결과.

    속성 (도메인):
        n, omega, domain
    속성 (셀렉터):
        q_l_poly ... q_c_poly, q_l_comm ... q_c_comm
    속성 (순열):
        sigma, s_sigma1_poly ... s_sigma3_poly, s_sigma1_comm ... s_sigma3_comm
    속성 (배선):
        wire_vars: 행별 (a, b, c) 변수 인덱스, 패딩 행은 None
        num_public_inputs
    """


def layout_rows(instance):
    """공개 입력 행과 게이트 행을 순서대로 배치한다.

    Returns:
        tuple: (selectors, wire_vars). 행별 셀렉터 5-튜플과 배선 변수 3-튜플
    """
    selectors = []
    wire_vars = []
    for j in range(instance.num_inputs):
        var = instance.num_vars + j
        selectors.append((FR(1), FR(0), FR(0), FR(0), FR(0)))
        wire_vars.append((var, var, var))
    for gate in instance.gates:
        selectors.append(gate.selectors)
        wire_vars.append(gate.wires)
    return selectors, wire_vars


def build_sigma(wire_vars, n):
    """같은 변수를 가리키는 배선 위치들을 순환으로 연결한 순열 σ (길이 3n)."""
    sigma = list(range(3 * n))
    groups = {}
    for column in range(3):
        for row, wires in enumerate(wire_vars):
            groups.setdefault(wires[column], []).append(column * n + row)
    for positions in groups.values():
        for k, pos in enumerate(positions):
            sigma[pos] = positions[(k + 1) % len(positions)]
    return sigma


def position_to_value(pos, n, domain):
    """순열 위치 → 코셋 원소: a는 ωⁱ, b는 K1·ωⁱ, c는 K2·ωⁱ."""
    if pos < n:
        return domain[pos]
    if pos < 2 * n:
        return K1 * domain[pos - n]
    return K2 * domain[pos - 2 * n]


def preprocess(instance, gens):
    """인스턴스를 전처리한다.

    Raises:
        ValueError: 생성자의 도메인이 인스턴스 행 수보다 작을 때
    """
    n = gens.n
    selectors, wire_vars = layout_rows(instance)
    if len(selectors) > n:
        raise ValueError(f"행 수 {len(selectors)}가 도메인 크기 {n}를 초과합니다")

    padding = n - len(selectors)
    selectors = selectors + [(FR(0),) * 5] * padding

    result = PreprocessedData()
    result.n = n
    result.omega = get_root_of_unity(n)
    result.domain = get_roots_of_unity(n)
    result.wire_vars = wire_vars + [None] * padding
    result.num_public_inputs = instance.num_inputs

    columns = list(zip(*selectors))
    for name, evals in zip(("q_l", "q_r", "q_o", "q_m", "q_c"), columns):
        poly = Polynomial.from_evaluations(list(evals), result.omega)
        setattr(result, f"{name}_poly", poly)
        setattr(result, f"{name}_comm", commit(poly, gens))

    result.sigma = build_sigma(wire_vars, n)
    for k in range(3):
        evals = [
            position_to_value(result.sigma[k * n + i], n, result.domain)
            for i in range(n)
        ]
        poly = Polynomial.from_evaluations(evals, result.omega)
        setattr(result, f"s_sigma{k + 1}_poly", poly)
        setattr(result, f"s_sigma{k + 1}_comm", commit(poly, gens))

    return result
