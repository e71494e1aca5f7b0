"""
KZG 다항식 커밋먼트
====================

C = p(τ)·G1 = Σᵢ cᵢ · [τⁱ]₁

Generators의 G1 powers [G1, τG1, τ²G1, ...]와 계수의 선형결합으로
τ를 모르는 상태에서 p(τ)·G1을 계산한다.
"""

from nizk.plonk.field import FR, ec_mul, ec_add
from nizk.plonk.polynomial import Polynomial, poly_div


def commit(poly, gens):
    """다항식을 KZG 커밋한다.

    Raises:
        ValueError: 다항식 차수가 생성자 최대 차수를 초과할 때
    """
    if poly.degree > gens.max_degree:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 최대 차수 {gens.max_degree}를 초과합니다"
        )

    result = None
    for i, coeff in enumerate(poly.coeffs):
        if coeff == FR(0):
            continue
        result = ec_add(result, ec_mul(gens.g1_powers[i], coeff))
    return result


def commit_opening(numerator, point, gens):
    """(numerator(x)) / (x - point) 몫을 커밋한다 (열기 증명 π).

    numerator(point) = 0 이 아니면 나머지가 남으므로 ValueError.
    """
    quotient, remainder = poly_div(numerator, Polynomial([FR(0) - point, FR(1)]))
    if not remainder.is_zero():
        raise ValueError("열기 증명 생성 실패: 나머지가 0이 아닙니다")
    return commit(quotient, gens)
