"""
FR 위의 다항식 연산
====================

계수 표현 다항식과 도메인 H = {1, ω, ..., ω^(n-1)} 위의 보간 도구.

**주요 기능**:
  - Polynomial: 덧셈/뺄셈/곱셈, Horner 평가
  - fft / ifft: 계수 ↔ 평가값 (radix-2 NTT)
  - poly_div: 긴 나눗셈 (몫 t(x), 열기 증명에 사용)
  - vanishing_poly_eval, lagrange_basis_eval: Verifier가 쓰는 스칼라 평가
  - public_input_polynomial: 공개 입력 다항식 PI(x)
"""

from nizk.plonk.field import FR


class Polynomial:
    """유한체 FR 위의 다항식.

    coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...
    최고차 계수가 0인 항은 항상 제거된 상태로 유지한다.
    """

    def __init__(self, coeffs=None):
        if coeffs is None:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [c if isinstance(c, FR) else FR(c) for c in coeffs]
            if not self.coeffs:
                self.coeffs = [FR(0)]
        self._trim()

    def _trim(self):
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == FR(0)

    def evaluate(self, point):
        """Horner's method로 p(point)를 계산한다."""
        if not isinstance(point, FR):
            point = FR(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def _combine(self, other, op):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        size = max(len(self.coeffs), len(other.coeffs))
        zero = FR(0)
        return Polynomial([
            op(
                self.coeffs[i] if i < len(self.coeffs) else zero,
                other.coeffs[i] if i < len(other.coeffs) else zero,
            )
            for i in range(size)
        ])

    def __add__(self, other):
        return self._combine(other, lambda x, y: x + y)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return self._combine(other, lambda x, y: x - y)

    def __rsub__(self, other):
        return Polynomial([other]).__sub__(self)

    def __neg__(self):
        return Polynomial([FR(0) - c for c in self.coeffs])

    def __mul__(self, other):
        """다항식 × 다항식 (O(n²) 곱셈) 또는 다항식 × 스칼라."""
        if isinstance(other, (int, FR)):
            other = FR(other) if isinstance(other, int) else other
            return Polynomial([c * other for c in self.coeffs])
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, x in enumerate(self.coeffs):
            if x == FR(0):
                continue
            for j, y in enumerate(other.coeffs):
                result[i + j] = result[i + j] + x * y
        return Polynomial(result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return False
        return self.coeffs == other.coeffs

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == FR(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def shift(self, factor):
        """p(factor·x)의 계수를 반환한다: cᵢ → factorⁱ · cᵢ."""
        coeffs = []
        power = FR(1)
        for c in self.coeffs:
            coeffs.append(c * power)
            power = power * factor
        return Polynomial(coeffs)

    @classmethod
    def zero(cls):
        return cls([FR(0)])

    @classmethod
    def vanishing(cls, n):
        """소거 다항식 Z_H(x) = x^n - 1."""
        coeffs = [FR(0)] * (n + 1)
        coeffs[0] = FR(-1)
        coeffs[n] = FR(1)
        return cls(coeffs)

    @classmethod
    def from_evaluations(cls, evals, omega):
        """도메인 위의 평가값을 IFFT로 보간한다."""
        return cls(ifft(evals, omega))


def fft(coeffs, omega):
    """재귀 Cooley-Tukey radix-2 NTT: 계수 → 평가값."""
    n = len(coeffs)
    if n == 1:
        return [coeffs[0] if isinstance(coeffs[0], FR) else FR(coeffs[0])]

    omega_sq = omega * omega
    even_vals = fft(coeffs[0::2], omega_sq)
    odd_vals = fft(coeffs[1::2], omega_sq)

    result = [FR(0)] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega
    return result


def ifft(evals, omega):
    """역 NTT: 평가값 → 계수. ω^{-1}로 FFT 후 n으로 나눈다."""
    n = len(evals)
    coeffs = fft(evals, FR(1) / omega)
    n_inv = FR(1) / FR(n)
    return [c * n_inv for c in coeffs]


def poly_div(a, b):
    """긴 나눗셈: a(x) = b(x)·q(x) + r(x).

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        ValueError: 제수가 영 다항식일 때
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1
    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = FR(1) / divisor[-1]
    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder[:deg_b] or [FR(0)])


def vanishing_poly_eval(n, zeta):
    """Z_H(ζ) = ζ^n - 1."""
    return zeta ** n - FR(1)


def lagrange_basis_eval(i, n, omega, zeta):
    """i번째 Lagrange 기저 L_i(ζ) = (ωⁱ / n) · (ζ^n - 1) / (ζ - ωⁱ)."""
    if not isinstance(zeta, FR):
        zeta = FR(zeta)
    omega_i = omega ** i
    denominator = zeta - omega_i
    if denominator == FR(0):
        return FR(1)
    return vanishing_poly_eval(n, zeta) * omega_i / (FR(n) * denominator)


def public_input_polynomial(pub_inputs, n, omega):
    """공개 입력 다항식 PI(x).

    i번째 공개 입력은 i번째 행에 배치되며, 게이트 제약
    a - xᵢ = 0 이 성립하도록 PI(ωⁱ) = -xᵢ 로 인코딩한다.
    """
    if not pub_inputs:
        return Polynomial.zero()
    evals = [FR(0)] * n
    for i, val in enumerate(pub_inputs):
        evals[i] = FR(0) - val
    return Polynomial.from_evaluations(evals, omega)


def public_input_poly_eval(pub_inputs, n, omega, zeta):
    """PI(ζ) = Σᵢ -xᵢ · Lᵢ(ζ). Verifier용 (다항식 전체를 만들지 않는다)."""
    result = FR(0)
    for i, val in enumerate(pub_inputs):
        result = result - val * lagrange_basis_eval(i, n, omega, zeta)
    return result


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱."""
    p = 1
    while p < n:
        p <<= 1
    return p
