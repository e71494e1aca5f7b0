"""
유한체(Finite Field) FR 및 타원곡선 연산
=========================================

PLONK 백엔드 전체에서 사용하는 기본 대수 도구.

**유한체 FR**:
  bn128(BN254) 곡선의 스칼라 필드. 위트니스 파일(wtns)의 모든 원소,
  회로 셀렉터, 증명의 평가값이 이 필드의 원소이다.
  - 위수 r ≈ 2^254
  - r - 1 = 2^28 × m → 최대 2^28차 단위근 지원

**정규(canonical) 인코딩**:
  필드 원소는 32바이트 little-endian 정수로 직렬화한다.
  값이 r 이상인 바이트열은 정규 표현이 아니므로 거부한다.

**곡선 연산**:
  KZG 커밋먼트와 페어링 검증에 쓰이는 G1/G2 연산은 모두 py_ecc가 수행한다.

사용 예시:
    >>> from nizk.plonk.field import FR, to_repr, from_repr
    >>> from_repr(to_repr(FR(7))) == FR(7)
    True
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 그대로 사용한다.
    """
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 베이스 필드 위수 p (G1 좌표의 범위)
FIELD_MODULUS = bn128.field_modulus

# 필드 원소 직렬화 폭 (바이트)
FR_BYTES = 32

G1 = bn128.G1
G2 = bn128.G2

# G1 항등원 (무한원점)
Z1 = None


def to_repr(value, width=FR_BYTES):
    """필드 원소를 정규 little-endian 바이트열로 변환한다.

    Args:
        value: FR 원소 또는 정수
        width: 출력 바이트 수

    Returns:
        bytes: 길이 width의 little-endian 표현
    """
    return (int(value) % CURVE_ORDER).to_bytes(width, "little")


def from_repr(data, field=FR):
    """little-endian 바이트열을 필드 원소로 해석한다.

    값을 축소(reduction)하지 않는다. 정규 표현이 아니면 ValueError.

    Args:
        data: 바이트열
        field: FQ 서브클래스 (기본값 FR)

    Returns:
        field 원소

    Raises:
        ValueError: 값이 field_modulus 이상일 때
    """
    value = int.from_bytes(data, "little")
    if value >= field.field_modulus:
        raise ValueError(f"정규 필드 원소가 아닙니다: {value:#x}")
    return field(value)


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if point is None:
        return None
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    if point is None:
        return None
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2).

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    return bn128.pairing(g2_point, g1_point)


def is_on_g1(point):
    """점이 G1 곡선 위에 있는지 확인한다. 무한원점은 유효하다."""
    if point is None:
        return True
    return bn128.is_on_curve(point, bn128.b)


def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    생성자 g = FR(5)에서 ω = g^((r-1)/n)으로 계산한다.

    Args:
        n: 2의 거듭제곱 (≤ 2^28)

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << 28):
        raise ValueError(f"n은 2^28 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)
    return FR(5) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """평가 도메인 H = [1, ω, ω², ..., ω^(n-1)]."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
