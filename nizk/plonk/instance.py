"""
회로 인스턴스 (Circuit Instance)
=================================

PLONK 게이트의 리스트와 각 배선이 가리키는 변수 인덱스.

**게이트 구조**:
  q_L·a + q_R·b + q_O·c + q_M·(a·b) + q_C = 0

  | 유형    | q_L | q_R | q_O | q_M | q_C | 의미        |
  |---------|-----|-----|-----|-----|-----|-------------|
  | 곱셈    |  0  |  0  | -1  |  1  |  0  | a·b = c     |
  | 덧셈    |  1  |  1  | -1  |  0  |  0  | a + b = c   |
  | 상수덧셈|  1  |  0  | -1  |  0  |  k  | a + k = c   |

**변수 공간**:
  배선 a, b, c는 변수 인덱스를 가리킨다.
  - [0, num_vars): 위트니스(비공개) 변수
  - [num_vars, num_vars + num_inputs): 공개 입력
  같은 변수를 가리키는 배선들은 자동으로 복사 제약(copy constraint)이 된다.

**직렬화**:
  MessagePack 맵 {"version", "num_vars", "num_inputs", "gates"}.
  gates의 각 원소는 [q_L, q_R, q_O, q_M, q_C, a, b, c]이며
  셀렉터는 32바이트 little-endian 정규 인코딩이다.
"""

import msgpack
from msgpack.exceptions import UnpackException

from nizk.plonk.field import FR, FR_BYTES, to_repr, from_repr

INSTANCE_VERSION = 1


class Gate:
    """배선이 연결된 PLONK 산술 게이트."""

    __slots__ = ("q_l", "q_r", "q_o", "q_m", "q_c", "a", "b", "c")

    def __init__(self, q_l, q_r, q_o, q_m, q_c, a, b, c):
        self.q_l = q_l if isinstance(q_l, FR) else FR(q_l)
        self.q_r = q_r if isinstance(q_r, FR) else FR(q_r)
        self.q_o = q_o if isinstance(q_o, FR) else FR(q_o)
        self.q_m = q_m if isinstance(q_m, FR) else FR(q_m)
        self.q_c = q_c if isinstance(q_c, FR) else FR(q_c)
        self.a = a
        self.b = b
        self.c = c

    @property
    def selectors(self):
        return (self.q_l, self.q_r, self.q_o, self.q_m, self.q_c)

    @property
    def wires(self):
        return (self.a, self.b, self.c)

    def check(self, a, b, c):
        """게이트 제약이 만족되는지 확인한다."""
        return (
            self.q_l * a + self.q_r * b + self.q_o * c + self.q_m * (a * b) + self.q_c
        ) == FR(0)

    def __repr__(self):
        return (
            f"Gate(q=({', '.join(str(int(q)) for q in self.selectors)}), "
            f"wires={self.wires})"
        )


class Instance:
    """불변 회로 인스턴스.

    속성:
        gates: Gate 튜플
        num_vars: 위트니스 변수 수
        num_inputs: 공개 입력 수
    """

    def __init__(self, gates, num_vars, num_inputs):
        if num_vars < 0 or num_inputs < 0:
            raise ValueError("변수 수는 음수일 수 없습니다")
        total = num_vars + num_inputs
        for i, gate in enumerate(gates):
            for wire in gate.wires:
                if not 0 <= wire < total:
                    raise ValueError(
                        f"게이트 {i}의 배선 {wire}가 변수 범위 [0, {total})를 벗어납니다"
                    )
        self.gates = tuple(gates)
        self.num_vars = num_vars
        self.num_inputs = num_inputs

    def get_num_cons(self):
        return len(self.gates)

    def get_num_vars(self):
        return self.num_vars

    def get_num_inputs(self):
        return self.num_inputs

    def is_sat(self, variables, inputs):
        """모든 게이트가 주어진 할당에서 만족되는지 확인한다."""
        values = list(variables) + list(inputs)
        return all(
            gate.check(values[gate.a], values[gate.b], values[gate.c])
            for gate in self.gates
        )

    def to_bytes(self):
        gates = [
            [to_repr(q) for q in gate.selectors] + list(gate.wires)
            for gate in self.gates
        ]
        return msgpack.packb(
            {
                "version": INSTANCE_VERSION,
                "num_vars": self.num_vars,
                "num_inputs": self.num_inputs,
                "gates": gates,
            },
            use_bin_type=True,
        )

    @classmethod
    def from_bytes(cls, data):
        """MessagePack 바이트열에서 인스턴스를 복원한다.

        Raises:
            ValueError: 인코딩, 구조, 값 범위가 잘못되었을 때
        """
        try:
            d = msgpack.unpackb(data, raw=False)
        except (UnpackException, ValueError, TypeError) as exc:
            raise ValueError(f"MessagePack 디코딩 실패: {exc}") from exc

        if not isinstance(d, dict):
            raise ValueError("회로 인코딩의 최상위 값은 맵이어야 합니다")
        if d.get("version") != INSTANCE_VERSION:
            raise ValueError(f"지원하지 않는 회로 인코딩 버전: {d.get('version')!r}")

        num_vars = _uint(d.get("num_vars"), "num_vars")
        num_inputs = _uint(d.get("num_inputs"), "num_inputs")
        raw_gates = d.get("gates")
        if not isinstance(raw_gates, list):
            raise ValueError("gates는 리스트여야 합니다")

        gates = []
        for i, row in enumerate(raw_gates):
            if not isinstance(row, list) or len(row) != 8:
                raise ValueError(f"게이트 {i}: 원소 8개짜리 리스트가 아닙니다")
            selectors = []
            for q in row[:5]:
                if not isinstance(q, bytes) or len(q) != FR_BYTES:
                    raise ValueError(f"게이트 {i}: 셀렉터는 {FR_BYTES}바이트여야 합니다")
                selectors.append(from_repr(q))
            wires = [_uint(w, f"gates[{i}] 배선") for w in row[5:]]
            gates.append(Gate(*selectors, *wires))

        return cls(gates, num_vars, num_inputs)

    @staticmethod
    def x3_plus_x_plus_5():
        """예제 회로: x³ + x + 5 = y, y는 공개 입력.

        변수:
          v0 = x, v1 = x², v2 = x³, v3 = x³ + x  (위트니스)
          v4 = y                                  (공개 입력)

        게이트:
          0 (mul):   v0 · v0 = v1
          1 (mul):   v1 · v0 = v2
          2 (add):   v2 + v0 = v3
          3 (add+5): v3 + 5  = v4

        x = 3이면 위트니스 [3, 9, 27, 30], 공개 입력 [35].

        Returns:
            tuple: (instance, witness, public_inputs), 값은 FR 리스트
        """
        minus_one = FR(-1)
        gates = [
            Gate(0, 0, minus_one, 1, 0, 0, 0, 1),
            Gate(0, 0, minus_one, 1, 0, 1, 0, 2),
            Gate(1, 1, minus_one, 0, 0, 2, 0, 3),
            Gate(1, 0, minus_one, 0, 5, 3, 3, 4),
        ]
        instance = Instance(gates, num_vars=4, num_inputs=1)

        x = FR(3)
        witness = [x, x * x, x * x * x, x * x * x + x]
        public_inputs = [witness[3] + FR(5)]
        return instance, witness, public_inputs


def _uint(value, name):
    # msgpack은 bool을 int와 구분하지만 파이썬에서는 bool이 int의 서브클래스이다
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{name}은(는) 0 이상의 정수여야 합니다: {value!r}")
    return value
