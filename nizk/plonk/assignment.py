"""
변수 할당 (Assignment)
=======================

고정 폭(32바이트) 필드 원소 인코딩의 순서 있는 목록으로부터 만든 불변 할당.
"""

from nizk.plonk.field import FR_BYTES, from_repr


class Assignment:
    """FR 원소의 불변 시퀀스.

    Args:
        encodings: 각각 32바이트 little-endian 정규 인코딩인 바이트열들

    Raises:
        ValueError: 길이가 32바이트가 아니거나 정규 표현이 아닌 원소가 있을 때
    """

    def __init__(self, encodings):
        values = []
        for i, enc in enumerate(encodings):
            if len(enc) != FR_BYTES:
                raise ValueError(f"원소 {i}: {FR_BYTES}바이트가 필요합니다 (받은 길이 {len(enc)})")
            try:
                values.append(from_repr(bytes(enc)))
            except ValueError as exc:
                raise ValueError(f"원소 {i}: {exc}") from exc
        self._values = tuple(values)

    @property
    def values(self):
        return self._values

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __eq__(self, other):
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return f"Assignment({[int(v) for v in self._values]})"
