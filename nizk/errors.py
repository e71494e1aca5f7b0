"""
오류 분류
==========

모든 실패는 ProofError의 하위 타입으로 올라온다. 호출자는 ProofError
하나로 잡거나, 필요한 경우 구체 타입으로 구분한다.

  ProofError
  ├── WitnessFormatError (ValueError)
  │   ├── MalformedHeader
  │   ├── UnsupportedVersion
  │   ├── InvalidSectionCount
  │   ├── InvalidSectionType
  │   ├── InvalidSectionSize (= SectionSizeMismatch)
  │   ├── InvalidFieldSize
  │   ├── FieldModulusMismatch
  │   ├── TruncatedWitness
  │   └── NonCanonicalFieldElement
  ├── TruncatedPublicInput (ValueError)
  ├── CircuitDeserializationError (ValueError)
  ├── ProofDeserializationError (ValueError)
  └── BackendInvocationError (RuntimeError)
"""


class ProofError(Exception):
    """이 패키지가 올리는 모든 오류의 기반 클래스."""


class WitnessFormatError(ProofError, ValueError):
    """wtns 바이트열이 형식에 맞지 않는다."""


class _Mismatch:
    # 기대값/실제값을 함께 보관하는 오류용 믹스인
    template = "{expected} 기대, {actual} 받음"

    def __init__(self, expected, actual, message=None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or self.template.format(expected=expected, actual=actual))


class MalformedHeader(_Mismatch, WitnessFormatError):
    template = "매직 바이트 {expected!r} 기대, {actual!r} 받음"


class UnsupportedVersion(_Mismatch, WitnessFormatError):
    template = "지원 버전은 {expected} 이하, 받은 버전 {actual}"


class InvalidSectionCount(_Mismatch, WitnessFormatError):
    template = "섹션 수 {expected} 기대, {actual} 받음"


class InvalidSectionType(_Mismatch, WitnessFormatError):
    template = "섹션 타입 {expected} 기대, {actual} 받음"


class InvalidSectionSize(_Mismatch, WitnessFormatError):
    template = "섹션 크기 {expected} 기대, {actual} 받음"


SectionSizeMismatch = InvalidSectionSize


class InvalidFieldSize(_Mismatch, WitnessFormatError):
    template = "필드 크기 {expected}바이트 기대, {actual} 받음"


class FieldModulusMismatch(_Mismatch, WitnessFormatError):
    template = "필드 모듈러스 {expected:#x} 기대, {actual:#x} 받음"


class TruncatedWitness(_Mismatch, WitnessFormatError):
    template = "{expected}바이트를 읽어야 하는데 {actual}바이트만 남음"


class NonCanonicalFieldElement(WitnessFormatError):
    """원소 값이 필드 모듈러스 이상이다."""

    def __init__(self, index, value):
        self.index = index
        self.value = value
        super().__init__(f"원소 {index}가 정규 표현이 아닙니다: {value:#x}")


class TruncatedPublicInput(_Mismatch, ProofError, ValueError):
    template = "공개 입력 {expected}바이트 필요, {actual}바이트 받음"


class CircuitDeserializationError(ProofError, ValueError):
    """회로 바이트열을 인스턴스로 복원할 수 없다."""


class ProofDeserializationError(ProofError, ValueError):
    """증명 바이트열을 증명 객체로 복원할 수 없다."""


class BackendInvocationError(ProofError, RuntimeError):
    """백엔드가 증명 생성/검증 중에 실패했다."""
