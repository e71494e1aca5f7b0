"""
wtns 위트니스 파일 리더
========================

circom이 내보내는 바이너리 위트니스 형식을 필드 원소 리스트로 읽는다.
모든 정수는 little-endian이며, 앞에서부터 순서대로 한 번만 읽는다.

**바이트 레이아웃**:
  ┌────────────────────────────────────────────────────┐
  │  magic "wtns" (4) │ version u32 │ n_sections u32    │
  ├────────────────────────────────────────────────────┤
  │  섹션 1: type u32 = 1 │ size u64 = 40               │
  │          field_size u32 = 32 │ modulus (32)          │
  │          witness_len u32                             │
  ├────────────────────────────────────────────────────┤
  │  섹션 2: type u32 = 2 │ size u64 = witness_len·32   │
  │          원소 witness_len개 (각 32바이트 LE)         │
  └────────────────────────────────────────────────────┘

모듈러스는 기본적으로 읽고 버린다 (WitnessFormat.check_modulus로 검사 가능).
원소가 모듈러스 이상이면 NonCanonicalFieldElement.

사용 예시:
    >>> values = parse_witness(open("witness.wtns", "rb").read())
    >>> values[0]
    1
"""

import io
import struct

from nizk.config import DEFAULT_WITNESS_FORMAT
from nizk.errors import (
    MalformedHeader,
    UnsupportedVersion,
    InvalidSectionCount,
    InvalidSectionType,
    InvalidSectionSize,
    InvalidFieldSize,
    FieldModulusMismatch,
    TruncatedWitness,
    NonCanonicalFieldElement,
)


def read_exact(reader, size):
    """정확히 size 바이트를 읽는다. 모자라면 TruncatedWitness."""
    data = reader.read(size)
    if len(data) != size:
        raise TruncatedWitness(size, len(data))
    return data


def read_u32_le(reader):
    return struct.unpack("<I", read_exact(reader, 4))[0]


def read_u64_le(reader):
    return struct.unpack("<Q", read_exact(reader, 8))[0]


def read_field(reader, fmt=DEFAULT_WITNESS_FORMAT, index=0):
    """필드 원소 하나 (fmt.field_size 바이트, little-endian)를 읽는다.

    Raises:
        TruncatedWitness: 바이트가 모자랄 때
        NonCanonicalFieldElement: 값이 모듈러스 이상일 때
    """
    value = int.from_bytes(read_exact(reader, fmt.field_size), "little")
    if value >= fmt.modulus:
        raise NonCanonicalFieldElement(index, value)
    return fmt.field(value)


def load_witness(reader, fmt=DEFAULT_WITNESS_FORMAT):
    """바이너리 스트림에서 위트니스를 읽는다.

    Args:
        reader: read(n)을 지원하는 바이너리 스트림
        fmt: WitnessFormat

    Returns:
        list: fmt.field 원소 리스트 (파일에 적힌 순서)

    Raises:
        WitnessFormatError: 형식 위반 (구체 타입은 nizk.errors 참고)
    """
    magic = read_exact(reader, len(fmt.magic))
    if magic != fmt.magic:
        raise MalformedHeader(fmt.magic, magic)

    version = read_u32_le(reader)
    if version > fmt.max_version:
        raise UnsupportedVersion(fmt.max_version, version)

    num_sections = read_u32_le(reader)
    if num_sections != fmt.num_sections:
        raise InvalidSectionCount(fmt.num_sections, num_sections)

    # ── 섹션 1: 헤더 ──
    sec_type = read_u32_le(reader)
    if sec_type != fmt.header_section:
        raise InvalidSectionType(fmt.header_section, sec_type)
    sec_size = read_u64_le(reader)
    if sec_size != fmt.header_size:
        raise InvalidSectionSize(fmt.header_size, sec_size)

    field_size = read_u32_le(reader)
    if field_size != fmt.field_size:
        raise InvalidFieldSize(fmt.field_size, field_size)
    modulus = int.from_bytes(read_exact(reader, field_size), "little")
    if fmt.check_modulus and modulus != fmt.modulus:
        raise FieldModulusMismatch(fmt.modulus, modulus)
    witness_len = read_u32_le(reader)

    # ── 섹션 2: 원소 ──
    sec_type = read_u32_le(reader)
    if sec_type != fmt.data_section:
        raise InvalidSectionType(fmt.data_section, sec_type)
    sec_size = read_u64_le(reader)
    if sec_size != witness_len * field_size:
        raise InvalidSectionSize(witness_len * field_size, sec_size)

    return [read_field(reader, fmt, i) for i in range(witness_len)]


def parse_witness(data, fmt=DEFAULT_WITNESS_FORMAT):
    """메모리 위의 wtns 바이트열을 읽는다. 남는 뒷부분 바이트는 무시한다."""
    return load_witness(io.BytesIO(data), fmt)


def dump_witness(values, writer, fmt=DEFAULT_WITNESS_FORMAT, version=2):
    """values를 wtns 형식으로 writer에 쓴다. 모듈러스는 fmt.field의 것."""
    values = [int(v) for v in values]
    writer.write(fmt.magic)
    writer.write(struct.pack("<II", version, fmt.num_sections))
    writer.write(struct.pack("<IQ", fmt.header_section, fmt.header_size))
    writer.write(struct.pack("<I", fmt.field_size))
    writer.write(fmt.modulus.to_bytes(fmt.field_size, "little"))
    writer.write(struct.pack("<I", len(values)))
    writer.write(struct.pack("<IQ", fmt.data_section, len(values) * fmt.field_size))
    for value in values:
        writer.write(value.to_bytes(fmt.field_size, "little"))


def encode_witness(values, fmt=DEFAULT_WITNESS_FORMAT, version=2):
    buf = io.BytesIO()
    dump_witness(values, buf, fmt, version)
    return buf.getvalue()
