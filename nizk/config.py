"""
설정 값
========

파서와 오케스트레이터가 쓰는 상수를 코드에 흩어 두지 않고 두 개의
dataclass로 모은다. 기본값은 circom wtns 형식과 PLONK 백엔드 기본 레이블.

  WitnessFormat   매직, 섹션 태그, 필드 폭, 최대 버전, 모듈러스 검사 여부
  ProverConfig    트랜스크립트 레이블 + WitnessFormat

환경 변수 (ProverConfig.from_env):
  NIZK_TRANSCRIPT_LABEL   트랜스크립트 도메인 레이블 (UTF-8)
  NIZK_CHECK_MODULUS      "1"/"true"/"yes"/"on"이면 wtns 모듈러스를 검사
"""

import os
from dataclasses import dataclass, field, replace

from nizk.plonk.field import FR

DEFAULT_TRANSCRIPT_LABEL = b"nizk_plonk"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class WitnessFormat:
    magic: bytes = b"wtns"
    max_version: int = 2
    num_sections: int = 2
    header_section: int = 1
    data_section: int = 2
    field_size: int = 32
    check_modulus: bool = False
    field: type = FR

    @property
    def header_size(self):
        """헤더 섹션 크기: field_size(u32) + 모듈러스 + witness_len(u32)."""
        return 4 + self.field_size + 4

    @property
    def modulus(self):
        return self.field.field_modulus


DEFAULT_WITNESS_FORMAT = WitnessFormat()


@dataclass(frozen=True)
class ProverConfig:
    transcript_label: bytes = DEFAULT_TRANSCRIPT_LABEL
    witness_format: WitnessFormat = field(default_factory=WitnessFormat)

    def __post_init__(self):
        if isinstance(self.transcript_label, str):
            object.__setattr__(self, "transcript_label", self.transcript_label.encode())

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        config = cls()
        label = environ.get("NIZK_TRANSCRIPT_LABEL")
        if label:
            config = replace(config, transcript_label=label.encode())
        check = environ.get("NIZK_CHECK_MODULUS")
        if check is not None:
            fmt = replace(config.witness_format, check_modulus=check.strip().lower() in _TRUTHY)
            config = replace(config, witness_format=fmt)
        return config

    @classmethod
    def from_mapping(cls, mapping):
        """Flask app.config처럼 접두사가 떨어진 키 매핑에서 만든다."""
        config = cls()
        label = mapping.get("TRANSCRIPT_LABEL")
        if label:
            config = replace(config, transcript_label=label if isinstance(label, bytes) else str(label))
        check = mapping.get("CHECK_MODULUS")
        if check is not None:
            if isinstance(check, str):
                check = check.strip().lower() in _TRUTHY
            fmt = replace(config.witness_format, check_modulus=bool(check))
            config = replace(config, witness_format=fmt)
        return config


DEFAULT_CONFIG = ProverConfig()
