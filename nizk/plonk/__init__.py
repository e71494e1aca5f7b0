"""
PLONK 백엔드
=============

BN254 스칼라 필드 위의 PLONK + KZG. 곡선/페어링 연산은 py_ecc.bn128을 쓴다.

  field        FR, G1/G2, 단위근
  polynomial   계수 다항식, NTT, 공개 입력 다항식
  kzg          커밋 / 열기 증명
  transcript   Fiat-Shamir
  gens         회로 차원에서 유도한 생성자
  instance     게이트 목록 (msgpack 직렬화)
  assignment   32바이트 인코딩 → FR 할당
  preprocessor 셀렉터·순열 다항식
  prover       5-라운드 증명 생성
  verifier     페어링 검증
  proof        800바이트 고정 폭 증명
"""
