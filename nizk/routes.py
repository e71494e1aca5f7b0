"""
NIZK Flask Blueprint
=====================

두 진입점만 HTTP로 노출한다. 모든 바이트 필드는 hex 문자열.

  POST /nizk/prove   {"circuit", "witness", "public_inputs"} → {"proof"}
  POST /nizk/verify  {"circuit", "proof", "public_inputs"}   → {"verified"}

오류 응답:
  400 {"error": "BadRequest", "message"}        JSON/hex 형식 오류
  400 {"error": <오류 클래스 이름>, "message"}  구조적 오류
  500 {"error": "BackendInvocationError", ...}  백엔드 실패
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from nizk import orchestrator
from nizk.errors import BackendInvocationError, ProofError

logger = logging.getLogger(__name__)

nizk_bp = Blueprint('nizk', __name__, url_prefix='/nizk')


class BadRequest(Exception):
    pass


def _hex_fields(*names):
    """요청 JSON에서 hex 필드를 읽어 bytes로 돌려준다."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BadRequest("JSON 객체가 필요합니다")
    out = []
    for name in names:
        value = body.get(name)
        if not isinstance(value, str):
            raise BadRequest(f"'{name}' 필드(hex 문자열)가 필요합니다")
        try:
            out.append(bytes.fromhex(value))
        except ValueError:
            raise BadRequest(f"'{name}' 필드가 hex가 아닙니다")
    return out


def _config():
    return current_app.extensions["nizk.config"]


@nizk_bp.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify(error="BadRequest", message=str(e)), 400


@nizk_bp.errorhandler(ProofError)
def handle_proof_error(e):
    status = 500 if isinstance(e, BackendInvocationError) else 400
    logger.info("요청 실패 (%d): %s: %s", status, type(e).__name__, e)
    return jsonify(error=type(e).__name__, message=str(e)), status


@nizk_bp.route("/prove", methods=["POST"])
def prove():
    """증명을 생성한다."""
    circuit, witness, public_inputs = _hex_fields("circuit", "witness", "public_inputs")
    proof = orchestrator.prove(circuit, witness, public_inputs, config=_config())
    return jsonify(proof=proof.hex())


@nizk_bp.route("/verify", methods=["POST"])
def verify():
    """증명을 검증한다."""
    circuit, proof, public_inputs = _hex_fields("circuit", "proof", "public_inputs")
    verified = orchestrator.verify(circuit, proof, public_inputs, config=_config())
    return jsonify(verified=verified)
