from typing import List

from .errors import ErrorKind


class ProofRequestEvents:
    """Events recognized by proof request store"""

    FAMILY_NAME = "proof_request"
    VERSION = "1.0"
    FAMILY = FAMILY_NAME + "/" + VERSION + "/"

    RECEIVED = FAMILY + "received"
    SHOWN = FAMILY + "shown"
    ACCEPTED = FAMILY + "accepted"
    IGNORED = FAMILY + "ignored"
    REJECTED = FAMILY + "rejected"
    AUTO_FILL = FAMILY + "auto_fill"
    SEND_PROOF = FAMILY + "send_proof"
    SEND_PROOF_SUCCESS = FAMILY + "send_proof_success"
    SEND_PROOF_FAIL = FAMILY + "send_proof_fail"

    ALL = (
        RECEIVED, SHOWN, ACCEPTED, IGNORED, REJECTED, AUTO_FILL,
        SEND_PROOF, SEND_PROOF_SUCCESS, SEND_PROOF_FAIL
    )


def proof_request_received(payload: dict, payload_info: dict) -> dict:
    return {
        'type': ProofRequestEvents.RECEIVED,
        'uid': payload_info['uid'],
        'payload': payload,
        'payload_info': payload_info
    }


def proof_request_shown(uid: str) -> dict:
    return {'type': ProofRequestEvents.SHOWN, 'uid': uid}


def accept_proof_request(uid: str) -> dict:
    return {'type': ProofRequestEvents.ACCEPTED, 'uid': uid}


def ignore_proof_request(uid: str) -> dict:
    return {'type': ProofRequestEvents.IGNORED, 'uid': uid}


def reject_proof_request(uid: str) -> dict:
    return {'type': ProofRequestEvents.REJECTED, 'uid': uid}


def proof_request_auto_fill(uid: str, requested_attributes: List[dict]) -> dict:
    return {
        'type': ProofRequestEvents.AUTO_FILL,
        'uid': uid,
        'requested_attributes': requested_attributes
    }


def send_proof(uid: str, attempt: int=None) -> dict:
    return {'type': ProofRequestEvents.SEND_PROOF, 'uid': uid, 'attempt': attempt}


def send_proof_success(uid: str, attempt: int=None) -> dict:
    return {'type': ProofRequestEvents.SEND_PROOF_SUCCESS, 'uid': uid, 'attempt': attempt}


def send_proof_fail(uid: str, error, kind: ErrorKind=None, attempt: int=None) -> dict:
    """
    :param error: caught exception or structured error with code/message
    :param kind: which orchestration stage produced the error
    """
    return {
        'type': ProofRequestEvents.SEND_PROOF_FAIL,
        'uid': uid,
        'error': error,
        'kind': kind,
        'attempt': attempt
    }


def error_to_json(error) -> dict:
    """Structured {code, message} view of error carried by SEND_PROOF_FAIL"""
    if isinstance(error, dict):
        return dict(code=error.get('code'), message=error.get('message'))
    if hasattr(error, 'to_json'):
        return error.to_json()
    return dict(
        code=getattr(error, 'code', None) or error.__class__.__name__,
        message=getattr(error, 'message', None) or str(error)
    )
