import logging
from types import MappingProxyType

from django.conf import settings

from .statuses import ProofRequestStatus, ProofStatus, TERMINAL_STATUSES
from .events import ProofRequestEvents
from .errors import ErrorKind, ProofRequestNotFound


STATUS_TRANSITIONS = {
    ProofRequestEvents.SHOWN: ProofRequestStatus.SHOWN,
    ProofRequestEvents.ACCEPTED: ProofRequestStatus.ACCEPTED,
    ProofRequestEvents.IGNORED: ProofRequestStatus.IGNORED,
    ProofRequestEvents.REJECTED: ProofRequestStatus.REJECTED,
}

PROOF_STATUS_TRANSITIONS = {
    ProofRequestEvents.SEND_PROOF: ProofStatus.SENDING,
    ProofRequestEvents.SEND_PROOF_SUCCESS: ProofStatus.SEND_SUCCESS,
    ProofRequestEvents.SEND_PROOF_FAIL: ProofStatus.SEND_FAIL,
}


def initial_state() -> dict:
    return {}


def reduce(state: dict, event: dict) -> dict:
    """Pure transition function: (state, event) -> state

    Returns new mapping with at most one record replaced. Same state object
    is returned for every event that does not apply.
    """
    type_ = event.get('type') if isinstance(event, dict) else None
    uid = event.get('uid') if type_ else None
    if type_ not in ProofRequestEvents.ALL or uid is None:
        return state

    record = state.get(uid)
    if type_ == ProofRequestEvents.RECEIVED:
        if record is not None and record.get('status') in TERMINAL_STATUSES:
            return state
        updated = dict(event.get('payload') or {})
        updated.update(event.get('payload_info') or {})
        updated['status'] = ProofRequestStatus.RECEIVED
        updated['proof_status'] = ProofStatus.NONE
    elif record is None:
        return state
    elif type_ in STATUS_TRANSITIONS:
        if record.get('status') in TERMINAL_STATUSES:
            return state
        updated = dict(record, status=STATUS_TRANSITIONS[type_])
    elif type_ == ProofRequestEvents.AUTO_FILL:
        data = dict(record.get('data') or {})
        data['requested_attributes'] = list(event.get('requested_attributes') or [])
        updated = dict(record, data=data)
    else:
        updated = _apply_proof_status(record, event)
        if updated is None:
            return state

    new_state = dict(state)
    new_state[uid] = updated
    return new_state


def _apply_proof_status(record: dict, event: dict):
    if event.get('kind') is ErrorKind.IDENTITY_NOT_FOUND:
        # attempt never entered SENDING, so it neither fails sending
        # nor outdates attempt which is still in flight
        return None
    attempt = event.get('attempt')
    last_attempt = record.get('proof_attempt')
    if attempt is not None and last_attempt is not None and attempt < last_attempt:
        # result of outdated submission attempt
        return None
    updated = dict(record)
    if attempt is not None:
        updated['proof_attempt'] = attempt
    updated['proof_status'] = PROOF_STATUS_TRANSITIONS[event['type']]
    return updated


class ProofRequestStore:

    """Owns proof request records, keyed by uid.

    Records are changed only by dispatch(), listeners are notified
    after every dispatched event with (event, record).
    """

    def __init__(self, strict: bool=None):
        if strict is None:
            strict = getattr(settings, 'PROOF_REQUESTS', {}).get('STRICT_DISPATCH', False)
        self.__strict = strict
        self.__state = initial_state()
        self.__listeners = []

    @property
    def state(self):
        """Read-only view, records change through dispatch() only"""
        return MappingProxyType(self.__state)

    @property
    def strict(self):
        return self.__strict

    def get(self, uid: str):
        return self.__state.get(uid, None)

    def subscribe(self, listener):
        if listener not in self.__listeners:
            self.__listeners.append(listener)

    def unsubscribe(self, listener):
        if listener in self.__listeners:
            self.__listeners.remove(listener)

    def dispatch(self, event: dict):
        uid = event.get('uid') if isinstance(event, dict) else None
        type_ = event.get('type') if isinstance(event, dict) else None
        if type_ not in ProofRequestEvents.ALL:
            logging.debug('Ignore unknown event: %s' % repr(event))
            return None
        if type_ != ProofRequestEvents.RECEIVED and uid not in self.__state:
            if self.__strict:
                raise ProofRequestNotFound('Proof request "%s" not found' % uid)
            logging.warning('Event "%s" for unknown proof request "%s" ignored' % (type_, uid))
            return None
        self.__state = reduce(self.__state, event)
        record = self.__state.get(uid)
        for listener in list(self.__listeners):
            listener(event, record)
        return record

    def reset(self):
        self.__state = initial_state()
