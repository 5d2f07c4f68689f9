import asyncio
import logging

from .statuses import ProofRequestStatus
from .events import ProofRequestEvents, send_proof, send_proof_success, send_proof_fail, error_to_json
from .errors import ErrorKind, PairwiseConnectionNotFound, ProofRequestNotFound
from .queries import get_agency_url


class StageResult:

    """Outcome of single orchestration stage: value or error tagged with its kind"""

    def __init__(self, value=None, error=None, kind: ErrorKind=None):
        self.value = value
        self.error = error
        self.kind = kind

    @property
    def ok(self):
        return self.kind is None

    @classmethod
    def success(cls, value=None):
        return cls(value=value)

    @classmethod
    def failure(cls, error, kind: ErrorKind):
        return cls(error=error, kind=kind)

    def __repr__(self):
        if self.ok:
            return 'StageResult(value=%r)' % (self.value,)
        return 'StageResult(kind=%s, error=%r)' % (self.kind.name, self.error)


class AcceptOrchestrator:

    """Submits proof every time proof request is accepted.

    Each ACCEPTED event spawns own task on the running event loop, running
    tasks are never cancelled.
    Every task carries attempt number, so the store is able to drop
    results of outdated attempts for the same request.
    """

    def __init__(self, store, connections, proofs, transport, agency_url=None):
        """
        :param store: ProofRequestStore
        :param connections: ConnectionStore
        :param proofs: prepared proofs source with get_proof(uid)
        :param transport: remote submission service with send_proof(...)
        :param agency_url: callable returning agency endpoint
        """
        self.__store = store
        self.__connections = connections
        self.__proofs = proofs
        self.__transport = transport
        self.__agency_url = agency_url or get_agency_url
        self.__attempts = {}
        self.__tasks = set()
        self.__store.subscribe(self.on_event)

    def on_event(self, event: dict, record: dict):
        if event['type'] != ProofRequestEvents.ACCEPTED:
            return
        uid = event['uid']
        if record is None or record.get('status') != ProofRequestStatus.ACCEPTED:
            logging.info('Proof request "%s" can not be accepted anymore' % uid)
            return
        attempt = self.__attempts.get(uid, 0) + 1
        self.__attempts[uid] = attempt
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            # submission can not be started outside of event loop
            self.__fail(uid, StageResult.failure(e, ErrorKind.SUBMISSION_ERROR), attempt)
            return
        task = loop.create_task(self.proof_accepted(uid, attempt))
        self.__tasks.add(task)
        task.add_done_callback(self.__tasks.discard)

    def stop(self):
        self.__store.unsubscribe(self.on_event)

    @property
    def pending(self):
        return len(self.__tasks)

    async def join(self):
        """Wait for all in-flight submissions"""
        while self.__tasks:
            await asyncio.gather(*list(self.__tasks))

    async def proof_accepted(self, uid: str, attempt: int=None) -> StageResult:
        identity = await self.resolve_identity(uid)
        if not identity.ok:
            self.__fail(uid, identity, attempt)
            return identity
        remote_did, user_pairwise_did = identity.value

        # we are generating and sending proof since now
        self.__emit(send_proof(uid, attempt))
        submission = await self.submit(uid, remote_did, user_pairwise_did)
        if submission.ok:
            logging.info('Proof for request "%s" was sent' % uid)
            self.__emit(send_proof_success(uid, attempt))
        else:
            self.__fail(uid, submission, attempt)
        return submission

    async def resolve_identity(self, uid: str) -> StageResult:
        try:
            remote_did = await self.__connections.get_remote_did(uid)
            user_pairwise_did = await self.__connections.get_local_pairwise_did(remote_did)
        except Exception as e:
            logging.exception('Pairwise lookup for proof request "%s" terminated with exception' % uid)
            return StageResult.failure(e, ErrorKind.IDENTITY_NOT_FOUND)
        if not user_pairwise_did:
            return StageResult.failure(PairwiseConnectionNotFound(), ErrorKind.IDENTITY_NOT_FOUND)
        return StageResult.success((remote_did, user_pairwise_did))

    async def submit(self, uid: str, remote_did: str, user_pairwise_did: str) -> StageResult:
        try:
            agency_url = self.__agency_url()
            proof = dict(self.__proofs.get_proof(uid))
            proof['remote_did'] = remote_did
            proof['user_pairwise_did'] = user_pairwise_did
            response = await self.__transport.send_proof(
                proof=proof,
                agency_url=agency_url,
                user_pairwise_did=user_pairwise_did,
                response_msg_id=uid
            )
        except Exception as e:
            return StageResult.failure(e, ErrorKind.SUBMISSION_ERROR)
        return StageResult.success(response)

    def __fail(self, uid: str, result: StageResult, attempt: int=None):
        details = error_to_json(result.error)
        logging.error(
            'Sending proof for request "%s" failed [%s] %s: %s' %
            (uid, result.kind.value, details['code'], details['message'])
        )
        self.__emit(send_proof_fail(uid, result.error, result.kind, attempt))

    def __emit(self, event: dict):
        try:
            self.__store.dispatch(event)
        except ProofRequestNotFound as e:
            logging.warning(str(e))
