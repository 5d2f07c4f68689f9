from typing import List

from core.base import AgencyTransport
from core.wallet import WalletConnection
from .store import ProofRequestStore
from .queries import WalletConnectionStore, PreparedProofs
from .orchestrator import AcceptOrchestrator
from .notifications import receive_notification
from .events import proof_request_shown, accept_proof_request, ignore_proof_request, reject_proof_request, \
    proof_request_auto_fill


class ProofRequestAgent:

    """Proof requests of single wallet: UI commands in, proofs to agency out"""

    def __init__(self, wallet: WalletConnection, transport: AgencyTransport=None, strict: bool=None):
        self.store = ProofRequestStore(strict=strict)
        self.proofs = PreparedProofs()
        self.connections = WalletConnectionStore(wallet, self.store)
        self.orchestrator = AcceptOrchestrator(
            store=self.store,
            connections=self.connections,
            proofs=self.proofs,
            transport=transport or AgencyTransport()
        )

    def receive(self, payload: dict, payload_info: dict):
        return receive_notification(self.store, payload, payload_info)

    def shown(self, uid: str):
        return self.store.dispatch(proof_request_shown(uid))

    def accept(self, uid: str, proof: dict=None):
        """Accept request, proof may be prepared at the same time

        Submission runs on the running event loop. Without one it is
        reported with SEND_PROOF_FAIL at once.
        """
        if proof is not None:
            self.proofs.put(uid, proof)
        return self.store.dispatch(accept_proof_request(uid))

    def ignore(self, uid: str):
        return self.store.dispatch(ignore_proof_request(uid))

    def reject(self, uid: str):
        return self.store.dispatch(reject_proof_request(uid))

    def auto_fill(self, uid: str, requested_attributes: List[dict]):
        return self.store.dispatch(proof_request_auto_fill(uid, requested_attributes))

    def get(self, uid: str):
        return self.store.get(uid)

    async def close(self):
        await self.orchestrator.join()
        self.orchestrator.stop()
