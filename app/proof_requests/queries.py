import logging
from abc import ABC, abstractmethod

from django.conf import settings

from core.wallet import WalletConnection, WalletItemNotFound
from .errors import PreparedProofNotFound


def get_agency_url() -> str:
    return settings.PROOF_REQUESTS['AGENCY_URL']


class ConnectionStore(ABC):

    @abstractmethod
    async def get_remote_did(self, uid: str) -> str:
        """
        :param uid: proof request uid
        :return: pairwise DID of connection the request was delivered from
        """
        pass

    @abstractmethod
    async def get_local_pairwise_did(self, remote_did: str):
        """
        :param remote_did: their DID
        :return: my DID of the pairwise or None
        """
        pass


class WalletConnectionStore(ConnectionStore):

    """Pairwise identities kept in Indy wallet"""

    def __init__(self, wallet: WalletConnection, store):
        self.__wallet = wallet
        self.__store = store

    async def get_remote_did(self, uid: str) -> str:
        record = self.__store.get(uid) or {}
        return record.get('remote_pairwise_did', None)

    async def get_local_pairwise_did(self, remote_did: str):
        if not remote_did:
            return None
        try:
            pairwise = await self.__wallet.get_pairwise(remote_did)
        except WalletItemNotFound:
            logging.info('Pairwise for "%s" not found in wallet "%s"' % (remote_did, self.__wallet.agent_name))
            return None
        return pairwise.get('my_did', None)


class PreparedProofs:

    """Proofs assembled upstream, keyed by proof request uid"""

    def __init__(self):
        self.__proofs = {}

    def put(self, uid: str, proof: dict):
        self.__proofs[uid] = proof

    def get_proof(self, uid: str) -> dict:
        proof = self.__proofs.get(uid, None)
        if proof is None:
            raise PreparedProofNotFound('Proof for request "%s" was not prepared' % uid)
        return proof
