import json
import uuid
import logging

import aiohttp
from django.conf import settings


class AgencyTransportError(Exception):

    def __init__(self, code: str=None, message: str=None):
        self.code = code
        self.message = message

    def to_json(self):
        return dict(code=self.code, message=self.message)

    def __str__(self):
        return "%s: %s" % (self.code, self.message)


class SendProofError(AgencyTransportError):
    """Agency rejected proof"""
    pass


class AgencyConnectionError(AgencyTransportError):
    """Agency is unreachable"""
    pass


class AgencyTransport:

    """Delivers messages to verifier through agency"""

    FAMILY_NAME = "credential_exchange"
    VERSION = "1.0"
    FAMILY = "did:sov:BzCbsNYhMrjHiqZDTUASHg;spec/" + FAMILY_NAME + "/" + VERSION + "/"

    PROOF = FAMILY + "proof"

    DEFAULT_CONTENT_TYPE = 'application/json'
    MESSAGE_PATH = '/agency/msg'
    SUCCESS_STATUSES = (200, 202)

    def __init__(self, timeout: float=None):
        if timeout is None:
            timeout = settings.PROOF_REQUESTS.get('SEND_PROOF_TIMEOUT', None)
        self.__timeout = aiohttp.ClientTimeout(total=timeout)

    @classmethod
    def build_proof_message(cls, proof: dict, user_pairwise_did: str, response_msg_id: str) -> dict:
        return {
            '@type': cls.PROOF,
            '@id': uuid.uuid4().hex,
            'to': user_pairwise_did,
            'proof': proof,
            '~thread': {
                'thid': response_msg_id,
                'sender_order': 0
            }
        }

    async def send_proof(self, proof: dict, agency_url: str, user_pairwise_did: str, response_msg_id: str):
        """
        :param proof: prepared proof with remote_did and user_pairwise_did
        :param agency_url: agency endpoint base address
        :param user_pairwise_did: my DID for pairwise with verifier
        :param response_msg_id: uid of proof request the proof answers to
        :return: decoded agency response
        """
        address = agency_url.rstrip('/') + self.MESSAGE_PATH
        message = self.build_proof_message(proof, user_pairwise_did, response_msg_id)
        headers = {
            'content-type': self.DEFAULT_CONTENT_TYPE
        }
        try:
            async with aiohttp.ClientSession(timeout=self.__timeout) as session:
                async with session.post(address, data=json.dumps(message), headers=headers) as resp:
                    body = await resp.text()
                    if resp.status not in self.SUCCESS_STATUSES:
                        logging.error('Sending proof to agency with error. Resp status: %d' % resp.status)
                        logging.error(body)
                        raise SendProofError(code=str(resp.status), message=body)
        except aiohttp.ClientError as e:
            logging.error('Agency %s is unreachable: %s' % (address, str(e)))
            raise AgencyConnectionError(code='AGENCY-UNREACHABLE', message=str(e)) from e
        if not body:
            return {}
        try:
            return json.loads(body)
        except ValueError:
            return dict(body=body)
