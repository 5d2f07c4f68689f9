import logging

from .events import proof_request_received
from .serializers import ProofRequestPayloadSerializer, NotificationPayloadInfoSerializer


def receive_notification(store, payload: dict, payload_info: dict):
    """Record proof request delivered with push notification

    :param store: ProofRequestStore
    :param payload: verifier requested attributes and predicates
    :param payload_info: delivery metadata: uid, sender_did, remote_pairwise_did...
    :return: recorded proof request
    :raise rest_framework.exceptions.ValidationError: payload is malformed
    """
    payload_serializer = ProofRequestPayloadSerializer(data=payload)
    payload_serializer.is_valid(raise_exception=True)
    info_serializer = NotificationPayloadInfoSerializer(data=payload_info)
    info_serializer.is_valid(raise_exception=True)
    event = proof_request_received(
        payload_serializer.create(payload_serializer.validated_data),
        info_serializer.create(info_serializer.validated_data)
    )
    logging.info('Proof request "%s" received from %s' % (event['uid'], event['payload_info'].get('sender_did')))
    return store.dispatch(event)
