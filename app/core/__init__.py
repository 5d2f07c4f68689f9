from .base import AgencyTransport, AgencyTransportError, SendProofError, AgencyConnectionError


__all__ = [
    'AgencyTransport', 'AgencyTransportError', 'SendProofError', 'AgencyConnectionError'
]
