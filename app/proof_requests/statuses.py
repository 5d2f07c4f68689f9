from enum import IntEnum


class ProofRequestStatus(IntEnum):
    """Presentation lifecycle of incoming proof request"""

    # Notification delivered, nothing shown yet
    RECEIVED = 0
    # Request was rendered to user
    SHOWN = 1
    # User agreed to present proof
    ACCEPTED = 2

    # --- Terminal ----
    IGNORED = 3
    REJECTED = 4


class ProofStatus(IntEnum):
    """Submission lifecycle, independent from ProofRequestStatus"""
    NONE = 0
    SENDING = 1
    SEND_SUCCESS = 2
    SEND_FAIL = 3


TERMINAL_STATUSES = (ProofRequestStatus.IGNORED, ProofRequestStatus.REJECTED)
