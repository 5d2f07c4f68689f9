from enum import Enum


class ErrorKind(Enum):
    IDENTITY_NOT_FOUND = 'identity_not_found'
    SUBMISSION_ERROR = 'submission_error'


class BaseProofRequestException(Exception):
    error_code = None
    default_message = None

    def __init__(self, message: str=None):
        self.message = message or self.default_message

    @property
    def code(self):
        return self.error_code

    def to_json(self):
        return dict(code=self.code, message=self.message)

    def __str__(self):
        return "%s: %s" % (self.error_code, self.message)


class PairwiseConnectionNotFound(BaseProofRequestException):
    error_code = 'OCS-002'
    default_message = 'No pairwise connection found'


class ProofRequestNotFound(BaseProofRequestException):
    error_code = 'OCS-404'
    default_message = 'Proof request not found'


class PreparedProofNotFound(BaseProofRequestException):
    error_code = 'OCS-003'
    default_message = 'Proof was not prepared'
