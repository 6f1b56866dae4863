class ApiError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class ConflictError(ApiError):
    status_code = 400
    message = 'Conflict'


class DuplicateAccount(ConflictError):
    message = 'Account already exists'


class AlreadyActivated(ConflictError):
    message = 'Account is already activated'


class AlreadyClaimed(ConflictError):
    message = 'Already claimed today'


class InvitationLimitExceeded(ConflictError):
    message = 'Invitation code usage limit exceeded'


class InvitationAlreadyUsed(ConflictError):
    message = 'You have already used this invitation code'


class InsufficientBalance(ApiError):
    status_code = 400
    message = 'Insufficient balance'


class ExternalCallFailure(ApiError):
    """Relayer / chain errors. The message is what the client sees, never the raw chain error."""
    status_code = 500
    message = 'Relayer transaction failed'


class RelayerTimeout(ExternalCallFailure):
    status_code = 504
    message = 'Relayer transaction timed out'


class RelayerUnavailable(ExternalCallFailure):
    status_code = 503
    message = 'Relayer is not configured'


class PersistenceFailure(ApiError):
    status_code = 500
    message = 'Database error'
