class ServiceError(Exception):
    """A failed call to the auth, record or file service.

    The message is meant to be shown to the user as is.
    """

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self):
        return self.message


class AuthError(ServiceError):
    status_code = 401


class PolicyError(ServiceError):
    """A write rejected by a table's row-level policy."""

    status_code = 403
