"""Error taxonomy raised by the data access layer.

Every error carries the HTTP status the API answers with, so routers can let
them propagate to the single handler registered in ``resumehub.main``.
"""


class DataAccessError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or "")
        self.message = str(self)


class UnauthenticatedError(DataAccessError):
    """Authentication required"""

    status_code = 401


class PermissionDeniedError(DataAccessError):
    """Admin privileges required"""

    status_code = 403


class NotFoundError(DataAccessError, LookupError):
    """Not found"""

    status_code = 404


class ConflictError(DataAccessError):
    """Conflicting concurrent write; reload and retry"""

    status_code = 409


class ExpiredError(DataAccessError):
    """This shared resume has expired"""

    status_code = 410


class InvalidInputError(DataAccessError, ValueError):
    """Invalid input"""

    status_code = 422


class StoreUnavailableError(DataAccessError):
    """The data store is unavailable"""

    status_code = 503
