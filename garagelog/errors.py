"""Error kinds raised by repositories, the cascade orchestrator and auth."""


class GarageLogError(Exception):
    """Base class for every error the core raises."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(GarageLogError):
    """Caller-supplied value has the wrong shape or type."""


class Unauthenticated(GarageLogError):
    """No token, or a token that fails signature/claims/expiry checks."""


class Unauthorized(GarageLogError):
    """Valid identity, but not allowed to act on the resource."""


class NotFound(GarageLogError):
    """No row matches the requested id or username."""


class NoRowsAffected(GarageLogError):
    """An update or delete matched nothing.

    Ambiguous between "does not exist" and "not owned by the caller"; callers
    that need to tell the two apart check existence first.
    """


class NotModified(GarageLogError):
    """The request was valid but there was nothing to change."""


class StorageFailure(GarageLogError):
    """The storage engine was unreachable or rejected a statement."""
