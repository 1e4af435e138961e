"""Service exceptions.

Raised by the service layer and converted to HTTP responses by the handler
registered in ``ncf_pos.main``.
"""


class ServiceError(Exception):
    """Base service exception."""

    pass


class NotFoundError(ServiceError):
    """Resource not found."""

    pass


class ValidationError(ServiceError):
    """Input rejected; nothing was written."""

    pass


class PersistenceError(ServiceError):
    """Storage failed and the transaction was rolled back."""

    pass


class ConcurrencyConflict(ServiceError):
    """Another writer claimed the same invoice number.

    The caller must retry the whole operation and must not reuse a number
    computed before the conflict.
    """

    pass
