class ServiceError(Exception):
    """Base class for failures a route turns into an error response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    """The request clashes with current state: duplicate email, bike not available, illegal transition."""


class InvalidRequestError(ServiceError):
    pass
