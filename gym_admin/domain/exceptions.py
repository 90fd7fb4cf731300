"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Requested record does not exist"""

    def __init__(self, resource: str, identifier=None):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} not found" if identifier is None else f"{resource} {identifier} not found"
        super().__init__(message)


class ValidationError(DomainException):
    """Input is well-formed but violates a business rule"""

    pass


class ConflictError(DomainException):
    """Operation collides with existing data (duplicates, double payment, references)"""

    pass


class InvalidStateError(DomainException):
    """Record is not in a state that allows the requested transition"""

    pass
