"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFilterCriteriaError(DomainException):
    """Filter update has an unknown field or a malformed value"""

    pass


class InvalidGenerationRequestError(DomainException):
    """Record generation was asked for an impossible population"""

    pass
