"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPurchaseError(DomainException):
    """Purchase input is malformed (missing item name, negative cost)"""

    pass
