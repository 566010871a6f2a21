"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CatalogError(DomainException):
    """Question catalog file is missing, malformed, or violates catalog rules"""

    pass
