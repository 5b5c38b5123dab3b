"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ClientNotFoundError(DomainException):
    """Client does not exist or belongs to another owner"""

    pass


class InstallmentNotFoundError(DomainException):
    """Installment does not exist for the given client"""

    pass


class CsvImportError(DomainException):
    """CSV file is malformed or contains invalid rows"""

    def __init__(self, message: str, errors: List[str] | None = None):
        super().__init__(message)
        self.errors = errors or [message]


class MessagingServiceError(DomainException):
    """Generative language service returned an error or is unavailable"""

    pass
