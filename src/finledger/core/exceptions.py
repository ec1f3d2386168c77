"""Application error hierarchy."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InsufficientFundsError(ValidationError):
    """Raised when a transfer would overdraw the source account."""

    def __init__(self, account_id: str, available, requested):
        self.account_id = account_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"available {available}, requested {requested}",
            code="INSUFFICIENT_FUNDS",
        )


class NotFoundError(AppError):
    """Raised when a requested resource is not found or not owned by the caller."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ConflictError(AppError):
    """Raised when a concurrent mutation raced with this one."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class PersistenceError(AppError):
    """Raised when the underlying store fails; the unit of work is rolled back."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_ERROR")
