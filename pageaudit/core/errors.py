"""Exception types shared by the operations and the HTTP layer."""


class PageAuditError(Exception):
    """Base class for all pageaudit errors."""


class ValidationError(PageAuditError):
    """Bad client input; surfaces as HTTP 400 with the message as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
