class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    """Input the seat allocation rules cannot accept (bad seat count, nameless booking)"""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ConflictError(CustomBaseError):
    """Requested seats are already booked"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)
