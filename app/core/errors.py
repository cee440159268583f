"""Typed failures raised by the account service and token verification.

Each error carries a user-safe ``message`` and the HTTP ``status_code`` the API
layer renders it with. Raw store errors never end up in ``message``.
"""


class AccountError(Exception):
    """Base class for expected, caller-visible account failures."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AccountError):
    """Malformed input; ``field`` names the first field that failed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class DuplicateEmail(AccountError):
    def __init__(self) -> None:
        super().__init__("Email is already registered.")


class DuplicateUsername(AccountError):
    def __init__(self) -> None:
        super().__init__("Username is already taken.")


class InvalidCredentials(AccountError):
    """Login or password check failed. The message never says which part was wrong."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class SamePassword(AccountError):
    def __init__(self) -> None:
        super().__init__("New password must be different from the current password.")


class NotFound(AccountError):
    status_code = 404

    def __init__(self, message: str = "User not found.") -> None:
        super().__init__(message)


class InvalidToken(AccountError):
    status_code = 401

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class StoreError(AccountError):
    """Unclassified persistence failure; details are logged, not returned."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__("Internal server error.")
