"""Shared exceptions for service layer operations."""


class InvalidCredentialsError(Exception):
    """
    Raised when signin fails.

    Covers both an unknown email and a wrong password so callers cannot tell
    which one was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Credentials incorrect")


class EmailAlreadyRegisteredError(Exception):
    """Raised when an email is already used by another account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"An account with email '{email}' already exists")
