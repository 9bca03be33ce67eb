"""Domain errors surfaced to API callers.

Every error carries an HTTP-style ``status_code``, a stable ``kind`` and a
human-readable ``message``. The API layer renders them as
``{"detail": message, "kind": kind}``.
"""

from __future__ import annotations


class LedgerError(Exception):
    status_code: int = 400
    kind: str = "LedgerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "kind": self.kind}


class MissingRequiredField(LedgerError):
    status_code = 400
    kind = "MissingRequiredField"

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}.")


class UnsupportedLedgerReference(LedgerError):
    status_code = 404
    kind = "UnsupportedLedgerReference"

    def __init__(self, classification: str, main: str, sub: str | None) -> None:
        self.classification = classification
        self.main = main
        self.sub = sub
        super().__init__(
            f'The user doesn\'t have a registered {classification} with these details "{main}/{sub or ""}".'
        )


class FutureDatedTransaction(LedgerError):
    status_code = 400
    kind = "FutureDatedTransaction"

    def __init__(self) -> None:
        super().__init__("The transaction date must be less than or equal to the current date.")


class InvalidAmount(LedgerError):
    status_code = 400
    kind = "InvalidAmount"


class OwnerNotFound(LedgerError):
    status_code = 404
    kind = "OwnerNotFound"

    def __init__(self, user_id: object | None = None) -> None:
        if user_id is None:
            super().__init__("No authenticated user was found.")
        else:
            super().__init__(f'No user was found with this id "{user_id}".')


class TransactionNotFound(LedgerError):
    status_code = 404
    kind = "TransactionNotFound"

    def __init__(self, txn_id: object) -> None:
        super().__init__(f'No transaction was found with this id "{txn_id}".')


class ResetTokenInvalidOrExpired(LedgerError):
    status_code = 400
    kind = "ResetTokenInvalidOrExpired"

    def __init__(self) -> None:
        super().__init__("The password reset token is invalid or has expired.")


class InvalidCredentials(LedgerError):
    status_code = 401
    kind = "InvalidCredentials"

    def __init__(self) -> None:
        super().__init__("Incorrect email or password.")


class InvalidChart(LedgerError):
    status_code = 400
    kind = "InvalidChart"


class EmailAlreadyRegistered(LedgerError):
    status_code = 409
    kind = "EmailAlreadyRegistered"

    def __init__(self, email: str) -> None:
        super().__init__(f'The email "{email}" is already registered.')


class StaleCredentials(LedgerError):
    status_code = 401
    kind = "StaleCredentials"

    def __init__(self) -> None:
        super().__init__("The password was changed after these credentials were issued. Please log in again.")
