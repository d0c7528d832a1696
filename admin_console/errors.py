"""Error types raised by the dashboard core and the store clients."""


class StoreError(Exception):
    """A read or write against the remote store failed."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class ConsoleError(Exception):
    """Base class for errors surfaced to operators."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConsoleError):
    """A plan draft failed local validation. No network call was made."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{field}: {reason}" for field, reason in errors.items()))
        self.errors = errors


class ConfirmationRequiredError(ConsoleError):
    """A destructive operation was attempted without operator confirmation."""


class RemoteQueryError(ConsoleError):
    """One or more dashboard reads failed, so the refresh was aborted."""

    def __init__(self, message: str, relations: list[str]):
        super().__init__(message)
        self.relations = relations


class MutationError(ConsoleError):
    """A write was rejected by the remote store."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code

    @classmethod
    def from_store_error(cls, error: StoreError) -> "MutationError":
        return cls(error.message, code=error.code, status_code=error.status_code)

    @property
    def is_constraint_violation(self) -> bool:
        """SQLSTATE class 23 covers foreign key and unique violations."""
        return bool(self.code) and self.code.startswith("23")
