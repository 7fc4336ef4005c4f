"""Errors raised by the listings dashboard."""


class ValidationError(ValueError):
    """Form input rejected before any backend call."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = field_errors
        summary = "; ".join(f"{name}: {msg}" for name, msg in field_errors.items())
        super().__init__(summary or "Invalid form input")


class BackendError(RuntimeError):
    """A record store or storage request failed."""


class UnknownEntityKindError(LookupError):
    """No entity kind is registered under the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown listing type: {key}")


class RecordNotFoundError(LookupError):
    """The requested record is not in the manager's list."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")


class DeleteNotConfirmedError(RuntimeError):
    """A delete was requested without confirmation."""
