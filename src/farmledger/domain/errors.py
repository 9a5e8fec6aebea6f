"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreError(DomainError):
    """A read or write against the record store failed."""


def record_not_found(kind: str, record_id: int) -> str:
    """Return message for a missing record."""
    return f"{kind} {record_id} not found"


def area_not_found(area_id: int) -> str:
    """Return message for missing area."""
    return record_not_found("Area", area_id)


def cropping_not_found(cropping_id: int) -> str:
    """Return message for missing fishpond cropping."""
    return record_not_found("Cropping", cropping_id)


def cropping_completed(cropping_id: int) -> str:
    """Return message when a completed cropping is modified."""
    return f"Cropping {cropping_id} is already completed"


def duplicate_tenant(name: str) -> str:
    """Return message for duplicate tenant name."""
    return f"Tenant with name '{name}' already exists"


def required_fields_missing(fields: list[str]) -> str:
    """Return message listing missing required fields."""
    labels = [field.replace("_", " ").title() for field in fields]
    if len(labels) == 1:
        return f"{labels[0]} is required"
    return f"{', '.join(labels[:-1])} and {labels[-1]} are required"


STORE_FAILURE = "Could not save changes. Please try again."
