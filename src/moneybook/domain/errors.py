"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. Each category carries the
    HTTP status and machine code the API renders it with.
    """

    status_code = 400
    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "VALIDATION_ERROR"


class MissingFieldsError(ValidationError):
    """One or more required fields are absent or null."""

    code = "MISSING_FIELDS"

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidTypeError(ValidationError):
    """Movement type is not one of the accepted tags."""

    status_code = 409
    code = "INVALID_TYPE"


class InvalidAmountError(ValidationError):
    """Amount is not a usable number for the operation."""

    code = "INVALID_AMOUNT"


class InvalidDateError(ValidationError):
    """Date is not an ISO calendar date."""

    code = "INVALID_DATE"


class SameAccountConflictError(ValidationError):
    """Transfer debits and credits the same account."""

    status_code = 409
    code = "SAME_ACCOUNT"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(DomainError):
    """Entity exists but belongs to another user."""

    status_code = 403
    code = "FORBIDDEN"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    status_code = 409
    code = "CONFLICT"


class DependencyError(ConflictError):
    """Operation blocked due to dependent domain data."""

    code = "IN_USE"


class NotModifiedError(DomainError):
    """Update would leave the persisted record unchanged."""

    status_code = 304
    code = "NOT_MODIFIED"


class AuthenticationError(DomainError):
    """Missing, unknown or expired credentials."""

    status_code = 401
    code = "UNAUTHORIZED"


class MalformedAuthorizationError(DomainError):
    """Authorization header is present but not in the expected format."""

    code = "MALFORMED_AUTHORIZATION"


class StorageError(DomainError):
    """Opaque failure of the relational store."""

    status_code = 500
    code = "STORAGE_ERROR"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_forbidden(account_id: int) -> str:
    """Return message for an account owned by another user."""
    return f"Access to account {account_id} is forbidden"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def sub_category_not_found(sub_category_id: int) -> str:
    """Return message for missing sub-category by ID."""
    return f"Sub-category {sub_category_id} not found"


def tiers_not_found(tiers_id: int) -> str:
    """Return message for missing counterparty."""
    return f"Counterparty {tiers_id} not found"


def movement_not_found(movement_id: int) -> str:
    """Return message for missing movement."""
    return f"Movement {movement_id} not found"


def transfer_not_found(transfer_id: int) -> str:
    """Return message for missing transfer."""
    return f"Transfer {transfer_id} not found"


def delete_blocked(kind: str, entity_id: int, dependents: dict[str, int]) -> str:
    """Return message when an entity still has dependent records.

    Args:
        kind: Human label of the entity being deleted (e.g. "counterparty")
        entity_id: ID of the entity
        dependents: Mapping of dependent label (singular) to count; zero
            counts are skipped
    """
    parts = [
        f"{count} {label}{'s' if count != 1 else ''}"
        for label, count in dependents.items()
        if count > 0
    ]
    return (
        f"Cannot delete {kind} {entity_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
