"""
Domain Errors

Error taxonomy shared by the gateway, the repositories and the cascade engine.
Every error carries a human readable message plus a ``details`` mapping with
structured context (entity kind, identifiers, validation problems...).
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from facility_store.domain.entities.cascade import CascadeOutcome


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class StoreError(DomainError):
    """An error response decoded from the document store."""

    #: Value of the ``error`` field the store uses for this kind.
    store_code: Optional[str] = None


class NotFoundError(StoreError):
    """The referenced document does not exist."""

    store_code = "not_found"


class ConflictError(StoreError):
    """Duplicate ID on create, or stale revision token on update/delete."""

    store_code = "conflict"


class BadRequestError(StoreError):
    """The store rejected the query or document as malformed."""

    store_code = "bad_request"


class UnknownStoreError(StoreError):
    """The store answered with an error body we could not classify."""


class TransportError(DomainError):
    """The store could not be reached, or the request timed out."""


class ValidationFailedError(DomainError):
    """An entity failed local structural checks; nothing was sent to the store."""


class PreconditionFailedError(DomainError):
    """A structural mutation is blocked because dependent documents exist."""


class CascadePartialFailureError(DomainError):
    """A rename was applied to the parent but not to every child."""

    def __init__(self, outcome: "CascadeOutcome"):
        failures = outcome.all_failures()
        failed = ", ".join(failure.child_id for failure in failures)
        super().__init__(
            f"renamed {outcome.parent_kind} {outcome.old_parent_id} to "
            f"{outcome.new_parent_id}, but {len(failures)} child "
            f"document(s) could not be moved: {failed}",
            details={
                "succeeded": list(outcome.succeeded),
                "failed": [failure.child_id for failure in failures],
            },
        )
        self.outcome = outcome


STORE_ERRORS_BY_CODE = {
    cls.store_code: cls for cls in (NotFoundError, ConflictError, BadRequestError)
}
