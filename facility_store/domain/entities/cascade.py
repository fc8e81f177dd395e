"""Value objects describing the result of a hierarchy cascade."""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from facility_store.domain.entities.errors import DomainError

T = TypeVar("T")


@dataclass(slots=True)
class ChildFailure:
    """A child document that could not be moved to its new ID."""

    child_id: str
    new_child_id: str
    error: DomainError


@dataclass
class CascadeOutcome:
    """Aggregate result of propagating a parent rename to its children."""

    parent_kind: str
    old_parent_id: str
    new_parent_id: str
    succeeded: List[str] = field(default_factory=list)
    failed: List[ChildFailure] = field(default_factory=list)
    #: Outcomes of children that moved and cascaded to their own children.
    nested: List["CascadeOutcome"] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.all_failures()

    @property
    def partial(self) -> bool:
        return not self.complete

    def all_failures(self) -> List[ChildFailure]:
        """Failures at this level followed by those of nested cascades."""
        failures = list(self.failed)
        for child in self.nested:
            failures.extend(child.all_failures())
        return failures

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


@dataclass
class RenameResult(Generic[T]):
    """The renamed entity plus the outcome of moving its children, if any."""

    entity: T
    cascade: Optional[CascadeOutcome] = None

    @property
    def complete(self) -> bool:
        return self.cascade is None or self.cascade.complete


@dataclass(slots=True)
class ChildMove(Generic[T]):
    """A planned move of one child document to its new ID."""

    child_id: str
    new_child_id: str
    entity: T
