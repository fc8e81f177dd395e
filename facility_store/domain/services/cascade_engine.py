"""
Cascade engine.

Structural mutations on a document store without foreign keys: guards that
block deleting a parent while children remain, and propagation of a parent
rename to every child. The engine knows nothing about buildings or rooms;
repositories hand it the children they collected and the coroutine that moves
one child.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from facility_store.domain.entities.cascade import (
    CascadeOutcome,
    ChildFailure,
    ChildMove,
)
from facility_store.domain.entities.errors import (
    DomainError,
    PreconditionFailedError,
)
from facility_store.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MoveChild = Callable[[ChildMove[T]], Awaitable[Any]]


class CascadeEngine:
    """Applies hierarchy cascades through a bounded pool of concurrent moves."""

    def __init__(self, max_workers: int = 4):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers

    def ensure_no_children(
        self,
        parent_kind: str,
        parent_id: str,
        child_kind: str,
        child_ids: Sequence[str],
    ) -> None:
        """Raise PreconditionFailedError when ``child_ids`` is not empty."""
        if not child_ids:
            return

        logger.info(
            "cascade.delete.blocked",
            parent_kind=parent_kind,
            parent_id=parent_id,
            child_kind=child_kind,
            child_count=len(child_ids),
        )
        raise PreconditionFailedError(
            f"there are still {len(child_ids)} {child_kind}(s) associated with "
            f"{parent_kind} {parent_id} ({', '.join(child_ids)}). "
            f"Delete them first.",
            details={
                "parent_kind": parent_kind,
                "parent_id": parent_id,
                "child_kind": child_kind,
                "children": list(child_ids),
            },
        )

    async def propagate_rename(
        self,
        parent_kind: str,
        old_parent_id: str,
        new_parent_id: str,
        moves: Sequence[ChildMove[T]],
        move_child: MoveChild[T],
    ) -> CascadeOutcome:
        """
        Move every child in ``moves`` and report what happened.

        All moves are planned by the caller before any is applied. At most
        ``max_workers`` moves run at once. A move failing with a DomainError
        is recorded in the outcome. Any other exception is raised once every
        move has settled. A move returning a CascadeOutcome (a child that
        cascaded in turn) has it attached to ``outcome.nested``.

        Returns:
            CascadeOutcome listing moved and failed children in plan order.
        """
        outcome = CascadeOutcome(
            parent_kind=parent_kind,
            old_parent_id=old_parent_id,
            new_parent_id=new_parent_id,
        )
        if not moves:
            return outcome

        logger.info(
            "cascade.rename.started",
            parent_kind=parent_kind,
            old_parent_id=old_parent_id,
            new_parent_id=new_parent_id,
            child_count=len(moves),
            max_workers=self.max_workers,
        )

        semaphore = asyncio.Semaphore(self.max_workers)

        async def _run(move: ChildMove[T]) -> Any:
            async with semaphore:
                try:
                    return await move_child(move)
                except DomainError as exc:
                    logger.warning(
                        "cascade.rename.child_failed",
                        parent_kind=parent_kind,
                        child_id=move.child_id,
                        new_child_id=move.new_child_id,
                        error=str(exc),
                    )
                    return ChildFailure(
                        child_id=move.child_id,
                        new_child_id=move.new_child_id,
                        error=exc,
                    )

        results = await asyncio.gather(
            *(_run(move) for move in moves), return_exceptions=True
        )

        unexpected: BaseException | None = None
        for move, result in zip(moves, results):
            if isinstance(result, ChildFailure):
                outcome.failed.append(result)
            elif isinstance(result, BaseException):
                unexpected = unexpected or result
            else:
                outcome.succeeded.append(move.new_child_id)
                if isinstance(result, CascadeOutcome):
                    outcome.nested.append(result)

        if unexpected is not None:
            logger.error(
                "cascade.rename.aborted",
                parent_kind=parent_kind,
                old_parent_id=old_parent_id,
                new_parent_id=new_parent_id,
                error=str(unexpected),
            )
            raise unexpected

        logger.info(
            "cascade.rename.completed",
            parent_kind=parent_kind,
            old_parent_id=old_parent_id,
            new_parent_id=new_parent_id,
            succeeded=len(outcome.succeeded),
            failed=len(outcome.failed),
        )
        return outcome
